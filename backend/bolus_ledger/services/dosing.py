from __future__ import annotations

import logging
import threading
from typing import Any, Mapping, Optional, Union

from pydantic import ValidationError as PydanticValidationError

from bolus_ledger.core.errors import ValidationError
from bolus_ledger.models.dosing import DosingParameters

logger = logging.getLogger(__name__)


class DosingParametersStore:
    """Holds the single caregiver-wide dosing configuration."""

    def __init__(self, initial: Optional[DosingParameters] = None) -> None:
        self._params = initial or DosingParameters()
        self._lock = threading.Lock()

    def get(self) -> DosingParameters:
        return self._params

    def set(self, changes: Union[DosingParameters, Mapping[str, Any]]) -> DosingParameters:
        """
        Merge `changes` over the current record and commit only if the whole
        candidate is valid. On failure the previous parameters stay in place.
        """
        if isinstance(changes, DosingParameters):
            changes = changes.model_dump()
        with self._lock:
            candidate = {**self._params.model_dump(), **dict(changes)}
            try:
                updated = DosingParameters.model_validate(candidate)
            except PydanticValidationError as exc:
                fields = ", ".join(".".join(str(p) for p in err["loc"]) for err in exc.errors())
                raise ValidationError(f"Invalid dosing parameters ({fields})") from exc
            self._params = updated
        logger.info(
            "Dosing parameters updated: target=%s icr=%s isf=%s duration=%s",
            updated.target_glucose, updated.icr, updated.isf, updated.insulin_duration_min,
        )
        return updated


__all__ = ["DosingParametersStore"]
