import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
str_path = str(ROOT)
if str_path not in sys.path:
    sys.path.insert(0, str_path)

from bolus_ledger.models.dosing import DosingParameters  # noqa: E402
from bolus_ledger.services.catalog import ProductCatalog  # noqa: E402
from bolus_ledger.services.dosing import DosingParametersStore  # noqa: E402
from bolus_ledger.services.session import SessionState  # noqa: E402


class TickingClock:
    """Returns a strictly increasing timestamp on every call."""

    def __init__(self, start: datetime = datetime(2024, 1, 1, 8, 0, tzinfo=timezone.utc)):
        self.current = start

    def __call__(self) -> datetime:
        value = self.current
        self.current = self.current + timedelta(minutes=1)
        return value


@pytest.fixture
def clock() -> TickingClock:
    return TickingClock()


@pytest.fixture
def catalog(clock) -> ProductCatalog:
    return ProductCatalog(clock=clock)


@pytest.fixture
def params() -> DosingParameters:
    return DosingParameters(target_glucose=100, icr=10, isf=50, insulin_duration_min=240)


@pytest.fixture
def session(catalog, params) -> SessionState:
    return SessionState(catalog=catalog, parameters=DosingParametersStore(params))
