import logging
import threading
from dataclasses import dataclass, field
from typing import Optional

from bolus_ledger.core.settings import Settings
from bolus_ledger.models.bolus import BolusCalculationResult
from bolus_ledger.services.bolus import calculate
from bolus_ledger.services.catalog import ProductCatalog, seed_sample_products
from bolus_ledger.services.dosing import DosingParametersStore
from bolus_ledger.services.history import DoseHistoryLedger
from bolus_ledger.services.meal import MealComposition

logger = logging.getLogger(__name__)


@dataclass
class SessionState:
    """Everything one caregiver session works on. Lost when the process exits."""

    catalog: ProductCatalog = field(default_factory=ProductCatalog)
    parameters: DosingParametersStore = field(default_factory=DosingParametersStore)
    meal: MealComposition = field(default_factory=MealComposition)
    history: DoseHistoryLedger = field(default_factory=DoseHistoryLedger)
    latest: Optional[BolusCalculationResult] = None

    # Serialises calculate + record so concurrent callers cannot interleave history writes
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    def meal_carbs(self) -> float:
        return self.meal.total_carbs(self.catalog)

    def calculate_bolus(
        self,
        glucose: float,
        manual_exchange_units: float = 0.0,
        clear_meal: bool = False,
    ) -> BolusCalculationResult:
        with self._lock:
            result = calculate(
                glucose,
                self.meal_carbs(),
                manual_exchange_units,
                self.parameters.get(),
            )
            self.history.record(result)
            self.latest = result
            if clear_meal:
                self.meal.clear()
        logger.info(
            "Bolus calculated: BG %s, carbs %.1f g -> %.2f U (meal %.2f, correction %.2f)",
            result.glucose, result.total_carbs, result.total_dose, result.meal_dose, result.correction_dose,
        )
        return result


def build_session(settings: Settings) -> SessionState:
    session = SessionState(parameters=DosingParametersStore(settings.dosing))
    if settings.catalog.seed_sample_products:
        seed_sample_products(session.catalog)
        logger.info("Seeded %d sample products", len(session.catalog))
    return session


__all__ = ["SessionState", "build_session"]
