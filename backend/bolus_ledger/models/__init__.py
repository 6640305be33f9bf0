from .bolus import BolusCalculationResult
from .dosing import DosingParameters, RatioEstimate
from .enums import CatalogSort, MeasurementUnit, ProductCategory
from .meal import MealLine, MealSelectionEntry
from .nutrition import NutritionRecord
from .product import Product, ProductData
