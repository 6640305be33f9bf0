
from enum import Enum

class MeasurementUnit(str, Enum):
    GRAMS = "g"
    MILLILITERS = "ml"

class ProductCategory(str, Enum):
    BAKERY = "bakery"
    FRUIT = "fruit"
    VEGETABLES = "vegetables"
    DAIRY = "dairy"
    MEAT = "meat"
    SWEETS = "sweets"
    DRINKS = "drinks"
    OTHER = "other"

class CatalogSort(str, Enum):
    DATE_DESC = "date-desc"
    DATE_ASC = "date-asc"
    NAME_ASC = "name-asc"
    NAME_DESC = "name-desc"
