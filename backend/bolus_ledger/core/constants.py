"""
Central location for constant values used across the application.
"""

# One carbohydrate exchange unit is fixed at 10 g of carbohydrate.
CARB_EXCHANGE_GRAMS = 10.0

# Dose history keeps only the most recent calculations.
HISTORY_CAPACITY = 10

# Quantity (g or ml) given to a product when it is added to the meal.
DEFAULT_MEAL_QUANTITY = 100.0

# Rules of thumb used to estimate ICR / ISF from the total daily dose.
ICR_RULE_NUMERATOR = 500.0
ISF_RULE_NUMERATOR = 1800.0
