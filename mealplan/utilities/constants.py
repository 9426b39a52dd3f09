from typing import Final, Tuple

DATE_FORMAT: Final[str] = "%Y-%m-%d"

# Key-value store keys (shared with the browser build of the planner)
MEAL_PLAN_KEY: Final[str] = "mealPlan"
SHOPPING_LIST_KEY: Final[str] = "shoppingList"
RECIPES_KEY: Final[str] = "recipes"

MEAL_TYPES: Final[Tuple[str, ...]] = ("breakfast", "lunch", "dinner", "snack")

DEFAULT_UNIT: Final[str] = "unit"
DEFAULT_CATEGORY: Final[str] = "Other"

# Evaluated top-down, first match wins. "pepper" is listed twice on purpose:
# Vegetables is checked before Pantry.
CATEGORY_KEYWORDS: Final[Tuple[Tuple[str, Tuple[str, ...]], ...]] = (
    ("Protein", ("chicken", "beef", "pork", "fish", "salmon", "turkey", "eggs", "tofu")),
    ("Dairy", ("milk", "cheese", "yogurt", "butter", "cream")),
    ("Vegetables", ("carrot", "onion", "garlic", "tomato", "pepper", "lettuce",
                    "spinach", "broccoli", "vegetable")),
    ("Fruits", ("apple", "banana", "berries", "orange", "lemon", "fruit")),
    ("Grains", ("rice", "pasta", "bread", "flour", "oats", "quinoa")),
    ("Pantry", ("oil", "sauce", "spice", "salt", "pepper", "sugar", "honey", "vinegar")),
)
