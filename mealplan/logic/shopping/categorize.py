"""Grocery category for an ingredient name (substring keyword match)."""
from mealplan.utilities.constants import CATEGORY_KEYWORDS, DEFAULT_CATEGORY


def categorize_ingredient(ingredient_name: str) -> str:
    name = (ingredient_name or '').lower()
    for category, keywords in CATEGORY_KEYWORDS:
        if any(keyword in name for keyword in keywords):
            return category
    return DEFAULT_CATEGORY


__all__ = ['categorize_ingredient']
