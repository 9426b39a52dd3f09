"""Ingredient lists of the demo recipes shipped with early versions of the planner.

Meal plan entries saved before recipes carried their own ingredient list only
hold the recipe id. The generator repairs those entries from this table. The
table is handed to the logic as a read-only mapping so tests and deployments
can substitute their own.
"""
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Tuple

from mealplan.domain.Ingredient import Ingredient

KnownRecipeTable = Mapping[str, Tuple[Ingredient, ...]]


def _ing(id, name, quantity, unit, notes=""):
    return Ingredient(id=id, name=name, quantity=quantity, unit=unit, notes=notes)


_LEGACY_RECIPES: Dict[str, Tuple[Ingredient, ...]] = {
    # Chicken stir fry
    '1': (
        _ing('1', 'Chicken breast', 1, 'lb', 'cut into strips'),
        _ing('2', 'Mixed vegetables', 2, 'cups', 'frozen or fresh'),
        _ing('3', 'Soy sauce', 3, 'tbsp'),
        _ing('4', 'Garlic', 2, 'cloves', 'minced'),
    ),
    # Overnight oats
    '2': (
        _ing('1', 'Rolled oats', 0.5, 'cup'),
        _ing('2', 'Milk', 0.5, 'cup', 'any type'),
        _ing('3', 'Chia seeds', 1, 'tbsp'),
        _ing('4', 'Honey', 1, 'tsp', 'or maple syrup'),
        _ing('5', 'Berries', 0.25, 'cup', 'fresh or frozen'),
    ),
    # Avocado toast
    '3': (
        _ing('1', 'Bread slices', 2, 'pieces', 'whole grain preferred'),
        _ing('2', 'Avocado', 1, 'large', 'ripe'),
        _ing('3', 'Lemon juice', 1, 'tsp'),
        _ing('4', 'Salt', 0.25, 'tsp', 'to taste'),
        _ing('5', 'Cherry tomatoes', 4, 'pieces', 'optional'),
    ),
    # Greek salad
    '4': (
        _ing('1', 'Cucumber', 1, 'large', 'diced'),
        _ing('2', 'Tomatoes', 3, 'medium', 'chopped'),
        _ing('3', 'Red onion', 0.5, 'medium', 'thinly sliced'),
        _ing('4', 'Feta cheese', 4, 'oz', 'crumbled'),
        _ing('5', 'Olive oil', 3, 'tbsp', 'extra virgin'),
        _ing('6', 'Olives', 0.5, 'cup', 'kalamata'),
    ),
    # Chocolate chip cookies
    '5': (
        _ing('1', 'All-purpose flour', 2.25, 'cups'),
        _ing('2', 'Butter', 1, 'cup', 'softened'),
        _ing('3', 'Brown sugar', 0.75, 'cup', 'packed'),
        _ing('4', 'White sugar', 0.75, 'cup'),
        _ing('5', 'Eggs', 2, 'large'),
        _ing('6', 'Chocolate chips', 2, 'cups', 'semi-sweet'),
    ),
}


def build_known_recipe_table(recipes: Mapping[str, Iterable[Ingredient]]) -> KnownRecipeTable:
    """Freeze an id -> ingredients mapping into the read-only table the collector expects."""
    return MappingProxyType({str(k): tuple(v) for k, v in recipes.items()})


LEGACY_RECIPE_INGREDIENTS: KnownRecipeTable = build_known_recipe_table(_LEGACY_RECIPES)

__all__ = ['KnownRecipeTable', 'LEGACY_RECIPE_INGREDIENTS', 'build_known_recipe_table']
