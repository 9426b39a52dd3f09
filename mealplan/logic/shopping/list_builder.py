"""Shopping list builder.

Provides consolidate_ingredients(entries): groups the ingredient lines of all
planned meals by (name, unit), sums their serving-scaled quantities and records
which recipes asked for them.
"""
from typing import Dict, Iterable, List, Optional

from mealplan.domain.ShoppingList import ConsolidatedEntry
from mealplan.logic.shopping.scaling import scale_quantity
from mealplan.utilities.constants import DEFAULT_UNIT


class ConsolidationInput:
    """One ingredient line of one planned recipe.

    Unit resolution: `unit` (explicit per-line override) wins, then the
    ingredient's own `ingredient_unit`, then the literal "unit". Empty strings
    count as missing.
    """

    def __init__(self, name: str, category: str, quantity, servings, original_servings,
                 unit: Optional[str] = None, ingredient_unit: Optional[str] = None,
                 recipe_title: Optional[str] = None):
        self.name = name
        self.category = category
        self.quantity = quantity
        self.servings = servings
        self.original_servings = original_servings
        self.unit = unit
        self.ingredient_unit = ingredient_unit
        self.recipe_title = recipe_title

    def __repr__(self) -> str:
        return (f"ConsolidationInput({self.name!r}, {self.quantity!r} {self.resolved_unit()!r}, "
                f"{self.servings}/{self.original_servings}, {self.recipe_title!r})")

    def resolved_unit(self) -> str:
        return self.unit or self.ingredient_unit or DEFAULT_UNIT


def _normalize(name: str) -> str:
    return (name or '').strip().lower()


def _key(name: str, unit: str) -> str:
    # unit deliberately keeps its case: "Tbsp" and "tbsp" are separate lines here
    return f"{_normalize(name)}-{unit}"


def consolidate_ingredients(entries: Iterable[ConsolidationInput]) -> List[ConsolidatedEntry]:
    """Group and sum ingredient lines.

    Args:
        entries: ConsolidationInput lines, in meal plan order.

    Returns:
        ConsolidatedEntry list sorted by category (stable, so lines of one
        category keep first-seen order). Name and category come from the
        first line seen for each key; recipes lists unique titles in
        first-seen order.

    Raises:
        DegenerateScalingError: a line has original_servings <= 0.
    """
    consolidated: Dict[str, ConsolidatedEntry] = {}

    for entry in entries:
        adjusted = scale_quantity(entry.quantity, entry.original_servings, entry.servings)
        final_unit = entry.resolved_unit()
        k = _key(entry.name, final_unit)

        existing = consolidated.get(k)
        if existing is not None:
            existing.total_quantity += adjusted
            if entry.recipe_title and entry.recipe_title not in existing.recipes:
                existing.recipes.append(entry.recipe_title)
        else:
            consolidated[k] = ConsolidatedEntry(
                name=entry.name,
                category=entry.category,
                total_quantity=adjusted,
                unit=final_unit,
                recipes=[entry.recipe_title] if entry.recipe_title else [],
            )

    return sorted(consolidated.values(), key=lambda e: e.category)


__all__ = ['ConsolidationInput', 'consolidate_ingredients']
