"""Meal plan -> consolidation input lines.

Walks the planned entries, back-fills legacy recipe snapshots that never had an
ingredient list from the known-recipe table, and flattens every ingredient into
a ConsolidationInput carrying its category and recipe title.
"""
import logging
from typing import List, Optional, Sequence, Tuple

from mealplan.domain.MealPlanEntry import MealPlanEntry
from mealplan.infra.known_recipes import KnownRecipeTable
from mealplan.logic.shopping.categorize import categorize_ingredient
from mealplan.logic.shopping.list_builder import ConsolidationInput

logger = logging.getLogger(__name__)


class CollectionResult:
    def __init__(self, meal_plan: List[MealPlanEntry], entries: List[ConsolidationInput], repaired: bool):
        self.meal_plan = meal_plan
        self.entries = entries
        self.repaired = repaired

    def __repr__(self) -> str:
        return f"CollectionResult(entries={len(self.entries)}, repaired={self.repaired})"


def repair_meal_plan(meal_plan: Sequence[MealPlanEntry],
                     known_recipes: KnownRecipeTable) -> Tuple[List[MealPlanEntry], bool]:
    """Return (plan, changed). Entries whose recipe has no ingredient list get one from
    `known_recipes` when its id is listed there; the input entries are left untouched."""
    repaired: List[MealPlanEntry] = []
    changed = False
    for item in meal_plan:
        if item.recipe is not None and item.recipe.ingredients is None:
            ingredients = known_recipes.get(item.recipe.id) or ()
            if ingredients:
                logger.info("Back-filled %d ingredients for legacy recipe %s (%s)",
                            len(ingredients), item.recipe.id, item.recipe.title)
                repaired.append(item.with_recipe(item.recipe.with_ingredients(list(ingredients))))
                changed = True
                continue
        repaired.append(item)
    return repaired, changed


def flatten_meal_plan(meal_plan: Sequence[MealPlanEntry],
                      target_servings: Optional[int] = None) -> List[ConsolidationInput]:
    """One ConsolidationInput per ingredient of every planned recipe.

    Quantities are authored for recipe.servings, so without `target_servings`
    scaling is a no-op.
    """
    entries: List[ConsolidationInput] = []
    for item in meal_plan:
        recipe = item.recipe
        if recipe is None or not recipe.ingredients:
            continue
        for ingredient in recipe.ingredients:
            entries.append(ConsolidationInput(
                name=ingredient.name,
                category=categorize_ingredient(ingredient.name),
                quantity=ingredient.quantity,
                servings=target_servings if target_servings is not None else recipe.servings,
                original_servings=recipe.servings,
                ingredient_unit=ingredient.unit,
                recipe_title=recipe.title,
            ))
    return entries


def collect_meal_plan_ingredients(meal_plan: Sequence[MealPlanEntry], known_recipes: KnownRecipeTable,
                                  target_servings: Optional[int] = None) -> CollectionResult:
    if not meal_plan:
        return CollectionResult([], [], False)
    plan, changed = repair_meal_plan(meal_plan, known_recipes)
    return CollectionResult(plan, flatten_meal_plan(plan, target_servings), changed)


__all__ = ['CollectionResult', 'repair_meal_plan', 'flatten_meal_plan', 'collect_meal_plan_ingredients']
