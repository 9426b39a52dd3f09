"""Shopping list generation flow.

State machine:

    IDLE -> LOADING -> EMPTY
                    -> GENERATING -> GENERATED
                                  -> FAILED

LOADING reads the meal plan, EMPTY means there was nothing planned or no
planned recipe had ingredients. GENERATING is synchronous but published as its
own state so the UI can show a spinner. FAILED covers degenerate servings and a
rejected repair write-back. Every transition is published on the event bus.
"""
import logging
from enum import Enum
from typing import List, Optional, Sequence

from mealplan.domain.MealPlanEntry import MealPlanEntry
from mealplan.domain.ShoppingList import ConsolidatedEntry, ShoppingListItem
from mealplan.events.Event_Bus import EventBus, GLOBAL_EVENT_BUS
from mealplan.events.event_helpers import publish_generation_state, publish_list_saved
from mealplan.infra.MealPlan_Repository import MealPlanRepository
from mealplan.infra.ShoppingList_Repository import ShoppingListRepository
from mealplan.infra.known_recipes import KnownRecipeTable
from mealplan.logic.shopping.collector import collect_meal_plan_ingredients
from mealplan.logic.shopping.list_builder import consolidate_ingredients
from mealplan.logic.shopping.merge import merge_shopping_lists
from mealplan.utilities.errors import DegenerateScalingError, PersistenceWriteError

logger = logging.getLogger(__name__)


class GenerationState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    EMPTY = "empty"
    GENERATING = "generating"
    GENERATED = "generated"
    FAILED = "failed"


class GenerationResult:
    def __init__(self, state: GenerationState, meal_plan: Optional[List[MealPlanEntry]] = None,
                 items: Optional[List[ConsolidatedEntry]] = None, repaired: bool = False,
                 error: Optional[str] = None, error_kind: Optional[str] = None):
        self.state = state
        self.meal_plan = meal_plan or []
        self.items = items or []
        self.repaired = repaired
        self.error = error
        # "persistence_write" or "degenerate_scaling" when state is FAILED
        self.error_kind = error_kind

    def __repr__(self) -> str:
        return f"GenerationResult({self.state.value}, items={len(self.items)}, error={self.error!r})"

    def to_dict(self):
        return {
            "state": self.state.value,
            "count": len(self.items),
            "items": [i.to_dict() for i in self.items],
            "meal_plan": [e.to_dict() for e in self.meal_plan],
            "repaired": self.repaired,
            "error": self.error,
            "error_kind": self.error_kind,
        }


class ShoppingListGenerator:
    def __init__(self, meal_plan_repo: MealPlanRepository, shopping_list_repo: ShoppingListRepository,
                 known_recipes: KnownRecipeTable, event_bus: Optional[EventBus] = None):
        self.meal_plan_repo = meal_plan_repo
        self.shopping_list_repo = shopping_list_repo
        self.known_recipes = known_recipes
        self._event_bus = event_bus or GLOBAL_EVENT_BUS
        self.state = GenerationState.IDLE
        self.last_result: Optional[GenerationResult] = None

    def _transition(self, state: GenerationState, count: int = 0, error: Optional[str] = None):
        logger.debug("Shopping list generation %s -> %s", self.state.value, state.value)
        self.state = state
        publish_generation_state(self._event_bus, state.value, count=count, error=error)

    def _finish(self, result: GenerationResult) -> GenerationResult:
        self._transition(result.state, count=len(result.items), error=result.error)
        self.last_result = result
        return result

    def generate(self, target_servings: Optional[int] = None) -> GenerationResult:
        """Build a consolidated list from the stored meal plan.

        Legacy entries repaired from the known-recipe table are written back
        to the meal plan store before consolidation.
        """
        self._transition(GenerationState.LOADING)
        meal_plan = self.meal_plan_repo.load()
        if not meal_plan:
            return self._finish(GenerationResult(GenerationState.EMPTY))

        collected = collect_meal_plan_ingredients(meal_plan, self.known_recipes, target_servings)
        if collected.repaired:
            try:
                self.meal_plan_repo.save(collected.meal_plan)
            except PersistenceWriteError as e:
                return self._finish(GenerationResult(GenerationState.FAILED, collected.meal_plan,
                                                     repaired=True, error=str(e),
                                                     error_kind="persistence_write"))

        if not collected.entries:
            logger.info("Meal plan has %d entries but no ingredients", len(collected.meal_plan))
            return self._finish(GenerationResult(GenerationState.EMPTY, collected.meal_plan,
                                                 repaired=collected.repaired))

        self._transition(GenerationState.GENERATING)
        try:
            items = consolidate_ingredients(collected.entries)
        except DegenerateScalingError as e:
            logger.warning("Shopping list generation aborted: %s", e)
            return self._finish(GenerationResult(GenerationState.FAILED, collected.meal_plan,
                                                 repaired=collected.repaired, error=str(e),
                                                 error_kind="degenerate_scaling"))

        logger.info("Generated %d shopping list lines from %d planned meals", len(items), len(collected.meal_plan))
        return self._finish(GenerationResult(GenerationState.GENERATED, collected.meal_plan, items,
                                             repaired=collected.repaired))

    def save(self, items: Optional[Sequence[ConsolidatedEntry]] = None) -> List[ShoppingListItem]:
        """Merge `items` (default: the last generated lines) into the stored list and persist it.

        PersistenceWriteError propagates; the stored list is left as it was.
        """
        if items is None:
            items = self.last_result.items if self.last_result else []
        existing = self.shopping_list_repo.load_items()
        merged = merge_shopping_lists(existing, items)
        self.shopping_list_repo.save_items(merged)
        added = len(merged) - len(existing)
        publish_list_saved(self._event_bus, len(merged), added=added, merged=len(items) - added)
        return merged


__all__ = ['GenerationState', 'GenerationResult', 'ShoppingListGenerator']
