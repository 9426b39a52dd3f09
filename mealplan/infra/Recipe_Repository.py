import logging
from typing import List, Optional

from mealplan.domain.Recipe import Recipe
from mealplan.infra.Key_Value_Store import KeyValueStore, decode_list
from mealplan.utilities.constants import RECIPES_KEY
from mealplan.utilities.errors import MalformedPersistedDataError

logger = logging.getLogger(__name__)


class RecipeRepository:
    """Read-only view of the saved recipes, used to hydrate new meal plan entries."""

    def __init__(self, store: KeyValueStore, key: str = RECIPES_KEY):
        self.store = store
        self.key = key

    def all(self) -> List[Recipe]:
        try:
            recipes_data = decode_list(self.key, self.store.get(self.key))
        except MalformedPersistedDataError as e:
            logger.error("Invalid JSON in recipes: %s", e)
            return []
        return [Recipe.from_dict(entry) for entry in recipes_data if isinstance(entry, dict)]

    def get(self, recipe_id: str) -> Optional[Recipe]:
        for recipe in self.all():
            if recipe.id == recipe_id:
                return recipe
        return None
