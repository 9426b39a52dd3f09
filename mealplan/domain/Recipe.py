"""Recipe domain entity: id, title, servings, optional ingredient list and card metadata."""
import copy
from typing import List, Optional

from mealplan.domain.Ingredient import Ingredient


class Recipe:
    def __init__(self, id: str = "", title: str = "", servings: int = 1,
                 ingredients: Optional[List[Ingredient]] = None, description: Optional[str] = None,
                 image_url: Optional[str] = None, cooking_time: Optional[int] = None,
                 meal_type: Optional[List[str]] = None, dietary_tags: Optional[List[str]] = None):
        self.id = id
        self.title = title
        self.servings = servings
        # None means the record has no ingredient list at all (legacy data), [] means an empty one
        self.ingredients = ingredients[:] if ingredients is not None else None
        self.description = description
        self.image_url = image_url
        self.cooking_time = cooking_time
        self.meal_type = meal_type[:] if meal_type else []
        self.dietary_tags = dietary_tags[:] if dietary_tags else []

    def __str__(self) -> str:
        count = len(self.ingredients) if self.ingredients is not None else "no"
        return f"{self.title} - {self.servings} servings - {count} ingredients"

    __repr__ = __str__

    @property
    def has_ingredients(self) -> bool:
        return self.ingredients is not None

    def snapshot(self) -> "Recipe":
        """Independent copy, embedded in meal plan entries so later edits don't leak in."""
        return copy.deepcopy(self)

    def with_ingredients(self, ingredients: List[Ingredient]) -> "Recipe":
        clone = self.snapshot()
        clone.ingredients = [copy.deepcopy(i) for i in ingredients]
        return clone

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        raw_ingredients = d.get("ingredients")
        ingredients = None
        if isinstance(raw_ingredients, list):
            ingredients = [Ingredient.from_dict(ing) for ing in raw_ingredients]
        servings = d.get("servings", 1)
        return Recipe(
            id=str(d.get("id", "")),
            title=str(d.get("title") or ""),
            servings=servings if isinstance(servings, (int, float)) and not isinstance(servings, bool) else 1,
            ingredients=ingredients,
            description=d.get("description"),
            image_url=d.get("image_url"),
            cooking_time=d.get("cooking_time"),
            meal_type=d.get("meal_type") or [],
            dietary_tags=d.get("dietary_tags") or [],
        )

    def to_dict(self):
        d = {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "image_url": self.image_url,
            "cooking_time": self.cooking_time,
            "servings": self.servings,
            "meal_type": self.meal_type,
            "dietary_tags": self.dietary_tags,
        }
        if self.ingredients is not None:
            d["ingredients"] = [ing.to_dict() for ing in self.ingredients]
        return d
