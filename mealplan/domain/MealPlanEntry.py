"""MealPlanEntry domain entity: one recipe snapshot placed in a (date, meal type) slot."""
from typing import Optional
from uuid import uuid4

from mealplan.domain.Recipe import Recipe


class MealPlanEntry:
    def __init__(self, id: str, date: str, meal_type: str, recipe: Recipe):
        self.id = id
        self.date = date
        self.meal_type = meal_type
        self.recipe = recipe

    def __str__(self) -> str:
        return f"{self.date} {self.meal_type}: {self.recipe.title}"

    __repr__ = __str__

    @classmethod
    def create(cls, recipe: Recipe, date: str, meal_type: str, id: Optional[str] = None) -> "MealPlanEntry":
        '''New entry holding a point-in-time copy of the recipe.'''
        return cls(id or uuid4().hex, date, meal_type, recipe.snapshot())

    def with_recipe(self, recipe: Recipe) -> "MealPlanEntry":
        return MealPlanEntry(self.id, self.date, self.meal_type, recipe)

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        return MealPlanEntry(
            id=str(d.get("id", "")),
            date=str(d.get("date") or ""),
            meal_type=str(d.get("mealType") or ""),
            recipe=Recipe.from_dict(d.get("recipe") or {}),
        )

    def to_dict(self):
        return {
            "id": self.id,
            "recipe": self.recipe.to_dict(),
            "date": self.date,
            "mealType": self.meal_type,
        }
