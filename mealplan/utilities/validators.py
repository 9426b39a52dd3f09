"""
Input validation schemas using Pydantic for better data integrity.
"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator

from mealplan.utilities.constants import DATE_FORMAT, MEAL_TYPES


class IngredientInput(BaseModel):
    """Schema for ingredient input validation."""
    id: Optional[str] = None
    name: str = Field(..., min_length=1, max_length=100)
    quantity: float = Field(..., ge=0)
    unit: Optional[str] = Field(None, max_length=20)
    notes: Optional[str] = None

    @field_validator('name')
    @classmethod
    def strip_whitespace(cls, v):
        """Remove leading/trailing whitespace."""
        if isinstance(v, str):
            return v.strip()
        return v


class RecipeSnapshotInput(BaseModel):
    """Recipe as embedded in a meal plan entry. `ingredients` may be left out (legacy recipes)."""
    id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1, max_length=200)
    servings: int = Field(..., ge=1, le=50)
    ingredients: Optional[List[IngredientInput]] = None
    description: Optional[str] = None
    image_url: Optional[str] = None
    cooking_time: Optional[int] = Field(None, ge=0)
    meal_type: List[str] = Field(default_factory=list)
    dietary_tags: List[str] = Field(default_factory=list)

    @field_validator('title')
    @classmethod
    def validate_title(cls, v):
        if not v.strip():
            raise ValueError('Recipe title cannot be empty')
        return v.strip()


class MealPlanEntryInput(BaseModel):
    """Schema for adding a recipe to a meal plan slot.

    Either `recipe_id` (looked up among saved recipes) or a full `recipe` snapshot is required.
    """
    date: str
    meal_type: str
    recipe_id: Optional[str] = None
    recipe: Optional[RecipeSnapshotInput] = None

    @field_validator('date')
    @classmethod
    def validate_date(cls, v):
        datetime.strptime(v, DATE_FORMAT)
        return v

    @field_validator('meal_type')
    @classmethod
    def validate_meal_type(cls, v):
        if v not in MEAL_TYPES:
            raise ValueError(f"meal_type must be one of {', '.join(MEAL_TYPES)}")
        return v


class ClearWeekInput(BaseModel):
    week_start: str

    @field_validator('week_start')
    @classmethod
    def validate_date(cls, v):
        datetime.strptime(v, DATE_FORMAT)
        return v


class ConsolidatedEntryInput(BaseModel):
    """A generated line sent back by the UI for saving."""
    name: str = Field(..., min_length=1, max_length=100)
    category: str = "Other"
    totalQuantity: float
    unit: str = Field(..., min_length=1, max_length=20)
    recipes: List[str] = Field(default_factory=list)


class SaveShoppingListInput(BaseModel):
    """Body of POST /api/shopping-list/save. Without items, the server regenerates from the meal plan."""
    items: Optional[List[ConsolidatedEntryInput]] = None
    target_servings: Optional[int] = Field(None, ge=1, le=50)
