"""Recipe and ingredient models."""

from pydantic import BaseModel, Field, field_validator
from typing import Optional, List, Literal, get_args
from uuid import uuid4


IngredientCategory = Literal["vegetables_fruits", "protein", "seasonings", "others"]
StorageType = Literal["fridge", "freezer"]
MealType = Literal["breakfast", "lunch", "dinner", "snacks"]

INGREDIENT_CATEGORIES: List[str] = list(get_args(IngredientCategory))


def _new_id() -> str:
    return str(uuid4())


def coerce_category(value) -> str:
    """Map a missing or unrecognised category to "others"."""
    if isinstance(value, str) and value in INGREDIENT_CATEGORIES:
        return value
    return "others"


class Ingredient(BaseModel):
    """A single ingredient line of a recipe."""

    id: str = Field(default_factory=_new_id)
    name: str
    amount: float = Field(0, ge=0)
    unit: str = ""
    category: IngredientCategory = "others"

    @field_validator("category", mode="before")
    @classmethod
    def _known_category(cls, value):
        return coerce_category(value)


class RecipeCreate(BaseModel):
    """Data for creating a recipe."""

    name: str = Field(min_length=1)
    ingredients: List[Ingredient] = []
    steps: List[str] = []
    prep_time: int = Field(gt=0)  # minutes
    batch_servings: int = Field(gt=0)
    storage_type: StorageType = "fridge"
    meal_type: MealType = "dinner"
    image_url: Optional[str] = None
    instruction_video_url: Optional[str] = None


class Recipe(RecipeCreate):
    """Stored recipe."""

    id: str

    class Config:
        from_attributes = True
