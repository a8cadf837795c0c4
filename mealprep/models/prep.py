"""Weekend meal prep models."""

from pydantic import BaseModel
from typing import List, Literal

from .recipe import Recipe


PrepDay = Literal["Saturday", "Sunday"]


class PrepTask(BaseModel):
    """Cook one recipe on a prep day."""

    recipe: Recipe
    day: PrepDay
    priority: int
    servings_needed: int  # slots this recipe fills during the week
    batches: int


class PrepGuide(BaseModel):
    """Weekend batch-cooking plan for the scheduled week."""

    saturday_tasks: List[PrepTask] = []
    sunday_tasks: List[PrepTask] = []
    freezer_count: int = 0
    fridge_count: int = 0
    total_prep_time: int = 0
    saturday_time: int = 0
    sunday_time: int = 0
    tips: List[str] = []

    @property
    def has_tasks(self) -> bool:
        return bool(self.saturday_tasks or self.sunday_tasks)
