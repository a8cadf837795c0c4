"""Weekly schedule models."""

from pydantic import BaseModel, model_validator
from typing import Optional, List, Dict, Literal, Iterator, Tuple

from .recipe import Recipe


DAYS_OF_WEEK: List[str] = [
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
]

SlotMealType = Literal["breakfast", "lunch", "dinner"]

# Snacks exist as a recipe meal type but never get a slot.
MEAL_SLOTS: List[str] = ["breakfast", "lunch", "dinner"]


def check_slot(day: str, meal_type: str) -> None:
    """Raise ValueError for coordinates outside the 7 x 3 grid."""
    if day not in DAYS_OF_WEEK:
        raise ValueError(f"Unknown day: {day!r}")
    if meal_type not in MEAL_SLOTS:
        raise ValueError(f"Meal type {meal_type!r} has no slot in the schedule")


class DayMeals(BaseModel):
    """The three meal slots of one day."""

    breakfast: Optional[Recipe] = None
    lunch: Optional[Recipe] = None
    dinner: Optional[Recipe] = None


class WeeklySchedule(BaseModel):
    """Seven days of meal slots, Monday to Sunday."""

    days: Dict[str, DayMeals] = {}

    @model_validator(mode="after")
    def _all_days_present(self):
        unknown = [day for day in self.days if day not in DAYS_OF_WEEK]
        if unknown:
            raise ValueError(f"Unknown day(s) in schedule: {', '.join(unknown)}")
        # Rebuild in calendar order so every day key exists.
        self.days = {day: self.days.get(day) or DayMeals() for day in DAYS_OF_WEEK}
        return self

    @classmethod
    def empty(cls) -> "WeeklySchedule":
        return cls()

    def get_slot(self, day: str, meal_type: str) -> Optional[Recipe]:
        check_slot(day, meal_type)
        return getattr(self.days[day], meal_type)

    def slots(self) -> Iterator[Tuple[str, str, Optional[Recipe]]]:
        """Yield (day, meal_type, recipe) for all 21 slots in calendar order."""
        for day in DAYS_OF_WEEK:
            meals = self.days[day]
            for meal_type in MEAL_SLOTS:
                yield day, meal_type, getattr(meals, meal_type)

    def scheduled_recipes(self) -> List[Recipe]:
        """Recipes in filled slots, repeats included."""
        return [recipe for _, _, recipe in self.slots() if recipe is not None]

    @property
    def is_empty(self) -> bool:
        return not self.scheduled_recipes()

    def to_storage(self) -> Dict[str, Dict[str, Optional[str]]]:
        """Serialize to day -> meal type -> recipe id."""
        stored: Dict[str, Dict[str, Optional[str]]] = {day: {} for day in DAYS_OF_WEEK}
        for day, meal_type, recipe in self.slots():
            stored[day][meal_type] = recipe.id if recipe else None
        return stored

    @classmethod
    def from_storage(cls, data: Optional[dict], recipes: List[Recipe]) -> "WeeklySchedule":
        """
        Rebuild a schedule from stored recipe ids.

        Ids that no longer match a recipe, or that now name a snack, leave the
        slot empty. Unknown day names in the stored payload are ignored.
        """
        by_id = {recipe.id: recipe for recipe in recipes if recipe.meal_type in MEAL_SLOTS}
        days = {}
        for day in DAYS_OF_WEEK:
            stored = (data or {}).get(day) or {}
            days[day] = DayMeals(**{
                meal_type: by_id.get(stored.get(meal_type)) for meal_type in MEAL_SLOTS
            })
        return cls(days=days)
