"""Weekly menu generation and slot editing."""

from typing import Optional, List, Dict

from mealprep.models.recipe import Recipe
from mealprep.models.schedule import (
    DAYS_OF_WEEK,
    MEAL_SLOTS,
    DayMeals,
    WeeklySchedule,
    check_slot,
)


def bucket_by_meal_type(recipes: List[Recipe]) -> Dict[str, List[Recipe]]:
    """Split recipes into breakfast, lunch and dinner buckets, keeping input order."""
    buckets: Dict[str, List[Recipe]] = {meal_type: [] for meal_type in MEAL_SLOTS}
    for recipe in recipes:
        if recipe.meal_type in buckets:
            buckets[recipe.meal_type].append(recipe)
    return buckets


def generate_weekly_menu(recipes: List[Recipe]) -> WeeklySchedule:
    """
    Fill every slot by cycling through the recipes of its meal type.

    Day i gets bucket[i % len(bucket)], so a single breakfast recipe is
    served all week and eight dinners leave the eighth unused. A meal type
    with no recipes leaves its slots empty.
    """
    buckets = bucket_by_meal_type(recipes)

    days = {}
    for index, day in enumerate(DAYS_OF_WEEK):
        days[day] = DayMeals(**{
            meal_type: (bucket[index % len(bucket)] if bucket else None)
            for meal_type, bucket in buckets.items()
        })
    return WeeklySchedule(days=days)


def clear_weekly_menu() -> WeeklySchedule:
    """Schedule with all 21 slots empty."""
    return WeeklySchedule.empty()


def set_slot(
    schedule: WeeklySchedule,
    day: str,
    meal_type: str,
    recipe: Optional[Recipe],
) -> WeeklySchedule:
    """Return a copy of the schedule with one slot replaced."""
    check_slot(day, meal_type)
    if recipe is not None and recipe.meal_type not in MEAL_SLOTS:
        raise ValueError(f"{recipe.meal_type} recipe '{recipe.name}' cannot fill a menu slot")
    updated = schedule.model_copy(deep=True)
    setattr(updated.days[day], meal_type, recipe)
    return updated


def swap_meals(
    schedule: WeeklySchedule,
    day1: str,
    meal1: str,
    day2: str,
    meal2: str,
) -> WeeklySchedule:
    """Return a copy of the schedule with two slots exchanged."""
    check_slot(day1, meal1)
    check_slot(day2, meal2)

    swapped = schedule.model_copy(deep=True)
    if (day1, meal1) == (day2, meal2):
        return swapped

    first = getattr(swapped.days[day1], meal1)
    second = getattr(swapped.days[day2], meal2)
    setattr(swapped.days[day1], meal1, second)
    setattr(swapped.days[day2], meal2, first)
    return swapped
