"""Weekend batch-cooking guide."""

import math
from operator import attrgetter
from typing import List, Dict

from mealprep.models.recipe import Recipe
from mealprep.models.schedule import WeeklySchedule
from mealprep.models.prep import PrepGuide, PrepTask


SPEED_TIPS = [
    "Batch cook all proteins at once on one sheet pan",
    "Wash and chop all vegetables before starting",
    "Store sauces separately to keep dishes fresh",
    "Label containers with dish name and cook date",
    "Let food cool before refrigerating to prevent condensation",
    "Use the same base ingredients across multiple dishes",
]


def _count_servings(schedule: WeeklySchedule) -> Dict[str, int]:
    counts: Dict[str, int] = {}
    for recipe in schedule.scheduled_recipes():
        counts[recipe.id] = counts.get(recipe.id, 0) + 1
    return counts


def _distinct_recipes(schedule: WeeklySchedule) -> List[Recipe]:
    seen = set()
    distinct = []
    for recipe in schedule.scheduled_recipes():
        if recipe.id not in seen:
            seen.add(recipe.id)
            distinct.append(recipe)
    return distinct


def build_prep_guide(schedule: WeeklySchedule) -> PrepGuide:
    """
    Plan the weekend cooking for every distinct recipe on the schedule.

    Freezer dishes keep longest, so they all go on Saturday. Fridge dishes
    are split: the longer half on Saturday, the rest on Sunday. Within each
    group the longest prep time comes first.
    """
    servings = _count_servings(schedule)
    recipes = _distinct_recipes(schedule)

    by_prep_time = attrgetter("prep_time")
    freezer = sorted(
        (r for r in recipes if r.storage_type == "freezer"), key=by_prep_time, reverse=True
    )
    fridge = sorted(
        (r for r in recipes if r.storage_type == "fridge"), key=by_prep_time, reverse=True
    )

    def task(recipe: Recipe, day: str, priority: int) -> PrepTask:
        needed = servings[recipe.id]
        return PrepTask(
            recipe=recipe,
            day=day,
            priority=priority,
            servings_needed=needed,
            batches=math.ceil(needed / recipe.batch_servings),
        )

    half = math.ceil(len(fridge) / 2)
    saturday_recipes = freezer + fridge[:half]
    sunday_recipes = fridge[half:]

    saturday = [task(r, "Saturday", i + 1) for i, r in enumerate(saturday_recipes)]
    sunday = [task(r, "Sunday", i + 1) for i, r in enumerate(sunday_recipes)]

    return PrepGuide(
        saturday_tasks=saturday,
        sunday_tasks=sunday,
        freezer_count=len(freezer),
        fridge_count=len(fridge),
        total_prep_time=sum(r.prep_time for r in recipes),
        saturday_time=sum(t.recipe.prep_time for t in saturday),
        sunday_time=sum(t.recipe.prep_time for t in sunday),
        tips=list(SPEED_TIPS),
    )
