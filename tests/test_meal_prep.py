"""Tests for the weekend prep guide."""

from conftest import make_recipe
from mealprep.models.schedule import WeeklySchedule
from mealprep.services.meal_prep import SPEED_TIPS, build_prep_guide
from mealprep.services.menu_generator import generate_weekly_menu, set_slot


class TestBuildPrepGuide:

    def test_empty_schedule(self):
        guide = build_prep_guide(WeeklySchedule.empty())
        assert not guide.has_tasks
        assert guide.total_prep_time == 0

    def test_freezer_on_saturday_fridge_split(self):
        recipes = [
            make_recipe("f1", "dinner", prep_time=40, storage_type="freezer"),
            make_recipe("f2", "lunch", prep_time=90, storage_type="freezer"),
            make_recipe("c1", "breakfast", prep_time=10),
            make_recipe("c2", "breakfast", prep_time=25),
            make_recipe("c3", "breakfast", prep_time=15),
        ]
        schedule = WeeklySchedule.empty()
        for day, meal_type, recipe in [
            ("Monday", "dinner", recipes[0]),
            ("Monday", "lunch", recipes[1]),
            ("Monday", "breakfast", recipes[2]),
            ("Tuesday", "breakfast", recipes[3]),
            ("Wednesday", "breakfast", recipes[4]),
        ]:
            schedule = set_slot(schedule, day, meal_type, recipe)

        guide = build_prep_guide(schedule)

        assert [(t.recipe.id, t.priority) for t in guide.saturday_tasks] == [
            ("f2", 1), ("f1", 2), ("c2", 3), ("c3", 4),
        ]
        assert [(t.recipe.id, t.priority) for t in guide.sunday_tasks] == [("c1", 1)]
        assert guide.freezer_count == 2
        assert guide.fridge_count == 3
        assert guide.saturday_time == 90 + 40 + 25 + 15
        assert guide.sunday_time == 10
        assert guide.total_prep_time == 180

    def test_repeated_recipe_cooked_once_in_batches(self):
        dinner = make_recipe("d1", "dinner", prep_time=60, batch_servings=3)
        guide = build_prep_guide(generate_weekly_menu([dinner]))

        assert len(guide.saturday_tasks) == 1
        task = guide.saturday_tasks[0]
        assert task.servings_needed == 7
        assert task.batches == 3
        assert guide.total_prep_time == 60

    def test_tips_included(self):
        guide = build_prep_guide(generate_weekly_menu([make_recipe("d1")]))
        assert guide.tips == SPEED_TIPS
