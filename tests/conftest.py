"""
Pytest configuration and fixtures for the meal planner tests.
"""

import os
import pytest
from unittest.mock import MagicMock

# Set test environment before importing mealprep modules
os.environ.setdefault("SUPABASE_URL", "http://localhost:54321")
os.environ.setdefault("SUPABASE_KEY", "test-key")

from mealprep.db.supabase import DatabaseService
from mealprep.models.recipe import Ingredient, Recipe
from mealprep.models.shelf import ShelfItem


def make_recipe(
    recipe_id,
    meal_type="dinner",
    ingredients=(),
    prep_time=30,
    batch_servings=4,
    storage_type="fridge",
    name=None,
):
    """Build a recipe; ingredients are (name, amount, unit[, category]) tuples."""
    return Recipe(
        id=recipe_id,
        name=name or f"Recipe {recipe_id}",
        ingredients=[
            Ingredient(
                name=ing[0],
                amount=ing[1],
                unit=ing[2],
                category=ing[3] if len(ing) > 3 else "others",
            )
            for ing in ingredients
        ],
        steps=["Cook it"],
        prep_time=prep_time,
        batch_servings=batch_servings,
        storage_type=storage_type,
        meal_type=meal_type,
    )


def make_shelf_item(item_id, name, amount, unit):
    return ShelfItem(id=item_id, name=name, amount=amount, unit=unit)


@pytest.fixture
def mock_supabase():
    """Mock Supabase client for unit tests."""
    mock_client = MagicMock()

    # Mock table operations
    mock_table = MagicMock()
    mock_table.select.return_value = mock_table
    mock_table.insert.return_value = mock_table
    mock_table.update.return_value = mock_table
    mock_table.upsert.return_value = mock_table
    mock_table.delete.return_value = mock_table
    mock_table.eq.return_value = mock_table
    mock_table.order.return_value = mock_table
    mock_table.execute.return_value = MagicMock(data=[])

    mock_client.table.return_value = mock_table

    return mock_client


@pytest.fixture
def mock_db():
    """DatabaseService stand-in with an empty store."""
    db = MagicMock(spec=DatabaseService)
    db.user_id = "user-1"
    db.fetch_recipes.return_value = []
    db.fetch_shelf_items.return_value = []
    db.fetch_weekly_schedule.return_value = None
    return db


@pytest.fixture
def sample_recipes():
    """Two breakfasts, three lunches, one dinner and a snack."""
    return [
        make_recipe("b1", "breakfast", [("Eggs", 2, "pcs", "protein")]),
        make_recipe("b2", "breakfast", [("Oats", 80, "g", "others")]),
        make_recipe("l1", "lunch", [("Garlic", 10, "g", "seasonings")]),
        make_recipe("l2", "lunch", [("Garlic", 5, "g", "seasonings")]),
        make_recipe("l3", "lunch", [("Garlic", 2, "cloves", "seasonings")]),
        make_recipe("d1", "dinner", [("Chicken", 500, "g", "protein")], storage_type="freezer"),
        make_recipe("s1", "snacks", [("Almonds", 30, "g", "others")]),
    ]
