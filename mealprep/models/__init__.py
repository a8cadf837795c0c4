"""Data models for the meal planner."""

from .recipe import Ingredient, Recipe, RecipeCreate
from .schedule import DayMeals, WeeklySchedule, DAYS_OF_WEEK, MEAL_SLOTS
from .shelf import ShelfItem, ShelfItemCreate
from .grocery import Quantity, GroceryItem, GroceryList
from .prep import PrepTask, PrepGuide

__all__ = [
    "Ingredient",
    "Recipe",
    "RecipeCreate",
    "DayMeals",
    "WeeklySchedule",
    "DAYS_OF_WEEK",
    "MEAL_SLOTS",
    "ShelfItem",
    "ShelfItemCreate",
    "Quantity",
    "GroceryItem",
    "GroceryList",
    "PrepTask",
    "PrepGuide",
]
