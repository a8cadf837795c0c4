"""Services module."""

from .grocery import GroceryReconciler, build_grocery_list, format_grocery_list
from .meal_prep import build_prep_guide
from .planner_session import PlannerSession, SessionRegistry
from .recipe_extractor import RecipeExtractor, ExtractionError

__all__ = [
    "GroceryReconciler",
    "build_grocery_list",
    "format_grocery_list",
    "build_prep_guide",
    "PlannerSession",
    "SessionRegistry",
    "RecipeExtractor",
    "ExtractionError",
]
