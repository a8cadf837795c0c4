"""Per-user cache of recipes, schedule and shelf."""

import logging
from collections import OrderedDict
from typing import Optional, List

from pydantic import BaseModel

from mealprep.db.supabase import DatabaseService
from mealprep.models.recipe import Recipe, RecipeCreate
from mealprep.models.schedule import WeeklySchedule
from mealprep.models.shelf import ShelfItem, ShelfItemCreate
from mealprep.models.grocery import GroceryList
from mealprep.models.prep import PrepGuide
from mealprep.services import menu_generator
from mealprep.services.grocery import build_grocery_list, format_grocery_list
from mealprep.services.meal_prep import build_prep_guide
from mealprep.services.shelf import find_shelf_item

logger = logging.getLogger(__name__)


class PersistResult(BaseModel):
    """Outcome of writing the schedule to the store."""

    success: bool
    error: Optional[str] = None


class ScheduleUpdate(BaseModel):
    """A schedule change: the new local state and whether it was saved."""

    schedule: WeeklySchedule
    persisted: PersistResult


class PlannerSession:
    """
    Session-scoped view of one user's planner data.

    sign_in() loads recipes, schedule and shelf from the store and sign_out()
    drops them. Schedule edits are applied locally first and then saved; a
    failed save keeps the local schedule and is reported in the returned
    PersistResult. Recipe and shelf edits go to the store first and let
    failures propagate, then the affected collection is refetched.
    """

    def __init__(self, db: DatabaseService):
        self.db = db
        self.recipes: List[Recipe] = []
        self.schedule: WeeklySchedule = WeeklySchedule.empty()
        self.shelf: List[ShelfItem] = []
        self.is_loaded = False

    def sign_in(self) -> None:
        """Reload all three collections from the store."""
        self.recipes = self.db.fetch_recipes()
        self.shelf = self.db.fetch_shelf_items()
        stored = self.db.fetch_weekly_schedule()
        self.schedule = WeeklySchedule.from_storage(stored, self.recipes)
        self.is_loaded = True
        logger.info(
            "Loaded session for user %s: %d recipes, %d shelf items, saved schedule: %s",
            self.db.user_id, len(self.recipes), len(self.shelf), stored is not None,
        )

    def sign_out(self) -> None:
        """Forget everything cached for the user."""
        self.recipes = []
        self.schedule = WeeklySchedule.empty()
        self.shelf = []
        self.is_loaded = False

    # Recipes
    def get_recipe(self, recipe_id: str) -> Optional[Recipe]:
        return next((r for r in self.recipes if r.id == recipe_id), None)

    def add_recipe(self, recipe: RecipeCreate) -> Recipe:
        created = self.db.create_recipe(recipe)
        self._refresh_recipes()
        return created

    def update_recipe(self, recipe: Recipe) -> Optional[Recipe]:
        updated = self.db.update_recipe(recipe)
        self._refresh_recipes()
        return updated

    def delete_recipe(self, recipe_id: str) -> bool:
        deleted = self.db.delete_recipe(recipe_id)
        self._refresh_recipes()
        return deleted

    def _refresh_recipes(self) -> None:
        self.recipes = self.db.fetch_recipes()
        # Point slots at the fresh recipe objects; deleted ones drop out.
        self.schedule = WeeklySchedule.from_storage(self.schedule.to_storage(), self.recipes)

    # Schedule
    def generate_menu(self) -> ScheduleUpdate:
        return self._apply(menu_generator.generate_weekly_menu(self.recipes))

    def clear_menu(self) -> ScheduleUpdate:
        return self._apply(menu_generator.clear_weekly_menu())

    def set_slot(self, day: str, meal_type: str, recipe_id: Optional[str]) -> ScheduleUpdate:
        recipe = None
        if recipe_id is not None:
            recipe = self.get_recipe(recipe_id)
            if recipe is None:
                raise KeyError(recipe_id)
        return self._apply(menu_generator.set_slot(self.schedule, day, meal_type, recipe))

    def swap_meals(self, day1: str, meal1: str, day2: str, meal2: str) -> ScheduleUpdate:
        return self._apply(
            menu_generator.swap_meals(self.schedule, day1, meal1, day2, meal2)
        )

    def _apply(self, schedule: WeeklySchedule) -> ScheduleUpdate:
        self.schedule = schedule
        return ScheduleUpdate(schedule=schedule, persisted=self._persist_schedule())

    def _persist_schedule(self) -> PersistResult:
        try:
            self.db.save_weekly_schedule(self.schedule.to_storage())
        except Exception as e:
            logger.warning(f"Failed to save weekly schedule for user {self.db.user_id}: {e}")
            return PersistResult(success=False, error=str(e))
        return PersistResult(success=True)

    # Shelf
    def add_shelf_item(self, item: ShelfItemCreate) -> ShelfItem:
        created = self.db.add_shelf_item(item)
        self.shelf = self.db.fetch_shelf_items()
        return created

    def remove_shelf_item(self, item_id: str) -> bool:
        removed = self.db.remove_shelf_item(item_id)
        self.shelf = self.db.fetch_shelf_items()
        return removed

    def find_shelf_item(self, name: str) -> Optional[ShelfItem]:
        return find_shelf_item(self.shelf, name)

    # Derived views
    def grocery_list(self) -> GroceryList:
        return build_grocery_list(self.schedule, self.shelf)

    def grocery_text(self) -> str:
        return format_grocery_list(self.grocery_list())

    def prep_guide(self) -> PrepGuide:
        return build_prep_guide(self.schedule)


class SessionRegistry:
    """
    Planner sessions keyed by user id.

    At most max_sessions are cached. Using a session marks it most recent;
    once the cap is exceeded the least recently used one is signed out and
    dropped, and that user is reloaded from the store on their next request.
    """

    def __init__(self, max_sessions: int = 256):
        self.max_sessions = max_sessions
        self._sessions: "OrderedDict[str, PlannerSession]" = OrderedDict()

    def __len__(self) -> int:
        return len(self._sessions)

    def session_for(self, user_id: str) -> PlannerSession:
        """Return the user's session without loading it."""
        session = self._sessions.get(user_id)
        if session is None:
            session = PlannerSession(DatabaseService(user_id))
            self._sessions[user_id] = session
            self._evict()
        else:
            self._sessions.move_to_end(user_id)
        return session

    def get(self, user_id: str) -> PlannerSession:
        """Return the user's session, signing in on first use."""
        session = self.session_for(user_id)
        if not session.is_loaded:
            session.sign_in()
        return session

    def sign_out(self, user_id: str) -> None:
        session = self._sessions.pop(user_id, None)
        if session is not None:
            session.sign_out()

    def _evict(self) -> None:
        while len(self._sessions) > self.max_sessions:
            user_id, session = self._sessions.popitem(last=False)
            session.sign_out()
            logger.info(f"Evicted idle planner session for user {user_id}")
