"""Supabase client and database operations."""

from supabase import create_client, Client
from functools import lru_cache
from typing import Optional, List

from mealprep.config import get_settings
from mealprep.models.recipe import Recipe, RecipeCreate
from mealprep.models.shelf import ShelfItem, ShelfItemCreate


@lru_cache()
def get_supabase_client() -> Client:
    """Get cached Supabase client."""
    settings = get_settings()
    return create_client(settings.supabase_url, settings.supabase_key)


def _recipe_row(recipe: RecipeCreate) -> dict:
    return recipe.model_dump(mode="json", exclude={"id"})


class DatabaseService:
    """Recipe, schedule and shelf storage for one user."""

    def __init__(self, user_id: str, client: Optional[Client] = None):
        self.user_id = user_id
        self.client = client or get_supabase_client()

    # Recipe operations
    def fetch_recipes(self) -> List[Recipe]:
        """Get all recipes of the user."""
        result = (
            self.client.table("recipes")
            .select("*")
            .eq("user_id", self.user_id)
            .order("created_at")
            .execute()
        )
        return [Recipe(**row) for row in result.data]

    def create_recipe(self, recipe: RecipeCreate) -> Recipe:
        """Create a new recipe."""
        data = _recipe_row(recipe)
        data["user_id"] = self.user_id
        result = self.client.table("recipes").insert(data).execute()
        return Recipe(**result.data[0])

    def update_recipe(self, recipe: Recipe) -> Optional[Recipe]:
        """Replace a recipe. Returns None when no row matched."""
        result = (
            self.client.table("recipes")
            .update(_recipe_row(recipe))
            .eq("id", recipe.id)
            .eq("user_id", self.user_id)
            .execute()
        )
        if result.data:
            return Recipe(**result.data[0])
        return None

    def delete_recipe(self, recipe_id: str) -> bool:
        """Delete a recipe. Returns False when no row matched."""
        result = (
            self.client.table("recipes")
            .delete()
            .eq("id", recipe_id)
            .eq("user_id", self.user_id)
            .execute()
        )
        return bool(result.data)

    # Weekly schedule operations
    def fetch_weekly_schedule(self) -> Optional[dict]:
        """
        Get the saved schedule as day -> meal type -> recipe id.

        None means the user never saved a schedule.
        """
        result = (
            self.client.table("weekly_schedules")
            .select("menu")
            .eq("user_id", self.user_id)
            .execute()
        )
        if result.data:
            return result.data[0]["menu"]
        return None

    def save_weekly_schedule(self, menu: dict) -> None:
        """Create or replace the user's schedule."""
        (
            self.client.table("weekly_schedules")
            .upsert({"user_id": self.user_id, "menu": menu}, on_conflict="user_id")
            .execute()
        )

    # Shelf operations
    def fetch_shelf_items(self) -> List[ShelfItem]:
        """Get everything on the user's shelf."""
        result = (
            self.client.table("shelf_items")
            .select("*")
            .eq("user_id", self.user_id)
            .order("created_at")
            .execute()
        )
        return [ShelfItem(**row) for row in result.data]

    def add_shelf_item(self, item: ShelfItemCreate) -> ShelfItem:
        """Add an item to the shelf."""
        data = item.model_dump()
        data["user_id"] = self.user_id
        result = self.client.table("shelf_items").insert(data).execute()
        return ShelfItem(**result.data[0])

    def remove_shelf_item(self, item_id: str) -> bool:
        """Remove one shelf item. Returns False when no row matched."""
        result = (
            self.client.table("shelf_items")
            .delete()
            .eq("id", item_id)
            .eq("user_id", self.user_id)
            .execute()
        )
        return bool(result.data)
