"""Shelf inventory lookups."""

from typing import Optional, List

from mealprep.models.shelf import ShelfItem


def normalize_name(name: Optional[str]) -> str:
    """Matching key for ingredient and shelf names."""
    return (name or "").strip().lower()


def find_shelf_item(items: List[ShelfItem], name: str) -> Optional[ShelfItem]:
    """
    Find a shelf item by case-insensitive name.

    Duplicate names are allowed on the shelf; the first one wins and the
    others are ignored.
    """
    key = normalize_name(name)
    if not key:
        return None
    return next((item for item in items if normalize_name(item.name) == key), None)
