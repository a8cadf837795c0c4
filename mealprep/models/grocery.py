"""Grocery list models (derived, never persisted)."""

from pydantic import BaseModel
from typing import Optional, List, Dict, Literal

from .recipe import IngredientCategory, INGREDIENT_CATEGORIES


ShelfStatus = Literal["need", "have_all", "have_partial", "have_unit_mismatch"]

CATEGORY_LABELS: Dict[str, str] = {
    "vegetables_fruits": "🥦 Vegetables & Fruits",
    "protein": "🍗 Protein",
    "seasonings": "🧂 Seasonings",
    "others": "📦 Others",
}


class Quantity(BaseModel):
    """An amount in one unit."""

    amount: float
    unit: str


class GroceryItem(BaseModel):
    """One ingredient merged across the whole week."""

    name: str
    category: IngredientCategory
    quantities: List[Quantity]
    shelf_amount: Optional[float] = None
    shelf_unit: Optional[str] = None
    status: ShelfStatus = "need"
    missing: Optional[Quantity] = None  # set for have_partial

    @property
    def is_resolved(self) -> bool:
        return self.status == "have_all"


class GroceryList(BaseModel):
    """Grocery items grouped by category, in display order."""

    groups: Dict[str, List[GroceryItem]] = {}

    @classmethod
    def empty(cls) -> "GroceryList":
        return cls(groups={category: [] for category in INGREDIENT_CATEGORIES})

    @property
    def total_items(self) -> int:
        return sum(len(items) for items in self.groups.values())

    @property
    def is_empty(self) -> bool:
        return self.total_items == 0

    def find(self, name: str) -> Optional[GroceryItem]:
        """Find a merged item by case-insensitive name."""
        key = name.strip().lower()
        for items in self.groups.values():
            for item in items:
                if item.name.strip().lower() == key:
                    return item
        return None
