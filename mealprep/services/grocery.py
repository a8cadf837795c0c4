"""Grocery list aggregation and shelf reconciliation."""

import math
from typing import Optional, List, Dict, Tuple

from mealprep.models.recipe import INGREDIENT_CATEGORIES, coerce_category
from mealprep.models.schedule import WeeklySchedule
from mealprep.models.shelf import ShelfItem
from mealprep.models.grocery import (
    CATEGORY_LABELS,
    GroceryItem,
    GroceryList,
    Quantity,
)
from mealprep.services.shelf import find_shelf_item, normalize_name


# Lower sorts first within a category
STATUS_ORDER = {
    "need": 0,
    "have_partial": 0,
    "have_unit_mismatch": 0,
    "have_all": 1,
}

STATUS_NOTES = {
    "need": "",
    "have_partial": "short {missing}",
    "have_unit_mismatch": "on shelf: {shelf}",
    "have_all": "on shelf",
}


def normalize_unit(unit: Optional[str]) -> str:
    return (unit or "").strip().lower()


def format_amount(amount: float) -> str:
    """Render 15.0 as "15", 0.5 as "0.5" and 1e6 as "1000000"."""
    return f"{amount:.6f}".rstrip("0").rstrip(".")


def format_quantity(quantity: Quantity) -> str:
    return f"{format_amount(quantity.amount)} {quantity.unit}".strip()


class GroceryReconciler:
    """Turn a weekly schedule and the shelf into a shopping list."""

    @staticmethod
    def aggregate(schedule: WeeklySchedule) -> List[GroceryItem]:
        """
        Merge every ingredient of every filled slot by name.

        Names match case-insensitively. Amounts with the same unit are summed;
        a different unit becomes a separate quantity on the same item. Display
        name and category come from the first occurrence.
        """
        merged: Dict[str, dict] = {}

        for recipe in schedule.scheduled_recipes():
            for ingredient in recipe.ingredients:
                key = normalize_name(ingredient.name)
                if not key:
                    continue

                entry = merged.get(key)
                if entry is None:
                    entry = {
                        "name": ingredient.name.strip(),
                        "category": coerce_category(ingredient.category),
                        "quantities": {},
                    }
                    merged[key] = entry

                # unit key -> [amounts, display unit]
                unit_key = normalize_unit(ingredient.unit)
                if unit_key in entry["quantities"]:
                    entry["quantities"][unit_key][0].append(ingredient.amount)
                else:
                    entry["quantities"][unit_key] = [[ingredient.amount], ingredient.unit.strip()]

        return [
            GroceryItem(
                name=entry["name"],
                category=entry["category"],
                quantities=[
                    # fsum is exact-rounded, so the total ignores slot order
                    Quantity(amount=math.fsum(amounts), unit=unit)
                    for amounts, unit in entry["quantities"].values()
                ],
            )
            for entry in merged.values()
        ]

    @staticmethod
    def reconcile(item: GroceryItem, shelf_items: List[ShelfItem]) -> GroceryItem:
        """Return a copy of the item annotated with its shelf status."""
        shelf = find_shelf_item(shelf_items, item.name)
        if shelf is None:
            return item.model_copy(update={"status": "need"})

        update = {"shelf_amount": shelf.amount, "shelf_unit": shelf.unit}

        shelf_unit = normalize_unit(shelf.unit)
        required = next(
            (q for q in item.quantities if normalize_unit(q.unit) == shelf_unit),
            None,
        )
        if required is None:
            update["status"] = "have_unit_mismatch"
        elif shelf.amount >= required.amount:
            update["status"] = "have_all"
        else:
            update["status"] = "have_partial"
            update["missing"] = Quantity(
                amount=math.fsum([required.amount, -shelf.amount]),
                unit=required.unit,
            )
        return item.model_copy(update=update)

    @staticmethod
    def sort_key(item: GroceryItem) -> Tuple[int, str]:
        return STATUS_ORDER[item.status], item.name.lower()

    @classmethod
    def build(
        cls,
        schedule: WeeklySchedule,
        shelf_items: Optional[List[ShelfItem]] = None,
    ) -> GroceryList:
        """Aggregate, reconcile and group the week's ingredients."""
        grocery_list = GroceryList.empty()
        shelf_items = shelf_items or []

        for item in cls.aggregate(schedule):
            reconciled = cls.reconcile(item, shelf_items)
            grocery_list.groups[reconciled.category].append(reconciled)

        for category in INGREDIENT_CATEGORIES:
            grocery_list.groups[category].sort(key=cls.sort_key)

        return grocery_list


def build_grocery_list(
    schedule: WeeklySchedule,
    shelf_items: Optional[List[ShelfItem]] = None,
) -> GroceryList:
    """Build the grouped shopping list for a schedule."""
    return GroceryReconciler.build(schedule, shelf_items)


def format_grocery_list(grocery_list: GroceryList) -> str:
    """Render the list as plain text for copying into a notes app."""
    blocks = []
    for category, items in grocery_list.groups.items():
        if not items:
            continue

        lines = [CATEGORY_LABELS.get(category, category)]
        for item in items:
            amounts = " + ".join(format_quantity(q) for q in item.quantities)
            line = f"  • {item.name}: {amounts}"

            note = STATUS_NOTES[item.status].format(
                missing=format_quantity(item.missing) if item.missing else "",
                shelf=f"{format_amount(item.shelf_amount or 0)} {item.shelf_unit or ''}".strip(),
            )
            if note:
                line += f" ({note})"
            lines.append(line)

        blocks.append("\n".join(lines))

    return "\n\n".join(blocks)
