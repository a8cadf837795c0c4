"""Shelf (home inventory) models."""

from pydantic import BaseModel, Field


class ShelfItemCreate(BaseModel):
    """Data for adding an item to the shelf."""

    name: str = Field(min_length=1)
    amount: float = Field(0, ge=0)
    unit: str = ""


class ShelfItem(ShelfItemCreate):
    """Ingredient the user already has at home."""

    id: str

    class Config:
        from_attributes = True
