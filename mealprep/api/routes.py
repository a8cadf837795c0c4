"""API routes for the meal planner."""

import logging
from typing import Optional, List

from fastapi import APIRouter, Depends, HTTPException, Query, Response
from fastapi.responses import PlainTextResponse
from pydantic import BaseModel

from mealprep.api.auth import AuthenticatedUser, get_current_user
from mealprep.models.recipe import Recipe, RecipeCreate
from mealprep.models.schedule import WeeklySchedule
from mealprep.models.shelf import ShelfItem, ShelfItemCreate
from mealprep.models.grocery import GroceryList
from mealprep.models.prep import PrepGuide
from mealprep.services.planner_session import PlannerSession, ScheduleUpdate, SessionRegistry
from mealprep.services.recipe_extractor import (
    ExtractionError,
    ExtractionResult,
    RecipeExtractor,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1", tags=["Meal Planner"])

_registry = SessionRegistry()


def get_registry() -> SessionRegistry:
    return _registry


def get_session(
    user: AuthenticatedUser = Depends(get_current_user),
    registry: SessionRegistry = Depends(get_registry),
) -> PlannerSession:
    """Planner session of the calling user, loaded on first use."""
    return registry.get(user.id)


def get_extractor() -> RecipeExtractor:
    return RecipeExtractor()


class SessionSummary(BaseModel):
    """Counts after signing in."""
    recipes: int
    shelf_items: int
    scheduled_meals: int


class SlotUpdateRequest(BaseModel):
    """Put a recipe into a slot, or empty it with null."""
    recipe_id: Optional[str] = None


class SwapRequest(BaseModel):
    """Two slots to exchange."""
    day1: str
    meal1: str
    day2: str
    meal2: str


class ExtractRequest(BaseModel):
    """Photo of a recipe, base64 encoded (data URL prefix allowed)."""
    image_base64: str


class ExtractResponse(BaseModel):
    """Extraction outcome. On failure the form stays manually editable."""
    success: bool
    result: Optional[ExtractionResult] = None
    error: Optional[str] = None


def _summary(session: PlannerSession) -> SessionSummary:
    return SessionSummary(
        recipes=len(session.recipes),
        shelf_items=len(session.shelf),
        scheduled_meals=len(session.schedule.scheduled_recipes()),
    )


# Session
@router.post("/session", response_model=SessionSummary)
async def sign_in(
    user: AuthenticatedUser = Depends(get_current_user),
    registry: SessionRegistry = Depends(get_registry),
):
    """Reload recipes, schedule and shelf from the store."""
    session = registry.session_for(user.id)
    session.sign_in()
    return _summary(session)


@router.delete("/session", status_code=204)
async def sign_out(
    user: AuthenticatedUser = Depends(get_current_user),
    registry: SessionRegistry = Depends(get_registry),
):
    """Drop everything cached for the user."""
    registry.sign_out(user.id)
    return Response(status_code=204)


# Recipes
@router.get("/recipes", response_model=List[Recipe])
async def list_recipes(session: PlannerSession = Depends(get_session)):
    return session.recipes


@router.post("/recipes", response_model=Recipe, status_code=201)
async def create_recipe(recipe: RecipeCreate, session: PlannerSession = Depends(get_session)):
    return session.add_recipe(recipe)


@router.put("/recipes/{recipe_id}", response_model=Recipe)
async def update_recipe(
    recipe_id: str,
    recipe: RecipeCreate,
    session: PlannerSession = Depends(get_session),
):
    updated = session.update_recipe(Recipe(id=recipe_id, **recipe.model_dump()))
    if updated is None:
        raise HTTPException(status_code=404, detail="Recipe not found")
    return updated


@router.delete("/recipes/{recipe_id}", status_code=204)
async def delete_recipe(recipe_id: str, session: PlannerSession = Depends(get_session)):
    if not session.delete_recipe(recipe_id):
        raise HTTPException(status_code=404, detail="Recipe not found")
    return Response(status_code=204)


@router.post("/recipes/extract", response_model=ExtractResponse)
async def extract_recipe(
    request: ExtractRequest,
    user: AuthenticatedUser = Depends(get_current_user),
    extractor: RecipeExtractor = Depends(get_extractor),
):
    """
    Pre-fill the add-recipe form from a photo.

    Failures are reported in the body, never as an error status, so the
    client can fall back to manual entry.
    """
    try:
        result = await extractor.extract(request.image_base64)
    except ExtractionError as e:
        logger.info(f"Recipe extraction failed for user {user.id}: {e}")
        return ExtractResponse(success=False, error=str(e))
    return ExtractResponse(success=True, result=result)


# Weekly schedule
@router.get("/schedule", response_model=WeeklySchedule)
async def get_schedule(session: PlannerSession = Depends(get_session)):
    return session.schedule


@router.post("/schedule/generate", response_model=ScheduleUpdate)
async def generate_schedule(session: PlannerSession = Depends(get_session)):
    return session.generate_menu()


@router.post("/schedule/clear", response_model=ScheduleUpdate)
async def clear_schedule(session: PlannerSession = Depends(get_session)):
    return session.clear_menu()


@router.put("/schedule/{day}/{meal_type}", response_model=ScheduleUpdate)
async def set_slot(
    day: str,
    meal_type: str,
    request: SlotUpdateRequest,
    session: PlannerSession = Depends(get_session),
):
    try:
        return session.set_slot(day, meal_type, request.recipe_id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except KeyError:
        raise HTTPException(status_code=404, detail="Recipe not found")


@router.post("/schedule/swap", response_model=ScheduleUpdate)
async def swap_slots(request: SwapRequest, session: PlannerSession = Depends(get_session)):
    try:
        return session.swap_meals(request.day1, request.meal1, request.day2, request.meal2)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))


# Shelf
@router.get("/shelf", response_model=List[ShelfItem])
async def list_shelf(session: PlannerSession = Depends(get_session)):
    return session.shelf


@router.post("/shelf", response_model=ShelfItem, status_code=201)
async def add_shelf_item(item: ShelfItemCreate, session: PlannerSession = Depends(get_session)):
    return session.add_shelf_item(item)


@router.get("/shelf/lookup", response_model=Optional[ShelfItem])
async def lookup_shelf_item(
    name: str = Query(..., min_length=1),
    session: PlannerSession = Depends(get_session),
):
    return session.find_shelf_item(name)


@router.delete("/shelf/{item_id}", status_code=204)
async def remove_shelf_item(item_id: str, session: PlannerSession = Depends(get_session)):
    if not session.remove_shelf_item(item_id):
        raise HTTPException(status_code=404, detail="Shelf item not found")
    return Response(status_code=204)


# Derived views
@router.get("/grocery", response_model=GroceryList)
async def get_grocery_list(session: PlannerSession = Depends(get_session)):
    return session.grocery_list()


@router.get("/grocery/text", response_class=PlainTextResponse)
async def get_grocery_text(session: PlannerSession = Depends(get_session)):
    """Shopping list as plain text, ready to paste."""
    return session.grocery_text()


@router.get("/prep", response_model=PrepGuide)
async def get_prep_guide(session: PlannerSession = Depends(get_session)):
    return session.prep_guide()
