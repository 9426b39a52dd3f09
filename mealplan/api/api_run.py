from fastapi import (
    FastAPI,
    Query,
    HTTPException,
    Response
)

from datetime import date as _date
from typing import Optional
import logging

from mealplan.domain.Recipe import Recipe
from mealplan.domain.ShoppingList import ConsolidatedEntry
from mealplan.infra.Key_Value_Store import InMemoryStore, JsonFileStore
from mealplan.infra.MealPlan_Repository import MealPlanRepository
from mealplan.infra.ShoppingList_Repository import ShoppingListRepository
from mealplan.infra.Recipe_Repository import RecipeRepository
from mealplan.infra.known_recipes import LEGACY_RECIPE_INGREDIENTS
from mealplan.infra.paths import DATA_DIR
from mealplan.infra.pdf_utils import generate_pdf_for_shopping_list
from mealplan.logic.shopping.generator import GenerationState, ShoppingListGenerator
from mealplan.utilities.config import STORE_BACKEND
from mealplan.utilities.errors import PersistenceWriteError
from mealplan.utilities.formatting import format_date, get_week_start, parse_date
from mealplan.utilities.validators import ClearWeekInput, MealPlanEntryInput, SaveShoppingListInput
from mealplan.events.Event_Bus import GLOBAL_EVENT_BUS
from mealplan.events.web_observers import start as start_event_observers, get_events as get_web_events

# Logging
logger = logging.getLogger("mealplan_app")


def _build_store():
    if STORE_BACKEND == "memory":
        return InMemoryStore()
    return JsonFileStore(DATA_DIR)


# Replaced by tests with an InMemoryStore
store = _build_store()
known_recipes = LEGACY_RECIPE_INGREDIENTS

# Initialize FastAPI app
app = FastAPI(title="Meal Planner & Shopping List API")


@app.on_event("startup")
def _startup_web_observers():
    """Register event bus subscribers for web alerts when the app starts."""
    start_event_observers()
    logger.info("Web observers for shopping list events started (store=%s)", type(store).__name__)


# -------------------- Helpers --------------------
def _meal_plan_repo() -> MealPlanRepository:
    return MealPlanRepository(store, GLOBAL_EVENT_BUS)


def _shopping_list_repo() -> ShoppingListRepository:
    return ShoppingListRepository(store, GLOBAL_EVENT_BUS)


def _generator() -> ShoppingListGenerator:
    return ShoppingListGenerator(_meal_plan_repo(), _shopping_list_repo(), known_recipes, GLOBAL_EVENT_BUS)


def _write_failed(e: PersistenceWriteError):
    logger.error("Persistence write failed: %s", e)
    return HTTPException(status_code=507, detail=f"Could not save changes: {e.reason or e}")


def _parse_day(value: str) -> _date:
    try:
        return parse_date(value)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid date (expected YYYY-MM-DD)")


def _shopping_list_payload(shopping_list):
    return {
        "items": shopping_list.to_dict(),
        "categories": {cat: [i.to_dict() for i in items]
                       for cat, items in shopping_list.grouped_by_category().items()},
        "count": len(shopping_list),
        "progress": shopping_list.progress(),
    }


# -------------------- API: Meal plan --------------------
@app.get('/api/meal-plan')
def api_meal_plan(week_start: Optional[str] = Query(default=None)):
    """Whole plan, or the seven days from week_start (snapped back to its Sunday)."""
    repo = _meal_plan_repo()
    if week_start is None:
        entries = repo.load()
        return {"entries": [e.to_dict() for e in entries], "count": len(entries)}
    start = get_week_start(_parse_day(week_start))
    entries = repo.entries_for_week(start)
    return {"week_start": format_date(start), "entries": [e.to_dict() for e in entries], "count": len(entries)}


@app.post('/api/meal-plan')
def api_add_meal_plan_entry(payload: MealPlanEntryInput):
    if payload.recipe is not None:
        recipe = Recipe.from_dict(payload.recipe.model_dump(exclude_unset=True))
    elif payload.recipe_id:
        recipe = RecipeRepository(store).get(payload.recipe_id)
        if recipe is None:
            raise HTTPException(status_code=404, detail="Recipe not found")
    else:
        raise HTTPException(status_code=400, detail="Either 'recipe' or 'recipe_id' is required")
    try:
        entry = _meal_plan_repo().add_entry(recipe, payload.date, payload.meal_type)
    except PersistenceWriteError as e:
        raise _write_failed(e)
    logger.info("Planned %s for %s %s", recipe.title, payload.date, payload.meal_type)
    return {"status": "success", "entry": entry.to_dict()}


@app.delete('/api/meal-plan/{entry_id}')
def api_remove_meal_plan_entry(entry_id: str):
    try:
        removed = _meal_plan_repo().remove_entry(entry_id)
    except PersistenceWriteError as e:
        raise _write_failed(e)
    if not removed:
        raise HTTPException(status_code=404, detail="Meal plan entry not found")
    return {"status": "success", "removed": entry_id}


@app.post('/api/meal-plan/clear-week')
def api_clear_week(payload: ClearWeekInput):
    start = get_week_start(_parse_day(payload.week_start))
    try:
        removed = _meal_plan_repo().clear_week(start)
    except PersistenceWriteError as e:
        raise _write_failed(e)
    return {"status": "success", "week_start": format_date(start), "removed": removed}


# -------------------- API: Shopping list --------------------
@app.get('/api/shopping-list/generate')
@app.get('/api/shopping-list/generate/')
def api_generate_shopping_list(target_servings: Optional[int] = Query(default=None, ge=1, le=50)):
    result = _generator().generate(target_servings)
    if result.state == GenerationState.FAILED:
        status = 507 if result.error_kind == "persistence_write" else 422
        raise HTTPException(status_code=status, detail=result.error)
    body = result.to_dict()
    if result.state == GenerationState.EMPTY:
        body["message"] = "No meals planned" if not result.meal_plan else "No ingredients found"
    return body


@app.post('/api/shopping-list/save')
@app.post('/api/shopping-list/save/')
def api_save_shopping_list(payload: Optional[SaveShoppingListInput] = None):
    payload = payload or SaveShoppingListInput()
    generator = _generator()
    if payload.items is None:
        result = generator.generate(payload.target_servings)
        if result.state == GenerationState.FAILED:
            status = 507 if result.error_kind == "persistence_write" else 422
            raise HTTPException(status_code=status, detail=result.error)
        items = result.items
    else:
        items = [ConsolidatedEntry.from_dict(i.model_dump()) for i in payload.items]
    logger.info("ShoppingList SAVE request lines=%s", len(items))
    try:
        merged = generator.save(items)
    except PersistenceWriteError as e:
        raise _write_failed(e)
    return {"status": "success", "saved": len(items), "count": len(merged),
            "items": [i.to_dict() for i in merged]}


@app.get('/api/shopping-list')
@app.get('/api/shopping-list/')
def api_shopping_list():
    return _shopping_list_payload(_shopping_list_repo().load())


@app.post('/api/shopping-list/clear-purchased')
def api_clear_purchased():
    try:
        removed = _shopping_list_repo().clear_purchased()
    except PersistenceWriteError as e:
        raise _write_failed(e)
    return {"status": "success", "removed": removed}


@app.get('/api/shopping-list/export_pdf')
def api_export_shopping_list_pdf():
    pdf_bytes = generate_pdf_for_shopping_list(_shopping_list_repo().load())
    filename = f"shopping_list_{format_date(_date.today())}.pdf"
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'}
    )


@app.post('/api/shopping-list/{item_id}/toggle')
def api_toggle_purchased(item_id: str):
    try:
        item = _shopping_list_repo().toggle_purchased(item_id)
    except KeyError:
        raise HTTPException(status_code=404, detail="Shopping list item not found")
    except PersistenceWriteError as e:
        raise _write_failed(e)
    return {"status": "success", "item": item.to_dict()}


@app.delete('/api/shopping-list/{item_id}')
def api_remove_shopping_list_item(item_id: str):
    try:
        item = _shopping_list_repo().remove_item(item_id)
    except KeyError:
        raise HTTPException(status_code=404, detail="Shopping list item not found")
    except PersistenceWriteError as e:
        raise _write_failed(e)
    return {"status": "success", "removed": item.to_dict()}


# -------------------- API: Events (UI polling) --------------------
@app.get('/api/events')
def api_events(since: Optional[int] = Query(default=None)):
    return get_web_events(since)
