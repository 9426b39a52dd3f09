import logging
from datetime import date
from typing import List, Optional

from mealplan.domain.MealPlanEntry import MealPlanEntry
from mealplan.domain.Recipe import Recipe
from mealplan.events.Event_Bus import EventBus, GLOBAL_EVENT_BUS
from mealplan.events.event_helpers import publish_malformed_data, publish_write_failed
from mealplan.infra.Key_Value_Store import KeyValueStore, decode_list, encode_list
from mealplan.utilities.constants import MEAL_PLAN_KEY, MEAL_TYPES
from mealplan.utilities.errors import MalformedPersistedDataError, PersistenceWriteError
from mealplan.utilities.formatting import week_dates

logger = logging.getLogger(__name__)


class MealPlanRepository:
    """Flat list of meal plan entries stored as one JSON document under MEAL_PLAN_KEY."""

    def __init__(self, store: KeyValueStore, event_bus: Optional[EventBus] = None, key: str = MEAL_PLAN_KEY):
        self.store = store
        self.key = key
        self._event_bus = event_bus or GLOBAL_EVENT_BUS

    def load(self) -> List[MealPlanEntry]:
        """Stored entries; malformed content is reported and read as an empty plan."""
        try:
            raw_entries = decode_list(self.key, self.store.get(self.key))
        except MalformedPersistedDataError as e:
            logger.warning("Ignoring malformed meal plan: %s", e)
            publish_malformed_data(self._event_bus, self.key, e.reason)
            return []
        return [MealPlanEntry.from_dict(d) for d in raw_entries if isinstance(d, dict)]

    def save(self, entries: List[MealPlanEntry]) -> None:
        try:
            self.store.set(self.key, encode_list([e.to_dict() for e in entries]))
        except PersistenceWriteError as e:
            logger.error("Failed to save meal plan: %s", e)
            publish_write_failed(self._event_bus, self.key, e.reason)
            raise

    def add_entry(self, recipe: Recipe, day: str, meal_type: str) -> MealPlanEntry:
        '''Places a snapshot of `recipe` in the (day, meal_type) slot and persists the plan.'''
        if meal_type not in MEAL_TYPES:
            raise ValueError(f"Unknown meal type: {meal_type}")
        entries = self.load()
        entry = MealPlanEntry.create(recipe, day, meal_type)
        entries.append(entry)
        self.save(entries)
        return entry

    def remove_entry(self, entry_id: str) -> bool:
        entries = self.load()
        remaining = [e for e in entries if e.id != entry_id]
        if len(remaining) == len(entries):
            return False
        self.save(remaining)
        return True

    def entries_for(self, day: str, meal_type: str) -> List[MealPlanEntry]:
        return [e for e in self.load() if e.date == day and e.meal_type == meal_type]

    def entries_for_week(self, week_start: date) -> List[MealPlanEntry]:
        days = set(week_dates(week_start))
        return [e for e in self.load() if e.date in days]

    def clear_week(self, week_start: date) -> int:
        """Remove every entry dated within the seven days from `week_start`. Returns the count removed."""
        days = set(week_dates(week_start))
        entries = self.load()
        remaining = [e for e in entries if e.date not in days]
        removed = len(entries) - len(remaining)
        if removed:
            self.save(remaining)
        return removed
