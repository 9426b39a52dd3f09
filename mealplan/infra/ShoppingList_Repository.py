"""Shopping list repository (key-value persistence of ShoppingListItem records)."""
import logging
from typing import List, Optional

from mealplan.domain.ShoppingList import ShoppingList, ShoppingListItem
from mealplan.events.Event_Bus import EventBus, GLOBAL_EVENT_BUS
from mealplan.events.event_helpers import publish_malformed_data, publish_write_failed
from mealplan.infra.Key_Value_Store import KeyValueStore, decode_list, encode_list
from mealplan.utilities.constants import SHOPPING_LIST_KEY
from mealplan.utilities.errors import MalformedPersistedDataError, PersistenceWriteError

logger = logging.getLogger(__name__)


class ShoppingListRepository:
    def __init__(self, store: KeyValueStore, event_bus: Optional[EventBus] = None, key: str = SHOPPING_LIST_KEY):
        self.store = store
        self.key = key
        self._event_bus = event_bus or GLOBAL_EVENT_BUS

    def load_items(self) -> List[ShoppingListItem]:
        return self.load().get_items()

    def load(self) -> ShoppingList:
        """Stored list; malformed content is reported and read as an empty list."""
        try:
            raw_items = decode_list(self.key, self.store.get(self.key))
        except MalformedPersistedDataError as e:
            logger.warning("Ignoring malformed shopping list: %s", e)
            publish_malformed_data(self._event_bus, self.key, e.reason)
            return ShoppingList()
        return ShoppingList.from_dict(raw_items)

    def save(self, shopping_list: ShoppingList) -> None:
        try:
            self.store.set(self.key, encode_list(shopping_list.to_dict()))
        except PersistenceWriteError as e:
            logger.error("Failed to save shopping list: %s", e)
            publish_write_failed(self._event_bus, self.key, e.reason)
            raise

    def save_items(self, items: List[ShoppingListItem]) -> None:
        self.save(ShoppingList(items))

    def toggle_purchased(self, item_id: str) -> ShoppingListItem:
        '''Raises KeyError for an unknown id.'''
        shopping_list = self.load()
        item = shopping_list.toggle_purchased(item_id)
        self.save(shopping_list)
        return item

    def remove_item(self, item_id: str) -> ShoppingListItem:
        shopping_list = self.load()
        item = shopping_list.remove_item(item_id)
        self.save(shopping_list)
        return item

    def clear_purchased(self) -> int:
        shopping_list = self.load()
        removed = shopping_list.clear_purchased()
        if removed:
            self.save(shopping_list)
        return removed
