"""Simple Event Bus / Observer implementation for shopping list and storage notices.

Event names used so far:
  shopping.generation_state -> payload {"state": str, "count": int, "error": str | None}
  shopping.list_saved -> payload {"count": int, "added": int, "merged": int}
  storage.malformed -> payload {"key": str, "reason": str}
  storage.write_failed -> payload {"key": str, "reason": str}

Subscribers are callables taking (event_name, payload).
"""
from __future__ import annotations
import logging
from collections import defaultdict
from typing import Callable, Any, Dict, List

logger = logging.getLogger(__name__)

# --- Event name constants (used across modules) ---
SHOPPING_GENERATION_STATE = "shopping.generation_state"
SHOPPING_LIST_SAVED = "shopping.list_saved"
STORAGE_MALFORMED = "storage.malformed"
STORAGE_WRITE_FAILED = "storage.write_failed"


class EventBus:
    def __init__(self):
        self._subscribers: Dict[str, List[Callable[[str, Any], None]]] = defaultdict(list)

    def subscribe(self, event_name: str, callback: Callable[[str, Any], None]):
        if callback not in self._subscribers[event_name]:
            self._subscribers[event_name].append(callback)

    def unsubscribe(self, event_name: str, callback: Callable[[str, Any], None]):
        try:
            self._subscribers[event_name].remove(callback)
        except (ValueError, KeyError):
            pass

    def publish(self, event_name: str, payload: Any):
        # a failing listener must not abort the operation that published the event
        for cb in list(self._subscribers.get(event_name, [])):
            try:
                cb(event_name, payload)
            except Exception:
                logger.exception("Error delivering %s to %r", event_name, cb)


# A singleton-like instance (can be imported)
GLOBAL_EVENT_BUS = EventBus()


__all__ = [
    'EventBus', 'GLOBAL_EVENT_BUS',
    'SHOPPING_GENERATION_STATE', 'SHOPPING_LIST_SAVED', 'STORAGE_MALFORMED', 'STORAGE_WRITE_FAILED'
]
