"""Event helper utilities.

Publish helpers for the shopping list and storage events. Every helper takes
the bus explicitly so repositories and the generator can be wired to a private
bus in tests; callers that don't care pass GLOBAL_EVENT_BUS.

Quick import:
    from mealplan.events.event_helpers import (
        publish_generation_state, publish_list_saved,
        publish_malformed_data, publish_write_failed
    )

"""
from __future__ import annotations
from typing import Optional
from .Event_Bus import (
    EventBus,
    SHOPPING_GENERATION_STATE, SHOPPING_LIST_SAVED, STORAGE_MALFORMED, STORAGE_WRITE_FAILED,
)

__all__ = [
    'publish_generation_state', 'publish_list_saved',
    'publish_malformed_data', 'publish_write_failed',
]


def publish_generation_state(bus: EventBus, state: str, count: int = 0, error: Optional[str] = None):
    """Publish a shopping.generation_state event."""
    bus.publish(SHOPPING_GENERATION_STATE, {
        'state': state,
        'count': count,
        'error': error
    })


def publish_list_saved(bus: EventBus, count: int, added: int, merged: int):
    """Publish a shopping.list_saved event.

    Payload structure:
        {
          'count': <items now stored>,
          'added': <new lines appended>,
          'merged': <lines summed into an existing item>
        }
    """
    bus.publish(SHOPPING_LIST_SAVED, {
        'count': count,
        'added': added,
        'merged': merged
    })


def publish_malformed_data(bus: EventBus, key: str, reason: str):
    bus.publish(STORAGE_MALFORMED, {'key': key, 'reason': reason})


def publish_write_failed(bus: EventBus, key: str, reason: str):
    bus.publish(STORAGE_WRITE_FAILED, {'key': key, 'reason': reason})
