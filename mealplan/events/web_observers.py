"""Recent shopping list and storage events, kept for the UI to poll.

Subscribes `_record` to the GLOBAL_EVENT_BUS for generation state changes,
saved lists, malformed stored data and failed writes. The web layer reads them
back through /api/events, so the page can show a spinner while a list is being
generated or a toast when saving failed.

Each recorded event gets an increasing integer id. Clients pass the last id
they saw as `since` and only get newer events back. At most MAX_EVENTS are
kept; the buffer is per process.
"""
from __future__ import annotations
import logging
from collections import deque
from datetime import datetime, timezone
from threading import Lock
from typing import Any, Deque, Dict, Optional

from .Event_Bus import (
    GLOBAL_EVENT_BUS, SHOPPING_GENERATION_STATE, SHOPPING_LIST_SAVED,
    STORAGE_MALFORMED, STORAGE_WRITE_FAILED
)

logger = logging.getLogger(__name__)

MAX_EVENTS = 300
WATCHED_EVENTS = (SHOPPING_GENERATION_STATE, SHOPPING_LIST_SAVED, STORAGE_MALFORMED, STORAGE_WRITE_FAILED)
# payload fields copied onto the stored event
_FIELDS = ('state', 'count', 'error', 'added', 'merged', 'key', 'reason')

_buffer: Deque[Dict[str, Any]] = deque(maxlen=MAX_EVENTS)
_buffer_lock = Lock()
_last_id = 0
_subscribed = False


def _record(event_name: str, payload: Any):
    global _last_id
    fields = {k: payload[k] for k in _FIELDS if k in payload} if isinstance(payload, dict) else {}
    with _buffer_lock:
        _last_id += 1
        _buffer.append({
            'id': _last_id,
            'type': event_name,
            'ts': datetime.now(timezone.utc).isoformat(),
            **fields,
        })


def start():
    """Subscribe to the watched events; calling it again is a no-op."""
    global _subscribed
    if _subscribed:
        return
    for event_name in WATCHED_EVENTS:
        GLOBAL_EVENT_BUS.subscribe(event_name, _record)
    _subscribed = True
    logger.debug("Recording %s for /api/events", ", ".join(WATCHED_EVENTS))


def get_events(since: Optional[int] = None) -> Dict[str, Any]:
    """Events with an id greater than `since` (all buffered events when None).

    `next_cursor` is the newest id seen so far; pass it back as `since`.
    """
    with _buffer_lock:
        events = [e for e in _buffer if since is None or e['id'] > since]
        cursor = _buffer[-1]['id'] if _buffer else (since or 0)
    return {'events': events, 'next_cursor': cursor}


def reset():
    """Forget recorded events (used by tests)."""
    global _last_id
    with _buffer_lock:
        _buffer.clear()
        _last_id = 0


__all__ = ['MAX_EVENTS', 'WATCHED_EVENTS', 'start', 'get_events', 'reset']
