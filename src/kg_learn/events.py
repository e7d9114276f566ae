"""In-process observer for store events.

Handlers run synchronously in registration order.  A failing handler is
logged and skipped; it never aborts the operation that emitted the event.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

logger = logging.getLogger(__name__)

NODE_ADDED = "node.added"
NODE_UPDATED = "node.updated"
EDGE_ADDED = "edge.added"

EVENT_KINDS: frozenset[str] = frozenset({NODE_ADDED, NODE_UPDATED, EDGE_ADDED})

EventHandler = Callable[[dict[str, Any]], None]


class EventBus:
    def __init__(self) -> None:
        self._handlers: dict[str, list[EventHandler]] = {kind: [] for kind in EVENT_KINDS}

    def subscribe(self, kind: str, handler: EventHandler) -> Callable[[], None]:
        """Register *handler* for *kind*; returns a callable that unsubscribes it."""
        handlers = self._handlers.setdefault(kind, [])
        handlers.append(handler)

        def _unsubscribe() -> None:
            if handler in handlers:
                handlers.remove(handler)

        return _unsubscribe

    def emit(self, kind: str, payload: dict[str, Any]) -> None:
        for handler in list(self._handlers.get(kind, ())):
            try:
                handler(payload)
            except Exception:
                logger.exception("Event handler for %s failed", kind)
