"""In-process publish/subscribe event bus."""

from __future__ import annotations

import itertools
import logging
import threading
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from pomreconciler.models.events import Event, EventKind

logger = logging.getLogger("pomreconciler.events")

EventHandler = Callable[[Any], None]


@dataclass(frozen=True)
class SubscriptionHandle:
    """One live registration of a handler for an event kind."""

    kind: EventKind
    token: int


class EventService:
    """Thread-safe event bus keyed by :class:`EventKind`.

    Handlers run synchronously on the publishing thread, in subscription
    order.  A failing handler is logged and does not stop the others.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._tokens = itertools.count(1)
        self._handlers: dict[SubscriptionHandle, EventHandler] = {}

    def subscribe(self, kind: EventKind, handler: EventHandler) -> SubscriptionHandle:
        with self._lock:
            handle = SubscriptionHandle(kind=kind, token=next(self._tokens))
            self._handlers[handle] = handler
        return handle

    def unsubscribe(self, handle: SubscriptionHandle) -> None:
        """Remove a registration.  Raises ``KeyError`` for unknown handles."""
        with self._lock:
            try:
                del self._handlers[handle]
            except KeyError:
                raise KeyError(f"Subscription {handle.token} ({handle.kind}) is not active") from None

    def subscriber_count(self, kind: EventKind | None = None) -> int:
        with self._lock:
            return sum(1 for h in self._handlers if kind is None or h.kind == kind)

    def publish(self, event: Event) -> None:
        with self._lock:
            handlers = [h for handle, h in self._handlers.items() if handle.kind == event.kind]
        for handler in handlers:
            try:
                handler(event)
            except Exception:
                logger.exception("Handler failed for %s event", event.kind)
