"""Reconciler subscriptions on the event bus and their hook surface."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass

from pomreconciler.models.events import (
    EditorChanges,
    EditorContentUpdateEvent,
    EventKind,
    FileTrackingOperation,
    FileTrackingOperationEvent,
)
from pomreconciler.service.events import EventService, SubscriptionHandle

logger = logging.getLogger("pomreconciler.events")

OBSERVED_KINDS: tuple[EventKind, ...] = (
    EventKind.FILE_TRACKING_OPERATION,
    EventKind.EDITOR_CONTENT_UPDATE,
)


class ReconcileHooks:
    """Extension points invoked for observed events.  No-ops by default."""

    def on_editor_content_changed(self, endpoint_id: str, changes: EditorChanges) -> None:
        pass

    def on_file_operation(self, endpoint_id: str, operation: FileTrackingOperation) -> None:
        pass


@dataclass(frozen=True)
class _ForwardingHandler:
    """Forwards ``(endpoint_id, payload)`` of events of *kind* to the matching hook."""

    kind: EventKind
    hooks: ReconcileHooks

    def __call__(self, event: EditorContentUpdateEvent | FileTrackingOperationEvent) -> None:
        match self.kind:
            case EventKind.EDITOR_CONTENT_UPDATE if isinstance(event, EditorContentUpdateEvent):
                self.hooks.on_editor_content_changed(event.endpoint_id, event.changes)
            case EventKind.FILE_TRACKING_OPERATION if isinstance(event, FileTrackingOperationEvent):
                self.hooks.on_file_operation(event.endpoint_id, event.operation)
            case _:
                logger.debug("Ignoring %s on the %s subscription", type(event).__name__, self.kind)


class ReconcileSubscriptions:
    """Owns exactly one subscription per observed event kind until shutdown."""

    def __init__(self, event_service: EventService, hooks: ReconcileHooks | None = None) -> None:
        self._event_service = event_service
        self._hooks = hooks if hooks is not None else ReconcileHooks()
        self._lock = threading.Lock()
        self._closed = False

        created: list[SubscriptionHandle] = []
        try:
            for kind in OBSERVED_KINDS:
                created.append(event_service.subscribe(kind, _ForwardingHandler(kind, self._hooks)))
        except Exception:
            for handle in created:
                event_service.unsubscribe(handle)
            raise
        self._handles: tuple[SubscriptionHandle, ...] = tuple(created)

    @property
    def handles(self) -> tuple[SubscriptionHandle, ...]:
        with self._lock:
            return self._handles

    @property
    def closed(self) -> bool:
        with self._lock:
            return self._closed

    def shutdown(self) -> None:
        """Unsubscribe every handle.  Safe to call more than once."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
            handles, self._handles = self._handles, ()
        for handle in handles:
            try:
                self._event_service.unsubscribe(handle)
            except KeyError:
                logger.warning("Subscription %s was already removed from the bus", handle)
