"""Outbound notification channel backed by per-endpoint in-memory queues."""

from __future__ import annotations

import threading
from collections import defaultdict, deque
from typing import Any

from pydantic import BaseModel


class Notification(BaseModel):
    """A JSON-RPC style notification waiting for its endpoint."""

    method: str
    params: dict[str, Any]


class OutboxTransmitter:
    """Queues notifications per endpoint until the endpoint drains them."""

    def __init__(self, max_pending: int = 1000) -> None:
        self._lock = threading.Lock()
        self._outboxes: defaultdict[str, deque[Notification]] = defaultdict(
            lambda: deque(maxlen=max_pending)
        )

    def transmit(self, endpoint_id: str, method: str, params: Any) -> None:
        if isinstance(params, BaseModel):
            params = params.model_dump(mode="json", by_alias=True)
        notification = Notification(method=method, params=params)
        with self._lock:
            self._outboxes[endpoint_id].append(notification)

    def drain(self, endpoint_id: str) -> list[Notification]:
        """Return and forget every pending notification for *endpoint_id*."""
        with self._lock:
            outbox = self._outboxes.pop(endpoint_id, None)
        return list(outbox) if outbox else []

    def pending(self, endpoint_id: str) -> int:
        with self._lock:
            outbox = self._outboxes.get(endpoint_id)
            return len(outbox) if outbox else 0
