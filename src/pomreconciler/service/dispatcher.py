"""Background reconciliation with delivery to the requesting endpoint."""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor

from pomreconciler.models.problems import Problem, ReconcileStateChanged
from pomreconciler.service.collaborators import OUTGOING_METHOD, RequestTransmitter
from pomreconciler.service.reconciler import PomReconciler

logger = logging.getLogger("pomreconciler.dispatch")


class ReconcileDispatcher:
    """Runs reconciliation passes on a worker pool and transmits their results.

    Call :meth:`shutdown` to stop accepting work.  Passes already running
    complete; their results are dropped rather than delivered.
    """

    def __init__(
        self,
        reconciler: PomReconciler,
        transmitter: RequestTransmitter,
        max_workers: int = 4,
    ) -> None:
        self._reconciler = reconciler
        self._transmitter = transmitter
        self._lock = threading.Lock()
        self._closed = False
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="pom-reconcile"
        )

    @property
    def closed(self) -> bool:
        with self._lock:
            return self._closed

    def submit(self, endpoint_id: str, document_path: str) -> Future[list[Problem]] | None:
        """Schedule a pass; returns ``None`` when the dispatcher is shut down."""
        with self._lock:
            if self._closed:
                logger.debug("Dispatcher closed, dropping reconcile of '%s'", document_path)
                return None
            return self._executor.submit(self._run, endpoint_id, document_path)

    def shutdown(self, wait: bool = True) -> None:
        with self._lock:
            if self._closed:
                return
            self._closed = True
        self._executor.shutdown(wait=wait)

    def _run(self, endpoint_id: str, document_path: str) -> list[Problem]:
        problems = self._reconciler.reconcile(document_path)
        if self.closed:
            logger.debug(
                "Dropping %d problem(s) for '%s': dispatcher closed", len(problems), document_path
            )
            return problems
        try:
            self._transmitter.transmit(
                endpoint_id,
                OUTGOING_METHOD,
                ReconcileStateChanged(document_path=document_path, problems=problems),
            )
        except Exception:
            logger.exception("Failed to deliver problems for '%s' to %s", document_path, endpoint_id)
        return problems
