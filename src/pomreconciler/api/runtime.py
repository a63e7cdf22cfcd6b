"""Wiring of the reconciler and its collaborators for one running server."""

from __future__ import annotations

from dataclasses import dataclass

from pomreconciler.parser.loader import DescriptorLoader
from pomreconciler.parser.problems import ProblemBuilder
from pomreconciler.service.dispatcher import ReconcileDispatcher
from pomreconciler.service.events import EventService
from pomreconciler.service.file_store import WorkspaceFileStore
from pomreconciler.service.project_registry import ProjectRegistry
from pomreconciler.service.reconciler import PomReconciler
from pomreconciler.service.subscriptions import ReconcileHooks, ReconcileSubscriptions
from pomreconciler.service.transmitter import OutboxTransmitter
from pomreconciler.settings import Settings


@dataclass
class ReconcileRuntime:
    settings: Settings
    registry: ProjectRegistry
    file_store: WorkspaceFileStore
    reconciler: PomReconciler
    events: EventService
    subscriptions: ReconcileSubscriptions
    transmitter: OutboxTransmitter
    dispatcher: ReconcileDispatcher

    @classmethod
    def build(cls, settings: Settings, hooks: ReconcileHooks | None = None) -> ReconcileRuntime:
        registry = ProjectRegistry()
        file_store = WorkspaceFileStore(settings.workspace_root)
        reconciler = PomReconciler(
            file_store,
            registry,
            parser=DescriptorLoader(max_document_size=settings.max_document_size),
            builder=ProblemBuilder(anchor=settings.anchor_token),
        )
        events = EventService()
        transmitter = OutboxTransmitter(max_pending=settings.outbox_max_pending)
        return cls(
            settings=settings,
            registry=registry,
            file_store=file_store,
            reconciler=reconciler,
            events=events,
            subscriptions=ReconcileSubscriptions(events, hooks),
            transmitter=transmitter,
            dispatcher=ReconcileDispatcher(
                reconciler, transmitter, max_workers=settings.reconcile_workers
            ),
        )

    def close(self) -> None:
        """Stop observing events, then stop the worker pool."""
        self.subscriptions.shutdown()
        self.dispatcher.shutdown()
