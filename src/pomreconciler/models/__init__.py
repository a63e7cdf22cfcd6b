"""Pydantic domain models for the POM reconciler."""

from pomreconciler.models.events import (
    EditorChanges,
    EditorContentUpdateEvent,
    EventKind,
    FileTrackingOperation,
    FileTrackingOperationEvent,
)
from pomreconciler.models.problems import (
    Problem,
    ReconcileStateChanged,
    SemanticProblem,
    StructuralFailure,
)
from pomreconciler.models.project import ProjectUnit

__all__ = [
    "EditorChanges",
    "EditorContentUpdateEvent",
    "EventKind",
    "FileTrackingOperation",
    "FileTrackingOperationEvent",
    "Problem",
    "ProjectUnit",
    "ReconcileStateChanged",
    "SemanticProblem",
    "StructuralFailure",
]
