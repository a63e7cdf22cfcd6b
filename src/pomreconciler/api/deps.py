"""Dependency injection for FastAPI: ReconcileRuntime singleton."""

from __future__ import annotations

from pomreconciler.api.runtime import ReconcileRuntime

_runtime: ReconcileRuntime | None = None


def init_runtime(runtime: ReconcileRuntime) -> None:
    """Set the global ReconcileRuntime (called at app startup)."""
    global _runtime  # noqa: PLW0603
    _runtime = runtime


def get_runtime() -> ReconcileRuntime:
    """FastAPI ``Depends`` provider for ReconcileRuntime."""
    if _runtime is None:
        raise RuntimeError("ReconcileRuntime not initialised, call init_runtime() first")
    return _runtime


def reset_runtime() -> None:
    """Clear the global ReconcileRuntime (for tests)."""
    global _runtime  # noqa: PLW0603
    _runtime = None
