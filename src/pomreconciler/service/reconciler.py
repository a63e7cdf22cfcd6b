"""Reconciliation engine: one pass of structural + semantic diagnostics per call."""

from __future__ import annotations

import asyncio
import logging
import threading
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import PurePosixPath

from pomreconciler.models.problems import Problem, StructuralFailure
from pomreconciler.parser.loader import DescriptorLoader, ParseOk
from pomreconciler.parser.problems import ProblemBuilder
from pomreconciler.service.collaborators import (
    AccessDeniedError,
    DocumentHandle,
    DocumentNotFoundError,
    FileStore,
    ProjectModel,
    StructuralParser,
    normalize_workspace_path,
)

logger = logging.getLogger("pomreconciler.reconcile")

# ---------------------------------------------------------------------------
# Resolution outcomes
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Loaded:
    handle: DocumentHandle
    text: str


@dataclass(frozen=True)
class Missing:
    path: str


@dataclass(frozen=True)
class StorageFailure:
    path: str
    error: Exception


Resolution = Loaded | Missing | StorageFailure


def owner_of(document_path: str) -> str:
    """Identity of the project owning a descriptor: its parent folder."""
    return str(PurePosixPath(document_path).parent)


# ---------------------------------------------------------------------------
# Per-path serialisation
# ---------------------------------------------------------------------------


@dataclass
class _LockEntry:
    lock: threading.Lock
    users: int = 0


class _PathLocks:
    """One lock per document path, dropped once no pass holds or awaits it."""

    def __init__(self) -> None:
        self._guard = threading.Lock()
        self._entries: dict[str, _LockEntry] = {}

    @contextmanager
    def hold(self, key: str) -> Iterator[None]:
        with self._guard:
            entry = self._entries.get(key)
            if entry is None:
                entry = self._entries[key] = _LockEntry(lock=threading.Lock())
            entry.users += 1
        try:
            with entry.lock:
                yield
        finally:
            with self._guard:
                entry.users -= 1
                if entry.users == 0:
                    del self._entries[key]

    def __len__(self) -> int:
        with self._guard:
            return len(self._entries)


# ---------------------------------------------------------------------------
# PomReconciler
# ---------------------------------------------------------------------------


class PomReconciler:
    """Computes the problems of a descriptor document.

    Never raises to its caller: every failure ends in an empty list or a
    best-effort problem list.  Passes for the same path are serialised;
    passes for different paths run concurrently.
    """

    def __init__(
        self,
        file_store: FileStore,
        project_model: ProjectModel,
        parser: StructuralParser | None = None,
        builder: ProblemBuilder | None = None,
    ) -> None:
        self._file_store = file_store
        self._project_model = project_model
        self._parser = parser if parser is not None else DescriptorLoader()
        self._builder = builder if builder is not None else ProblemBuilder()
        self._locks = _PathLocks()

    # -- public API ----------------------------------------------------------

    def reconcile(self, document_path: str) -> list[Problem]:
        """Run one reconciliation pass for *document_path*."""
        with self._locks.hold(self._lock_key(document_path)):
            return self._reconcile_locked(document_path)

    async def reconcile_async(self, document_path: str) -> list[Problem]:
        """Same as :meth:`reconcile`, off the event loop thread."""
        return await asyncio.to_thread(self.reconcile, document_path)

    # -- internal ------------------------------------------------------------

    @staticmethod
    def _lock_key(document_path: str) -> str:
        try:
            return normalize_workspace_path(document_path)
        except AccessDeniedError:
            return document_path

    def _resolve(self, document_path: str) -> Resolution:
        try:
            handle = self._file_store.resolve(document_path)
            if handle is None:
                return Missing(document_path)
            return Loaded(handle=handle, text=self._file_store.read_text(handle))
        except DocumentNotFoundError:
            return Missing(document_path)
        except Exception as exc:
            return StorageFailure(document_path, exc)

    def _reconcile_locked(self, document_path: str) -> list[Problem]:
        resolution = self._resolve(document_path)
        match resolution:
            case Missing():
                logger.debug("Document '%s' not found, nothing to reconcile", document_path)
                return []
            case StorageFailure(error=error):
                logger.error(
                    "Cannot reconcile '%s': %s", document_path, error, exc_info=error
                )
                return []
        handle, text = resolution.handle, resolution.text

        try:
            outcome = self._parser.parse(text)
        except Exception:
            logger.exception("Structural parse failed for '%s'", handle.path)
            return []
        match outcome:
            case StructuralFailure():
                logger.debug(
                    "Structural failure in '%s' at %d:%d",
                    handle.path, outcome.line, outcome.column,
                )
                return [self._builder.from_structural_failure(outcome, text)]
            case ParseOk():
                pass

        try:
            unit = self._project_model.find_unit(owner_of(handle.path))
            if unit is None:
                return []
            semantic = self._project_model.problems_of(unit)
        except Exception:
            logger.exception("Project model lookup failed for '%s'", handle.path)
            return []
        return self._builder.from_semantic_problems(semantic, text)
