"""Interfaces of the engine's external collaborators and their error taxonomy."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Any, Protocol

from pomreconciler.models.problems import SemanticProblem
from pomreconciler.models.project import ProjectUnit
from pomreconciler.parser.loader import ParseOutcome

OUTGOING_METHOD = "event:pom-reconcile-state-changed"


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class FileStoreError(Exception):
    """Base class for file store failures."""


class DocumentNotFoundError(FileStoreError):
    """The document vanished between resolution and reading."""


class AccessDeniedError(FileStoreError):
    """The caller may not read the document (or the path escapes the workspace)."""


class StorageError(FileStoreError):
    """Any other I/O or decoding failure of the underlying storage."""


def normalize_workspace_path(path: str) -> str:
    """Normalise *path* to the ``/folder/file`` form used throughout the workspace.

    Raises :class:`AccessDeniedError` when the path climbs above the root.
    """
    parts: list[str] = []
    for part in PurePosixPath("/", path.replace("\\", "/")).parts[1:]:
        if part == ".":
            continue
        if part == "..":
            if not parts:
                raise AccessDeniedError(f"Path '{path}' escapes the workspace root")
            parts.pop()
            continue
        parts.append(part)
    return "/" + "/".join(parts)


# ---------------------------------------------------------------------------
# Collaborators
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DocumentHandle:
    """A resolved document: normalised workspace path plus its location on disk."""

    path: str
    location: Path


class FileStore(Protocol):
    def resolve(self, path: str) -> DocumentHandle | None: ...

    def read_text(self, handle: DocumentHandle) -> str: ...


class ProjectModel(Protocol):
    def find_unit(self, owner: str) -> ProjectUnit | None: ...

    def problems_of(self, unit: ProjectUnit) -> list[SemanticProblem]: ...


class StructuralParser(Protocol):
    def parse(self, text: str) -> ParseOutcome: ...


class RequestTransmitter(Protocol):
    def transmit(self, endpoint_id: str, method: str, params: Any) -> None: ...
