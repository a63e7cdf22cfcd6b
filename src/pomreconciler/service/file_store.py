"""Filesystem-backed document store rooted at the workspace directory."""

from __future__ import annotations

from pathlib import Path, PurePosixPath

from pomreconciler.service.collaborators import (
    AccessDeniedError,
    DocumentHandle,
    DocumentNotFoundError,
    StorageError,
    normalize_workspace_path,
)


class WorkspaceFileStore:
    """Resolves workspace paths such as ``/app/pom.xml`` below *root*."""

    def __init__(self, root: Path, encoding: str = "utf-8") -> None:
        self._root = root.resolve()
        self._encoding = encoding

    @property
    def root(self) -> Path:
        return self._root

    def resolve(self, path: str) -> DocumentHandle | None:
        """Return a handle for *path*, or ``None`` if no such file exists."""
        normalized = normalize_workspace_path(path)
        if "\x00" in normalized:
            return None
        location = self._root.joinpath(*PurePosixPath(normalized).parts[1:])
        try:
            resolved = location.resolve(strict=True)
            if not resolved.is_relative_to(self._root):
                raise AccessDeniedError(f"Path '{path}' escapes the workspace root")
            if not resolved.is_file():
                return None
        except (FileNotFoundError, NotADirectoryError):
            return None
        except PermissionError as exc:
            raise AccessDeniedError(f"Cannot access '{normalized}': {exc}") from exc
        except (OSError, RuntimeError, ValueError) as exc:
            # RuntimeError: symlink loop on Python 3.12; OSError from 3.13 on.
            raise StorageError(f"Cannot resolve '{normalized}': {exc}") from exc
        return DocumentHandle(path=normalized, location=location)

    def read_text(self, handle: DocumentHandle) -> str:
        """Read the current content of *handle*."""
        try:
            with handle.location.open("r", encoding=self._encoding, newline="") as fh:
                return fh.read()
        except FileNotFoundError as exc:
            raise DocumentNotFoundError(f"Document '{handle.path}' no longer exists") from exc
        except PermissionError as exc:
            raise AccessDeniedError(f"Cannot read '{handle.path}': {exc}") from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise StorageError(f"Cannot read '{handle.path}': {exc}") from exc
