"""In-memory project model: which folders are tracked projects and their problems."""

from __future__ import annotations

import threading
from collections.abc import Iterable

from pomreconciler.models.problems import SemanticProblem
from pomreconciler.models.project import ProjectUnit
from pomreconciler.service.collaborators import normalize_workspace_path


class ProjectRegistry:
    """Thread-safe registry of project units keyed by normalised folder path."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._units: dict[str, ProjectUnit] = {}

    @staticmethod
    def _key(identity: str) -> str:
        return normalize_workspace_path(identity)

    # -- management ----------------------------------------------------------

    @staticmethod
    def _build(key: str, problems: Iterable[SemanticProblem | str]) -> ProjectUnit:
        return ProjectUnit(
            identity=key,
            problems=[
                p if isinstance(p, SemanticProblem) else SemanticProblem(description=p)
                for p in problems
            ],
        )

    def register(
        self, identity: str, problems: Iterable[SemanticProblem | str] = ()
    ) -> ProjectUnit:
        """Track *identity* (replacing any previous unit) with the given problems."""
        key = self._key(identity)
        unit = self._build(key, problems)
        with self._lock:
            self._units[key] = unit
        return unit

    def set_problems(self, identity: str, problems: Iterable[SemanticProblem | str]) -> ProjectUnit:
        """Replace the problems of a tracked unit.  Raises ``KeyError`` if untracked."""
        key = self._key(identity)
        unit = self._build(key, problems)
        with self._lock:
            if key not in self._units:
                raise KeyError(f"No project tracked at '{key}'")
            self._units[key] = unit
        return unit

    def remove(self, identity: str) -> None:
        """Stop tracking *identity*.  Raises ``KeyError`` if untracked."""
        key = self._key(identity)
        with self._lock:
            try:
                del self._units[key]
            except KeyError:
                raise KeyError(f"No project tracked at '{key}'") from None

    def list_units(self) -> list[ProjectUnit]:
        with self._lock:
            return sorted(self._units.values(), key=lambda u: u.identity)

    # -- ProjectModel protocol ----------------------------------------------

    def find_unit(self, owner: str) -> ProjectUnit | None:
        with self._lock:
            return self._units.get(self._key(owner))

    def problems_of(self, unit: ProjectUnit) -> list[SemanticProblem]:
        with self._lock:
            current = self._units.get(unit.identity, unit)
            return list(current.problems)
