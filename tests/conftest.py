"""Shared test fixtures for the POM reconciler."""

from __future__ import annotations

from pathlib import Path

import pytest

from pomreconciler.service.events import EventService
from pomreconciler.service.file_store import WorkspaceFileStore
from pomreconciler.service.project_registry import ProjectRegistry
from pomreconciler.service.reconciler import PomReconciler

VALID_POM = """\
<?xml version="1.0" encoding="UTF-8"?>
<project xmlns="http://maven.apache.org/POM/4.0.0">
  <modelVersion>4.0.0</modelVersion>
  <groupId>org.example</groupId>
  <artifactId>app</artifactId>
  <version>1.0.0</version>
</project>
"""

# Line 3 has an unclosed <groupId>; expat reports the mismatch on line 4.
BROKEN_POM = """\
<?xml version="1.0" encoding="UTF-8"?>
<project xmlns="http://maven.apache.org/POM/4.0.0">
  <groupId>org.example
  </artifactId>
</project>
"""


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    root = tmp_path / "workspace"
    (root / "app").mkdir(parents=True)
    return root


@pytest.fixture
def file_store(workspace: Path) -> WorkspaceFileStore:
    return WorkspaceFileStore(workspace)


@pytest.fixture
def registry() -> ProjectRegistry:
    return ProjectRegistry()


@pytest.fixture
def reconciler(file_store: WorkspaceFileStore, registry: ProjectRegistry) -> PomReconciler:
    return PomReconciler(file_store, registry)


@pytest.fixture
def event_service() -> EventService:
    return EventService()


def write_pom(workspace: Path, content: str, folder: str = "app") -> str:
    """Write a pom.xml below *folder* and return its workspace path."""
    target = workspace / folder
    target.mkdir(parents=True, exist_ok=True)
    (target / "pom.xml").write_text(content, encoding="utf-8", newline="")
    return f"/{folder}/pom.xml"
