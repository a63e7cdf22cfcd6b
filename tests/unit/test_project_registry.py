"""Unit tests for the in-memory project model."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import pytest

from pomreconciler.models.problems import SemanticProblem
from pomreconciler.service.project_registry import ProjectRegistry


class TestRegistry:
    def test_register_and_find(self, registry: ProjectRegistry) -> None:
        registry.register("app/", ["Missing version"])
        unit = registry.find_unit("/app")
        assert unit is not None
        assert unit.identity == "/app"
        assert registry.problems_of(unit) == [SemanticProblem(description="Missing version")]

    def test_find_unknown_returns_none(self, registry: ProjectRegistry) -> None:
        assert registry.find_unit("/app") is None

    def test_register_replaces(self, registry: ProjectRegistry) -> None:
        registry.register("/app", ["a"])
        registry.register("/app", [SemanticProblem(description="b")])
        unit = registry.find_unit("/app")
        assert unit is not None
        assert [p.description for p in unit.problems] == ["b"]

    def test_problems_of_reflects_latest_state(self, registry: ProjectRegistry) -> None:
        stale = registry.register("/app", ["old"])
        registry.set_problems("/app", ["new"])
        assert [p.description for p in registry.problems_of(stale)] == ["new"]

    def test_set_problems_untracked_raises(self, registry: ProjectRegistry) -> None:
        with pytest.raises(KeyError, match="No project tracked"):
            registry.set_problems("/app", [])

    def test_remove(self, registry: ProjectRegistry) -> None:
        registry.register("/app")
        registry.remove("/app")
        assert registry.find_unit("/app") is None
        with pytest.raises(KeyError):
            registry.remove("/app")

    def test_list_units_sorted(self, registry: ProjectRegistry) -> None:
        registry.register("/b")
        registry.register("/a")
        assert [u.identity for u in registry.list_units()] == ["/a", "/b"]

    def test_concurrent_registers(self, registry: ProjectRegistry) -> None:
        with ThreadPoolExecutor(max_workers=8) as pool:
            list(pool.map(lambda i: registry.register(f"/p{i}", [str(i)]), range(50)))
        assert len(registry.list_units()) == 50
