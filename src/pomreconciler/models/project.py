"""Project units tracked by the semantic project model."""

from __future__ import annotations

from pydantic import BaseModel

from pomreconciler.models.problems import SemanticProblem


class ProjectUnit(BaseModel):
    """A tracked project, identified by the workspace folder owning its descriptor."""

    identity: str
    problems: list[SemanticProblem] = []
