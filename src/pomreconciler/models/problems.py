"""Diagnostic problem records and their raw inputs."""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator

_INT32_MAX = 2**31 - 1


class Problem(BaseModel):
    """A diagnostic tied to a character range of the document.

    Serialised (``by_alias=True``) as
    ``{"error", "message", "sourceStart", "sourceEnd"}``.
    """

    is_error: bool = Field(alias="error")
    message: str
    source_start: int = Field(alias="sourceStart", ge=0, le=_INT32_MAX)
    source_end: int = Field(alias="sourceEnd", ge=0, le=_INT32_MAX)

    model_config = {"populate_by_name": True, "frozen": True}

    @model_validator(mode="after")
    def _check_range(self) -> Problem:
        if self.source_start > self.source_end:
            raise ValueError(
                f"sourceStart ({self.source_start}) exceeds sourceEnd ({self.source_end})"
            )
        return self


class StructuralFailure(BaseModel):
    """A well-formedness error reported by the structural parser (1-based position)."""

    line: int
    column: int
    message: str

    model_config = {"frozen": True}


class SemanticProblem(BaseModel):
    """A project-model problem.  Carries no position information."""

    description: str

    model_config = {"frozen": True}


class ReconcileStateChanged(BaseModel):
    """Params of the outbound ``event:pom-reconcile-state-changed`` notification."""

    document_path: str = Field(alias="documentPath")
    problems: list[Problem] = []

    model_config = {"populate_by_name": True}
