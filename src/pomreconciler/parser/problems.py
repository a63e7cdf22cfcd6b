"""Construction of normalised ``Problem`` records from both problem sources."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from pydantic import ValidationError

from pomreconciler.models.problems import Problem, SemanticProblem, StructuralFailure
from pomreconciler.parser.locator import PROJECT_ANCHOR, fallback_range
from pomreconciler.parser.positions import offset_of

logger = logging.getLogger("pomreconciler.reconcile")


class ProblemBuilder:
    """Builds problems whose ranges always satisfy ``0 <= start <= end <= len(text)``."""

    def __init__(self, anchor: str = PROJECT_ANCHOR) -> None:
        self._anchor = anchor

    def from_structural_failure(self, failure: StructuralFailure, text: str) -> Problem:
        """One error pointing at a single character before the reported position.

        The ``- 1`` shift is kept as-is for client compatibility.
        """
        length = len(text)
        start = min(max(offset_of(text, failure.line, failure.column) - 1, 0), length)
        end = min(start + 1, length)
        return Problem(
            is_error=True,
            message=failure.message,
            source_start=start,
            source_end=end,
        )

    def from_semantic_problems(
        self, problems: Iterable[SemanticProblem], text: str
    ) -> list[Problem]:
        """One error per semantic problem, all anchored to the fallback range."""
        start, end = fallback_range(text, self._anchor)
        result: list[Problem] = []
        for problem in problems:
            try:
                result.append(
                    Problem(
                        is_error=True,
                        message=problem.description,
                        source_start=start,
                        source_end=end,
                    )
                )
            except (AttributeError, ValidationError) as exc:
                logger.warning("Skipping unconvertible semantic problem %r: %s", problem, exc)
        return result
