"""Descriptor parsing, position mapping, and problem construction."""

from pomreconciler.parser.loader import DescriptorLoader, DescriptorSafetyError, ParseOk
from pomreconciler.parser.locator import PROJECT_ANCHOR, fallback_range
from pomreconciler.parser.positions import LineIndex, offset_of
from pomreconciler.parser.problems import ProblemBuilder

__all__ = [
    "PROJECT_ANCHOR",
    "DescriptorLoader",
    "DescriptorSafetyError",
    "LineIndex",
    "ParseOk",
    "ProblemBuilder",
    "fallback_range",
    "offset_of",
]
