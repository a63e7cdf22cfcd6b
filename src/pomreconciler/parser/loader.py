"""Structural (well-formedness) parsing of descriptor documents."""

from __future__ import annotations

import re
from dataclasses import dataclass
from xml.etree import ElementTree

from pomreconciler.models.problems import StructuralFailure
from pomreconciler.parser.positions import LineIndex

# ---------------------------------------------------------------------------
# Safety limits
# ---------------------------------------------------------------------------

_MAX_DOCUMENT_SIZE = 5_000_000  # 5M characters

# Entity declarations are the billion-laughs vector.
_ENTITY_RE = re.compile(r"<!ENTITY\b")


class DescriptorSafetyError(Exception):
    """Raised when a descriptor violates safety constraints.

    Distinct from parse errors: the text may be well-formed but is refused
    (oversized documents, entity declarations).  ``offset`` is where
    the violation starts.
    """

    def __init__(self, message: str, offset: int = 0) -> None:
        self.offset = offset
        super().__init__(message)


@dataclass(frozen=True)
class ParseOk:
    """Successful structural parse."""

    root_tag: str


ParseOutcome = ParseOk | StructuralFailure


def _local_name(tag: str) -> str:
    return tag.rsplit("}", 1)[-1]


class DescriptorLoader:
    """XML well-formedness check returning a tagged outcome instead of raising.

    Expat reports 1-based lines and 0-based columns; failures are normalised
    to 1-based columns.
    """

    def __init__(self, max_document_size: int = _MAX_DOCUMENT_SIZE) -> None:
        self._max_document_size = max_document_size

    # -- safety checks -------------------------------------------------------

    def _check_safety(self, content: str) -> None:
        """Pre-parse checks on raw text.  Raises ``DescriptorSafetyError``."""
        if len(content) > self._max_document_size:
            raise DescriptorSafetyError(
                f"Descriptor exceeds maximum size "
                f"({len(content):,} chars > {self._max_document_size:,} limit)",
                offset=self._max_document_size,
            )
        match = _ENTITY_RE.search(content)
        if match:
            raise DescriptorSafetyError(
                "Entity declarations are not supported in descriptors",
                offset=match.start(),
            )

    # -- public API ----------------------------------------------------------

    def parse(self, text: str) -> ParseOutcome:
        """Check that *text* is a well-formed XML document."""
        try:
            self._check_safety(text)
        except DescriptorSafetyError as exc:
            line, column = LineIndex.build(text).position_of(exc.offset)
            return StructuralFailure(line=line, column=column, message=str(exc))

        parser = ElementTree.XMLParser()
        try:
            parser.feed(text)
            root = parser.close()
        except ElementTree.ParseError as exc:
            line, column = exc.position
            return StructuralFailure(line=line, column=column + 1, message=str(exc))
        except UnicodeEncodeError as exc:
            line, column = LineIndex.build(text).position_of(exc.start)
            return StructuralFailure(
                line=line, column=column, message=f"invalid character: {exc.reason}"
            )
        return ParseOk(root_tag=_local_name(root.tag))
