"""Menu entries: fuzzy matches and the inline completion hint."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union

__all__ = [
    "CompletionEntry",
    "CompletionMatch",
    "EditPreview",
    "InlineCompletionHintEntry",
    "InlineCompletionMenuHint",
    "InlineCompletionText",
    "MovePreview",
    "StringMatchCandidate",
]


@dataclass(frozen=True, slots=True)
class StringMatchCandidate:
    """A string offered to the fuzzy matcher, keyed by its candidate index."""

    id: int
    string: str


@dataclass(frozen=True, slots=True)
class CompletionMatch:
    """A fuzzy match of one candidate.

    ``candidate_id`` indexes the menu's candidate list, ``positions`` are the
    character indices of ``string`` that matched the query.
    """

    candidate_id: int
    score: float
    positions: tuple[int, ...] = ()
    string: str = ""

    def ranges(self) -> list[tuple[int, int]]:
        """Collapse matched positions into contiguous ``[start, end)`` ranges."""
        ranges: list[tuple[int, int]] = []
        for position in self.positions:
            if ranges and ranges[-1][1] == position:
                ranges[-1] = (ranges[-1][0], position + 1)
            else:
                ranges.append((position, position + 1))
        return ranges


@dataclass(frozen=True, slots=True)
class EditPreview:
    """Preview of an inline edit, with optional highlight ranges."""

    text: str
    highlights: tuple[tuple[int, int], ...] = field(default_factory=tuple)


@dataclass(frozen=True, slots=True)
class MovePreview:
    """Preview of a jump to an edit elsewhere in the buffer."""

    text: str


InlineCompletionText = Union[EditPreview, MovePreview]


@dataclass(frozen=True, slots=True)
class InlineCompletionMenuHint:
    """An AI inline suggestion advertised as the first menu entry."""

    provider_name: str
    text: InlineCompletionText


@dataclass(frozen=True, slots=True)
class InlineCompletionHintEntry:
    hint: InlineCompletionMenuHint


CompletionEntry = Union[CompletionMatch, InlineCompletionHintEntry]
