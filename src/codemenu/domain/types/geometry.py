"""Positions used to anchor a context menu."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

__all__ = ["ContextMenuOrigin", "DisplayPoint", "EditorPoint", "GutterIndicator"]


@dataclass(frozen=True, slots=True, order=True)
class DisplayPoint:
    row: int
    column: int


@dataclass(frozen=True, slots=True)
class EditorPoint:
    """Menu anchored at the text cursor."""

    point: DisplayPoint


@dataclass(frozen=True, slots=True)
class GutterIndicator:
    """Menu anchored at the gutter row whose indicator deployed it."""

    row: int


ContextMenuOrigin = Union[EditorPoint, GutterIndicator]
