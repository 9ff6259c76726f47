"""Shared domain types."""

from codemenu.domain.types.candidates import (
    AvailableCodeAction,
    CodeAction,
    CodeLabel,
    Completion,
    CompletionKind,
    Documentation,
    MultiLineMarkdown,
    MultiLinePlainText,
    ResolvedTask,
    ResolvedTasks,
    SingleLine,
    TaskSourceKind,
    TaskTemplate,
    Undocumented,
)
from codemenu.domain.types.entries import (
    CompletionEntry,
    CompletionMatch,
    EditPreview,
    InlineCompletionHintEntry,
    InlineCompletionMenuHint,
    InlineCompletionText,
    MovePreview,
    StringMatchCandidate,
)
from codemenu.domain.types.geometry import (
    ContextMenuOrigin,
    DisplayPoint,
    EditorPoint,
    GutterIndicator,
)

__all__ = [
    "AvailableCodeAction",
    "CodeAction",
    "CodeLabel",
    "Completion",
    "CompletionEntry",
    "CompletionKind",
    "CompletionMatch",
    "ContextMenuOrigin",
    "DisplayPoint",
    "Documentation",
    "EditPreview",
    "EditorPoint",
    "GutterIndicator",
    "InlineCompletionHintEntry",
    "InlineCompletionMenuHint",
    "InlineCompletionText",
    "MovePreview",
    "MultiLineMarkdown",
    "MultiLinePlainText",
    "ResolvedTask",
    "ResolvedTasks",
    "SingleLine",
    "StringMatchCandidate",
    "TaskSourceKind",
    "TaskTemplate",
    "Undocumented",
]
