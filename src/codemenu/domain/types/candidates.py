"""Candidate types offered by completion, code-action and task sources."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Union

if TYPE_CHECKING:
    from codemenu.domain.protocols import CodeActionProvider

__all__ = [
    "AvailableCodeAction",
    "CodeAction",
    "CodeLabel",
    "Completion",
    "CompletionKind",
    "Documentation",
    "MultiLineMarkdown",
    "MultiLinePlainText",
    "ResolvedTask",
    "ResolvedTasks",
    "SingleLine",
    "TaskSourceKind",
    "TaskTemplate",
    "Undocumented",
]


@dataclass(frozen=True, slots=True)
class Undocumented:
    """The provider has no documentation for the candidate."""


@dataclass(frozen=True, slots=True)
class SingleLine:
    """Short documentation shown next to the label."""

    text: str


@dataclass(frozen=True, slots=True)
class MultiLinePlainText:
    """Plain text documentation shown in the aside panel."""

    text: str


@dataclass(frozen=True, slots=True)
class MultiLineMarkdown:
    """Markdown documentation shown in the aside panel."""

    text: str


Documentation = Union[Undocumented, SingleLine, MultiLinePlainText, MultiLineMarkdown]


class CompletionKind(Enum):
    """Subset of LSP completion item kinds the ranker cares about."""

    KEYWORD = "keyword"
    VARIABLE = "variable"
    FUNCTION = "function"
    METHOD = "method"
    FIELD = "field"
    CLASS = "class"
    MODULE = "module"
    SNIPPET = "snippet"
    TEXT = "text"

    @property
    def sort_priority(self) -> int:
        if self is CompletionKind.KEYWORD:
            return 0
        if self is CompletionKind.VARIABLE:
            return 1
        return 2


@dataclass(frozen=True, slots=True)
class CodeLabel:
    """Display text of a completion and the slice of it used for filtering."""

    text: str
    filter_range: tuple[int, int] | None = None

    def filter_text(self) -> str:
        if self.filter_range is None:
            return self.text
        start, end = self.filter_range
        return self.text[start:end]

    @property
    def filter_start(self) -> int:
        return 0 if self.filter_range is None else self.filter_range[0]


@dataclass(slots=True)
class Completion:
    """A completion candidate.

    Instances are shared between the menu and the provider that resolves
    them, so resolution mutates fields in place instead of replacing the
    object.
    """

    label: CodeLabel
    new_text: str
    old_range: Any = None
    server_id: int | None = None
    sort_text: str | None = None
    kind: CompletionKind | None = None
    documentation: Documentation | None = None
    deprecated: bool = False
    resolved: bool = False

    def sort_key(self) -> tuple[int, str]:
        """Deterministic tie-break key: kind priority, then filter text."""
        priority = self.kind.sort_priority if self.kind is not None else 2
        return priority, self.label.filter_text()


@dataclass(frozen=True, slots=True)
class CodeAction:
    """A code action as reported by a language server."""

    title: str
    server_id: int | None = None
    lsp_action: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class AvailableCodeAction:
    """A code action together with the excerpt it applies to and its provider."""

    excerpt_id: int
    action: CodeAction
    provider: "CodeActionProvider"


class TaskSourceKind(Enum):
    """Where a runnable task template was defined."""

    USER_INPUT = "user_input"
    ABS_PATH = "abs_path"
    WORKTREE = "worktree"
    LANGUAGE = "language"


@dataclass(frozen=True, slots=True)
class TaskTemplate:
    label: str
    command: str
    args: tuple[str, ...] = ()
    cwd: str | None = None


@dataclass(frozen=True, slots=True)
class ResolvedTask:
    """A task template with its variables substituted."""

    id: str
    resolved_label: str
    template: TaskTemplate


@dataclass(frozen=True, slots=True)
class ResolvedTasks:
    """Ordered tasks runnable at the cursor, each tagged with its source."""

    templates: tuple[tuple[TaskSourceKind, ResolvedTask], ...] = ()
