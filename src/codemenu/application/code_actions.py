"""
Code actions menu - runnable tasks and language-server code actions in one list.

Tasks and code actions come from different sources with their own ordering.
The menu shows tasks first, then actions, without copying either sequence:
indices below the task count address tasks, the rest address actions.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import Any, Union, assert_never

from codemenu.domain.protocols import CodeActionProvider, MenuRenderer, NullRenderer
from codemenu.domain.types import (
    AvailableCodeAction,
    CodeAction,
    ContextMenuOrigin,
    DisplayPoint,
    EditorPoint,
    GutterIndicator,
    ResolvedTask,
    ResolvedTasks,
    TaskSourceKind,
)
from codemenu.logger import get_logger

logger = get_logger("code_actions")


@dataclass(frozen=True, slots=True)
class TaskItem:
    kind: TaskSourceKind
    task: ResolvedTask


@dataclass(frozen=True, slots=True)
class CodeActionItem:
    excerpt_id: int
    action: CodeAction
    provider: CodeActionProvider


CodeActionsItem = Union[TaskItem, CodeActionItem]


def item_label(item: CodeActionsItem) -> str:
    match item:
        case CodeActionItem(action=action):
            return action.title
        case TaskItem(task=task):
            return task.resolved_label
        case _:
            assert_never(item)


def as_task(item: CodeActionsItem) -> ResolvedTask | None:
    return item.task if isinstance(item, TaskItem) else None


def as_code_action(item: CodeActionsItem) -> CodeAction | None:
    return item.action if isinstance(item, CodeActionItem) else None


class CodeActionContents:
    """Virtual concatenation of tasks and code actions."""

    def __init__(
        self,
        tasks: ResolvedTasks | None = None,
        actions: Sequence[AvailableCodeAction] | None = None,
    ):
        self.tasks = tasks
        self.actions = actions

    def _task_count(self) -> int:
        return len(self.tasks.templates) if self.tasks is not None else 0

    def _action_count(self) -> int:
        return len(self.actions) if self.actions is not None else 0

    def __len__(self) -> int:
        return self._task_count() + self._action_count()

    def is_empty(self) -> bool:
        return len(self) == 0

    def __iter__(self) -> Iterator[CodeActionsItem]:
        if self.tasks is not None:
            for kind, task in self.tasks.templates:
                yield TaskItem(kind, task)
        if self.actions is not None:
            for available in self.actions:
                yield CodeActionItem(available.excerpt_id, available.action, available.provider)

    def get(self, index: int) -> CodeActionsItem | None:
        """Item at ``index`` in tasks-then-actions order, or None if out of range."""
        if index < 0:
            return None
        task_count = self._task_count()
        if index < task_count:
            kind, task = self.tasks.templates[index]  # type: ignore[union-attr]
            return TaskItem(kind, task)
        action_index = index - task_count
        if action_index < self._action_count():
            available = self.actions[action_index]  # type: ignore[index]
            return CodeActionItem(available.excerpt_id, available.action, available.provider)
        return None


class CodeActionsMenu:
    """Navigable menu over a fixed set of tasks and code actions."""

    def __init__(
        self,
        actions: CodeActionContents,
        buffer: Any,
        deployed_from_indicator: int | None = None,
        renderer: MenuRenderer | None = None,
    ):
        """
        Initialize the CodeActionsMenu.

        Args:
            actions: Items offered by the menu
            buffer: Buffer the actions apply to
            deployed_from_indicator: Gutter row whose indicator opened the menu, if any
            renderer: Receives scroll and redraw requests
        """
        self.actions = actions
        self.buffer = buffer
        self.selected_item = 0
        self.deployed_from_indicator = deployed_from_indicator
        self.renderer: MenuRenderer = renderer or NullRenderer()

    def select_first(self) -> None:
        if self.actions.is_empty():
            return
        self.selected_item = 0
        self._selection_changed()

    def select_prev(self) -> None:
        if self.actions.is_empty():
            return
        if self.selected_item > 0:
            self.selected_item -= 1
        else:
            self.selected_item = len(self.actions) - 1
        self._selection_changed()

    def select_next(self) -> None:
        if self.actions.is_empty():
            return
        if self.selected_item + 1 < len(self.actions):
            self.selected_item += 1
        else:
            self.selected_item = 0
        self._selection_changed()

    def select_last(self) -> None:
        if self.actions.is_empty():
            return
        self.selected_item = len(self.actions) - 1
        self._selection_changed()

    def _selection_changed(self) -> None:
        self.renderer.scroll_to_item(self.selected_item)
        self.renderer.menu_changed()

    def visible(self) -> bool:
        return not self.actions.is_empty()

    def origin(self, cursor_position: DisplayPoint) -> ContextMenuOrigin:
        if self.deployed_from_indicator is not None:
            return GutterIndicator(self.deployed_from_indicator)
        return EditorPoint(cursor_position)

    def selected(self) -> CodeActionsItem | None:
        return self.actions.get(self.selected_item)

    def confirm(self, item_ix: int | None = None) -> CodeActionsItem | None:
        index = self.selected_item if item_ix is None else item_ix
        item = self.actions.get(index)
        if item is None:
            logger.debug(f"No code action at index {index}")
        return item

    def widest_item_index(self) -> int | None:
        """Index of the item with the longest label."""
        widest: int | None = None
        widest_len = -1
        for index, item in enumerate(self.actions):
            length = len(item_label(item))
            if length > widest_len:
                widest, widest_len = index, length
        return widest
