"""
CodeContextMenu - The single context menu an editor shows at a time.

Navigation is routed to whichever menu is active. An invisible menu reports
the key as unhandled so the editor can fall back to moving the cursor.
"""

from __future__ import annotations

from typing import assert_never

from codemenu.application.code_actions import CodeActionsMenu
from codemenu.application.completions_menu import CompletionsMenu
from codemenu.domain.protocols import CompletionProvider
from codemenu.domain.types import (
    ContextMenuOrigin,
    DisplayPoint,
    Documentation,
    InlineCompletionText,
)


class CodeContextMenu:
    """Either a completions menu or a code actions menu."""

    def __init__(self, menu: CompletionsMenu | CodeActionsMenu):
        self.menu = menu

    @property
    def completions(self) -> CompletionsMenu | None:
        return self.menu if isinstance(self.menu, CompletionsMenu) else None

    @property
    def code_actions(self) -> CodeActionsMenu | None:
        return self.menu if isinstance(self.menu, CodeActionsMenu) else None

    def select_first(self, provider: CompletionProvider | None = None) -> bool:
        if not self.visible():
            return False
        match self.menu:
            case CompletionsMenu() as menu:
                menu.select_first(provider)
            case CodeActionsMenu() as menu:
                menu.select_first()
            case _:
                assert_never(self.menu)
        return True

    def select_prev(self, provider: CompletionProvider | None = None) -> bool:
        if not self.visible():
            return False
        match self.menu:
            case CompletionsMenu() as menu:
                menu.select_prev(provider)
            case CodeActionsMenu() as menu:
                menu.select_prev()
            case _:
                assert_never(self.menu)
        return True

    def select_next(self, provider: CompletionProvider | None = None) -> bool:
        if not self.visible():
            return False
        match self.menu:
            case CompletionsMenu() as menu:
                menu.select_next(provider)
            case CodeActionsMenu() as menu:
                menu.select_next()
            case _:
                assert_never(self.menu)
        return True

    def select_last(self, provider: CompletionProvider | None = None) -> bool:
        if not self.visible():
            return False
        match self.menu:
            case CompletionsMenu() as menu:
                menu.select_last(provider)
            case CodeActionsMenu() as menu:
                menu.select_last()
            case _:
                assert_never(self.menu)
        return True

    def visible(self) -> bool:
        return self.menu.visible()

    def origin(self, cursor_position: DisplayPoint) -> ContextMenuOrigin:
        return self.menu.origin(cursor_position)

    def aside_documentation(self) -> Documentation | InlineCompletionText | None:
        """Documentation to show beside the menu; code actions have none."""
        match self.menu:
            case CompletionsMenu() as menu:
                return menu.selected_documentation()
            case CodeActionsMenu():
                return None
            case _:
                assert_never(self.menu)
