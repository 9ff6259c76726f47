"""
Textual widget that draws a context menu.

The widget registers itself as the menu's renderer: the menu tells it which
entry to scroll to and when to redraw, and the widget rebuilds its options
from the menu's entries.
"""

from __future__ import annotations

from textual.widgets import OptionList
from textual.widgets.option_list import Option

from codemenu.application.code_actions import CodeActionsMenu
from codemenu.application.completions_menu import CompletionsMenu
from codemenu.logger import get_logger
from codemenu.presentation.highlight import menu_labels

logger = get_logger("popover")


class ContextMenuPopover(OptionList):
    """Popover listing the entries of a completions or code actions menu."""

    DEFAULT_CSS = """
    ContextMenuPopover {
        width: auto;
        min-width: 20;
        max-width: 60;
        max-height: 12;
    }
    """

    def __init__(self, *, id: str | None = None, classes: str | None = None):
        super().__init__(id=id, classes=classes)
        self._menu: CompletionsMenu | CodeActionsMenu | None = None
        self.display = False

    @property
    def menu(self) -> CompletionsMenu | CodeActionsMenu | None:
        return self._menu

    def show_menu(self, menu: CompletionsMenu | CodeActionsMenu) -> None:
        """Attach ``menu`` and draw it."""
        self._menu = menu
        menu.renderer = self
        self.menu_changed()

    def clear_menu(self) -> None:
        self._menu = None
        self.clear_options()
        self.display = False

    def scroll_to_item(self, index: int) -> None:
        if 0 <= index < self.option_count:
            self.highlighted = index

    def menu_changed(self) -> None:
        menu = self._menu
        self.clear_options()
        if menu is None or not menu.visible():
            self.display = False
            return

        self.add_options([Option(label) for label in menu_labels(menu)])
        self.highlighted = menu.selected_item
        self.display = True
        logger.debug(f"Popover redrawn with {self.option_count} entries")
