"""Renderer protocol."""

from typing import Protocol

__all__ = ["MenuRenderer", "NullRenderer"]


class MenuRenderer(Protocol):
    """Receives presentation requests from a menu.

    Menus never draw themselves; they tell the renderer which entry must be
    visible and when their state changed.
    """

    def scroll_to_item(self, index: int) -> None:
        """Scroll so that the entry at ``index`` is visible."""
        ...

    def menu_changed(self) -> None:
        """Schedule a redraw of the menu."""
        ...


class NullRenderer:
    """Renderer used when the host has not attached one."""

    def scroll_to_item(self, index: int) -> None:
        pass

    def menu_changed(self) -> None:
        pass
