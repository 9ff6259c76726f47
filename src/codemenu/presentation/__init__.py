"""Presentation layer - rich labels and a Textual popover for the menus."""

from codemenu.presentation.highlight import completion_label, entry_label, menu_labels
from codemenu.presentation.popover import ContextMenuPopover

__all__ = [
    "ContextMenuPopover",
    "completion_label",
    "entry_label",
    "menu_labels",
]
