"""
MenuHost - Editor-side slot holding the active context menu.

Completion requests are numbered as they are issued. Responses can arrive out
of order, so a completions menu is only installed if no newer one is already
showing.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

from codemenu.application.code_actions import CodeActionsItem, CodeActionsMenu
from codemenu.application.completions_menu import CompletionsMenu
from codemenu.application.context_menu import CodeContextMenu
from codemenu.application.executor import BackgroundExecutor
from codemenu.core.config import MenuSettings
from codemenu.domain.protocols import CompletionProvider, MenuRenderer, NullRenderer
from codemenu.domain.types import Completion, CompletionEntry, ContextMenuOrigin, DisplayPoint
from codemenu.logger import get_logger

logger = get_logger("menu_host")


class MenuHost:
    """
    Owns the context menu of one editor.

    All methods must be called from the event loop that runs the editor.
    """

    def __init__(
        self,
        provider: CompletionProvider | None = None,
        settings: MenuSettings | None = None,
        executor: BackgroundExecutor | None = None,
        renderer: MenuRenderer | None = None,
    ):
        """
        Initialize the MenuHost.

        Args:
            provider: Completion source used to resolve selected candidates
            settings: Menu settings
            executor: Scheduler shared by every menu of this editor
            renderer: Renderer attached to menus created by the host
        """
        self.provider = provider
        self.settings = settings or MenuSettings()
        self.executor = executor or BackgroundExecutor(chunk_size=self.settings.filter_chunk_size)
        self.renderer: MenuRenderer = renderer or NullRenderer()
        self.context_menu: CodeContextMenu | None = None
        self._next_completion_id = 0
        # Completion menus with an id below this can never be shown again.
        self._newest_settled_id = 0

    def next_completion_id(self) -> int:
        """Issue the id of a new completion request."""
        completion_id = self._next_completion_id
        self._next_completion_id += 1
        return completion_id

    def new_completions_menu(
        self,
        initial_position: Any,
        buffer: Any,
        completions: Sequence[Completion],
    ) -> CompletionsMenu:
        """Create a menu for a fresh completion request using the host's settings."""
        return CompletionsMenu(
            self.next_completion_id(),
            self.settings.sort_completions,
            self.settings.show_completion_documentation,
            initial_position,
            buffer,
            completions,
            settings=self.settings,
            renderer=self.renderer,
            executor=self.executor,
        )

    def show_snippet_choices(
        self,
        choices: Sequence[str],
        selection: tuple[Any, Any],
        buffer: Any,
    ) -> CompletionsMenu | None:
        """Show the choices of a snippet tabstop; they are final and need no filtering."""
        menu = CompletionsMenu.new_snippet_choices(
            self.next_completion_id(),
            self.settings.sort_completions,
            choices,
            selection,
            buffer,
            settings=self.settings,
            renderer=self.renderer,
            executor=self.executor,
        )
        if not menu.visible():
            return None
        self._newest_settled_id = max(self._newest_settled_id, menu.id)
        self._install(CodeContextMenu(menu))
        return menu

    @property
    def active_completions(self) -> CompletionsMenu | None:
        return self.context_menu.completions if self.context_menu is not None else None

    @property
    def active_code_actions(self) -> CodeActionsMenu | None:
        return self.context_menu.code_actions if self.context_menu is not None else None

    def visible(self) -> bool:
        return self.context_menu is not None and self.context_menu.visible()

    def origin(self, cursor_position: DisplayPoint) -> ContextMenuOrigin | None:
        if self.context_menu is None:
            return None
        return self.context_menu.origin(cursor_position)

    # ------------------------------------------------------------------
    # Showing and hiding
    # ------------------------------------------------------------------

    async def show_completions(self, menu: CompletionsMenu, query: str | None) -> bool:
        """
        Filter ``menu`` for ``query`` and show it.

        Args:
            menu: Menu built for a completion request
            query: Text typed since the request was issued

        Returns:
            True if the menu was installed
        """
        await menu.filter(query, self.executor)

        if menu.id < self._newest_settled_id:
            logger.debug(
                f"Dropping completions menu {menu.id}, request {self._newest_settled_id} superseded it"
            )
            menu.dismiss()
            return False
        self._newest_settled_id = menu.id

        current = self.active_completions
        if not menu.visible():
            logger.debug(f"Completions menu {menu.id} has no matches for {query!r}")
            menu.dismiss()
            if current is not None:
                self.hide()
            return False

        self._install(CodeContextMenu(menu))
        menu.resolve_selected_completion(self.provider)
        return True

    async def refilter(self, query: str | None) -> bool:
        """
        Re-filter the active completions menu after the query changed.

        Returns:
            True if a new filter result was applied
        """
        menu = self.active_completions
        if menu is None:
            return False

        applied = await menu.filter(query, self.executor, self.provider)
        if self.active_completions is not menu:
            return False
        if not menu.visible():
            self.hide()
        return applied

    def show_code_actions(self, menu: CodeActionsMenu) -> bool:
        if not menu.visible():
            logger.debug("No code actions to show")
            return False
        menu.renderer = self.renderer
        self._install(CodeContextMenu(menu))
        return True

    def _install(self, context_menu: CodeContextMenu) -> None:
        previous = self.active_completions
        if previous is not None and previous is not context_menu.menu:
            previous.dismiss()
        self.context_menu = context_menu
        self.renderer.menu_changed()

    def hide(self) -> CodeContextMenu | None:
        """Remove and return the active menu."""
        # Requests issued before the hide must not bring a menu back.
        self._newest_settled_id = max(self._newest_settled_id, self._next_completion_id - 1)
        context_menu = self.context_menu
        self.context_menu = None
        if context_menu is not None:
            completions = context_menu.completions
            if completions is not None:
                completions.dismiss()
            self.renderer.menu_changed()
        return context_menu

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def move_first(self) -> bool:
        return self.context_menu is not None and self.context_menu.select_first(self.provider)

    def move_up(self) -> bool:
        return self.context_menu is not None and self.context_menu.select_prev(self.provider)

    def move_down(self) -> bool:
        return self.context_menu is not None and self.context_menu.select_next(self.provider)

    def move_last(self) -> bool:
        return self.context_menu is not None and self.context_menu.select_last(self.provider)

    # ------------------------------------------------------------------
    # Confirmation
    # ------------------------------------------------------------------

    def confirm_completion(self, item_ix: int | None = None) -> CompletionEntry | None:
        """Take the completions menu out of the slot and return the confirmed entry."""
        menu = self.active_completions
        if menu is None or not menu.visible():
            return None
        entry = menu.confirm(item_ix)
        self.hide()
        return entry

    def confirm_code_action(self, item_ix: int | None = None) -> CodeActionsItem | None:
        """Take the code actions menu out of the slot and return the confirmed item."""
        menu = self.active_code_actions
        if menu is None or not menu.visible():
            return None
        item = menu.confirm(item_ix)
        self.hide()
        return item
