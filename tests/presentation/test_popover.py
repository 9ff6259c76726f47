"""Tests for the Textual popover."""

import pytest
from textual.app import App, ComposeResult

from codemenu.application.completions_menu import CompletionsMenu
from codemenu.presentation.popover import ContextMenuPopover
from tests.conftest import make_completion


class PopoverApp(App):
    def compose(self) -> ComposeResult:
        yield ContextMenuPopover(id="popover")


@pytest.mark.asyncio
async def test_popover_follows_menu_selection():
    menu = CompletionsMenu(0, False, True, None, None, [make_completion(l) for l in ("alpha", "beta", "gamma")])
    await menu.filter(None)

    app = PopoverApp()
    async with app.run_test() as pilot:
        popover = app.query_one(ContextMenuPopover)
        popover.show_menu(menu)
        await pilot.pause()

        assert popover.display is True
        assert popover.option_count == 3
        assert popover.highlighted == 0
        assert menu.renderer is popover

        menu.select_last()
        await pilot.pause()
        assert popover.highlighted == 2


@pytest.mark.asyncio
async def test_popover_hides_empty_menu():
    menu = CompletionsMenu(0, False, True, None, None, [make_completion("alpha")])
    await menu.filter("zzz")

    app = PopoverApp()
    async with app.run_test() as pilot:
        popover = app.query_one(ContextMenuPopover)
        popover.show_menu(menu)
        await pilot.pause()

        assert popover.display is False
        assert popover.option_count == 0

        popover.clear_menu()
        assert popover.menu is None
