"""
Rich text labels for menu entries.

Matched characters are bold, deprecated completions are struck through and
dimmed, and single-line documentation trails the label.
"""

from __future__ import annotations

from typing import assert_never

from rich.text import Text

from codemenu.application.code_actions import CodeActionsItem, CodeActionsMenu, item_label
from codemenu.application.completions_menu import CompletionsMenu
from codemenu.domain.types import (
    Completion,
    CompletionEntry,
    CompletionMatch,
    InlineCompletionHintEntry,
    InlineCompletionMenuHint,
)

MATCH_STYLE = "bold"
DEPRECATED_STYLE = "strike dim"
DOCUMENTATION_STYLE = "dim"


def completion_label(
    completion: Completion,
    match: CompletionMatch,
    documentation: str | None = None,
) -> Text:
    """Label of a completion with the matched characters emphasised."""
    text = Text(completion.label.text)
    if completion.deprecated:
        text.stylize(DEPRECATED_STYLE)

    # Match positions are relative to the filter text, not the full label.
    offset = completion.label.filter_start
    for start, end in match.ranges():
        text.stylize(MATCH_STYLE, offset + start, offset + end)

    if documentation:
        text.append("  ")
        text.append(documentation, style=DOCUMENTATION_STYLE)
    return text


def hint_label(hint: InlineCompletionMenuHint) -> Text:
    return Text(f"{hint.provider_name} Completion", style="italic")


def entry_label(menu: CompletionsMenu, entry: CompletionEntry) -> Text:
    match entry:
        case CompletionMatch(candidate_id=candidate_id):
            completion = menu.completions[candidate_id]
            return completion_label(completion, entry, menu.inline_documentation(completion))
        case InlineCompletionHintEntry(hint=hint):
            return hint_label(hint)
        case _:
            assert_never(entry)


def code_action_label(item: CodeActionsItem) -> Text:
    return Text(item_label(item).replace("\n", ""))


def menu_labels(menu: CompletionsMenu | CodeActionsMenu) -> list[Text]:
    """Labels for every entry of ``menu`` in display order."""
    if isinstance(menu, CompletionsMenu):
        return [entry_label(menu, entry) for entry in menu.entries]
    return [code_action_label(item) for item in menu.actions]
