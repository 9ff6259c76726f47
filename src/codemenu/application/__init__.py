"""
Application layer - matching, ranking and the menus built on top of them.
"""

from codemenu.application.code_actions import (
    CodeActionContents,
    CodeActionItem,
    CodeActionsItem,
    CodeActionsMenu,
    TaskItem,
)
from codemenu.application.completions_menu import CompletionsMenu
from codemenu.application.context_menu import CodeContextMenu
from codemenu.application.executor import BackgroundExecutor
from codemenu.application.fuzzy import FuzzyMatcher, match_strings
from codemenu.application.menu_host import MenuHost
from codemenu.application.ranking import CompletionRanker, MatchBucket
from codemenu.application.words import split_words

__all__ = [
    "BackgroundExecutor",
    "CodeActionContents",
    "CodeActionItem",
    "CodeActionsItem",
    "CodeActionsMenu",
    "CodeContextMenu",
    "CompletionRanker",
    "CompletionsMenu",
    "FuzzyMatcher",
    "MatchBucket",
    "MenuHost",
    "TaskItem",
    "match_strings",
    "split_words",
]
