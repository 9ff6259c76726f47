"""
CompletionsMenu - Filtering, ranking, selection and lazy resolution of completions.

A menu is built once per completion request and owns the candidate list for
that request. Each keystroke re-filters the same candidates; entries refer to
candidates by index so that resolving a candidate in place is immediately
visible through every entry that references it.
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence
from typing import Any, assert_never

from codemenu.application.executor import BackgroundExecutor
from codemenu.application.fuzzy import FuzzyMatcher, lower_char
from codemenu.application.ranking import CompletionRanker
from codemenu.application.words import split_words
from codemenu.core.config import MenuSettings
from codemenu.domain.protocols import CompletionProvider, MenuRenderer, NullRenderer
from codemenu.domain.types import (
    CodeLabel,
    Completion,
    CompletionEntry,
    CompletionMatch,
    DisplayPoint,
    Documentation,
    EditorPoint,
    InlineCompletionHintEntry,
    InlineCompletionMenuHint,
    InlineCompletionText,
    MultiLineMarkdown,
    MultiLinePlainText,
    SingleLine,
    StringMatchCandidate,
    Undocumented,
)
from codemenu.logger import get_logger

logger = get_logger("completions_menu")


def query_is_case_sensitive(query: str) -> bool:
    """Smart case: any uppercase character makes matching case-sensitive."""
    return any(char.isupper() for char in query)


def starts_some_word(string: str, query_start: str, case_sensitive: bool) -> bool:
    """Whether any word of ``string`` begins with ``query_start``."""
    if not case_sensitive:
        query_start = lower_char(query_start)
    for word in split_words(string):
        first = word[0] if case_sensitive else lower_char(word[0])
        if first == query_start:
            return True
    return False


class CompletionsMenu:
    """
    Completion candidates of one request, filtered for the current query.

    All mutation happens on the event loop thread. Filtering and resolution
    run as background tasks and only touch menu state once they resume on
    the loop.
    """

    def __init__(
        self,
        id: int,
        sort_completions: bool,
        show_completion_documentation: bool,
        initial_position: Any,
        buffer: Any,
        completions: Sequence[Completion],
        *,
        settings: MenuSettings | None = None,
        renderer: MenuRenderer | None = None,
        executor: BackgroundExecutor | None = None,
        matcher: FuzzyMatcher | None = None,
        ranker: CompletionRanker | None = None,
    ):
        """
        Initialize the CompletionsMenu.

        Args:
            id: Monotonic id of the completion request this menu answers
            sort_completions: Apply the strong/weak ranking after matching
            show_completion_documentation: Expose documentation of the selection
            initial_position: Buffer anchor where completion was requested
            buffer: Buffer handle passed back to the provider on resolve
            completions: Candidates; the menu keeps this list and shares it with providers
            settings: Matcher and ranker tunables
            renderer: Receives scroll and redraw requests
            executor: Scheduler for filtering and resolve tasks
            matcher: Fuzzy matcher (built from ``executor`` by default)
            ranker: Ranker (built from ``settings`` by default)
        """
        settings = settings or MenuSettings()
        self.id = id
        self.sort_completions = sort_completions
        self.show_completion_documentation = show_completion_documentation
        self.initial_position = initial_position
        self.buffer = buffer
        self.completions: list[Completion] = (
            completions if isinstance(completions, list) else list(completions)
        )
        self.match_candidates: tuple[StringMatchCandidate, ...] = tuple(
            StringMatchCandidate(id=index, string=completion.label.filter_text())
            for index, completion in enumerate(self.completions)
        )
        self.entries: tuple[CompletionEntry, ...] = ()
        self.selected_item = 0
        self.resolve_completions = True
        self.renderer: MenuRenderer = renderer or NullRenderer()

        self._max_matches = settings.max_matches
        self._executor = executor or BackgroundExecutor(chunk_size=settings.filter_chunk_size)
        self._matcher = matcher or FuzzyMatcher(self._executor)
        self._ranker = ranker or CompletionRanker(settings.strong_match_threshold)
        self._resolving: set[int] = set()
        self._filter_seq = 0
        self._alive = True

    @classmethod
    def new_snippet_choices(
        cls,
        id: int,
        sort_completions: bool,
        choices: Sequence[str],
        selection: tuple[Any, Any],
        buffer: Any,
        **kwargs: Any,
    ) -> "CompletionsMenu":
        """
        Build a menu offering the literal choices of a snippet tabstop.

        The choices are already final, so every entry scores 1.0, nothing is
        ever resolved and no documentation is shown.

        Args:
            id: Completion request id
            sort_completions: Apply ranking on later re-filters
            choices: Alternatives declared by the snippet
            selection: ``(start, end)`` anchors of the tabstop being replaced
            buffer: Buffer handle
        """
        completions = [
            Completion(
                label=CodeLabel(text=choice),
                new_text=choice,
                old_range=selection,
                resolved=True,
            )
            for choice in choices
        ]
        menu = cls(id, sort_completions, False, selection[0], buffer, completions, **kwargs)
        menu.resolve_completions = False
        menu.entries = tuple(
            CompletionMatch(candidate_id=index, score=1.0, positions=(), string=choice)
            for index, choice in enumerate(choices)
        )
        return menu

    # ------------------------------------------------------------------
    # Visibility and anchoring
    # ------------------------------------------------------------------

    def visible(self) -> bool:
        return bool(self.entries)

    def origin(self, cursor_position: DisplayPoint) -> EditorPoint:
        return EditorPoint(cursor_position)

    @property
    def is_alive(self) -> bool:
        """False once the menu was dismissed or confirmed."""
        return self._alive

    def dismiss(self) -> None:
        if self._alive:
            self._alive = False
            logger.debug(f"Completions menu {self.id} dismissed")

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    def select_first(self, provider: CompletionProvider | None = None) -> None:
        if not self.entries:
            return
        self.selected_item = 0
        self._selection_changed(provider)

    def select_prev(self, provider: CompletionProvider | None = None) -> None:
        if not self.entries:
            return
        if self.selected_item > 0:
            self.selected_item -= 1
        else:
            self.selected_item = len(self.entries) - 1
        self._selection_changed(provider)

    def select_next(self, provider: CompletionProvider | None = None) -> None:
        if not self.entries:
            return
        if self.selected_item + 1 < len(self.entries):
            self.selected_item += 1
        else:
            self.selected_item = 0
        self._selection_changed(provider)

    def select_last(self, provider: CompletionProvider | None = None) -> None:
        if not self.entries:
            return
        self.selected_item = len(self.entries) - 1
        self._selection_changed(provider)

    def _selection_changed(self, provider: CompletionProvider | None) -> None:
        self.renderer.scroll_to_item(self.selected_item)
        self.resolve_selected_completion(provider)
        self.renderer.menu_changed()

    def selected_entry(self) -> CompletionEntry | None:
        if not self.entries:
            return None
        return self.entries[self.selected_item]

    def selected_completion(self) -> Completion | None:
        """The candidate behind the selected entry, if it is a match."""
        entry = self.selected_entry()
        if isinstance(entry, CompletionMatch):
            return self.completions[entry.candidate_id]
        return None

    def _selected_candidate_id(self) -> int | None:
        entry = self.selected_entry()
        if isinstance(entry, CompletionMatch):
            return entry.candidate_id
        return None

    def show_inline_completion_hint(self, hint: InlineCompletionMenuHint) -> None:
        """Put ``hint`` at the top of the menu, replacing any previous hint, and select it."""
        hint_entry = InlineCompletionHintEntry(hint)
        if self.entries and isinstance(self.entries[0], InlineCompletionHintEntry):
            self.entries = (hint_entry,) + self.entries[1:]
        else:
            self.entries = (hint_entry,) + self.entries
        self.selected_item = 0

    def confirm(self, item_ix: int | None = None) -> CompletionEntry | None:
        """
        Confirm an entry and dismiss the menu.

        Confirmation never waits for, or triggers, resolution: an unresolved
        candidate is applied with the edit it already carries.

        Args:
            item_ix: Entry to confirm (defaults to the selection)

        Returns:
            The confirmed entry, or None if the index is out of range
        """
        index = self.selected_item if item_ix is None else item_ix
        if not 0 <= index < len(self.entries):
            return None
        entry = self.entries[index]
        self.dismiss()
        return entry

    # ------------------------------------------------------------------
    # Resolve on select
    # ------------------------------------------------------------------

    def resolve_selected_completion(
        self, provider: CompletionProvider | None
    ) -> asyncio.Task[bool] | None:
        """
        Ask the provider for the selected candidate's details.

        At most one resolve per candidate is in flight, and resolved
        candidates are never requested again.

        Returns:
            The spawned resolve task, or None when nothing was requested
        """
        if not self.resolve_completions:
            return None
        if provider is None:
            logger.debug(f"No completion provider attached to menu {self.id}, skipping resolve")
            return None
        entry = self.selected_entry()
        if entry is None:
            return None

        match entry:
            case CompletionMatch(candidate_id=candidate_id):
                pass
            case InlineCompletionHintEntry():
                return None
            case _:
                assert_never(entry)

        completion = self.completions[candidate_id]
        if completion.resolved or candidate_id in self._resolving:
            return None

        self._resolving.add(candidate_id)
        logger.debug(f"Resolving completion {candidate_id} of menu {self.id}")
        return self._executor.spawn(
            self._resolve(provider, candidate_id),
            name=f"resolve-completion-{self.id}-{candidate_id}",
        )

    async def _resolve(self, provider: CompletionProvider, candidate_id: int) -> bool:
        try:
            changed = await provider.resolve_completions(self.buffer, [candidate_id], self.completions)
        except Exception as e:
            logger.warning(f"Failed to resolve completion {candidate_id} of menu {self.id}: {e}")
            return False
        finally:
            self._resolving.discard(candidate_id)

        self.completions[candidate_id].resolved = True

        if not self._alive:
            logger.debug(f"Menu {self.id} dismissed before completion {candidate_id} resolved")
            return False
        if self._selected_candidate_id() != candidate_id:
            logger.debug(f"Selection moved away from completion {candidate_id} before it resolved")
            return False
        if changed:
            self.renderer.menu_changed()
        return bool(changed)

    # ------------------------------------------------------------------
    # Documentation
    # ------------------------------------------------------------------

    def inline_documentation(self, completion: Completion) -> str | None:
        """Single-line documentation shown next to a label, if any."""
        if not self.show_completion_documentation:
            return None
        documentation = completion.documentation
        if isinstance(documentation, SingleLine) and documentation.text.strip():
            return documentation.text
        return None

    def selected_documentation(self) -> Documentation | InlineCompletionText | None:
        """
        Payload of the documentation aside for the current selection.

        Returns multi-line documentation of the selected candidate, or the
        preview of the inline completion hint. Single-line and missing
        documentation produce None, as does an empty markdown document.
        """
        if not self.show_completion_documentation:
            return None
        entry = self.selected_entry()
        if entry is None:
            return None

        match entry:
            case CompletionMatch(candidate_id=candidate_id):
                documentation = self.completions[candidate_id].documentation
                match documentation:
                    case MultiLinePlainText():
                        return documentation
                    case MultiLineMarkdown(text=text) if text:
                        return documentation
                    case MultiLineMarkdown() | SingleLine() | Undocumented() | None:
                        return None
                    case _:
                        assert_never(documentation)
            case InlineCompletionHintEntry(hint=hint):
                return hint.text
            case _:
                assert_never(entry)

    def widest_entry_index(self) -> int | None:
        """Index of the entry whose rendered label is longest."""
        widest: int | None = None
        widest_len = -1
        for index, entry in enumerate(self.entries):
            match entry:
                case CompletionMatch(candidate_id=candidate_id):
                    completion = self.completions[candidate_id]
                    length = len(completion.label.text)
                    if self.show_completion_documentation and isinstance(
                        completion.documentation, SingleLine
                    ):
                        length += len(completion.documentation.text)
                case InlineCompletionHintEntry(hint=hint):
                    length = len(hint.provider_name)
                case _:
                    assert_never(entry)
            if length > widest_len:
                widest, widest_len = index, length
        return widest

    # ------------------------------------------------------------------
    # Filtering
    # ------------------------------------------------------------------

    async def filter(
        self,
        query: str | None,
        executor: BackgroundExecutor | None = None,
        provider: CompletionProvider | None = None,
    ) -> bool:
        """
        Re-filter the candidates for ``query``.

        Every call is numbered; if a newer call was issued while this one was
        matching, this result is stale and is dropped.

        Args:
            query: Text typed since the completion was requested (None or "" shows everything)
            executor: Scheduler for the matching pass
            provider: When given, the new selection is resolved

        Returns:
            True if the result was applied to the menu
        """
        self._filter_seq += 1
        seq = self._filter_seq

        if query:
            case_sensitive = query_is_case_sensitive(query)
            matches = await self._matcher.match(
                self.match_candidates,
                query,
                case_sensitive,
                self._max_matches,
                executor or self._executor,
            )
            # Drop matches where the query's first character only occurs mid-word.
            query_start = query[0]
            matches = [
                m for m in matches if starts_some_word(m.string, query_start, case_sensitive)
            ]
        else:
            matches = [
                CompletionMatch(candidate_id=c.id, score=0.0, positions=(), string=c.string)
                for c in self.match_candidates
            ]

        if seq < self._filter_seq:
            logger.debug(f"Discarding stale filter result {seq} for {query!r} (latest {self._filter_seq})")
            return False
        if not self._alive:
            logger.debug(f"Menu {self.id} dismissed while filtering {query!r}")
            return False

        if self.sort_completions:
            matches = self._ranker.rank(matches, self.completions)

        new_entries: list[CompletionEntry] = list(matches)
        if self.entries and isinstance(self.entries[0], InlineCompletionHintEntry):
            new_entries.insert(0, self.entries[0])

        self.entries = tuple(new_entries)
        self.selected_item = 0
        logger.debug(f"Menu {self.id} filtered to {len(self.entries)} entries for {query!r}")

        if self.entries:
            self.resolve_selected_completion(provider)
        self.renderer.menu_changed()
        return True
