"""
Fuzzy matching of candidate labels against a typed query.

Scores reward query characters that land on word starts or directly follow
the previous match, and penalise gaps. Every query character must appear in
the candidate in order for it to match at all.
"""

from __future__ import annotations

import asyncio
from collections.abc import Sequence

from codemenu.application.executor import BackgroundExecutor
from codemenu.domain.types import CompletionMatch, StringMatchCandidate
from codemenu.logger import get_logger

logger = get_logger("fuzzy")

BASE_DISTANCE_PENALTY = 0.6
ADDITIONAL_DISTANCE_PENALTY = 0.05
MIN_DISTANCE_PENALTY = 0.2

_PATH_SEPARATORS = ("/", "\\")


def lower_char(char: str) -> str:
    """Lowercase a single character, keeping one code point so indices stay aligned."""
    return char.lower()[0]


class _Scorer:
    """Best-path search for one (query, candidate) pair."""

    def __init__(self, query: Sequence[str], candidate: str, case_sensitive: bool):
        self.query = query
        self.candidate = candidate
        self.chars = list(candidate) if case_sensitive else [lower_char(c) for c in candidate]
        self._scores: dict[tuple[int, int], float] = {}
        self._best: dict[tuple[int, int], int] = {}
        self._last_positions: list[int] = []

    def _compute_last_positions(self) -> bool:
        # Latest index each query character can occupy while leaving room for the rest.
        end = len(self.chars)
        positions: list[int] = []
        for query_char in reversed(self.query):
            index = end - 1
            while index >= 0 and self.chars[index] != query_char:
                index -= 1
            if index < 0:
                return False
            positions.append(index)
            end = index
        positions.reverse()
        self._last_positions = positions
        return True

    def score(self) -> tuple[float, tuple[int, ...]] | None:
        if not self.query or not self._compute_last_positions():
            return None
        score = self._recurse(0, 0) * len(self.query)
        if score <= 0.0:
            return None

        positions: list[int] = []
        cursor = 0
        for query_idx in range(len(self.query)):
            position = self._best[(query_idx, cursor)]
            positions.append(position)
            cursor = position + 1
        return min(score, 1.0), tuple(positions)

    def _char_score(self, query_idx: int, path_idx: int, j: int) -> float:
        if j == path_idx:
            return 1.0
        last = self.candidate[j - 1]
        current = self.candidate[j]
        if last == "/":
            return 0.9
        if last in "-_ " or last.isdigit() or (last.islower() and current.isupper()):
            return 0.8
        if last == ".":
            return 0.7
        if query_idx == 0:
            return BASE_DISTANCE_PENALTY
        return max(
            MIN_DISTANCE_PENALTY,
            BASE_DISTANCE_PENALTY - (j - path_idx - 1) * ADDITIONAL_DISTANCE_PENALTY,
        )

    def _recurse(self, query_idx: int, path_idx: int) -> float:
        if query_idx == len(self.query):
            return 1.0

        key = (query_idx, path_idx)
        cached = self._scores.get(key)
        if cached is not None:
            return cached

        query_char = self.query[query_idx]
        limit = self._last_positions[query_idx]
        best_score = 0.0
        best_position: int | None = None
        last_slash = 0

        for j in range(path_idx, limit + 1):
            path_char = self.chars[j]
            if query_idx == 0 and path_char in _PATH_SEPARATORS:
                last_slash = j
            if path_char != query_char:
                continue

            multiplier = self._char_score(query_idx, path_idx, j)
            if query_idx == 0:
                # Matches deep inside a long string are worth less.
                multiplier /= len(self.candidate) - last_slash

            new_score = self._recurse(query_idx + 1, j + 1) * multiplier
            if new_score > best_score:
                best_score = new_score
                best_position = j
                if new_score == 1.0:
                    break

        if best_position is not None:
            self._best[key] = best_position
        self._scores[key] = best_score
        return best_score


def score_string(query: str, candidate: str, case_sensitive: bool) -> tuple[float, tuple[int, ...]] | None:
    """
    Score a single candidate string.

    Args:
        query: Text typed by the user (non-empty)
        candidate: String to score
        case_sensitive: Compare characters exactly instead of lowercased

    Returns:
        ``(score, positions)`` with score in ``(0, 1]``, or None when the
        query does not match
    """
    query_chars = list(query) if case_sensitive else [lower_char(c) for c in query]
    return _Scorer(query_chars, candidate, case_sensitive).score()


class FuzzyMatcher:
    """Scores candidate labels against a query without blocking the loop."""

    def __init__(self, executor: BackgroundExecutor | None = None):
        self._executor = executor or BackgroundExecutor()

    async def match(
        self,
        candidates: Sequence[StringMatchCandidate],
        query: str,
        case_sensitive: bool,
        limit: int,
        executor: BackgroundExecutor | None = None,
        cancel_flag: asyncio.Event | None = None,
    ) -> list[CompletionMatch]:
        """
        Match ``candidates`` against ``query``.

        Args:
            candidates: Candidates keyed by their index in the menu
            query: Text typed by the user
            case_sensitive: Whether characters must match case exactly
            limit: Maximum number of matches to return
            executor: Scheduler providing yield points (defaults to the matcher's own)
            cancel_flag: When set mid-run, matching stops and returns nothing

        Returns:
            Matches ordered by descending score, then ascending candidate id
        """
        executor = executor or self._executor
        if not query:
            return [
                CompletionMatch(candidate_id=c.id, score=0.0, positions=(), string=c.string)
                for c in candidates[:limit]
            ]

        results: list[CompletionMatch] = []
        for offset, candidate in enumerate(candidates):
            if offset and offset % executor.chunk_size == 0:
                await executor.yield_now()
                if cancel_flag is not None and cancel_flag.is_set():
                    logger.debug(f"Fuzzy match for {query!r} cancelled after {offset} candidates")
                    return []

            scored = score_string(query, candidate.string, case_sensitive)
            if scored is None:
                continue
            score, positions = scored
            results.append(
                CompletionMatch(
                    candidate_id=candidate.id,
                    score=score,
                    positions=positions,
                    string=candidate.string,
                )
            )

        results.sort(key=lambda m: (-m.score, m.candidate_id))
        logger.debug(
            f"Fuzzy matched {len(results)}/{len(candidates)} candidates for {query!r} "
            f"(case_sensitive={case_sensitive}, limit={limit})"
        )
        return results[:limit]


async def match_strings(
    candidates: Sequence[StringMatchCandidate],
    query: str,
    case_sensitive: bool,
    limit: int,
    executor: BackgroundExecutor | None = None,
) -> list[CompletionMatch]:
    """Convenience wrapper around :meth:`FuzzyMatcher.match`."""
    return await FuzzyMatcher(executor).match(candidates, query, case_sensitive, limit)
