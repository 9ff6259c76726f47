"""
Ranking of fuzzy matches for the completions menu.

We want to strike a balance between what the language server tells us to
sort by (its sort text) and what is an obvious good match (typing ``Creat``
when a local ``CreateComponent`` exists). Matches are split into two
buckets:

- Strong matches have a fuzzy score at or above the threshold and are
  ordered by score first, then by the provider's sort text.
- Weak matches are ordered by the provider's sort text first, then by score.

Strong matches always come before weak ones.
"""

from __future__ import annotations

from collections.abc import Sequence
from enum import IntEnum
from typing import Any

from codemenu.domain.types import Completion, CompletionMatch
from codemenu.logger import get_logger

logger = get_logger("ranking")

DEFAULT_STRONG_MATCH_THRESHOLD = 0.2


class MatchBucket(IntEnum):
    STRONG = 0
    WEAK = 1


def _sort_text_key(sort_text: str | None) -> tuple[bool, str]:
    # Candidates without a sort hint go after every hinted candidate.
    return (sort_text is None, sort_text or "")


class CompletionRanker:
    """Orders matches with the strong/weak bucket rule."""

    def __init__(self, strong_threshold: float = DEFAULT_STRONG_MATCH_THRESHOLD):
        self.strong_threshold = strong_threshold

    def bucket_for(self, score: float) -> MatchBucket:
        return MatchBucket.STRONG if score >= self.strong_threshold else MatchBucket.WEAK

    def order_key(self, match: CompletionMatch, completion: Completion) -> tuple[Any, ...]:
        """Total order key of ``match``; ties end on the candidate index."""
        bucket = self.bucket_for(match.score)
        sort_text = _sort_text_key(completion.sort_text)
        if bucket is MatchBucket.STRONG:
            return (bucket, -match.score, sort_text, completion.sort_key(), match.candidate_id)
        return (bucket, sort_text, -match.score, completion.sort_key(), match.candidate_id)

    def rank(
        self,
        matches: Sequence[CompletionMatch],
        completions: Sequence[Completion],
    ) -> list[CompletionMatch]:
        """
        Return ``matches`` in ranked order.

        Args:
            matches: Fuzzy matches referencing ``completions`` by index
            completions: The menu's candidate list

        Returns:
            A new list; the input is left untouched
        """
        ranked = sorted(matches, key=lambda m: self.order_key(m, completions[m.candidate_id]))
        if ranked:
            strong = sum(1 for m in ranked if self.bucket_for(m.score) is MatchBucket.STRONG)
            logger.debug(f"Ranked {len(ranked)} matches ({strong} strong)")
        return ranked
