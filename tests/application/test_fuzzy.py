"""Tests for the fuzzy matcher."""

import asyncio

import pytest

from codemenu.application.executor import BackgroundExecutor
from codemenu.application.fuzzy import FuzzyMatcher, match_strings, score_string
from codemenu.domain.types import StringMatchCandidate


def candidates(*labels: str) -> list[StringMatchCandidate]:
    return [StringMatchCandidate(id=i, string=label) for i, label in enumerate(labels)]


class TestScoreString:
    def test_exact_match_scores_one(self):
        score, positions = score_string("foo", "foo", case_sensitive=False)
        assert score == pytest.approx(1.0)
        assert positions == (0, 1, 2)

    def test_prefix_score_depends_on_candidate_length(self):
        score, positions = score_string("Creat", "CreateComponent", case_sensitive=True)
        assert score == pytest.approx(5 / 15)
        assert positions == (0, 1, 2, 3, 4)

    def test_requires_characters_in_order(self):
        assert score_string("ba", "ab", case_sensitive=False) is None

    def test_case_sensitive_rejects_other_case(self):
        assert score_string("Creat", "create_all", case_sensitive=True) is None
        assert score_string("creat", "CreateComponent", case_sensitive=False) is not None

    def test_multi_code_point_lowercase_still_matches(self):
        score, positions = score_string("ist", "İstanbul", case_sensitive=False)
        assert score > 0.0
        assert positions == (0, 1, 2)

    def test_prefers_word_starts(self):
        _, positions = score_string("fb", "foo_bar", case_sensitive=False)
        assert positions == (0, 4)

    def test_scores_are_bounded(self):
        for query, label in [("a", "a"), ("ab", "a_b"), ("xyz", "x.y-z"), ("cc", "camelCase")]:
            score, _ = score_string(query, label, case_sensitive=False)
            assert 0.0 < score <= 1.0


class TestFuzzyMatcher:
    @pytest.mark.asyncio
    async def test_orders_by_score_then_candidate_id(self):
        matcher = FuzzyMatcher()
        results = await matcher.match(
            candidates("foobar", "foo", "xfoo", "foo"), "foo", case_sensitive=False, limit=10
        )

        assert [m.candidate_id for m in results] == [1, 3, 0, 2]
        assert results[0].score == pytest.approx(1.0)

    @pytest.mark.asyncio
    async def test_respects_limit(self):
        matcher = FuzzyMatcher()
        labels = [f"item{i}" for i in range(20)]
        results = await matcher.match(candidates(*labels), "item", case_sensitive=False, limit=5)
        assert len(results) == 5

    @pytest.mark.asyncio
    async def test_empty_query_returns_all_unscored_in_source_order(self):
        matcher = FuzzyMatcher()
        results = await matcher.match(candidates("b", "a", "c"), "", case_sensitive=False, limit=100)
        assert [m.string for m in results] == ["b", "a", "c"]
        assert all(m.score == 0.0 for m in results)

    @pytest.mark.asyncio
    async def test_yields_between_chunks(self):
        executor = BackgroundExecutor(chunk_size=2)
        yields = 0
        original = executor.yield_now

        async def counting_yield():
            nonlocal yields
            yields += 1
            await original()

        executor.yield_now = counting_yield  # type: ignore[method-assign]
        await FuzzyMatcher(executor).match(
            candidates("a1", "a2", "a3", "a4", "a5"), "a", case_sensitive=False, limit=10
        )
        assert yields == 2

    @pytest.mark.asyncio
    async def test_cancel_flag_stops_matching(self):
        executor = BackgroundExecutor(chunk_size=1)
        cancel = asyncio.Event()
        cancel.set()
        results = await FuzzyMatcher(executor).match(
            candidates("a1", "a2", "a3"), "a", case_sensitive=False, limit=10, cancel_flag=cancel
        )
        assert results == []

    @pytest.mark.asyncio
    async def test_match_strings_wrapper(self):
        results = await match_strings(candidates("alpha", "beta"), "be", False, 10)
        assert [m.string for m in results] == ["beta"]
        assert results[0].positions == (0, 1)
