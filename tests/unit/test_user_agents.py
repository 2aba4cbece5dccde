"""Tests for the user agent pool."""

import random
import threading

import pytest

from browser_headers.antibot.matching import matches_any
from browser_headers.antibot.user_agents import UserAgentPool
from browser_headers.core.corpus_source import StaticCorpusSource
from browser_headers.exceptions import (
    ConfigurationError,
    EmptyPoolError,
    NotInitializedError,
    SourceFetchError,
)
from browser_headers.models.user_agent import FilterCriteria


class FailingSource:
    async def fetch(self):
        raise SourceFetchError("unreachable")


class CountingSource:
    """Returns a different corpus on each fetch."""

    def __init__(self, corpora):
        self._corpora = list(corpora)
        self.calls = 0

    async def fetch(self):
        corpus = self._corpora[min(self.calls, len(self._corpora) - 1)]
        self.calls += 1
        return corpus


class TestInitialize:
    """Tests for fetching and filtering."""

    @pytest.mark.asyncio
    async def test_filters_by_all_criteria(self, mixed_source, chrome_windows_criteria):
        pool = UserAgentPool(chrome_windows_criteria, mixed_source)
        await pool.initialize()

        assert pool.size == 6
        for record in pool.records:
            assert matches_any(chrome_windows_criteria.operating_systems, record.operating_system_code)
            assert matches_any(chrome_windows_criteria.browsers, record.software_name_code)
            assert record.time_seen >= chrome_windows_criteria.min_times_seen

    @pytest.mark.asyncio
    async def test_keeps_corpus_order(self, mixed_corpus, mixed_source):
        pool = UserAgentPool(FilterCriteria.from_options(), mixed_source)
        await pool.initialize()

        assert [r.user_agent for r in pool.records] == [r["userAgent"] for r in mixed_corpus]

    @pytest.mark.asyncio
    async def test_min_times_seen_is_inclusive(self, record_factory):
        source = StaticCorpusSource([
            record_factory("a", time_seen=299),
            record_factory("b", time_seen=300),
        ])
        pool = UserAgentPool(FilterCriteria.from_options(min_times_seen=300), source)
        await pool.initialize()

        assert [r.user_agent for r in pool.records] == ["b"]

    @pytest.mark.asyncio
    async def test_empty_result_fails_eagerly(self, mixed_source):
        criteria = FilterCriteria.from_options(browsers=["safari"])
        pool = UserAgentPool(criteria, mixed_source)

        with pytest.raises(EmptyPoolError):
            await pool.initialize()
        assert not pool.is_initialized

    @pytest.mark.asyncio
    async def test_empty_pool_is_configuration_error(self, mixed_source):
        criteria = FilterCriteria.from_options(min_times_seen=10_000)
        pool = UserAgentPool(criteria, mixed_source)

        with pytest.raises(ConfigurationError):
            await pool.initialize()

    @pytest.mark.asyncio
    async def test_source_error_propagates(self):
        pool = UserAgentPool(FilterCriteria.from_options(), FailingSource())

        with pytest.raises(SourceFetchError):
            await pool.initialize()
        assert not pool.is_initialized

    @pytest.mark.asyncio
    async def test_malformed_records_skipped(self, record_factory):
        source = StaticCorpusSource([
            record_factory("good"),
            {"userAgent": "missing codes"},
            "not a record",
        ])
        pool = UserAgentPool(FilterCriteria.from_options(), source)
        await pool.initialize()

        assert [r.user_agent for r in pool.records] == ["good"]

    @pytest.mark.asyncio
    async def test_reinitialize_replaces_corpus(self, record_factory):
        source = CountingSource([
            [record_factory("first")],
            [record_factory("second"), record_factory("third")],
        ])
        pool = UserAgentPool(FilterCriteria.from_options(), source)

        await pool.initialize()
        assert pool.size == 1

        await pool.initialize()
        assert source.calls == 2
        assert [r.user_agent for r in pool.records] == ["second", "third"]

    @pytest.mark.asyncio
    async def test_failed_reinitialize_keeps_previous_corpus(self, record_factory):
        source = CountingSource([
            [record_factory("first")],
            [record_factory("rare", time_seen=0)],
        ])
        pool = UserAgentPool(FilterCriteria.from_options(min_times_seen=1), source)

        await pool.initialize()
        with pytest.raises(EmptyPoolError):
            await pool.initialize()

        assert [r.user_agent for r in pool.records] == ["first"]


class TestSample:
    """Tests for sampling."""

    def test_sample_before_initialize(self, mixed_source):
        pool = UserAgentPool(FilterCriteria.from_options(), mixed_source)

        with pytest.raises(NotInitializedError):
            pool.sample()

    def test_records_before_initialize(self, mixed_source):
        pool = UserAgentPool(FilterCriteria.from_options(), mixed_source)

        with pytest.raises(NotInitializedError):
            pool.records

    @pytest.mark.asyncio
    async def test_sample_is_member_of_pool(self, mixed_source, chrome_windows_criteria, rng):
        pool = UserAgentPool(chrome_windows_criteria, mixed_source, rng=rng)
        await pool.initialize()

        for _ in range(200):
            assert pool.sample() in pool.records

    @pytest.mark.asyncio
    async def test_seeded_sampling_is_reproducible(self, mixed_corpus):
        picks = []
        for _ in range(2):
            pool = UserAgentPool(
                FilterCriteria.from_options(),
                StaticCorpusSource(mixed_corpus),
                rng=random.Random(99),
            )
            await pool.initialize()
            picks.append([pool.sample().user_agent for _ in range(20)])

        assert picks[0] == picks[1]

    @pytest.mark.asyncio
    async def test_usage_tracking(self, record_factory):
        source = StaticCorpusSource([record_factory("only")])
        pool = UserAgentPool(FilterCriteria.from_options(), source)
        await pool.initialize()

        assert not pool.was_used("only")
        pool.sample()
        pool.sample()
        pool.sample()

        assert pool.was_used("only")
        assert pool.used_user_agents == frozenset({"only"})
        assert pool.duplicate_count == 2
        assert pool.get_stats() == {
            "size": 1,
            "samples": 3,
            "unique_used": 1,
            "duplicates": 2,
        }

    @pytest.mark.asyncio
    async def test_concurrent_sampling(self, mixed_source):
        pool = UserAgentPool(FilterCriteria.from_options(), mixed_source)
        await pool.initialize()

        def worker():
            for _ in range(250):
                pool.sample()

        threads = [threading.Thread(target=worker) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        stats = pool.get_stats()
        assert stats["samples"] == 1000
        assert stats["unique_used"] + stats["duplicates"] == 1000
        assert pool.used_user_agents <= {r.user_agent for r in pool.records}
