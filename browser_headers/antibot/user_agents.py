"""Pool of real user agents filtered from an observed corpus."""

import random
import threading
from typing import Any

from loguru import logger
from pydantic import ValidationError

from browser_headers.antibot.matching import matches_any
from browser_headers.core.corpus_source import CorpusSource
from browser_headers.exceptions import EmptyPoolError, NotInitializedError
from browser_headers.models.user_agent import FilterCriteria, UserAgentRecord


class UserAgentPool:
    """
    Holds the filtered user agent corpus and samples from it.

    The pool is unusable until initialize() has fetched and filtered the
    corpus. Sampling is uniform and with replacement; repeated picks are
    tracked for diagnostics only.
    """

    def __init__(
        self,
        criteria: FilterCriteria,
        source: CorpusSource,
        rng: random.Random | None = None,
    ):
        """
        Initialize the pool.

        Args:
            criteria: Which corpus records are eligible
            source: Supplier of the raw corpus
            rng: Random generator (pass a seeded one for reproducible picks)
        """
        self.criteria = criteria
        self.source = source
        self.rng = rng or random.Random()
        self.log = logger.bind(name="UserAgentPool")

        self._records: tuple[UserAgentRecord, ...] | None = None
        self._used: set[str] = set()
        self._lock = threading.Lock()
        self._samples = 0
        self._duplicates = 0

    async def initialize(self) -> None:
        """
        Fetch the corpus and keep the records matching the criteria.

        Calling again re-fetches and replaces the filtered corpus.

        Raises:
            SourceFetchError: If the corpus could not be fetched
            EmptyPoolError: If no record matches the criteria
        """
        self.log.info(f"Fetching user agents from {_describe(self.source)}")

        raw = await self.source.fetch()
        records = self._parse(raw)
        matched = tuple(r for r in records if self._is_match(r))

        if not matched:
            raise EmptyPoolError(
                f"No user agents match {sorted(self.criteria.operating_systems)} / "
                f"{sorted(self.criteria.browsers)} with timeSeen >= {self.criteria.min_times_seen} "
                f"({len(records)} records fetched)"
            )

        self._records = matched
        self.log.info(f"Fetched: {len(matched)} user agents ({len(records)} in corpus)")

    def _parse(self, raw: list[Any]) -> list[UserAgentRecord]:
        records = []
        skipped = 0
        for item in raw:
            try:
                records.append(UserAgentRecord.model_validate(item))
            except ValidationError:
                skipped += 1

        if skipped:
            self.log.warning(f"Skipped {skipped} malformed user agent records")
        return records

    def _is_match(self, record: UserAgentRecord) -> bool:
        return (
            matches_any(self.criteria.operating_systems, record.operating_system_code)
            and matches_any(self.criteria.browsers, record.software_name_code)
            and record.time_seen >= self.criteria.min_times_seen
        )

    def sample(self) -> UserAgentRecord:
        """
        Pick a random user agent record.

        Returns:
            A record from the filtered corpus

        Raises:
            NotInitializedError: If initialize() has not completed
        """
        if self._records is None:
            raise NotInitializedError("User agent pool must be initialized first.")

        record = self.rng.choice(self._records)

        with self._lock:
            self._samples += 1
            repeated = record.user_agent in self._used
            if repeated:
                self._duplicates += 1
            else:
                self._used.add(record.user_agent)

        if repeated:
            self.log.warning(f"UserAgent already picked: {record.user_agent}")

        return record

    @property
    def is_initialized(self) -> bool:
        return self._records is not None

    @property
    def records(self) -> tuple[UserAgentRecord, ...]:
        """The filtered corpus."""
        if self._records is None:
            raise NotInitializedError("User agent pool must be initialized first.")
        return self._records

    @property
    def size(self) -> int:
        return len(self._records) if self._records is not None else 0

    @property
    def used_user_agents(self) -> frozenset[str]:
        """Snapshot of every user agent string sampled so far."""
        with self._lock:
            return frozenset(self._used)

    @property
    def duplicate_count(self) -> int:
        return self._duplicates

    def was_used(self, user_agent: str) -> bool:
        """Check whether a user agent string has been sampled before."""
        with self._lock:
            return user_agent in self._used

    def get_stats(self) -> dict[str, int]:
        """Get pool and sampling statistics."""
        with self._lock:
            return {
                "size": self.size,
                "samples": self._samples,
                "unique_used": len(self._used),
                "duplicates": self._duplicates,
            }


def _describe(source: CorpusSource) -> str:
    for attr in ("url", "path"):
        value = getattr(source, attr, None)
        if value is not None:
            return str(value)
    return type(source).__name__
