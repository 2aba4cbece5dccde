"""Browser-like HTTP header generation paired with real user agents."""

import random
from collections.abc import Iterable, Iterator, Mapping
from enum import Enum

from loguru import logger

from browser_headers.antibot.user_agents import UserAgentPool
from browser_headers.core.corpus_source import CorpusSource, HttpCorpusSource
from browser_headers.exceptions import NotInitializedError
from browser_headers.models.user_agent import FilterCriteria, UserAgentRecord
from config.settings import settings

HeaderValue = str | int | None

# Order in which the headers are emitted
CANONICAL_ORDER = (
    "User-Agent",
    "Accept",
    "Accept-Language",
    "Accept-Encoding",
    "Referer",
    "Upgrade-Insecure-Requests",
    "Pragma",
    "Cache-Control",
    "Sec-Fetch-Dest",
    "Sec-Fetch-Mode",
    "Sec-Fetch-Site",
    "Sec-Fetch-User",
    "Sec-Gpc",
)

# Derived while merging but never emitted; exposed through HeaderSet.derived
DERIVED_HEADERS = ("DNT", "TE")


class BrowserFamily(str, Enum):
    """Coarse browser classification that selects the header template."""

    CHROME = "chrome"
    FIREFOX = "firefox"
    OTHER = "other"

    @classmethod
    def of(cls, software_name_code: str) -> "BrowserFamily":
        if "chrome" in software_name_code:
            return cls.CHROME
        if "firefox" in software_name_code:
            return cls.FIREFOX
        return cls.OTHER


class HeaderSet(Mapping[str, HeaderValue]):
    """
    Immutable, ordered header mapping for a single request.

    Every canonical header is present; headers without a value map to None.
    Values derived during the merge but outside the canonical order (DNT, TE)
    are kept out of the mapping and available through `derived`.
    """

    def __init__(
        self,
        entries: Iterable[tuple[str, HeaderValue]],
        derived: Mapping[str, HeaderValue] | None = None,
    ):
        self._entries = tuple(entries)
        self._index = dict(self._entries)
        self._derived = dict(derived or {})

    def __getitem__(self, key: str) -> HeaderValue:
        return self._index[key]

    def __iter__(self) -> Iterator[str]:
        return (name for name, _ in self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"HeaderSet({dict(self._entries)!r})"

    @property
    def derived(self) -> dict[str, HeaderValue]:
        """Merged values that are not emitted, e.g. {"DNT": 1, "TE": None}."""
        return dict(self._derived)

    def to_request_headers(self) -> dict[str, str]:
        """Headers ready for an HTTP client: unset entries dropped, values as strings."""
        return {name: str(value) for name, value in self._entries if value is not None}


class HeaderSetBuilder:
    """
    Collects header fragments and builds a HeaderSet in canonical order.

    Fragments added later take precedence over earlier ones.
    """

    def __init__(self):
        self._slots: dict[str, HeaderValue] = dict.fromkeys(CANONICAL_ORDER + DERIVED_HEADERS)

    def add(self, fragment: Mapping[str, HeaderValue]) -> "HeaderSetBuilder":
        for name, value in fragment.items():
            if name not in self._slots:
                raise KeyError(f"Unknown header: {name}")
            self._slots[name] = value
        return self

    def build(self) -> HeaderSet:
        return HeaderSet(
            ((name, self._slots[name]) for name in CANONICAL_ORDER),
            derived={name: self._slots[name] for name in DERIVED_HEADERS},
        )


class HeaderComposer:
    """Generates browser-like headers around a randomly sampled real user agent."""

    ACCEPT_ENCODING = "gzip, deflate, br"
    ACCEPT_LANGUAGE = "en-US;q=0.5,en;q=0.3"

    ACCEPT_CHROME = (
        "text/html,application/xhtml+xml,application/xml;q=0.9,"
        "image/webp,image/apng,*/*;q=0.8"
    )
    ACCEPT_FIREFOX = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"
    # Firefox 65 alone advertised webp in its document Accept header
    ACCEPT_FIREFOX_65 = "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8"

    REFERERS = [
        "https://google.com",
        "http://www.bing.com/",
        "https://yandex.com/",
        "https://duckduckgo.com/",
        "https://www.yahoo.com/",
        "https://www.baidu.com/",
        "https://contextualwebsearch.com/",
        "https://www.yippy.com/",
    ]

    DNT_VALUES = [1, 0]

    def __init__(
        self,
        operating_systems: Iterable[str] | None = None,
        browsers: Iterable[str] | None = None,
        min_times_seen: int | None = None,
        source: CorpusSource | None = None,
        user_agents_url: str | None = None,
        rng: random.Random | None = None,
        pool: UserAgentPool | None = None,
    ):
        """
        Initialize the composer.

        Args:
            operating_systems: Accepted OS code substrings
            browsers: Accepted browser code substrings
            min_times_seen: Minimum number of times a user agent was observed
            source: Corpus source (default: HTTP fetch of user_agents_url)
            user_agents_url: Corpus location for the default HTTP source
            rng: Random generator shared with the pool
            pool: Prebuilt pool; filter and source options are ignored when given

        Raises:
            ConfigurationError: If the filter options are invalid
        """
        self.rng = rng or random.Random()
        self.log = logger.bind(name="HeaderComposer")

        if pool is None:
            criteria = FilterCriteria.from_options(
                operating_systems=settings.operating_systems if operating_systems is None else operating_systems,
                browsers=settings.browsers if browsers is None else browsers,
                min_times_seen=settings.min_times_seen if min_times_seen is None else min_times_seen,
            )
            if source is None:
                source = HttpCorpusSource(
                    user_agents_url or settings.user_agents_url,
                    timeout=settings.fetch_timeout,
                )
            pool = UserAgentPool(criteria, source, rng=self.rng)

        self.pool = pool
        self._initialized = False

    async def initialize(self) -> None:
        """
        Load the user agent pool. Must be called before generate().

        Raises:
            SourceFetchError: If the corpus could not be fetched
            EmptyPoolError: If no user agent matches the filter criteria
        """
        await self.pool.initialize()
        self._initialized = True

    @property
    def is_initialized(self) -> bool:
        return self._initialized

    def generate(self) -> HeaderSet:
        """
        Create a randomized header set for one request.

        Returns:
            The 13 canonical headers in order; DNT and TE via `derived`

        Raises:
            NotInitializedError: If initialize() has not completed
        """
        if not self.is_initialized:
            raise NotInitializedError("Browser headers generator must be initialized first.")

        record = self.pool.sample()

        universal = self._universal_headers()
        universal["User-Agent"] = record.user_agent

        return (
            HeaderSetBuilder()
            .add(universal)
            .add(self._browser_headers(record))
            .add(self._random_headers())
            .build()
        )

    def get_stats(self) -> dict[str, int]:
        return self.pool.get_stats()

    def _universal_headers(self) -> dict[str, HeaderValue]:
        return {
            "Accept-Encoding": self.ACCEPT_ENCODING,
            "Upgrade-Insecure-Requests": 1,
            "Pragma": "no-cache",
            "Cache-Control": "no-cache",
        }

    def _browser_headers(self, record: UserAgentRecord) -> dict[str, HeaderValue]:
        family = BrowserFamily.of(record.software_name_code)

        if family is BrowserFamily.CHROME:
            return self._chrome_headers()
        if family is BrowserFamily.FIREFOX:
            return self._firefox_headers(record.software_version)

        self.log.debug(f"No header template for {record.software_name_code!r}")
        return {}

    def _chrome_headers(self) -> dict[str, HeaderValue]:
        return {
            "Accept": self.ACCEPT_CHROME,
            "Sec-Fetch-Dest": "document",
            "Sec-Fetch-Mode": "navigate",
            "Sec-Fetch-Site": "none",
            "Sec-Fetch-User": "?1",
            "Sec-Gpc": 1,
        }

    def _firefox_headers(self, software_version: float | None) -> dict[str, HeaderValue]:
        accept = self.ACCEPT_FIREFOX_65 if software_version == 65 else self.ACCEPT_FIREFOX
        return {
            "Accept": accept,
            "TE": "trailers",
        }

    def _random_headers(self) -> dict[str, HeaderValue]:
        return {
            "DNT": self.rng.choice(self.DNT_VALUES),
            "Accept-Language": self.ACCEPT_LANGUAGE,
            "Referer": self.rng.choice(self.REFERERS),
        }
