"""Browser-like request headers paired with real, sampled user agents."""

from browser_headers.antibot import HeaderComposer, HeaderSet, UserAgentPool
from browser_headers.core import HttpCorpusSource, JsonFileCorpusSource, StaticCorpusSource
from browser_headers.exceptions import (
    BrowserHeadersError,
    ConfigurationError,
    EmptyPoolError,
    NotInitializedError,
    SourceFetchError,
)
from browser_headers.models import FilterCriteria, UserAgentRecord

__all__ = [
    "HeaderComposer",
    "HeaderSet",
    "UserAgentPool",
    "FilterCriteria",
    "UserAgentRecord",
    "HttpCorpusSource",
    "JsonFileCorpusSource",
    "StaticCorpusSource",
    "BrowserHeadersError",
    "ConfigurationError",
    "EmptyPoolError",
    "NotInitializedError",
    "SourceFetchError",
]
