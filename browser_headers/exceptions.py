"""Error types raised by the header generator."""


class BrowserHeadersError(Exception):
    """Base class for all header generator errors."""


class ConfigurationError(BrowserHeadersError):
    """Filter criteria or other configuration is unusable."""


class EmptyPoolError(ConfigurationError):
    """Filtering left no eligible user agents."""


class NotInitializedError(BrowserHeadersError):
    """An operation was called before initialize() completed."""


class SourceFetchError(BrowserHeadersError):
    """The user agent corpus could not be fetched or decoded."""
