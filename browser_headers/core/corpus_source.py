"""Sources for the raw user agent corpus."""

import json
from pathlib import Path
from typing import Any, Protocol

import aiofiles
import httpx
from loguru import logger

from browser_headers.exceptions import SourceFetchError


class CorpusSource(Protocol):
    """Anything that can supply the raw corpus as a list of record dicts."""

    async def fetch(self) -> list[dict[str, Any]]:
        ...


def _ensure_list(data: Any, origin: str) -> list[dict[str, Any]]:
    if not isinstance(data, list):
        raise SourceFetchError(
            f"Expected a JSON array of user agents from {origin}, got {type(data).__name__}"
        )
    return data


class HttpCorpusSource:
    """Fetches the corpus with a single HTTP GET. No retries."""

    def __init__(
        self,
        url: str,
        timeout: float | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        """
        Initialize the source.

        Args:
            url: Location of the JSON corpus
            timeout: Transport timeout in seconds (None waits indefinitely)
            client: Optional shared client; it is not closed by the source
        """
        self.url = url
        self.timeout = timeout
        self._client = client

    async def fetch(self) -> list[dict[str, Any]]:
        """Download and decode the corpus."""
        logger.debug(f"Fetching: {self.url}")
        try:
            if self._client is not None:
                response = await self._client.get(self.url)
            else:
                async with httpx.AsyncClient(
                    timeout=httpx.Timeout(self.timeout),
                    follow_redirects=True,
                ) as client:
                    response = await client.get(self.url)
            response.raise_for_status()
            data = response.json()
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise SourceFetchError(f"Failed to fetch user agents from {self.url}: {e}") from e
        except ValueError as e:
            raise SourceFetchError(f"Invalid JSON from {self.url}: {e}") from e

        return _ensure_list(data, self.url)


class JsonFileCorpusSource:
    """Reads the corpus from a local JSON file."""

    def __init__(self, path: str | Path):
        self.path = Path(path)

    async def fetch(self) -> list[dict[str, Any]]:
        try:
            async with aiofiles.open(self.path, "r", encoding="utf-8") as f:
                content = await f.read()
            data = json.loads(content)
        except OSError as e:
            raise SourceFetchError(f"Failed to read user agents from {self.path}: {e}") from e
        except ValueError as e:
            raise SourceFetchError(f"Invalid JSON in {self.path}: {e}") from e

        return _ensure_list(data, str(self.path))


class StaticCorpusSource:
    """In-memory corpus, mainly for tests and embedding."""

    def __init__(self, records: list[dict[str, Any]]):
        self._records = list(records)

    async def fetch(self) -> list[dict[str, Any]]:
        return list(self._records)
