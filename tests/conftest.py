"""Pytest configuration and fixtures."""

import random

import pytest
from loguru import logger

from browser_headers.core.corpus_source import StaticCorpusSource
from browser_headers.models.user_agent import FilterCriteria


CHROME_WINDOWS_UA = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/{version}.0.0.0 Safari/537.36"
)
FIREFOX_LINUX_UA = "Mozilla/5.0 (X11; Linux x86_64; rv:{version}.0) Gecko/20100101 Firefox/{version}.0"


def make_record(
    user_agent: str,
    software_name_code: str = "chrome",
    operating_system_code: str = "windows",
    software_version: float | None = 120,
    time_seen: int = 500,
) -> dict:
    """Build a corpus record in wire format."""
    return {
        "userAgent": user_agent,
        "softwareNameCode": software_name_code,
        "operatingSystemCode": operating_system_code,
        "softwareVersion": software_version,
        "timeSeen": time_seen,
    }


@pytest.fixture(autouse=True)
def reset_logger():
    """Keep loguru handlers from leaking between tests."""
    yield
    logger.remove()


@pytest.fixture
def mixed_corpus():
    """6 chrome/windows records seen often, 4 firefox/linux records seen rarely."""
    chrome = [
        make_record(CHROME_WINDOWS_UA.format(version=115 + i), "chrome", "windows", 115 + i, 500)
        for i in range(6)
    ]
    firefox = [
        make_record(FIREFOX_LINUX_UA.format(version=100 + i), "firefox", "linux", 100 + i, 100)
        for i in range(4)
    ]
    return chrome + firefox


@pytest.fixture
def firefox_corpus():
    """Firefox records straddling the version 65 Accept change."""
    return [
        make_record(FIREFOX_LINUX_UA.format(version=v), "firefox", "linux", v, 1000)
        for v in (64, 65, 66)
    ]


@pytest.fixture
def mixed_source(mixed_corpus):
    return StaticCorpusSource(mixed_corpus)


@pytest.fixture
def chrome_windows_criteria():
    return FilterCriteria.from_options(
        operating_systems=["windows"],
        browsers=["chrome"],
        min_times_seen=300,
    )


@pytest.fixture
def rng():
    """Seeded random generator for reproducible sampling."""
    return random.Random(1234)


@pytest.fixture
def record_factory():
    """Factory for wire-format corpus records."""
    return make_record
