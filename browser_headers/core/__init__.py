"""Corpus sources and caller-side helpers."""

from browser_headers.core.corpus_source import (
    CorpusSource,
    HttpCorpusSource,
    JsonFileCorpusSource,
    StaticCorpusSource,
)
from browser_headers.core.retry_handler import RetryHandler

__all__ = [
    "CorpusSource",
    "HttpCorpusSource",
    "JsonFileCorpusSource",
    "StaticCorpusSource",
    "RetryHandler",
]
