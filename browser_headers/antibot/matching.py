"""Token matching used to filter the user agent corpus."""

from collections.abc import Iterable


def matches_any(tokens: Iterable[str], candidate: str) -> bool:
    """
    Check whether any token is contained in the candidate string.

    Matching is a case-sensitive substring test. An empty token collection
    matches nothing.

    Args:
        tokens: Accepted substrings (e.g. {"windows", "mac"})
        candidate: Code field of a corpus record

    Returns:
        True if at least one token occurs in the candidate
    """
    return any(token in candidate for token in tokens)
