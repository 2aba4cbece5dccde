"""Data models for the header generator."""

from browser_headers.models.user_agent import FilterCriteria, UserAgentRecord

__all__ = [
    "FilterCriteria",
    "UserAgentRecord",
]
