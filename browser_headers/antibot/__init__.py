"""User agent sampling and header composition."""

from browser_headers.antibot.headers import BrowserFamily, HeaderComposer, HeaderSet, HeaderSetBuilder
from browser_headers.antibot.matching import matches_any
from browser_headers.antibot.user_agents import UserAgentPool

__all__ = [
    "BrowserFamily",
    "HeaderComposer",
    "HeaderSet",
    "HeaderSetBuilder",
    "UserAgentPool",
    "matches_any",
]
