"""Crawler detection from the User-Agent header."""

from collections.abc import Iterable


def is_crawler(user_agent: str | None, patterns: Iterable[str]) -> bool:
    """Check if the user agent contains any crawler pattern, ignoring case."""
    user_agent = (user_agent or "").lower()
    return any(pattern.lower() in user_agent for pattern in patterns)
