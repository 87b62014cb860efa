"""Whitelist and blacklist matching for prerender candidates."""

import re
from collections.abc import Iterable

from core.exceptions import ConfigurationError

PatternList = list[re.Pattern[str]]


def compile_patterns(patterns: Iterable[str]) -> PatternList:
    """Compile URL patterns as case-insensitive regular expressions."""
    compiled = []
    for pattern in patterns:
        try:
            compiled.append(re.compile(pattern, re.IGNORECASE))
        except re.error as e:
            raise ConfigurationError(f"Invalid URL pattern {pattern!r}: {e}") from e
    return compiled


def is_whitelisted(url: str, patterns: Iterable[re.Pattern[str] | str]) -> bool:
    """True if any pattern is found anywhere in the URL."""
    return any(_search(pattern, url) for pattern in patterns)


def is_blacklisted(
    url: str,
    referer: str | None,
    patterns: Iterable[re.Pattern[str] | str],
) -> bool:
    """True if any pattern is found in the URL or in the referer."""
    referer = referer or ""
    return any(
        _search(pattern, url) or _search(pattern, referer) for pattern in patterns
    )


def _search(pattern: re.Pattern[str] | str, text: str) -> bool:
    if isinstance(pattern, str):
        return re.search(pattern, text, re.IGNORECASE) is not None
    return pattern.search(text) is not None
