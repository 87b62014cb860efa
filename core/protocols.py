"""Shared protocol definitions."""

from typing import Protocol

from core.request_types import BackendRequest, FetchResult


class PrerenderLogger(Protocol):
    """Protocol for prerender request logging (Dashboard)."""

    def log_prerender(
        self,
        url: str,
        user_agent: str,
        *,
        source: str,
        status: int,
    ) -> None: ...
    def log_passthrough(self, url: str, reason: str) -> None: ...
    def log_error(self, route: str, status: int, message: str) -> None: ...


class BackendFetcher(Protocol):
    """Protocol for the rendering backend client."""

    async def fetch(self, request: BackendRequest) -> FetchResult: ...
