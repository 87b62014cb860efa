"""Rendering backend client."""

import httpx

from core.exceptions import (
    BackendConnectionError,
    BackendError,
    BackendTimeoutError,
)
from core.request_types import BackendRequest, FetchFailure, FetchResult, FetchSuccess


class BackendClient:
    """Fetch prerendered HTML from the rendering backend."""

    def __init__(self, client: httpx.AsyncClient, timeout: float = 30.0) -> None:
        self._client = client
        self._timeout = timeout

    async def fetch(self, request: BackendRequest) -> FetchResult:
        """Fetch a page, turning any transport failure into a FetchFailure."""
        try:
            return FetchSuccess(await self.send(request))
        except BackendError as e:
            return FetchFailure(str(e), status_code=e.status_code)

    async def send(self, request: BackendRequest) -> str:
        """GET the backend URL and return the body; raise BackendError on failure."""
        try:
            response = await self._client.get(
                request.url,
                headers=request.headers,
                timeout=self._timeout,
            )
        except httpx.TimeoutException as e:
            raise BackendTimeoutError(f"Backend timeout: {e}") from e
        except httpx.RequestError as e:
            raise BackendConnectionError(f"Backend connection error: {e}") from e

        if not response.is_success:
            raise BackendError(
                f"Backend returned {response.status_code}",
                status_code=response.status_code,
            )
        return response.text
