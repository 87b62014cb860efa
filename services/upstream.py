"""HTTP proxying to the origin application."""

import httpx
from fastapi import Request, Response
from fastapi.responses import StreamingResponse
from starlette.background import BackgroundTask

from core.headers import HeaderBuilder
from core.protocols import PrerenderLogger


class OriginClient:
    """Forward requests that are not prerendered to the origin application."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        header_builder: HeaderBuilder,
        timeout: float = 60.0,
    ) -> None:
        self._client = client
        self._headers = header_builder
        self._timeout = timeout

    async def forward(
        self,
        request: Request,
        logger: PrerenderLogger,
    ) -> Response | StreamingResponse:
        """Stream the origin response back to the client."""
        path = request.url.path
        if request.url.query:
            path = f"{path}?{request.url.query}"

        try:
            req = self._client.build_request(
                request.method,
                path,
                headers=self._headers.build_origin_headers(request.headers.items()),
                content=await request.body(),
                timeout=self._timeout,
            )
            response = await self._client.send(req, stream=True)
        except httpx.TimeoutException:
            logger.log_error("origin", 504, "Origin timeout")
            return Response(
                content='{"error": "Origin timeout"}',
                status_code=504,
                media_type="application/json",
            )
        except httpx.RequestError as e:
            logger.log_error("origin", 502, str(e))
            return Response(
                content=f'{{"error": "Origin connection error: {e}"}}',
                status_code=502,
                media_type="application/json",
            )

        streaming = StreamingResponse(
            response.aiter_raw(),
            status_code=response.status_code,
            background=BackgroundTask(self._cleanup_streaming, response),
        )
        for key, value in self._headers.build_origin_headers(response.headers.multi_items()):
            streaming.headers.append(key, value)
        return streaming

    async def _cleanup_streaming(self, response: httpx.Response) -> None:
        """Clean up streaming resources."""
        await response.aclose()
