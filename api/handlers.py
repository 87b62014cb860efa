"""FastAPI route handlers."""

from fastapi import Request, Response
from fastapi.responses import StreamingResponse

from core.protocols import PrerenderLogger


async def handle_passthrough(
    request: Request,
    logger: PrerenderLogger,
) -> Response | StreamingResponse:
    """Forward a request that was not prerendered to the origin."""
    origin = request.app.state.origin_client
    return await origin.forward(request, logger)
