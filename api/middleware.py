"""Starlette middleware serving prerendered pages to crawlers."""

from collections.abc import Awaitable, Callable

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from core.exceptions import ConfigurationError
from core.request_types import RequestView
from services.prerender_service import PrerenderService


class PrerenderMiddleware(BaseHTTPMiddleware):
    """Return the backend's rendering instead of the app response for crawlers.

    The service is taken from the constructor, or from
    ``app.state.prerender_service`` when the app builds it in its lifespan.
    Without a service in either place, requests fail with ConfigurationError.
    When a request was selected for prerendering but no response could be
    fetched, the app handles it as usual.
    """

    def __init__(self, app: ASGIApp, service: PrerenderService | None = None) -> None:
        super().__init__(app)
        self._service = service

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        service = self._service or getattr(request.app.state, "prerender_service", None)
        if service is None:
            raise ConfigurationError(
                "No prerender service: pass one to the middleware or run the app lifespan"
            )
        outcome = await service.handle(RequestView.from_starlette(request))
        if outcome.handled and outcome.response is not None:
            return outcome.response
        return await call_next(request)
