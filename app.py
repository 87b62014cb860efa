"""FastAPI application factory."""

from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request

from api.handlers import handle_passthrough
from api.middleware import PrerenderMiddleware
from core.config import Config
from core.decider import PrerenderDecider
from core.headers import HeaderBuilder
from core.hooks import PrerenderHooks
from core.protocols import PrerenderLogger
from services.backend import BackendClient
from services.prerender_service import PrerenderService
from services.upstream import OriginClient

PASSTHROUGH_METHODS = ["GET", "HEAD", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"]


def install_prerender(app: FastAPI, service: PrerenderService) -> None:
    """Install the prerender middleware on an existing application."""
    app.add_middleware(PrerenderMiddleware, service=service)


def create_app(
    config: Config,
    logger: PrerenderLogger,
    hooks: PrerenderHooks | None = None,
    *,
    backend_transport: httpx.AsyncBaseTransport | None = None,
    origin_transport: httpx.AsyncBaseTransport | None = None,
) -> FastAPI:
    """Create the prerender gateway in front of the origin application."""
    # Built once so config errors surface before the server starts
    decider = PrerenderDecider(config.prerender)
    header_builder = HeaderBuilder()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        limits = httpx.Limits(max_connections=100, max_keepalive_connections=20)
        backend_http = httpx.AsyncClient(
            timeout=config.backend.timeout,
            limits=limits,
            transport=backend_transport,
        )
        origin_http = httpx.AsyncClient(
            base_url=config.origin.base_url,
            timeout=config.origin.timeout,
            limits=limits,
            transport=origin_transport,
        )
        app.state.origin_client = OriginClient(
            origin_http, header_builder, timeout=config.origin.timeout
        )
        app.state.prerender_service = PrerenderService(
            config=config,
            logger=logger,
            decider=decider,
            backend=BackendClient(backend_http, timeout=config.backend.timeout),
            hooks=hooks,
            header_builder=header_builder,
        )
        try:
            yield
        finally:
            await backend_http.aclose()
            await origin_http.aclose()

    app = FastAPI(
        title="Prerender Proxy",
        version="0.1.0",
        lifespan=lifespan,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.add_middleware(PrerenderMiddleware)

    @app.api_route("/{path:path}", methods=PASSTHROUGH_METHODS)
    async def proxy_origin(request: Request):
        return await handle_passthrough(request, logger)

    return app
