"""Prerender orchestration for crawler requests."""

from dataclasses import dataclass

from fastapi import Response

from core.config import Config
from core.decider import PrerenderDecider
from core.headers import HeaderBuilder
from core.hooks import PrerenderHooks
from core.protocols import BackendFetcher, PrerenderLogger
from core.request_types import BackendRequest, FetchFailure, RequestView
from core.signals import AfterFetchSignal, BeforeFetchSignal, FullResponse, RawBody


@dataclass(frozen=True)
class PrerenderOutcome:
    """Result of handling one request.

    ``handled`` is True once the request was selected for prerendering, even
    when no response could be obtained.
    """

    handled: bool
    response: Response | None = None


class PrerenderService:
    """Decide, fetch and substitute prerendered responses."""

    def __init__(
        self,
        config: Config,
        logger: PrerenderLogger,
        decider: PrerenderDecider,
        backend: BackendFetcher,
        hooks: PrerenderHooks | None = None,
        header_builder: HeaderBuilder | None = None,
    ) -> None:
        self._backend_url = config.backend.base_url
        self._token = config.backend.token
        self._logger = logger
        self._decider = decider
        self._backend = backend
        self._hooks = hooks or PrerenderHooks()
        self._headers = header_builder or HeaderBuilder()

    def backend_url_for(self, request: RequestView) -> str:
        """Backend base URL followed by the full original URL, scheme included."""
        return self._backend_url.rstrip("/") + "/" + request.full_url

    async def handle(self, request: RequestView) -> PrerenderOutcome:
        decision = self._decider.decide(request)
        if not decision.prerender:
            self._logger.log_passthrough(decision.url or request.full_url, decision.reason)
            return PrerenderOutcome(handled=False)

        before = await self._hooks.dispatch_before(BeforeFetchSignal(request))
        if isinstance(before.payload, RawBody):
            response = _html_response(before.payload.body)
            self._log(request, response, source="hook")
            return PrerenderOutcome(handled=True, response=response)
        if isinstance(before.payload, FullResponse):
            response = before.payload.response
            self._log(request, response, source="hook")
            return PrerenderOutcome(handled=True, response=response)

        backend_request = BackendRequest(
            url=self.backend_url_for(request),
            headers=self._headers.build_backend_headers(request, self._token),
        )
        result = await self._backend.fetch(backend_request)

        response = None
        if isinstance(result, FetchFailure):
            # Best effort: a failed prerender leaves the request without a response
            self._logger.log_error(
                "backend",
                result.status_code or 502,
                f"{request.full_url}: {result.reason}",
            )
        else:
            response = _html_response(result.body)
            self._log(request, response, source="backend")

        if response is not None:
            await self._hooks.dispatch_after(AfterFetchSignal(request, response))

        return PrerenderOutcome(handled=True, response=response)

    def _log(self, request: RequestView, response: Response, *, source: str) -> None:
        self._logger.log_prerender(
            request.full_url,
            request.user_agent,
            source=source,
            status=response.status_code,
        )


def _html_response(body: str) -> Response:
    return Response(content=body, status_code=200, media_type="text/html")
