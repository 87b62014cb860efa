"""Payloads passed to prerender hooks."""

from dataclasses import dataclass

from starlette.responses import Response

from core.request_types import RequestView


@dataclass(frozen=True)
class RawBody:
    """HTML supplied by a hook, served with status 200."""

    body: str


@dataclass(frozen=True)
class FullResponse:
    """Response object supplied by a hook, served as is."""

    response: Response


HookPayload = RawBody | FullResponse


class BeforeFetchSignal:
    """Emitted before the backend is called.

    A hook may call ``set_response`` with a string or a ``Response`` to
    replace the backend fetch. When several hooks do so, the last one wins.
    """

    def __init__(self, request: RequestView):
        self.request = request
        self.payload: HookPayload | None = None

    def set_response(self, response: str | Response) -> None:
        if isinstance(response, Response):
            self.payload = FullResponse(response)
        elif isinstance(response, str):
            self.payload = RawBody(response)
        else:
            raise TypeError(
                f"Hook response must be str or Response, got {type(response).__name__}"
            )

    def has_response(self) -> bool:
        return self.payload is not None


@dataclass(frozen=True)
class AfterFetchSignal:
    """Emitted once a prerendered response exists."""

    request: RequestView
    response: Response
