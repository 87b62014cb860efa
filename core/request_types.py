"""Shared request data types."""

from dataclasses import dataclass, field
from urllib.parse import parse_qsl

from starlette.requests import Request


@dataclass(frozen=True)
class RequestView:
    """Read-only view of an inbound request.

    Header names are stored lower-cased. ``host`` excludes the port, and
    ``request_uri`` is the raw path plus query string as sent by the client.
    """

    scheme: str
    host: str
    request_uri: str
    method: str = "GET"
    headers: dict[str, str] = field(default_factory=dict)
    query: dict[str, str] = field(default_factory=dict)

    @classmethod
    def from_starlette(cls, request: Request) -> "RequestView":
        raw_path = request.scope.get("raw_path")
        path = raw_path.decode("latin-1").split("?", 1)[0] if raw_path else request.url.path
        query_string = request.url.query
        request_uri = f"{path}?{query_string}" if query_string else path
        return cls(
            scheme=request.url.scheme,
            host=request.url.hostname or "",
            request_uri=request_uri,
            method=request.method,
            headers={key.lower(): value for key, value in request.headers.items()},
            query=dict(parse_qsl(query_string, keep_blank_values=True)),
        )

    @property
    def full_url(self) -> str:
        return f"{self.scheme}://{self.host}{self.request_uri}"

    @property
    def user_agent(self) -> str:
        return self.header("user-agent")

    @property
    def referer(self) -> str:
        return self.header("referer")

    def header(self, name: str) -> str:
        """Header value, or an empty string when absent."""
        return self.headers.get(name.lower(), "")

    def has_query_param(self, name: str) -> bool:
        return name in self.query


@dataclass(frozen=True)
class BackendRequest:
    """Prepared data for a backend fetch."""

    url: str
    headers: dict[str, str]


@dataclass(frozen=True)
class FetchSuccess:
    body: str


@dataclass(frozen=True)
class FetchFailure:
    reason: str
    status_code: int | None = None


FetchResult = FetchSuccess | FetchFailure
