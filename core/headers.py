"""Header construction for backend and origin requests."""

from collections.abc import Iterable

from core.request_types import RequestView

HOP_BY_HOP_HEADERS = frozenset(
    {
        "connection",
        "keep-alive",
        "proxy-authenticate",
        "proxy-authorization",
        "te",
        "trailers",
        "transfer-encoding",
        "upgrade",
        "host",
        "content-length",
    }
)


class HeaderBuilder:
    """Build outgoing headers for the rendering backend and the origin."""

    def build_backend_headers(self, request: RequestView, token: str = "") -> dict[str, str]:
        """Pass the crawler's user agent through and add the backend token."""
        headers = {"User-Agent": request.user_agent}
        if token:
            headers["X-Prerender-Token"] = token
        return headers

    def build_origin_headers(
        self, headers: Iterable[tuple[str, str]]
    ) -> list[tuple[str, str]]:
        """Drop hop-by-hop headers, keeping repeated ones such as Set-Cookie."""
        return [
            (key, str(value))
            for key, value in headers
            if key.lower() not in HOP_BY_HOP_HEADERS
        ]
