"""Tests for RequestView."""

from starlette.requests import Request

from core.request_types import RequestView


def _starlette_request(path="/", query_string=b"", headers=None, scheme="http", port=80):
    scope = {
        "type": "http",
        "method": "GET",
        "scheme": scheme,
        "server": ("example.com", port),
        "path": path,
        "raw_path": path.encode(),
        "query_string": query_string,
        "headers": [(k.lower().encode(), v.encode()) for k, v in (headers or {}).items()],
    }
    return Request(scope)


class TestRequestView:
    """Tests for building the view from a Starlette request."""

    def test_full_url(self):
        view = RequestView.from_starlette(
            _starlette_request("/a/b", b"x=1", headers={"Host": "example.com"})
        )
        assert view.full_url == "http://example.com/a/b?x=1"

    def test_host_excludes_port(self):
        view = RequestView.from_starlette(
            _starlette_request("/", headers={"Host": "example.com:8080"})
        )
        assert view.host == "example.com"
        assert view.full_url == "http://example.com/"

    def test_blank_query_values_are_kept(self):
        view = RequestView.from_starlette(
            _starlette_request("/foo", b"_escaped_fragment_=", headers={"Host": "x.com"})
        )
        assert view.has_query_param("_escaped_fragment_")
        assert view.query["_escaped_fragment_"] == ""

    def test_headers_are_case_insensitive(self):
        view = RequestView.from_starlette(
            _starlette_request(
                headers={"Host": "x.com", "User-Agent": "Googlebot", "Referer": "http://r/"}
            )
        )
        assert view.user_agent == "Googlebot"
        assert view.referer == "http://r/"
        assert view.header("USER-AGENT") == "Googlebot"

    def test_missing_headers_are_empty(self):
        view = RequestView(scheme="http", host="x.com", request_uri="/")
        assert view.user_agent == ""
        assert view.referer == ""
        assert not view.has_query_param("_escaped_fragment_")
