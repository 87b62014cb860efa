"""Shared fixtures for prerender proxy tests."""

import pytest

from core.config import Config, PrerenderSettings
from core.request_types import FetchFailure, FetchSuccess, RequestView

GOOGLEBOT_UA = "Mozilla/5.0 (compatible; Googlebot/2.1; +http://www.google.com/bot.html)"
BROWSER_UA = "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 Chrome/120.0 Safari/537.36"


class RecordingLogger:
    """PrerenderLogger that keeps every call for assertions."""

    def __init__(self):
        self.prerendered = []
        self.passthrough = []
        self.errors = []

    def log_prerender(self, url, user_agent, *, source, status):
        self.prerendered.append((url, user_agent, source, status))

    def log_passthrough(self, url, reason):
        self.passthrough.append((url, reason))

    def log_error(self, route, status, message):
        self.errors.append((route, status, message))


class FakeBackend:
    """BackendFetcher returning a fixed body, or failing."""

    def __init__(self, body="<html>X</html>", failure=None):
        self.body = body
        self.failure = failure
        self.requests = []

    async def fetch(self, request):
        self.requests.append(request)
        if self.failure is not None:
            return FetchFailure(self.failure, status_code=503)
        return FetchSuccess(self.body)


def make_request(
    request_uri="/",
    *,
    user_agent=None,
    referer=None,
    scheme="http",
    host="x.com",
    query=None,
):
    """Build a RequestView, deriving the query map from the URI when not given."""
    headers = {}
    if user_agent is not None:
        headers["user-agent"] = user_agent
    if referer is not None:
        headers["referer"] = referer
    if query is None:
        query = {}
        if "?" in request_uri:
            for part in request_uri.split("?", 1)[1].split("&"):
                key, _, value = part.partition("=")
                query[key] = value
    return RequestView(
        scheme=scheme,
        host=host,
        request_uri=request_uri,
        headers=headers,
        query=query,
    )


def make_config(**prerender) -> Config:
    settings = {
        "crawler_user_agents": ["googlebot"],
        "ignored_extensions": [".pdf"],
        "whitelisted_urls": [],
        "blacklisted_urls": [],
    }
    settings.update(prerender)
    return Config(
        backend={"base_url": "http://backend.test/"},
        prerender=PrerenderSettings(**settings),
    )


@pytest.fixture
def logger():
    return RecordingLogger()


@pytest.fixture
def config():
    return make_config(blacklisted_urls=["/admin"])
