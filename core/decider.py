"""Prerender decision logic - crawler vs normal traffic."""

from dataclasses import dataclass

from core.config import PrerenderSettings
from core.crawler import is_crawler
from core.request_types import RequestView
from core.url_filter import compile_patterns, is_blacklisted, is_whitelisted

ESCAPED_FRAGMENT = "_escaped_fragment_"


@dataclass(frozen=True)
class PrerenderDecision:
    """Prerender decision for a request."""

    prerender: bool
    reason: str
    url: str = ""


class PrerenderDecider:
    """Decide whether a request should be served from the rendering backend."""

    def __init__(self, settings: PrerenderSettings):
        self.crawler_user_agents = list(settings.crawler_user_agents)
        self.ignored_extensions = list(settings.ignored_extensions)
        self.whitelist = compile_patterns(settings.whitelisted_urls)
        self.blacklist = compile_patterns(settings.blacklisted_urls)

    def should_prerender(self, request: RequestView) -> bool:
        return self.decide(request).prerender

    def decide(self, request: RequestView) -> PrerenderDecision:
        """Apply the checks in order; the first conclusive one wins."""
        if request.has_query_param(ESCAPED_FRAGMENT):
            return PrerenderDecision(True, "escaped_fragment", request.full_url)

        if not is_crawler(request.user_agent, self.crawler_user_agents):
            return PrerenderDecision(False, "not_crawler")

        url = request.full_url

        if any(extension in url for extension in self.ignored_extensions):
            return PrerenderDecision(False, "ignored_extension", url)

        if self.whitelist and not is_whitelisted(url, self.whitelist):
            return PrerenderDecision(False, "not_whitelisted", url)

        if self.blacklist and is_blacklisted(url, request.referer, self.blacklist):
            return PrerenderDecision(False, "blacklisted", url)

        return PrerenderDecision(True, "crawler", url)
