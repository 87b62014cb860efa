"""Tests for the prerender decision."""

import pytest

from conftest import BROWSER_UA, GOOGLEBOT_UA, make_config, make_request
from core.decider import PrerenderDecider


@pytest.fixture
def decider(config):
    return PrerenderDecider(config.prerender)


class TestEscapedFragment:
    """An explicit _escaped_fragment_ bypasses every other check."""

    @pytest.mark.parametrize(
        "uri",
        [
            "/foo?_escaped_fragment_=",
            "/foo?_escaped_fragment_=/section",
            "/admin/file.pdf?_escaped_fragment_=",
        ],
    )
    def test_always_prerenders(self, decider, uri):
        request = make_request(uri, user_agent=BROWSER_UA)
        decision = decider.decide(request)
        assert decision.prerender
        assert decision.reason == "escaped_fragment"

    def test_without_user_agent(self, decider):
        assert decider.should_prerender(make_request("/foo?_escaped_fragment_="))

    def test_bypasses_whitelist(self):
        decider = PrerenderDecider(make_config(whitelisted_urls=["/blog"]).prerender)
        assert decider.should_prerender(make_request("/shop?_escaped_fragment_="))


class TestCrawlerChecks:
    """Crawler requests go through extension, whitelist and blacklist checks."""

    def test_non_crawler_is_skipped(self, decider):
        decision = decider.decide(make_request("/foo", user_agent=BROWSER_UA))
        assert not decision.prerender
        assert decision.reason == "not_crawler"

    def test_missing_user_agent_is_skipped(self, decider):
        assert not decider.should_prerender(make_request("/foo"))

    def test_crawler_is_prerendered(self, decider):
        decision = decider.decide(make_request("/foo", user_agent=GOOGLEBOT_UA))
        assert decision.prerender
        assert decision.reason == "crawler"
        assert decision.url == "http://x.com/foo"

    def test_ignored_extension(self, decider):
        decision = decider.decide(make_request("/docs/file.pdf", user_agent=GOOGLEBOT_UA))
        assert not decision.prerender
        assert decision.reason == "ignored_extension"

    def test_ignored_extension_anywhere_in_url(self, decider):
        request = make_request("/download?name=report.pdf&x=1", user_agent=GOOGLEBOT_UA, query={})
        assert not decider.should_prerender(request)

    def test_whitelist_gates_url(self):
        decider = PrerenderDecider(make_config(whitelisted_urls=["/blog/"]).prerender)
        assert decider.should_prerender(make_request("/blog/post", user_agent=GOOGLEBOT_UA))

        decision = decider.decide(make_request("/shop", user_agent=GOOGLEBOT_UA))
        assert not decision.prerender
        assert decision.reason == "not_whitelisted"

    def test_blacklist_wins_over_whitelist(self):
        decider = PrerenderDecider(
            make_config(whitelisted_urls=["/blog/"], blacklisted_urls=["draft"]).prerender
        )
        decision = decider.decide(make_request("/blog/draft-1", user_agent=GOOGLEBOT_UA))
        assert not decision.prerender
        assert decision.reason == "blacklisted"

    def test_blacklisted_referer(self):
        decider = PrerenderDecider(make_config(blacklisted_urls=["spam\\.example"]).prerender)
        request = make_request(
            "/page", user_agent=GOOGLEBOT_UA, referer="http://spam.example/out"
        )
        assert not decider.should_prerender(request)

    def test_blacklist_scenario(self, decider):
        request = make_request("/admin/page", user_agent="Mozilla Googlebot/2.1")
        assert not decider.should_prerender(request)

    def test_ignored_extension_checked_before_whitelist(self):
        decider = PrerenderDecider(make_config(whitelisted_urls=["/blog/"]).prerender)
        decision = decider.decide(make_request("/blog/file.pdf", user_agent=GOOGLEBOT_UA))
        assert decision.reason == "ignored_extension"

    def test_url_includes_scheme_and_host(self):
        decider = PrerenderDecider(make_config(whitelisted_urls=["^https://x\\.com/"]).prerender)
        assert decider.should_prerender(
            make_request("/page", user_agent=GOOGLEBOT_UA, scheme="https")
        )
        assert not decider.should_prerender(
            make_request("/page", user_agent=GOOGLEBOT_UA, scheme="http")
        )
