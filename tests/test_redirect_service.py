"""
Tests for click recording.
"""

from datetime import datetime, timedelta, timezone

import pytest

from shortener.core.exceptions import NotFoundError
from shortener.registry import ClickEvent, UrlRecord, UrlRegistry
from shortener.services.redirect_service import NavigationDirective, RedirectService

CREATED = datetime(2025, 1, 1, tzinfo=timezone.utc)


def make_record(shortcode: str, long_url: str = "https://example.com") -> UrlRecord:
    return UrlRecord(
        long_url=long_url,
        shortcode=shortcode,
        created_at=CREATED,
        expires_at=CREATED + timedelta(minutes=30),
    )


@pytest.fixture
def populated():
    return UrlRegistry([
        make_record("alpha", "https://alpha.example.com"),
        make_record("beta", "https://beta.example.com"),
    ])


class TestRecordClick:

    def test_appends_one_click_and_returns_directive(self, populated, clock):
        service = RedirectService(populated, clock=clock, location="Simulated Location")

        directive = service.record_click("alpha", referrer="https://news.example.org")

        assert directive == NavigationDirective(
            shortcode="alpha",
            target_url="https://alpha.example.com",
            click=ClickEvent(
                timestamp=clock.now,
                source="https://news.example.org",
                location="Simulated Location",
            ),
        )
        assert populated.get("alpha").clicks == (directive.click,)

    def test_other_records_untouched(self, populated, clock):
        beta_before = populated.get("beta")
        RedirectService(populated, clock=clock).record_click("alpha")
        assert populated.get("beta") is beta_before
        assert [r.shortcode for r in populated] == ["alpha", "beta"]

    def test_missing_referrer_is_direct(self, populated, clock):
        service = RedirectService(populated, clock=clock)
        assert service.record_click("alpha").click.source == "Direct"
        assert service.record_click("alpha", referrer="  ").click.source == "Direct"

    def test_clicks_append_in_order(self, populated, clock):
        service = RedirectService(populated, clock=clock)
        service.record_click("alpha", referrer="first")
        clock.advance(minutes=1)
        service.record_click("alpha", referrer="second")

        clicks = populated.get("alpha").clicks
        assert [c.source for c in clicks] == ["first", "second"]
        assert clicks[1].timestamp - clicks[0].timestamp == timedelta(minutes=1)

    def test_record_is_replaced_not_mutated(self, populated, clock):
        before = populated.get("alpha")
        RedirectService(populated, clock=clock).record_click("alpha")
        assert before.clicks == ()
        assert populated.get("alpha") is not before

    def test_expired_record_still_redirects(self, populated, clock):
        clock.now = CREATED + timedelta(days=1)
        directive = RedirectService(populated, clock=clock).record_click("beta")
        assert directive.target_url == "https://beta.example.com"

    def test_unknown_shortcode_raises_not_found(self, populated, clock):
        before = populated.list()

        with pytest.raises(NotFoundError) as exc_info:
            RedirectService(populated, clock=clock).record_click("missing")

        assert exc_info.value.shortcode == "missing"
        assert populated.list() == before
