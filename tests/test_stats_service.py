"""
Tests for the statistics views.
"""

from datetime import timedelta

import pytest

from shortener.core.exceptions import NotFoundError
from shortener.registry import DraftEntry
from shortener.services.redirect_service import RedirectService
from shortener.services.stats_service import StatsService, build_short_url
from shortener.services.url_service import URLShorteningService


@pytest.fixture
def seeded(registry, clock):
    URLShorteningService(registry, clock=clock).register_batch([
        DraftEntry(long_url="https://a.example.com", shortcode="aaaa", validity_minutes=10),
        DraftEntry(long_url="https://b.example.com", shortcode="bbbb", validity_minutes=60),
    ])
    RedirectService(registry, clock=clock).record_click("aaaa", referrer="https://ref.example.org")
    return registry


def test_build_short_url():
    assert build_short_url("abcd", "http://sho.rt/") == "http://sho.rt/abcd"
    assert build_short_url("abcd", "http://sho.rt") == "http://sho.rt/abcd"


class TestListUrls:

    def test_lists_in_insertion_order_with_counts(self, seeded, clock):
        rows = StatsService(seeded, clock=clock).list_urls()

        assert [row["short_code"] for row in rows] == ["aaaa", "bbbb"]
        assert [row["click_count"] for row in rows] == [1, 0]
        assert rows[0]["long_url"] == "https://a.example.com"
        assert rows[0]["expires_at"] == clock.now + timedelta(minutes=10)

    def test_empty_registry(self, registry, clock):
        assert StatsService(registry, clock=clock).list_urls() == []

    def test_expired_flag_is_display_only(self, seeded, clock):
        clock.advance(minutes=30)
        rows = StatsService(seeded, clock=clock).list_urls()

        assert [row["expired"] for row in rows] == [True, False]
        assert len(seeded) == 2


class TestGetStats:

    def test_detail_includes_click_history(self, seeded, clock):
        stats = StatsService(seeded, clock=clock).get_stats("aaaa")

        assert stats["short_code"] == "aaaa"
        assert stats["click_count"] == 1
        assert stats["clicks"] == [{
            "timestamp": clock.now,
            "source": "https://ref.example.org",
            "location": "Simulated Location",
        }]

    def test_views_do_not_mutate(self, seeded, clock):
        before = seeded.list()
        service = StatsService(seeded, clock=clock)
        service.list_urls()
        service.get_stats("aaaa")
        assert seeded.list() == before

    def test_unknown_shortcode(self, seeded, clock):
        with pytest.raises(NotFoundError):
            StatsService(seeded, clock=clock).get_stats("zzzz")


def test_last_clicked_at(seeded, clock):
    clock.advance(minutes=5)
    RedirectService(seeded, clock=clock).record_click("aaaa")

    rows = {row["short_code"]: row for row in StatsService(seeded, clock=clock).list_urls()}

    assert rows["aaaa"]["last_clicked_at"] == clock.now
    assert rows["bbbb"]["last_clicked_at"] is None
