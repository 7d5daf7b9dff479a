from datetime import datetime, timedelta, timezone

import pytest

from shortener.core.exceptions import DuplicateShortcodeError, NotFoundError
from shortener.core.setting import Settings
from shortener.registry import ClickEvent, UrlRecord, UrlRegistry

NOW = datetime(2025, 1, 1, tzinfo=timezone.utc)


def record(shortcode: str) -> UrlRecord:
    return UrlRecord(
        long_url=f"https://{shortcode}.example.com",
        shortcode=shortcode,
        created_at=NOW,
        expires_at=NOW + timedelta(minutes=30),
    )


class TestUrlRegistry:

    def test_add_list_get(self):
        registry = UrlRegistry()
        registry.add_all([record("abcd"), record("efgh")])

        assert len(registry) == 2
        assert [r.shortcode for r in registry.list()] == ["abcd", "efgh"]
        assert registry.get("efgh").long_url == "https://efgh.example.com"
        assert "abcd" in registry
        assert "zzzz" not in registry
        assert registry.shortcodes() == {"abcd", "efgh"}

    def test_get_missing_raises(self):
        with pytest.raises(NotFoundError):
            UrlRegistry().get("nope")
        assert UrlRegistry().find("nope") is None

    def test_add_all_is_atomic(self):
        registry = UrlRegistry([record("abcd")])

        with pytest.raises(DuplicateShortcodeError) as exc_info:
            registry.add_all([record("wxyz"), record("abcd")])
        assert exc_info.value.scope == DuplicateShortcodeError.REGISTRY

        with pytest.raises(DuplicateShortcodeError) as exc_info:
            registry.add_all([record("wxyz"), record("wxyz")])
        assert exc_info.value.scope == DuplicateShortcodeError.BATCH

        assert [r.shortcode for r in registry] == ["abcd"]

    def test_replace_keeps_position(self):
        registry = UrlRegistry([record("abcd"), record("efgh"), record("ijkl")])
        clicked = registry.get("efgh").with_click(ClickEvent(timestamp=NOW))

        registry.replace(clicked)

        assert [r.shortcode for r in registry] == ["abcd", "efgh", "ijkl"]
        assert registry.get("efgh").click_count == 1

    def test_replace_missing_raises(self):
        with pytest.raises(NotFoundError):
            UrlRegistry().replace(record("abcd"))

    def test_listing_is_a_copy(self):
        registry = UrlRegistry([record("abcd")])
        listing = registry.list()
        listing.clear()
        assert len(registry) == 1


def test_click_location_default_matches_settings():
    assert ClickEvent(timestamp=NOW).location == Settings.model_fields["CLICK_LOCATION"].default
