"""Tests for capability tags and surfaces."""

import pytest

from extensions.capabilities import (
    CAPABILITY_SURFACES,
    CURRENT_SURFACE,
    Capability,
    deprecated_methods,
    dispatch_table,
    methods_for,
    normalize_capabilities,
    parse_capability,
)


class TestParse:
    def test_known_tag(self):
        assert parse_capability("video") is Capability.VIDEO

    def test_case_and_whitespace(self):
        assert parse_capability(" Feed ") is Capability.FEED

    def test_unknown_tag_passthrough(self):
        assert parse_capability("radio") == "radio"

    def test_enum_passes_through(self):
        assert parse_capability(Capability.LIVE) is Capability.LIVE


class TestNormalize:
    def test_dedup_first_seen_order(self):
        assert normalize_capabilities(["metadata", "video", "metadata"]) == [
            Capability.METADATA,
            Capability.VIDEO,
        ]

    def test_mixed_forms_dedup(self):
        assert normalize_capabilities([Capability.FEED, "feed", "FEED"]) == [Capability.FEED]

    def test_unknown_kept(self):
        assert normalize_capabilities(["radio", "radio", "live"]) == ["radio", Capability.LIVE]


class TestSurfaces:
    def test_current_surface_drops_trending(self):
        methods = methods_for(Capability.FEED)
        assert "fetchSpotlightShows" in methods
        assert "fetchTrendingShows" not in methods

    def test_surface_2_keeps_deprecated_trending(self):
        assert "fetchTrendingShows" in methods_for("feed", "2")
        assert deprecated_methods("2") == {"fetchTrendingShows": "fetchSpotlightShows"}

    def test_no_deprecations_in_current(self):
        assert deprecated_methods() == {}

    def test_live_unknown_to_first_surface(self):
        assert methods_for(Capability.LIVE, "1") == ()

    def test_video_builds_on_metadata(self):
        for surface, table in CAPABILITY_SURFACES.items():
            metadata = table[Capability.METADATA]
            assert table[Capability.VIDEO][: len(metadata)] == metadata, surface

    def test_passthrough_has_no_methods(self):
        assert methods_for("radio") == ()

    def test_unknown_surface(self):
        with pytest.raises(KeyError):
            methods_for(Capability.VIDEO, "99")
        with pytest.raises(KeyError):
            deprecated_methods("99")

    def test_current_surface_is_known(self):
        assert CURRENT_SURFACE in CAPABILITY_SURFACES


class TestDispatchTable:
    def test_routes_declared_tags(self):
        table = dispatch_table(["video", "video", "radio"])
        assert list(table) == ["video", "radio"]
        assert "fetchVideoAssets" in table["video"]
        assert table["radio"] == ()
