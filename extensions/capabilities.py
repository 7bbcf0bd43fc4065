"""Capability contracts for Teevi extensions.

An extension declares the capabilities it implements in its manifest.
The host dispatches by capability tag, looking up the methods each
capability exposes in a given surface generation.
"""

from __future__ import annotations

from enum import Enum
from typing import Iterable


class Capability(str, Enum):
    """Capability tags recognized by the current toolkit."""

    METADATA = "metadata"
    VIDEO = "video"
    FEED = "feed"
    LIVE = "live"


_METADATA_V1 = ("fetchShowsByQuery", "fetchShow")
_METADATA_V2 = ("fetchShowsByQuery", "fetchShow", "fetchEpisodes")

# Surface generation -> capability -> methods the host calls.
CAPABILITY_SURFACES: dict[str, dict[Capability, tuple[str, ...]]] = {
    "1": {
        Capability.METADATA: _METADATA_V1,
        Capability.VIDEO: _METADATA_V1 + ("fetchMediaItems", "fetchVideoAssets"),
        Capability.FEED: _METADATA_V1 + ("fetchFeedCollections",),
    },
    "2": {
        Capability.METADATA: _METADATA_V2,
        Capability.VIDEO: _METADATA_V2 + ("fetchVideoAssets",),
        Capability.FEED: _METADATA_V2
        + ("fetchFeedCollections", "fetchTrendingShows", "fetchSpotlightShows"),
        Capability.LIVE: ("fetchLiveChannels", "fetchChannelPrograms", "fetchLiveVideoAsset"),
    },
    "3": {
        Capability.METADATA: _METADATA_V2,
        Capability.VIDEO: _METADATA_V2 + ("fetchVideoAssets",),
        Capability.FEED: _METADATA_V2 + ("fetchFeedCollections", "fetchSpotlightShows"),
        Capability.LIVE: ("fetchLiveChannels", "fetchChannelPrograms", "fetchLiveVideoAsset"),
    },
}

# Methods still called in a surface but scheduled for removal.
DEPRECATED_METHODS: dict[str, dict[str, str]] = {
    "2": {"fetchTrendingShows": "fetchSpotlightShows"},
}

CURRENT_SURFACE = "3"


def parse_capability(tag: str | Capability) -> Capability | str:
    """Map a tag to a Capability, keeping unknown tags verbatim.

    Older generations may declare tags this toolkit does not know;
    those are passed through rather than rejected.
    """
    if isinstance(tag, Capability):
        return tag
    value = str(tag).strip().lower()
    try:
        return Capability(value)
    except ValueError:
        return value


def capability_value(tag: Capability | str) -> str:
    """Wire value of a capability tag."""
    return tag.value if isinstance(tag, Capability) else tag


def normalize_capabilities(tags: Iterable[str | Capability]) -> list[Capability | str]:
    """Deduplicate capability tags, keeping first-seen order."""
    seen: dict[str, Capability | str] = {}
    for tag in tags:
        parsed = parse_capability(tag)
        seen.setdefault(capability_value(parsed), parsed)
    return list(seen.values())


def _surface(surface: str) -> dict[Capability, tuple[str, ...]]:
    try:
        return CAPABILITY_SURFACES[surface]
    except KeyError:
        known = ", ".join(sorted(CAPABILITY_SURFACES))
        raise KeyError(f"Unknown capability surface '{surface}'. Known: {known}") from None


def methods_for(capability: Capability | str, surface: str = CURRENT_SURFACE) -> tuple[str, ...]:
    """Methods a host calls for a capability in the given surface.

    Returns an empty tuple for passthrough tags and for capabilities
    the surface predates.
    """
    methods = _surface(surface)
    parsed = parse_capability(capability)
    if not isinstance(parsed, Capability):
        return ()
    return methods.get(parsed, ())


def deprecated_methods(surface: str = CURRENT_SURFACE) -> dict[str, str]:
    """Deprecated method names in a surface, mapped to their replacement."""
    _surface(surface)
    return dict(DEPRECATED_METHODS.get(surface, {}))


def dispatch_table(
    capabilities: Iterable[str | Capability],
    surface: str = CURRENT_SURFACE,
) -> dict[str, tuple[str, ...]]:
    """Build the tag -> methods table a host uses to route calls."""
    return {
        capability_value(tag): methods_for(tag, surface)
        for tag in normalize_capabilities(capabilities)
    }
