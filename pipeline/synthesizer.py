"""Manifest synthesizer.

Combines descriptor fields, the author's plugin configuration, and the
bundle digest into a Manifest. Pure computation; failures upstream
propagate and no partial manifest is ever returned.
"""

from __future__ import annotations

import logging
from typing import Any

from extensions.capabilities import Capability, normalize_capabilities
from extensions.manifest import DEFAULT_AUTHOR, DEFAULT_DESCRIPTION, Manifest
from pipeline.descriptor import PackageDescriptor
from schemas.plugin_config import PluginConfig

logger = logging.getLogger(__name__)

BASIC_DESCRIPTION = "Third-party source for Teevi"


def synthesize(
    descriptor: PackageDescriptor,
    config: PluginConfig,
    digest: str,
    sdk_version: str | None = None,
) -> Manifest:
    """Build the manifest for one extension build.

    Args:
        descriptor: Parsed package.json.
        config: Author-declared plugin configuration.
        digest: Hex digest of the entry chunk.
        sdk_version: Version of this toolkit.

    Returns:
        Fully populated Manifest.
    """
    logger.info("Generating manifest...")

    capabilities = normalize_capabilities(config.capabilities)
    if len(capabilities) != len(config.capabilities):
        logger.debug("Dropped duplicate capabilities from %s", config.capabilities)
    passthrough = [c for c in capabilities if not isinstance(c, Capability)]
    if passthrough:
        logger.warning("Manifest declares capabilities this toolkit does not know: %s", passthrough)

    return Manifest(
        id=descriptor.name,
        name=config.display_name,
        version=descriptor.version,
        description=config.description or descriptor.description or DEFAULT_DESCRIPTION,
        author=descriptor.author or DEFAULT_AUTHOR,
        hash=digest,
        capabilities=capabilities,
        icon_resource_name=config.icon_resource_name,
        inputs=list(config.inputs),
        homepage=descriptor.homepage,
        note=config.note,
        sdk_version=sdk_version,
        version_code=descriptor.version_code,
    )


def synthesize_basic(descriptor: PackageDescriptor) -> dict[str, Any]:
    """Build the first-generation manifest: identity fields only, no hash."""
    return {
        "name": descriptor.name,
        "version": descriptor.version,
        "description": descriptor.description or BASIC_DESCRIPTION,
        "author": descriptor.author or DEFAULT_AUTHOR,
    }
