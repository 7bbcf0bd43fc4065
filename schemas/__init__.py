"""Schemas module for build inputs.

Provides Pydantic models for:
- Plugin configuration declared by the extension author
- Build artifacts handed over by the bundler
"""

from .build_artifact import (
    BuildArtifact,
    OutputAsset,
    OutputChunk,
    collect_artifact,
)
from .plugin_config import (
    DEFAULT_ASSETS_DIR,
    DEFAULT_ENTRY,
    PluginConfig,
    PluginConfigError,
)

__all__ = [
    # Build artifact
    "BuildArtifact",
    "OutputAsset",
    "OutputChunk",
    "collect_artifact",
    # Plugin config
    "DEFAULT_ASSETS_DIR",
    "DEFAULT_ENTRY",
    "PluginConfig",
    "PluginConfigError",
]
