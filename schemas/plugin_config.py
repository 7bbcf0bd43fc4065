"""Schema for the plugin author's build configuration.

The configuration is usually constructed in-process by the build
script. The command-line tool reads the same fields from teevi.yaml.

Example teevi.yaml:
    displayName: My Source
    capabilities: [metadata, video]
    inputs:
      - id: api_key
        name: API Key
        required: true
    note: Requires a free account.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

from extensions.capabilities import capability_value, parse_capability
from extensions.manifest import DEFAULT_ICON_RESOURCE_NAME, ExtensionInput

DEFAULT_ENTRY = "src/index.ts"
DEFAULT_ASSETS_DIR = "public"


class PluginConfigError(Exception):
    """Raised when the plugin configuration cannot be loaded."""

    pass


class PluginConfig(BaseModel):
    """Author-declared configuration for one extension build."""

    display_name: str = Field(..., alias="displayName", description="Name shown by the host")
    entry: str = Field(DEFAULT_ENTRY, description="Source entry point handed to the bundler")
    minify: bool = Field(True, description="Whether the bundler minifies the output")
    assets_dir: str = Field(
        DEFAULT_ASSETS_DIR,
        alias="assetsDir",
        description="Directory holding static assets such as the icon",
    )
    icon_resource_name: str = Field(
        DEFAULT_ICON_RESOURCE_NAME,
        alias="iconResourceName",
        description="Icon filename inside the assets directory",
    )
    capabilities: list[str] = Field(..., description="Capability tags the extension implements")
    inputs: list[ExtensionInput] = Field(
        default_factory=list,
        description="Configuration inputs the host collects from the user",
    )
    note: str | None = Field(None, description="Free text shown with the extension")
    description: str | None = Field(
        None,
        description="Overrides the package description in the manifest",
    )

    model_config = {"populate_by_name": True}

    @field_validator("capabilities", mode="before")
    @classmethod
    def validate_capabilities(cls, v: Any) -> list[str]:
        """Normalize tags and require at least one."""
        if isinstance(v, str):
            v = [v]
        if not v:
            raise ValueError("at least one capability is required")
        return [capability_value(parse_capability(tag)) for tag in v]

    @classmethod
    def from_yaml(cls, yaml_path: Path, **defaults: Any) -> PluginConfig:
        """Load plugin configuration from a YAML file.

        Args:
            yaml_path: Path to teevi.yaml.
            **defaults: Values for fields the file leaves out.

        Returns:
            Parsed PluginConfig.

        Raises:
            PluginConfigError: If the file is missing or invalid.
        """
        if not yaml_path.exists():
            raise PluginConfigError(f"Plugin config not found: {yaml_path}")

        try:
            with open(yaml_path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise PluginConfigError(f"Invalid YAML in {yaml_path}: {e}") from e

        if not isinstance(data, dict):
            raise PluginConfigError(f"Plugin config must be a YAML mapping: {yaml_path}")

        for key, value in defaults.items():
            if value is not None:
                data.setdefault(key, value)

        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise PluginConfigError(f"Invalid plugin config in {yaml_path}: {e}") from e
