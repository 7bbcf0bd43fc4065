"""Configuration management for the Teevi toolkit.

Loads configuration from:
1. teevi.toml (defaults)
2. Environment variables (overrides)
"""

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from dotenv import load_dotenv

# Load .env file if present
load_dotenv()

CONFIG_FILENAME = "teevi.toml"


@dataclass
class BuildConfig:
    """Bundler-facing build settings."""

    out_dir: str = "dist"
    entry_filename: str = "main.js"  # Chunk hashed into the manifest
    bundle_name: str = "teevi"  # Global name of the IIFE bundle
    formats: list[str] = field(default_factory=lambda: ["iife"])


@dataclass
class ManifestConfig:
    """Manifest synthesis settings."""

    filename: str = "manifest.json"
    descriptor_file: str = "package.json"
    plugin_config_file: str = "teevi.yaml"
    policy: str = "basic"  # "basic" | "display-name" | "version-code"


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "INFO"


@dataclass
class Config:
    """Main configuration container."""

    build: BuildConfig = field(default_factory=BuildConfig)
    manifest: ManifestConfig = field(default_factory=ManifestConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Config":
        """Create Config from dictionary."""
        build_data = data.get("build", {})
        manifest_data = data.get("manifest", {})
        logging_data = data.get("logging", {})

        return cls(
            build=BuildConfig(**build_data),
            manifest=ManifestConfig(**manifest_data),
            logging=LoggingConfig(**logging_data),
        )


def find_config_file() -> Path | None:
    """Find teevi.toml in current or parent directories.

    Returns:
        Path to teevi.toml or None if not found.
    """
    current = Path.cwd()

    for directory in [current, *current.parents]:
        config_path = directory / CONFIG_FILENAME
        if config_path.exists():
            return config_path

    return None


def load_config(config_path: Path | str | None = None) -> Config:
    """Load configuration from file and environment.

    Args:
        config_path: Optional explicit path to teevi.toml

    Returns:
        Config object with merged settings.
    """
    # Start with defaults
    config_data: dict[str, Any] = {}

    # Load from file if available
    if config_path is None:
        config_path = find_config_file()

    if config_path is not None:
        path = Path(config_path)
        if path.exists():
            with open(path, "rb") as f:
                config_data = tomllib.load(f)

    # Apply environment variable overrides
    env_overrides = {
        "build": {
            "out_dir": os.getenv("TEEVI_OUT_DIR"),
            "entry_filename": os.getenv("TEEVI_ENTRY_FILENAME"),
        },
        "manifest": {
            "policy": os.getenv("TEEVI_MANIFEST_POLICY"),
        },
        "logging": {
            "level": os.getenv("TEEVI_LOG_LEVEL"),
        },
    }

    # Merge env overrides (only non-None values)
    for section, values in env_overrides.items():
        if section not in config_data:
            config_data[section] = {}
        for key, value in values.items():
            if value is not None:
                config_data[section][key] = value

    return Config.from_dict(config_data)


# Global config instance (lazy loaded)
_config: Config | None = None


def get_config() -> Config:
    """Get the global configuration instance.

    Returns:
        Config object (loaded once, cached).
    """
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reload_config() -> Config:
    """Force reload of configuration.

    Returns:
        Fresh Config object.
    """
    global _config
    _config = load_config()
    return _config
