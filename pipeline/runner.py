"""Manifest pipeline runner.

Hooks into the end of an extension build: the bundler hands over its
output, and the runner reads, hashes, synthesizes, and publishes.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from extensions.manifest import Manifest
from pipeline import __version__, descriptor
from pipeline.config import Config, get_config
from pipeline.descriptor import DEFAULT_POLICY, ValidationPolicy
from pipeline.errors import OutputWriteError
from pipeline.hasher import hash_entry
from pipeline.publisher import PublishResult, publish
from pipeline.synthesizer import synthesize, synthesize_basic
from schemas.build_artifact import BuildArtifact, collect_artifact
from schemas.plugin_config import PluginConfig

logger = logging.getLogger(__name__)


class ManifestPipeline:
    """Produces manifest.json for one extension build.

    Stateless between builds: every call to write_bundle reads the
    descriptor again and builds a fresh manifest.

    Example:
        >>> pipeline = ManifestPipeline(PluginConfig(displayName="My Source", capabilities=["video"]))
        >>> pipeline.write_bundle("dist", {"main.js": OutputChunk(file_name="main.js", code=b"...")})
    """

    def __init__(
        self,
        plugin_config: PluginConfig,
        root: Path | str = ".",
        policy: ValidationPolicy = DEFAULT_POLICY,
        sdk_version: str | None = __version__,
        settings: Config | None = None,
    ) -> None:
        """Initialize the pipeline.

        Args:
            plugin_config: Author-declared configuration.
            root: Extension source root; relative paths resolve against it.
            policy: Descriptor validation policy.
            sdk_version: Toolkit version recorded in the manifest.
            settings: Toolkit configuration (default: global config).
        """
        self.plugin_config = plugin_config
        self.root = Path(root)
        self.policy = policy
        self.sdk_version = sdk_version
        self.settings = settings or get_config()
        self.last_result: PublishResult | None = None

    @property
    def descriptor_path(self) -> Path:
        return self.root / self.settings.manifest.descriptor_file

    @property
    def assets_dir(self) -> Path:
        return self.root / self.plugin_config.assets_dir

    @property
    def entry_filename(self) -> str:
        return self.settings.build.entry_filename

    def bundle_options(self) -> dict[str, Any]:
        """Configuration handed to the bundler before the build."""
        build = self.settings.build
        return {
            "build": {
                "lib": {
                    "entry": self.plugin_config.entry,
                    "name": build.bundle_name,
                    "fileName": build.entry_filename,
                    "formats": list(build.formats),
                },
                "minify": self.plugin_config.minify,
                "outDir": build.out_dir,
                "copyPublicDir": False,
            },
            "publicDir": self.plugin_config.assets_dir,
        }

    def _resolve_output_dir(self, output_dir: Path | str | None) -> Path | None:
        if not output_dir:
            return None
        path = Path(output_dir)
        return path if path.is_absolute() else self.root / path

    def write_bundle(self, output_dir: Path | str | None, bundle: BuildArtifact) -> Manifest:
        """Build-completion hook.

        Args:
            output_dir: Directory the bundler wrote to.
            bundle: Bundler output, by filename.

        Returns:
            The published manifest.

        Raises:
            ManifestPipelineError: On any failure; nothing is written.
        """
        package = descriptor.read(self.descriptor_path, self.policy)
        digest = hash_entry(bundle, self.entry_filename)
        manifest = synthesize(package, self.plugin_config, digest, self.sdk_version)

        self.last_result = publish(
            manifest,
            self._resolve_output_dir(output_dir),
            self.assets_dir,
            self.plugin_config.icon_resource_name,
            version_shape=self.policy.version_shape,
            manifest_filename=self.settings.manifest.filename,
        )
        return manifest

    def build(self, output_dir: Path | str | None = None) -> Manifest:
        """Publish the manifest for a build already on disk.

        Args:
            output_dir: Bundler output directory (default: configured out_dir).

        Returns:
            The published manifest.
        """
        out = self._resolve_output_dir(output_dir or self.settings.build.out_dir)
        artifact = collect_artifact(out) if out is not None else {}
        return self.write_bundle(out, artifact)


def create_basic_manifest(
    root: Path | str = ".",
    filename: str = "manifest.json",
    settings: Config | None = None,
) -> Path:
    """Write the first-generation manifest next to package.json.

    Identity fields only; no hash or capabilities.

    Args:
        root: Directory containing package.json.
        filename: Manifest filename.
        settings: Toolkit configuration (default: global config).

    Returns:
        Path of the written manifest.
    """
    root = Path(root)
    settings = settings or get_config()
    package = descriptor.read(root / settings.manifest.descriptor_file, DEFAULT_POLICY)
    manifest_path = root / filename

    try:
        manifest_path.write_text(
            json.dumps(synthesize_basic(package), indent=2, ensure_ascii=False) + "\n",
            encoding="utf-8",
        )
    except OSError as e:
        raise OutputWriteError(manifest_path, e.strerror or str(e)) from e

    logger.info("%s has been created from %s", filename, settings.manifest.descriptor_file)
    return manifest_path
