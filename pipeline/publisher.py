"""Output publisher.

Writes manifest.json into the build's output directory and copies the
icon next to it when the author ships one.
"""

from __future__ import annotations

import logging
import os
import shutil
import stat
import tempfile
from dataclasses import dataclass
from pathlib import Path

from extensions.manifest import Manifest, VersionShape
from pipeline.errors import OutputDirectoryUnspecifiedError, OutputWriteError

logger = logging.getLogger(__name__)

MANIFEST_FILENAME = "manifest.json"


@dataclass
class PublishResult:
    """Files written by one publish call."""

    manifest_path: Path
    icon_path: Path | None = None


def _file_mode(path: Path) -> int:
    """Mode for a new file: the replaced file's, else 0666 minus umask."""
    try:
        return stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def _write_temp(path: Path, text: str) -> Path:
    """Write text to a temp file beside path, ready to be renamed over it."""
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    tmp = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
        os.chmod(tmp, _file_mode(path))
    except BaseException:
        tmp.unlink(missing_ok=True)
        raise
    return tmp


def publish(
    manifest: Manifest,
    output_dir: Path | str | None,
    assets_dir: Path | str,
    icon_resource_name: str,
    version_shape: VersionShape = VersionShape.PLAIN,
    manifest_filename: str = MANIFEST_FILENAME,
) -> PublishResult:
    """Publish the manifest and optional icon.

    Args:
        manifest: Manifest to serialize.
        output_dir: Build output directory, created if missing.
        assets_dir: Directory the icon is copied from.
        icon_resource_name: Icon filename inside assets_dir.
        version_shape: Layout of the version field.
        manifest_filename: Name of the manifest file.

    Returns:
        Paths of the written files.

    Raises:
        OutputDirectoryUnspecifiedError: If output_dir is None or empty.
        OutputWriteError: If the directory or a file cannot be written.
    """
    if not output_dir:
        raise OutputDirectoryUnspecifiedError()

    out = Path(output_dir).resolve()
    try:
        out.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise OutputWriteError(out, e.strerror or str(e)) from e

    manifest_path = out / manifest_filename
    try:
        tmp = _write_temp(manifest_path, manifest.to_json(version_shape))
    except OSError as e:
        raise OutputWriteError(manifest_path, e.strerror or str(e)) from e

    result = PublishResult(manifest_path=manifest_path)
    try:
        result.icon_path = _copy_icon(
            Path(assets_dir) / icon_resource_name, out / icon_resource_name
        )
        # The manifest goes live last, so a failed icon copy leaves the old one.
        try:
            os.replace(tmp, manifest_path)
        except OSError as e:
            raise OutputWriteError(manifest_path, e.strerror or str(e)) from e
    finally:
        tmp.unlink(missing_ok=True)
    logger.info("Manifest written to %s/%s", out.name, manifest_filename)

    return result


def _copy_icon(icon_source: Path, icon_dest: Path) -> Path | None:
    if not icon_source.is_file():
        logger.debug("No icon at %s, skipping", icon_source)
        return None
    if icon_dest.exists() and icon_dest.samefile(icon_source):
        return icon_dest
    try:
        shutil.copyfile(icon_source, icon_dest)
    except OSError as e:
        raise OutputWriteError(icon_dest, e.strerror or str(e)) from e
    logger.info("Icon resource copied to %s/%s", icon_dest.parent.name, icon_dest.name)
    return icon_dest
