"""Schema for the output of the external bundling step.

The bundler hands over a mapping from output filename to either an
executable chunk (with code) or a static asset (nothing to hash).
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal, Union

from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)

CHUNK_SUFFIXES = (".js", ".mjs", ".cjs")


class OutputChunk(BaseModel):
    """Executable code emitted by the bundler."""

    type: Literal["chunk"] = "chunk"
    file_name: str = Field(..., description="Output filename relative to the output directory")
    code: bytes | str = Field(b"", description="Compiled code")

    @property
    def content(self) -> bytes:
        """Code as bytes; text is encoded as UTF-8."""
        if isinstance(self.code, str):
            return self.code.encode("utf-8")
        return self.code


class OutputAsset(BaseModel):
    """Static file emitted by the bundler."""

    type: Literal["asset"] = "asset"
    file_name: str = Field(..., description="Output filename relative to the output directory")


OutputFile = Union[OutputChunk, OutputAsset]
BuildArtifact = dict[str, OutputFile]


def collect_artifact(out_dir: Path) -> BuildArtifact:
    """Build the artifact mapping from an output directory on disk.

    Script files directly inside out_dir become chunks; everything
    else is an asset. A missing directory yields an empty mapping.

    Args:
        out_dir: Directory the bundler wrote to.

    Returns:
        Mapping from filename to chunk or asset.
    """
    artifact: BuildArtifact = {}
    if not out_dir.is_dir():
        logger.debug("Output directory does not exist: %s", out_dir)
        return artifact

    for path in sorted(out_dir.iterdir()):
        if not path.is_file():
            continue
        if path.suffix in CHUNK_SUFFIXES:
            artifact[path.name] = OutputChunk(file_name=path.name, code=path.read_bytes())
        else:
            artifact[path.name] = OutputAsset(file_name=path.name)

    logger.debug("Collected %d output files from %s", len(artifact), out_dir)
    return artifact
