"""Artifact hasher.

The manifest hash is a SHA-256 digest over the entry chunk's bytes and
nothing else: no path, timestamp, or filesystem metadata.
"""

from __future__ import annotations

import hashlib
import logging

from pipeline.errors import MissingArtifactError
from schemas.build_artifact import BuildArtifact, OutputChunk

logger = logging.getLogger(__name__)

DEFAULT_ENTRY_FILENAME = "main.js"


def digest_bytes(content: bytes) -> str:
    """Hex SHA-256 of raw bytes."""
    return hashlib.sha256(content).hexdigest()


def hash_entry(artifact: BuildArtifact, entry_filename: str = DEFAULT_ENTRY_FILENAME) -> str:
    """Hash the entry chunk of a build.

    Args:
        artifact: Mapping from output filename to chunk or asset.
        entry_filename: Filename of the entry chunk.

    Returns:
        Hex-encoded SHA-256 digest of the chunk's code.

    Raises:
        MissingArtifactError: If there is no chunk with content at entry_filename.
    """
    logger.info("Calculating hash...")

    output = artifact.get(entry_filename)
    if output is None:
        raise MissingArtifactError(entry_filename)
    if not isinstance(output, OutputChunk):
        raise MissingArtifactError(
            entry_filename, f"{entry_filename} in bundle is an asset, not a chunk"
        )

    content = output.content
    if not content:
        raise MissingArtifactError(entry_filename, f"{entry_filename} in bundle has no code")

    digest = digest_bytes(content)
    logger.debug("%s sha256=%s (%d bytes)", entry_filename, digest, len(content))
    return digest
