"""Error taxonomy for the manifest pipeline.

Every failure is terminal for the current build's manifest step. Each
error names the file or field that caused it.
"""

from __future__ import annotations

from pathlib import Path


class ManifestPipelineError(Exception):
    """Base class for manifest pipeline failures."""

    pass


class MetadataReadError(ManifestPipelineError):
    """Raised when the package descriptor cannot be read."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"Failed to read {path}: {reason}")


class MetadataParseError(ManifestPipelineError):
    """Raised when the package descriptor is not a well-formed record."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"Failed to parse {path}: {reason}")


class MetadataValidationError(ManifestPipelineError):
    """Raised when a required descriptor field is missing or invalid."""

    def __init__(self, path: Path, field: str, reason: str = "missing required field") -> None:
        self.path = path
        self.field = field
        super().__init__(f"{path}: {reason} '{field}'")


class MissingArtifactError(ManifestPipelineError):
    """Raised when the build produced no hashable entry chunk."""

    def __init__(self, entry_filename: str, reason: str | None = None) -> None:
        self.entry_filename = entry_filename
        super().__init__(reason or f"No {entry_filename} found in bundle")


class OutputDirectoryUnspecifiedError(ManifestPipelineError):
    """Raised when the build process supplied no output directory."""

    def __init__(self) -> None:
        super().__init__("No output directory specified")


class OutputWriteError(ManifestPipelineError):
    """Raised when the output directory or a published file cannot be written."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        super().__init__(f"Failed to write {path}: {reason}")
