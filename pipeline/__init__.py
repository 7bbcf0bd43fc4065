"""Manifest synthesis pipeline for Teevi extensions.

Runs once per build:
- reads the package descriptor (package.json)
- hashes the entry bundle (main.js)
- synthesizes the manifest from the descriptor and plugin config
- publishes manifest.json and the icon into the output directory
"""

__version__ = "0.4.0"

from pipeline.descriptor import POLICIES, PackageDescriptor, ValidationPolicy, get_policy
from pipeline.errors import (
    ManifestPipelineError,
    MetadataParseError,
    MetadataReadError,
    MetadataValidationError,
    MissingArtifactError,
    OutputDirectoryUnspecifiedError,
    OutputWriteError,
)
from pipeline.runner import ManifestPipeline, create_basic_manifest

__all__ = [
    "__version__",
    # Descriptor
    "POLICIES",
    "PackageDescriptor",
    "ValidationPolicy",
    "get_policy",
    # Errors
    "ManifestPipelineError",
    "MetadataParseError",
    "MetadataReadError",
    "MetadataValidationError",
    "MissingArtifactError",
    "OutputDirectoryUnspecifiedError",
    "OutputWriteError",
    # Runner
    "ManifestPipeline",
    "create_basic_manifest",
]
