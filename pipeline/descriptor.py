"""Package metadata reader.

Reads the extension author's package.json and validates it against a
ValidationPolicy. Toolkit generations disagree on which fields are
required and how the version is laid out; the policy captures both.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from extensions.manifest import VersionShape
from pipeline.errors import MetadataParseError, MetadataReadError, MetadataValidationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidationPolicy:
    """Descriptor requirements for one toolkit generation.

    Attributes:
        name: Policy identifier used in configuration.
        required_fields: Descriptor keys that must be present and non-empty.
        version_shape: Layout of the version field in the manifest.
    """

    name: str
    required_fields: frozenset[str]
    version_shape: VersionShape = VersionShape.PLAIN


POLICIES: dict[str, ValidationPolicy] = {
    "basic": ValidationPolicy(
        name="basic",
        required_fields=frozenset({"name", "version"}),
    ),
    "display-name": ValidationPolicy(
        name="display-name",
        required_fields=frozenset({"name", "version", "displayName"}),
        version_shape=VersionShape.COMBINED,
    ),
    "version-code": ValidationPolicy(
        name="version-code",
        required_fields=frozenset({"name", "version", "versionCode"}),
        version_shape=VersionShape.CODED,
    ),
}

DEFAULT_POLICY = POLICIES["basic"]


def get_policy(name: str) -> ValidationPolicy:
    """Look up a built-in policy by name.

    Raises:
        KeyError: If no policy has that name.
    """
    try:
        return POLICIES[name]
    except KeyError:
        known = ", ".join(sorted(POLICIES))
        raise KeyError(f"Unknown validation policy '{name}'. Known: {known}") from None


@dataclass(frozen=True)
class PackageDescriptor:
    """Identity fields from the extension's package.json."""

    name: str
    version: str
    description: str | None = None
    author: str | None = None
    homepage: str | None = None
    display_name: str | None = None
    version_code: int | None = None


def _author_name(value: Any) -> str | None:
    # npm allows "author": {"name": ..., "email": ..., "url": ...}
    if isinstance(value, dict):
        value = value.get("name")
    if value is None or value == "":
        return None
    return str(value)


def _optional_str(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return str(value)


def read(path: Path | str, policy: ValidationPolicy = DEFAULT_POLICY) -> PackageDescriptor:
    """Read and validate a package descriptor.

    Args:
        path: Path to package.json.
        policy: Required-field policy to validate against.

    Returns:
        Parsed PackageDescriptor.

    Raises:
        MetadataReadError: If the file cannot be read.
        MetadataParseError: If the content is not a JSON object.
        MetadataValidationError: If a required field is missing or invalid.
    """
    path = Path(path)
    logger.info("Reading %s...", path.name)

    try:
        raw = path.read_bytes()
    except FileNotFoundError as e:
        raise MetadataReadError(path, "file not found") from e
    except OSError as e:
        raise MetadataReadError(path, e.strerror or str(e)) from e

    try:
        data = json.loads(raw.decode("utf-8"))
    except UnicodeDecodeError as e:
        raise MetadataParseError(path, f"not valid UTF-8 ({e.reason})") from e
    except json.JSONDecodeError as e:
        raise MetadataParseError(path, str(e)) from e

    if not isinstance(data, dict):
        raise MetadataParseError(path, "expected a JSON object")

    for key in sorted(policy.required_fields):
        if data.get(key) in (None, ""):
            raise MetadataValidationError(path, key)

    version_code = data.get("versionCode")
    if version_code is not None:
        if isinstance(version_code, bool) or not isinstance(version_code, int) or version_code < 0:
            raise MetadataValidationError(
                path, "versionCode", "expected a non-negative integer for"
            )

    descriptor = PackageDescriptor(
        name=str(data.get("name", "")),
        version=str(data.get("version", "")),
        description=_optional_str(data.get("description")),
        author=_author_name(data.get("author")),
        homepage=_optional_str(data.get("homepage")),
        display_name=_optional_str(data.get("displayName")),
        version_code=version_code,
    )
    logger.debug("Descriptor %s@%s (policy: %s)", descriptor.name, descriptor.version, policy.name)
    return descriptor
