"""Extension manifest schema for Teevi extensions.

Defines the manifest record (manifest.json) shipped next to an
extension's compiled bundle, and how it is serialized.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from extensions.capabilities import Capability, capability_value, parse_capability

DEFAULT_DESCRIPTION = "Third-party extension for Teevi"
DEFAULT_AUTHOR = "Unknown"
DEFAULT_ICON_RESOURCE_NAME = "icon.png"


class ManifestError(Exception):
    """Raised when a manifest record violates its invariants."""

    pass


class ExtensionInput(BaseModel):
    """A configuration input the host collects from the user."""

    id: str = Field(..., description="Identifier used to look the value up at runtime")
    name: str = Field(..., description="Label shown to the user")
    required: bool = Field(False, description="Whether the extension cannot run without it")


class VersionShape(str, Enum):
    """How the version field is laid out in the serialized manifest."""

    PLAIN = "plain"  # "version": "1.0.0", "sdkVersion": "0.3.0"
    COMBINED = "combined"  # "version": {"extension": "1.0.0", "sdk": "0.3.0"}
    CODED = "coded"  # "version": "1.0.0", "versionCode": 7, "sdkVersion": "0.3.0"


@dataclass
class Manifest:
    """Manifest describing a built extension.

    Attributes:
        id: Stable identifier, taken from the package name.
        name: Display name shown by the host.
        version: Extension version, echoed from the package descriptor.
        description: Short description of the extension.
        author: Extension author.
        hash: Hex SHA-256 digest of the entry bundle.
        capabilities: Distinct capability tags the extension implements.
        icon_resource_name: Filename of the icon shipped next to the manifest.
        inputs: Configuration inputs the host asks the user for.
        homepage: Optional homepage URL.
        note: Optional free text shown to the user.
        sdk_version: Version of the toolkit that produced the manifest.
        version_code: Monotonic build number, for coded version layouts.
    """

    id: str
    name: str
    version: str
    description: str
    author: str
    hash: str
    capabilities: list[Capability | str]
    icon_resource_name: str = DEFAULT_ICON_RESOURCE_NAME
    inputs: list[ExtensionInput] = field(default_factory=list)
    homepage: str | None = None
    note: str | None = None
    sdk_version: str | None = None
    version_code: int | None = None

    def __post_init__(self) -> None:
        """Validate the manifest after initialization."""
        self._validate()

    def _validate(self) -> None:
        if not self.id:
            raise ManifestError("Manifest id is required")
        if not self.hash:
            raise ManifestError(f"Manifest for {self.id} has no bundle hash")
        if not self.capabilities:
            raise ManifestError(f"Manifest for {self.id} declares no capabilities")

        values = [capability_value(c) for c in self.capabilities]
        if len(values) != len(set(values)):
            raise ManifestError(f"Manifest for {self.id} has duplicate capabilities: {values}")

    @property
    def capability_values(self) -> list[str]:
        """Capability tags as wire strings."""
        return [capability_value(c) for c in self.capabilities]

    def to_dict(self, version_shape: VersionShape = VersionShape.PLAIN) -> dict[str, Any]:
        """Convert manifest to a dictionary in wire field order.

        Args:
            version_shape: Layout of the version field.

        Returns:
            Dictionary representation of the manifest. Optional fields
            without a value are omitted.
        """
        if version_shape == VersionShape.COMBINED:
            version: Any = {"extension": self.version, "sdk": self.sdk_version}
        else:
            version = self.version

        result: dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "version": version,
        }
        if version_shape == VersionShape.CODED and self.version_code is not None:
            result["versionCode"] = self.version_code

        result["description"] = self.description
        result["author"] = self.author
        if self.homepage:
            result["homepage"] = self.homepage
        result["hash"] = self.hash
        result["capabilities"] = self.capability_values
        result["iconResourceName"] = self.icon_resource_name
        result["inputs"] = [i.model_dump(mode="json") for i in self.inputs]
        if self.note:
            result["note"] = self.note
        if self.sdk_version and version_shape != VersionShape.COMBINED:
            result["sdkVersion"] = self.sdk_version

        return result

    def to_json(self, version_shape: VersionShape = VersionShape.PLAIN) -> str:
        """Serialize to the manifest.json text."""
        return json.dumps(self.to_dict(version_shape), indent=2, ensure_ascii=False) + "\n"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Manifest:
        """Create manifest from a published dictionary.

        Accepts every version layout produced by to_dict.

        Raises:
            ManifestError: If required fields are missing or invalid.
        """
        version = data.get("version", "")
        sdk_version = data.get("sdkVersion")
        if isinstance(version, dict):
            sdk_version = version.get("sdk")
            version = version.get("extension", "")

        try:
            return cls(
                id=data["id"],
                name=data.get("name", ""),
                version=str(version),
                description=data.get("description", DEFAULT_DESCRIPTION),
                author=data.get("author", DEFAULT_AUTHOR),
                hash=data.get("hash", ""),
                capabilities=[parse_capability(c) for c in data.get("capabilities", [])],
                icon_resource_name=data.get("iconResourceName", DEFAULT_ICON_RESOURCE_NAME),
                inputs=[ExtensionInput.model_validate(i) for i in data.get("inputs", [])],
                homepage=data.get("homepage"),
                note=data.get("note"),
                sdk_version=sdk_version,
                version_code=data.get("versionCode"),
            )
        except (KeyError, ValueError) as e:
            raise ManifestError(f"Invalid manifest data: {e}") from e

    @classmethod
    def from_json(cls, path: Path) -> Manifest:
        """Load a published manifest.json.

        Raises:
            ManifestError: If the file is missing or invalid.
        """
        if not path.exists():
            raise ManifestError(f"Manifest not found: {path}")
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ManifestError(f"Invalid JSON in {path}: {e}") from e
        if not isinstance(data, dict):
            raise ManifestError(f"Manifest must be a JSON object: {path}")
        return cls.from_dict(data)

    def __repr__(self) -> str:
        return (
            f"Manifest(id={self.id!r}, version={self.version!r}, "
            f"capabilities={self.capability_values!r})"
        )
