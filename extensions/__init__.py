"""Extension model for Teevi content sources.

An extension is a third-party bundle loaded by the Teevi host. This
module describes what the host sees of it:
- manifest: identity, version, capabilities, and bundle hash
- capabilities: capability tags and the methods each one exposes
- runtime: the read-only context passed into extension entry points
"""

from extensions.capabilities import (
    CAPABILITY_SURFACES,
    CURRENT_SURFACE,
    Capability,
    dispatch_table,
    methods_for,
    normalize_capabilities,
)
from extensions.manifest import ExtensionInput, Manifest, ManifestError, VersionShape
from extensions.runtime import TeeviRuntime

__all__ = [
    "CAPABILITY_SURFACES",
    "CURRENT_SURFACE",
    "Capability",
    "ExtensionInput",
    "Manifest",
    "ManifestError",
    "TeeviRuntime",
    "VersionShape",
    "dispatch_table",
    "methods_for",
    "normalize_capabilities",
]
