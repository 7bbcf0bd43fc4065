"""Runtime context handed to extension entry points.

The host builds one TeeviRuntime per extension and passes it in
explicitly; extensions only read from it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Mapping

if TYPE_CHECKING:
    from extensions.manifest import Manifest


@dataclass(frozen=True)
class TeeviRuntime:
    """Read-only view of the host environment.

    Attributes:
        language: BCP 47 language tag of the host (e.g. "en", "it").
        user_agent: User agent of the client.
        input_values: Values the user entered for declared inputs, by id.
    """

    language: str | None = None
    user_agent: str | None = None
    input_values: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "input_values", MappingProxyType(dict(self.input_values)))

    def get_input_value_by_id(self, input_id: str) -> str | None:
        """Value of an input declared in the manifest, or None."""
        return self.input_values.get(input_id)

    @classmethod
    def for_manifest(
        cls,
        manifest: Manifest,
        values: Mapping[str, str],
        language: str | None = None,
        user_agent: str | None = None,
    ) -> TeeviRuntime:
        """Build the runtime for an extension from its manifest inputs.

        Values for ids the manifest does not declare are dropped.

        Raises:
            ValueError: If a required input has no value.
        """
        declared = {i.id: i for i in manifest.inputs}
        missing = [
            i.name for i in manifest.inputs if i.required and not values.get(i.id)
        ]
        if missing:
            raise ValueError(
                f"Extension {manifest.id} is missing required inputs: {', '.join(missing)}"
            )

        return cls(
            language=language,
            user_agent=user_agent,
            input_values={k: v for k, v in values.items() if k in declared},
        )
