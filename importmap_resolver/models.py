"""Pydantic schema for import maps."""

from typing import Any

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field


class ImportMap(BaseModel):
    """Typed import map.

    Mirrors the `<script type="importmap">` JSON shape. Resolvers build one
    from the raw value only after validation succeeded.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    imports: dict[str, str] | None = Field(None, description="Specifier to address mappings")
    scopes: dict[str, dict[str, str]] | None = Field(
        None, description="Scope prefix to specifier/address mappings applied to matching importers"
    )
    integrity: dict[str, str] | None = Field(None, description="URL to subresource integrity metadata")

    def to_dict(self) -> dict[str, Any]:
        """Convert to the plain import map shape, omitting absent sections."""
        result: dict[str, Any] = {}
        if self.imports is not None:
            result["imports"] = dict(self.imports)
        if self.scopes is not None:
            result["scopes"] = {prefix: dict(entries) for prefix, entries in self.scopes.items()}
        if self.integrity is not None:
            result["integrity"] = dict(self.integrity)
        return result
