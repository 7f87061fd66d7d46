"""Field-level validation findings reported by the block validator."""

from typing import Any

from pydantic import BaseModel, Field


class Violation(BaseModel):
    """One violated invariant, located by block position and field."""

    position: int | None = Field(
        default=None,
        description="Index of the offending block; None for document-level fields",
    )
    field: str = Field(description="Dotted field name, e.g. 'url' or 'media.2.type'")
    message: str
    type: str = Field(default="validation_error", description="Machine-readable reason")

    @classmethod
    def from_pydantic(
        cls,
        error: dict[str, Any],
        position: int | None = None,
        prefix: str = "",
    ) -> "Violation":
        """Convert one entry of a pydantic ``errors()`` list."""
        loc = [str(part) for part in error.get("loc", ())]
        # Tagged-union errors put the tag name first in loc; it is not a field.
        if loc and loc[0] in {"p", "image", "video"}:
            loc = loc[1:]
        field = ".".join([p for p in (prefix, *loc) if p]) or "type"
        return cls(
            position=position,
            field=field,
            message=error.get("msg", "Invalid value"),
            type=error.get("type", "validation_error"),
        )

    def describe(self) -> str:
        where = f"block {self.position}: " if self.position is not None else ""
        return f"{where}{self.field}: {self.message}"
