from __future__ import annotations

from enum import Enum
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class Requirement(str, Enum):
    """Presence requirement of a field, named after the Laravel rule it emits."""
    PRESENT = "present"
    REQUIRED = "required"
    SOMETIMES = "sometimes"
    FILLED = "filled"


class RawCustomRule(BaseModel):
    """Custom rule emitted verbatim instead of as a quoted string."""
    raw: str

    model_config = ConfigDict(frozen=True)


CustomRule = Union[str, RawCustomRule]
LiteralValue = Union[bool, int, float, str]


class Constraint(BaseModel):
    """
    Validation facets for one field.

    Every facet is optional; ``None`` means the facet is not emitted. Only one
    bound family (minimum/maximum, min_length/max_length, min_items/max_items)
    is populated for a given node.
    """
    requirements: Optional[Requirement] = None
    type: Optional[str] = None
    bail: Optional[bool] = None
    nullable: Optional[bool] = None
    minimum: Optional[Union[int, float]] = None
    maximum: Optional[Union[int, float]] = None
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    min_items: Optional[int] = None
    max_items: Optional[int] = None
    format: Optional[str] = None
    pattern: Optional[str] = None
    enum: Optional[list[LiteralValue]] = None
    custom_rules: Optional[list[CustomRule]] = None

    def facets(self) -> dict[str, Any]:
        """The facets that are set, keyed by field name."""
        return {
            name: getattr(self, name)
            for name in type(self).model_fields
            if getattr(self, name) is not None
        }

    def with_facets(self, **facets: Any) -> "Constraint":
        return self.model_copy(update=facets)

    def overlaid_by(self, other: "Constraint") -> "Constraint":
        """Copy of this constraint where every facet set on ``other`` wins."""
        return self.model_copy(update=other.facets())


class FieldRule(BaseModel):
    field: str = Field(..., description="Dot-delimited field path, `*` for each array element")
    constraint: Constraint = Field(default_factory=Constraint)

    def prefixed(self, prefix: str) -> "FieldRule":
        return FieldRule(field=f"{prefix}.{self.field}", constraint=self.constraint)
