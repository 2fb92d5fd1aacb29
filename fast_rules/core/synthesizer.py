"""
Constraint synthesis: intrinsic scalar constraints, annotation overrides and
the presence-requirement policy.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

from fast_rules.core.constraint import Constraint, Requirement

if TYPE_CHECKING:
    from fast_rules.core.annotations import AnnotationStore
    from fast_rules.core.types import TypeNode


# https://www.w3.org/TR/NOTE-datetime
UTC_DATE_TIME_FORMAT = "date_format:Y-m-d\\TH:i\\Z,Y-m-d\\TH:i:s\\Z,Y-m-d\\TH:i:s.v\\Z"
OFFSET_DATE_TIME_FORMAT = "date_format:Y-m-d\\TH:iP,Y-m-d\\TH:i:sP,Y-m-d\\TH:i:s.vP"

_STD_SCALAR_CONSTRAINTS: dict[str, dict] = {
    "boolean": {"type": "boolean"},
    "integer": {"type": "integer"},
    "int8": {"type": "integer"},
    "int16": {"type": "integer"},
    "int32": {"type": "integer"},
    "int64": {"type": "integer"},
    "safeint": {"type": "integer"},
    "uint8": {"type": "integer", "minimum": 0},
    "uint16": {"type": "integer", "minimum": 0},
    "uint32": {"type": "integer", "minimum": 0},
    "uint64": {"type": "integer", "minimum": 0},
    "numeric": {"type": "numeric"},
    "float": {"type": "numeric"},
    "float32": {"type": "numeric"},
    "float64": {"type": "numeric"},
    "decimal": {"type": "numeric"},
    "decimal128": {"type": "numeric"},
    "string": {"type": "string"},
    "url": {"type": "string", "format": "url"},
    # No Laravel rule describes these precisely
    "plainDate": {"type": "string"},
    "plainTime": {"type": "string"},
    "duration": {"type": "string"},
    "utcDateTime": {"type": "string", "format": UTC_DATE_TIME_FORMAT},
    "offsetDateTime": {"type": "string", "format": OFFSET_DATE_TIME_FORMAT},
}

_DATE_FORMAT_RE = re.compile(r"^date_format:.+")


def std_scalar_constraint(name: str) -> Constraint:
    """Base constraint for a built-in scalar; unknown names yield an empty constraint."""
    return Constraint(**_STD_SCALAR_CONSTRAINTS.get(name, {}))


def number_kind(value: int | float) -> str:
    """`integer` for integral numbers (including ``3.0``), `numeric` otherwise."""
    if isinstance(value, int) or (isinstance(value, float) and value.is_integer()):
        return "integer"
    return "numeric"


def apply_annotations(store: "AnnotationStore", node: "TypeNode", base: Constraint) -> Constraint:
    """
    Layer the annotations attached to ``node`` over ``base``.

    Each declared bound and the pattern independently override the matching
    facet. An ``email`` format sets the format, and a non-empty date format is
    applied afterwards so it wins over email. Custom rules are appended to the
    ones already present on ``base``.
    """
    annotations = store.get(node)
    updates: dict = {}

    for facet, value in (
        ("min_length", annotations.min_length),
        ("max_length", annotations.max_length),
        ("min_items", annotations.min_items),
        ("max_items", annotations.max_items),
        ("minimum", annotations.min_value),
        ("maximum", annotations.max_value),
        ("pattern", annotations.pattern),
    ):
        if value is not None:
            updates[facet] = value

    if annotations.format == "email":
        updates["format"] = "email"

    if annotations.date_format:
        updates["format"] = f"date_format:{annotations.date_format}"

    if annotations.bail:
        updates["bail"] = True

    if annotations.custom_rules:
        updates["custom_rules"] = [*(base.custom_rules or []), *annotations.custom_rules]

    return base.with_facets(**updates) if updates else base.model_copy()


def has_lower_bound(constraint: Constraint) -> bool:
    """
    Whether the constraint demands non-empty content.

    True for a first declared minimum (value, length or items, in that order)
    of at least 1, and for the email, url and date_format formats.
    """
    minimum = next(
        (value for value in (constraint.minimum, constraint.min_length, constraint.min_items) if value is not None),
        0,
    )
    fmt = constraint.format or ""
    if fmt in ("email", "url") or _DATE_FORMAT_RE.match(fmt):
        minimum = 1
    return minimum >= 1


def requirement_for(*, optional: bool, lower_bound: bool) -> Requirement:
    if not optional:
        return Requirement.REQUIRED if lower_bound else Requirement.PRESENT
    return Requirement.FILLED if lower_bound else Requirement.SOMETIMES


def apply_requirement_policy(constraint: Constraint, *, optional: bool = False) -> Constraint:
    """Attach the presence requirement; all other facets pass through."""
    requirement = requirement_for(optional=optional, lower_bound=has_lower_bound(constraint))
    return constraint.with_facets(requirements=requirement)
