"""
Serialization of constraints into Laravel validation rule arrays.
"""

from __future__ import annotations

from typing import Mapping

from fast_rules.core.constraint import Constraint, CustomRule, RawCustomRule
from fast_rules.utils.serialisation import js_value, json_string


def laravel_rule_parts(constraint: Constraint) -> list[CustomRule]:
    """Rule elements in emission order, custom rules last."""
    parts: list[CustomRule] = []

    if constraint.bail:
        parts.append("bail")
    if constraint.nullable:
        parts.append("nullable")
    if constraint.requirements is not None:
        parts.append(constraint.requirements.value)
    if constraint.type is not None:
        parts.append(constraint.type)
    if constraint.enum is not None:
        parts.append(f"in:{','.join(js_value(v) for v in constraint.enum)}")

    for prefix, value in (
        ("min", constraint.minimum),
        ("max", constraint.maximum),
        ("min", constraint.min_length),
        ("max", constraint.max_length),
        ("min", constraint.min_items),
        ("max", constraint.max_items),
    ):
        if value is not None:
            parts.append(f"{prefix}:{js_value(value)}")

    if constraint.format is not None:
        parts.append(constraint.format)
    if constraint.pattern is not None:
        parts.append(f"regex:{constraint.pattern}")

    if constraint.custom_rules:
        parts.extend(constraint.custom_rules)

    return parts


def to_laravel_validation_rule(constraint: Constraint) -> str:
    """
    Render a constraint as a rule array literal, e.g. ``["required","string","min:1"]``.

    Plain strings are JSON-quoted; raw custom rules are emitted verbatim.
    """
    rendered = [part.raw if isinstance(part, RawCustomRule) else json_string(part) for part in laravel_rule_parts(constraint)]
    return f"[{','.join(rendered)}]"


def to_laravel_validation_rules(rules: Mapping[str, Constraint]) -> dict[str, str]:
    return {field: to_laravel_validation_rule(constraint) for field, constraint in rules.items()}
