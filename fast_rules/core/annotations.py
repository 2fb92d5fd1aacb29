"""
Out-of-band validation metadata attached to type-graph nodes.

Annotations are kept in a side table keyed by node identity so the type graph
itself stays read-only. A node only sees the annotations attached to it, never
those of its base scalar, parent model or property type.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any, Optional, TYPE_CHECKING

from fast_rules.core.constraint import CustomRule, RawCustomRule

if TYPE_CHECKING:
    from fast_rules.core.types import TypeNode


@dataclass(frozen=True)
class Annotations:
    min_length: Optional[int] = None
    max_length: Optional[int] = None
    min_items: Optional[int] = None
    max_items: Optional[int] = None
    min_value: Optional[int | float] = None
    max_value: Optional[int | float] = None
    pattern: Optional[str] = None
    format: Optional[str] = None
    date_format: Optional[str] = None
    bail: bool = False
    custom_rules: tuple[CustomRule, ...] = field(default_factory=tuple)


_EMPTY = Annotations()

_FACETS = (
    "min_length",
    "max_length",
    "min_items",
    "max_items",
    "min_value",
    "max_value",
    "pattern",
    "format",
    "bail",
)


class AnnotationStore:
    """Program-wide annotation side table."""

    def __init__(self) -> None:
        self._records: dict["TypeNode", Annotations] = {}

    def get(self, node: "TypeNode") -> Annotations:
        return self._records.get(node, _EMPTY)

    def annotate(self, node: "TypeNode", **facets: Any) -> None:
        """
        Attach declared facets (bounds, pattern, format, bail) to a node.

        A facet passed as ``None`` is ignored. Re-annotating a facet replaces
        the previous value.
        """
        unknown = set(facets) - set(_FACETS)
        if unknown:
            raise TypeError(f"Unknown annotation facet(s): {', '.join(sorted(unknown))}")
        values = {key: value for key, value in facets.items() if value is not None}
        if values:
            self._records[node] = replace(self.get(node), **values)

    def set_date_format(self, node: "TypeNode", date_format: str) -> None:
        self._records[node] = replace(self.get(node), date_format=date_format)

    def date_format(self, node: "TypeNode") -> Optional[str]:
        return self.get(node).date_format

    def add_custom_rule(self, node: "TypeNode", rule: CustomRule | dict) -> None:
        """
        Append a custom rule to the node's list.

        Accepts a plain string, a :class:`RawCustomRule` or a ``{"raw": ...}``
        mapping. Anything else is ignored.
        """
        resolved: Optional[CustomRule] = None
        if isinstance(rule, (str, RawCustomRule)):
            resolved = rule
        elif isinstance(rule, dict) and isinstance(rule.get("raw"), str):
            resolved = RawCustomRule(raw=rule["raw"])

        if resolved is None:
            logging.debug(f"[ANNOTATIONS] Ignoring custom rule of unsupported shape: {rule!r}")
            return

        current = self.get(node)
        self._records[node] = replace(current, custom_rules=current.custom_rules + (resolved,))

    def custom_rules(self, node: "TypeNode") -> list[CustomRule]:
        return list(self.get(node).custom_rules)

    def copy(self, source: "TypeNode", target: "TypeNode") -> None:
        """Give ``target`` the same annotations as ``source`` (used for spread properties)."""
        if source in self._records:
            self._records[target] = self._records[source]
