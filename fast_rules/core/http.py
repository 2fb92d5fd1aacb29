"""
HTTP services and operations, request visibility and payload resolution.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Flag, auto
from typing import Optional

from fast_rules.contracts.schema_provider import SchemaProvider
from fast_rules.core.types import ModelProperty, TypeNode


class Visibility(Flag):
    READ = auto()
    CREATE = auto()
    UPDATE = auto()
    DELETE = auto()
    QUERY = auto()


_REQUEST_VISIBILITY = {
    "get": Visibility.QUERY,
    "head": Visibility.QUERY,
    "post": Visibility.CREATE,
    "put": Visibility.CREATE | Visibility.UPDATE,
    "patch": Visibility.UPDATE,
    "delete": Visibility.DELETE,
}


def resolve_request_visibility(verb: str) -> Visibility:
    """Visibility of request payloads for an HTTP verb. Unknown verbs default to create."""
    return _REQUEST_VISIBILITY.get(verb.lower(), Visibility.CREATE)


def is_visible(prop: ModelProperty, visibility: Visibility) -> bool:
    if not prop.visibility:
        return True
    return any(Visibility[name.upper()] & visibility for name in prop.visibility)


def is_payload_property(prop: ModelProperty, visibility: Visibility) -> bool:
    """Properties bound to headers, query or path are metadata, not payload."""
    return prop.location is None and is_visible(prop, visibility)


@dataclass(eq=False)
class HttpParameter:
    name: str
    location: str
    param: ModelProperty


@dataclass(eq=False)
class HttpBody:
    type: TypeNode
    parameter: Optional[ModelProperty] = None


@dataclass(eq=False)
class Operation:
    name: str
    verb: str = "get"
    parameters: list[HttpParameter] = field(default_factory=list)
    body: Optional[HttpBody] = None


@dataclass(eq=False)
class Service:
    namespace: str
    operations: list[Operation] = field(default_factory=list)


class HttpSchemaProvider(SchemaProvider):
    """
    Resolves anonymous payload models back to the named model they were
    spread from, when their visible payload properties all come from that
    model and cover the same names. Everything else is returned unchanged.
    """

    def effective_payload_type(self, node: TypeNode, visibility: Visibility) -> TypeNode:
        if node.kind != "Model" or node.name or node.is_array:
            return node

        payload = [p for p in node.properties.values() if is_payload_property(p, visibility)]
        if not payload:
            return node

        sources = {id(p.source_model): p.source_model for p in payload if p.source is not None}
        if len(sources) != 1 or any(p.source is None for p in payload):
            return node

        (source,) = sources.values()
        if source is None or not source.name:
            return node

        source_names = {p.name for p in source.properties.values() if is_payload_property(p, visibility)}
        if source_names != {p.name for p in payload}:
            return node
        return source
