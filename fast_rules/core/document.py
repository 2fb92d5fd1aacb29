"""
JSON schema documents.

A document declares scalars, models, enums, unions and the HTTP services
whose operations get validation rules. Loading happens in three passes:
named declarations are created empty, then their members and the operations
are resolved (forward and circular references are fine), and finally model
spreads are applied.

Type references are either strings (``string``, ``Pet``, ``null``,
``Pet.name``) or objects::

    {"array": <ref>}
    {"union": [<ref>, ...]}
    {"literal": "a"}
    {"properties": {...}, "spread": ["Pet"]}
    {"template": "Page", "arguments": [<ref>, ...]}
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Literal, Optional, Union as TypingUnion

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from fast_rules.core.constraint import RawCustomRule
from fast_rules.core.http import HttpBody, HttpParameter, Operation, Service
from fast_rules.core.program import Program
from fast_rules.core.types import (
    Enum,
    EnumMember,
    Model,
    ModelProperty,
    Scalar,
    TypeNode,
    Union,
    UnionVariant,
    array_of,
    intrinsic,
    INTRINSIC_NAMES,
    is_std_scalar_name,
    literal,
    std_scalar,
)
from fast_rules.exceptions.common_exceptions import SchemaDocumentException, UnknownTypeReferenceException


VisibilityName = Literal["read", "create", "update", "delete", "query"]
LocationName = Literal["header", "query", "path", "cookie"]


class AnnotationsSpec(BaseModel):
    min_length: Optional[int] = Field(default=None, alias="minLength", ge=0)
    max_length: Optional[int] = Field(default=None, alias="maxLength", ge=0)
    min_items: Optional[int] = Field(default=None, alias="minItems", ge=0)
    max_items: Optional[int] = Field(default=None, alias="maxItems", ge=0)
    min_value: Optional[TypingUnion[int, float]] = Field(default=None, alias="minValue")
    max_value: Optional[TypingUnion[int, float]] = Field(default=None, alias="maxValue")
    pattern: Optional[str] = None
    format: Optional[str] = None
    date_format: Optional[str] = Field(default=None, alias="dateFormat")
    bail: bool = False
    custom_rules: list[TypingUnion[str, RawCustomRule]] = Field(default_factory=list, alias="customRules")

    model_config = ConfigDict(extra="forbid", populate_by_name=True)


class PropertySpec(BaseModel):
    type: Any
    optional: bool = False
    location: Optional[LocationName] = None
    visibility: list[VisibilityName] = Field(default_factory=list)
    annotations: AnnotationsSpec = Field(default_factory=AnnotationsSpec)

    model_config = ConfigDict(extra="forbid")


def _as_property_specs(value: Any) -> Any:
    """Allow ``"name": "string"`` as shorthand for ``"name": {"type": "string"}``."""
    if not isinstance(value, dict):
        return value
    return {
        name: spec if isinstance(spec, dict) and "type" in spec else {"type": spec}
        for name, spec in value.items()
    }


class ModelSpec(BaseModel):
    properties: dict[str, PropertySpec] = Field(default_factory=dict)
    spread: list[str] = Field(default_factory=list)
    parameters: list[str] = Field(default_factory=list, description="Template parameter names")
    annotations: AnnotationsSpec = Field(default_factory=AnnotationsSpec)

    model_config = ConfigDict(extra="forbid")

    @field_validator("properties", mode="before")
    @classmethod
    def _normalize_properties(cls, value: Any) -> Any:
        return _as_property_specs(value)


class ScalarSpec(BaseModel):
    extends: Optional[str] = None
    annotations: AnnotationsSpec = Field(default_factory=AnnotationsSpec)

    model_config = ConfigDict(extra="forbid")


class EnumSpec(BaseModel):
    members: dict[str, Optional[TypingUnion[int, float, str]]] = Field(default_factory=dict)
    annotations: AnnotationsSpec = Field(default_factory=AnnotationsSpec)

    model_config = ConfigDict(extra="forbid")

    @field_validator("members", mode="before")
    @classmethod
    def _members_from_list(cls, value: Any) -> Any:
        # ["red", "green"] is shorthand for value-less members
        if isinstance(value, list):
            return {name: None for name in value}
        return value


class UnionSpec(BaseModel):
    variants: list[Any] = Field(default_factory=list)
    annotations: AnnotationsSpec = Field(default_factory=AnnotationsSpec)

    model_config = ConfigDict(extra="forbid")


class ParameterSpec(PropertySpec):
    name: str
    location: LocationName = "query"


class BodySpec(BaseModel):
    type: Any
    optional: bool = False

    model_config = ConfigDict(extra="forbid")


class OperationSpec(BaseModel):
    name: str = Field(..., min_length=1)
    verb: Literal["get", "head", "post", "put", "patch", "delete"] = "get"
    parameters: list[ParameterSpec] = Field(default_factory=list)
    body: Optional[BodySpec] = None

    model_config = ConfigDict(extra="forbid")

    @field_validator("verb", mode="before")
    @classmethod
    def _lower_verb(cls, value: Any) -> Any:
        return value.lower() if isinstance(value, str) else value


class ServiceSpec(BaseModel):
    namespace: str = ""
    operations: list[OperationSpec] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")


class DocumentSpec(BaseModel):
    namespace: str = ""
    scalars: dict[str, ScalarSpec] = Field(default_factory=dict)
    models: dict[str, ModelSpec] = Field(default_factory=dict)
    enums: dict[str, EnumSpec] = Field(default_factory=dict)
    unions: dict[str, UnionSpec] = Field(default_factory=dict)
    services: list[ServiceSpec] = Field(default_factory=list)
    operations: list[OperationSpec] = Field(default_factory=list)

    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="after")
    def _unique_names(self) -> "DocumentSpec":
        seen: set[str] = set()
        for group in (self.scalars, self.models, self.enums, self.unions):
            for name in group:
                if name in seen or is_std_scalar_name(name) or name in INTRINSIC_NAMES:
                    raise ValueError(f"Duplicate or reserved declaration name `{name}`")
                seen.add(name)
        return self


class DocumentBuilder:
    """Turns a validated :class:`DocumentSpec` into a :class:`Program`."""

    def __init__(self, spec: DocumentSpec):
        self.spec = spec
        self.program = Program(namespace=spec.namespace)
        self._declared: dict[str, TypeNode] = {}
        self._templates: dict[str, ModelSpec] = {}
        self._instantiations: dict[tuple, Model] = {}
        self._pending_spreads: dict[int, tuple[Model, list[str]]] = {}
        self._spread_state: dict[int, str] = {}

    def build(self) -> Program:
        self._declare()
        self._resolve_declarations()
        self._resolve_services()
        self._apply_spreads()
        return self.program

    # Pass 1

    def _declare(self) -> None:
        for name in self.spec.scalars:
            self._declared[name] = Scalar(name=name)
        for name, model_spec in self.spec.models.items():
            if model_spec.parameters:
                self._templates[name] = model_spec
                continue
            model = Model(name=name)
            for prop_name, prop_spec in model_spec.properties.items():
                model.add_property(self._new_property(prop_name, prop_spec))
            self._declared[name] = model
        for name, enum_spec in self.spec.enums.items():
            enum = Enum(name=name)
            for member_name, value in enum_spec.members.items():
                enum.add_member(EnumMember(name=member_name, value=value))
            self._declared[name] = enum
        for name in self.spec.unions:
            self._declared[name] = Union(name=name)

    def _new_property(self, name: str, spec: PropertySpec) -> ModelProperty:
        return ModelProperty(
            name=name,
            optional=spec.optional,
            location=spec.location,
            visibility=frozenset(spec.visibility),
        )

    # Pass 2

    def _resolve_declarations(self) -> None:
        for name, scalar_spec in self.spec.scalars.items():
            scalar = self._declared[name]
            if scalar_spec.extends is not None:
                base = self._resolve(scalar_spec.extends, context=f"scalar `{name}`")
                if base.kind != "Scalar":
                    raise SchemaDocumentException(f"Scalar `{name}` can only extend a scalar, not `{scalar_spec.extends}`")
                scalar.base = base
            self._annotate(scalar, scalar_spec.annotations)

        for name, model_spec in self.spec.models.items():
            if name in self._templates:
                continue
            model = self._declared[name]
            self._fill_properties(model, model_spec, params={}, context=f"model `{name}`")
            if model_spec.spread:
                self._pending_spreads[id(model)] = (model, model_spec.spread)
            self._annotate(model, model_spec.annotations)

        for name, enum_spec in self.spec.enums.items():
            self._annotate(self._declared[name], enum_spec.annotations)

        for name, union_spec in self.spec.unions.items():
            union = self._declared[name]
            union.variants = [
                UnionVariant(type=self._resolve(ref, context=f"union `{name}`")) for ref in union_spec.variants
            ]
            self._annotate(union, union_spec.annotations)

        logging.debug(f"[DOCUMENT] Resolved {len(self._declared)} declarations")

    def _fill_properties(self, model: Model, spec: ModelSpec, *, params: dict[str, TypeNode], context: str) -> None:
        for prop_name, prop_spec in spec.properties.items():
            prop = model.properties.get(prop_name) or model.add_property(self._new_property(prop_name, prop_spec))
            prop.type = self._resolve(prop_spec.type, params=params, context=f"{context}.{prop_name}")
            self._annotate(prop, prop_spec.annotations)

    def _annotate(self, node: TypeNode, spec: AnnotationsSpec) -> None:
        store = self.program.annotations
        store.annotate(
            node,
            min_length=spec.min_length,
            max_length=spec.max_length,
            min_items=spec.min_items,
            max_items=spec.max_items,
            min_value=spec.min_value,
            max_value=spec.max_value,
            pattern=spec.pattern,
            format=spec.format,
            bail=spec.bail or None,
        )
        if spec.date_format is not None:
            store.set_date_format(node, spec.date_format)
        for rule in spec.custom_rules:
            store.add_custom_rule(node, rule)

    def _resolve_services(self) -> None:
        services = list(self.spec.services)
        if not services and self.spec.operations:
            services = [ServiceSpec(namespace=self.spec.namespace, operations=self.spec.operations)]

        for service_spec in services:
            service = Service(namespace=service_spec.namespace or self.spec.namespace)
            for op_spec in service_spec.operations:
                service.operations.append(self._operation(op_spec))
            self.program.services.append(service)

    def _operation(self, spec: OperationSpec) -> Operation:
        context = f"operation `{spec.name}`"
        operation = Operation(name=spec.name, verb=spec.verb)

        for param_spec in spec.parameters:
            param = self._new_property(param_spec.name, param_spec)
            param.type = self._resolve(param_spec.type, context=f"{context} parameter `{param_spec.name}`")
            self._annotate(param, param_spec.annotations)
            operation.parameters.append(HttpParameter(name=param_spec.name, location=param_spec.location, param=param))

        if spec.body is not None:
            body_type = self._resolve(spec.body.type, context=f"{context} body")
            operation.body = HttpBody(
                type=body_type,
                parameter=ModelProperty(name="body", type=body_type, optional=spec.body.optional),
            )
        return operation

    # References

    def _resolve(self, ref: Any, *, params: Optional[dict[str, TypeNode]] = None, context: str = "") -> TypeNode:
        params = params or {}

        if isinstance(ref, str):
            return self._resolve_name(ref, params=params, context=context)

        if not isinstance(ref, dict):
            raise SchemaDocumentException(f"Invalid type reference {ref!r} in {context}")

        if "array" in ref:
            return array_of(self._resolve(ref["array"], params=params, context=context))
        if "union" in ref:
            variants = ref["union"]
            if not isinstance(variants, list):
                raise SchemaDocumentException(f"`union` must be a list in {context}")
            return Union(variants=[UnionVariant(type=self._resolve(v, params=params, context=context)) for v in variants])
        if "literal" in ref:
            value = ref["literal"]
            if not isinstance(value, (bool, int, float, str)):
                raise SchemaDocumentException(f"Unsupported literal {value!r} in {context}")
            return literal(value)
        if "template" in ref:
            return self._instantiate(ref, params=params, context=context)
        if "properties" in ref or "spread" in ref:
            return self._anonymous_model(ref, params=params, context=context)

        raise SchemaDocumentException(f"Invalid type reference {ref!r} in {context}")

    def _resolve_name(self, name: str, *, params: dict[str, TypeNode], context: str) -> TypeNode:
        if name in params:
            return params[name]
        if is_std_scalar_name(name):
            return std_scalar(name)
        if name in INTRINSIC_NAMES:
            return intrinsic(name)
        if name in self._declared:
            return self._declared[name]

        owner_name, _, member_name = name.partition(".")
        owner = self._declared.get(owner_name)
        if member_name and owner is not None:
            if owner.kind == "Model" and member_name in owner.properties:
                return owner.properties[member_name]
            if owner.kind == "Enum" and member_name in owner.members:
                return owner.members[member_name]

        raise UnknownTypeReferenceException(name, context=context)

    def _anonymous_model(self, ref: dict, *, params: dict[str, TypeNode], context: str) -> Model:
        try:
            spec = ModelSpec.model_validate(ref)
        except ValidationError as exc:
            raise SchemaDocumentException(f"Invalid inline model in {context}", errors=exc.errors()) from exc

        model = Model()
        self._fill_properties(model, spec, params=params, context=context)
        self._annotate(model, spec.annotations)
        if spec.spread:
            self._pending_spreads[id(model)] = (model, spec.spread)
        return model

    def _instantiate(self, ref: dict, *, params: dict[str, TypeNode], context: str) -> Model:
        name = ref["template"]
        template = self._templates.get(name)
        if template is None:
            raise UnknownTypeReferenceException(str(name), context=context)
        if template.spread:
            raise SchemaDocumentException(f"Template model `{name}` cannot spread other models")

        arguments = [self._resolve(arg, params=params, context=context) for arg in ref.get("arguments", [])]
        if len(arguments) != len(template.parameters):
            raise SchemaDocumentException(
                f"Template `{name}` expects {len(template.parameters)} argument(s), got {len(arguments)} in {context}"
            )

        key = (name, *(id(arg) for arg in arguments))
        if key in self._instantiations:
            return self._instantiations[key]

        model = Model(name=name, template_arguments=arguments)
        self._instantiations[key] = model
        self._fill_properties(
            model,
            template,
            params=dict(zip(template.parameters, arguments)),
            context=f"{context} -> {name}",
        )
        self._annotate(model, template.annotations)
        return model

    # Pass 3

    def _apply_spreads(self) -> None:
        for model, _ in list(self._pending_spreads.values()):
            self._apply_spread(model)

    def _apply_spread(self, model: Model) -> None:
        key = id(model)
        state = self._spread_state.get(key)
        if state == "done" or key not in self._pending_spreads:
            return
        if state == "active":
            raise SchemaDocumentException(f"Circular spread involving model `{model.name or '<anonymous>'}`")

        self._spread_state[key] = "active"
        _, source_names = self._pending_spreads[key]

        copied: dict[str, ModelProperty] = {}
        for source_name in source_names:
            source = self._declared.get(source_name)
            if source is None or source.kind != "Model":
                raise UnknownTypeReferenceException(source_name, context=f"spread into `{model.name or '<anonymous>'}`")
            self._apply_spread(source)
            for prop in source.properties.values():
                copy = ModelProperty(
                    name=prop.name,
                    type=prop.type,
                    optional=prop.optional,
                    location=prop.location,
                    visibility=prop.visibility,
                    model=model,
                    source=prop,
                )
                self.program.annotations.copy(prop, copy)
                copied[prop.name] = copy

        # Spread properties come first; the model's own declarations win on name clashes
        own = dict(model.properties)
        model.properties = {**{name: prop for name, prop in copied.items() if name not in own}, **own}
        self._spread_state[key] = "done"


def build_program(data: Any) -> Program:
    """
    Build a program from an already-parsed document.

    Raises:
        SchemaDocumentException: If the document is malformed or references unknown types.
    """
    try:
        spec = DocumentSpec.model_validate(data)
    except ValidationError as exc:
        raise SchemaDocumentException("Invalid schema document", errors=exc.errors()) from exc
    return DocumentBuilder(spec).build()


def load_document(path: str | Path) -> Program:
    """Read and build a JSON schema document."""
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise SchemaDocumentException(f"Schema document not found: {path}") from exc
    except json.JSONDecodeError as exc:
        raise SchemaDocumentException(f"Schema document {path} is not valid JSON: {exc}") from exc

    program = build_program(data)
    logging.debug(f"[DOCUMENT] Loaded {path} ({len(program.services)} service(s))")
    return program
