"""
Type-graph walker.

Walks a type graph top-down and returns, per node, either a single
:class:`Constraint` (scalar position) or an ordered list of
:class:`FieldRule` (field position). ``None`` means the node contributed
nothing: an unhandled kind (``unknown``, ``void``...) or a model that is
already being walked higher up the stack. Callers skip such results.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Optional, Union

from fast_rules.core.constraint import Constraint, FieldRule
from fast_rules.core.synthesizer import (
    apply_annotations,
    apply_requirement_policy,
    number_kind,
    std_scalar_constraint,
)
from fast_rules.core.types import LITERAL_KINDS, is_null_type, structural_kind

if TYPE_CHECKING:
    from fast_rules.core.program import Program
    from fast_rules.core.types import (
        Enum,
        EnumMember,
        Model,
        ModelProperty,
        Scalar,
        TypeNode,
        Union as UnionType,
        UnionVariant,
    )


WalkResult = Optional[Union[Constraint, list[FieldRule]]]


class RuleWalker:

    def __init__(self, program: "Program"):
        self.program = program
        self._in_progress: set[int] = set()
        self._handlers: dict[str, Callable[..., WalkResult]] = {
            "Model": self._model,
            "ModelProperty": self._model_property,
            "Scalar": self._scalar,
            "BooleanLiteral": self._literal,
            "StringLiteral": self._literal,
            "NumericLiteral": self._literal,
            "Enum": self._enum,
            "EnumMember": self._enum_member,
            "Union": self._union,
            "UnionVariant": self._union_variant,
        }

    @property
    def annotations(self):
        return self.program.annotations

    def emit_type(self, node: "TypeNode") -> WalkResult:
        handler = self._handlers.get(node.kind)
        if handler is None:
            logging.debug(f"[WALKER] No rules for `{node.kind}` node {getattr(node, 'name', '')!r}")
            return None
        return handler(node)

    # Models

    def _model(self, model: "Model") -> WalkResult:
        if model.is_array:
            return self._array_element(model.element_type)

        # Declarations, inline literals and template instantiations all reduce to their properties
        key = id(model)
        if key in self._in_progress:
            logging.debug(f"[WALKER] Circular reference to model `{model.name or '<anonymous>'}` skipped")
            return None

        self._in_progress.add(key)
        try:
            return self._model_properties(model)
        finally:
            self._in_progress.discard(key)

    def _model_properties(self, model: "Model") -> list[FieldRule]:
        rules: list[FieldRule] = []
        for prop in model.properties.values():
            rules.extend(self._model_property(prop))
        return rules

    def _model_property(self, prop: "ModelProperty", optional: Optional[bool] = None) -> list[FieldRule]:
        field = prop.name
        optional = prop.optional if optional is None else optional
        prop_type = prop.type
        if prop_type is None:
            return []

        type_constraint = apply_annotations(self.annotations, prop_type, Constraint())
        property_constraint = apply_annotations(self.annotations, prop, type_constraint)
        merged = apply_requirement_policy(property_constraint, optional=optional)

        if prop_type.kind == "ModelProperty":
            # A reference to another property inherits the referencing property's optionality
            result = self._model_property(prop_type, optional=optional)
        else:
            result = self.emit_type(prop_type)
        if result is None:
            return []

        kind = structural_kind(prop_type)

        if kind == "Object":
            if not isinstance(result, list):
                return []
            return [
                FieldRule(
                    field=f"{field}.{child.field}",
                    constraint=apply_requirement_policy(child.constraint, optional=optional),
                )
                for child in result
            ]

        if kind == "Array":
            container = FieldRule(field=field, constraint=merged.with_facets(type="array"))
            if isinstance(result, list):
                return [container, *(child.prefixed(f"{field}.*") for child in result)]
            return [container, FieldRule(field=f"{field}.*", constraint=result)]

        if kind == "ModelProperty":
            if not result:
                return []
            return [FieldRule(field=field, constraint=result[0].constraint)]

        if not isinstance(result, Constraint):
            logging.debug(f"[WALKER] Property `{field}` resolved to a field list in scalar position; skipped")
            return []
        # Intrinsic formats and bounds of the element count towards the requirement
        constraint = result.overlaid_by(property_constraint)
        return [FieldRule(field=field, constraint=apply_requirement_policy(constraint, optional=optional))]

    def _array_element(self, element: "TypeNode") -> Union[Constraint, list[FieldRule]]:
        result = self.emit_type(element)
        if result is None:
            return []

        if isinstance(result, list):
            if element.kind == "ModelProperty" and len(result) == 1:
                constraint = apply_annotations(self.annotations, element, result[0].constraint)
                return apply_requirement_policy(constraint, optional=False)
            return result

        constraint = apply_annotations(self.annotations, element, result)
        return apply_requirement_policy(constraint, optional=False)

    # Scalars and literals

    def _scalar(self, scalar: "Scalar", _chain: Optional[set[int]] = None) -> Constraint:
        chain = _chain if _chain is not None else set()
        if id(scalar) in chain:
            logging.warning(f"[WALKER] Scalar `{scalar.name}` extends itself; base chain ignored")
            return Constraint()
        chain.add(id(scalar))

        if scalar.std:
            constraint = std_scalar_constraint(scalar.name)
        elif scalar.base is not None:
            constraint = self._scalar(scalar.base, chain)
        else:
            constraint = Constraint()

        return apply_annotations(self.annotations, scalar, constraint)

    def _literal(self, node: "TypeNode") -> Constraint:
        if node.kind == "BooleanLiteral":
            return Constraint(type="boolean", enum=[node.value])
        if node.kind == "StringLiteral":
            return Constraint(type="string", enum=[node.value])
        return Constraint(type=number_kind(node.value), enum=[node.value])

    # Enums

    @staticmethod
    def _member_kind(member: "EnumMember") -> str:
        value = member.value
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return number_kind(value)
        return "string"

    @staticmethod
    def _member_value(member: "EnumMember"):
        return member.name if member.value is None else member.value

    def _enum(self, enum: "Enum") -> Constraint:
        kinds: list[str] = []
        values: list = []
        for member in enum.members.values():
            kind = self._member_kind(member)
            if kind not in kinds:
                kinds.append(kind)
            values.append(self._member_value(member))

        if len(kinds) > 1:
            self.program.report_diagnostic("enum-unique-type", target=enum)

        return Constraint(type=kinds[0] if kinds else None, enum=values)

    def _enum_member(self, member: "EnumMember") -> Constraint:
        return Constraint(type=self._member_kind(member), enum=[self._member_value(member)])

    # Unions

    def _union(self, union: "UnionType") -> Constraint:
        by_kind: dict[str, Constraint] = {}
        nullable = False

        for variant in union.variants:
            variant_type = variant.type
            if is_null_type(variant_type):
                nullable = True
                continue
            if variant_type.kind not in LITERAL_KINDS:
                # Only literal variants are folded; anything else is dropped
                continue

            existing = by_kind.get(variant_type.kind)
            if existing is not None:
                by_kind[variant_type.kind] = existing.with_facets(enum=[*(existing.enum or []), variant_type.value])
                continue

            result = self.emit_type(variant_type)
            if isinstance(result, Constraint):
                by_kind[variant_type.kind] = result

        if len(by_kind) != 1:
            return Constraint()

        (constraint,) = by_kind.values()
        if nullable:
            constraint = constraint.with_facets(nullable=True)
        return constraint

    def _union_variant(self, variant: "UnionVariant") -> WalkResult:
        return self.emit_type(variant.type)
