"""
Type-graph nodes consumed by the rule walker.

The graph is a closed set of node kinds. Every node class carries a ``kind``
tag and the walker dispatches on it. Nodes compare and hash by identity so the
annotation store can use them as keys, and a graph may contain cycles
(a model referencing itself through one of its properties).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Optional, Union as TypingUnion


STD_SCALAR_NAMES = (
    "boolean",
    "integer",
    "int8",
    "int16",
    "int32",
    "int64",
    "safeint",
    "uint8",
    "uint16",
    "uint32",
    "uint64",
    "numeric",
    "float",
    "float32",
    "float64",
    "decimal",
    "decimal128",
    "string",
    "url",
    "bytes",
    "plainDate",
    "plainTime",
    "duration",
    "utcDateTime",
    "offsetDateTime",
)

INTRINSIC_NAMES = ("null", "unknown", "void", "never")


@dataclass(eq=False)
class Scalar:
    name: str
    base: Optional["Scalar"] = None
    std: bool = False

    kind: ClassVar[str] = "Scalar"


@dataclass(eq=False)
class Intrinsic:
    name: str

    kind: ClassVar[str] = "Intrinsic"


@dataclass(eq=False)
class BooleanLiteral:
    value: bool

    kind: ClassVar[str] = "BooleanLiteral"


@dataclass(eq=False)
class StringLiteral:
    value: str

    kind: ClassVar[str] = "StringLiteral"


@dataclass(eq=False)
class NumericLiteral:
    value: int | float

    kind: ClassVar[str] = "NumericLiteral"


@dataclass(eq=False)
class ModelIndexer:
    key: Scalar
    value: "TypeNode"


@dataclass(eq=False)
class ModelProperty:
    name: str
    type: Optional["TypeNode"] = None
    optional: bool = False
    # header / query / path / cookie for HTTP metadata properties
    location: Optional[str] = None
    # Lifecycle visibilities; empty means visible everywhere
    visibility: frozenset[str] = frozenset()
    model: Optional["Model"] = None
    # Set when the property was copied into a model by a spread
    source: Optional["ModelProperty"] = None

    kind: ClassVar[str] = "ModelProperty"

    @property
    def source_model(self) -> Optional["Model"]:
        """The model that originally declared this property."""
        prop = self
        while prop.source is not None:
            prop = prop.source
        return prop.model


@dataclass(eq=False)
class Model:
    name: str = ""
    properties: dict[str, ModelProperty] = field(default_factory=dict)
    indexer: Optional[ModelIndexer] = None
    template_arguments: list["TypeNode"] = field(default_factory=list)

    kind: ClassVar[str] = "Model"

    @property
    def is_array(self) -> bool:
        return self.indexer is not None and self.indexer.key.name == "integer"

    @property
    def element_type(self) -> Optional["TypeNode"]:
        return self.indexer.value if self.is_array else None

    def add_property(self, prop: ModelProperty) -> ModelProperty:
        prop.model = self
        self.properties[prop.name] = prop
        return prop


@dataclass(eq=False)
class EnumMember:
    name: str
    value: Optional[str | int | float] = None
    enum: Optional["Enum"] = None

    kind: ClassVar[str] = "EnumMember"


@dataclass(eq=False)
class Enum:
    name: str
    members: dict[str, EnumMember] = field(default_factory=dict)

    kind: ClassVar[str] = "Enum"

    def add_member(self, member: EnumMember) -> EnumMember:
        member.enum = self
        self.members[member.name] = member
        return member


@dataclass(eq=False)
class UnionVariant:
    type: "TypeNode"
    name: Optional[str] = None

    kind: ClassVar[str] = "UnionVariant"


@dataclass(eq=False)
class Union:
    name: str = ""
    variants: list[UnionVariant] = field(default_factory=list)

    kind: ClassVar[str] = "Union"


TypeNode = TypingUnion[
    Model,
    ModelProperty,
    Scalar,
    BooleanLiteral,
    StringLiteral,
    NumericLiteral,
    Enum,
    EnumMember,
    Union,
    UnionVariant,
    Intrinsic,
]

LITERAL_KINDS = ("BooleanLiteral", "StringLiteral", "NumericLiteral")

_std_scalars: dict[str, Scalar] = {name: Scalar(name=name, std=True) for name in STD_SCALAR_NAMES}
_intrinsics: dict[str, Intrinsic] = {name: Intrinsic(name=name) for name in INTRINSIC_NAMES}


def std_scalar(name: str) -> Scalar:
    """Shared instance of a built-in scalar. Raises KeyError for unknown names."""
    return _std_scalars[name]


def intrinsic(name: str) -> Intrinsic:
    return _intrinsics[name]


def is_std_scalar_name(name: str) -> bool:
    return name in _std_scalars


def is_null_type(node: TypeNode) -> bool:
    return node.kind == "Intrinsic" and node.name == "null"


def array_of(element: TypeNode) -> Model:
    """Anonymous array model (``T[]``) of the given element type."""
    return Model(name="Array", indexer=ModelIndexer(key=std_scalar("integer"), value=element))


def literal(value: bool | str | int | float) -> BooleanLiteral | StringLiteral | NumericLiteral:
    if isinstance(value, bool):
        return BooleanLiteral(value)
    if isinstance(value, str):
        return StringLiteral(value)
    return NumericLiteral(value)


def union_of(*types: TypeNode, name: str = "") -> Union:
    return Union(name=name, variants=[UnionVariant(type=t) for t in types])


def structural_kind(node: TypeNode) -> str:
    """Shape of a node as seen from the property that references it."""
    if node.kind == "Model":
        return "Array" if node.is_array else "Object"
    if node.kind == "ModelProperty":
        return "ModelProperty"
    return "Scalar"
