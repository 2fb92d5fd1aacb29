from fast_rules.core.constraint import Constraint, Requirement
from fast_rules.core.types import (
    Enum,
    EnumMember,
    Model,
    ModelProperty,
    Union,
    UnionVariant,
    intrinsic,
    literal,
    std_scalar,
    union_of,
)


def test_string_literal_union(walker):
    union = union_of(literal("a"), literal("b"))

    assert walker.emit_type(union) == Constraint(type="string", enum=["a", "b"])


def test_null_variant_sets_nullable(walker):
    union = union_of(literal("a"), literal("b"), intrinsic("null"))

    assert walker.emit_type(union) == Constraint(type="string", enum=["a", "b"], nullable=True)


def test_mixed_literal_kinds_yield_empty_constraint(walker):
    assert walker.emit_type(union_of(literal("a"), literal(1))) == Constraint()


def test_non_literal_variants_are_dropped(walker):
    union = union_of(literal("a"), std_scalar("string"))

    assert walker.emit_type(union) == Constraint(type="string", enum=["a"])


def test_union_of_only_null_is_empty(walker):
    assert walker.emit_type(union_of(intrinsic("null"))) == Constraint()


def test_named_union_folds_like_anonymous(walker):
    union = Union(name="Size", variants=[UnionVariant(type=literal(1)), UnionVariant(type=literal(2))])

    assert walker.emit_type(union) == Constraint(type="integer", enum=[1, 2])


def test_union_variant_walks_its_type(walker):
    assert walker.emit_type(UnionVariant(type=literal("x"))) == Constraint(type="string", enum=["x"])


def test_nullable_union_property(walker):
    model = Model(name="Pet")
    model.add_property(ModelProperty(name="kind", type=union_of(literal("cat"), literal("dog"), intrinsic("null"))))

    (rule,) = walker.emit_type(model)

    assert rule.constraint == Constraint(
        requirements=Requirement.PRESENT,
        type="string",
        nullable=True,
        enum=["cat", "dog"],
    )


def _enum(name, **members):
    enum = Enum(name=name)
    for member_name, value in members.items():
        enum.add_member(EnumMember(name=member_name, value=value))
    return enum


def test_enum_uses_member_names_without_values(walker, program):
    enum = _enum("Color", red=None, green=None)

    assert walker.emit_type(enum) == Constraint(type="string", enum=["red", "green"])
    assert program.diagnostics == []


def test_numeric_enum(walker):
    assert walker.emit_type(_enum("Level", low=1, high=2)) == Constraint(type="integer", enum=[1, 2])


def test_enum_keeps_duplicate_values(walker):
    assert walker.emit_type(_enum("Alias", a="x", b="x")) == Constraint(type="string", enum=["x", "x"])


def test_mixed_enum_reports_diagnostic(walker, program):
    enum = _enum("Mixed", one=1, two="two")

    result = walker.emit_type(enum)

    assert result == Constraint(type="integer", enum=[1, "two"])
    (diagnostic,) = program.diagnostics
    assert diagnostic.code == "enum-unique-type"
    assert diagnostic.severity == "warning"
    assert diagnostic.target is enum
    assert "Mixed" in str(diagnostic)
    assert not program.has_errors()


def test_enum_member_reference(walker):
    enum = _enum("Ratio", half=0.5, whole=1)

    assert walker.emit_type(enum.members["half"]) == Constraint(type="numeric", enum=[0.5])
    assert walker.emit_type(enum.members["whole"]) == Constraint(type="integer", enum=[1])


def test_mixed_enum_diagnostic_is_not_repeated(walker, program):
    enum = _enum("Mixed", one=1, two="two")
    other = _enum("Other", one=1, two="two")

    walker.emit_type(enum)
    walker.emit_type(enum)
    walker.emit_type(other)

    assert [diagnostic.target for diagnostic in program.diagnostics] == [enum, other]
