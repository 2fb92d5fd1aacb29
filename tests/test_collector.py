from fast_rules.contracts import SchemaProvider
from fast_rules.core.collector import RuleCollector, collect_operation_rules
from fast_rules.core.constraint import Constraint, Requirement
from fast_rules.core.http import HttpBody, HttpParameter, Operation
from fast_rules.core.types import Model, ModelProperty, std_scalar


def _param(name, location, type_, optional=False):
    return HttpParameter(
        name=name,
        location=location,
        param=ModelProperty(name=name, type=type_, optional=optional, location=location),
    )


def _body(**properties):
    model = Model()
    for name, type_ in properties.items():
        model.add_property(ModelProperty(name=name, type=type_))
    return HttpBody(type=model)


def test_header_parameters_are_skipped(program):
    operation = Operation(
        name="getPet",
        parameters=[
            _param("X-Request-Id", "header", std_scalar("string")),
            _param("petId", "path", std_scalar("int32")),
            _param("fields", "query", std_scalar("string"), optional=True),
        ],
    )

    rules = collect_operation_rules(program, operation)

    assert rules == {
        "petId": Constraint(requirements=Requirement.PRESENT, type="integer"),
        "fields": Constraint(requirements=Requirement.SOMETIMES, type="string"),
    }


def test_body_overwrites_parameter_and_keeps_position(program, annotations):
    body = _body(name=std_scalar("string"), age=std_scalar("int32"))
    annotations.annotate(body.type.properties["name"], min_length=1)
    operation = Operation(
        name="updatePet",
        verb="patch",
        parameters=[
            _param("name", "query", std_scalar("string"), optional=True),
            _param("petId", "path", std_scalar("int32")),
        ],
        body=body,
    )

    rules = RuleCollector(program).collect(operation)

    assert list(rules) == ["name", "petId", "age"]
    assert rules["name"] == Constraint(requirements=Requirement.REQUIRED, type="string", min_length=1)


def test_scalar_body_is_skipped(program):
    operation = Operation(
        name="upload",
        verb="post",
        parameters=[_param("petId", "path", std_scalar("int32"))],
        body=HttpBody(type=std_scalar("bytes")),
    )

    assert list(collect_operation_rules(program, operation)) == ["petId"]


def test_operation_without_inputs(program):
    assert collect_operation_rules(program, Operation(name="ping")) == {}


class RenamingProvider(SchemaProvider):
    """Provider that swaps every body for a fixed model."""

    def __init__(self, replacement):
        self.replacement = replacement

    def effective_payload_type(self, node, visibility):
        return self.replacement if node.kind == "Model" else node


def test_custom_schema_provider(program):
    replacement = Model(name="Replacement")
    replacement.add_property(ModelProperty(name="token", type=std_scalar("string")))
    operation = Operation(name="login", verb="post", body=_body(user=std_scalar("string")))

    rules = collect_operation_rules(program, operation, provider=RenamingProvider(replacement))

    assert list(rules) == ["token"]
