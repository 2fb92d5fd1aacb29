import json

import pytest

from fast_rules.core.constraint import RawCustomRule
from fast_rules.core.document import build_program, load_document
from fast_rules.core.emitter import FormRequestEmitter
from fast_rules.core.types import std_scalar
from fast_rules.exceptions import SchemaDocumentException, UnknownTypeReferenceException


PET_STORE = {
    "namespace": "PetStore",
    "scalars": {
        "Username": {"extends": "string", "annotations": {"minLength": 3}},
    },
    "models": {
        "Pet": {
            "properties": {
                "name": "Username",
                "tag": {"type": "string", "optional": True},
                "status": "Status",
            },
        },
        "Page": {
            "parameters": ["T"],
            "properties": {
                "items": {"type": {"array": "T"}},
                "total": "int32",
            },
        },
    },
    "enums": {
        "Status": {"members": ["available", "sold"]},
    },
    "operations": [
        {"name": "createPet", "verb": "POST", "body": {"type": "Pet"}},
        {
            "name": "listPets",
            "verb": "get",
            "parameters": [{"name": "limit", "type": "int32", "optional": True}],
            "body": {"type": {"template": "Page", "arguments": ["Pet"]}},
        },
    ],
}


def _rules(program):
    emitter = FormRequestEmitter(program)
    return {
        operation.name: emitter.operation_rules(operation)
        for service in program.services
        for operation in service.operations
    }


def test_pet_store_rules():
    rules = _rules(build_program(PET_STORE))

    assert rules["createPet"] == {
        "name": '["required","string","min:3"]',
        "tag": '["sometimes","string"]',
        "status": '["present","string","in:available,sold"]',
    }
    assert rules["listPets"] == {
        "limit": '["sometimes","integer"]',
        "items": '["present","array"]',
        "items.*.name": '["required","string","min:3"]',
        "items.*.tag": '["sometimes","string"]',
        "items.*.status": '["present","string","in:available,sold"]',
        "total": '["present","integer"]',
    }


def test_top_level_operations_form_one_service():
    program = build_program(PET_STORE)

    (service,) = program.services
    assert service.namespace == "PetStore"
    assert [operation.verb for operation in service.operations] == ["post", "get"]


def test_explicit_services():
    program = build_program({
        "services": [
            {"namespace": "Store", "operations": [{"name": "a"}]},
            {"namespace": "Admin", "operations": [{"name": "b"}, {"name": "c"}]},
        ],
    })

    assert [service.namespace for service in program.services] == ["Store", "Admin"]
    assert [len(service.operations) for service in program.services] == [1, 2]


def test_template_instantiations_are_shared():
    program = build_program({
        "models": {
            "Box": {"parameters": ["T"], "properties": {"value": "T"}},
            "Pair": {
                "properties": {
                    "left": {"template": "Box", "arguments": ["string"]},
                    "right": {"template": "Box", "arguments": ["string"]},
                },
            },
        },
        "operations": [{"name": "pair", "verb": "post", "body": {"type": "Pair"}}],
    })

    body = program.services[0].operations[0].body.type
    left, right = body.properties["left"].type, body.properties["right"].type
    assert left is right
    assert left.template_arguments == [std_scalar("string")]
    assert _rules(program)["pair"] == {
        "left.value": '["present","string"]',
        "right.value": '["present","string"]',
    }


def test_spread_copies_properties_and_annotations():
    program = build_program({
        "models": {
            "Base": {"properties": {"id": {"type": "int64", "annotations": {"minValue": 1}}, "name": "string"}},
            "Pet": {"spread": ["Base"], "properties": {"name": {"type": "string", "optional": True}}},
        },
        "operations": [{"name": "createPet", "verb": "post", "body": {"type": "Pet"}}],
    })

    pet = program.services[0].operations[0].body.type
    assert list(pet.properties) == ["id", "name"]
    assert pet.properties["id"].source_model.name == "Base"
    assert pet.properties["name"].source is None
    assert _rules(program)["createPet"] == {
        "id": '["required","integer","min:1"]',
        "name": '["sometimes","string"]',
    }


def test_anonymous_spread_body_resolves_to_source_model():
    program = build_program({
        "models": {"Pet": {"properties": {"name": "string"}}},
        "operations": [{"name": "createPet", "verb": "post", "body": {"type": {"spread": ["Pet"]}}}],
    })

    assert _rules(program)["createPet"] == {"name": '["present","string"]'}


def test_property_and_member_references():
    program = build_program({
        "models": {
            "Owner": {"properties": {"email": {"type": "string", "annotations": {"format": "email"}}}},
            "Pet": {"properties": {"ownerEmail": {"type": "Owner.email", "optional": True}, "color": "Color.red"}},
        },
        "enums": {"Color": {"members": {"red": "r", "green": "g"}}},
        "operations": [{"name": "createPet", "verb": "post", "body": {"type": "Pet"}}],
    })

    assert _rules(program)["createPet"] == {
        "ownerEmail": '["filled","string","email"]',
        "color": '["present","string","in:r"]',
    }


def test_inline_union_and_literal_references():
    program = build_program({
        "operations": [{
            "name": "search",
            "parameters": [
                {"name": "sort", "type": {"union": [{"literal": "asc"}, {"literal": "desc"}, "null"]}},
            ],
        }],
    })

    assert _rules(program)["search"] == {"sort": '["nullable","present","string","in:asc,desc"]'}


def test_annotations_from_document():
    program = build_program({
        "models": {
            "Event": {
                "properties": {
                    "day": {"type": "string", "annotations": {"dateFormat": "Y-m-d", "bail": True}},
                    "code": {"type": "string", "annotations": {"customRules": ["uppercase", {"raw": "new Code()"}]}},
                },
            },
        },
        "operations": [{"name": "createEvent", "verb": "post", "body": {"type": "Event"}}],
    })

    body = program.services[0].operations[0].body.type
    assert program.annotations.custom_rules(body.properties["code"]) == ["uppercase", RawCustomRule(raw="new Code()")]
    assert _rules(program)["createEvent"] == {
        "day": '["bail","required","string","date_format:Y-m-d"]',
        "code": '["present","string","uppercase",new Code()]',
    }


def test_recursive_models_load():
    program = build_program({
        "models": {"Category": {"properties": {"name": "string", "parent": {"type": "Category", "optional": True}}}},
        "operations": [{"name": "createCategory", "verb": "post", "body": {"type": "Category"}}],
    })

    assert _rules(program)["createCategory"] == {"name": '["present","string"]'}


def test_unknown_reference():
    with pytest.raises(UnknownTypeReferenceException) as exc_info:
        build_program({"models": {"Pet": {"properties": {"owner": "Owner"}}}})

    assert exc_info.value.reference == "Owner"
    assert "model `Pet`.owner" in str(exc_info.value)


def test_invalid_document_shape():
    with pytest.raises(SchemaDocumentException) as exc_info:
        build_program({"models": {}, "unexpected": True})

    assert exc_info.value.errors
    assert exc_info.value.error_type == "schema_document"


def test_reserved_and_duplicate_names():
    with pytest.raises(SchemaDocumentException):
        build_program({"models": {"string": {}}})
    with pytest.raises(SchemaDocumentException):
        build_program({"models": {"Pet": {}}, "enums": {"Pet": {"members": ["a"]}}})


def test_scalar_must_extend_scalar():
    with pytest.raises(SchemaDocumentException):
        build_program({"scalars": {"Bad": {"extends": "Pet"}}, "models": {"Pet": {}}})


def test_circular_spread():
    with pytest.raises(SchemaDocumentException):
        build_program({"models": {"A": {"spread": ["B"]}, "B": {"spread": ["A"]}}})


def test_template_argument_count():
    with pytest.raises(SchemaDocumentException):
        build_program({
            "models": {
                "Box": {"parameters": ["T"], "properties": {"value": "T"}},
                "Holder": {"properties": {"box": {"template": "Box", "arguments": []}}},
            },
        })


def test_load_document(tmp_path):
    path = tmp_path / "petstore.json"
    path.write_text(json.dumps(PET_STORE), encoding="utf-8")

    program = load_document(path)

    assert program.namespace == "PetStore"
    assert len(program.services[0].operations) == 2


def test_load_document_errors(tmp_path):
    with pytest.raises(SchemaDocumentException):
        load_document(tmp_path / "missing.json")

    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    with pytest.raises(SchemaDocumentException):
        load_document(broken)


def test_mixed_enum_diagnostic_is_reported_once():
    program = build_program({
        "models": {"Pet": {"properties": {"a": "Mixed", "b": "Mixed"}}},
        "enums": {"Mixed": {"members": {"one": 1, "two": "two"}}},
        "operations": [
            {"name": "createPet", "verb": "post", "body": {"type": "Pet"}},
            {"name": "updatePet", "verb": "put", "body": {"type": "Pet"}},
        ],
    })

    emitter = FormRequestEmitter(program)
    emitter.emit(write=False)
    emitter.emit(write=False)

    (diagnostic,) = program.diagnostics
    assert diagnostic.code == "enum-unique-type"
    assert diagnostic.target_name == "Mixed"
