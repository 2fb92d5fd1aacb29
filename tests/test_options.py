import pytest
from pydantic import ValidationError

from fast_rules.config import DEFAULT_NAMESPACE, DEFAULT_OUTPUT_FILE
from fast_rules.core.options import EmitterOptions
from fast_rules.exceptions import EnvInvalidException
from fast_rules.utils.env_utils import configure_env


def test_defaults():
    options = EmitterOptions.from_env()

    assert options.namespace == DEFAULT_NAMESPACE
    assert options.class_name == "{operation-id}Request"
    assert options.output_file == DEFAULT_OUTPUT_FILE
    assert options.base_class == "\\Illuminate\\Foundation\\Http\\FormRequest"


def test_environment_overrides_defaults(monkeypatch):
    monkeypatch.setenv("RULES_NAMESPACE", "App\\Http\\Requests")
    monkeypatch.setenv("RULES_CLASS_NAME", "{operation-id}FormRequest")

    options = EmitterOptions.from_env()

    assert options.namespace == "App\\Http\\Requests"
    assert options.class_name == "{operation-id}FormRequest"


def test_overrides_win_over_environment(monkeypatch):
    monkeypatch.setenv("RULES_BASE_CLASS", "\\App\\Http\\Requests\\BaseRequest")

    options = EmitterOptions.from_env({"base-class": "\\App\\Base", "output-file": None})

    assert options.base_class == "\\App\\Base"
    assert options.output_file == DEFAULT_OUTPUT_FILE


def test_invalid_environment_value(monkeypatch):
    monkeypatch.setenv("RULES_CLASS_NAME", "")

    with pytest.raises(EnvInvalidException) as exc_info:
        EmitterOptions.from_env()

    assert "RULES_CLASS_NAME" in str(exc_info.value)


def test_invalid_override():
    with pytest.raises(ValidationError):
        EmitterOptions.from_env({"namespace": ""})


def test_unknown_option_is_rejected():
    with pytest.raises(ValidationError):
        EmitterOptions.model_validate({"namespaces": "App"})


def test_options_accept_field_names_and_aliases():
    assert EmitterOptions(class_name="X").class_name == "X"
    assert EmitterOptions.model_validate({"class-name": "Y"}).class_name == "Y"


def test_configure_env_loads_env_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    # Registered so the value loaded from the file is removed after the test
    monkeypatch.setenv("RULES_OUTPUT_FILE", "placeholder")
    monkeypatch.delenv("RULES_OUTPUT_FILE")
    (tmp_path / ".env").write_text("RULES_OUTPUT_FILE=out/{class-name}.php\n", encoding="utf-8")

    configure_env()

    assert EmitterOptions.from_env().output_file == "out/{class-name}.php"


def test_configure_env_does_not_override_process_environment(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("RULES_NAMESPACE", "From\\Process")
    (tmp_path / "custom.env").write_text("RULES_NAMESPACE=From\\File\n", encoding="utf-8")

    configure_env("custom.env")

    assert EmitterOptions.from_env().namespace == "From\\Process"
