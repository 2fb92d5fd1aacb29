import json
import re
from typing import Any


_WORD_RE = re.compile(r"[A-Z]+(?![a-z])|[A-Z]?[a-z]+|[0-9]+")


def pascal_case_to_snake_case(pascal: type | str) -> str:
    """
    Convert a class name (CamelCase or PascalCase) to snake_case.

    Args:
        pascal: The class or class name as a string.

    Returns:
        str: The snake_case version of the class name.
    """
    if not isinstance(pascal, str):
        pascal = pascal.__name__
    # Insert underscores before capital letters, except at the start
    s1 = re.sub('(.)([A-Z][a-z]+)', r'\1_\2', pascal)
    snake = re.sub('([a-z0-9])([A-Z])', r'\1_\2', s1).lower()
    return snake


def pascal_case(text: str) -> str:
    """
    Convert any identifier-ish text to PascalCase.

    Words are split on non-alphanumerics and case boundaries, so
    ``getPetById``, ``get_pet_by_id`` and ``Pet.Store`` become ``GetPetById``,
    ``GetPetById`` and ``PetStore``.
    """
    return ''.join(word.capitalize() for word in _WORD_RE.findall(text))


def get_exception_error_type(exception: Exception) -> str:
    return pascal_case_to_snake_case(exception.__class__.__name__.replace('Exception', ''))


def js_value(value: Any) -> str:
    """
    Format a scalar the way a JavaScript template literal would.

    Booleans become ``true``/``false`` and integral floats drop their ``.0``.
    """
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def json_string(value: str) -> str:
    """Double-quoted JSON string literal, non-ASCII kept as is."""
    return json.dumps(value, ensure_ascii=False)


def php_single_quoted(value: str) -> str:
    """PHP single-quoted string literal."""
    escaped = value.replace('\\', '\\\\').replace("'", "\\'")
    return f"'{escaped}'"
