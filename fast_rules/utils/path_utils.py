import re
from typing import Mapping


_VARIABLE_RE = re.compile(r"\{([a-zA-Z0-9_.-]+)\}")


def interpolate_path(path: str, variables: Mapping[str, str]) -> str:
    """
    Replace ``{name}`` placeholders with the given variables.

    Placeholders without a matching variable are left untouched.

    Example:
        interpolate_path("generated/{service-name}/{class-name}.php",
                         {"service-name": "PetStore", "class-name": "CreatePetRequest"})
        -> "generated/PetStore/CreatePetRequest.php"
    """
    def replace(match: re.Match) -> str:
        value = variables.get(match.group(1))
        return match.group(0) if value is None else value

    return _VARIABLE_RE.sub(replace, path)


def interpolate_namespace(namespace: str, variables: Mapping[str, str]) -> str:
    """Interpolate a backslash-separated PHP namespace pattern."""
    return interpolate_path(namespace.replace("\\", "/"), variables).replace("/", "\\")
