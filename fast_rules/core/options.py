from __future__ import annotations

import os
from typing import Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from fast_rules.config import (
    DEFAULT_BASE_CLASS,
    DEFAULT_CLASS_NAME,
    DEFAULT_NAMESPACE,
    DEFAULT_OUTPUT_FILE,
    OPTION_ENV_VARS,
)
from fast_rules.exceptions.common_exceptions import EnvInvalidException


class EmitterOptions(BaseModel):
    namespace: str = Field(default=DEFAULT_NAMESPACE, min_length=1, description="PHP namespace pattern")
    class_name: str = Field(default=DEFAULT_CLASS_NAME, alias="class-name", min_length=1, description="Class name pattern")
    output_file: str = Field(default=DEFAULT_OUTPUT_FILE, alias="output-file", min_length=1, description="Output file pattern")
    base_class: str = Field(default=DEFAULT_BASE_CLASS, alias="base-class", min_length=1, description="Base class pattern")

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    @classmethod
    def from_env(cls, overrides: Optional[Mapping[str, Optional[str]]] = None) -> "EmitterOptions":
        """
        Build options from `RULES_*` environment variables.

        Args:
            overrides: Option values keyed by their kebab-case name (e.g. from CLI flags).
                ``None`` values are ignored.

        Raises:
            EnvInvalidException: If an environment-supplied value is rejected.
        """
        values: dict[str, str] = {}
        for option, env_name in OPTION_ENV_VARS.items():
            env_value = os.getenv(env_name)
            if env_value is not None:
                values[option] = env_value

        try:
            cls.model_validate(values)
        except ValidationError as exc:
            option = str(exc.errors()[0]["loc"][0])
            if option in cls.model_fields:
                option = cls.model_fields[option].alias or option
            env_name = OPTION_ENV_VARS.get(option, option)
            raise EnvInvalidException(env_name, value=values.get(option)) from exc

        for option, value in (overrides or {}).items():
            if value is not None:
                values[option] = value
        return cls.model_validate(values)
