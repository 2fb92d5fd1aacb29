"""
Laravel FormRequest emission.

One file per operation: the operation's rules are collected, serialized and
written into the ``FormRequest.php`` template. Namespace, class name, base
class and output file come from :class:`EmitterOptions` patterns.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional, TYPE_CHECKING

from fast_rules.core.collector import RuleCollector
from fast_rules.core.laravel import to_laravel_validation_rules
from fast_rules.core.options import EmitterOptions
from fast_rules.exceptions.common_exceptions import TemplateNotFoundException
from fast_rules.utils.path_utils import interpolate_namespace, interpolate_path
from fast_rules.utils.serialisation import pascal_case, php_single_quoted

if TYPE_CHECKING:
    from fast_rules.contracts.schema_provider import SchemaProvider
    from fast_rules.core.http import Operation, Service
    from fast_rules.core.program import Program

TEMPLATES_PATH = Path(__file__).parent.parent / "templates"
FORM_REQUEST_TEMPLATE = TEMPLATES_PATH / "FormRequest.php"

RULE_INDENT = " " * 12


@dataclass(frozen=True)
class EmittedFile:
    operation: str
    namespace: str
    class_name: str
    path: Path
    content: str


def render_form_request(
    *,
    namespace: str,
    class_name: str,
    base_class: str,
    rules: Mapping[str, str],
    template_path: Path = FORM_REQUEST_TEMPLATE,
) -> str:
    """
    Render a FormRequest class body.

    Args:
        namespace: PHP namespace of the class.
        class_name: Class name.
        base_class: Fully-qualified class to extend.
        rules: Ordered field path -> rule array literal.
        template_path: Template to render.
    """
    if not template_path.exists():
        raise TemplateNotFoundException(str(template_path))

    rule_lines = "".join(f"{RULE_INDENT}{php_single_quoted(field)} => {rule},\n" for field, rule in rules.items())
    replacements = {
        "__NAMESPACE__": namespace,
        "__CLASS_NAME__": class_name,
        "__BASE_CLASS__": base_class,
        "__RULES__": rule_lines,
    }

    content = template_path.read_text(encoding="utf-8")
    for placeholder, value in replacements.items():
        content = content.replace(placeholder, value)
    return content


class FormRequestEmitter:
    """Emits one FormRequest per operation of every service in a program."""

    def __init__(
        self,
        program: "Program",
        options: Optional[EmitterOptions] = None,
        provider: Optional["SchemaProvider"] = None,
    ):
        self.program = program
        self.options = options or EmitterOptions()
        self.collector = RuleCollector(program, provider)

    def operation_rules(self, operation: "Operation") -> dict[str, str]:
        return to_laravel_validation_rules(self.collector.collect(operation))

    def render_operation(self, service: "Service", operation: "Operation", output_dir: Path) -> EmittedFile:
        service_name = pascal_case(service.namespace)
        operation_id = pascal_case(operation.name)

        namespace = interpolate_namespace(self.options.namespace, {"service-name": service_name})
        class_name = interpolate_path(
            self.options.class_name,
            {"service-name": service_name, "operation-id": operation_id},
        )
        output_file = interpolate_path(
            self.options.output_file,
            {"service-name": service_name, "class-name": class_name, "operation-id": operation_id},
        )
        base_class = interpolate_path(self.options.base_class, {"service-name": service_name})

        content = render_form_request(
            namespace=namespace,
            class_name=class_name,
            base_class=base_class,
            rules=self.operation_rules(operation),
        )
        return EmittedFile(
            operation=operation.name,
            namespace=namespace,
            class_name=class_name,
            path=output_dir / output_file,
            content=content,
        )

    def emit(self, output_dir: str | Path = ".", *, write: bool = True) -> list[EmittedFile]:
        """
        Render every operation and, unless ``write`` is False, write the files.

        Returns:
            The rendered files in service/operation order.
        """
        output_dir = Path(output_dir)
        emitted: list[EmittedFile] = []

        for service in self.program.services:
            for operation in service.operations:
                emitted_file = self.render_operation(service, operation, output_dir)
                emitted.append(emitted_file)

                if write:
                    emitted_file.path.parent.mkdir(parents=True, exist_ok=True)
                    emitted_file.path.write_text(emitted_file.content, encoding="utf-8")
                    logging.info(f"[EMIT] {operation.name} -> {emitted_file.path}")

        return emitted
