from __future__ import annotations

import logging
from typing import Optional, TYPE_CHECKING

from fast_rules.core.constraint import Constraint
from fast_rules.core.http import HttpSchemaProvider, resolve_request_visibility
from fast_rules.core.walker import RuleWalker, WalkResult

if TYPE_CHECKING:
    from fast_rules.contracts.schema_provider import SchemaProvider
    from fast_rules.core.http import Operation
    from fast_rules.core.program import Program


class RuleCollector:
    """
    Flattens an operation's parameters and body into one ordered
    field -> constraint mapping.

    Parameters are written first, then the body. Writing a path that already
    exists replaces its constraint and keeps its original position.
    """

    def __init__(self, program: "Program", provider: Optional["SchemaProvider"] = None):
        self.program = program
        self.provider = provider or HttpSchemaProvider()
        self.walker = RuleWalker(program)

    def collect(self, operation: "Operation") -> dict[str, Constraint]:
        rules: dict[str, Constraint] = {}
        visibility = resolve_request_visibility(operation.verb)

        for parameter in operation.parameters:
            if parameter.location == "header":
                continue
            # TODO: exclude path parameters once an opt-out annotation is agreed on
            effective = self.provider.effective_payload_type(parameter.param, visibility)
            self._write(rules, self.walker.emit_type(effective), f"parameter `{parameter.name}`")

        if operation.body is not None:
            effective = self.provider.effective_payload_type(operation.body.type, visibility)
            self._write(rules, self.walker.emit_type(effective), "body")

        return rules

    @staticmethod
    def _write(rules: dict[str, Constraint], result: WalkResult, source: str) -> None:
        if not isinstance(result, list):
            logging.debug(f"[COLLECT] {source} produced no field rules; skipped")
            return
        for rule in result:
            rules[rule.field] = rule.constraint


def collect_operation_rules(
    program: "Program",
    operation: "Operation",
    provider: Optional["SchemaProvider"] = None,
) -> dict[str, Constraint]:
    return RuleCollector(program, provider).collect(operation)
