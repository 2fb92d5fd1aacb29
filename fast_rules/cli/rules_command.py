"""Print the validation rules of each operation as JSON."""

import argparse
import json

from fast_rules.core.emitter import FormRequestEmitter
from fast_rules.exceptions import AppException
from .command_base import CommandBase


class RulesCommand(CommandBase):
    """Command to inspect generated rules without rendering files."""

    takes_document = True

    @property
    def name(self) -> str:
        return "rules"

    @property
    def help(self) -> str:
        return "Print field -> rule mappings per operation as JSON"

    def configure_parser(self, parser: argparse.ArgumentParser) -> None:
        super().configure_parser(parser)
        parser.add_argument("--operation", help="Only print this operation")

    def execute(self, args: argparse.Namespace) -> int:
        try:
            program = self.load_program(args)
        except AppException as exc:
            return self.fail(exc)

        emitter = FormRequestEmitter(program)
        output: dict[str, dict[str, str]] = {}
        for service in program.services:
            for operation in service.operations:
                if args.operation and operation.name != args.operation:
                    continue
                output[operation.name] = emitter.operation_rules(operation)

        if args.operation and not output:
            return self.fail(f"Unknown operation: {args.operation}")

        print(json.dumps(output, indent=2, ensure_ascii=False))
        return 0
