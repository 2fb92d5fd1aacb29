"""Emit Laravel FormRequest classes from a schema document."""

import argparse
import os

from fast_rules.config import DEFAULT_OUTPUT_DIR, OUTPUT_DIR_ENV_VAR
from fast_rules.core.emitter import FormRequestEmitter
from fast_rules.core.options import EmitterOptions
from fast_rules.exceptions import AppException
from fast_rules.utils.env_utils import configure_env
from .command_base import CommandBase


def options_from_args(args: argparse.Namespace) -> EmitterOptions:
    """Options from env files and `RULES_*` variables, overridden by CLI flags."""
    configure_env(args.env_file)
    return EmitterOptions.from_env({
        "namespace": args.namespace,
        "class-name": args.class_name,
        "output-file": args.output_file,
        "base-class": args.base_class,
    })


class EmitCommand(CommandBase):
    """Command to generate FormRequest classes."""

    takes_document = True

    @property
    def name(self) -> str:
        return "emit"

    @property
    def help(self) -> str:
        return "Generate Laravel FormRequest classes from a schema document"

    def configure_parser(self, parser: argparse.ArgumentParser) -> None:
        super().configure_parser(parser)
        parser.add_argument("--output-dir", dest="output_dir", help="Directory generated files are written under")
        parser.add_argument("--namespace", help="PHP namespace pattern, e.g. App\\Http\\{service-name}\\Requests")
        parser.add_argument("--class-name", dest="class_name", help="Class name pattern, e.g. {operation-id}Request")
        parser.add_argument("--output-file", dest="output_file", help="Output file pattern relative to --output-dir")
        parser.add_argument("--base-class", dest="base_class", help="Base class the requests extend")
        parser.add_argument("--env-file", dest="env_file", help="Load options from this env file")
        parser.add_argument(
            "--no-emit",
            dest="no_emit",
            action="store_true",
            help="Compile and report diagnostics without writing files",
        )

    def execute(self, args: argparse.Namespace) -> int:
        try:
            options = options_from_args(args)
            program = self.load_program(args)
            output_dir = args.output_dir or os.getenv(OUTPUT_DIR_ENV_VAR, DEFAULT_OUTPUT_DIR)
            emitted = FormRequestEmitter(program, options).emit(output_dir, write=not args.no_emit)
        except (AppException, ValueError) as exc:
            return self.fail(exc)

        for diagnostic in program.diagnostics:
            print(f"⚠️  {diagnostic}")

        if args.no_emit:
            print(f"☑️ Compiled {len(emitted)} operation(s), nothing written")
        else:
            for emitted_file in emitted:
                print(f"✅ Created {emitted_file.class_name}: {emitted_file.path}")

        return 1 if program.has_errors() else 0
