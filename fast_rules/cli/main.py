#!/usr/bin/env python3
"""fast-rules CLI - compile schema documents into Laravel validation rules."""

import argparse
import sys

from fast_rules.utils.logging import setup_logging
from .emit_command import EmitCommand
from .rules_command import RulesCommand
from .version_command import VersionCommand


def build_parser() -> tuple[argparse.ArgumentParser, dict]:
    parser = argparse.ArgumentParser(
        description="fast-rules CLI - Laravel FormRequest rules from typed API schemas",
        prog="fast-rules"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    commands = [
        EmitCommand(),
        RulesCommand(),
        VersionCommand(),
    ]

    command_map = {}
    for command in commands:
        cmd_parser = subparsers.add_parser(command.name, help=command.help)
        command.configure_parser(cmd_parser)
        command_map[command.name] = command

    return parser, command_map


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser, command_map = build_parser()
    args = parser.parse_args(argv)

    if args.command not in command_map:
        parser.print_help()
        return 1

    setup_logging()
    return command_map[args.command].execute(args)


if __name__ == "__main__":
    sys.exit(main())
