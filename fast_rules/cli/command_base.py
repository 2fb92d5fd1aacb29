"""Base command for fast-rules CLI operations."""

import argparse
from abc import ABC, abstractmethod

from fast_rules.core.document import load_document
from fast_rules.core.program import Program


class CommandBase(ABC):
    """Base class for all CLI commands."""

    # Commands that compile a schema document take it as first positional argument
    takes_document: bool = False

    @property
    @abstractmethod
    def name(self) -> str:
        """Command name."""
        pass

    @property
    @abstractmethod
    def help(self) -> str:
        """Command help text."""
        pass

    def configure_parser(self, parser: argparse.ArgumentParser) -> None:
        """Register the document argument; override to add command flags."""
        if self.takes_document:
            parser.add_argument("document", help="Path to the JSON schema document")

    @abstractmethod
    def execute(self, args: argparse.Namespace) -> int:
        """Execute the command and return the process exit code."""
        pass

    def load_program(self, args: argparse.Namespace) -> Program:
        """Raises SchemaDocumentException when the document cannot be built."""
        return load_document(args.document)

    @staticmethod
    def fail(message: object) -> int:
        print(f"❌ {message}")
        return 1
