"""Show version information."""

import argparse
from pathlib import Path
from importlib import metadata as importlib_metadata
import tomllib

from .command_base import CommandBase


class VersionCommand(CommandBase):
    """Command to show version information."""

    @property
    def name(self) -> str:
        return "version"

    @property
    def help(self) -> str:
        return "Show version information"

    def _get_version(self) -> str:
        """Resolve version from pyproject.toml, fallback to installed metadata."""
        pyproject_path = Path(__file__).resolve().parents[2] / "pyproject.toml"
        try:
            with pyproject_path.open("rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError):
            data = {}

        version_value = data.get("project", {}).get("version")
        if isinstance(version_value, str) and version_value:
            return version_value

        try:
            return importlib_metadata.version("fast-rules")
        except importlib_metadata.PackageNotFoundError:
            return "unknown"

    def execute(self, args: argparse.Namespace) -> int:
        print(f"fast-rules v{self._get_version()}")
        return 0
