"""Console output formatting utilities for autocheck."""

from __future__ import annotations

import sys
from typing import Iterable, Optional

from ..environments import Environment
from ..model import Configuration, Error


class Console:
    """Centralized console output formatting."""

    def __init__(self, debug: bool = False):
        """
        Initialize console formatter.

        Args:
            debug: If True, show detailed output including stack traces
        """
        self.debug = debug

    def print_compile_started(self, script: str, statement_count: int) -> None:
        """Print compile start information."""
        print("\nCOMPILE STARTED")
        print(f"Script: {script}")
        print(f"Statements: {statement_count}")
        print()

    def print_configuration(self, configuration: Configuration) -> None:
        """Print a human readable summary of a compiled configuration."""
        print(f"Environment: {configuration.environment or '-'}")
        print(f"Image: {configuration.image or '-'}")
        if configuration.required_files:
            print(f"Required files: {', '.join(configuration.required_files)}")
        if configuration.allowed_file_extensions:
            print(f"Allowed extensions: {', '.join(configuration.allowed_file_extensions)}")
        if configuration.grade is not None:
            print(f"Grade: {configuration.grade}")
        print(f"Network access: {'yes' if configuration.network_access else 'no'}")
        for step in configuration.steps:
            print(f"\nSTEP: {step.name}")
            if not step.commands:
                print("  (no commands)")
            for command in step.commands:
                # first line only; multi-line scripts get noisy
                first = command.args[0].split("\n")[0] if command.args else ""
                print(f"  {command.kind}: {first}")

    def print_compile_errors(self, errors: Iterable[Error]) -> None:
        """Print every compile error, one per line, in discovery order."""
        errors = list(errors)
        print(f"\nCOMPILE FAILED ({len(errors)} error{'s' if len(errors) != 1 else ''})", file=sys.stderr)
        for error in errors:
            print(f"  {error.format().rstrip()}", file=sys.stderr)

    def print_success(self, name: str) -> None:
        """Print success message."""
        print(f"\nSTATUS: ok ({name})")

    def print_environments(self, environments: Iterable[Environment]) -> None:
        """Print registered environments and their step commands."""
        for env in environments:
            print(f"\n{env.id}")
            params = ", ".join(f"{p}:" for p in env.parameters) or "-"
            print(f"  parameters: {params}")
            if env.capabilities:
                for cap in env.capabilities.values():
                    print(f"  {cap.name}/{cap.arity}")
            else:
                print("  (no commands)")

    def print_error(
        self,
        title: str,
        message: str,
        details: Optional[list[str]] = None,
        suggestion: Optional[str] = None,
    ) -> None:
        """
        Print structured error message.

        Args:
            title: Error title
            message: Main error message
            details: Optional list of detail lines
            suggestion: Optional suggestion for user
        """
        print(f"\nERROR: {title}", file=sys.stderr)
        print(f"{message}", file=sys.stderr)
        if details:
            for detail in details:
                print(f"  {detail}", file=sys.stderr)
        if suggestion:
            print(f"\n{suggestion}", file=sys.stderr)

    def print_exception(self, exc: Exception) -> None:
        """Print exception, with full traceback only in debug mode."""
        if self.debug:
            import traceback
            traceback.print_exc()
        else:
            print(f"Error: {exc}", file=sys.stderr)

    def print_debug(self, message: str) -> None:
        """Print debug message (only if debug mode enabled)."""
        if self.debug:
            print(f"[DEBUG] {message}", file=sys.stderr)


# Global console instance (will be initialized by CLI)
_console: Optional[Console] = None


def get_console() -> Console:
    """Get the global console instance."""
    global _console
    if _console is None:
        _console = Console()
    return _console


def set_console(console: Console) -> None:
    """Set the global console instance."""
    global _console
    _console = console
