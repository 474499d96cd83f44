# cli.py
from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from autocheck import settings
from autocheck.compiler import compile_statements
from autocheck.environments import ENVIRONMENTS
from autocheck.model import CompileResult, Error
from autocheck.syntax import ScriptSyntaxError, parse_script
from autocheck.ui.console import Console, set_console, get_console


def find_script_files() -> list[Path]:
    """
    Find all autocheck scripts in the current directory.

    Returns:
        List of Path objects for script files
    """
    script_files = []
    current_dir = Path(".")

    default_script = current_dir / settings.DEFAULT_SCRIPT
    if default_script.exists():
        script_files.append(default_script)

    for path in current_dir.glob(settings.SCRIPT_GLOB):
        if path != default_script:
            script_files.append(path)

    return sorted(script_files)


def discover_script(script_arg: str | None) -> Path:
    """
    Discover the script file from argument or default.

    Args:
        script_arg: Optional script argument from CLI

    Returns:
        Path to script file

    Raises:
        SystemExit: If the script cannot be found or several scripts exist
    """
    console = get_console()

    if script_arg:
        script_path = Path(script_arg)
        if not script_path.exists():
            console.print_error(
                "Script file not found",
                f"Could not find script file: {script_arg}",
                suggestion=f"Create a script or specify a different path:\n  autocheck check --script {settings.DEFAULT_SCRIPT}",
            )
            sys.exit(1)
        return script_path

    script_files = find_script_files()

    if len(script_files) == 0:
        console.print_error(
            "No script file found",
            "Could not find any autocheck scripts.",
            details=[
                "Looked for:",
                f"  {settings.DEFAULT_SCRIPT}",
                f"  {settings.SCRIPT_GLOB}",
            ],
            suggestion=f"Create a script:\n  {settings.DEFAULT_SCRIPT}\n\nOr specify one explicitly:\n  autocheck check --script lab1.autocheck",
        )
        sys.exit(1)

    if len(script_files) > 1:
        file_list = "\n".join(f"  {f}" for f in script_files)
        console.print_error(
            "Multiple script files found",
            "Found multiple autocheck scripts. Please specify which one to use:",
            details=[file_list],
            suggestion=f"Specify a script explicitly:\n  autocheck check --script {script_files[0]}",
        )
        sys.exit(1)

    return script_files[0]


def compile_script(path: Path, announce: bool = True) -> CompileResult:
    """
    Read, parse and compile one script file.

    Args:
        path: Script to compile
        announce: If False, skip the compile-started banner (for machine readable output)
    """
    console = get_console()
    source = path.read_text(encoding="utf-8")

    try:
        statements = parse_script(source)
    except ScriptSyntaxError as e:
        console.print_debug(f"syntax error in {path}: {e}")
        return CompileResult(
            configuration=None,
            errors=(Error(line=e.line, description=e.description, token=e.token),),
        )

    if announce:
        console.print_compile_started(script=path.name, statement_count=len(statements))
    result = compile_statements(statements)
    console.print_debug(f"{len(result.errors)} error(s) in {path}")
    return result


@click.group()
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Enable debug mode (show stack traces and detailed output)",
)
def cli(debug):
    """autocheck: compile and validate grading environment scripts."""
    console = Console(debug=debug)
    set_console(console)


@cli.command()
@click.option(
    "--script",
    default=None,
    help=f"Script file path (defaults to {settings.DEFAULT_SCRIPT} if present)",
)
def check(script):
    """Compile a script and report every error found."""
    console = get_console()
    script_path = discover_script(script)

    try:
        result = compile_script(script_path)
    except OSError as e:
        console.print_error(
            "Failed to read script",
            f"Could not read {script_path}",
            details=[str(e)],
        )
        sys.exit(1)

    if not result.ok:
        console.print_compile_errors(result.errors)
        sys.exit(1)

    console.print_configuration(result.configuration)
    console.print_success(script_path.name)


@cli.command()
@click.option(
    "--script",
    default=None,
    help=f"Script file path (defaults to {settings.DEFAULT_SCRIPT} if present)",
)
@click.option("--indent", default=2, type=int, show_default=True, help="JSON indentation")
def show(script, indent):
    """Print the compiled configuration as JSON."""
    console = get_console()
    script_path = discover_script(script)

    try:
        result = compile_script(script_path, announce=False)
    except OSError as e:
        console.print_exception(e)
        sys.exit(1)

    if not result.ok:
        console.print_compile_errors(result.errors)
        sys.exit(1)

    click.echo(json.dumps(result.configuration.to_dict(), indent=indent))


@cli.command()
def environments():
    """List the registered environments and their step commands."""
    get_console().print_environments(ENVIRONMENTS.values())


if __name__ == "__main__":
    cli()
