# model.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple, Union


@dataclass(frozen=True)
class Command:
    """A single resolved action inside a step, e.g. Command("run", ("mix test",))."""
    kind: str
    args: Tuple[str, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind, "args": list(self.args)}


@dataclass(frozen=True)
class Step:
    """A named, ordered group of commands. Names are unique per configuration."""
    name: str
    commands: Tuple[Command, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "commands": [c.to_dict() for c in self.commands]}


@dataclass(frozen=True)
class Error:
    """
    One semantic (or syntax) problem found in a script.

    `description` usually ends in ": " when a `token` follows it, so the
    formatted message reads "incorrect field: grde".
    """
    line: int
    description: str
    token: str = ""
    suggestion: str = ""

    def format(self) -> str:
        return f"Line {self.line}: {self.description}{self.token}. {self.suggestion}"


@dataclass(frozen=True)
class Configuration:
    """
    The compiled script: environment image, file constraints, grade and steps.

    Handed to an external executor as is; nothing here runs anything.
    """
    image: Optional[str] = None
    environment: Optional[str] = None
    required_files: Tuple[str, ...] = ()
    allowed_file_extensions: Tuple[str, ...] = ()
    grade: Optional[Union[int, float]] = None
    network_access: bool = False
    steps: Tuple[Step, ...] = ()
    errors: Tuple[Error, ...] = field(default_factory=tuple)

    @property
    def step_names(self) -> list[str]:
        return [s.name for s in self.steps]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-ready dictionary."""
        return {
            "image": self.image,
            "environment": self.environment,
            "required_files": list(self.required_files),
            "allowed_file_extensions": list(self.allowed_file_extensions),
            "grade": self.grade,
            "network_access": self.network_access,
            "steps": [s.to_dict() for s in self.steps],
        }


@dataclass
class CompileError(Exception):
    """Raised by the strict entry points when a script has errors."""
    errors: Tuple[Error, ...]

    def __str__(self) -> str:
        return "\n".join(e.format() for e in self.errors)


@dataclass(frozen=True)
class CompileResult:
    """
    Either a configuration (no errors) or the full list of errors.

    `partial` is the configuration as far as it could be built, with `errors`
    filled in; it is set in both cases.
    """
    configuration: Optional[Configuration]
    errors: Tuple[Error, ...] = ()
    partial: Optional[Configuration] = None

    @property
    def ok(self) -> bool:
        return not self.errors

    def unwrap(self) -> Configuration:
        if self.errors or self.configuration is None:
            raise CompileError(errors=tuple(self.errors))
        return self.configuration
