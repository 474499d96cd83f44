# nodes.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Tuple, Union


@dataclass(frozen=True)
class Literal:
    """A string, number, boolean or nil value."""
    value: Union[str, int, float, bool, None]
    line: int = 0


@dataclass(frozen=True)
class Identifier:
    """A bare name used as a value (looked up in the variable table)."""
    name: str
    line: int = 0


@dataclass(frozen=True)
class Atom:
    """A `:name` symbol. Never a string, number or boolean."""
    name: str
    line: int = 0


@dataclass(frozen=True)
class ListNode:
    items: Tuple[Any, ...] = ()
    line: int = 0


@dataclass(frozen=True)
class Keyword:
    """A `key: value` argument."""
    key: str
    value: Any
    line: int = 0


@dataclass(frozen=True)
class Directive:
    """`@name arg, ...` -- sets one top level configuration field."""
    name: str
    line: int
    args: Tuple[Any, ...] = ()


@dataclass(frozen=True)
class Assignment:
    name: str
    value: Any
    line: int = 0


@dataclass(frozen=True)
class Call:
    """`name arg, ...` -- a function call, usually a command inside a step."""
    name: str
    line: int
    args: Tuple[Any, ...] = ()


@dataclass(frozen=True)
class Block:
    """
    `keyword "name" do ... end`.

    Only the `step` keyword is meaningful to the compiler; anything else is
    reported as an incorrect keyword.
    """
    name: str
    line: int
    children: Tuple[Any, ...] = field(default_factory=tuple)
    keyword: str = "step"


Node = Union[Literal, Identifier, Atom, ListNode, Keyword, Directive, Assignment, Call, Block]
