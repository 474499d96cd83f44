# variables.py
from __future__ import annotations

import re
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from .nodes import Identifier, ListNode, Literal
from .suggest import render_token

PLACEHOLDER = re.compile(r"%(\w+)")


def literal_value(node: Any) -> Any:
    """Plain Python value of a literal node; other nodes are returned as is."""
    if isinstance(node, Literal):
        return node.value
    if isinstance(node, ListNode):
        return [literal_value(item) for item in node.items]
    return node


class VariableTable:
    """
    name -> value bindings made by `name = value` statements.

    Tables are never mutated in place: `bind` returns a new table, so a
    compile can thread it through its fold without sharing state.
    """

    def __init__(self, bindings: Optional[Mapping[str, Any]] = None):
        self._bindings: Dict[str, Any] = dict(bindings or {})

    @property
    def bindings(self) -> Mapping[str, Any]:
        return MappingProxyType(self._bindings)

    def __contains__(self, name: object) -> bool:
        return name in self._bindings

    def __len__(self) -> int:
        return len(self._bindings)

    def __repr__(self) -> str:
        return f"VariableTable({self._bindings!r})"

    def is_bound(self, name: str) -> bool:
        return name in self._bindings

    def get(self, name: str, default: Any = None) -> Any:
        return self._bindings.get(name, default)

    def bind(self, name: str, value: Any) -> VariableTable:
        """Bind (or rebind) `name`. No validation happens here."""
        bindings = dict(self._bindings)
        bindings[name] = literal_value(value)
        return VariableTable(bindings)

    def substitute(self, text: str) -> str:
        """
        Replace `%name` placeholders in one pass.

        Unbound placeholders are left untouched (sigil included) and the
        substituted text is not scanned again.
        """
        def _replace(match: re.Match) -> str:
            name = match.group(1)
            if name in self._bindings:
                return render_token(self._bindings[name])
            return match.group(0)

        return PLACEHOLDER.sub(_replace, text)

    def resolve(self, value: Any) -> Any:
        if isinstance(value, Identifier):
            return self._bindings.get(value.name)
        if isinstance(value, str):
            return self.substitute(value)
        if isinstance(value, (list, tuple)):
            return [self.resolve(v) for v in value]
        return value
