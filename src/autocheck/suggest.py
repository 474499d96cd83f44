# suggest.py
from __future__ import annotations

from difflib import SequenceMatcher
from typing import Any, Iterable

from .nodes import Atom, Identifier, Keyword, ListNode, Literal

SIMILARITY_THRESHOLD = 0.8


def similarity(a: str, b: str) -> float:
    """Normalized similarity in [0, 1]; identical strings score 1."""
    if a == b:
        return 1.0
    return SequenceMatcher(None, a, b).ratio()


def suggest(token: Any, candidates: Iterable[str]) -> str:
    """
    "Did you mean" lookup.

    Returns "Did you mean {best}?" for the most similar candidate scoring above
    the threshold, or "" when nothing is close enough. Ties go to the first
    candidate in iteration order.
    """
    text = render_token(token)
    best: str | None = None
    best_score = SIMILARITY_THRESHOLD
    for candidate in candidates:
        score = similarity(text, candidate)
        if score > best_score:
            best, best_score = candidate, score
    if best is None:
        return ""
    return f"Did you mean {best}?"


def _render_scalar(value: Any) -> str:
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def render_token(value: Any, *, quoted: bool = False) -> str:
    """
    Render a value for an error message.

    Lists render recursively as "[a, b]" (strings quoted inside them), nodes
    render as their surface form, and anything else falls back to repr, so a
    structure is never interpolated raw.
    """
    if isinstance(value, (list, tuple)):
        return "[" + ", ".join(render_token(v, quoted=True) for v in value) + "]"
    if isinstance(value, str):
        return f'"{value}"' if quoted else value
    if value is None or isinstance(value, (bool, int, float)):
        return _render_scalar(value)
    if isinstance(value, Literal):
        return render_token(value.value, quoted=quoted)
    if isinstance(value, Identifier):
        return value.name
    if isinstance(value, Atom):
        return f":{value.name}"
    if isinstance(value, ListNode):
        return render_token(list(value.items))
    if isinstance(value, Keyword):
        return f"{value.key}: {render_token(value.value, quoted=True)}"
    return repr(value)
