# environments/custom.py
from __future__ import annotations

from typing import Any

from ..suggest import render_token
from .base import Environment, ProviderError


class CustomEnvironment(Environment):
    """Any image the script names: `@env "custom", image: "haskell"`."""

    id = "custom"
    parameters = ("image",)

    def image(self, key: Any, value: Any) -> str:
        if key == "image":
            if not isinstance(value, str):
                raise ProviderError("unsupported image: ", render_token(value))
            return value
        return super().image(key, value)
