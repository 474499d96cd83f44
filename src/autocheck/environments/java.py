# environments/java.py
from __future__ import annotations

from typing import Any

from .base import Environment
from .elixir import versioned_image


class JavaEnvironment(Environment):
    """OpenJDK slim images: `@env "java", version: 17`."""

    id = "java"
    parameters = ("version",)

    def image(self, key: Any, value: Any) -> str:
        if key == "version":
            return versioned_image("openjdk", value, "slim")
        return super().image(key, value)
