# environments/elixir.py
from __future__ import annotations

from typing import Any

from ..model import Command
from ..suggest import render_token
from .base import Environment, ProviderError, capability, run_command


def versioned_image(repository: str, version: Any, variant: str) -> str:
    """`{repository}:{version}-{variant}`; the version must be a string or a number."""
    if isinstance(version, bool) or not isinstance(version, (str, int, float)):
        raise ProviderError("unsupported image version: ", render_token(version))
    return f"{repository}:{version}-{variant}"


class ElixirEnvironment(Environment):
    """
    Alpine based Elixir images plus mix helpers usable inside steps.

        @env "elixir", version: "1.7"

        step "Tests" do
          create_project "lab1"
          test "lab1"
        end
    """

    id = "elixir"
    parameters = ("version",)

    def image(self, key: Any, value: Any) -> str:
        if key == "version":
            return versioned_image("elixir", value, "alpine")
        return super().image(key, value)

    @capability(arity=1)
    def format(self, file: str) -> Command:
        return run_command(f"mix format {file}")

    @capability(arity=0)
    def help(self) -> Command:
        return run_command("mix help")

    @capability(arity=1)
    def create_project(self, name: str) -> Command:
        return run_command(
            f"mix new {name}\n"
            f"rm {name}/lib/*.ex {name}/test/*_test.ex\n"
        )

    @capability(arity=1)
    def test(self, project: str) -> Command:
        return run_command(
            f"cd {project}\n"
            "mix test\n"
        )
