# environments/__init__.py
from __future__ import annotations

from typing import Dict, List, Optional

from .base import Capability, Environment, ProviderError, capability, run_command
from .custom import CustomEnvironment
from .elixir import ElixirEnvironment
from .java import JavaEnvironment

# Registration order is also the order suggestions are searched in.
ENVIRONMENTS: Dict[str, Environment] = {}


def register_environment(environment: Environment) -> Environment:
    """Add (or replace) an environment under its id."""
    if not environment.id:
        raise ValueError(f"{type(environment).__name__} has no id")
    ENVIRONMENTS[environment.id] = environment
    return environment


def get_environment(environment_id: str) -> Optional[Environment]:
    return ENVIRONMENTS.get(environment_id)


def environment_ids() -> List[str]:
    return list(ENVIRONMENTS)


for _env in (CustomEnvironment(), ElixirEnvironment(), JavaEnvironment()):
    register_environment(_env)


__all__ = [
    "Capability",
    "Environment",
    "ProviderError",
    "capability",
    "run_command",
    "CustomEnvironment",
    "ElixirEnvironment",
    "JavaEnvironment",
    "ENVIRONMENTS",
    "register_environment",
    "get_environment",
    "environment_ids",
]
