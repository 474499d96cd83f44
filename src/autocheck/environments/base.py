# environments/base.py
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any, Callable, ClassVar, Dict, List, Sequence, Tuple

from ..model import Command


@dataclass
class ProviderError(Exception):
    """
    Raised by an environment when it rejects its parameters or a command call.

    The compiler turns it into an Error at the statement's line.
    """
    description: str
    token: str = ""

    def __str__(self) -> str:
        return f"{self.description}{self.token}"


@dataclass(frozen=True)
class Capability:
    """A named provider function with a fixed arity that produces a Command."""
    name: str
    arity: int
    handler: Callable[..., Command]


def capability(arity: int) -> Callable[[Callable[..., Command]], Callable[..., Command]]:
    """Mark an Environment method as a step command with the given arity."""
    def decorate(fn: Callable[..., Command]) -> Callable[..., Command]:
        fn.__capability_arity__ = arity  # type: ignore[attr-defined]
        return fn
    return decorate


def run_command(script: str) -> Command:
    """Shell script wrapped as a `run` command (what the executor runs in the image)."""
    return Command(kind="run", args=(script,))


class Environment:
    """
    Base class for execution environments (`@env "<id>", key: value`).

    Single-parameter providers override `image` for the parameter shapes they
    understand and call `super().image(...)` for everything else, which gives
    every provider the same two fallback errors. Providers taking no parameter
    or several set `image_arity` and override `image_for`, which receives the
    whole parameter list.

    Methods decorated with `@capability(n)` are collected into `capabilities`
    once, when the subclass is created. An inherited capability that the
    subclass redefines keeps its arity and dispatches to the new method.
    """

    id: ClassVar[str] = ""
    image_arity: ClassVar[int] = 1
    parameters: ClassVar[Tuple[str, ...]] = ()
    capabilities: ClassVar[Dict[str, Capability]] = {}

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        table = {
            name: replace(cap, handler=getattr(cls, name))
            for name, cap in cls.capabilities.items()
        }
        for attr, fn in vars(cls).items():
            arity = getattr(fn, "__capability_arity__", None)
            if arity is not None:
                table[attr] = Capability(name=attr, arity=arity, handler=fn)
        cls.capabilities = table

    # ------------------------------------------------------------------
    # image
    # ------------------------------------------------------------------

    def image(self, key: Any, value: Any) -> str:
        """Fallback for parameter shapes a provider does not match."""
        if isinstance(key, str) and key:
            raise ProviderError("incorrect parameter: ", key)
        raise ProviderError("syntax error")

    def resolve_image(self, params: Sequence[Tuple[str, Any]]) -> str:
        """
        Image reference for already-resolved keyword parameters.

        The caller checks `accepts_params` first; this raises ProviderError on
        any rejected shape.
        """
        if not self.accepts_params(len(params)):
            raise ProviderError("incorrect number of parameters for env: ", self.id)
        return self.image_for(params)

    def image_for(self, params: Sequence[Tuple[str, Any]]) -> str:
        """Image for the full parameter list; the default expects exactly one."""
        if len(params) != 1:
            raise ProviderError("syntax error")
        key, value = params[0]
        return self.image(key, value)

    def accepts_params(self, count: int) -> bool:
        return count == self.image_arity

    # ------------------------------------------------------------------
    # capabilities
    # ------------------------------------------------------------------

    def command_names(self) -> List[str]:
        return list(self.capabilities)

    def arity_of(self, name: str) -> int | None:
        cap = self.capabilities.get(name)
        return cap.arity if cap else None

    def invoke(self, name: str, args: Sequence[str]) -> Command:
        cap = self.capabilities.get(name)
        if cap is None or cap.arity != len(args):
            raise ProviderError("undefined function: ", name)
        return cap.handler(self, *args)

    def __repr__(self) -> str:
        return f"<{type(self).__name__} id={self.id!r}>"
