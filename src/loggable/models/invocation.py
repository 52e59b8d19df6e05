"""Call-site descriptors and per-call state."""

from __future__ import annotations

import inspect
from collections.abc import Callable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

_RECEIVER_PARAMS = frozenset({"self", "cls"})


class CallSite(BaseModel):
    """Static facts about a wrapped callable, computed once at wrap time."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    declaring: str
    method_name: str
    returns_none: bool = False
    bound: bool = False

    @classmethod
    def of(cls, func: Callable[..., Any]) -> CallSite:
        """Describe ``func`` from its qualified name, parameters and return annotation.

        The declaring identity is ``module.Class`` for functions defined in a
        class body and the module name otherwise.
        """
        module = getattr(func, "__module__", None) or "__main__"
        qualname = getattr(func, "__qualname__", None) or getattr(func, "__name__", "callable")
        owner, _, method_name = qualname.rpartition(".")
        if owner and not owner.endswith("<locals>"):
            declaring = f"{module}.{owner}"
        else:
            declaring = module
        try:
            signature = inspect.signature(func)
        except (TypeError, ValueError):
            return cls(declaring=declaring, method_name=method_name)
        params = list(signature.parameters.values())
        bound = bool(params) and params[0].name in _RECEIVER_PARAMS
        return cls(
            declaring=declaring,
            method_name=method_name,
            returns_none=signature.return_annotation in (None, "None"),
            bound=bound,
        )


class Invocation(BaseModel):
    """One concrete call to a wrapped callable. Never shared across calls."""

    model_config = ConfigDict(arbitrary_types_allowed=True)

    receiver: Any = None
    method_name: str
    args: tuple[Any, ...] = ()
    kwargs: dict[str, Any] = Field(default_factory=dict)
    returns_none: bool = False
    start_ns: int = 0

    @classmethod
    def start(
        cls,
        call_site: CallSite,
        args: tuple[Any, ...],
        kwargs: dict[str, Any],
        start_ns: int = 0,
    ) -> Invocation:
        receiver = None
        if call_site.bound and args:
            receiver, args = args[0], args[1:]
        return cls(
            receiver=receiver,
            method_name=call_site.method_name,
            args=args,
            kwargs=kwargs,
            returns_none=call_site.returns_none,
            start_ns=start_ns,
        )


class StackOrigin(BaseModel):
    """Where an error was raised: the innermost frame of its traceback."""

    model_config = ConfigDict(frozen=True)

    type_name: str
    method: str
    line: int

    def __str__(self) -> str:
        return f"{self.type_name}#{self.method}[{self.line}]"
