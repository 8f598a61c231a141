"""Configurator dispatch shared by every DSL level.

A configurator is any callable that configures a DSL object. It may be written
in one of two styles:

- explicit: ``def configure(q): q.keywords("pizza")``, receives the DSL
- implicit: ``def configure(): keywords("pizza")``, using the functions in
  ``SearchSpec.dsl.receiver``, which act on the DSL currently being configured

Both styles produce the same spec. The active DSL is tracked on a context-local
stack, so nested configurators and separate threads never see each other's
receiver.
"""

from __future__ import annotations

import inspect
from contextvars import ContextVar
from typing import Any, Callable, TypeVar

T = TypeVar("T")

_POSITIONAL_KINDS = (
    inspect.Parameter.POSITIONAL_ONLY,
    inspect.Parameter.POSITIONAL_OR_KEYWORD,
    inspect.Parameter.VAR_POSITIONAL,
)

_receivers: ContextVar[tuple[Any, ...]] = ContextVar("searchspec_receivers", default=())


def instance_eval_or_call(dsl: T, configurator: Callable[..., Any]) -> T:
    """Run ``configurator`` against ``dsl`` in whichever style it is written.

    Args:
        dsl: DSL object to configure.
        configurator: Callable taking the DSL as its only argument, or no
            argument at all.

    Returns:
        The configured DSL.

    Raises:
        TypeError: If ``configurator`` is not callable.
    """
    if not callable(configurator):
        raise TypeError(f"configurator must be callable, got {type(configurator).__name__}")

    token = _receivers.set((*_receivers.get(), dsl))
    try:
        if _accepts_positional(configurator):
            configurator(dsl)
        else:
            configurator()
    finally:
        _receivers.reset(token)
    return dsl


def current_receiver() -> Any:
    """Return the DSL whose configurator is currently running.

    Raises:
        RuntimeError: If no configurator is running.
    """
    stack = _receivers.get()
    if not stack:
        raise RuntimeError("no query is being configured; call this inside a configurator")
    return stack[-1]


def _accepts_positional(func: Callable[..., Any]) -> bool:
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        # Builtins without introspectable signatures are called explicitly.
        return True
    return any(param.kind in _POSITIONAL_KINDS for param in signature.parameters.values())
