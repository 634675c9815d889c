"""Worker call shapes and their detection.

A role accepts callables of several shapes (``always`` may want nothing, the
carried value, the last handler, the pending error...). Each bound callable is
stored as a ``Worker`` tagged with the shape it was resolved to, so dispatch
never has to guess at run time.
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass
from enum import StrEnum
from typing import Any, Callable, Mapping

from servicekit.core.exceptions import StepConfigurationError
from servicekit.step.values import WorkerType


class WorkerShape(StrEnum):
    """Positional arguments a worker is called with, in order."""

    NO_ARGS = "()"
    VALUE = "(value)"
    VALUE_HANDLER = "(value, handler)"
    VALUE_HANDLER_ERROR = "(value, handler, error)"
    HANDLER = "(handler)"
    HANDLER_ERROR = "(handler, error)"
    ERROR = "(error)"
    ERROR_VALUE = "(error, value)"
    ERROR_VALUE_HANDLER = "(error, value, handler)"
    ERROR_HANDLER = "(error, handler)"


# role -> {arity: shape}
ShapeTable = Mapping[WorkerType, Mapping[int, WorkerShape]]

_POSITIONAL = (inspect.Parameter.POSITIONAL_ONLY, inspect.Parameter.POSITIONAL_OR_KEYWORD)


@dataclass(frozen=True)
class Worker:
    """A bound callable plus the shape it is invoked with."""

    fn: Callable[..., Any]
    shape: WorkerShape

    def __repr__(self) -> str:
        name = getattr(self.fn, "__qualname__", type(self.fn).__name__)
        return f"Worker({name}{self.shape.value})"


def positional_arity(fn: Callable[..., Any], max_arity: int) -> int | None:
    """Number of positional arguments ``fn`` takes, capped at ``max_arity`` for ``*args``.

    Returns ``None`` when ``fn`` has no readable signature (builtin types such
    as ``str`` or ``list`` on some interpreters).
    """
    try:
        signature = inspect.signature(fn)
    except (TypeError, ValueError):
        return None

    params = signature.parameters.values()
    if any(p.kind is inspect.Parameter.VAR_POSITIONAL for p in params):
        return max_arity
    return sum(1 for p in params if p.kind in _POSITIONAL)


def resolve_worker(
    worker_type: WorkerType,
    fn: Callable[..., Any],
    accepted: Mapping[int, WorkerShape],
    shape: WorkerShape | None = None,
) -> Worker:
    """Tag ``fn`` with the shape it will be called with for ``worker_type``.

    An explicit ``shape`` skips signature detection but must still be one the
    role accepts.
    """
    if not callable(fn):
        raise StepConfigurationError(f"Worker type '{worker_type}()' expects a callable, got {fn!r}")

    if shape is not None:
        if shape not in accepted.values():
            allowed = ", ".join(s.value for s in accepted.values())
            raise StepConfigurationError(
                f"Worker type '{worker_type}()' does not accept shape {shape.value} (accepted: {allowed})"
            )
        return Worker(fn, shape)

    arity = positional_arity(fn, max(accepted))
    if arity is None:
        if len(accepted) == 1:
            # only one way to call it
            return Worker(fn, next(iter(accepted.values())))
        raise StepConfigurationError(
            f"Cannot inspect the signature of worker {fn!r} for '{worker_type}()', pass shape= explicitly"
        )
    if arity not in accepted:
        allowed = ", ".join(s.value for s in accepted.values())
        raise StepConfigurationError(
            f"Worker type '{worker_type}()' does not accept a callable with {arity} "
            f"positional argument(s) (accepted: {allowed})"
        )
    return Worker(fn, accepted[arity])
