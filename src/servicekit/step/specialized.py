"""Step carrying a typed result through every phase."""

from __future__ import annotations

import logging
from typing import Any, Callable, ClassVar, TypeVar

from servicekit.core.exceptions import StepInternalError
from servicekit.step.base import AbstractStep
from servicekit.step.values import Handler, WorkerType
from servicekit.step.workers import ShapeTable, Worker, WorkerShape

logger = logging.getLogger(__name__)

T = TypeVar("T")


class SpecializedStep(AbstractStep[T]):
    """A step whose workers produce, transform and finally return a value of type ``T``.

    Every worker's return value replaces the carried value, including ``always``
    and ``when_error``, so ``check()`` returns whatever the last worker produced::

        result = (
            manager.new_step(Steps.LOAD, str)
            .exec(lambda: "loaded")
            .otherwise(lambda: "cached")
            .when_error(lambda err, value: "fallback")
            .check()
        )
    """

    SHAPES: ClassVar[ShapeTable] = {
        WorkerType.INIT: {0: WorkerShape.NO_ARGS},
        WorkerType.EXEC: {0: WorkerShape.NO_ARGS, 1: WorkerShape.VALUE},
        WorkerType.OTHERWISE: {0: WorkerShape.NO_ARGS, 1: WorkerShape.VALUE},
        WorkerType.ALWAYS: {
            0: WorkerShape.NO_ARGS,
            1: WorkerShape.VALUE,
            2: WorkerShape.VALUE_HANDLER,
            3: WorkerShape.VALUE_HANDLER_ERROR,
        },
        WorkerType.WHEN_ERROR: {
            1: WorkerShape.ERROR,
            2: WorkerShape.ERROR_VALUE,
            3: WorkerShape.ERROR_VALUE_HANDLER,
        },
    }

    # ---- INIT ----

    def init(self, initial: T | Callable[[], T]) -> SpecializedStep[T]:
        """Bind an ``init`` worker when given a callable, otherwise seed the value.

        Use :meth:`seed` when the carried value is itself a callable.
        """
        if callable(initial):
            self._add_worker(WorkerType.INIT, initial)
        else:
            self.seed(initial)
        return self

    def seed(self, value: T) -> SpecializedStep[T]:
        self._state.value = value
        return self

    # ---- EXEC / OTHERWISE ----

    def exec(self, worker: Callable[..., T], *, shape: WorkerShape | None = None) -> SpecializedStep[T]:  # noqa: A003
        """``worker()`` or ``worker(value)``.

        Callables without a readable signature (``list``, ``dict``...) need an
        explicit ``shape``.
        """
        self._add_worker(WorkerType.EXEC, worker, shape)
        return self

    def otherwise(self, worker: Callable[..., T], *, shape: WorkerShape | None = None) -> SpecializedStep[T]:
        """``worker()`` or ``worker(value)``."""
        self._add_worker(WorkerType.OTHERWISE, worker, shape)
        return self

    # ---- ALWAYS / WHEN_ERROR ----

    def always(self, worker: Callable[..., T], *, shape: WorkerShape | None = None) -> SpecializedStep[T]:
        """``worker()``, ``worker(value)``, ``worker(value, handler)`` or ``worker(value, handler, error)``."""
        self._add_worker(WorkerType.ALWAYS, worker, shape)
        return self

    def when_error(self, worker: Callable[..., T], *, shape: WorkerShape | None = None) -> SpecializedStep[T]:
        """``worker(error)``, ``worker(error, value)`` or ``worker(error, value, handler)``.

        ``shape`` is required for callables without a readable signature, e.g.
        ``.when_error(str, shape=WorkerShape.ERROR)``.
        """
        self._add_worker(WorkerType.WHEN_ERROR, worker, shape)
        return self

    # ---- run ----

    def check(self) -> T | None:
        """Run the step once and return the carried value."""
        self._check()
        return self._state.value

    @property
    def value(self) -> T | None:
        return self._state.value

    def _run_specialized_worker(self) -> None:
        logger.debug("run_worker_init - START")
        worker = self._workers.get(WorkerType.INIT)
        if worker is not None:
            self._state.handler = Handler.INIT
            self._start_worker(WorkerType.INIT, worker)
        logger.debug("run_worker_init - END")

    def _run_worker(self, worker_type: WorkerType, worker: Worker) -> None:
        logger.debug("run_worker - type=%s, worker=%r", worker_type, worker)
        state = self._state
        args: tuple[Any, ...]
        match worker.shape:
            case WorkerShape.NO_ARGS:
                args = ()
            case WorkerShape.VALUE:
                args = (state.value,)
            case WorkerShape.VALUE_HANDLER:
                args = (state.value, state.handler)
            case WorkerShape.VALUE_HANDLER_ERROR:
                args = (state.value, state.handler, state.error)
            case WorkerShape.ERROR:
                args = (state.error,)
            case WorkerShape.ERROR_VALUE:
                args = (state.error, state.value)
            case WorkerShape.ERROR_VALUE_HANDLER:
                args = (state.error, state.value, state.handler)
            case _:
                raise StepInternalError(worker_type.value, f"{worker!r} has no {type(self).__name__} dispatch")
        state.value = worker.fn(*args)
