"""Step without a carried value."""

from __future__ import annotations

import logging
from typing import Any, Callable, ClassVar

from servicekit.core.exceptions import StepInternalError
from servicekit.step.base import AbstractStep
from servicekit.step.values import WorkerType
from servicekit.step.workers import ShapeTable, Worker, WorkerShape

logger = logging.getLogger(__name__)


class VoidStep(AbstractStep[None]):
    """A step run only for its side effects. Worker return values are ignored."""

    SHAPES: ClassVar[ShapeTable] = {
        WorkerType.EXEC: {0: WorkerShape.NO_ARGS},
        WorkerType.OTHERWISE: {0: WorkerShape.NO_ARGS},
        WorkerType.ALWAYS: {
            0: WorkerShape.NO_ARGS,
            1: WorkerShape.HANDLER,
            2: WorkerShape.HANDLER_ERROR,
        },
        WorkerType.WHEN_ERROR: {
            1: WorkerShape.ERROR,
            2: WorkerShape.ERROR_HANDLER,
        },
    }

    def exec(self, worker: Callable[[], Any], *, shape: WorkerShape | None = None) -> VoidStep:  # noqa: A003
        self._add_worker(WorkerType.EXEC, worker, shape)
        return self

    def otherwise(self, worker: Callable[[], Any], *, shape: WorkerShape | None = None) -> VoidStep:
        self._add_worker(WorkerType.OTHERWISE, worker, shape)
        return self

    def always(self, worker: Callable[..., Any], *, shape: WorkerShape | None = None) -> VoidStep:
        """``worker()``, ``worker(handler)`` or ``worker(handler, error)``."""
        self._add_worker(WorkerType.ALWAYS, worker, shape)
        return self

    def when_error(self, worker: Callable[..., Any], *, shape: WorkerShape | None = None) -> VoidStep:
        """``worker(error)`` or ``worker(error, handler)``; pass ``shape`` if the signature is unreadable."""
        self._add_worker(WorkerType.WHEN_ERROR, worker, shape)
        return self

    def check(self) -> None:
        self._check()

    def _run_specialized_worker(self) -> None:
        pass  # nothing to prepare

    def _run_worker(self, worker_type: WorkerType, worker: Worker) -> None:
        logger.debug("run_worker - type=%s, worker=%r", worker_type, worker)
        state = self._state
        match worker.shape:
            case WorkerShape.NO_ARGS:
                worker.fn()
            case WorkerShape.HANDLER:
                worker.fn(state.handler)
            case WorkerShape.HANDLER_ERROR:
                worker.fn(state.handler, state.error)
            case WorkerShape.ERROR:
                worker.fn(state.error)
            case WorkerShape.ERROR_HANDLER:
                worker.fn(state.error, state.handler)
            case _:
                raise StepInternalError(worker_type.value, f"{worker!r} has no {type(self).__name__} dispatch")
