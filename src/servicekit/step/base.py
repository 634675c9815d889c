"""Execution protocol shared by every step flavour.

A step guards one unit of work with a bit of the process bitmask held by the
manager's persistence handler:

* bit not set: run ``exec``, then store ``bits | flag``;
* bit set: run ``otherwise`` (if bound), store nothing;
* on error: run ``when_error`` (if bound), which marks the error handled;
* in every case: run ``always`` (if bound) last.

An error still pending after ``always`` is re-raised by ``check()``. The error
passed to ``always`` and re-raised is the latest one, so an exception raised
by ``when_error`` replaces the one it was handling.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, ClassVar, Generic, TypeVar

from servicekit.core.exceptions import StepConfigurationError, StepInternalError
from servicekit.core.protocols import IStepValue
from servicekit.core.types import BitFlag, BitMask
from servicekit.step import logger as step_logger
from servicekit.step.values import Handler, WorkerType
from servicekit.step.workers import ShapeTable, Worker, WorkerShape, resolve_worker

if TYPE_CHECKING:
    from servicekit.step.manager import StepManager

logger = logging.getLogger(__name__)

T = TypeVar("T")

EXECUTING_STEP = "executing step"


@dataclass
class StepState(Generic[T]):
    """Everything a step run threads from one phase to the next."""

    value: T | None = None
    handler: Handler | None = None
    error: Exception | None = None


class AbstractStep(ABC, Generic[T]):
    """Builder and one-shot runner for a single step."""

    SHAPES: ClassVar[ShapeTable]

    def __init__(self, manager: StepManager, step: IStepValue | BitFlag) -> None:
        self._manager = manager
        if isinstance(step, IStepValue):
            self._step: IStepValue | None = step
            self._bit = step.bit
        else:
            self._step = None
            self._bit = step
        self._workers: dict[WorkerType, Worker] = {}
        self._check_performed = False
        self._state: StepState[T] = StepState()

    def __repr__(self) -> str:
        label = self._step.description if self._step is not None else hex(self._bit)
        return f"{type(self).__name__}({label}, workers={sorted(self._workers)})"

    # ---- public read access ----

    @property
    def bit(self) -> BitFlag:
        return self._bit

    @property
    def step(self) -> IStepValue | None:
        return self._step

    @property
    def error(self) -> Exception | None:
        """The pending error, if the last run left one unhandled."""
        return self._state.error

    @property
    def last_handler(self) -> Handler | None:
        return self._state.handler

    # ---- hooks for the concrete flavours ----

    @abstractmethod
    def _run_specialized_worker(self) -> None:
        """Flavour-specific phase run before the EXEC/OTHERWISE decision."""

    @abstractmethod
    def _run_worker(self, worker_type: WorkerType, worker: Worker) -> None:
        """Invoke ``worker`` with the arguments its shape asks for."""

    # ---- building ----

    def _add_worker(
        self,
        worker_type: WorkerType,
        fn: Callable[..., Any],
        shape: WorkerShape | None = None,
    ) -> None:
        logger.debug("add_worker - type=%s, worker=%r", worker_type, fn)
        if self._check_performed:
            raise StepConfigurationError("The method 'check()' was already called!")
        if worker_type in self._workers:
            raise StepConfigurationError(f"Worker type '{worker_type}()' has already been defined!")
        accepted = self.SHAPES.get(worker_type)
        if not accepted:
            raise StepConfigurationError(f"Worker type '{worker_type}()' is not supported by {type(self).__name__}")
        self._workers[worker_type] = resolve_worker(worker_type, fn, accepted, shape)

    # ---- running ----

    def _check(self) -> None:
        logger.debug("check - START")
        if self._check_performed:
            raise StepConfigurationError("The method 'check()' is called twice!")
        self._check_performed = True

        if WorkerType.EXEC not in self._workers:
            raise StepConfigurationError(f"Worker type '{WorkerType.EXEC}()' is not defined!")

        # always runs even when a BaseException escapes, but not on internal errors
        run_always = True
        try:
            try:
                self._run_specialized_worker()
                bits = self._manager.persistence_handler.get()
                if (bits & self._bit) != 0:
                    self._run_worker_otherwise()
                else:
                    self._run_worker_exec(bits)
            except StepInternalError:
                raise
            except Exception as exc:
                logger.debug("check - captured error: %r", exc)
                self._state.error = exc

            try:
                if self._state.error is not None:
                    self._run_worker_when_error()
            except StepInternalError:
                raise
            except Exception as exc:
                logger.debug("check - when_error raised: %r", exc)
                self._state.error = exc
        except StepInternalError:
            run_always = False
            raise
        finally:
            if run_always:
                self._run_worker_always()

        if self._state.error is not None:
            # no when_error worker, or it raised
            raise self._state.error
        logger.debug("check - END")

    def _run_worker_exec(self, bits: BitMask) -> None:
        logger.debug("run_worker_exec - START")
        self._state.handler = Handler.EXEC
        self._start_worker(WorkerType.EXEC, self._workers[WorkerType.EXEC])
        self._manager.persistence_handler.store(bits | self._bit)
        logger.debug("run_worker_exec - END")

    def _run_worker_otherwise(self) -> None:
        logger.debug("run_worker_otherwise - START")
        worker = self._workers.get(WorkerType.OTHERWISE)
        if worker is not None:
            self._state.handler = Handler.OTHERWISE
            self._start_worker(WorkerType.OTHERWISE, worker)
        logger.debug("run_worker_otherwise - END")

    def _run_worker_when_error(self) -> None:
        logger.debug("run_worker_when_error - START")
        worker = self._workers.get(WorkerType.WHEN_ERROR)
        if worker is not None:
            self._start_worker(WorkerType.WHEN_ERROR, worker)
            self._state.error = None  # handled
        logger.debug("run_worker_when_error - END")

    def _run_worker_always(self) -> None:
        logger.debug("run_worker_always - START")
        worker = self._workers.get(WorkerType.ALWAYS)
        if worker is not None:
            self._start_worker(WorkerType.ALWAYS, worker)
        logger.debug("run_worker_always - END")

    def _start_worker(self, worker_type: WorkerType, worker: Worker) -> None:
        comments = (self._manager.log_comment or "").strip() or None
        step_logger.print_line(EXECUTING_STEP, "", worker_type, comments, self._step, self._bit)
        self._run_worker(worker_type, worker)
        step_logger.print_line(EXECUTING_STEP, "DONE", worker_type, comments, self._step, self._bit)
