"""Factory for steps sharing one persistence handler and log comment."""

from __future__ import annotations

import logging
from typing import Any, TypeVar, overload

from servicekit.core.config import AppSettings
from servicekit.core.exceptions import StepConfigurationError
from servicekit.core.protocols import IStepPersistenceHandler, IStepValue
from servicekit.core.types import MAX_BITMASK, BitFlag, ProcessId
from servicekit.persistence import create_persistence
from servicekit.step.specialized import SpecializedStep
from servicekit.step.void import VoidStep

logger = logging.getLogger(__name__)

T = TypeVar("T")


class StepManager:
    """Creates steps bound to the bitmask of one business process.

    The manager is the only state steps share: they keep a reference to it,
    so ``set_log_comment`` also changes the log lines of steps created earlier.
    """

    def __init__(self, persistence_handler: IStepPersistenceHandler, log_comment: str | None = None) -> None:
        self._persistence_handler = persistence_handler
        self._log_comment = log_comment

    @classmethod
    def from_settings(cls, process_id: ProcessId, settings: AppSettings | None = None) -> StepManager:
        """Manager backed by the persistence backend configured in ``settings``."""
        if settings is None:
            settings = AppSettings()
        return cls(create_persistence(process_id, settings), log_comment=settings.step.log_comment)

    @property
    def persistence_handler(self) -> IStepPersistenceHandler:
        return self._persistence_handler

    @property
    def log_comment(self) -> str | None:
        return self._log_comment

    def set_log_comment(self, text: str | None) -> None:
        self._log_comment = text

    @overload
    def new_step(self, step: IStepValue | BitFlag) -> VoidStep: ...

    @overload
    def new_step(self, step: IStepValue | BitFlag, result_type: type[T]) -> SpecializedStep[T]: ...

    @overload
    def new_step(self, step: IStepValue | BitFlag, result_type: Any) -> SpecializedStep[Any]: ...

    def new_step(self, step: IStepValue | BitFlag, result_type: Any = None) -> VoidStep | SpecializedStep[Any]:
        """A ``VoidStep``, or a ``SpecializedStep`` when ``result_type`` is given.

        ``result_type`` documents the carried value (``str``, ``list[str]``...);
        it is not enforced at run time.
        """
        bit = step.bit if isinstance(step, IStepValue) else step
        _validate_bit(bit)
        logger.debug("new_step - bit=%#x, result_type=%r", bit, result_type)
        if result_type is None:
            return VoidStep(self, step)
        return SpecializedStep(self, step)


def _validate_bit(bit: Any) -> None:
    if isinstance(bit, bool) or not isinstance(bit, int):
        raise StepConfigurationError(f"Step bit must be an integer, got {bit!r}")
    if not 0 < bit <= MAX_BITMASK:
        raise StepConfigurationError(f"Step bit must be a non-zero 64-bit value, got {bit:#x}")
