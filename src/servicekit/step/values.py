"""Step identities, worker roles and the handler reported to hooks."""

from __future__ import annotations

from enum import IntEnum, StrEnum

from pydantic import BaseModel, ConfigDict, Field

from servicekit.core.types import MAX_BITMASK, BitFlag


class WorkerType(StrEnum):
    """Role a worker is bound to.

    Values are the role names printed in log lines and error messages.
    """

    INIT = "init"
    EXEC = "exec"
    OTHERWISE = "otherwise"
    WHEN_ERROR = "whenError"
    ALWAYS = "always"


class Handler(StrEnum):
    """The business worker executed last, as passed to ``when_error`` and ``always``."""

    INIT = "INIT"
    EXEC = "EXEC"
    OTHERWISE = "OTHERWISE"


class StepValue(BaseModel):
    """A described step flag.

    >>> LOAD = StepValue(bit=0x01, description="load documents")
    """

    model_config = ConfigDict(frozen=True)

    bit: BitFlag = Field(gt=0, le=MAX_BITMASK)
    description: str


class StepEnum(IntEnum):
    """Base for step enumerations; the member name is the description.

    Example::

        class Steps(StepEnum):
            FIRST = 0x01
            SECOND = 0x02

        manager.new_step(Steps.FIRST)
        # instead of:
        manager.new_step(0x01)

    Log lines then carry ``FIRST`` rather than the bare bit.
    """

    @property
    def bit(self) -> BitFlag:
        return int(self.value)

    @property
    def description(self) -> str:
        return self.name
