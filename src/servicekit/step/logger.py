"""One log line per worker invocation.

The field order (comment, step description or bit, role, phase message) is
parsed by downstream log tooling and must not change.
"""

from __future__ import annotations

import logging

from servicekit.core.protocols import IStepValue
from servicekit.core.types import BitFlag
from servicekit.step.values import WorkerType

logger = logging.getLogger(__name__)

_TEMPLATES: dict[str, str] = {
    "COMMENTS_AND_STEP": "[SM - {comments}] step -> {step}, handler -> {worker}: {msg1}...{msg2}",
    "COMMENTS_NO_STEP": "[SM - {comments}] bit -> {bit}, handler -> {worker}: {msg1}...{msg2}",
    "STEP_NO_COMMENTS": "[SM] step -> {step}, handler -> {worker}: {msg1}...{msg2}",
    "NONE": "[SM] bit -> {bit}, handler -> {worker}: {msg1}...{msg2}",
}


def _template_id(comments: str | None, step: IStepValue | None) -> str:
    if comments is not None and step is not None:
        return "COMMENTS_AND_STEP"
    if comments is not None:
        return "COMMENTS_NO_STEP"
    if step is not None:
        return "STEP_NO_COMMENTS"
    return "NONE"


def format_line(
    msg1: str,
    msg2: str,
    worker_type: WorkerType,
    comments: str | None,
    step: IStepValue | None,
    bit: BitFlag,
) -> str:
    """Render the log line for one worker invocation."""
    return _TEMPLATES[_template_id(comments, step)].format(
        comments=comments,
        step=step.description if step is not None else None,
        bit=bit,
        worker=worker_type.value,
        msg1=msg1,
        msg2=msg2,
    )


def print_line(
    msg1: str,
    msg2: str,
    worker_type: WorkerType,
    comments: str | None,
    step: IStepValue | None,
    bit: BitFlag,
) -> None:
    logger.info(format_line(msg1, msg2, worker_type, comments, step, bit))
