"""Idempotent step execution guarded by a persisted completion bitmask."""

from __future__ import annotations

from servicekit.step.base import AbstractStep, StepState
from servicekit.step.manager import StepManager
from servicekit.step.specialized import SpecializedStep
from servicekit.step.values import Handler, StepEnum, StepValue, WorkerType
from servicekit.step.void import VoidStep
from servicekit.step.workers import Worker, WorkerShape

__all__ = [
    "AbstractStep",
    "Handler",
    "SpecializedStep",
    "StepEnum",
    "StepManager",
    "StepState",
    "StepValue",
    "VoidStep",
    "Worker",
    "WorkerShape",
    "WorkerType",
]
