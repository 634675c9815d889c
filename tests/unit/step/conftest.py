"""Step engine fixtures."""

from __future__ import annotations

import pytest

from servicekit.step.manager import StepManager
from tests.fakes import RecordingStepPersistence


@pytest.fixture
def persistence():
    return RecordingStepPersistence()


@pytest.fixture
def manager(persistence):
    return StepManager(persistence, log_comment="TEST COMMENTS")
