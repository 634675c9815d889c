"""Tests for worker shape detection and dispatch."""

from __future__ import annotations

import functools

import pytest

from servicekit.core.exceptions import StepConfigurationError, StepInternalError
from servicekit.step.specialized import SpecializedStep
from servicekit.step.values import WorkerType
from servicekit.step.void import VoidStep
from servicekit.step.workers import Worker, WorkerShape, positional_arity, resolve_worker
from tests.fakes import Steps

ALWAYS = SpecializedStep.SHAPES[WorkerType.ALWAYS]


class _Opaque:
    """Callable whose signature cannot be inspected."""

    __signature__ = 42

    def __call__(self, *args):
        return "opaque"


class TestPositionalArity:
    def test_counts_positional_parameters(self):
        assert positional_arity(lambda: None, 3) == 0
        assert positional_arity(lambda a, b: None, 3) == 2

    def test_defaults_still_count(self):
        assert positional_arity(lambda a, b=None: None, 3) == 2

    def test_keyword_only_is_ignored(self):
        assert positional_arity(lambda a, *, b=None: None, 3) == 1

    def test_var_positional_takes_the_maximum(self):
        assert positional_arity(lambda *args: None, 3) == 3

    def test_partial(self):
        assert positional_arity(functools.partial(lambda a, b: None, 1), 3) == 1

    def test_unreadable_signature(self):
        assert positional_arity(_Opaque(), 3) is None


class TestResolveWorker:
    @pytest.mark.parametrize(
        ("fn", "shape"),
        [
            (lambda: None, WorkerShape.NO_ARGS),
            (lambda v: None, WorkerShape.VALUE),
            (lambda v, h: None, WorkerShape.VALUE_HANDLER),
            (lambda v, h, e: None, WorkerShape.VALUE_HANDLER_ERROR),
        ],
    )
    def test_detects_always_shapes(self, fn, shape):
        assert resolve_worker(WorkerType.ALWAYS, fn, ALWAYS).shape is shape

    def test_rejects_unaccepted_arity(self):
        with pytest.raises(StepConfigurationError, match="4 positional"):
            resolve_worker(WorkerType.ALWAYS, lambda a, b, c, d: None, ALWAYS)

    def test_rejects_non_callable(self):
        with pytest.raises(StepConfigurationError, match="expects a callable"):
            resolve_worker(WorkerType.ALWAYS, "not callable", ALWAYS)

    def test_explicit_shape_must_be_accepted(self):
        with pytest.raises(StepConfigurationError, match="does not accept shape"):
            resolve_worker(WorkerType.ALWAYS, lambda e: None, ALWAYS, WorkerShape.ERROR)

    def test_explicit_shape_is_kept(self):
        worker = resolve_worker(WorkerType.ALWAYS, lambda *a: None, ALWAYS, WorkerShape.VALUE)
        assert worker.shape is WorkerShape.VALUE

    def test_unreadable_signature_uses_the_only_shape(self):
        accepted = VoidStep.SHAPES[WorkerType.EXEC]
        assert resolve_worker(WorkerType.EXEC, _Opaque(), accepted).shape is WorkerShape.NO_ARGS

    def test_unreadable_signature_needs_explicit_shape(self, manager):
        step = manager.new_step(Steps.FIRST, str)
        with pytest.raises(StepConfigurationError, match="pass shape= explicitly"):
            step.when_error(_Opaque())
        step.exec(_Opaque(), shape=WorkerShape.NO_ARGS)
        assert step.check() == "opaque"


class TestUnknownShapeDispatch:
    def test_specialized_step_fails_loudly(self, manager):
        step = manager.new_step(Steps.FIRST, str).exec(lambda: "exec")
        step._workers[WorkerType.EXEC] = Worker(lambda: "exec", WorkerShape.HANDLER)
        handled = []
        step.when_error(lambda err: handled.append(err))
        with pytest.raises(StepInternalError, match="unhandled worker type: 'exec'"):
            step.check()
        assert handled == []

    def test_void_step_fails_loudly(self, manager):
        seen = []
        step = manager.new_step(Steps.FIRST).exec(lambda: None).always(lambda: seen.append("always"))
        step._workers[WorkerType.EXEC] = Worker(lambda v: None, WorkerShape.VALUE)
        with pytest.raises(StepInternalError):
            step.check()
        assert seen == []

    def test_shape_tables_have_unique_shapes(self):
        for cls in (SpecializedStep, VoidStep):
            for table in cls.SHAPES.values():
                assert len(set(table.values())) == len(table)
