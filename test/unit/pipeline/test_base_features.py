from __future__ import annotations

import asyncio
import logging
import pytest

from signed_upload.application.pipeline.base import (
    BaseStep,
    PipelineContext,
    StepStatus,
    make_logging_middleware,
)
from signed_upload.application.pipeline.factory import PipelineFactory


class _ReqKeysStep(BaseStep):
    name = "req_keys"
    required_keys = ["needed"]

    async def run(self, context: PipelineContext) -> None:  # pragma: no cover - not reached
        context.set("ok", True)


class _FailingStep(BaseStep):
    name = "always_fail"

    def __init__(self):
        self.calls = 0

    async def run(self, context: PipelineContext) -> None:
        self.calls += 1
        raise ValueError("boom")


class _SimpleStep(BaseStep):
    name = "simple"

    async def run(self, context: PipelineContext) -> None:
        context.set("simple", True)


class _SlowStep(BaseStep):
    name = "slow"

    async def run(self, context: PipelineContext) -> None:
        await asyncio.sleep(10)


@pytest.mark.asyncio
async def test_required_keys_missing_raises():
    pipeline = PipelineFactory().add(_ReqKeysStep()).build()

    ctx = PipelineContext(input={})
    with pytest.raises(KeyError):
        await pipeline.execute(ctx)


@pytest.mark.asyncio
async def test_failure_is_not_retried_and_stops_pipeline():
    failing = _FailingStep()
    simple = _SimpleStep()
    pipeline = PipelineFactory().add(failing).add(simple).build()

    ctx = PipelineContext(input={})
    with pytest.raises(ValueError):
        await pipeline.execute(ctx)

    assert failing.calls == 1
    assert failing.status is StepStatus.FAILED
    assert isinstance(failing.last_error, ValueError)
    assert simple.status is StepStatus.PENDING
    assert ctx.get("simple") is None


@pytest.mark.asyncio
async def test_success_records_step_results_and_run_id():
    pipeline = PipelineFactory().add(_SimpleStep()).build()

    ctx = PipelineContext(input={})
    result = await pipeline.execute(ctx)

    assert result["success"] is True
    assert result["steps"][0]["name"] == "simple"
    assert result["steps"][0]["status"] == StepStatus.COMPLETED.value
    assert result["context"] is ctx
    assert ctx.get_run_id()


@pytest.mark.asyncio
async def test_cancelled_step_is_marked_failed():
    step = _SlowStep()
    pipeline = PipelineFactory().add(step).build()

    task = asyncio.create_task(pipeline.execute(PipelineContext(input={})))
    await asyncio.sleep(0)
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task

    assert step.status is StepStatus.FAILED


@pytest.mark.asyncio
async def test_logging_middleware_emits_begin_end(caplog):
    caplog.set_level(logging.DEBUG)
    factory = PipelineFactory(middlewares=[make_logging_middleware()])
    factory.add(_SimpleStep())
    pipeline = factory.build()

    ctx = PipelineContext(input={})
    await pipeline.execute(ctx)

    logs = "\n".join(rec.getMessage() for rec in caplog.records)
    assert "BEGIN" in logs
    assert "END" in logs


@pytest.mark.asyncio
async def test_wrapped_step_preserves_name():
    factory = PipelineFactory(middlewares=[make_logging_middleware()])
    step = _SimpleStep()
    factory.add(step)
    pipeline = factory.build()

    ctx = PipelineContext(input={})
    result = await pipeline.execute(ctx)

    assert result["steps"][0]["name"] == step.name
    assert pipeline.step_names == ["simple"]


def test_context_helpers():
    ctx = PipelineContext(input={"a": 1})
    ctx.set("x", 1)
    assert ctx.has("x")
    assert not ctx.has("y")
    ctx.set_run_id("fixed")
    assert ctx.ensure_run_id() == "fixed"


def test_ensure_run_id_generates_once():
    ctx = PipelineContext(input={})
    rid = ctx.ensure_run_id()
    assert len(rid) == 12
    assert ctx.ensure_run_id() == rid
