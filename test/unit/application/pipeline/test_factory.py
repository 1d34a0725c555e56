import pytest

from signed_upload.application.pipeline.factory import PipelineFactory
from signed_upload.application.pipeline.base import (
    PipelineContext,
    make_logging_middleware,
    StepStatus,
)


class DummyStep:
    def __init__(self, name="dummy", record=None):
        self.name = name
        self.record = record if record is not None else []
        self.called = 0
        self.status = StepStatus.PENDING

    async def __call__(self, context: PipelineContext):
        self.called += 1
        self.record.append(self.name)
        context.set(f"ran_{self.name}", True)
        self.status = StepStatus.COMPLETED


class FailingStep:
    def __init__(self, name="fail_once", exc=RuntimeError("boom")):
        self.name = name
        self.exc = exc
        self.called = 0

    async def __call__(self, context: PipelineContext):
        self.called += 1
        raise self.exc


@pytest.mark.asyncio
async def test_pipeline_factory_build_and_run_with_middleware():
    order = []
    s1 = DummyStep("s1", order)
    s2 = DummyStep("s2", order)

    factory = PipelineFactory(middlewares=[make_logging_middleware()])
    pipeline = factory.add(s1).add(s2).build()

    ctx = PipelineContext(input={})
    result = await pipeline.execute(ctx)

    assert result["success"] is True
    assert order == ["s1", "s2"]
    assert ctx.get("ran_s1") is True
    assert ctx.get("ran_s2") is True
    assert isinstance(result["steps"], list) and len(result["steps"]) == 2
    assert result["steps"][0]["name"] == "s1"
    assert result["steps"][0]["status"] == StepStatus.COMPLETED.value


@pytest.mark.asyncio
async def test_pipeline_factory_raises_first_failure():
    s1 = DummyStep("ok")
    s2 = FailingStep("bad", RuntimeError("x"))
    s3 = DummyStep("never")

    pipeline = PipelineFactory().extend([s1, s2, s3]).build()

    with pytest.raises(RuntimeError, match="x"):
        await pipeline.execute(PipelineContext(input={}))

    assert s1.called == 1
    assert s2.called == 1
    assert s3.called == 0


def test_factory_builds_independent_pipelines():
    factory = PipelineFactory().add(DummyStep("a"))
    first = factory.build()
    factory.add(DummyStep("b"))
    second = factory.build()

    assert first.step_names == ["a"]
    assert second.step_names == ["a", "b"]
