# fuel_regression/training/steps/model_train_step.py
from __future__ import annotations

from fuel_regression.pipeline.step import PipelineStep
from fuel_regression.training.context import RegressionContext
from fuel_regression.training.engines.model_train_engine import ModelTrainEngine
from fuel_regression.training.engines.train_result import EpochMetrics


class ModelTrainStep(PipelineStep):
    """
    ModelTrainStep（FINAL）

    Contract:
    - consumes ctx.model / ctx.normalized
    - produces ctx.history
    - forwards every epoch's {loss, mse} to ctx.sink.on_epoch_end
    """

    stage = "train"

    def __init__(self, engine: ModelTrainEngine, inst=None):
        super().__init__(inst)
        self.engine = engine

    async def run(self, ctx: RegressionContext) -> RegressionContext:
        sink = ctx.sink

        def _observer(m: EpochMetrics) -> None:
            sink.on_epoch_end(m.epoch, m.as_logs())

        with self.inst.timer(self.step_name):
            history = await self.engine.fit(
                model=ctx.model,
                inputs=ctx.normalized.inputs,
                labels=ctx.normalized.labels,
                observer=_observer,
                cancel=ctx.cancel,
            )

        ctx.history = history
        ctx.metrics["final_loss"] = history.final_loss
        self.inst.metrics.record("final_loss", history.final_loss)
        return ctx
