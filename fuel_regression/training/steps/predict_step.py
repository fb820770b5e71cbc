# fuel_regression/training/steps/predict_step.py
from __future__ import annotations

from fuel_regression.pipeline.step import PipelineStep
from fuel_regression.training.context import RegressionContext
from fuel_regression.training.engines.predict_engine import PredictEngine


class PredictStep(PipelineStep):
    """
    Contract:
    - consumes ctx.model (read-only), ctx.normalized.params, ctx.clean_records
    - produces ctx.prediction
    """

    stage = "predict"

    def __init__(self, engine: PredictEngine, inst=None):
        super().__init__(inst)
        self.engine = engine

    def run(self, ctx: RegressionContext) -> RegressionContext:
        with self.inst.timer(self.step_name):
            ctx.prediction = self.engine.predict(
                model=ctx.model,
                params=ctx.normalized.params,
                records=ctx.clean_records,
            )
        return ctx
