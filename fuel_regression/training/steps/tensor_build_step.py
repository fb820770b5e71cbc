# fuel_regression/training/steps/tensor_build_step.py
from __future__ import annotations

from fuel_regression.pipeline.step import PipelineStep
from fuel_regression.training.context import RegressionContext
from fuel_regression.engines.tensor_build_engine import TensorBuildEngine


class TensorBuildStep(PipelineStep):
    """
    Contract:
    - consumes ctx.clean_records
    - produces ctx.tensors ([N, 1] x 2)
    - N == 0 -> InsufficientDataError (raised by the engine)
    """

    stage = "tensor_build"

    def __init__(self, engine: TensorBuildEngine, inst=None):
        super().__init__(inst)
        self.engine = engine

    def run(self, ctx: RegressionContext) -> RegressionContext:
        with self.inst.timer(self.step_name):
            ctx.tensors = self.engine.build(ctx.clean_records or [])
        return ctx
