# fuel_regression/training/steps/normalize_step.py
from __future__ import annotations

from fuel_regression.utils.logger import logs
from fuel_regression.pipeline.step import PipelineStep
from fuel_regression.training.context import RegressionContext
from fuel_regression.engines.normalize_engine import NormalizeEngine


class NormalizeStep(PipelineStep):
    """
    Contract:
    - consumes ctx.tensors (left untouched)
    - produces ctx.normalized (shuffled, scaled to [0, 1], + params)
    - params are computed here ONCE for the whole run
    """

    stage = "normalize"

    def __init__(self, engine: NormalizeEngine, inst=None):
        super().__init__(inst)
        self.engine = engine

    def run(self, ctx: RegressionContext) -> RegressionContext:
        if ctx.normalized is not None:
            raise RuntimeError("normalization parameters already computed for this run")

        with self.inst.timer(self.step_name):
            normalized = self.engine.normalize(ctx.tensors)

        p = normalized.params
        logs.info(
            f"[NormalizeStep] horsepower=[{p.input_min}, {p.input_max}] "
            f"efficiency=[{p.label_min:.4f}, {p.label_max:.4f}]"
        )

        ctx.normalized = normalized
        ctx.metrics["normalization"] = p.as_dict()
        return ctx
