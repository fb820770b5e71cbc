# fuel_regression/training/steps/model_build_step.py
from __future__ import annotations

from fuel_regression.utils.logger import logs
from fuel_regression.pipeline.step import PipelineStep
from fuel_regression.training.context import RegressionContext
from fuel_regression.training.model import build_model


class ModelBuildStep(PipelineStep):
    """
    Contract:
    - produces ctx.model (fresh parameters every run)
    - reports the layer summary to the sink once
    """

    stage = "model_build"
    summary_name = "Model Summary"

    def run(self, ctx: RegressionContext) -> RegressionContext:
        model = build_model(ctx.cfg.model, seed=ctx.cfg.training.seed)
        layers = model.summary()

        logs.info(
            "[ModelBuildStep] "
            + " -> ".join(f"{l.name}{l.output_shape} params={l.params}" for l in layers)
        )

        ctx.model = model
        ctx.sink.show_model_summary(self.summary_name, layers)
        return ctx
