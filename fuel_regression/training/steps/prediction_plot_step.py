# fuel_regression/training/steps/prediction_plot_step.py
from __future__ import annotations

from fuel_regression.pipeline.step import PipelineStep
from fuel_regression.training.context import RegressionContext


class PredictionPlotStep(PipelineStep):
    """
    Final comparison plot: original points vs the predicted sweep.
    """

    stage = "prediction_plot"
    plot_name = "Model Predictions vs Original Data"
    series = ("original", "predicted")

    def run(self, ctx: RegressionContext) -> RegressionContext:
        pcfg = ctx.cfg.prediction
        ctx.sink.render_series(
            self.plot_name,
            [ctx.prediction.original, ctx.prediction.predicted],
            list(self.series),
            x_label=pcfg.x_label,
            y_label=pcfg.y_label,
            height=pcfg.plot_height,
        )
        return ctx
