# fuel_regression/training/steps/data_plot_step.py
from __future__ import annotations

from fuel_regression.pipeline.step import PipelineStep
from fuel_regression.training.context import RegressionContext
from fuel_regression.visualization.sink import Point


class DataPlotStep(PipelineStep):
    """
    One scatterplot of the clean data (horsepower vs km/l).
    """

    stage = "data_plot"
    plot_name = "Horsepower v Km per Liter"

    def run(self, ctx: RegressionContext) -> RegressionContext:
        pcfg = ctx.cfg.prediction
        values = [Point(x=r.horsepower, y=r.efficiency) for r in ctx.clean_records or []]

        ctx.sink.render_scatterplot(
            self.plot_name,
            values,
            x_label=pcfg.x_label,
            y_label=pcfg.y_label,
            height=pcfg.plot_height,
        )
        return ctx
