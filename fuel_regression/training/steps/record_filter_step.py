# fuel_regression/training/steps/record_filter_step.py
from __future__ import annotations

from fuel_regression.utils.logger import logs
from fuel_regression.pipeline.step import PipelineStep
from fuel_regression.training.context import RegressionContext
from fuel_regression.engines.record_filter_engine import RecordFilterEngine


class RecordFilterStep(PipelineStep):
    """
    Contract:
    - consumes ctx.raw_records
    - produces ctx.clean_records (may be empty)
    """

    stage = "filter"

    def __init__(self, engine: RecordFilterEngine, inst=None):
        super().__init__(inst)
        self.engine = engine

    def run(self, ctx: RegressionContext) -> RegressionContext:
        with self.inst.timer(self.step_name):
            clean = self.engine.filter(ctx.raw_records or [])

        dropped = len(ctx.raw_records or []) - len(clean)
        logs.info(f"[RecordFilterStep] kept={len(clean)} dropped={dropped}")

        ctx.clean_records = clean
        self.inst.metrics.record("clean_records", len(clean))
        return ctx
