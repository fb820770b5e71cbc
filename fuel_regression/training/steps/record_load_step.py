# fuel_regression/training/steps/record_load_step.py
from __future__ import annotations

from collections.abc import Mapping

from fuel_regression.utils.logger import logs
from fuel_regression.utils.errors import DataUnavailableError
from fuel_regression.pipeline.step import PipelineStep
from fuel_regression.training.context import RegressionContext


class RecordLoadStep(PipelineStep):
    """
    RecordLoadStep（FINAL）

    Contract:
    - consumes ctx.source
    - produces ctx.raw_records
    - every source failure surfaces as DataUnavailableError (no retry here)
    """

    stage = "load"

    async def run(self, ctx: RegressionContext) -> RegressionContext:
        with self.inst.timer(self.step_name):
            try:
                records = await ctx.source.fetch()
            except DataUnavailableError:
                raise
            except Exception as e:
                raise DataUnavailableError(f"record source failed: {e}") from e

        if not isinstance(records, list):
            raise DataUnavailableError(
                f"record source returned {type(records).__name__}, expected a list"
            )

        non_mapping = sum(1 for r in records if not isinstance(r, Mapping))
        if non_mapping:
            logs.warning(f"[RecordLoadStep] {non_mapping} non-object record(s) in source")

        ctx.raw_records = records
        self.inst.metrics.record("raw_records", len(records))
        return ctx
