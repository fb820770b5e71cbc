# fuel_regression/training/pipeline.py
from __future__ import annotations

import asyncio
import inspect
import uuid
from dataclasses import dataclass
from typing import List, Optional

from fuel_regression.utils.logger import logs
from fuel_regression.observability.instrumentation import Instrumentation
from fuel_regression.pipeline.step import PipelineStep
from fuel_regression.engines.normalize_engine import NormalizationParams
from fuel_regression.engines.record_filter_engine import CleanRecord
from fuel_regression.training.context import RegressionContext
from fuel_regression.training.engines.predict_engine import PredictionResult
from fuel_regression.training.engines.train_result import TrainingHistory
from fuel_regression.training.model import FuelEfficiencyModel


@dataclass(frozen=True)
class PipelineResult:
    run_id: str
    clean_records: List[CleanRecord]
    params: NormalizationParams
    model: FuelEfficiencyModel
    history: TrainingHistory
    prediction: PredictionResult


class RegressionPipeline:
    """
    RegressionPipeline（FINAL / FROZEN）

    Semantics:
    - Pipeline owns ordering; steps own semantics
    - one flow of control, stages never overlap
    - no partial success: the first failing step aborts the run
      and its exception reaches the caller unchanged
    """

    def __init__(
            self,
            *,
            steps: List[PipelineStep],
            inst: Instrumentation,
            cfg,
    ):
        self.steps = steps
        self.inst = inst
        self.cfg = cfg

    async def run(
            self,
            source,
            sink,
            *,
            run_id: Optional[str] = None,
            cancel: Optional[asyncio.Event] = None,
    ) -> PipelineResult:
        run_id = run_id or uuid.uuid4().hex[:12]
        logs.info(f"[RegressionPipeline] START run_id={run_id}")

        ctx = RegressionContext(
            run_id=run_id,
            cfg=self.cfg,
            inst=self.inst,
            source=source,
            sink=sink,
            cancel=cancel,
        )

        try:
            for step in self.steps:
                with step.timed():
                    out = step.run(ctx)
                    if inspect.isawaitable(out):
                        out = await out
                ctx = out
        except Exception as e:
            logs.error(
                f"[RegressionPipeline] ABORT run_id={run_id} "
                f"step={step.step_name} error={type(e).__name__}: {e}"
            )
            raise
        finally:
            self.inst.generate_timeline_report(run_id)

        logs.info(f"[RegressionPipeline] DONE run_id={run_id}")

        return PipelineResult(
            run_id=run_id,
            clean_records=ctx.clean_records,
            params=ctx.normalized.params,
            model=ctx.model,
            history=ctx.history,
            prediction=ctx.prediction,
        )
