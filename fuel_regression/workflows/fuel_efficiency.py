# fuel_regression/workflows/fuel_efficiency.py
from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional

from fuel_regression.config.app_config import AppConfig
from fuel_regression.observability.instrumentation import Instrumentation
from fuel_regression.training.pipeline import PipelineResult, RegressionPipeline

from fuel_regression.engines.record_filter_engine import RecordFilterEngine
from fuel_regression.engines.tensor_build_engine import TensorBuildEngine
from fuel_regression.engines.normalize_engine import NormalizeEngine
from fuel_regression.training.engines.model.adam_regression_train_engine import (
    AdamRegressionTrainEngine,
)
from fuel_regression.training.engines.predict_engine import PredictEngine

from fuel_regression.training.steps.record_load_step import RecordLoadStep
from fuel_regression.training.steps.record_filter_step import RecordFilterStep
from fuel_regression.training.steps.data_plot_step import DataPlotStep
from fuel_regression.training.steps.model_build_step import ModelBuildStep
from fuel_regression.training.steps.tensor_build_step import TensorBuildStep
from fuel_regression.training.steps.normalize_step import NormalizeStep
from fuel_regression.training.steps.model_train_step import ModelTrainStep
from fuel_regression.training.steps.predict_step import PredictStep
from fuel_regression.training.steps.prediction_plot_step import PredictionPlotStep

from fuel_regression.adapters.http_record_source import HttpRecordSource
from fuel_regression.adapters.json_file_record_source import JsonFileRecordSource


def progress_interval(epochs: int, lines: int = 10) -> int:
    return max(1, epochs // lines)


def build_regression_pipeline(
    cfg: Optional[AppConfig] = None,
    inst: Optional[Instrumentation] = None,
) -> RegressionPipeline:
    """
    Horsepower -> km/l workflow (FINAL)

    load -> filter -> data plot -> model + summary -> tensors
         -> normalize -> train -> predict -> comparison plot
    """
    if cfg is None:
        cfg = AppConfig.load()
    if inst is None:
        # ~10 progress lines per fit, whatever the epoch count
        inst = Instrumentation(progress_every=progress_interval(cfg.training.epochs))

    fields = cfg.data.fields

    return RegressionPipeline(
        steps=[
            RecordLoadStep(inst),
            RecordFilterStep(
                RecordFilterEngine(
                    horsepower_field=fields.horsepower,
                    efficiency_field=fields.efficiency_raw,
                    conversion_factor=cfg.data.conversion_factor,
                ),
                inst,
            ),
            DataPlotStep(inst),
            ModelBuildStep(inst),
            TensorBuildStep(TensorBuildEngine(), inst),
            NormalizeStep(NormalizeEngine(seed=cfg.training.seed), inst),
            ModelTrainStep(AdamRegressionTrainEngine(cfg.training, inst), inst),
            PredictStep(PredictEngine(cfg.prediction.num_samples), inst),
            PredictionPlotStep(inst),
        ],
        inst=inst,
        cfg=cfg,
    )


async def run_pipeline(
    source,
    sink,
    cfg: Optional[AppConfig] = None,
    *,
    run_id: Optional[str] = None,
    cancel: Optional[asyncio.Event] = None,
) -> PipelineResult:
    """
    Host entry point: any RecordSource + any VisualizationSink.
    """
    if cfg is None:
        cfg = AppConfig()
    pipeline = build_regression_pipeline(cfg)
    return await pipeline.run(source, sink, run_id=run_id, cancel=cancel)


def build_source(cfg: AppConfig, path: Optional[Path | str] = None):
    if path is not None:
        return JsonFileRecordSource(path)
    return HttpRecordSource.from_config(cfg.data)
