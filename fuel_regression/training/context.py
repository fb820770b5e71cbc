# fuel_regression/training/context.py
from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from fuel_regression.engines.normalize_engine import NormalizedTensors
from fuel_regression.engines.record_filter_engine import CleanRecord
from fuel_regression.engines.tensor_build_engine import FeatureTargetPair
from fuel_regression.training.engines.predict_engine import PredictionResult
from fuel_regression.training.engines.train_result import TrainingHistory
from fuel_regression.training.model import FuelEfficiencyModel


@dataclass
class RegressionContext:
    """
    RegressionContext（FINAL / FROZEN）

    Semantics:
    - One context == one training + prediction run
    - run_id is immutable and mandatory
    - `normalized.params` is written once and reused for denormalization
    """

    # -------------------------
    # Identity (FROZEN)
    # -------------------------
    run_id: str

    # -------------------------
    # Static bindings
    # -------------------------
    cfg: Any
    inst: Any
    source: Any
    sink: Any
    cancel: Optional[asyncio.Event] = None

    # -------------------------
    # Stage outputs
    # -------------------------
    raw_records: Optional[List[Dict[str, Any]]] = None
    clean_records: Optional[List[CleanRecord]] = None
    model: Optional[FuelEfficiencyModel] = None
    tensors: Optional[FeatureTargetPair] = None
    normalized: Optional[NormalizedTensors] = None
    history: Optional[TrainingHistory] = None
    prediction: Optional[PredictionResult] = None

    metrics: Dict[str, Any] = field(default_factory=dict)
