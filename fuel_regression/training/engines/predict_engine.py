from __future__ import annotations

from dataclasses import dataclass
from typing import List, Sequence

import numpy as np
import torch

from fuel_regression.engines.normalize_engine import NormalizationParams
from fuel_regression.engines.record_filter_engine import CleanRecord
from fuel_regression.training.model import FuelEfficiencyModel
from fuel_regression.utils.tensor_scope import TensorScope
from fuel_regression.visualization.sink import Point


@dataclass(frozen=True)
class PredictionResult:
    original: List[Point]
    predicted: List[Point]


class PredictEngine:
    """
    PredictEngine（FINAL / FROZEN）

    Responsibility:
    - Sweep the normalized input domain [0, 1] uniformly
    - Run the model without gradient tracking
    - Map both axes back with the run's NormalizationParams

    Contract:
    - exactly num_samples predicted points, whatever N is
    - predicted x spans [input_min, input_max]
    - read-only on the model
    """

    def __init__(self, num_samples: int = 300):
        if num_samples < 2:
            raise ValueError(f"num_samples must be >= 2, got {num_samples}")
        self.num_samples = num_samples

    def predict(
        self,
        *,
        model: FuelEfficiencyModel,
        params: NormalizationParams,
        records: Sequence[CleanRecord],
    ) -> PredictionResult:
        with TensorScope("predict") as scope:
            xs = scope.track(np.linspace(0.0, 1.0, self.num_samples))

            was_training = model.training
            model.eval()
            try:
                with torch.no_grad():
                    x_t = scope.track(
                        torch.as_tensor(xs, dtype=torch.float32).reshape(self.num_samples, 1)
                    )
                    preds = scope.track(model(x_t).reshape(-1).numpy().astype(np.float64))
            finally:
                model.train(was_training)

            un_norm_xs = params.denormalize_inputs(xs)
            un_norm_preds = params.denormalize_labels(preds)

            predicted = [
                Point(x=float(x), y=float(y)) for x, y in zip(un_norm_xs, un_norm_preds)
            ]

        original = [Point(x=r.horsepower, y=r.efficiency) for r in records]

        return PredictionResult(original=original, predicted=predicted)
