from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np

from fuel_regression.engines.record_filter_engine import CleanRecord
from fuel_regression.utils.errors import InsufficientDataError


@dataclass(frozen=True)
class FeatureTargetPair:
    """
    inputs / labels: float64 column matrices, shape [N, 1], index-aligned.
    """

    inputs: np.ndarray
    labels: np.ndarray

    def __len__(self) -> int:
        return int(self.inputs.shape[0])


class TensorBuildEngine:
    """
    TensorBuildEngine（FINAL / FROZEN）

    Pure projection: records[i] -> (inputs[i, 0], labels[i, 0]).
    No shuffling, no scaling.
    """

    def build(self, records: Sequence[CleanRecord]) -> FeatureTargetPair:
        n = len(records)
        if n == 0:
            raise InsufficientDataError(
                "no usable records after filtering; cannot build feature/target matrices"
            )

        inputs = np.fromiter((r.horsepower for r in records), dtype=np.float64, count=n)
        labels = np.fromiter((r.efficiency for r in records), dtype=np.float64, count=n)

        return FeatureTargetPair(
            inputs=inputs.reshape(n, 1),
            labels=labels.reshape(n, 1),
        )
