from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Optional

import numpy as np

from fuel_regression.engines.tensor_build_engine import FeatureTargetPair
from fuel_regression.utils.errors import DegenerateRangeError
from fuel_regression.utils.tensor_scope import TensorScope


@dataclass(frozen=True)
class NormalizationParams:
    """
    Min / max per axis, computed ONCE per run.

    The same instance must be used to normalize the training data
    and to denormalize model output.
    """

    input_min: float
    input_max: float
    label_min: float
    label_max: float

    @property
    def input_range(self) -> float:
        return self.input_max - self.input_min

    @property
    def label_range(self) -> float:
        return self.label_max - self.label_min

    def normalize_inputs(self, values: np.ndarray) -> np.ndarray:
        return (np.asarray(values, dtype=np.float64) - self.input_min) / self.input_range

    def normalize_labels(self, values: np.ndarray) -> np.ndarray:
        return (np.asarray(values, dtype=np.float64) - self.label_min) / self.label_range

    def denormalize_inputs(self, values: np.ndarray) -> np.ndarray:
        return np.asarray(values, dtype=np.float64) * self.input_range + self.input_min

    def denormalize_labels(self, values: np.ndarray) -> np.ndarray:
        return np.asarray(values, dtype=np.float64) * self.label_range + self.label_min

    def as_dict(self) -> dict:
        return {
            "input_min": self.input_min,
            "input_max": self.input_max,
            "label_min": self.label_min,
            "label_max": self.label_max,
        }


@dataclass(frozen=True)
class NormalizedTensors:
    inputs: np.ndarray
    labels: np.ndarray
    params: NormalizationParams


def shuffle_pairs(
    pair: FeatureTargetPair,
    rng: np.random.Generator,
) -> FeatureTargetPair:
    """
    Apply ONE permutation to both columns (no cross-pairing).
    Returns fresh arrays; `pair` is left untouched.
    """
    order = rng.permutation(len(pair))
    return FeatureTargetPair(
        inputs=pair.inputs[order].copy(),
        labels=pair.labels[order].copy(),
    )


class NormalizeEngine:
    """
    NormalizeEngine（FINAL / FROZEN）

    Steps:
    1) shuffle (working copy, pairs stay aligned)
    2) per-column min / max
    3) zero or non-finite range -> DegenerateRangeError (never NaN / inf)
    4) (v - min) / (max - min)
    """

    def __init__(self, *, shuffle: bool = True, seed: Optional[int] = None):
        self.shuffle = shuffle
        self.rng = np.random.default_rng(seed)

    def normalize(self, pair: FeatureTargetPair) -> NormalizedTensors:
        with TensorScope("normalize") as scope:
            work = pair
            if self.shuffle:
                # the shuffled copy is freed on exit; `pair` belongs to the caller
                work = shuffle_pairs(pair, self.rng)
                scope.track(work.inputs)
                scope.track(work.labels)

            params = self.compute_params(work)

            inputs = params.normalize_inputs(work.inputs)
            labels = params.normalize_labels(work.labels)

        return NormalizedTensors(inputs=inputs, labels=labels, params=params)

    @staticmethod
    def compute_params(pair: FeatureTargetPair) -> NormalizationParams:
        input_min = float(np.min(pair.inputs))
        input_max = float(np.max(pair.inputs))
        label_min = float(np.min(pair.labels))
        label_max = float(np.max(pair.labels))

        # zero range divides by zero; an overflowing range (inf) gives NaN
        for column, low, high in (
            ("horsepower", input_min, input_max),
            ("efficiency", label_min, label_max),
        ):
            span = high - low
            if span == 0 or not math.isfinite(span):
                raise DegenerateRangeError(column, low, high)

        return NormalizationParams(
            input_min=input_min,
            input_max=input_max,
            label_min=label_min,
            label_max=label_max,
        )
