from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable, Optional
import asyncio

import numpy as np

from fuel_regression.training.engines.train_result import EpochMetrics, TrainingHistory
from fuel_regression.training.model import FuelEfficiencyModel

EpochObserver = Callable[[EpochMetrics], None]


class ModelTrainEngine(ABC):
    """
    Abstract ModelTrainEngine (FINAL)
    """

    def __init__(self, cfg):
        self.cfg = cfg

    @abstractmethod
    async def fit(
        self,
        *,
        model: FuelEfficiencyModel,
        inputs: np.ndarray,
        labels: np.ndarray,
        observer: Optional[EpochObserver] = None,
        cancel: Optional[asyncio.Event] = None,
    ) -> TrainingHistory:
        """
        Mutates model parameters in place, returns the per-epoch history.
        """
        raise NotImplementedError
