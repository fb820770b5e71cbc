# fuel_regression/training/engines/model/adam_regression_train_engine.py
from __future__ import annotations

import asyncio
import math
import weakref
from typing import Optional

import numpy as np
import torch
import torch.nn as nn

from fuel_regression.utils.logger import logs
from fuel_regression.utils.errors import (
    ModelBusyError,
    NumericDivergenceError,
    TrainingCancelledError,
)
from fuel_regression.utils.tensor_scope import TensorScope
from fuel_regression.observability.instrumentation import NoOpInstrumentation
from fuel_regression.training.engines.model_train_engine import (
    EpochObserver,
    ModelTrainEngine,
)
from fuel_regression.training.engines.train_result import EpochMetrics, TrainingHistory
from fuel_regression.training.model import FuelEfficiencyModel

# models with a fit in flight (single writer per model)
_WRITERS: "weakref.WeakSet[nn.Module]" = weakref.WeakSet()

# tf.keras / tfjs Adam epsilon
ADAM_EPSILON = 1e-7


class AdamRegressionTrainEngine(ModelTrainEngine):
    """
    Mini-batch Adam on mean-squared error（FINAL）

    Semantics:
    - ceil(N / batch_size) parameter updates per epoch
    - training set reshuffled every epoch (cfg.shuffle)
    - control yields to the event loop after every batch
    - one EpochMetrics per epoch, delivered in epoch order
    - observer errors are logged, never propagated
    - non-finite epoch loss: reported first, then NumericDivergenceError
    - no early stopping, no checkpointing
    """

    def __init__(self, cfg, inst=None):
        super().__init__(cfg)
        self.inst = inst if inst is not None else NoOpInstrumentation()

    async def fit(
        self,
        *,
        model: FuelEfficiencyModel,
        inputs: np.ndarray,
        labels: np.ndarray,
        observer: Optional[EpochObserver] = None,
        cancel: Optional[asyncio.Event] = None,
    ) -> TrainingHistory:
        if inputs.shape != labels.shape or inputs.ndim != 2 or inputs.shape[1] != 1:
            raise ValueError(
                f"inputs / labels must both be [N, 1], got {inputs.shape} / {labels.shape}"
            )
        if inputs.shape[0] == 0:
            raise ValueError("cannot fit on an empty dataset")

        if model in _WRITERS:
            raise ModelBusyError("model is already being trained by another fit()")
        _WRITERS.add(model)

        try:
            with TensorScope("fit") as scope:
                return await self._fit(model, inputs, labels, observer, cancel, scope)
        finally:
            _WRITERS.discard(model)
            model.eval()

    async def _fit(
        self,
        model: FuelEfficiencyModel,
        inputs: np.ndarray,
        labels: np.ndarray,
        observer: Optional[EpochObserver],
        cancel: Optional[asyncio.Event],
        scope: TensorScope,
    ) -> TrainingHistory:
        cfg = self.cfg
        n = int(inputs.shape[0])
        batch_size = cfg.batch_size
        n_batches = math.ceil(n / batch_size)

        x = scope.track(torch.as_tensor(inputs, dtype=torch.float32))
        y = scope.track(torch.as_tensor(labels, dtype=torch.float32))

        generator = torch.Generator()
        if cfg.seed is not None:
            generator.manual_seed(cfg.seed)
        else:
            generator.seed()

        optimizer = torch.optim.Adam(
            model.parameters(), lr=cfg.learning_rate, eps=ADAM_EPSILON
        )
        criterion = nn.MSELoss()

        history = TrainingHistory(batches_per_epoch=n_batches)

        logs.info(
            f"[TrainEngine] START n={n} batch_size={batch_size} "
            f"batches/epoch={n_batches} epochs={cfg.epochs}"
        )
        self.inst.progress.start("train", cfg.epochs, "epochs")

        model.train()
        for epoch in range(cfg.epochs):
            if cfg.shuffle:
                order = torch.randperm(n, generator=generator)
            else:
                order = torch.arange(n)

            loss_sum = 0.0
            sq_err_sum = 0.0

            for start in range(0, n, batch_size):
                if cancel is not None and cancel.is_set():
                    raise TrainingCancelledError(
                        f"training cancelled at epoch {epoch}, batch {start // batch_size}"
                    )

                idx = order[start:start + batch_size]
                xb, yb = x[idx], y[idx]

                optimizer.zero_grad()
                pred = model(xb)
                loss = criterion(pred, yb)
                loss.backward()
                optimizer.step()

                rows = int(idx.shape[0])
                loss_sum += loss.item() * rows
                sq_err_sum += float(torch.sum((pred.detach() - yb) ** 2))

                await asyncio.sleep(0)

            metrics = EpochMetrics(epoch=epoch, loss=loss_sum / n, mse=sq_err_sum / n)
            history.append(metrics)
            self.inst.metrics.append("loss", metrics.loss)
            self.inst.metrics.append("mse", metrics.mse)
            self._notify(observer, metrics)
            self.inst.progress.update("train", epoch + 1, cfg.epochs, "epochs")

            if not (math.isfinite(metrics.loss) and math.isfinite(metrics.mse)):
                logs.error(f"[TrainEngine] diverged at epoch={epoch} loss={metrics.loss}")
                raise NumericDivergenceError(epoch, metrics.loss)

        self.inst.progress.done("train")
        logs.info(f"[TrainEngine] DONE final_loss={history.final_loss:.6f}")
        return history

    @staticmethod
    def _notify(observer: Optional[EpochObserver], metrics: EpochMetrics) -> None:
        if observer is None:
            return
        try:
            observer(metrics)
        except Exception as e:
            logs.warning(
                f"[TrainEngine] epoch observer failed at epoch={metrics.epoch}: {e!r}"
            )
