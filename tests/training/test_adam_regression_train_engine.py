# tests/training/test_adam_regression_train_engine.py
import asyncio
import math

import numpy as np
import pytest
import torch

from fuel_regression.config.training_config import TrainingConfig
from fuel_regression.training.engines.model.adam_regression_train_engine import (
    AdamRegressionTrainEngine,
)
from fuel_regression.training.model import FuelEfficiencyModel
from fuel_regression.utils.errors import (
    ModelBusyError,
    NumericDivergenceError,
    TrainingCancelledError,
)


def _data(n: int, seed: int = 0):
    rng = np.random.default_rng(seed)
    x = rng.uniform(0, 1, size=(n, 1))
    y = np.clip(1.0 - 0.8 * x + rng.normal(0, 0.05, size=(n, 1)), 0, 1)
    return x, y


def _fit(engine, model, x, y, **kwargs):
    return asyncio.run(engine.fit(model=model, inputs=x, labels=y, **kwargs))


def test_fit_300_records_reports_50_finite_epochs():
    """
    Contract:
    N=300, default config -> exactly 50 epoch reports, finite loss / mse
    """
    x, y = _data(300)
    reports = []

    history = _fit(
        AdamRegressionTrainEngine(TrainingConfig(seed=1)),
        FuelEfficiencyModel(),
        x,
        y,
        observer=reports.append,
    )

    assert len(reports) == 50
    assert [m.epoch for m in reports] == list(range(50))
    assert all(math.isfinite(m.loss) and math.isfinite(m.mse) for m in reports)
    assert len(history) == 50
    assert history.batches_per_epoch == 10


def test_fit_reduces_loss():
    x, y = _data(300)

    history = _fit(
        AdamRegressionTrainEngine(TrainingConfig(seed=1, learning_rate=0.05)),
        FuelEfficiencyModel(generator=torch.Generator().manual_seed(1)),
        x,
        y,
    )

    assert history.loss[-1] < history.loss[0]


def test_mse_metric_matches_loss():
    x, y = _data(100)

    history = _fit(AdamRegressionTrainEngine(TrainingConfig(epochs=3, seed=0)), FuelEfficiencyModel(), x, y)

    for m in history.epochs:
        assert m.mse == pytest.approx(m.loss, rel=1e-5)


def test_batches_per_epoch_is_ceil_n_over_batch_size():
    x, y = _data(65)
    engine = AdamRegressionTrainEngine(TrainingConfig(epochs=2, batch_size=32, seed=0))
    model = FuelEfficiencyModel()
    batch_rows = []
    model.register_forward_hook(lambda mod, inp, out: batch_rows.append(inp[0].shape[0]))

    history = _fit(engine, model, x, y)

    assert history.batches_per_epoch == 3
    assert batch_rows == [32, 32, 1, 32, 32, 1]


def test_observer_failure_does_not_abort_training():
    x, y = _data(40)
    seen = []

    def flaky(m):
        seen.append(m.epoch)
        raise RuntimeError("chart closed")

    history = _fit(AdamRegressionTrainEngine(TrainingConfig(epochs=4, seed=0)), FuelEfficiencyModel(), x, y, observer=flaky)

    assert seen == [0, 1, 2, 3]
    assert len(history) == 4


def test_fit_updates_model_parameters():
    x, y = _data(64)
    model = FuelEfficiencyModel()
    before = [p.detach().clone() for p in model.parameters()]

    _fit(AdamRegressionTrainEngine(TrainingConfig(epochs=2, seed=0)), model, x, y)

    after = list(model.parameters())
    assert any(not torch.equal(b, a) for b, a in zip(before, after))


def test_non_finite_loss_is_reported_then_raised():
    x, y = _data(32)
    y[0, 0] = np.inf
    reports = []

    with pytest.raises(NumericDivergenceError) as err:
        _fit(AdamRegressionTrainEngine(TrainingConfig(epochs=5, seed=0)), FuelEfficiencyModel(), x, y, observer=reports.append)

    assert err.value.epoch == 0
    assert len(reports) == 1
    assert not math.isfinite(reports[0].loss)


def test_cancel_event_stops_between_batches():
    x, y = _data(64)
    cancel = asyncio.Event()
    cancel.set()

    with pytest.raises(TrainingCancelledError):
        _fit(AdamRegressionTrainEngine(TrainingConfig(seed=0)), FuelEfficiencyModel(), x, y, cancel=cancel)


def test_second_concurrent_fit_on_same_model_is_rejected():
    x, y = _data(64)
    model = FuelEfficiencyModel()
    engine = AdamRegressionTrainEngine(TrainingConfig(epochs=3, seed=0))

    async def both():
        return await asyncio.gather(
            engine.fit(model=model, inputs=x, labels=y),
            engine.fit(model=model, inputs=x, labels=y),
            return_exceptions=True,
        )

    first, second = asyncio.run(both())

    assert len(first) == 3
    assert isinstance(second, ModelBusyError)


def test_model_is_released_after_fit():
    x, y = _data(32)
    model = FuelEfficiencyModel()
    engine = AdamRegressionTrainEngine(TrainingConfig(epochs=1, seed=0))

    _fit(engine, model, x, y)
    history = _fit(engine, model, x, y)

    assert len(history) == 1


def test_fit_yields_to_event_loop_between_batches():
    x, y = _data(96)
    ticks = []

    async def main():
        async def ticker():
            while True:
                ticks.append(1)
                await asyncio.sleep(0)

        task = asyncio.create_task(ticker())
        await AdamRegressionTrainEngine(TrainingConfig(epochs=2, seed=0)).fit(
            model=FuelEfficiencyModel(), inputs=x, labels=y
        )
        task.cancel()

    asyncio.run(main())

    # interleaved with the 6 batches
    assert len(ticks) >= 3


def test_fit_rejects_bad_shapes():
    engine = AdamRegressionTrainEngine(TrainingConfig())

    with pytest.raises(ValueError):
        _fit(engine, FuelEfficiencyModel(), np.zeros((4, 2)), np.zeros((4, 2)))
    with pytest.raises(ValueError):
        _fit(engine, FuelEfficiencyModel(), np.zeros((0, 1)), np.zeros((0, 1)))
