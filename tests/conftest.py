# tests/conftest.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

import numpy as np
import pytest
from loguru import logger

from fuel_regression.adapters.record_source import StaticRecordSource
from fuel_regression.config.app_config import AppConfig


@pytest.fixture(autouse=True)
def disable_file_logger():
    logger.remove()
    logger.add(lambda msg: None)  # or sys.stderr
    yield


def make_raw_records(n: int, seed: int = 0) -> List[Dict[str, Any]]:
    """
    Cars-dataset shaped records: mpg falls roughly linearly with horsepower.
    """
    rng = np.random.default_rng(seed)
    hp = rng.uniform(46, 230, size=n)
    mpg = 45.0 - 0.15 * hp + rng.normal(0, 2.0, size=n)
    return [
        {
            "Name": f"car {i}",
            "Miles_per_Gallon": float(m),
            "Horsepower": float(h),
            "Cylinders": 4,
        }
        for i, (h, m) in enumerate(zip(hp, mpg))
    ]


@pytest.fixture
def raw_records() -> List[Dict[str, Any]]:
    return make_raw_records(300)


@pytest.fixture
def dirty_records() -> List[Dict[str, Any]]:
    return [
        {"Miles_per_Gallon": 18.0, "Horsepower": 130},
        {"Miles_per_Gallon": None, "Horsepower": 165},
        {"Miles_per_Gallon": 15.0, "Horsepower": None},
        {"Miles_per_Gallon": 16.0},
        {"Horsepower": 150},
        {"Miles_per_Gallon": "n/a", "Horsepower": 140},
        {"Miles_per_Gallon": 17.0, "Horsepower": float("inf")},
        {"Miles_per_Gallon": float("nan"), "Horsepower": 198},
        {"Miles_per_Gallon": True, "Horsepower": 220},
        {"Miles_per_Gallon": 24.0, "Horsepower": 95},
    ]


@dataclass
class RecordingSink:
    """
    Fake VisualizationSink: remembers every call in order.
    """

    calls: List[Tuple[str, Any]] = field(default_factory=list)
    scatterplots: List[Dict[str, Any]] = field(default_factory=list)
    series_plots: List[Dict[str, Any]] = field(default_factory=list)
    epochs: List[Tuple[int, Dict[str, float]]] = field(default_factory=list)
    summaries: List[Tuple[str, list]] = field(default_factory=list)

    def render_scatterplot(self, name, values, *, x_label, y_label, height):
        self.calls.append(("scatterplot", name))
        self.scatterplots.append(
            dict(name=name, values=list(values), x_label=x_label, y_label=y_label, height=height)
        )

    def render_series(self, name, values, series, *, x_label, y_label, height):
        self.calls.append(("series", name))
        self.series_plots.append(
            dict(name=name, values=[list(v) for v in values], series=list(series), height=height)
        )

    def on_epoch_end(self, epoch, metrics):
        self.calls.append(("epoch", epoch))
        self.epochs.append((epoch, dict(metrics)))

    def show_model_summary(self, name, layers):
        self.calls.append(("summary", name))
        self.summaries.append((name, list(layers)))


@pytest.fixture
def sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture
def source(raw_records) -> StaticRecordSource:
    return StaticRecordSource(raw_records)


@pytest.fixture
def cfg() -> AppConfig:
    """
    Defaults (batch 32, 50 epochs, 300 samples) with a fixed seed.
    """
    c = AppConfig()
    c.training.seed = 7
    return c


@pytest.fixture
def fast_cfg(cfg) -> AppConfig:
    cfg.training.epochs = 3
    return cfg


@pytest.fixture
def make_sink():
    return RecordingSink
