# fuel_regression/visualization/sink.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Protocol, Sequence, runtime_checkable


@dataclass(frozen=True)
class Point:
    x: float
    y: float


@dataclass(frozen=True)
class LayerSummary:
    name: str
    kind: str
    input_shape: tuple
    output_shape: tuple
    params: int


@runtime_checkable
class VisualizationSink(Protocol):
    """
    Everything the pipeline reports to a human.

    Call contract per run:
    - render_scatterplot   once (raw data)
    - show_model_summary   once
    - on_epoch_end         once per epoch, ordered by epoch index
    - render_series        once (predictions vs original)
    """

    def render_scatterplot(
        self,
        name: str,
        values: Sequence[Point],
        *,
        x_label: str,
        y_label: str,
        height: int,
    ) -> None:
        ...

    def render_series(
        self,
        name: str,
        values: Sequence[Sequence[Point]],
        series: Sequence[str],
        *,
        x_label: str,
        y_label: str,
        height: int,
    ) -> None:
        ...

    def on_epoch_end(self, epoch: int, metrics: Dict[str, float]) -> None:
        ...

    def show_model_summary(self, name: str, layers: List[LayerSummary]) -> None:
        ...
