# fuel_regression/visualization/logging_sink.py
from __future__ import annotations

from typing import Dict, List, Sequence

from fuel_regression.utils.logger import logs
from fuel_regression.visualization.sink import LayerSummary, Point


class LoggingSink:
    """
    Sink without plotting: every call becomes a log line.
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
        logs.info(f"[LoggingSink] scatter '{name}' points={len(values)} ({x_label} vs {y_label})")

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
        sizes = ", ".join(f"{s}={len(v)}" for s, v in zip(series, values))
        logs.info(f"[LoggingSink] series '{name}' {sizes}")

    def on_epoch_end(self, epoch: int, metrics: Dict[str, float]) -> None:
        logs.info(
            f"[LoggingSink] epoch={epoch} "
            + " ".join(f"{k}={v:.6f}" for k, v in metrics.items())
        )

    def show_model_summary(self, name: str, layers: List[LayerSummary]) -> None:
        for layer in layers:
            logs.info(
                f"[LoggingSink] {name}: {layer.name} ({layer.kind}) "
                f"out={layer.output_shape} params={layer.params}"
            )
