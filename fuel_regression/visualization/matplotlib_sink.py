# fuel_regression/visualization/matplotlib_sink.py
from __future__ import annotations

import json
import re
from dataclasses import asdict
from pathlib import Path
from typing import Dict, List, Sequence

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import pandas as pd  # noqa: E402

from fuel_regression.utils.logger import logs  # noqa: E402
from fuel_regression.visualization.sink import LayerSummary, Point  # noqa: E402

_DPI = 100


def _slug(name: str) -> str:
    return re.sub(r"[^a-z0-9]+", "_", name.lower()).strip("_")


class MatplotlibReportSink:
    """
    MatplotlibReportSink（FINAL）

    Outputs (out_dir):
    - <plot_name>.png          scatterplots
    - model_summary.json
    - training_metrics.csv     one row per epoch   (on close)
    - training_performance.png loss / mse curves   (on close)
    """

    def __init__(self, out_dir: Path | str, *, width: float = 10.0):
        self.out_dir = Path(out_dir)
        self.width = width
        self.epochs: List[Dict[str, float]] = []
        self.written: List[Path] = []

    def __enter__(self) -> "MatplotlibReportSink":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _path(self, name: str, suffix: str) -> Path:
        self.out_dir.mkdir(parents=True, exist_ok=True)
        return self.out_dir / f"{_slug(name)}{suffix}"

    def _save(self, path: Path) -> Path:
        plt.tight_layout()
        plt.savefig(path)
        plt.close()
        self.written.append(path)
        logs.info(f"[MatplotlibReportSink] saved {path}")
        return path

    def render_scatterplot(
        self,
        name: str,
        values: Sequence[Point],
        *,
        x_label: str,
        y_label: str,
        height: int,
    ) -> None:
        plt.figure(figsize=(self.width, height / _DPI), dpi=_DPI)
        plt.scatter([p.x for p in values], [p.y for p in values], s=8)
        plt.xlabel(x_label)
        plt.ylabel(y_label)
        plt.title(name)
        self._save(self._path(name, ".png"))

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
        if len(values) != len(series):
            raise ValueError(f"{len(values)} series but {len(series)} names")

        plt.figure(figsize=(self.width, height / _DPI), dpi=_DPI)
        for points, label in zip(values, series):
            plt.scatter([p.x for p in points], [p.y for p in points], s=8, label=label)
        plt.xlabel(x_label)
        plt.ylabel(y_label)
        plt.title(name)
        plt.legend()
        self._save(self._path(name, ".png"))

    def on_epoch_end(self, epoch: int, metrics: Dict[str, float]) -> None:
        self.epochs.append({"epoch": epoch, **metrics})

    def show_model_summary(self, name: str, layers: List[LayerSummary]) -> None:
        path = self._path("model_summary", ".json")
        path.write_text(
            json.dumps(
                {"name": name, "layers": [asdict(l) for l in layers]},
                indent=2,
            ),
            encoding="utf-8",
        )
        self.written.append(path)
        logs.info(f"[MatplotlibReportSink] saved {path}")

    def close(self) -> None:
        if not self.epochs:
            return

        df = pd.DataFrame(self.epochs)
        csv_path = self._path("training_metrics", ".csv")
        df.to_csv(csv_path, index=False)
        self.written.append(csv_path)

        plt.figure(figsize=(self.width, 2.0), dpi=_DPI)
        for col in ("loss", "mse"):
            if col in df:
                plt.plot(df["epoch"], df[col], label=col)
        plt.xlabel("epoch")
        plt.title("Training Performance")
        plt.legend()
        self._save(self._path("training_performance", ".png"))

        self.epochs = []
