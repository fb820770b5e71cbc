#!filepath: tests/visualization/test_matplotlib_sink.py
import json

import pandas as pd
import pytest

from fuel_regression.training.model import build_model
from fuel_regression.visualization.matplotlib_sink import MatplotlibReportSink
from fuel_regression.visualization.sink import Point, VisualizationSink


def _points(n=5):
    return [Point(x=float(i), y=float(2 * i)) for i in range(n)]


def test_is_visualization_sink(tmp_path):
    assert isinstance(MatplotlibReportSink(tmp_path), VisualizationSink)


def test_scatterplot_written(tmp_path):
    sink = MatplotlibReportSink(tmp_path / "reports")
    sink.render_scatterplot(
        "Horsepower v Km per Liter",
        _points(),
        x_label="Horsepower",
        y_label="Km per Liter",
        height=300,
    )

    path = tmp_path / "reports" / "horsepower_v_km_per_liter.png"
    assert path.exists()
    assert sink.written == [path]


def test_series_written(tmp_path):
    sink = MatplotlibReportSink(tmp_path)
    sink.render_series(
        "Model Predictions vs Original Data",
        [_points(), _points(3)],
        ["original", "predicted"],
        x_label="Horsepower",
        y_label="Km per Liter",
        height=300,
    )

    assert (tmp_path / "model_predictions_vs_original_data.png").exists()


def test_series_name_mismatch_raises(tmp_path):
    sink = MatplotlibReportSink(tmp_path)

    with pytest.raises(ValueError):
        sink.render_series(
            "x", [_points()], ["original", "predicted"],
            x_label="a", y_label="b", height=300,
        )


def test_model_summary_json(tmp_path):
    sink = MatplotlibReportSink(tmp_path)
    sink.show_model_summary("Model Summary", build_model(seed=0).summary())

    doc = json.loads((tmp_path / "model_summary.json").read_text(encoding="utf-8"))
    assert doc["name"] == "Model Summary"
    assert [l["name"] for l in doc["layers"]] == ["dense_1", "dense_2"]
    assert [l["params"] for l in doc["layers"]] == [2, 2]


def test_close_writes_training_reports(tmp_path):
    with MatplotlibReportSink(tmp_path) as sink:
        for epoch, loss in enumerate([0.3, 0.2, 0.1]):
            sink.on_epoch_end(epoch, {"loss": loss, "mse": loss})

    df = pd.read_csv(tmp_path / "training_metrics.csv")
    assert list(df["epoch"]) == [0, 1, 2]
    assert list(df.columns) == ["epoch", "loss", "mse"]
    assert (tmp_path / "training_performance.png").exists()
    assert sink.epochs == []


def test_close_without_epochs_writes_nothing(tmp_path):
    out = tmp_path / "reports"
    MatplotlibReportSink(out).close()

    assert not out.exists()
