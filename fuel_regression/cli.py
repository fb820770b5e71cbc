#!filepath: fuel_regression/cli.py
import asyncio
from pathlib import Path
from typing import Optional

import typer
from rich import print
from rich.markup import escape

from fuel_regression import __version__, init_logging
from fuel_regression.config.app_config import AppConfig
from fuel_regression.utils.errors import PipelineError, UserInputError
from fuel_regression.visualization.logging_sink import LoggingSink
from fuel_regression.visualization.matplotlib_sink import MatplotlibReportSink
from fuel_regression.workflows.fuel_efficiency import build_regression_pipeline, build_source

app = typer.Typer(help="Horsepower -> fuel efficiency regression")


@app.command()
def version():
    print(f"v{__version__}")


@app.command()
def run(
    config: Optional[Path] = typer.Option(None, help="YAML config (default: bundled base.yml)"),
    data: Optional[Path] = typer.Option(None, help="local JSON records instead of the remote dataset"),
    url: Optional[str] = typer.Option(None, help="override data.url"),
    out: Optional[Path] = typer.Option(None, help="report directory (default: prediction.output_dir)"),
    epochs: Optional[int] = typer.Option(None, min=1, help="override training.epochs"),
    seed: Optional[int] = typer.Option(None, help="override training.seed"),
    plot: bool = typer.Option(True, "--plot/--no-plot", help="write PNG / CSV reports"),
):
    """
    Train once and compare predictions with the original data.
    """
    try:
        cfg = _load_config(config, url=url, epochs=epochs, seed=seed)
    except UserInputError as e:
        print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(code=2)

    init_logging(cfg.log)
    source = build_source(cfg, data)
    out_dir = out or Path(cfg.prediction.output_dir)

    print(f"[green]Running regression pipeline[/green] source={data or cfg.data.url}")

    try:
        if plot:
            with MatplotlibReportSink(out_dir) as sink:
                result = asyncio.run(build_regression_pipeline(cfg).run(source, sink))
        else:
            result = asyncio.run(build_regression_pipeline(cfg).run(source, LoggingSink()))
    except PipelineError as e:
        print(f"[red]{type(e).__name__}: {escape(str(e))}[/red]")
        raise typer.Exit(code=1)

    p = result.params
    print(
        f"[blue]run={result.run_id}[/blue] records={len(result.clean_records)} "
        f"final_loss={result.history.final_loss:.6f} "
        f"horsepower=[{p.input_min:g}, {p.input_max:g}]"
    )
    if plot:
        print(f"reports -> {out_dir}")


def _load_config(
    path: Optional[Path],
    *,
    url: Optional[str],
    epochs: Optional[int],
    seed: Optional[int],
) -> AppConfig:
    try:
        cfg = AppConfig.load(str(path) if path is not None else None)
    except FileNotFoundError as e:
        raise UserInputError(str(e)) from e
    except ValueError as e:
        raise UserInputError(f"invalid config: {e}") from e

    if url is not None:
        cfg.data.url = url
    if epochs is not None:
        cfg.training.epochs = epochs
    if seed is not None:
        cfg.training.seed = seed
    return cfg


if __name__ == "__main__":
    app()

# python -m fuel_regression.cli run --no-plot
