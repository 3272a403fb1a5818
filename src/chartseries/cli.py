from __future__ import annotations

from pathlib import Path

import typer
from pydantic import ValidationError

from chartseries.analysis.anomaly import clean_data, detect_anomalies
from chartseries.analysis.regression import best_fit
from chartseries.config import DEFAULT_CONFIG_PATH, AppConfig, load_config
from chartseries.errors import InvalidInputError
from chartseries.io.write import dump_summary, write_summary, write_table
from chartseries.logging import configure_logging
from chartseries.model.parsing import parse_elements, parse_number, parse_tuple
from chartseries.model.policies import SeriesKind
from chartseries.model.store import build_store

app = typer.Typer(no_args_is_help=True, add_completion=False)


def _load_app_config(config_path: Path) -> AppConfig:
    source: Path | None = config_path
    if not config_path.exists():
        # Only the default location may be absent; built-in defaults apply then.
        if config_path.resolve() != DEFAULT_CONFIG_PATH.resolve():
            raise typer.BadParameter(f"Config file not found: {config_path}")
        source = None
    try:
        return load_config(source)
    except ValidationError as exc:
        raise typer.BadParameter(f"Invalid config {config_path}: {exc}") from exc


def _pairs_from_elements(elements: str) -> list[tuple[float, float]]:
    pairs: list[tuple[float, float]] = []
    for row in parse_elements(elements):
        parsed = parse_tuple(row)
        if parsed is None:
            raise typer.BadParameter(f"Not a numeric pair: {','.join(row)}")
        pairs.append(parsed)
    return pairs


def _values_from_text(values: str) -> list[float]:
    parsed_values: list[float] = []
    for token in values.split(","):
        parsed = parse_number(token)
        if parsed is None:
            raise typer.BadParameter(f"Not a number: {token.strip()!r}")
        parsed_values.append(parsed)
    return parsed_values


@app.command()
def series(
    elements: str = typer.Option(..., help="Comma separated x1,y1,x2,y2,... pairs."),
    kind: SeriesKind | None = typer.Option(None, help="Override series.kind from config."),
    config: Path = typer.Option(DEFAULT_CONFIG_PATH, readable=True, resolve_path=True),
    time_entries: bool = typer.Option(
        False, help="Append pairs as time entries bounded by series.maximum_time_entries."
    ),
    out: Path | None = typer.Option(
        None,
        resolve_path=True,
        help="Write the series table to CSV (or parquet by file suffix) instead of stdout.",
    ),
) -> None:
    """Build a series from element pairs and print its entries in storage order."""
    cfg = _load_app_config(config)
    configure_logging(cfg.logging.level)
    if kind is not None:
        cfg.series.kind = kind.value
    store = build_store(cfg)
    if time_entries:
        for row in parse_elements(elements):
            store.insert_time_entry(row)
    else:
        store.set_elements(elements)

    if out is not None:
        fmt = "parquet" if out.suffix == ".parquet" else "csv"
        path = write_table(store.to_frame(), out, fmt=fmt)
        typer.echo(f"Series written to: {path}")
        return
    for position, value in store.export_all():
        typer.echo(f"{position},{value}")


@app.command()
def anomalies(
    values: str = typer.Option(..., help="Comma separated numeric values."),
    threshold: float | None = typer.Option(
        None, min=0.0, help="Z-score threshold. Falls back to statistics.anomaly_threshold."
    ),
    config: Path = typer.Option(DEFAULT_CONFIG_PATH, readable=True, resolve_path=True),
) -> None:
    """Print the 1-based index and value of each outlier."""
    cfg = _load_app_config(config)
    configure_logging(cfg.logging.level)
    effective_threshold = threshold if threshold is not None else cfg.statistics.anomaly_threshold
    flagged = detect_anomalies(_values_from_text(values), effective_threshold)
    if not flagged:
        typer.echo("No anomalies detected")
        return
    for index, value in flagged:
        typer.echo(f"{index} {value}")


@app.command("best-fit")
def best_fit_command(
    elements: str = typer.Option(..., help="Comma separated x1,y1,x2,y2,... pairs."),
    out: Path | None = typer.Option(None, resolve_path=True),
    config: Path = typer.Option(DEFAULT_CONFIG_PATH, readable=True, resolve_path=True),
) -> None:
    """Fit a least-squares line and print slope, intercept, correlation and predictions."""
    cfg = _load_app_config(config)
    configure_logging(cfg.logging.level)
    result = best_fit(_pairs_from_elements(elements))
    if out is not None:
        path = write_summary(result.as_dict(), out)
        typer.echo(f"Fit written to: {path}")
        return
    typer.echo(dump_summary(result.as_dict()))


@app.command()
def clean(
    index: int = typer.Option(..., help="1-based index of the point to drop."),
    elements: str = typer.Option(..., help="Comma separated x1,y1,x2,y2,... pairs."),
    config: Path = typer.Option(DEFAULT_CONFIG_PATH, readable=True, resolve_path=True),
) -> None:
    """Drop one point by its anomaly index and print the remaining pairs."""
    cfg = _load_app_config(config)
    configure_logging(cfg.logging.level)
    pairs = _pairs_from_elements(elements)
    try:
        remaining = clean_data(index, [x for x, _ in pairs], [y for _, y in pairs])
    except InvalidInputError as exc:
        raise typer.BadParameter(str(exc)) from exc
    for x, y in remaining:
        typer.echo(f"{x},{y}")


if __name__ == "__main__":
    app()
