"""
Command-line interface for transplantr: score CSV files and Excel workbooks.
"""

import logging
import pathlib
import sys
import typing

import click
from stairval.notepad import create_notepad

from .loader import load_tables
from .scorer import SCORES, TableScorer
from .units import Units

logger = logging.getLogger(__name__)


@click.group()
def main():
    """transplantr: clinical risk scores for transplantation datasets."""
    pass


@main.command(name="list-scores")
def list_scores():
    """
    List the available scores with the columns each one reads.
    """
    for name, spec in SCORES.items():
        click.echo(f"{name}: {spec.description}")
        required = [spec.columns[param] for param in spec.required]
        click.echo(f"    columns: {', '.join(required)}")
        optional = sorted(spec.columns[param] for param in spec.optional)
        if optional:
            click.echo(f"    optional: {', '.join(optional)}")


def _parse_columns(ctx, param, value: tuple[str, ...]) -> dict[str, str]:
    # PARAM=COLUMN pairs
    columns = {}
    for item in value:
        name, sep, column = item.partition("=")
        if not sep or not name.strip() or not column.strip():
            raise click.BadParameter(f"expected PARAM=COLUMN, got {item!r}")
        columns[name.strip()] = column.strip()
    return columns


def _configure_logging(verbose_logging: bool, log_file_path: typing.Optional[str]):
    handlers: list[logging.Handler] = []
    if log_file_path:
        handlers.append(logging.FileHandler(log_file_path, mode="a", encoding="utf-8"))
    if verbose_logging:
        handlers.append(logging.StreamHandler(sys.stderr))
    if handlers:
        logging.basicConfig(
            level=logging.DEBUG if verbose_logging else logging.INFO,
            format="%(asctime)s %(levelname)s %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
            handlers=handlers,
        )


@main.command(name="score")
@click.option(
    "-i",
    "--input-path",
    "input_path",
    required=True,
    type=click.Path(exists=True, dir_okay=False),
    help="CSV file or Excel workbook with one row per case",
)
@click.option(
    "-s",
    "--score",
    "scores",
    required=True,
    multiple=True,
    type=click.Choice(sorted(SCORES)),
    help="score to compute (repeatable, applied in order)",
)
@click.option(
    "--units",
    type=click.Choice([u.value for u in Units], case_sensitive=False),
    envvar="TRANSPLANTR_UNITS",
    default=Units.SI.value,
    show_default=True,
    help="units of laboratory values (default from TRANSPLANTR_UNITS)",
)
@click.option("--scaling", type=float, default=None, help="KDRI scaling factor")
@click.option(
    "-c",
    "--column",
    "columns",
    multiple=True,
    callback=_parse_columns,
    help="read parameter PARAM from column COLUMN, as PARAM=COLUMN (repeatable)",
)
@click.option(
    "-o",
    "--output-dir",
    "output_dir",
    type=click.Path(file_okay=False),
    help="write each scored table as CSV into this directory",
)
@click.option("--verbose-logging", is_flag=True, help="Also emit debug logs to stderr")
@click.option(
    "--log-file-path",
    type=click.Path(dir_okay=False, writable=True),
    help="Append timestamped logs to this file",
)
def score(
    input_path: str,
    scores: tuple[str, ...],
    units: str,
    scaling: typing.Optional[float],
    columns: dict[str, str],
    output_dir: typing.Optional[str],
    verbose_logging: bool,
    log_file_path: typing.Optional[str],
):
    """
    Score every table (CSV file or workbook sheet) and append one column per score.
    """
    _configure_logging(verbose_logging, log_file_path)

    try:
        tables = load_tables(input_path)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--input-path")
    logger.info("Loaded %d table(s) from %s", len(tables), input_path)

    notepad = create_notepad("scores")
    scorer = TableScorer()
    scored = scorer.score_tables(
        tables, scores, notepad, columns=columns, units=Units.parse(units).value, scaling=scaling,
    )

    _report_issues(notepad)

    if output_dir:
        out = pathlib.Path(output_dir)
        out.mkdir(parents=True, exist_ok=True)
        for name, df in scored.items():
            path = out / f"{name}_scored.csv"
            df.to_csv(path, index=False)
            click.echo(f"Wrote {len(df)} rows to {path}")
    else:
        _print_summary(scored, scores)


def _report_issues(notepad):
    # if there were errors, show them
    if notepad.has_errors(include_subsections=True):
        click.echo("Errors found in scoring:")
        for err in notepad.errors():
            click.echo(f"- {err}")
    # show any warnings but keep going
    if notepad.has_warnings(include_subsections=True):
        click.echo("Warnings found in scoring:")
        for w in notepad.warnings():
            click.echo(f"- {w}")


def _print_summary(scored, scores):
    for name, df in scored.items():
        click.echo(f"{name}: {len(df)} rows")
        for score_name in scores:
            if score_name in df.columns:
                click.echo(f"    {score_name}: {df[score_name].notna().sum()} scored")
            else:
                click.echo(f"    {score_name}: not scored")


if __name__ == "__main__":
    main()
