from __future__ import annotations

import logging
import pathlib
from typing import List, Optional

import click
import typer
import structlog
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from .config import FieldOptions, FieldmaskConfig, get_preset, list_presets, load_config
from .engine.pipeline import MaskingEngine
from .field import InMemoryHost, MaskedField, type_keys

console = Console()
log = structlog.get_logger()
app = typer.Typer(add_completion=False, no_args_is_help=True, help="fieldmask — input masking for numbers, dates and blocks")

BACKSPACE_TOKEN = "<BS>"


def version_callback(value: bool):
    if value:
        from . import __version__
        console.print(f"fieldmask {__version__}")
        raise typer.Exit()


@app.callback()
def common(
    ctx: typer.Context,
    config: Optional[pathlib.Path] = typer.Option(None, "--config", help="Path to .fieldmask.yaml"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose logs"),
    version: Optional[bool] = typer.Option(None, "--version", callback=version_callback, is_eager=True),
):
    """Global options (config, verbosity)."""
    structlog.configure(processors=[structlog.processors.JSONRenderer()])
    if verbose:
        logging.basicConfig(level=logging.DEBUG)
    try:
        cfg = load_config(config) if config else FieldmaskConfig()
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="--config")
    ctx.obj = {"config": cfg}
    if verbose:
        log.info("verbose_enabled", formats=sorted(cfg.formats))


def _options(
    preset: Optional[str],
    overrides: dict,
) -> FieldOptions:
    """Start from a preset (or defaults) and apply the flags that were given."""
    cfg: FieldmaskConfig = click.get_current_context().obj["config"]
    try:
        base = get_preset(preset, cfg).model_dump() if preset else {}
    except KeyError as e:
        raise typer.BadParameter(e.args[0], param_hint="--preset")

    base.update({k: v for k, v in overrides.items() if v is not None and v is not False})
    try:
        return FieldOptions(**base)
    except ValidationError as e:
        raise typer.BadParameter(str(e))


def _parse_blocks(blocks: Optional[str]) -> Optional[List[int]]:
    if not blocks:
        return None
    try:
        return [int(b) for b in blocks.split(",") if b.strip()]
    except ValueError:
        raise typer.BadParameter("blocks must be comma separated integers", param_hint="--blocks")


@app.command("format")
def format_(
    values: List[str] = typer.Argument(..., help="Raw values to format"),
    preset: Optional[str] = typer.Option(None, "--preset", "-p", help="Named format (see `presets`)"),
    blocks: Optional[str] = typer.Option(None, "--blocks", help="Block lengths, e.g. 4,4,4,4"),
    delimiter: Optional[str] = typer.Option(None, "--delimiter", "-d", help="Delimiter between blocks"),
    delimiters: Optional[List[str]] = typer.Option(None, "--delimiters", help="Per-boundary delimiter (repeatable)"),
    prefix: Optional[str] = typer.Option(None, "--prefix", help="Fixed prefix"),
    numeral: bool = typer.Option(False, "--numeral", help="Numeral mode"),
    date: bool = typer.Option(False, "--date", help="Date mode"),
    date_pattern: Optional[str] = typer.Option(None, "--date-pattern", help="Date fields in order, e.g. dmY or Ymd"),
    numeric_only: bool = typer.Option(False, "--numeric-only", help="Keep digits only"),
    uppercase: bool = typer.Option(False, "--uppercase", help="Upper-case the value"),
    lowercase: bool = typer.Option(False, "--lowercase", help="Lower-case the value"),
    decimal_mark: Optional[str] = typer.Option(None, "--decimal-mark", help="Numeral decimal mark"),
    decimal_scale: Optional[int] = typer.Option(None, "--decimal-scale", help="Max decimal digits"),
    integer_scale: Optional[int] = typer.Option(None, "--integer-scale", help="Max integer digits (0 = unlimited)"),
    positive_only: bool = typer.Option(False, "--positive-only", help="Drop the minus sign"),
    raw: bool = typer.Option(False, "--raw", help="Also show the raw value (and ISO date in date mode)"),
):
    """Format raw values and print the masked result."""
    opts = _options(preset, {
        "blocks": _parse_blocks(blocks),
        "delimiter": delimiter,
        "delimiters": delimiters or None,
        "prefix": prefix,
        "numeral": numeral,
        "date": date,
        "date_pattern": list(date_pattern) if date_pattern else None,
        "numeric_only": numeric_only,
        "uppercase": uppercase,
        "lowercase": lowercase,
        "numeral_decimal_mark": decimal_mark,
        "numeral_decimal_scale": decimal_scale,
        "numeral_integer_scale": integer_scale,
        "numeral_positive_only": positive_only,
    })
    engine = MaskingEngine(opts.resolve())

    for value in values:
        state = engine.new_state(value)
        formatted = state.result
        if not raw:
            console.print(formatted, markup=False, highlight=False)
            continue
        line = f"{formatted}\t{engine.get_raw_value(formatted)}"
        iso = engine.get_iso_format_date(state)
        if iso:
            line += f"\t{iso}"
        console.print(line, markup=False, highlight=False)


@app.command("type")
def type_(
    keys: str = typer.Argument(..., help=f"Keystrokes; {BACKSPACE_TOKEN} deletes the last character"),
    preset: str = typer.Option(..., "--preset", "-p", help="Named format (see `presets`)"),
    composition_quirk: bool = typer.Option(False, "--composition-quirk", help="Emulate an input method that hides backspace"),
):
    """Simulate typing into a masked field, one keystroke at a time."""
    opts = _options(preset, {})
    masked = MaskedField(InMemoryHost(), opts, composition_quirk=composition_quirk)
    strokes = ["\b" if k == BACKSPACE_TOKEN else k for k in _split_keys(keys)]

    table = Table("key", "field")
    for key, value in zip(strokes, type_keys(masked, strokes)):
        table.add_row("⌫" if key == "\b" else key, value)
    console.print(table)
    console.print(f"raw: {masked.get_raw_value()}", markup=False, highlight=False)
    iso = masked.get_iso_format_date()
    if iso:
        console.print(f"iso: {iso}", markup=False, highlight=False)


def _split_keys(keys: str) -> List[str]:
    out: List[str] = []
    i = 0
    while i < len(keys):
        if keys.startswith(BACKSPACE_TOKEN, i):
            out.append(BACKSPACE_TOKEN)
            i += len(BACKSPACE_TOKEN)
        else:
            out.append(keys[i])
            i += 1
    return out


@app.command()
def batch(
    src: pathlib.Path = typer.Argument(..., exists=True, dir_okay=False, help="File with one raw value per line"),
    preset: str = typer.Option(..., "--preset", "-p", help="Named format (see `presets`)"),
    report: Optional[pathlib.Path] = typer.Option(None, "--report", help="Write HTML report to this path"),
):
    """Format every line of a file."""
    opts = _options(preset, {})
    engine = MaskingEngine(opts.resolve())

    from .reporting.html import ReportRow
    rows: List[ReportRow] = []
    for n, line in enumerate(src.read_text(errors="ignore").splitlines(), start=1):
        state = engine.new_state(line)
        formatted = state.result
        rows.append(ReportRow(
            line=n,
            raw=line,
            formatted=formatted,
            value=engine.get_raw_value(formatted),
            iso_date=engine.get_iso_format_date(state),
        ))

    table = Table("#", "input", "formatted", "raw")
    for row in rows:
        table.add_row(str(row.line), row.raw, row.formatted, row.value)
    console.print(table)
    console.print(f"Formatted {len(rows)} values")

    if report:
        from .reporting.html import write_report
        write_report(rows, report, title=f"fieldmask: {preset}")
        console.print(f"[green]Report written:[/green] {report}")


@app.command()
def presets():
    """List the named formats (packaged presets and config formats)."""
    cfg: FieldmaskConfig = click.get_current_context().obj["config"]
    table = Table()
    table.add_column("name", no_wrap=True)
    table.add_column("options")
    for name, opts in sorted(list_presets(cfg).items()):
        table.add_row(name, ", ".join(f"{k}={v!r}" for k, v in opts.model_dump(exclude_defaults=True).items()))
    console.print(table)
