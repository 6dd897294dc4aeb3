"""Typer-based command line interface for abap_api_tools."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import List, Optional

import typer

from .. import __version__
from ..backend import RfcMetadataFetcher
from ..config import ConfigResolver, DefaultFolder, build_worklist, normalize_output_dir
from ..domain import LANGUAGES, Command, GenerationRequest, RunReport, RunSignature, UIFramework
from ..errors import ConfigurationError
from ..orchestrator import Orchestrator

logger = logging.getLogger(__name__)

app = typer.Typer(help="ABAP function module call templates, annotations and UI scaffolding.")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(__version__)
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit.",
    ),
) -> None:
    """ABAP API tools."""


def _setup_logging(debug: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
        force=True,
    )


def _check_language(value: str) -> str:
    if value.lower() not in LANGUAGES:
        raise typer.BadParameter(f"Language not supported: {value}")
    return value.lower()


def _signature() -> str:
    return str(RunSignature.capture(sys.argv[0] or "abap", __version__))


def _worklist(rfm: Optional[List[str]], catalog: Optional[List[str]]):
    try:
        worklist = build_worklist(rfm, catalog)
    except ConfigurationError as e:
        typer.secho(f"ERROR: {e}", fg=typer.colors.RED)
        raise typer.Exit(code=1)
    if not any(worklist.values()):
        typer.secho("No function modules given, use names or --catalog.", fg=typer.colors.YELLOW)
        raise typer.Exit(code=1)
    return worklist


def _finish(report: RunReport) -> None:
    for result in report.results:
        if result.ok:
            for path in result.artifacts:
                typer.secho(f"  ✓ {result.name}: {path}", fg=typer.colors.GREEN)
        else:
            typer.secho(f"  ERROR {result.name}: {result.message}", fg=typer.colors.RED)
    if not report.ok:
        raise typer.Exit(code=1)


def _execute(
    command: Command,
    target: str,
    worklist,
    lang: str,
    sort_fields: bool,
    save: bool,
    output: Optional[str],
    annotations: Optional[Path] = None,
) -> None:
    output = normalize_output_dir(output)
    if output:
        save = True
    template = GenerationRequest(
        command=command,
        target=target,
        locale=lang,
        output_dir=Path(output or ".") if save else None,
        save=save,
        sort_fields=sort_fields,
        signature=_signature(),
        annotations_dir=annotations,
    )
    logger.debug(f"{command.value} {target}: {worklist}")

    try:
        if command.needs_backend:
            with RfcMetadataFetcher() as fetcher:
                report = Orchestrator(fetcher=fetcher).run(worklist, template)
        else:
            report = Orchestrator().run(worklist, template)
    except ConfigurationError as e:
        typer.secho(f"ERROR: {e}", fg=typer.colors.RED)
        raise typer.Exit(code=1)
    _finish(report)


@app.command("call")
def call(
    dest: str = typer.Argument(..., help="ABAP system destination id, from sapnwrfc.ini"),
    rfm: List[str] = typer.Argument(..., help="BAPI/RFM name(s)"),
    lang: str = typer.Option("en", "--lang", "-l", callback=_check_language, help="ABAP texts language"),
    sort_fields: bool = typer.Option(False, "--sort-fields", "-f", help="Sort field names of structures and tables"),
    save: bool = typer.Option(False, "--save", "-s", help="Save to local file"),
    output: str = typer.Option("", "--output", "-o", help="Output folder"),
    debug: bool = typer.Option(False, "--debug", "-d", help="Detailed logging"),
) -> None:
    """ABAP function module call template."""

    _setup_logging(debug)
    _execute(Command.CALL, dest, _worklist(rfm, None), lang, sort_fields, save, output)


@app.command("get")
def get(
    dest: str = typer.Argument(..., help="ABAP system destination id, from sapnwrfc.ini"),
    rfm: Optional[List[str]] = typer.Argument(None, help="BAPI/RFM name(s)"),
    lang: str = typer.Option("en", "--lang", "-l", callback=_check_language, help="ABAP texts language"),
    catalog: Optional[List[str]] = typer.Option(None, "--catalog", "-c", help="Read RFM names from file"),
    sort_fields: bool = typer.Option(False, "--sort-fields", "-f", help="Sort field names of structures and tables"),
    output: str = typer.Option(DefaultFolder.output, "--output", "-o", help="Output folder"),
    debug: bool = typer.Option(False, "--debug", "-d", help="Detailed logging"),
) -> None:
    """ABAP API annotations."""

    _setup_logging(debug)
    _execute(Command.GET, dest, _worklist(rfm, catalog), lang, sort_fields, True, output)


@app.command("make")
def make(
    ui: UIFramework = typer.Argument(..., help="UI framework"),
    rfm: Optional[List[str]] = typer.Argument(None, help="BAPI/RFM name(s)"),
    lang: str = typer.Option("en", "--lang", "-l", callback=_check_language, help="Texts language"),
    catalog: Optional[List[str]] = typer.Option(None, "--catalog", "-c", help="Read RFM names from file"),
    sort_fields: bool = typer.Option(False, "--sort-fields", "-f", help="Sort field names of structures and tables"),
    output: str = typer.Option(DefaultFolder.output, "--output", "-o", help="Output folder"),
    annotations: Optional[Path] = typer.Option(
        None, "--annotations", "-a", help="Folder with annotations saved by get, default: output folder"
    ),
    debug: bool = typer.Option(False, "--debug", "-d", help="Detailed logging"),
) -> None:
    """Create UI elements from saved annotations.

    Labels are taken in the --lang locale when the annotations carry it.
    """

    _setup_logging(debug)
    _execute(Command.MAKE, ui.value, _worklist(rfm, catalog), lang, sort_fields, True, output, annotations)


@app.command(Command.SET.value)
def copy_configuration(
    ui: UIFramework = typer.Argument(..., help="UI framework"),
    debug: bool = typer.Option(False, "--debug", "-d", help="Detailed logging"),
) -> None:
    """Copy UI configuration to the local config folder."""

    _setup_logging(debug)
    try:
        paths = ConfigResolver().install_configuration(ui.value)
    except ConfigurationError as e:
        typer.secho(f"ERROR: {e}", fg=typer.colors.RED)
        raise typer.Exit(code=1)
    for path in paths:
        typer.echo(f"  {path}")
    typer.secho(f"Local configuration set: {ui.value}", fg=typer.colors.GREEN)


@app.command(Command.RESET.value)
def remove_configuration(
    ui: UIFramework = typer.Argument(..., help="UI framework"),
    debug: bool = typer.Option(False, "--debug", "-d", help="Detailed logging"),
) -> None:
    """Remove local UI configuration."""

    _setup_logging(debug)
    ConfigResolver().remove_configuration(ui.value)
    typer.secho(f"Local configuration removed: {ui.value}", fg=typer.colors.GREEN)


__all__ = ["app", "call", "copy_configuration", "get", "make", "remove_configuration"]
