"""yaml-verify command line entry point."""

from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path

import typer

from yamlverify import __version__
from yamlverify.batch import run_batch
from yamlverify.config import VerifyOptions, load_options, parse_unique_keys
from yamlverify.discovery import discover
from yamlverify.errors import EmptyInputError, OptionsError
from yamlverify.reporter import summarize, write_json_report

logger = logging.getLogger(__name__)

app = typer.Typer(add_completion=False)


def _configure_logging(debug: bool) -> None:
    debug = debug or os.environ.get("YAMLVERIFY_DEBUG", "").lower() == "true"
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"yaml-verify {__version__}")
        raise typer.Exit()


def _build_options(
    verbose: bool,
    concurrency: int | None,
    special_field: str | None,
    sentinel_collides: bool,
    unique_key: list[str] | None,
    include_hidden: bool,
) -> VerifyOptions:
    """Load configured options and apply the command-line overrides."""
    options = load_options()
    update: dict = {}
    if verbose:
        update["verbose"] = True
    if sentinel_collides:
        update["sentinel_collides"] = True
    if include_hidden:
        update["include_hidden"] = True
    if special_field:
        update["special_field"] = special_field
    if unique_key:
        update["unique_keys"] = {**options.unique_keys, **parse_unique_keys(unique_key)}
    if concurrency is not None:
        if concurrency < 1:
            raise OptionsError(f"--concurrency must be at least 1, got {concurrency}")
        update["concurrency"] = concurrency
    return options.model_copy(update=update)


@app.command()
def main(
    paths: list[str] = typer.Argument(
        ..., help="YAML files or directories to validate", show_default=False
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Also print a line for every file that passes"
    ),
    concurrency: int | None = typer.Option(
        None, "--concurrency", "-c", help="Maximum files validated at once (default 50)"
    ),
    special_field: str | None = typer.Option(
        None, "--special-field", help="Field checked on its layout/recordType pairs"
    ),
    sentinel_collides: bool = typer.Option(
        False,
        "--sentinel-collides",
        help="Treat two entries without recordType under one layout as duplicates",
    ),
    unique_key: list[str] | None = typer.Option(
        None, "--unique-key", help="FIELD=KEY: compare entries of FIELD on KEY only"
    ),
    include_hidden: bool = typer.Option(
        False, "--include-hidden", help="Search dot-files and dot-directories too"
    ),
    report: Path | None = typer.Option(
        None, "--report", help="Also write the results as JSON to this path"
    ),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit",
    ),
) -> None:
    """Check YAML files for duplicate entries in their list fields."""
    _configure_logging(debug)

    try:
        options = _build_options(
            verbose, concurrency, special_field, sentinel_collides, unique_key, include_hidden
        )
    except OptionsError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    try:
        found = discover(paths, options.extensions, options.include_hidden)
    except EmptyInputError as e:
        for error in e.errors:
            typer.echo(f"Path not found: {error.path}", err=True)
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    for error in found.errors:
        typer.echo(f"Path not found: {error.path}", err=True)

    try:
        result = asyncio.run(run_batch(found.files, options))
    except KeyboardInterrupt:
        typer.echo("Interrupted", err=True)
        raise typer.Exit(code=1)

    summary = summarize(result, verbose=options.verbose)
    for line in summary.lines:
        typer.echo(line.text, err=line.error)

    if report is not None:
        write_json_report(result, report)

    raise typer.Exit(code=summary.exit_code)


if __name__ == "__main__":
    app()
