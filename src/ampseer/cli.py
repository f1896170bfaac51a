# ================================================================================
# Command-line interface for ampseer
#
# Thin wrapper around the pipeline module. The verdict is the only thing
# written to standard output; diagnostics and errors go to standard error.
# ================================================================================

from pathlib import Path
from typing import Annotated

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from ampseer.version import __version__

app = typer.Typer(
    name="ampseer",
    help="Identify which multiplex PCR primer panel generated a set of reads.",
    rich_markup_mode="rich",
)

err_console = Console(stderr=True)


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        typer.echo(f"ampseer {__version__}")
        raise typer.Exit()


def _fail(message: str, cause: Exception) -> None:
    err_console.print(
        f"[bold red]{message}:[/bold red] {escape(str(cause))}", soft_wrap=True
    )
    raise typer.Exit(code=1) from cause


@app.command()
def main(
    reads: Annotated[
        str,
        typer.Option(
            "--reads",
            "-r",
            metavar="FILE",
            help="FASTQ/FASTA file of reads to examine, or '-' for standard input.",
        ),
    ],
    primer_sets: Annotated[
        list[Path],
        typer.Option(
            "--primer-sets",
            "-p",
            metavar="FILE",
            help="Primer panel FASTA file; repeat the option for each candidate panel.",
        ),
    ],
    debug: Annotated[
        int,
        typer.Option(
            "--debug",
            "-d",
            count=True,
            help="Turn debugging information on; repeat for more detail.",
        ),
    ] = 0,
    config_file: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to a JSON file overriding anchor length and thresholds.",
        ),
    ] = None,
    summary: Annotated[
        Path | None,
        typer.Option(
            "--summary",
            "-s",
            help="Write per-panel tallies to this TSV (or .csv) file.",
        ),
    ] = None,
    save_config: Annotated[
        Path | None,
        typer.Option(
            "--save-config",
            help="Write the effective configuration (defaults plus --config) as JSON.",
        ),
    ] = None,
    log_dir: Annotated[
        Path | None,
        typer.Option(
            "--log-dir",
            help="Also write a DEBUG-level log file to this directory.",
        ),
    ] = None,
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = False,
) -> None:
    """
    Classify reads against candidate primer panels and print the best match.

    Prints '<panel>\\t<confidence>', or 'unknown\\t0.00' when no panel
    clears the thresholds.

    Example:
        ampseer --reads reads.fastq.gz -p ARTIC_v3.fasta -p ARTIC_v4.fasta
    """
    from ampseer.config import load_config
    from ampseer.logging import configure_file_logging, configure_logging
    from ampseer.pipeline import run_classification
    from ampseer.reporting.summary import write_panel_summary

    configure_logging(debug)
    if log_dir is not None:
        configure_file_logging(log_dir)

    try:
        config = load_config(config_file)
    except (FileNotFoundError, ValueError, ValidationError) as e:
        _fail("Invalid configuration", e)

    if save_config is not None:
        try:
            config.to_json_file(save_config)
        except OSError as e:
            _fail("Could not save configuration", e)

    try:
        result = run_classification(reads, list(primer_sets), config=config)
    except FileNotFoundError as e:
        _fail("Invalid input", e)
    except (ValueError, OSError) as e:
        _fail("Classification failed", e)

    if summary is not None:
        write_panel_summary(result.panels, summary)

    typer.echo(str(result.verdict))


if __name__ == "__main__":
    app()
