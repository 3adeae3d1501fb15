"""Analysis command: runs the conformance engine over extracted module records."""

import json
from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape

from ..architecture import AnalysisResult, ArchitectureAnalyzer, load_records
from ..exceptions import NgArchError
from ..logging_config import get_logger, setup_logging
from . import app
from ._common import console, resolve_config

logger = get_logger(__name__)

EXIT_FINDINGS = 1
EXIT_ERROR = 2


def render_json(result: AnalysisResult) -> str:
    """Serialize a result; identical results give identical text."""
    return json.dumps(result.to_dict(), indent=2, ensure_ascii=False) + "\n"


@app.command()
def analyze(
    records: Path = typer.Argument(
        ...,
        help="JSON file of module records produced by the extractor",
        exists=True,
        file_okay=True,
        dir_okay=False,
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the JSON result to this file instead of stdout",
    ),
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Configuration file (TOML)",
        exists=True,
        file_okay=True,
        dir_okay=False,
    ),
    strict: bool = typer.Option(
        False,
        "--strict",
        help="Fail on duplicate module names instead of keeping the first",
    ),
    fail_on_violations: bool = typer.Option(
        False,
        "--fail-on-violations",
        help="Exit with status 1 when violations or cycles are found",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        "-q",
        help="Only log errors",
    ),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        help="Also append log records to this file",
        dir_okay=False,
    ),
) -> None:
    """
    Analyze module records for layering violations, cycles, and coupling.

    [bold cyan]Examples:[/bold cyan]

      ngarch analyze modules.json

      ngarch analyze modules.json -o report.json --fail-on-violations
    """
    try:
        settings = resolve_config(
            config=config,
            strict=strict,
            fail_on_violations=fail_on_violations,
            verbose=verbose,
            quiet=quiet,
        )
        setup_logging(
            verbose=settings.verbosity == "verbose",
            quiet=settings.verbosity == "quiet",
            log_file=str(log_file) if log_file is not None else None,
        )

        module_records = load_records(records)
        result = ArchitectureAnalyzer(settings).analyze(module_records)
        document = render_json(result)

        if output is not None:
            output.write_text(document, encoding="utf-8")
            logger.info(f"Analysis written to {output}")
        else:
            typer.echo(document, nl=False)

    except NgArchError as e:
        logger.debug(f"{e.__class__.__name__}: {e}")
        console.print(f"[red]Error:[/red] {escape(str(e))}", highlight=False)
        raise typer.Exit(EXIT_ERROR)

    except OSError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}", highlight=False)
        raise typer.Exit(EXIT_ERROR)

    if settings.fail_on_violations and result.has_findings:
        console.print(
            f"[yellow]{len(result.violations)} violation(s), "
            f"{len(result.cycles)} cycle(s) found[/yellow]"
        )
        raise typer.Exit(EXIT_FINDINGS)
