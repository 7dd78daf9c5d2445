"""CLI entry point for seqhealth."""

import logging
import sys
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from seqhealth import __version__
from seqhealth.config import Settings

console = Console()
err_console = Console(stderr=True)
app = typer.Typer(
    name="seqhealth",
    help="seqhealth - Sequencing run health-check evaluation\n\nTurn pipeline health-check logs into a pass/fail verdict.",
    add_completion=False,
    no_args_is_help=True,
    context_settings={"help_option_names": ["-h", "--help"]},
)

EXIT_FAIL = 1
EXIT_ERROR = 2


def emit(text: str, error: bool = False) -> None:
    """Print a report line verbatim: no markup, no highlighting, no wrapping."""
    target = err_console if error else console
    target.print(text, markup=False, highlight=False, soft_wrap=True)


@app.callback()
def main_callback(
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")] = False,
):
    """Configure logging for every command."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
        force=True,
    )


@app.command()
def evaluate(
    log: Annotated[Path, typer.Argument(help="Health-check log to evaluate")],
    lenient: Annotated[bool, typer.Option("--lenient", help="Treat missing metrics as warnings instead of errors")] = False,
):
    """Evaluate a health-check log and print the report.

    Exit code is 0 when every rule passes, 1 when any rule fails and 2 when
    the log cannot be evaluated at all.
    """
    from seqhealth.health import HealthCheckError, evaluate_log, render_report

    settings = Settings.from_env(lenient=True if lenient else None)
    try:
        context, result = evaluate_log(log, strict=settings.strict)
    except HealthCheckError as exc:
        emit(f"[ERROR] {exc}", error=True)
        raise typer.Exit(EXIT_ERROR)

    for line in render_report(context, result):
        emit(line.text, error=line.is_error)

    if not result.passed:
        raise typer.Exit(EXIT_FAIL)


@app.command("check-run")
def check_run(
    run_dir: Annotated[Path, typer.Argument(help="Pipeline run directory")],
    lenient: Annotated[bool, typer.Option("--lenient", help="Treat missing metrics as warnings instead of errors")] = False,
):
    """Run every applicable check over a pipeline run directory.

    Checks gated by a feature are skipped unless the run configuration
    enables that feature. Exit code is 0 only if no check failed.
    """
    from seqhealth.checks import run_checks

    target = run_dir.resolve()
    if not target.is_dir():
        emit(f"[ERROR] Run directory does not exist: {target}", error=True)
        raise typer.Exit(EXIT_ERROR)

    settings = Settings.from_env(lenient=True if lenient else None)
    summary = run_checks(target, settings)

    for result in summary.results:
        tag = "OK" if result.passed else "FAIL"
        emit(f"[{tag}] {result.check_name}: {result.summary}", error=not result.passed)
        for detail in result.details:
            emit(f"    {detail}", error=not result.passed)
    for name in summary.skipped:
        emit(f"[SKIP] {name}: feature disabled in run configuration")

    emit(f"TOTAL FAILS: {summary.total_failures}", error=not summary.passed)
    if not summary.passed:
        raise typer.Exit(EXIT_FAIL)


@app.command()
def checks():
    """List the registered run checks."""
    from seqhealth.checks import registry

    console.print("\n[bold]Run checks:[/bold]")
    for info in registry.info():
        console.print(f"  • {info['name']} [dim](feature: {info['feature']})[/dim]")
        console.print(f"    {info['description']}", highlight=False)
    console.print()


@app.command()
def version():
    """Show version information."""
    console.print(f"seqhealth v{__version__}")
    console.print("Sequencing run health-check evaluation")


def main():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
