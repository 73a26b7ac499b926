"""Gardisto CLI - check that the environment variables your code reads are set."""
from typing import List, Optional
import typer
from rich.table import Table
from rich.markup import escape

from gardisto.analyzer.env_checker import process_files
from gardisto.analyzer.environment import build_environment
from gardisto.analyzer.file_discovery import discover_source_files
from gardisto.analyzer.models import ProcessingResult
from gardisto.config import GardistoConfig, GardistoOptions, __version__, load_env_defaults, resolve_config
from gardisto.errors import ConfigurationError, FileSystemError
from gardisto.utils.logger import LogLevel, Logger, create_logger, null_logger
from gardisto.utils.safe_console import SafeConsole

app = typer.Typer(
    name="gardisto",
    help="Find environment variables your JS/TS code reads but your environment does not set",
    add_completion=False
)
console = SafeConsole(soft_wrap=True)
err_console = SafeConsole(stderr=True, soft_wrap=True)

EXIT_OK = 0
EXIT_ISSUES = 1
EXIT_USAGE = 2


def check_project(config: GardistoConfig, log: Logger = null_logger) -> ProcessingResult:
    """Discover source files under the project and check them.

    Programmatic entry point: prints nothing and never exits.

    Raises:
        FileSystemError: If the project directory cannot be scanned
    """
    log(LogLevel.INFO, f"Checking environment variables in project path: {config.project_path}")

    files = discover_source_files(config.project_path, config.include, config.exclude, log)
    log(LogLevel.INFO, f"Processing {len(files)} JS/TS files")

    return process_files(
        files,
        log,
        config.show_default_values,
        environment=build_environment(config.env_file),
    )


def handle_results(result: ProcessingResult, out: SafeConsole = None) -> int:
    """Print warnings then errors, one line each.

    Returns:
        Exit code: 1 if any error was found, else 0
    """
    out = out or console

    if result.warnings:
        out.print("[bold yellow]Warnings for environment variables:[/bold yellow]")
        for warning in result.warnings:
            out.print_plain(f"  ⚠ {warning}", style="yellow")
        out.print()

    if result.error_count > 0:
        out.print("[bold red]Errors found in environment variables:[/bold red]")
        for error in result.errors:
            out.print_plain(f"  ✗ {error}", style="red")
        out.print()
        return EXIT_ISSUES

    if not result.warnings:
        out.print("[bold green]✓ No environment variable issues found.[/bold green]")
    return EXIT_OK


def _print_summary(result: ProcessingResult, out: SafeConsole) -> None:
    table = Table(title="Environment Variable Summary", show_header=True, header_style="bold cyan")
    table.add_column("Metric", style="cyan")
    table.add_column("Count", justify="right", style="green")

    table.add_row("Variables Checked", str(len(result.checked_variables)))
    table.add_row("Errors", str(result.error_count))
    table.add_row("Warnings", str(len(result.warnings)))

    out.print(table)


@app.command()
def check(
    project_path: str = typer.Argument(".", help="Project root path to scan"),
    include: Optional[List[str]] = typer.Option(None, "--include", "-i", help="Glob pattern of files to check (repeatable)"),
    exclude: Optional[List[str]] = typer.Option(None, "--exclude", "-e", help="Glob pattern of files to skip (repeatable)"),
    show_default_values: Optional[bool] = typer.Option(None, "--show-default-values/--hide-default-values", help="Show fallback expressions in warnings"),
    env_file: Optional[str] = typer.Option(None, "--env-file", help=".env file to layer under the process environment"),
    summary: bool = typer.Option(False, "--summary", help="Print a summary table"),
    debug: Optional[bool] = typer.Option(None, "--debug/--no-debug", help="Verbose logging"),
):
    """Scan a project and report missing or risky environment variables."""
    load_env_defaults()

    try:
        config = resolve_config(GardistoOptions(
            project_path=project_path,
            include=include,
            exclude=exclude,
            debug=debug,
            show_default_values=show_default_values,
            env_file=env_file,
        ))
    except ConfigurationError as e:
        err_console.print(f"[bold red]Error:[/bold red] {escape(e.message)}")
        raise typer.Exit(EXIT_USAGE)

    log = create_logger(config.debug, err_console)

    try:
        with err_console.status("[bold blue]Checking environment variables..."):
            result = check_project(config, log)
    except FileSystemError as e:
        err_console.print(f"[bold red]Error:[/bold red] {escape(e.message)}")
        raise typer.Exit(EXIT_USAGE)

    exit_code = handle_results(result)
    if summary:
        _print_summary(result, console)

    if exit_code != EXIT_OK:
        raise typer.Exit(exit_code)


@app.command()
def version():
    """Print the Gardisto version."""
    console.print(f"gardisto {__version__}")


@app.callback()
def main():
    """Gardisto - environment variable guard for JavaScript and TypeScript projects."""
    pass


if __name__ == "__main__":
    app()
