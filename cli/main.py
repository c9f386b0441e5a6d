"""`pattern-catalog` command: list, show, run and verify pattern documents."""

from __future__ import annotations

import functools
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

import typer
from rich.console import Console
from rich.markdown import Markdown
from rich.markup import escape
from rich.table import Table

from catalog import Catalog, CheckStatus, VerificationReport, verify_catalog
from config import Config, load_settings
from patterns import available_examples, run_example
from utils.error_handlers import handle_errors
from utils.exceptions import PatternCatalogError
from utils.logging_config import LoggerFactory

app = typer.Typer(no_args_is_help=True, help="Browse, run and verify the design pattern catalog.")

_console = Console()
_err_console = Console(stderr=True)

_STATUS_STYLES = {
    CheckStatus.PASSED: "green",
    CheckStatus.FAILED: "red",
    CheckStatus.SKIPPED: "yellow",
    CheckStatus.ERROR: "bold red",
}


@dataclass
class _State:
    settings: Config
    catalog: Optional[Catalog] = None

    def load_catalog(self) -> Catalog:
        if self.catalog is None:
            self.catalog = Catalog.from_directory(
                self.settings.get("catalog.docs_dir"),
                strict=self.settings.get("catalog.strict", False),
            )
        return self.catalog


def _fail(error: PatternCatalogError) -> None:
    _err_console.print(f"[red]Error:[/red] {escape(error.message)}", markup=True, highlight=False)
    raise typer.Exit(code=2)


def _reports_errors(func: Callable) -> Callable:
    """Turn catalog errors into a one-line message and exit code 2."""

    logged = handle_errors(log_level="DEBUG")(func)

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return logged(*args, **kwargs)
        except PatternCatalogError as exc:
            _fail(exc)

    return wrapper


def _state(ctx: typer.Context) -> _State:
    return ctx.obj


@app.callback()
def main(
    ctx: typer.Context,
    docs_dir: Optional[Path] = typer.Option(None, "--docs-dir", help="Directory holding the pattern documents."),
    config_file: Optional[Path] = typer.Option(None, "--config", help="YAML or JSON settings file."),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="DEBUG, INFO, WARNING or ERROR."),
) -> None:
    """Load settings and configure logging before any command runs."""

    overrides: dict = {}
    if docs_dir is not None:
        overrides["catalog"] = {"docs_dir": str(docs_dir)}
    if log_level is not None:
        overrides["logging"] = {"log_level": log_level}

    try:
        settings = load_settings(str(config_file) if config_file else None, overrides=overrides)
    except PatternCatalogError as exc:
        _fail(exc)

    LoggerFactory.configure(
        log_dir=settings.get("logging.log_dir"),
        log_level=settings.get("logging.log_level"),
        enable_file=settings.get("logging.enable_file"),
        enable_structured=settings.get("logging.enable_structured"),
        force=True,
    )
    ctx.obj = _State(settings=settings)


@app.command("list")
@_reports_errors
def list_documents(
    ctx: typer.Context,
    category: Optional[str] = typer.Option(None, "--category", "-c", help="Only show one category."),
) -> None:
    """List the pattern documents."""

    catalog = _state(ctx).load_catalog()

    table = Table(title="Design Patterns")
    table.add_column("Slug", style="bright_green", no_wrap=True)
    table.add_column("Title", style="white")
    table.add_column("Category", style="cyan")
    table.add_column("Example", style="dim")

    for document in catalog.list(category=category):
        table.add_row(document.slug, document.title, document.category or "-", document.example or "-")

    _console.print(table)


@app.command()
@_reports_errors
def show(
    ctx: typer.Context,
    slug: str = typer.Argument(..., help="Document slug, e.g. chain_of_responsibility."),
    raw: bool = typer.Option(False, "--raw", help="Print the markdown source."),
) -> None:
    """Show one pattern document."""

    document = _state(ctx).load_catalog().get(slug)
    if raw:
        typer.echo(document.text)
    else:
        _console.print(Markdown(document.body))


@app.command()
@_reports_errors
def run(name: str = typer.Argument(..., help="Example name, e.g. factory.")) -> None:
    """Run a worked example and print its transcript."""

    for line in run_example(name):
        typer.echo(line)


@app.command()
def examples() -> None:
    """List the runnable examples."""

    for name in available_examples():
        typer.echo(name)


@app.command()
def verify(
    ctx: typer.Context,
    slug: Optional[str] = typer.Argument(None, help="Verify only this document."),
) -> None:
    """Check that every sample output matches its example."""

    report = _print_verification(_state(ctx), slug)
    if not report.ok:
        raise typer.Exit(code=1)


@_reports_errors
def _print_verification(state: _State, slug: Optional[str]) -> VerificationReport:
    report = verify_catalog(state.load_catalog(), slugs=[slug] if slug else None)

    for check in report.checks:
        style = _STATUS_STYLES[check.status]
        _console.print(
            f"[{style}]{check.status.value.upper():<8}[/{style}] {escape(check.slug)}  [dim]{escape(check.message)}[/dim]",
            highlight=False,
        )
        if check.diff:
            typer.echo(check.diff)

    counts = report.counts()
    summary = ", ".join(f"{count} {status}" for status, count in counts.items() if count)
    _console.print(summary or "nothing to verify", highlight=False)
    return report


def run_cli() -> None:
    app(prog_name="pattern-catalog")
