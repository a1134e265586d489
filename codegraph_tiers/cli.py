"""
codegraph-tiers CLI

Command-line interface for compiling tier-annotated modules.
"""

import json
from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from codegraph_tiers.compiler.compiler import TierCompiler
from codegraph_tiers.config import TierSettings
from codegraph_tiers.errors import TierCompilerError
from codegraph_tiers.integration.component_loader import ComponentLoader
from codegraph_tiers.logging import setup_logging

app = typer.Typer(
    name="codegraph-tiers",
    help="Split tier-annotated JavaScript modules into server fragments",
    add_completion=False,
)

console = Console()


def _settings(verbose: bool) -> TierSettings:
    settings = TierSettings()
    level = "DEBUG" if verbose else settings.logging.level
    setup_logging(level=level, format=settings.logging.format)
    return settings


def _fail(error: TierCompilerError) -> None:
    console.print(f"[bold red]✗ {error.code}[/bold red] {error.message}")
    if error.context:
        details = ", ".join(f"{key}={value}" for key, value in error.context.items())
        console.print(f"[dim]{details}[/dim]")
    raise typer.Exit(code=1)


@app.command()
def compile(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Module to compile"),
    as_json: bool = typer.Option(False, "--json", help="Print the fragment list as JSON"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    """
    Compile a module and print its server fragments.
    """
    compiler = TierCompiler(_settings(verbose))
    try:
        result = compiler.compile_file(path)
    except TierCompilerError as e:
        _fail(e)
        return

    if as_json:
        typer.echo(json.dumps(result.to_output(), indent=2))
        return

    if not result.server:
        console.print("[yellow]No server blocks[/yellow]")
        return

    for fragment in result.server:
        title = f"block {fragment.id}"
        if fragment.session_required:
            title += " [magenta](session)[/magenta]"
        console.print(Panel(Syntax(fragment.code, "javascript"), title=title, expand=False))

    console.print(f"[dim]{len(result.server)} fragment(s) in {compiler.stats['compilation_time_ms']:.2f}ms[/dim]")


@app.command()
def blocks(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Module to inspect"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    """
    Show every tier block with its crossing names.
    """
    compiler = TierCompiler(_settings(verbose))
    try:
        result = compiler.compile_file(path)
    except TierCompilerError as e:
        _fail(e)
        return

    table = Table(title=f"Tier blocks: {path.name}")
    table.add_column("ID", justify="right", style="cyan")
    table.add_column("Tiers")
    table.add_column("Span")
    table.add_column("Session", justify="center")
    table.add_column("Inputs", style="green")
    table.add_column("Outputs", style="yellow")

    for block in result.blocks:
        table.add_row(
            str(block.id),
            ", ".join(tier.value for tier in block.tiers),
            f"[{block.start}, {block.end})",
            "✓" if block.session_required else "",
            ", ".join(block.input_names),
            ", ".join(block.output_names),
        )

    console.print(table)


@app.command()
def component(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, help="Component document"),
    resource: str | None = typer.Option(
        None, "--resource", "-r", help="Resource path with query (defaults to PATH?<flag>=true)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
):
    """
    Run the component loader on a document.
    """
    settings = _settings(verbose)
    loader = ComponentLoader(settings)
    resource_path = resource or f"{path}?{settings.component.flag}=true"

    try:
        outcome = loader.load(path.read_text(encoding="utf-8"), resource_path)
    except TierCompilerError as e:
        _fail(e)
        return

    if outcome.passthrough or outcome.result is None:
        console.print("[dim]passthrough[/dim]")
        return

    typer.echo(json.dumps(outcome.result.to_output(), indent=2))


def main():
    app()


if __name__ == "__main__":
    main()
