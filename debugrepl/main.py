"""
debugrepl CLI - Main entry point for the interactive console.
"""

import asyncio

import typer
from rich.console import Console
from rich.table import Table

from debugrepl.config.settings import Settings, load_settings
from debugrepl.core import debug as log
from debugrepl.core.repl import start_repl

app = typer.Typer(
    name="debugrepl",
    help="debugrepl - interactive evaluation console with a bounded output log",
    no_args_is_help=True,
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)

console = Console()


@app.command()
def repl(
    config_path: str = typer.Option(
        "config.yaml",
        "--config",
        "-c",
        help="Path to config.yaml",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        "-d",
        help="Enable verbose debug logging to /tmp/debugrepl-<epoch>.log",
    ),
) -> None:
    """Start an interactive console session."""
    if debug:
        from debugrepl.core.debug import enable_debug, get_log_file
        enable_debug()
        console.print(f"[yellow]Debug mode enabled - logging to {get_log_file()}[/yellow]\n")

    asyncio.run(start_repl(config_path))


@app.command()
def config(
    action: str = typer.Argument(
        "show",
        help="Action: show",
    ),
    config_path: str = typer.Option(
        "config.yaml",
        "--config",
        "-c",
        help="Path to config.yaml",
    ),
) -> None:
    """Show the effective configuration."""
    if action != "show":
        log.error(f"Unknown config action: {action}")
        console.print(f"[red]Unknown action: {action}[/red]")
        raise typer.Exit(1)

    try:
        settings = load_settings(config_path)
        origin = config_path
    except FileNotFoundError:
        settings = Settings()
        origin = "defaults (no config file)"
    except Exception as e:
        console.print(f"[red]Error loading config: {str(e)}[/red]")
        raise typer.Exit(1)

    console.print("\n[bold cyan]debugrepl Configuration[/bold cyan]\n")

    table = Table(title="Output Log", show_header=True, header_style="bold cyan")
    table.add_column("Setting", style="green")
    table.add_column("Value", style="yellow")
    table.add_row("Max entries", str(settings.repl.max_length))
    table.add_row("Max children", str(settings.repl.max_children))
    table.add_row("Clear sequence", repr(settings.repl.clear_sequence))
    console.print(table)

    table = Table(title="\nConsole", show_header=True, header_style="bold cyan")
    table.add_column("Setting", style="green")
    table.add_column("Value", style="yellow")
    table.add_row("Prompt", settings.console.prompt)
    table.add_row("Show source", str(settings.console.show_source))
    for severity, style in settings.console.styles.items():
        table.add_row(f"Style ({severity})", style or "-")
    table.add_row("Message catalog", settings.locale.catalog or "-")
    console.print(table)

    console.print(f"\n[dim]Config: {origin}[/dim]\n")


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
