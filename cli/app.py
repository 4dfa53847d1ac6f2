"""
k1tool - SysEx dump tools for the Kawai K1.

A CLI for checking and inspecting K1 bulk dumps.
"""

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler

from cli.commands.info import info
from cli.commands.names import names
from cli.commands.verify import verify
from k1manager import __version__

console = Console()

# Main app
app = typer.Typer(
    name="k1tool",
    help="Verify and inspect Kawai K1 SysEx dumps.",
    add_completion=False,
    rich_markup_mode="rich",
)

app.command(name="verify")(verify)
app.command(name="info")(info)
app.command(name="names")(names)


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]k1tool[/bold] version {__version__}")
    console.print("[dim]SysEx dump tools for the Kawai K1[/dim]")


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version_flag: bool = typer.Option(False, "--version", "-V", help="Show version"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    """
    k1tool - Verify and inspect Kawai K1 SysEx dumps.

    [bold]Commands:[/bold]

        k1tool verify k1_all.syx             # Round trip every Single patch
        k1tool verify k1_all.syx "Fretless 1"  # Report one patch only
        k1tool info k1_all.syx               # Message headers
        k1tool names k1_all.syx              # Patch names per bank

    Use --help with any command for more details.
    """
    logging.basicConfig(
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )
    logging.getLogger("k1manager").setLevel(logging.DEBUG if verbose else logging.WARNING)

    if version_flag:
        version()
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


def run() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    run()
