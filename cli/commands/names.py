"""
Names command - list the patches in a K1 dump.
"""

from pathlib import Path

import typer
from rich.console import Console
from rich.markup import escape

from cli.display.tables import display_bank_listing
from k1manager.formats.k1.dump import list_banks
from k1manager.utils.validation import K1FormatError

console = Console()
app = typer.Typer()


@app.command()
def names(
    file: Path = typer.Argument(..., help="K1 SysEx file (.syx)"),
) -> None:
    """
    List Single and Multi patch names of every bank dump in a file.

    Multis show only name and volume.
    """
    if not file.exists():
        console.print(f"[red]Error: File not found: {file}[/red]")
        raise typer.Exit(1)

    try:
        listings = list_banks(file.read_bytes())
    except K1FormatError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    for listing in listings:
        console.print(str(listing.header))
        display_bank_listing(listing)


if __name__ == "__main__":
    app()
