"""
Info command - list the SysEx messages of a K1 dump.
"""

from pathlib import Path
from typing import List

import typer
from rich.console import Console
from rich.markup import escape

from cli.display.tables import display_header_table
from k1manager.formats.k1.sysex_parser import SYSEX_END, SysExHeader, split_messages
from k1manager.utils.validation import K1FormatError, validate_k1_sysex_header

console = Console()
app = typer.Typer()


def message_sizes(data: bytes, messages: List[bytes]) -> List[int]:
    """Size of each message as stored in the file, F7 included."""
    sizes = [len(m) + 1 for m in messages]
    # An unterminated trailing fragment has no F7 to count
    if messages and data[-1] != SYSEX_END:
        sizes[-1] -= 1
    return sizes


@app.command()
def info(
    file: Path = typer.Argument(..., help="K1 SysEx file (.syx)"),
) -> None:
    """
    Show the header of every SysEx message in a file.

    Examples:

        k1tool info k1_all.syx
    """
    if not file.exists():
        console.print(f"[red]Error: File not found: {file}[/red]")
        raise typer.Exit(1)

    data = file.read_bytes()
    messages = split_messages(data)

    try:
        headers = [SysExHeader.from_bytes(m) for m in messages]
    except K1FormatError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    console.print(f"SysEx file: '{file}' ({len(data)} bytes)")
    display_header_table(headers, message_sizes(data, messages))

    for i, message in enumerate(messages, start=1):
        if not validate_k1_sysex_header(message):
            console.print(f"[yellow]Warning: message {i} does not look like Kawai K1 SysEx[/yellow]")


if __name__ == "__main__":
    app()
