"""
Verify command - round trip every Single patch of a K1 dump.
"""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from cli.display.hex_view import display_hex_comparison, display_hex_dump
from cli.display.tables import display_patch_detail, display_record_results
from k1manager.formats.k1.dump import DumpController, RunStatus
from k1manager.utils.validation import K1FormatError

console = Console()
app = typer.Typer()

USAGE = "Usage: k1tool verify FILE [PATCH_NAME]"


@app.command()
def verify(
    file: Optional[Path] = typer.Argument(None, help="K1 SysEx file (.syx)"),
    patch_name: Optional[str] = typer.Argument(
        None, help="Only report patches with this name (case-insensitive)"
    ),
    hex_dump: bool = typer.Option(
        False, "--hex/--no-hex", help="Show ingoing and outgoing bytes of each patch"
    ),
    detail: bool = typer.Option(False, "--detail", "-d", help="Show decoded patch parameters"),
    drop_trailing: bool = typer.Option(
        False, "--drop-trailing", help="Ignore bytes after the last F7 instead of parsing them"
    ),
) -> None:
    """
    Decode and re-encode every Single patch in a bank dump.

    Reports for each patch whether the re-encoded bytes match the
    original, and the index of the first differing byte if not.
    Multi banks and one patch dumps stop the run with exit code 1.

    Examples:

        k1tool verify k1_all.syx

        k1tool verify k1_all.syx "Fretless 1" --hex --detail
    """
    if file is None:
        console.print(USAGE)
        raise typer.Exit(1)

    if not file.exists():
        console.print(f"[red]Error: File not found: {file}[/red]")
        raise typer.Exit(1)

    console.print(f"SysEx file: '{file}' ({file.stat().st_size} bytes)")

    try:
        result = DumpController.read(file, keep_trailing=not drop_trailing)
    except K1FormatError as e:
        console.print(f"[red]Error: {escape(str(e))}[/red]")
        raise typer.Exit(1)

    console.print(f"Got {result.message_count} messages")

    wanted = patch_name.strip().lower() if patch_name else None

    for message in result.messages:
        console.print(str(message.header))

        records = message.records
        if wanted is not None:
            records = [r for r in records if r.patch.display_name.lower() == wanted]

        if not records:
            continue

        display_record_results(message, records)

        for record in records:
            if hex_dump:
                display_hex_dump(record.original, title=f"{record.label} INGOING SINGLE DATA")
                display_hex_dump(record.encoded, title=f"{record.label} OUTGOING SINGLE DATA")
            if not record.match:
                comparison = record.comparison
                diff_index = comparison.diff_index if comparison.has_diff_index else None
                display_hex_comparison(record.original, record.encoded, diff_index)
            if detail:
                display_patch_detail(record.label, record.patch)

    checked = result.records
    matched = sum(1 for r in checked if r.match)
    console.print()
    console.print(f"[bold]{matched}/{len(checked)}[/bold] patches round trip exactly")

    if result.status == RunStatus.HALTED:
        console.print(f"[yellow]{result.halt_reason}[/yellow]")

    raise typer.Exit(result.exit_code)


if __name__ == "__main__":
    app()
