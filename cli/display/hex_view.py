"""
Hex dump display utilities.
"""

from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

console = Console()


def format_hex_line(chunk: bytes, address: int, bytes_per_line: int = 16) -> str:
    """Format one hex dump line with address and ASCII column."""
    hex_parts = []
    for i, b in enumerate(chunk):
        if i == 8:
            hex_parts.append(" ")  # Extra space at midpoint
        hex_parts.append(f"{b:02X}")
    hex_str = " ".join(hex_parts)

    ascii_str = escape("".join(chr(b) if 32 <= b < 127 else "." for b in chunk))

    return f"[dim]{address:04X}[/dim]  {hex_str:<{bytes_per_line * 3 + 1}}  [cyan]{ascii_str}[/cyan]"


def display_hex_dump(
    data: bytes,
    title: str = "Hex Dump",
    start_offset: int = 0,
    bytes_per_line: int = 16,
) -> None:
    """Display a patch record as a formatted hex dump."""
    lines = [
        format_hex_line(data[offset : offset + bytes_per_line], start_offset + offset, bytes_per_line)
        for offset in range(0, len(data), bytes_per_line)
    ]

    console.print(Panel("\n".join(lines), title=title, border_style="blue", expand=False))


def display_hex_comparison(
    original: bytes,
    encoded: bytes,
    diff_index: Optional[int] = None,
    bytes_per_line: int = 8,
) -> None:
    """Show original and re-encoded bytes side by side, differences highlighted."""

    max_len = max(len(original), len(encoded))
    lines = []

    for offset in range(0, max_len, bytes_per_line):
        left = []
        right = []

        for i in range(offset, offset + bytes_per_line):
            b1 = original[i] if i < len(original) else None
            b2 = encoded[i] if i < len(encoded) else None

            if b1 is None:
                left.append("[dim]--[/dim]")
            elif b1 != b2:
                left.append(f"[red]{b1:02X}[/red]")
            else:
                left.append(f"{b1:02X}")

            if b2 is None:
                right.append("[dim]--[/dim]")
            elif b1 != b2:
                right.append(f"[green]{b2:02X}[/green]")
            else:
                right.append(f"{b2:02X}")

        marker = ""
        if diff_index is not None and offset <= diff_index < offset + bytes_per_line:
            marker = " [bold red]<[/bold red]"

        lines.append(f"[dim]{offset:04X}[/dim] | {' '.join(left)} | {' '.join(right)}{marker}")

    console.print(f"[bold]Offset | {'Original':<{bytes_per_line * 3}} | Re-encoded[/bold]")
    console.print("-" * (10 + bytes_per_line * 6 + 6))

    for line in lines:
        console.print(line)
