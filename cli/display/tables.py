"""
Rich table displays for K1 dump information.
"""

from typing import List

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from k1manager.formats.k1.dump import (
    BankListing,
    DumpKind,
    MessageResult,
    RecordResult,
    dispatch,
    patch_label,
)
from k1manager.formats.k1.single import is_checksum_valid
from k1manager.formats.k1.sysex_parser import SysExHeader
from k1manager.models.single import SinglePatch
from k1manager.utils.checksum import verify_record_checksum

console = Console()

KIND_NAMES = {
    DumpKind.SINGLE_BANK: "[green]Single bank[/green]",
    DumpKind.MULTI_BANK: "[yellow]Multi bank[/yellow]",
    DumpKind.ONE_PATCH: "[yellow]One patch[/yellow]",
    DumpKind.UNHANDLED: "[red]Unhandled[/red]",
}


def function_name(header: SysExHeader) -> str:
    """Readable name of a header's function code."""
    function = header.sysex_function
    if function is None:
        return f"Unknown ({header.function:02X}H)"
    return f"{function.name} ({header.function:02X}H)"


def display_header_table(headers: List[SysExHeader], sizes: List[int]) -> None:
    """Display the headers of all messages in a dump."""
    table = Table(title="SysEx Messages", box=box.ROUNDED, header_style="bold magenta")
    table.add_column("#", style="dim", width=3)
    table.add_column("Size", justify="right")
    table.add_column("Ch", justify="right")
    table.add_column("Func")
    table.add_column("Group")
    table.add_column("Machine")
    table.add_column("Sub1")
    table.add_column("Sub2")
    table.add_column("Contents")

    for i, (header, size) in enumerate(zip(headers, sizes), start=1):
        table.add_row(
            str(i),
            str(size),
            str(header.display_channel),
            f"{header.function:02X}H",
            f"{header.group:02X}H",
            f"{header.machine_id:02X}H",
            f"{header.substatus1:02X}H",
            f"{header.substatus2:02X}H",
            KIND_NAMES[dispatch(header)],
        )

    console.print(table)


def display_record_results(message: MessageResult, records: List[RecordResult]) -> None:
    """Display the round trip outcome of a bank's records."""
    table = Table(
        title=f"Message {message.index + 1}: {len(records)} patches",
        box=box.SIMPLE,
        header_style="bold cyan",
    )
    table.add_column("Slot", style="cyan", width=5)
    table.add_column("Name", width=12)
    table.add_column("Checksum", width=9)
    table.add_column("Match", width=8)
    table.add_column("Diff index", justify="right")

    for record in records:
        checksum = "[green]OK[/green]" if verify_record_checksum(record.original) else "[red]BAD[/red]"
        match = "[green]YES :-)[/green]" if record.match else "[red]NO :-([/red]"
        table.add_row(
            record.label,
            escape(record.patch.display_name),
            checksum,
            match,
            str(record.comparison.diff_index),
        )

    console.print(table)


def display_patch_detail(label: str, patch: SinglePatch) -> None:
    """Display the decoded parameters of a Single patch."""
    console.print(
        Panel(
            escape(str(patch)),
            title=f"[bold]{label}[/bold]",
            border_style="cyan",
            expand=False,
        )
    )


def display_bank_listing(listing: BankListing) -> None:
    """Display the patch names of one bank dump."""
    header = listing.header

    if listing.kind == DumpKind.SINGLE_BANK:
        table = Table(title="Singles", box=box.SIMPLE, header_style="bold cyan")
        table.add_column("Slot", style="cyan", width=5)
        table.add_column("Name", width=12)
        table.add_column("Volume", justify="right")
        table.add_column("Checksum")
        for i, patch in enumerate(listing.singles):
            checksum = "[green]OK[/green]" if is_checksum_valid(patch) else "[red]BAD[/red]"
            table.add_row(
                patch_label(header, i), escape(patch.display_name), str(patch.volume), checksum
            )
        console.print(table)
    elif listing.kind == DumpKind.MULTI_BANK:
        table = Table(title="Multis", box=box.SIMPLE, header_style="bold cyan")
        table.add_column("#", style="cyan", width=3)
        table.add_column("Name", width=10)
        table.add_column("Volume", justify="right")
        for i, patch in enumerate(listing.multis, start=1):
            table.add_row(str(i), escape(patch.name), str(patch.display_volume))
        console.print(table)
    else:
        console.print(f"[dim]{KIND_NAMES[listing.kind]}: {function_name(header)}, no patches listed[/dim]")
