"""
Kawai K1 bulk dump processing.

Splits a .syx file into messages, looks at each header and, for Single
bank dumps, decodes and re-encodes every patch to check that the codec
reproduces the original bytes.

A complete K1 dump holds three messages:

    All single data dump (I/E):  8 + (32 * 88) + 1 = 2825 bytes
    All single data dump (i/e):  8 + (32 * 88) + 1 = 2825 bytes
    All multi data dump:         8 + (32 * 76) + 1 = 2441 bytes
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional, Union

from k1manager.formats.k1.multi import decode_multi
from k1manager.formats.k1.single import decode_single, encode_single
from k1manager.formats.k1.sysex_parser import (
    SYSEX_END,
    SysExFunction,
    SysExHeader,
    iter_records,
    split_messages,
)
from k1manager.models.multi import DATA_SIZE as MULTI_DATA_SIZE, MultiPatch
from k1manager.models.single import DATA_SIZE, SinglePatch
from k1manager.utils.compare import Comparison, compare_bytes

logger = logging.getLogger(__name__)

NUM_SINGLES = 32
NUM_MULTIS = 32

# Substatus 2 values of an all patch data dump
SUBSTATUS_SINGLES_UPPER = 0x00  # I or E
SUBSTATUS_SINGLES_LOWER = 0x20  # i or e
SUBSTATUS_MULTIS = 0x40


class DumpState(Enum):
    """Where the controller is in processing a dump."""

    AWAIT_MESSAGE = "await_message"
    HEADER_PARSED = "header_parsed"
    DISPATCH = "dispatch"
    SINGLE_DUMP_LOOP = "single_dump_loop"
    MULTI_DUMP_LOOP = "multi_dump_loop"
    UNHANDLED = "unhandled"
    DONE = "done"


class DumpKind(Enum):
    """What a message contains, decided from its header."""

    SINGLE_BANK = "single_bank"
    MULTI_BANK = "multi_bank"
    ONE_PATCH = "one_patch"
    UNHANDLED = "unhandled"


class RunStatus(Enum):
    OK = 0
    HALTED = 1


BANK_DISPATCH = {
    (SysExFunction.ALL_PATCH_DATA_DUMP, SUBSTATUS_SINGLES_UPPER): DumpKind.SINGLE_BANK,
    (SysExFunction.ALL_PATCH_DATA_DUMP, SUBSTATUS_SINGLES_LOWER): DumpKind.SINGLE_BANK,
    (SysExFunction.ALL_PATCH_DATA_DUMP, SUBSTATUS_MULTIS): DumpKind.MULTI_BANK,
}


def dispatch(header: SysExHeader) -> DumpKind:
    """Classify a message by its function code and substatus 2."""
    if header.function == SysExFunction.ONE_PATCH_DATA_DUMP:
        return DumpKind.ONE_PATCH
    return BANK_DISPATCH.get((header.function, header.substatus2), DumpKind.UNHANDLED)


def halt_reason(header: SysExHeader, kind: DumpKind) -> str:
    if kind == DumpKind.MULTI_BANK:
        return "Multis not handled yet"
    if kind == DumpKind.ONE_PATCH:
        return "One patch dumps not handled yet"
    return (
        f"Function {header.function:02X}H with substatus2 "
        f"{header.substatus2:02X}H not handled"
    )


def patch_label(header: SysExHeader, index: int) -> str:
    """
    Front panel name of a patch slot, e.g. "IA-1" or "ed-8".

    Substatus 1 selects internal (I) or external (E) memory, substatus 2
    the upper or lower case bank. Lower case banks use lower case group
    letters too.
    """
    bank = "I" if header.substatus1 == 0x00 else "E"
    group = "ABCD"[(index // 8) % 4]
    if header.substatus2 == SUBSTATUS_SINGLES_LOWER:
        bank = bank.lower()
        group = group.lower()
    return f"{bank}{group}-{index % 8 + 1}"


@dataclass
class RecordResult:
    """Round trip outcome for one patch record."""

    index: int
    label: str
    patch: SinglePatch
    original: bytes = field(repr=False)
    encoded: bytes = field(repr=False)
    comparison: Comparison

    @property
    def match(self) -> bool:
        return self.comparison.match


@dataclass
class MessageResult:
    """Outcome for one SysEx message of the dump."""

    index: int
    header: SysExHeader
    kind: DumpKind
    records: List[RecordResult] = field(default_factory=list)

    @property
    def mismatches(self) -> List[RecordResult]:
        return [r for r in self.records if not r.match]


@dataclass
class DumpResult:
    """
    Outcome of processing a whole dump.

    Attributes:
        message_count: Number of messages the data was split into
        messages: Results for the messages that were processed
        status: OK, or HALTED when a message could not be handled
        halt_reason: Why processing stopped, if it did
    """

    message_count: int = 0
    messages: List[MessageResult] = field(default_factory=list)
    status: RunStatus = RunStatus.OK
    halt_reason: Optional[str] = None

    @property
    def exit_code(self) -> int:
        return self.status.value

    @property
    def records(self) -> List[RecordResult]:
        return [r for m in self.messages for r in m.records]

    @property
    def all_match(self) -> bool:
        return all(r.match for r in self.records)


class DumpController:
    """
    Round-trip verifier for K1 SysEx dumps.

    Example:
        result = DumpController.read("k1_all.syx")
        for record in result.records:
            print(record.label, record.match)
    """

    def __init__(self, keep_trailing: bool = True):
        self.keep_trailing = keep_trailing
        self.state = DumpState.AWAIT_MESSAGE
        self.decode_count = 0

    @classmethod
    def read(cls, filepath: Union[str, Path], keep_trailing: bool = True) -> DumpResult:
        """
        Process a K1 SysEx file.

        Args:
            filepath: Path to .syx file
            keep_trailing: Treat bytes after the last F7 as a message

        Returns:
            Result of the run
        """
        controller = cls(keep_trailing=keep_trailing)
        return controller.process_file(filepath)

    def process_file(self, filepath: Union[str, Path]) -> DumpResult:
        filepath = Path(filepath)

        if not filepath.exists():
            raise FileNotFoundError(f"File not found: {filepath}")

        with open(filepath, "rb") as f:
            data = f.read()

        logger.debug(f"SysEx file: '{filepath}' ({len(data)} bytes)")
        return self.process_bytes(data)

    def process_bytes(self, data: Union[bytes, bytearray]) -> DumpResult:
        """
        Process raw dump data.

        Processing stops at the first message that is not a Single bank
        dump; the result then has status HALTED.

        Raises:
            TruncatedHeaderError: If a message is shorter than a header
            MalformedPatchError: If a Single bank ends before its last record
        """
        self.decode_count = 0
        messages = split_messages(data, SYSEX_END, self.keep_trailing)
        logger.debug(f"Got {len(messages)} messages")

        result = DumpResult(message_count=len(messages))

        for index, raw in enumerate(messages):
            self.state = DumpState.AWAIT_MESSAGE
            header = SysExHeader.from_bytes(raw)
            self.state = DumpState.HEADER_PARSED
            logger.debug(f"Message {index + 1}: {header}")

            self.state = DumpState.DISPATCH
            kind = dispatch(header)
            message = MessageResult(index=index, header=header, kind=kind)
            result.messages.append(message)

            if kind == DumpKind.SINGLE_BANK:
                self.state = DumpState.SINGLE_DUMP_LOOP
                message.records = self._verify_singles(header, raw)
                continue

            if kind == DumpKind.MULTI_BANK:
                self.state = DumpState.MULTI_DUMP_LOOP
            else:
                self.state = DumpState.UNHANDLED
            result.status = RunStatus.HALTED
            result.halt_reason = halt_reason(header, kind)
            logger.info(result.halt_reason)
            return result

        self.state = DumpState.DONE
        return result

    def _verify_singles(self, header: SysExHeader, message: bytes) -> List[RecordResult]:
        """Decode, re-encode and compare every Single of a bank dump."""
        results = []

        for index, original in iter_records(message, DATA_SIZE, NUM_SINGLES):
            label = patch_label(header, index)
            patch = decode_single(original)
            self.decode_count += 1
            encoded = encode_single(patch)
            comparison = compare_bytes(original, encoded)

            if not comparison.match:
                logger.warning(f"{label} does not round trip, diff index = {comparison.diff_index}")

            results.append(
                RecordResult(
                    index=index,
                    label=label,
                    patch=patch,
                    original=original,
                    encoded=encoded,
                    comparison=comparison,
                )
            )

        return results


@dataclass
class BankListing:
    """Patches of one bank dump, decoded for display only."""

    header: SysExHeader
    kind: DumpKind
    singles: List[SinglePatch] = field(default_factory=list)
    multis: List[MultiPatch] = field(default_factory=list)


def list_banks(data: Union[bytes, bytearray], keep_trailing: bool = True) -> List[BankListing]:
    """
    Decode the patches of every bank dump in the data.

    Unlike DumpController this does not stop at Multi banks or other
    messages; those are listed with their header and no patches.
    """
    listings = []

    for raw in split_messages(data, SYSEX_END, keep_trailing):
        header = SysExHeader.from_bytes(raw)
        listing = BankListing(header=header, kind=dispatch(header))

        if listing.kind == DumpKind.SINGLE_BANK:
            listing.singles = [
                decode_single(record) for _, record in iter_records(raw, DATA_SIZE, NUM_SINGLES)
            ]
        elif listing.kind == DumpKind.MULTI_BANK:
            listing.multis = [
                decode_multi(record)
                for _, record in iter_records(raw, MULTI_DATA_SIZE, NUM_MULTIS)
            ]

        listings.append(listing)

    return listings
