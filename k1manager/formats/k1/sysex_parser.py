"""
Kawai K1 SysEx message splitting and header parsing.

K1 SysEx Format:
- Manufacturer ID: 0x40 (Kawai)
- Channel: 0x0n (n = MIDI channel - 1)
- Machine ID: 0x03 (K1)

Bulk Dump Format:
    F0 40 0n FF GG 03 S1 S2 [data...] F7

Where:
    - 0n: MIDI channel
    - FF: Function (0x20 one patch dump, 0x21 all patch dump, ...)
    - GG: Group (synthesizer group, always 0x00)
    - 03: Machine ID
    - S1/S2: Substatus bytes (bank and patch type / patch number)
    - data: Patch records, each ending with its own checksum byte
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterator, List, Optional, Tuple, Union

from k1manager.utils.validation import MalformedPatchError, TruncatedHeaderError

SYSEX_START = 0xF0
SYSEX_END = 0xF7

HEADER_SIZE = 8


class SysExFunction(IntEnum):
    """K1 SysEx function codes (header byte 3)."""

    ONE_PATCH_DATA_REQUEST = 0x00
    ALL_PATCH_DATA_REQUEST = 0x01
    ONE_PATCH_DATA_DUMP = 0x20
    ALL_PATCH_DATA_DUMP = 0x21
    MACHINE_ID_REQUEST = 0x60
    MACHINE_ID_ACKNOWLEDGE = 0x61

    @classmethod
    def lookup(cls, value: int) -> Optional["SysExFunction"]:
        """Return the function for a header byte, or None if unrecognized."""
        try:
            return cls(value)
        except ValueError:
            return None


def split_messages(
    data: Union[bytes, bytearray], delimiter: int = SYSEX_END, keep_trailing: bool = True
) -> List[bytes]:
    """
    Split raw data into messages at each delimiter byte.

    The delimiter itself is not part of any returned slice. Empty slices
    between consecutive delimiters are kept, so joining the slices with
    the delimiter gives back the original data.

    Args:
        data: Raw file contents
        delimiter: Byte value that ends a message
        keep_trailing: Whether non-empty bytes after the last delimiter
            form a final slice (otherwise they are dropped)

    Returns:
        List of message slices
    """
    if isinstance(data, bytearray):
        data = bytes(data)

    messages = []
    start = 0

    while True:
        end = data.find(delimiter, start)
        if end < 0:
            break
        messages.append(data[start:end])
        start = end + 1

    trailing = data[start:]
    if trailing and keep_trailing:
        messages.append(trailing)

    return messages


@dataclass(frozen=True)
class SysExHeader:
    """
    K1 SysEx bulk header.

    Attributes:
        manufacturer_id: Manufacturer ID (0x40 for Kawai)
        channel: MIDI channel, 0-indexed
        function: Function code, see SysExFunction
        group: Synthesizer group
        machine_id: Machine ID (0x03 for K1)
        substatus1: First substatus byte (internal/external memory)
        substatus2: Second substatus byte (bank and patch type, or patch number)
    """

    manufacturer_id: int
    channel: int
    function: int
    group: int
    machine_id: int
    substatus1: int
    substatus2: int

    @classmethod
    def from_bytes(cls, data: Union[bytes, bytearray, List[int]]) -> "SysExHeader":
        """
        Parse the header at the start of a message.

        Byte 0 is the SysEx initiator and is not checked here.

        Raises:
            TruncatedHeaderError: If fewer than 8 bytes are available
        """
        if len(data) < HEADER_SIZE:
            raise TruncatedHeaderError(
                f"SysEx header needs {HEADER_SIZE} bytes, got {len(data)}"
            )

        return cls(
            manufacturer_id=data[1],
            channel=data[2],
            function=data[3],
            group=data[4],
            machine_id=data[5],
            substatus1=data[6],
            substatus2=data[7],
        )

    def to_bytes(self) -> bytes:
        """
        Serialize the header.

        Only the 8-byte prefix is produced. A complete message is
        header.to_bytes() + payload + SYSEX_END.
        """
        return bytes(
            [
                SYSEX_START,
                self.manufacturer_id,
                self.channel,
                self.function,
                self.group,
                self.machine_id,
                self.substatus1,
                self.substatus2,
            ]
        )

    @property
    def sysex_function(self) -> Optional[SysExFunction]:
        return SysExFunction.lookup(self.function)

    @property
    def display_channel(self) -> int:
        return self.channel + 1

    def __str__(self) -> str:
        return (
            f"ManufacturerID = {self.manufacturer_id:02X}H, "
            f"Channel = {self.display_channel}, "
            f"Function = {self.function:02X}H, "
            f"Group = {self.group:02X}H, "
            f"MachineID = {self.machine_id:02X}H, "
            f"Substatus1 = {self.substatus1:02X}H, "
            f"Substatus2 = {self.substatus2:02X}H"
        )


def iter_records(
    message: Union[bytes, bytearray], record_size: int, count: int
) -> Iterator[Tuple[int, bytes]]:
    """
    Yield the fixed-size records that follow the header of a bulk dump.

    Exactly count records are produced; bytes after the last one are
    never read.

    Raises:
        MalformedPatchError: If the message ends before a record does
    """
    offset = HEADER_SIZE
    for index in range(count):
        record = bytes(message[offset : offset + record_size])
        if len(record) < record_size:
            raise MalformedPatchError(
                f"Record {index + 1} of {count} needs {record_size} bytes "
                f"at offset {offset}, got {len(record)}"
            )
        yield index, record
        offset += record_size
