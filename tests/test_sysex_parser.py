"""Tests for K1 SysEx message splitting and header parsing."""

import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from k1manager.formats.k1.sysex_parser import (
    SysExFunction,
    SysExHeader,
    iter_records,
    split_messages,
)
from k1manager.utils.validation import (
    MalformedPatchError,
    TruncatedHeaderError,
    validate_k1_sysex_header,
)


def rejoin(parts, data, delimiter=0xF7):
    """Reinsert delimiters between slices, and after the last one if data ended with one."""
    joined = bytes([delimiter]).join(parts)
    if data.endswith(bytes([delimiter])):
        joined += bytes([delimiter])
    return joined


class TestSplitMessages:
    """Test cases for splitting raw data at terminators."""

    def test_empty_input(self):
        """Empty data gives no messages."""
        assert split_messages(b"") == []

    def test_no_delimiter(self):
        """Data without a terminator is one message."""
        assert split_messages(b"\xf0\x40\x00") == [b"\xf0\x40\x00"]

    def test_delimiter_excluded(self):
        """Terminators are not part of the returned slices."""
        data = bytes([0xF0, 0x01, 0xF7, 0xF0, 0x02, 0xF7])
        assert split_messages(data) == [b"\xf0\x01", b"\xf0\x02"]

    def test_consecutive_delimiters_keep_empty_slice(self):
        """An empty slice between two terminators is kept."""
        assert split_messages(b"\x01\xf7\xf7\x02\xf7") == [b"\x01", b"", b"\x02"]

    def test_trailing_bytes_kept(self):
        """Bytes after the last terminator form a final slice by default."""
        assert split_messages(b"\x01\xf7\x02\x03") == [b"\x01", b"\x02\x03"]

    def test_trailing_bytes_dropped(self):
        """Bytes after the last terminator are dropped when asked to."""
        assert split_messages(b"\x01\xf7\x02\x03", keep_trailing=False) == [b"\x01"]

    def test_no_delimiter_dropped_when_not_keeping_trailing(self):
        """Without any terminator and keep_trailing off, nothing is left."""
        assert split_messages(b"\x01\x02", keep_trailing=False) == []

    def test_custom_delimiter(self):
        """Any byte value can act as the delimiter."""
        assert split_messages(b"a,b,c", delimiter=ord(",")) == [b"a", b"b", b"c"]

    def test_bytearray_input(self):
        """bytearray input gives bytes slices."""
        parts = split_messages(bytearray(b"\x01\xf7"))
        assert parts == [b"\x01"]
        assert isinstance(parts[0], bytes)

    @pytest.mark.parametrize(
        "data",
        [
            b"",
            b"\xf7",
            b"\xf7\xf7",
            b"\xf0\x40\xf7",
            b"\xf0\x40\xf7\xf0\x41",
            b"\x00\x01\x02",
            bytes(range(256)) * 2,
        ],
    )
    def test_rejoin_reconstructs_input(self, data):
        """Slices plus terminators give back the original data."""
        assert rejoin(split_messages(data), data) == data


class TestSysExHeader:
    """Test cases for the 8-byte bulk header."""

    def test_parse_header(self, fretless_message):
        """Fields are read positionally from bytes 1-7."""
        header = SysExHeader.from_bytes(fretless_message)

        assert header.manufacturer_id == 0x40
        assert header.channel == 0x00
        assert header.function == 0x20
        assert header.group == 0x00
        assert header.machine_id == 0x03
        assert header.substatus1 == 0x00
        assert header.substatus2 == 0x00
        assert header.sysex_function == SysExFunction.ONE_PATCH_DATA_DUMP

    def test_truncated_header(self):
        """Fewer than 8 bytes cannot hold a header."""
        with pytest.raises(TruncatedHeaderError):
            SysExHeader.from_bytes(bytes([0xF0, 0x40, 0x00, 0x21, 0x00, 0x03, 0x00]))

    def test_initiator_not_checked(self):
        """Decoding does not look at byte 0."""
        header = SysExHeader.from_bytes(bytes([0x00, 0x40, 0x01, 0x21, 0x00, 0x03, 0x00, 0x20]))
        assert header.substatus2 == 0x20

    def test_to_bytes(self, make_header):
        """Serialization gives exactly the 8-byte prefix."""
        data = make_header(0x21, 0x00, 0x20, channel=0x05)
        header = SysExHeader.from_bytes(data + b"\x01\x02\xf7")

        assert header.to_bytes() == data
        assert len(header.to_bytes()) == 8

    @pytest.mark.parametrize(
        "fields",
        [
            (0x40, 0x00, 0x21, 0x00, 0x03, 0x00, 0x00),
            (0x40, 0x0F, 0x20, 0x00, 0x03, 0x01, 0x1F),
            (0x7F, 0x7F, 0x7F, 0x7F, 0x7F, 0x7F, 0x7F),
            (0x00, 0x00, 0x00, 0x00, 0x00, 0x00, 0x00),
        ],
    )
    def test_fields_round_trip(self, fields):
        """Any field tuple survives serialize then parse."""
        header = SysExHeader(*fields)
        parsed = SysExHeader.from_bytes(header.to_bytes())

        assert parsed == header
        assert header.to_bytes()[0] == 0xF0

    def test_display(self):
        """Channel is shown 1-indexed, everything else as hex."""
        header = SysExHeader(0x40, 0x02, 0x21, 0x00, 0x03, 0x00, 0x20)
        assert str(header) == (
            "ManufacturerID = 40H, Channel = 3, Function = 21H, Group = 00H, "
            "MachineID = 03H, Substatus1 = 00H, Substatus2 = 20H"
        )


class TestSysExFunction:
    """Test cases for function code lookup."""

    def test_known_codes(self):
        assert SysExFunction.lookup(0x21) == SysExFunction.ALL_PATCH_DATA_DUMP
        assert SysExFunction.lookup(0x60) == SysExFunction.MACHINE_ID_REQUEST

    def test_unknown_code(self):
        """An unlisted byte is not an error."""
        assert SysExFunction.lookup(0x33) is None
        header = SysExHeader(0x40, 0x00, 0x33, 0x00, 0x03, 0x00, 0x00)
        assert header.sysex_function is None


class TestHeaderValidation:
    """Initiator and manufacturer checks kept apart from decoding."""

    def test_valid_header(self, make_header):
        assert validate_k1_sysex_header(make_header())

    def test_wrong_initiator(self, make_header):
        data = b"\x00" + make_header()[1:]
        assert not validate_k1_sysex_header(data)

    def test_wrong_manufacturer(self):
        assert not validate_k1_sysex_header(bytes([0xF0, 0x43, 0x00, 0x21, 0, 3, 0, 0]))

    def test_too_short(self):
        assert not validate_k1_sysex_header(bytes([0xF0, 0x40]))


class TestIterRecords:
    """Test cases for fixed-size record extraction."""

    def test_exact_count(self, make_header):
        """Only count records are produced, even with more data present."""
        message = make_header() + bytes(range(40))
        records = list(iter_records(message, 10, 3))

        assert [i for i, _ in records] == [0, 1, 2]
        assert records[0][1] == bytes(range(10))
        assert records[2][1] == bytes(range(20, 30))

    def test_short_message(self, make_header):
        """A record cut short raises."""
        message = make_header() + bytes(15)
        with pytest.raises(MalformedPatchError):
            list(iter_records(message, 10, 2))
