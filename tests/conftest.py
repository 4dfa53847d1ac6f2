"""Test configuration and fixtures."""

import binascii

import pytest

# Two one-patch dumps captured from a K1: F0 40 00 20 00 03 00 <patch no> <88 bytes> F7
FRETLESS_1_MESSAGE = (
    "F040002000030000467265746C65737320313B2432323E02150010005F320032343237484848483D3C3D6F"
    "0E0E0A2A4E515164000000000C100E073C3B3C2A000000001A1616224D4D435E323232321D1E2B143B3D3E"
    "321F323236323232320BF7"
)
FRETLESS_2_MESSAGE = (
    "F040002000030001467265746C65737320325D0C32323E021D00321B323200323235363C4E403C57255A6E"
    "0E0F2F0E64646464000000000B09062D40251F4B000000001517111E4233613D323232323200212C323232"
    "321832170C3232323265F7"
)

SINGLE_SIZE = 88
MULTI_SIZE = 76


@pytest.fixture
def fretless_message():
    """Return a complete one-patch dump message."""
    return binascii.unhexlify(FRETLESS_1_MESSAGE)


@pytest.fixture
def fretless_record(fretless_message):
    """Return the 88-byte Single record of 'Fretless 1'."""
    return fretless_message[8:-1]


@pytest.fixture
def fretless2_record():
    """Return the 88-byte Single record of 'Fretless 2'."""
    return binascii.unhexlify(FRETLESS_2_MESSAGE)[8:-1]


@pytest.fixture
def make_header():
    """Return a builder for 8-byte K1 headers."""

    def build(function=0x21, substatus1=0x00, substatus2=0x00, channel=0x00):
        return bytes([0xF0, 0x40, channel, function, 0x00, 0x03, substatus1, substatus2])

    return build


@pytest.fixture
def make_single_bank(make_header, fretless_record, fretless2_record):
    """Return a builder for complete all-singles bank dump messages."""

    def build(substatus2=0x00, records=None):
        if records is None:
            records = [fretless_record if i % 2 == 0 else fretless2_record for i in range(32)]
        return make_header(0x21, 0x00, substatus2) + b"".join(records) + b"\xf7"

    return build


@pytest.fixture
def make_multi_bank(make_header):
    """Return a builder for all-multis bank dump messages."""

    def build():
        records = []
        for i in range(32):
            name = f"MULTI {i + 1:02d}".encode("ascii")
            body = bytes([i % 100]) + bytes(MULTI_SIZE - 9)
            records.append(name + body)
        return make_header(0x21, 0x00, 0x40) + b"".join(records) + b"\xf7"

    return build


@pytest.fixture
def syx_file(tmp_path):
    """Return a writer that stores bytes in a temporary .syx file."""

    def write(data, name="dump.syx"):
        path = tmp_path / name
        path.write_bytes(data)
        return path

    return write
