"""
Errors and validation helpers for Kawai K1 SysEx data.
"""

from typing import Union, List


class K1FormatError(Exception):
    """Base class for K1 data format errors."""

    pass


class TruncatedHeaderError(K1FormatError):
    """Raised when a SysEx message is too short to hold the bulk header."""

    pass


class MalformedPatchError(K1FormatError):
    """Raised when a patch record slot holds fewer bytes than the record size."""

    pass


class ValidationError(K1FormatError):
    """Raised when a patch field value cannot be encoded."""

    pass


def validate_field_value(value: int, width: int, name: str = "value") -> None:
    """
    Validate that a value fits in an unsigned bit field.

    Args:
        value: The value to validate
        width: Field width in bits
        name: Name of the value for error messages

    Raises:
        ValidationError: If value is out of range
    """
    limit = (1 << width) - 1
    if not 0 <= value <= limit:
        raise ValidationError(f"{name} must be 0-{limit}, got {value}")


def validate_k1_sysex_header(data: Union[bytes, List[int]]) -> bool:
    """
    Validate a Kawai K1 SysEx message header.

    Header decoding does not look at the initiator byte, so this is
    the place to check it.

    Args:
        data: SysEx message data

    Returns:
        True if the message starts with F0 40 and holds a full header
    """
    if len(data) < 8:
        return False

    # F0 40 0n ...
    return data[0] == 0xF0 and data[1] == 0x40 and data[2] <= 0x0F
