"""
Kawai K1 Multi patch decoder (partial).

Multi record prefix:

    m0-m7    Name (8 bytes)
    m8       Volume

The rest of the record layout is not decoded.
"""

from typing import Union

from k1manager.models.multi import NAME_LENGTH, MultiPatch
from k1manager.utils.validation import MalformedPatchError


def decode_multi(data: Union[bytes, bytearray]) -> MultiPatch:
    """
    Decode the name and volume of a Multi record.

    Name bytes are mapped one to one onto characters, so bytes outside
    printable ASCII pass through unchanged.

    Raises:
        MalformedPatchError: If data is too short for name and volume
    """
    if len(data) < NAME_LENGTH + 1:
        raise MalformedPatchError(
            f"Multi patch needs at least {NAME_LENGTH + 1} bytes, got {len(data)}"
        )

    return MultiPatch(
        name=bytes(data[:NAME_LENGTH]).decode("latin-1"),
        volume=data[NAME_LENGTH],
    )
