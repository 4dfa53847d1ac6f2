"""
Byte sequence comparison used to verify codec round trips.
"""

from typing import NamedTuple, Union

# diff_index value when there is no single differing position to report
NO_DIFFERENCE = -1


class Comparison(NamedTuple):
    """Outcome of comparing original bytes with re-encoded bytes."""

    match: bool
    diff_index: int = NO_DIFFERENCE

    @property
    def has_diff_index(self) -> bool:
        return self.diff_index != NO_DIFFERENCE


def compare_bytes(
    original: Union[bytes, bytearray], encoded: Union[bytes, bytearray]
) -> Comparison:
    """
    Compare two byte sequences.

    A mismatch is a normal outcome, not an error.

    Args:
        original: Bytes as read from the dump
        encoded: Bytes produced by re-encoding

    Returns:
        Comparison with the first differing index on mismatch.
        Sequences of different length never match and report NO_DIFFERENCE.
    """
    if len(original) != len(encoded):
        return Comparison(False, NO_DIFFERENCE)

    for i in range(len(original)):
        if original[i] != encoded[i]:
            return Comparison(False, i)

    return Comparison(True, NO_DIFFERENCE)
