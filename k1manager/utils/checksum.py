"""
Kawai K1 patch checksum calculation.

The last byte of every K1 patch record is a checksum computed as:
1. Sum all data bytes of the record except the checksum itself
2. Add 0xA5
3. Take the lower 7 bits
"""

from typing import Union, List

CHECKSUM_SEED = 0xA5


def calculate_k1_checksum(data: Union[bytes, List[int]]) -> int:
    """
    Calculate the K1 checksum over patch data bytes.

    Args:
        data: Patch bytes, without the trailing checksum byte

    Returns:
        Checksum value (0-127)
    """
    if isinstance(data, list):
        data = bytes(data)

    return (sum(data) + CHECKSUM_SEED) & 0x7F


def verify_checksum(data: Union[bytes, List[int]], expected_checksum: int) -> bool:
    """
    Verify a K1 patch checksum.

    Args:
        data: Bytes the checksum was calculated over
        expected_checksum: The checksum byte from the record

    Returns:
        True if checksum is valid, False otherwise
    """
    return calculate_k1_checksum(data) == expected_checksum


def verify_record_checksum(record: Union[bytes, List[int]]) -> bool:
    """
    Verify the checksum of a complete patch record.

    Expects the checksum in the last byte of the record.
    """
    if isinstance(record, list):
        record = bytes(record)

    if len(record) < 2:
        return False

    return verify_checksum(record[:-1], record[-1])
