"""Utility functions for k1manager."""

from k1manager.utils.checksum import calculate_k1_checksum, verify_checksum
from k1manager.utils.compare import Comparison, compare_bytes, NO_DIFFERENCE
from k1manager.utils.validation import (
    K1FormatError,
    TruncatedHeaderError,
    MalformedPatchError,
    ValidationError,
)

__all__ = [
    "calculate_k1_checksum",
    "verify_checksum",
    "Comparison",
    "compare_bytes",
    "NO_DIFFERENCE",
    "K1FormatError",
    "TruncatedHeaderError",
    "MalformedPatchError",
    "ValidationError",
]
