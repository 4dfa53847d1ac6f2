"""
Multi patch data model for the Kawai K1 (partial).

Only the name and volume at the start of the 76-byte Multi record are
decoded. There is no way to write a Multi back.
"""

from dataclasses import dataclass

DATA_SIZE = 76
NAME_LENGTH = 8


@dataclass(frozen=True)
class MultiPatch:
    """
    Read-only view of a K1 Multi patch.

    Attributes:
        name: Patch name, 8 raw bytes (not checked for printable ASCII)
        volume: Volume as stored, 0-indexed
    """

    name: str
    volume: int

    @property
    def display_volume(self) -> int:
        return self.volume + 1

    def __str__(self) -> str:
        return f"{self.name}\nvolume = {self.display_volume}"
