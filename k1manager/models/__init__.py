"""Data models for K1 patch representation."""

from k1manager.models.single import SinglePatch, Source, PolyMode, WheelAssign, VibratoShape
from k1manager.models.multi import MultiPatch

__all__ = [
    "SinglePatch",
    "Source",
    "PolyMode",
    "WheelAssign",
    "VibratoShape",
    "MultiPatch",
]
