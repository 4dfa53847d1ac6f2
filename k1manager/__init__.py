"""
k1manager - SysEx dump tools for the Kawai K1 synthesizer.

This library provides tools to:
- Split K1 .syx files into SysEx messages and parse their headers
- Decode and encode K1 Single patches byte for byte
- Read the name and volume of K1 Multi patches
- Verify that every Single in a bank dump survives a round trip

Example usage:
    from k1manager import DumpController

    result = DumpController.read("k1_all.syx")
    for record in result.records:
        print(record.label, record.patch.display_name, record.match)
"""

__version__ = "0.1.0"
__author__ = "k1manager Contributors"

from k1manager.formats.k1.dump import DumpController, DumpResult, RunStatus
from k1manager.formats.k1.multi import decode_multi
from k1manager.formats.k1.single import decode_single, encode_single
from k1manager.formats.k1.sysex_parser import SysExFunction, SysExHeader, split_messages
from k1manager.models.multi import MultiPatch
from k1manager.models.single import SinglePatch, Source

__all__ = [
    "DumpController",
    "DumpResult",
    "RunStatus",
    "decode_multi",
    "decode_single",
    "encode_single",
    "SysExFunction",
    "SysExHeader",
    "split_messages",
    "MultiPatch",
    "SinglePatch",
    "Source",
]
