"""Kawai K1 format handlers."""

from k1manager.formats.k1.sysex_parser import SysExFunction, SysExHeader, split_messages
from k1manager.formats.k1.single import decode_single, encode_single
from k1manager.formats.k1.multi import decode_multi
from k1manager.formats.k1.dump import DumpController, DumpResult, list_banks

__all__ = [
    "SysExFunction",
    "SysExHeader",
    "split_messages",
    "decode_single",
    "encode_single",
    "decode_multi",
    "DumpController",
    "DumpResult",
    "list_banks",
]
