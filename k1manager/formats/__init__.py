"""Format handlers for the Kawai K1."""

from k1manager.formats.k1 import DumpController, SysExHeader, decode_single, encode_single

__all__ = ["DumpController", "SysExHeader", "decode_single", "encode_single"]
