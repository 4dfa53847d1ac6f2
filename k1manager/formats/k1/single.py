"""
Kawai K1 Single patch codec.

A Single record is 88 bytes:

    s0-s9    Name (10 ASCII characters)
    s10-s22  Common parameters
    s23-s86  Source parameters: 16 groups of 4 bytes, one byte per source
    s87      Checksum

Both directions are driven by the same bit field tables, so
encode_single(decode_single(data)) reproduces data exactly. Bits that
no parameter uses are carried over in SinglePatch.spare.
"""

from dataclasses import replace
from typing import Dict, List, NamedTuple, Union

from k1manager.models.single import DATA_SIZE, NAME_LENGTH, NUM_SOURCES, SinglePatch, Source
from k1manager.utils.checksum import calculate_k1_checksum
from k1manager.utils.validation import MalformedPatchError, ValidationError, validate_field_value


class BitField(NamedTuple):
    """
    Location of (part of) a parameter inside the record.

    Attributes:
        name: Attribute name on SinglePatch or Source
        offset: Byte offset (for source fields, the group number)
        shift: Position of the lowest bit inside the byte
        width: Number of bits
        value_shift: Position of these bits inside the parameter value
    """

    name: str
    offset: int
    shift: int = 0
    width: int = 7
    value_shift: int = 0

    @property
    def mask(self) -> int:
        return ((1 << self.width) - 1) << self.shift


COMMON_FIELDS: List[BitField] = [
    BitField("volume", 10),
    BitField("source_mute", 11, 0, 4),
    BitField("am_s1_s2", 11, 4, 1),
    BitField("am_s3_s4", 11, 5, 1),
    BitField("vibrato_pressure_depth", 12),
    BitField("wheel_depth", 13),
    BitField("vibrato_speed", 14),
    BitField("pitch_bend", 15, 0, 4),
    BitField("wheel_assign", 15, 4, 2),
    BitField("vibrato_depth", 16),
    BitField("vibrato_shape", 17, 0, 2),
    BitField("autobend_time", 18),
    BitField("autobend_depth", 19),
    BitField("autobend_ks_time", 20),
    BitField("autobend_velocity_depth", 21),
    BitField("poly_mode", 22, 0, 2),
]

SOURCE_BASE = 23

SOURCE_FIELDS: List[BitField] = [
    BitField("fine", 0),
    BitField("fixed_key", 1),
    BitField("wave_select", 2),
    BitField("coarse", 3, 0, 6),
    BitField("key_track", 3, 6, 1),
    BitField("level", 4),
    BitField("wave_select", 5, 0, 1, value_shift=7),
    BitField("vibrato_autobend", 5, 1, 1),
    BitField("velocity_curve", 5, 2, 3),
    BitField("envelope_attack", 6),
    BitField("envelope_decay", 7),
    BitField("envelope_sustain", 8),
    BitField("envelope_release", 9),
    BitField("velocity_level", 10),
    BitField("pressure_level", 11),
    BitField("ks_level", 12),
    BitField("velocity_time", 13),
    BitField("ks_time", 14),
    BitField("pressure_freq", 15),
]

CHECKSUM_OFFSET = DATA_SIZE - 1

BOOL_FIELDS = {"am_s1_s2", "am_s3_s4", "key_track", "vibrato_autobend"}


def _source_offset(group: int, source_index: int) -> int:
    return SOURCE_BASE + group * NUM_SOURCES + source_index


def _value_widths(fields: List[BitField]) -> Dict[str, int]:
    """Total bit width of every parameter in a field table."""
    widths: Dict[str, int] = {}
    for f in fields:
        widths[f.name] = max(widths.get(f.name, 0), f.value_shift + f.width)
    return widths


def _claimed_masks() -> bytes:
    """Bits of each record byte that belong to a parameter."""
    masks = bytearray(DATA_SIZE)
    for i in range(NAME_LENGTH):
        masks[i] = 0xFF
    for f in COMMON_FIELDS:
        masks[f.offset] |= f.mask
    for source_index in range(NUM_SOURCES):
        for f in SOURCE_FIELDS:
            masks[_source_offset(f.offset, source_index)] |= f.mask
    masks[CHECKSUM_OFFSET] = 0xFF
    return bytes(masks)


COMMON_WIDTHS = _value_widths(COMMON_FIELDS)
SOURCE_WIDTHS = _value_widths(SOURCE_FIELDS)
CLAIMED_MASKS = _claimed_masks()


def _unpack(record: bytes, fields: List[BitField], source_index: int = -1) -> Dict[str, int]:
    values: Dict[str, int] = {}
    for f in fields:
        offset = f.offset if source_index < 0 else _source_offset(f.offset, source_index)
        bits = (record[offset] >> f.shift) & ((1 << f.width) - 1)
        values[f.name] = values.get(f.name, 0) | (bits << f.value_shift)
    return values


def _pack(
    record: bytearray,
    fields: List[BitField],
    values: Dict[str, int],
    source_index: int = -1,
) -> None:
    for f in fields:
        offset = f.offset if source_index < 0 else _source_offset(f.offset, source_index)
        bits = (values[f.name] >> f.value_shift) & ((1 << f.width) - 1)
        record[offset] |= bits << f.shift


def _to_bools(values: Dict[str, int]) -> Dict[str, int]:
    return {k: bool(v) if k in BOOL_FIELDS else v for k, v in values.items()}


def _validated(values: Dict[str, int], widths: Dict[str, int], label: str = "") -> Dict[str, int]:
    checked = {}
    for name, width in widths.items():
        value = int(values[name])
        validate_field_value(value, width, f"{label}{name}")
        checked[name] = value
    return checked


def decode_single(data: Union[bytes, bytearray]) -> SinglePatch:
    """
    Decode a Single patch record.

    Args:
        data: At least DATA_SIZE bytes; only the first DATA_SIZE are used

    Returns:
        Decoded SinglePatch

    Raises:
        MalformedPatchError: If data is shorter than DATA_SIZE
    """
    if len(data) < DATA_SIZE:
        raise MalformedPatchError(f"Single patch needs {DATA_SIZE} bytes, got {len(data)}")

    record = bytes(data[:DATA_SIZE])

    common = _to_bools(_unpack(record, COMMON_FIELDS))
    mute_bits = common.pop("source_mute")
    source_mute = tuple(bool((mute_bits >> i) & 1) for i in range(NUM_SOURCES))

    sources = tuple(
        Source(**_to_bools(_unpack(record, SOURCE_FIELDS, i))) for i in range(NUM_SOURCES)
    )

    spare = bytes(b & ~mask & 0xFF for b, mask in zip(record, CLAIMED_MASKS))

    return SinglePatch(
        name=record[:NAME_LENGTH].decode("latin-1"),
        source_mute=source_mute,
        sources=sources,
        checksum=record[CHECKSUM_OFFSET],
        spare=spare,
        **common,
    )


def encode_single(patch: SinglePatch) -> bytes:
    """
    Encode a Single patch to its record bytes.

    The checksum byte is written as stored in the patch; use
    with_checksum() first to produce a record the synth will accept.

    Returns:
        Exactly DATA_SIZE bytes

    Raises:
        ValidationError: If a value does not fit its field
    """
    try:
        name = patch.name.encode("latin-1")
    except UnicodeEncodeError as e:
        raise ValidationError(f"Patch name {patch.name!r} is not 8-bit text") from e
    if len(name) > NAME_LENGTH:
        raise ValidationError(f"Patch name must be at most {NAME_LENGTH} characters, got {len(name)}")
    if len(patch.sources) != NUM_SOURCES:
        raise ValidationError(f"Single patch needs {NUM_SOURCES} sources, got {len(patch.sources)}")
    if len(patch.spare) != DATA_SIZE:
        raise ValidationError(f"Spare bits must cover {DATA_SIZE} bytes, got {len(patch.spare)}")
    validate_field_value(patch.checksum, 8, "checksum")

    # Start from the unassigned bits so nothing read from a dump is lost
    record = bytearray(b & ~mask & 0xFF for b, mask in zip(patch.spare, CLAIMED_MASKS))
    record[:NAME_LENGTH] = name.ljust(NAME_LENGTH)

    mute_bits = 0
    for i, muted in enumerate(patch.source_mute):
        if muted:
            mute_bits |= 1 << i
    common = {name: getattr(patch, name) for name in COMMON_WIDTHS}
    common["source_mute"] = mute_bits
    _pack(record, COMMON_FIELDS, _validated(common, COMMON_WIDTHS))
    for i, source in enumerate(patch.sources):
        values = {name: getattr(source, name) for name in SOURCE_WIDTHS}
        _pack(record, SOURCE_FIELDS, _validated(values, SOURCE_WIDTHS, f"S{i + 1} "), i)

    record[CHECKSUM_OFFSET] = patch.checksum
    return bytes(record)


def compute_checksum(patch: SinglePatch) -> int:
    """Checksum the synth expects for this patch's data."""
    return calculate_k1_checksum(encode_single(patch)[:CHECKSUM_OFFSET])


def is_checksum_valid(patch: SinglePatch) -> bool:
    return patch.checksum == compute_checksum(patch)


def with_checksum(patch: SinglePatch) -> SinglePatch:
    """Return a copy of the patch with a recomputed checksum."""
    return replace(patch, checksum=compute_checksum(patch))
