"""
Single patch data model for the Kawai K1.

A Single is the K1's basic sound: four sources (S1-S4), each playing a
PCM wave through its own envelope, plus common vibrato, auto bend and
controller settings.

Values are stored as they appear in the record. Parameters with a
bipolar range (for example fine tuning -50 to +50) are stored with
their offset, so 50 means 0 for those.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Tuple

# Record size in bytes, checksum included
DATA_SIZE = 88
NAME_LENGTH = 10
NUM_SOURCES = 4


def _label(enum_cls, value: int) -> str:
    try:
        return enum_cls(value).name
    except ValueError:
        return str(value)


class PolyMode(IntEnum):
    POLY1 = 0
    POLY2 = 1
    SOLO1 = 2
    SOLO2 = 3


class WheelAssign(IntEnum):
    VIBRATO = 0
    LFO = 1
    DCF = 2


class VibratoShape(IntEnum):
    TRIANGLE = 0
    SAW = 1
    SQUARE = 2
    RANDOM = 3


@dataclass(frozen=True)
class Source:
    """
    Parameters of one sound source.

    Offset values (value 50 = 0): fine, pressure_level, pressure_freq.
    coarse is offset by 24 (-24 to +24 semitones).
    """

    # Pitch
    wave_select: int = 0  # 0-255, wave number 1-256
    coarse: int = 24
    fine: int = 50
    key_track: bool = True
    fixed_key: int = 60  # used when key_track is off
    pressure_freq: int = 50
    vibrato_autobend: bool = False

    # Amplitude
    level: int = 100
    velocity_curve: int = 0  # 0-7, curves 1-8
    velocity_level: int = 50
    pressure_level: int = 50
    ks_level: int = 50

    # Envelope
    envelope_attack: int = 0
    envelope_decay: int = 50
    envelope_sustain: int = 100
    envelope_release: int = 50
    velocity_time: int = 50
    ks_time: int = 50


@dataclass(frozen=True)
class SinglePatch:
    """
    A K1 Single patch.

    Attributes:
        name: Patch name (10 characters)
        volume: Patch volume (0-99)
        sources: Parameters for S1-S4
        checksum: Checksum byte as read from the record
        spare: Record bits not assigned to any parameter, one byte per
            record position; zero when all bits are assigned
    """

    name: str = "NewSound  "
    volume: int = 99

    # Source control
    source_mute: Tuple[bool, bool, bool, bool] = (False, False, False, False)
    am_s1_s2: bool = False
    am_s3_s4: bool = False
    poly_mode: int = PolyMode.POLY1

    # Vibrato
    vibrato_shape: int = VibratoShape.TRIANGLE
    vibrato_speed: int = 50
    vibrato_depth: int = 0
    vibrato_pressure_depth: int = 50

    # Controllers
    pitch_bend: int = 2
    wheel_assign: int = WheelAssign.VIBRATO
    wheel_depth: int = 50

    # Auto bend
    autobend_time: int = 0
    autobend_depth: int = 50
    autobend_ks_time: int = 50
    autobend_velocity_depth: int = 50

    sources: Tuple[Source, Source, Source, Source] = field(
        default_factory=lambda: tuple(Source() for _ in range(NUM_SOURCES))
    )

    checksum: int = 0
    spare: bytes = field(default=bytes(DATA_SIZE), repr=False)

    @property
    def display_name(self) -> str:
        return self.name.rstrip()

    @property
    def active_sources(self) -> int:
        return sum(1 for muted in self.source_mute if not muted)

    def __str__(self) -> str:
        lines = [
            f"{self.display_name}",
            f"volume = {self.volume}, poly mode = {_label(PolyMode, self.poly_mode)}, "
            f"sources active = {self.active_sources}",
            f"vibrato: shape = {_label(VibratoShape, self.vibrato_shape)}, speed = {self.vibrato_speed}, "
            f"depth = {self.vibrato_depth}, prs>dep = {self.vibrato_pressure_depth - 50}",
            f"auto bend: time = {self.autobend_time}, depth = {self.autobend_depth - 50}, "
            f"ks>time = {self.autobend_ks_time - 50}, vel>dep = {self.autobend_velocity_depth - 50}",
            f"pitch bend = {self.pitch_bend}, wheel assign = {_label(WheelAssign, self.wheel_assign)}, "
            f"wheel depth = {self.wheel_depth - 50}",
        ]
        for i, source in enumerate(self.sources, start=1):
            lines.append(
                f"S{i}: wave = {source.wave_select + 1}, coarse = {source.coarse - 24}, "
                f"fine = {source.fine - 50}, level = {source.level}, "
                f"env = {source.envelope_attack}/{source.envelope_decay}/"
                f"{source.envelope_sustain}/{source.envelope_release}"
            )
        return "\n".join(lines)
