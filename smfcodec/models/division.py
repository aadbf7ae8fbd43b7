"""
Time division of a MIDI file.

The header's 16-bit division field has two encodings:

- Musical time (top bit clear): ticks per quarter note, 1-0x7FFF.
- SMPTE time (top bit set): the 16-bit two's complement of
  ``(frame_rate_code << 8) | ticks_per_frame``.

Both are modelled as small immutable value types; the raw 16-bit value
is produced and parsed only by ``to_raw`` / ``division_from_raw``, at the
header boundary.

Example (SMPTE, 25 fps, 40 ticks per frame):
    -(25 << 8 | 40) = -6440  ->  raw 0xE6D8
"""

from dataclasses import dataclass
from typing import Dict, Union

from smfcodec.config import DEFAULT_TICKS_PER_QUARTER
from smfcodec.utils import validation as check

# Frame rate <-> frame rate code. 29.97 fps (drop frame) is coded as 29.
FRAME_RATE_TO_CODE: Dict[float, int] = {24: 24, 25: 25, 29.97: 29, 30: 30}
CODE_TO_FRAME_RATE: Dict[int, float] = {24: 24, 25: 25, 29: 29.97, 30: 30}


@dataclass(frozen=True)
class TicksPerQuarter:
    """
    Musical time division.

    Attributes:
        ticks: Ticks per quarter note (1-0x7FFF)
    """

    ticks: int = DEFAULT_TICKS_PER_QUARTER

    def __post_init__(self):
        object.__setattr__(self, "ticks", check.assert_ticks_per_quarter(self.ticks))

    def to_raw(self) -> int:
        return self.ticks

    def __str__(self) -> str:
        return f"{self.ticks} TPQN"


@dataclass(frozen=True)
class SmpteDivision:
    """
    SMPTE time division.

    Attributes:
        frame_rate: 24, 25, 29.97 (drop frame) or 30
        ticks_per_frame: Sub-frame resolution (1-255)
    """

    frame_rate: Union[int, float]
    ticks_per_frame: int

    def __post_init__(self):
        object.__setattr__(self, "frame_rate", check.assert_frame_rate(self.frame_rate))
        object.__setattr__(
            self, "ticks_per_frame", check.assert_ticks_per_frame(self.ticks_per_frame)
        )

    @property
    def frame_rate_code(self) -> int:
        return FRAME_RATE_TO_CODE[self.frame_rate]

    @property
    def encoded(self) -> int:
        """Signed 16-bit encoding (always negative)."""
        return -((self.frame_rate_code << 8) | self.ticks_per_frame)

    def to_raw(self) -> int:
        """Unsigned 16-bit value as stored in the header."""
        return self.encoded + 0x10000

    def __str__(self) -> str:
        return f"SMPTE({self.frame_rate:g} fps, {self.ticks_per_frame} tpf)"


Division = Union[TicksPerQuarter, SmpteDivision]


def division_from_raw(raw: int) -> Division:
    """
    Decode the header's 16-bit division field.

    An unknown SMPTE frame rate code is passed through as the frame rate,
    which SmpteDivision then rejects with a ValidationError.
    """
    if not raw & 0x8000:
        return TicksPerQuarter(raw)

    magnitude = 0x10000 - raw
    code = magnitude >> 8
    ticks_per_frame = magnitude & 0xFF
    return SmpteDivision(CODE_TO_FRAME_RATE.get(code, code), ticks_per_frame)


def coerce_division(value) -> Division:
    """Accept a Division or a plain ticks-per-quarter integer."""
    if isinstance(value, (TicksPerQuarter, SmpteDivision)):
        return value
    return TicksPerQuarter(value)
