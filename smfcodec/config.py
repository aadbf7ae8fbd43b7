"""
Codec constants and decode options.
"""

from dataclasses import dataclass

# Chunk tags
HEADER_TAG = b"MThd"
TRACK_TAG = b"MTrk"
HEADER_LENGTH = 6

# Defaults for freshly built sequences
DEFAULT_FORMAT = 1
DEFAULT_TICKS_PER_QUARTER = 96
DEFAULT_TEMPO = 500000  # 120 BPM

# Largest System Exclusive payload accepted (1 MiB)
SYSEX_SAFETY_CAP = 1024 * 1024

# Largest value a 4-byte VLQ can hold
VLQ_MAX = 0x0FFFFFFF


@dataclass(frozen=True)
class DecodeOptions:
    """
    Options controlling how strictly a file is decoded.

    Attributes:
        strict_meta: Reject meta events whose type byte is not registered
            instead of keeping them as UnknownMetaEvent
        max_sysex_length: Maximum System Exclusive payload size in bytes,
            at most SYSEX_SAFETY_CAP. Lowering it rejects large payloads
            while decoding.
    """

    strict_meta: bool = False
    max_sysex_length: int = SYSEX_SAFETY_CAP

    def __post_init__(self):
        if not 1 <= self.max_sysex_length <= SYSEX_SAFETY_CAP:
            raise ValueError(
                f"max_sysex_length must be 1-{SYSEX_SAFETY_CAP}, got {self.max_sysex_length}"
            )


DEFAULT_OPTIONS = DecodeOptions()
