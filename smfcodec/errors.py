"""
Exception types raised by the SMF codec.

All of them derive from ValueError so callers that only care about
"bad input" can catch a single type.
"""


class MidiFormatError(ValueError):
    """Raised when a byte stream is not a well-formed Standard MIDI File."""

    pass


class UnexpectedEndOfData(MidiFormatError):
    """Raised when the stream ends before a fixed-size read completes."""

    def __init__(self, wanted: int, got: int):
        self.wanted = wanted
        self.got = got
        super().__init__(f"Unexpected end of MIDI data (wanted {wanted} bytes, got {got})")


class InvalidFormatError(ValueError):
    """Raised when a MidiFile's format number or track count is invalid for an operation."""

    pass
