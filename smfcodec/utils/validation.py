"""
Range validation for MIDI-constrained values.

Every ``validate_*`` function is a pure predicate returning ``(True, None)``
on success or ``(False, message)`` on failure, where the message names the
field, the allowed range and the value seen.

Every ``assert_*`` function raises ValidationError on failure and otherwise
returns the value normalized to its canonical type (e.g. ``60.0`` -> ``60``),
so constructors can validate and store in one step.

Example:
    ok, err = validate_channel(16)   # (False, "Channel must be 0-15, got 16")
    note = assert_note(60)           # 60
    assert_note(128)                 # raises ValidationError
"""

import numbers
from typing import Optional, Tuple, Union

from smfcodec.config import SYSEX_SAFETY_CAP, VLQ_MAX

Result = Tuple[bool, Optional[str]]

# SMPTE frame rates allowed in the division field
SMPTE_FRAME_RATES = (24, 25, 29.97, 30)


class ValidationError(ValueError):
    """Raised when a MIDI field value is out of range or of the wrong type."""

    pass


def _validate_integer_range(value, name: str, minimum: int, maximum: int) -> Result:
    """Check that value is a number, has no fractional part, and is in range."""
    if isinstance(value, bool) or not isinstance(value, (numbers.Integral, float)):
        return False, f"{name} must be a number, got {type(value).__name__}"
    if isinstance(value, float) and not value.is_integer():
        return False, f"{name} must be an integer, got {value:g}"
    if not minimum <= value <= maximum:
        if minimum < 0:
            return False, f"{name} must be between {minimum} and {maximum}, got {int(value)}"
        return False, f"{name} must be {minimum}-{maximum}, got {int(value)}"
    return True, None


def _require(result: Result, value):
    ok, message = result
    if not ok:
        raise ValidationError(message)
    return int(value)


# ---------------------------------------------------------------------------
# Predicates
# ---------------------------------------------------------------------------


def validate_time_delta(value) -> Result:
    """Delta time in ticks; must fit a 4-byte VLQ (0-268435455)."""
    return _validate_integer_range(value, "Time delta", 0, VLQ_MAX)


def validate_channel(value) -> Result:
    """MIDI channel (0-15)."""
    return _validate_integer_range(value, "Channel", 0, 15)


def validate_note(value) -> Result:
    """MIDI note number (0-127, 60 = middle C)."""
    return _validate_integer_range(value, "Note", 0, 127)


def validate_velocity(value) -> Result:
    """Note velocity or key pressure (0-127)."""
    return _validate_integer_range(value, "Velocity", 0, 127)


def validate_controller(value) -> Result:
    """Controller number (0-127)."""
    return _validate_integer_range(value, "Controller", 0, 127)


def validate_program(value) -> Result:
    """Program/patch number (0-127)."""
    return _validate_integer_range(value, "Program", 0, 127)


def validate_pitch_bend(value) -> Result:
    """Pitch bend (0-16383, 8192 = centre)."""
    return _validate_integer_range(value, "Pitch bend", 0, 16383)


def validate_14bit(value, name: str = "Value") -> Result:
    return _validate_integer_range(value, name, 0, 16383)


def validate_7bit(value, name: str = "Value") -> Result:
    return _validate_integer_range(value, name, 0, 127)


def validate_4bit(value, name: str = "Value") -> Result:
    return _validate_integer_range(value, name, 0, 15)


def validate_3bit(value, name: str = "Value") -> Result:
    return _validate_integer_range(value, name, 0, 7)


def validate_uint8(value, name: str = "Value") -> Result:
    return _validate_integer_range(value, name, 0, 255)


def validate_tempo(value) -> Result:
    """Tempo in microseconds per quarter note (1-0xFFFFFF)."""
    return _validate_integer_range(value, "Tempo", 1, 0xFFFFFF)


def validate_bpm(value) -> Result:
    """Tempo in beats per minute; any positive number."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return False, f"BPM must be a number, got {type(value).__name__}"
    if not value > 0:
        return False, f"BPM must be positive, got {value}"
    return True, None


def validate_numerator(value) -> Result:
    """Time signature numerator (1-255)."""
    return _validate_integer_range(value, "Time signature numerator", 1, 255)


def validate_denominator(value) -> Result:
    """Time signature denominator; a power of two from 1 to 256."""
    ok, message = _validate_integer_range(value, "Time signature denominator", 1, 256)
    if not ok:
        return ok, message
    value = int(value)
    if value & (value - 1):
        return False, f"Time signature denominator must be a power of two, got {value}"
    return True, None


def validate_sharps_flats(value) -> Result:
    """Key signature accidentals (-7 = 7 flats, +7 = 7 sharps)."""
    return _validate_integer_range(value, "Sharps/flats", -7, 7)


def validate_smpte_hours(value) -> Result:
    return _validate_integer_range(value, "SMPTE hours", 0, 23)


def validate_smpte_minutes(value) -> Result:
    return _validate_integer_range(value, "SMPTE minutes", 0, 59)


def validate_smpte_seconds(value) -> Result:
    return _validate_integer_range(value, "SMPTE seconds", 0, 59)


def validate_smpte_frames(value) -> Result:
    return _validate_integer_range(value, "SMPTE frames", 0, 29)


def validate_smpte_fractional_frames(value) -> Result:
    return _validate_integer_range(value, "SMPTE fractional frames", 0, 99)


def validate_ticks_per_quarter(value) -> Result:
    """Musical division: ticks per quarter note (1-0x7FFF)."""
    return _validate_integer_range(value, "Ticks per quarter note", 1, 0x7FFF)


def validate_ticks_per_frame(value) -> Result:
    """SMPTE division sub-frame resolution (1-255)."""
    return _validate_integer_range(value, "Ticks per frame", 1, 255)


def validate_frame_rate(value) -> Result:
    """SMPTE frame rate: 24, 25, 29.97 (drop frame) or 30."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return False, f"SMPTE frame rate must be a number, got {type(value).__name__}"
    if value not in SMPTE_FRAME_RATES:
        return False, f"Invalid SMPTE frame rate: {value:g} (must be 24, 25, 29.97 or 30)"
    return True, None


def validate_data_bytes(value, name: str = "Data", max_length: Optional[int] = None) -> Result:
    """Raw payload: bytes-like, or a sequence of ints in 0-255."""
    if isinstance(value, str):
        return False, f"{name} must be bytes, got str"
    try:
        data = bytes(value)
    except (TypeError, ValueError):
        return False, f"{name} must be a sequence of byte values 0-255"
    if max_length is not None and len(data) > max_length:
        return False, f"{name} must be at most {max_length} bytes, got {len(data)}"
    return True, None


# ---------------------------------------------------------------------------
# Assertions
# ---------------------------------------------------------------------------


def assert_time_delta(value) -> int:
    return _require(validate_time_delta(value), value)


def assert_channel(value) -> int:
    return _require(validate_channel(value), value)


def assert_note(value) -> int:
    return _require(validate_note(value), value)


def assert_velocity(value) -> int:
    return _require(validate_velocity(value), value)


def assert_controller(value) -> int:
    return _require(validate_controller(value), value)


def assert_program(value) -> int:
    return _require(validate_program(value), value)


def assert_pitch_bend(value) -> int:
    return _require(validate_pitch_bend(value), value)


def assert_14bit(value, name: str = "Value") -> int:
    return _require(validate_14bit(value, name), value)


def assert_7bit(value, name: str = "Value") -> int:
    return _require(validate_7bit(value, name), value)


def assert_4bit(value, name: str = "Value") -> int:
    return _require(validate_4bit(value, name), value)


def assert_3bit(value, name: str = "Value") -> int:
    return _require(validate_3bit(value, name), value)


def assert_uint8(value, name: str = "Value") -> int:
    return _require(validate_uint8(value, name), value)


def assert_tempo(value) -> int:
    return _require(validate_tempo(value), value)


def assert_bpm(value) -> float:
    ok, message = validate_bpm(value)
    if not ok:
        raise ValidationError(message)
    return value


def assert_numerator(value) -> int:
    return _require(validate_numerator(value), value)


def assert_denominator(value) -> int:
    return _require(validate_denominator(value), value)


def assert_sharps_flats(value) -> int:
    return _require(validate_sharps_flats(value), value)


def assert_smpte_hours(value) -> int:
    return _require(validate_smpte_hours(value), value)


def assert_smpte_minutes(value) -> int:
    return _require(validate_smpte_minutes(value), value)


def assert_smpte_seconds(value) -> int:
    return _require(validate_smpte_seconds(value), value)


def assert_smpte_frames(value) -> int:
    return _require(validate_smpte_frames(value), value)


def assert_smpte_fractional_frames(value) -> int:
    return _require(validate_smpte_fractional_frames(value), value)


def assert_ticks_per_quarter(value) -> int:
    return _require(validate_ticks_per_quarter(value), value)


def assert_ticks_per_frame(value) -> int:
    return _require(validate_ticks_per_frame(value), value)


def assert_frame_rate(value) -> Union[int, float]:
    ok, message = validate_frame_rate(value)
    if not ok:
        raise ValidationError(message)
    # 29.97 stays a float, whole rates are stored as int
    return int(value) if float(value).is_integer() else value


def assert_data_bytes(value, name: str = "Data", max_length: Optional[int] = None) -> bytes:
    ok, message = validate_data_bytes(value, name, max_length)
    if not ok:
        raise ValidationError(message)
    return bytes(value)


def assert_sysex_data(value) -> bytes:
    """System Exclusive payload: bytes 0-255, no 0xF7 terminator, at most 1 MiB."""
    data = assert_data_bytes(value, "System Exclusive data", SYSEX_SAFETY_CAP)
    if 0xF7 in data:
        raise ValidationError("System Exclusive data must not contain the 0xF7 terminator")
    return data


def assert_is_minor(value) -> bool:
    if value not in (True, False, 0, 1):
        raise ValidationError(f"Is-minor flag must be a boolean, got {value!r}")
    return bool(value)
