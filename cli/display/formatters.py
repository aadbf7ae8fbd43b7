"""
Display formatting utilities for CLI output.

Provides bar graphics and one-line descriptions of MIDI events.
"""

from typing import Tuple

from smfcodec.models import events as ev
from smfcodec.utils.gm_instruments import get_controller_name, get_instrument_name

NOTE_NAMES = ("C", "C#", "D", "D#", "E", "F", "F#", "G", "G#", "A", "A#", "B")

KEY_NAMES_MAJOR = ("Cb", "Gb", "Db", "Ab", "Eb", "Bb", "F", "C", "G", "D", "A", "E", "B", "F#", "C#")
KEY_NAMES_MINOR = ("Ab", "Eb", "Bb", "F", "C", "G", "D", "A", "E", "B", "F#", "C#", "G#", "D#", "A#")


def value_bar(
    value: int,
    max_value: int = 127,
    width: int = 10,
    filled_char: str = "█",
    empty_char: str = "░",
    show_value: bool = True,
) -> str:
    """
    Create a text-based bar graphic.

    Args:
        value: Current value
        max_value: Maximum value (default 127 for MIDI)
        width: Bar width in characters
        filled_char: Character for filled portion
        empty_char: Character for empty portion
        show_value: Show numeric value

    Returns:
        Formatted string like "100 [███████░░░]"
    """
    if max_value <= 0:
        max_value = 1

    clamped = max(0, min(value, max_value))
    fill_count = int((clamped / max_value) * width)
    bar = filled_char * fill_count + empty_char * (width - fill_count)

    if show_value:
        return f"{value:3d} [{bar}]"
    return f"[{bar}]"


def note_name(note: int) -> str:
    """
    Name a MIDI note number, with middle C (60) as C4.

    Returns:
        "C4", "F#2", ...
    """
    return f"{NOTE_NAMES[note % 12]}{note // 12 - 1}"


def format_tempo(tempo: int) -> str:
    """
    Format a tempo in microseconds per quarter note.

    Returns:
        "120.00 BPM (500000 µs/qn)"
    """
    return f"{60000000 / tempo:.2f} BPM ({tempo} µs/qn)"


def format_time_signature(numerator: int, denominator: int, power: int) -> str:
    """
    Format a time signature with its encoded denominator byte.

    Returns:
        "7/8 (raw: 0x03)"
    """
    return f"{numerator}/{denominator} (raw: 0x{power:02X})"


def format_key_signature(sharps_flats: int, is_minor: bool) -> str:
    """
    Format a key signature.

    Returns:
        "Eb major (3 flats)", "A minor", ...
    """
    names = KEY_NAMES_MINOR if is_minor else KEY_NAMES_MAJOR
    key = f"{names[sharps_flats + 7]} {'minor' if is_minor else 'major'}"
    if sharps_flats > 0:
        return f"{key} ({sharps_flats} sharp{'s' if sharps_flats > 1 else ''})"
    if sharps_flats < 0:
        return f"{key} ({-sharps_flats} flat{'s' if sharps_flats < -1 else ''})"
    return key


def short_hex(data: bytes, limit: int = 16) -> str:
    """Hex bytes, truncated with an ellipsis after ``limit`` bytes."""
    text = " ".join(f"{b:02X}" for b in data[:limit])
    if len(data) > limit:
        text += f" … (+{len(data) - limit})"
    return text


def describe_event(event: ev.Event) -> Tuple[str, str, str]:
    """
    Describe an event for tabular display.

    Returns:
        Tuple of (kind, channel, details). Channel is 1-based for display,
        empty for events without a channel.
    """
    kind = type(event).__name__.replace("Event", "")
    channel = ""

    if isinstance(event, ev.ChannelEvent):
        channel = str(event.channel + 1)

    if isinstance(event, (ev.NoteBeginEvent, ev.NoteEndEvent)):
        details = f"{note_name(event.note):4s} vel {value_bar(event.velocity, width=8)}"
    elif isinstance(event, ev.PolyphonicKeyPressureEvent):
        details = f"{note_name(event.note):4s} pressure {event.pressure}"
    elif isinstance(event, ev.ControllerChangeEvent):
        name = get_controller_name(event.controller) or f"CC {event.controller}"
        details = f"{name} = {event.value}"
    elif isinstance(event, ev.ProgramChangeEvent):
        details = f"{event.program:3d} {get_instrument_name(event.program, event.channel)}"
    elif isinstance(event, ev.ChannelPressureEvent):
        details = f"pressure {event.pressure}"
    elif isinstance(event, ev.PitchWheelChangeEvent):
        details = f"{event.value} ({event.bend:+d})"
    elif isinstance(event, ev.SetTempoEvent):
        details = format_tempo(event.tempo)
    elif isinstance(event, ev.TimeSignatureEvent):
        details = format_time_signature(
            event.numerator, event.denominator, event.denominator_power
        )
    elif isinstance(event, ev.KeySignatureEvent):
        details = format_key_signature(event.sharps_flats, event.is_minor)
    elif isinstance(event, ev.SmpteOffsetEvent):
        details = (
            f"{event.hours:02d}:{event.minutes:02d}:{event.seconds:02d}:"
            f"{event.frames:02d}.{event.fractional_frames:02d}"
        )
    elif isinstance(event, ev.TextMetaEvent):
        details = repr(event.text)
    elif isinstance(event, ev.UnknownMetaEvent):
        details = f"type 0x{event.meta_type:02X}: {short_hex(event.data)}"
    elif isinstance(event, (ev.DataMetaEvent, ev.SystemExclusiveEvent)):
        details = short_hex(event.data) if event.data else ""
    elif isinstance(event, ev.MidiTimeCodeQuarterFrameEvent):
        details = f"type {event.message_type} value {event.values}"
    elif isinstance(event, ev.SongPositionPointerEvent):
        details = f"beat {event.position}"
    elif isinstance(event, ev.SongSelectEvent):
        details = f"song {event.song_number}"
    else:
        details = ""

    return kind, channel, details
