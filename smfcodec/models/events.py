"""
MIDI event data models.

Every event carries the delta time (ticks since the previous event in the
same track) plus the fields of its own kind. Events fall into three
families:

- Channel voice messages (0x80-0xE0 | channel): note on/off, key pressure,
  controller change, program change, channel pressure, pitch wheel.
- System common / real-time messages (0xF0-0xFE): System Exclusive, MTC
  quarter frame, song position, song select, and the payload-less messages.
- Meta events (0xFF, files only): a type byte, a VLQ length and a payload.
  Set Tempo, Time Signature, Key Signature and SMPTE Offset keep structured
  fields and rebuild their payload on demand; other types keep raw bytes.

Fields are validated whenever they are assigned, both in the constructor
and afterwards, so an event can never hold an out-of-range value:

    note = NoteBeginEvent(0, 0, 60, 100)
    note.velocity = 200          # raises ValidationError

Each event class knows how to read and write the bytes that follow its
status byte (``read_data`` / ``write_data``). The delta time, the status
byte and running status are handled by
``smfcodec.formats.smf.running_status``.
"""

import copy
from dataclasses import dataclass, fields
from typing import BinaryIO, Callable, ClassVar, Dict, List, Optional, Tuple, Type

from smfcodec.config import DEFAULT_OPTIONS, DEFAULT_TEMPO, DecodeOptions
from smfcodec.errors import MidiFormatError
from smfcodec.utils import validation as check
from smfcodec.utils.binary_io import (
    join_14bit,
    read_bytes,
    read_uint8,
    write_uint14_le,
    write_uint8,
)
from smfcodec.utils.vlq import read_vlq, write_vlq

SYSEX_END = 0xF7
META_STATUS = 0xFF


def _read_data_byte(stream: BinaryIO, lead_byte: Optional[int] = None) -> int:
    """Read one 7-bit data byte, or return the byte already consumed."""
    byte = read_uint8(stream) if lead_byte is None else lead_byte
    if byte & 0x80:
        raise MidiFormatError(f"Expected a data byte, got status byte 0x{byte:02X}")
    return byte


def _hex(data: bytes) -> str:
    return " ".join(f"{b:02X}" for b in data)


@dataclass
class Event:
    """
    Base class for all MIDI events.

    Attributes:
        delta_time: Ticks since the previous event in the track (0-0x0FFFFFFF)
    """

    delta_time: int

    # Field name -> assert_* function that validates and normalizes the value
    FIELD_CHECKS: ClassVar[Dict[str, Callable]] = {"delta_time": check.assert_time_delta}

    def __setattr__(self, name, value):
        validate = self.FIELD_CHECKS.get(name)
        if validate is not None:
            value = validate(value)
        super().__setattr__(name, value)

    @property
    def status_byte(self) -> int:
        """The status byte that introduces this event on the wire."""
        raise NotImplementedError

    def write_data(self, stream: BinaryIO) -> None:
        """Write the bytes that follow the status byte."""
        raise NotImplementedError

    def clone(self) -> "Event":
        """Return an independent deep copy of this event."""
        return copy.deepcopy(self)

    def _str_args(self) -> List[str]:
        return [str(getattr(self, f.name)) for f in fields(self)]

    def __str__(self) -> str:
        return f"{type(self).__name__}({', '.join(self._str_args())})"


# ---------------------------------------------------------------------------
# Channel voice messages
# ---------------------------------------------------------------------------


@dataclass
class ChannelEvent(Event):
    """
    Base class for channel voice messages.

    The status byte is ``COMMAND | channel``. Subclasses with a fixed layout
    list their data fields in ``SCHEMA``, one byte per field, in wire order.

    Attributes:
        delta_time: Ticks since the previous event
        channel: MIDI channel (0-15)
    """

    channel: int

    COMMAND: ClassVar[int] = 0x00
    SCHEMA: ClassVar[Tuple[str, ...]] = ()
    FIELD_CHECKS = {**Event.FIELD_CHECKS, "channel": check.assert_channel}

    @property
    def status_byte(self) -> int:
        return self.COMMAND | self.channel

    @classmethod
    def read_data(
        cls,
        stream: BinaryIO,
        delta_time: int,
        channel: int,
        lead_byte: Optional[int] = None,
    ) -> "ChannelEvent":
        """
        Read the data bytes of this event from a stream.

        Args:
            stream: Binary input stream positioned after the status byte
            delta_time: Delta time already read
            channel: Channel taken from the status byte
            lead_byte: First data byte, if it was already consumed while
                resolving running status

        Returns:
            The decoded event
        """
        values = []
        for _ in cls.SCHEMA:
            values.append(_read_data_byte(stream, lead_byte))
            lead_byte = None
        return cls(delta_time, channel, *values)

    def write_data(self, stream: BinaryIO) -> None:
        for name in self.SCHEMA:
            write_uint8(stream, getattr(self, name))


@dataclass
class NoteEndEvent(ChannelEvent):
    """
    Note Off (0x80).

    Attributes:
        note: MIDI note number (0-127, 60 = middle C)
        velocity: Release velocity (0-127)
    """

    note: int
    velocity: int

    COMMAND = 0x80
    SCHEMA = ("note", "velocity")
    FIELD_CHECKS = {
        **ChannelEvent.FIELD_CHECKS,
        "note": check.assert_note,
        "velocity": check.assert_velocity,
    }


@dataclass
class NoteBeginEvent(ChannelEvent):
    """
    Note On (0x90). A velocity of 0 is conventionally a note off.

    Attributes:
        note: MIDI note number (0-127, 60 = middle C)
        velocity: Attack velocity (0-127)
    """

    note: int
    velocity: int

    COMMAND = 0x90
    SCHEMA = ("note", "velocity")
    FIELD_CHECKS = {
        **ChannelEvent.FIELD_CHECKS,
        "note": check.assert_note,
        "velocity": check.assert_velocity,
    }


@dataclass
class PolyphonicKeyPressureEvent(ChannelEvent):
    """Polyphonic Key Pressure / aftertouch on a single note (0xA0)."""

    note: int
    pressure: int

    COMMAND = 0xA0
    SCHEMA = ("note", "pressure")
    FIELD_CHECKS = {
        **ChannelEvent.FIELD_CHECKS,
        "note": check.assert_note,
        "pressure": check.assert_velocity,
    }


@dataclass
class ControllerChangeEvent(ChannelEvent):
    """
    Control Change (0xB0).

    Attributes:
        controller: Controller number (0-127, e.g. 7 = volume, 64 = sustain)
        value: Controller value (0-127)
    """

    controller: int
    value: int

    COMMAND = 0xB0
    SCHEMA = ("controller", "value")
    FIELD_CHECKS = {
        **ChannelEvent.FIELD_CHECKS,
        "controller": check.assert_controller,
        "value": lambda value: check.assert_7bit(value, "Controller value"),
    }


@dataclass
class ProgramChangeEvent(ChannelEvent):
    """Program Change (0xC0): selects the instrument on a channel."""

    program: int

    COMMAND = 0xC0
    SCHEMA = ("program",)
    FIELD_CHECKS = {**ChannelEvent.FIELD_CHECKS, "program": check.assert_program}


@dataclass
class ChannelPressureEvent(ChannelEvent):
    """Channel Pressure / aftertouch for all notes on a channel (0xD0)."""

    pressure: int

    COMMAND = 0xD0
    SCHEMA = ("pressure",)
    FIELD_CHECKS = {
        **ChannelEvent.FIELD_CHECKS,
        "pressure": lambda value: check.assert_7bit(value, "Pressure"),
    }


@dataclass
class PitchWheelChangeEvent(ChannelEvent):
    """
    Pitch Wheel Change (0xE0).

    The 14-bit value is sent as two data bytes, low 7 bits first, so it has
    no fixed one-byte-per-field schema.

    Attributes:
        value: Bend amount (0-16383, 8192 = centre)
    """

    value: int = 8192

    COMMAND = 0xE0
    CENTER: ClassVar[int] = 8192
    FIELD_CHECKS = {**ChannelEvent.FIELD_CHECKS, "value": check.assert_pitch_bend}

    @classmethod
    def read_data(cls, stream, delta_time, channel, lead_byte=None):
        lsb = _read_data_byte(stream, lead_byte)
        msb = _read_data_byte(stream)
        return cls(delta_time, channel, join_14bit(lsb, msb))

    def write_data(self, stream: BinaryIO) -> None:
        write_uint14_le(stream, self.value)

    @property
    def lsb(self) -> int:
        return self.value & 0x7F

    @property
    def msb(self) -> int:
        return (self.value >> 7) & 0x7F

    @property
    def bend(self) -> int:
        """Signed offset from centre (-8192 to 8191)."""
        return self.value - self.CENTER


# Channel voice event types by command nibble
COMMAND_TYPES: Dict[int, Type[ChannelEvent]] = {
    cls.COMMAND: cls
    for cls in (
        NoteEndEvent,
        NoteBeginEvent,
        PolyphonicKeyPressureEvent,
        ControllerChangeEvent,
        ProgramChangeEvent,
        ChannelPressureEvent,
        PitchWheelChangeEvent,
    )
}


# ---------------------------------------------------------------------------
# System common / real-time messages
# ---------------------------------------------------------------------------


@dataclass
class SystemEvent(Event):
    """Base class for system messages. These carry no channel."""

    STATUS: ClassVar[int] = 0xF0

    @property
    def status_byte(self) -> int:
        return self.STATUS

    @classmethod
    def read_data(
        cls, stream: BinaryIO, delta_time: int, options: DecodeOptions = DEFAULT_OPTIONS
    ) -> "SystemEvent":
        raise NotImplementedError


@dataclass
class SystemExclusiveEvent(SystemEvent):
    """
    System Exclusive (0xF0).

    On the wire the payload follows the 0xF0 status byte and is terminated
    by 0xF7. The terminator is not part of ``data``.

    Attributes:
        data: Manufacturer-specific payload bytes
    """

    data: bytes = b""

    STATUS = 0xF0
    FIELD_CHECKS = {**Event.FIELD_CHECKS, "data": check.assert_sysex_data}

    @classmethod
    def read_data(cls, stream, delta_time, options=DEFAULT_OPTIONS):
        data = bytearray()
        byte = read_uint8(stream)
        while byte != SYSEX_END:
            if len(data) >= options.max_sysex_length:
                raise MidiFormatError(
                    f"System Exclusive message exceeds {options.max_sysex_length} bytes "
                    "without a 0xF7 terminator"
                )
            data.append(byte)
            byte = read_uint8(stream)
        return cls(delta_time, bytes(data))

    def write_data(self, stream: BinaryIO) -> None:
        stream.write(self.data)
        write_uint8(stream, SYSEX_END)

    def _str_args(self) -> List[str]:
        return [str(self.delta_time), f"{len(self.data)} bytes"]


@dataclass
class MidiTimeCodeQuarterFrameEvent(SystemEvent):
    """
    MIDI Time Code Quarter Frame (0xF1).

    Attributes:
        message_type: Which piece of the time code this is (0-7)
        values: The 4-bit value for that piece (0-15)
    """

    message_type: int
    values: int

    STATUS = 0xF1
    FIELD_CHECKS = {
        **Event.FIELD_CHECKS,
        "message_type": lambda value: check.assert_3bit(value, "MTC message type"),
        "values": lambda value: check.assert_4bit(value, "MTC values"),
    }

    @classmethod
    def read_data(cls, stream, delta_time, options=DEFAULT_OPTIONS):
        byte = _read_data_byte(stream)
        return cls(delta_time, (byte >> 4) & 0x07, byte & 0x0F)

    def write_data(self, stream: BinaryIO) -> None:
        write_uint8(stream, (self.message_type << 4) | self.values)

    def _str_args(self) -> List[str]:
        return [str(self.delta_time), f"type={self.message_type}", f"values={self.values}"]


@dataclass
class SongPositionPointerEvent(SystemEvent):
    """
    Song Position Pointer (0xF2).

    Attributes:
        position: Position in MIDI beats (sixteenth notes), 0-16383
    """

    position: int

    STATUS = 0xF2
    FIELD_CHECKS = {
        **Event.FIELD_CHECKS,
        "position": lambda value: check.assert_14bit(value, "Song position"),
    }

    @classmethod
    def read_data(cls, stream, delta_time, options=DEFAULT_OPTIONS):
        lsb = _read_data_byte(stream)
        msb = _read_data_byte(stream)
        return cls(delta_time, join_14bit(lsb, msb))

    def write_data(self, stream: BinaryIO) -> None:
        write_uint14_le(stream, self.position)

    def _str_args(self) -> List[str]:
        return [str(self.delta_time), f"position={self.position}"]


@dataclass
class SongSelectEvent(SystemEvent):
    """Song Select (0xF3)."""

    song_number: int

    STATUS = 0xF3
    FIELD_CHECKS = {
        **Event.FIELD_CHECKS,
        "song_number": lambda value: check.assert_7bit(value, "Song number"),
    }

    @classmethod
    def read_data(cls, stream, delta_time, options=DEFAULT_OPTIONS):
        return cls(delta_time, _read_data_byte(stream))

    def write_data(self, stream: BinaryIO) -> None:
        write_uint8(stream, self.song_number)

    def _str_args(self) -> List[str]:
        return [str(self.delta_time), f"song={self.song_number}"]


@dataclass
class SimpleSystemEvent(SystemEvent):
    """A system message made of its status byte alone."""

    @classmethod
    def read_data(cls, stream, delta_time, options=DEFAULT_OPTIONS):
        return cls(delta_time)

    def write_data(self, stream: BinaryIO) -> None:
        pass


@dataclass
class TuneRequestEvent(SimpleSystemEvent):
    """Tune Request (0xF6)."""

    STATUS = 0xF6


@dataclass
class TimingClockEvent(SimpleSystemEvent):
    """Timing Clock (0xF8), sent 24 times per quarter note."""

    STATUS = 0xF8


@dataclass
class StartEvent(SimpleSystemEvent):
    STATUS = 0xFA


@dataclass
class ContinueEvent(SimpleSystemEvent):
    STATUS = 0xFB


@dataclass
class StopEvent(SimpleSystemEvent):
    STATUS = 0xFC


@dataclass
class ActiveSensingEvent(SimpleSystemEvent):
    STATUS = 0xFE


@dataclass
class SystemResetEvent(SimpleSystemEvent):
    """
    System Reset (0xFF).

    Only meaningful on a live MIDI connection. Inside a file 0xFF introduces
    a meta event, so this event is never decoded from a file and cannot be
    written into a track.
    """

    STATUS = 0xFF


# System message types by status byte. 0xFF is absent: in a file it is the
# meta event prefix.
SYSTEM_TYPES: Dict[int, Type[SystemEvent]] = {
    cls.STATUS: cls
    for cls in (
        SystemExclusiveEvent,
        MidiTimeCodeQuarterFrameEvent,
        SongPositionPointerEvent,
        SongSelectEvent,
        TuneRequestEvent,
        TimingClockEvent,
        StartEvent,
        ContinueEvent,
        StopEvent,
        ActiveSensingEvent,
    )
}


# ---------------------------------------------------------------------------
# Meta events
# ---------------------------------------------------------------------------


@dataclass
class MetaEvent(Event):
    """
    Base class for meta events (0xFF).

    Wire layout: ``FF <meta_type> <VLQ length> <payload>``. Every meta event
    exposes ``meta_type`` and ``data`` (the payload); subclasses with
    structured fields compute ``data`` from those fields.
    """

    @property
    def status_byte(self) -> int:
        return META_STATUS

    @classmethod
    def from_payload(cls, delta_time: int, data: bytes) -> "MetaEvent":
        """Build an event of this type from its raw payload."""
        raise NotImplementedError

    @classmethod
    def read_data(
        cls, stream: BinaryIO, delta_time: int, options: DecodeOptions = DEFAULT_OPTIONS
    ) -> "MetaEvent":
        """
        Read the meta type, length and payload that follow a 0xFF byte.

        Registered types decode to their own class. Unregistered types
        become UnknownMetaEvent, or are rejected when ``options.strict_meta``
        is set.
        """
        meta_type = read_uint8(stream)
        length = read_vlq(stream)
        data = read_bytes(stream, length)

        meta_class = META_TYPES.get(meta_type)
        if meta_class is not None:
            return meta_class.from_payload(delta_time, data)

        if options.strict_meta:
            raise MidiFormatError(f"Meta event 0x{meta_type:02X} not recognized")
        return UnknownMetaEvent(delta_time, meta_type, data)

    def write_data(self, stream: BinaryIO) -> None:
        data = self.data
        write_uint8(stream, self.meta_type)
        write_vlq(stream, len(data))
        stream.write(data)


@dataclass
class UnknownMetaEvent(MetaEvent):
    """
    Meta event of an unregistered type; the payload is kept verbatim.

    Attributes:
        meta_type: Meta type byte (0-255)
        data: Raw payload
    """

    meta_type: int
    data: bytes = b""

    FIELD_CHECKS = {
        **Event.FIELD_CHECKS,
        "meta_type": lambda value: check.assert_uint8(value, "Meta type"),
        "data": check.assert_data_bytes,
    }

    def _str_args(self) -> List[str]:
        args = [str(self.delta_time), f"0x{self.meta_type:02X}"]
        if self.data:
            args.append(_hex(self.data))
        return args


@dataclass
class DataMetaEvent(MetaEvent):
    """Registered meta event whose payload is kept as raw bytes."""

    data: bytes = b""

    meta_type: ClassVar[int]
    FIELD_CHECKS = {**Event.FIELD_CHECKS, "data": check.assert_data_bytes}

    @classmethod
    def from_payload(cls, delta_time, data):
        return cls(delta_time, data)

    def _str_args(self) -> List[str]:
        args = [str(self.delta_time)]
        if self.data:
            args.append(_hex(self.data))
        return args


@dataclass
class SequenceNumberEvent(DataMetaEvent):
    meta_type: ClassVar[int] = 0x00


@dataclass
class TextMetaEvent(DataMetaEvent):
    """Meta event whose payload is text. Text is read and written as latin-1."""

    ENCODING: ClassVar[str] = "latin-1"

    @property
    def text(self) -> str:
        return self.data.decode(self.ENCODING)

    @text.setter
    def text(self, value: str) -> None:
        self.data = value.encode(self.ENCODING)

    @classmethod
    def from_text(cls, delta_time: int, text: str) -> "TextMetaEvent":
        return cls(delta_time, text.encode(cls.ENCODING))

    def _str_args(self) -> List[str]:
        return [str(self.delta_time), repr(self.text)]


@dataclass
class TextEvent(TextMetaEvent):
    meta_type: ClassVar[int] = 0x01


@dataclass
class CopyrightEvent(TextMetaEvent):
    meta_type: ClassVar[int] = 0x02


@dataclass
class SequenceNameEvent(TextMetaEvent):
    """Sequence name (first track of format 0/1) or track name (0x03)."""

    meta_type: ClassVar[int] = 0x03


@dataclass
class InstrumentNameEvent(TextMetaEvent):
    meta_type: ClassVar[int] = 0x04


@dataclass
class LyricEvent(TextMetaEvent):
    meta_type: ClassVar[int] = 0x05


@dataclass
class MarkerEvent(TextMetaEvent):
    meta_type: ClassVar[int] = 0x06


@dataclass
class CuePointEvent(TextMetaEvent):
    meta_type: ClassVar[int] = 0x07


@dataclass
class ProgramNameEvent(TextMetaEvent):
    meta_type: ClassVar[int] = 0x08


@dataclass
class DeviceNameEvent(TextMetaEvent):
    meta_type: ClassVar[int] = 0x09


@dataclass
class ChannelPrefixEvent(DataMetaEvent):
    """MIDI Channel Prefix (0x20): ties following meta events to a channel."""

    meta_type: ClassVar[int] = 0x20


@dataclass
class PortEvent(DataMetaEvent):
    """MIDI Port (0x21)."""

    meta_type: ClassVar[int] = 0x21


@dataclass
class EndOfTrackEvent(DataMetaEvent):
    """End of Track (0x2F). Every track should finish with one."""

    meta_type: ClassVar[int] = 0x2F


@dataclass
class SequencerSpecificEvent(DataMetaEvent):
    meta_type: ClassVar[int] = 0x7F


def _check_payload_length(name: str, data: bytes, expected: int) -> None:
    if len(data) not in (0, expected):
        raise MidiFormatError(
            f"{name} payload must be {expected} bytes (or empty), got {len(data)}"
        )


@dataclass
class SetTempoEvent(MetaEvent):
    """
    Set Tempo (0x51).

    Payload: 3 bytes, big-endian microseconds per quarter note. An empty
    payload means the default tempo (500000, i.e. 120 BPM).

    Attributes:
        tempo: Microseconds per quarter note (1-0xFFFFFF)
    """

    tempo: int = DEFAULT_TEMPO

    meta_type: ClassVar[int] = 0x51
    FIELD_CHECKS = {**Event.FIELD_CHECKS, "tempo": check.assert_tempo}

    @property
    def data(self) -> bytes:
        return self.tempo.to_bytes(3, "big")

    @classmethod
    def from_payload(cls, delta_time, data):
        _check_payload_length("Set Tempo", data, 3)
        if not data:
            return cls(delta_time)
        return cls(delta_time, int.from_bytes(data, "big"))

    def get_tempo(self) -> int:
        """Tempo in microseconds per quarter note."""
        return self.tempo

    def set_tempo(self, microseconds_per_quarter: int) -> None:
        self.tempo = microseconds_per_quarter

    @property
    def bpm(self) -> float:
        """Tempo in beats (quarter notes) per minute."""
        return 60000000 / self.tempo

    def set_bpm(self, bpm: float) -> None:
        """
        Set the tempo from beats per minute.

        The microsecond value is truncated, not rounded, so e.g. 140 BPM
        becomes 428571 µs.
        """
        self.tempo = int(60000000 / check.assert_bpm(bpm))


@dataclass
class SmpteOffsetEvent(MetaEvent):
    """
    SMPTE Offset (0x54): the SMPTE time at which the track starts.

    Payload: hours, minutes, seconds, frames, fractional frames (one byte
    each). An empty payload means a zero offset.
    """

    hours: int = 0
    minutes: int = 0
    seconds: int = 0
    frames: int = 0
    fractional_frames: int = 0

    meta_type: ClassVar[int] = 0x54
    FIELD_CHECKS = {
        **Event.FIELD_CHECKS,
        "hours": check.assert_smpte_hours,
        "minutes": check.assert_smpte_minutes,
        "seconds": check.assert_smpte_seconds,
        "frames": check.assert_smpte_frames,
        "fractional_frames": check.assert_smpte_fractional_frames,
    }

    @property
    def data(self) -> bytes:
        return bytes(
            [self.hours, self.minutes, self.seconds, self.frames, self.fractional_frames]
        )

    @classmethod
    def from_payload(cls, delta_time, data):
        _check_payload_length("SMPTE Offset", data, 5)
        return cls(delta_time, *data)

    def get_offset(self) -> Dict[str, int]:
        return {
            "hours": self.hours,
            "minutes": self.minutes,
            "seconds": self.seconds,
            "frames": self.frames,
            "fractional_frames": self.fractional_frames,
        }

    def set_offset(
        self, hours: int, minutes: int, seconds: int, frames: int, fractional_frames: int = 0
    ) -> None:
        self.hours = hours
        self.minutes = minutes
        self.seconds = seconds
        self.frames = frames
        self.fractional_frames = fractional_frames


@dataclass
class TimeSignatureEvent(MetaEvent):
    """
    Time Signature (0x58).

    Payload: numerator, log2(denominator), MIDI clocks per metronome click,
    notated 32nd notes per quarter note. The denominator is stored as the
    real note value (8 for 7/8); the exponent byte (3) is only computed when
    the payload is built. An empty payload means 4/4, 24, 8.

    Attributes:
        numerator: Beats per bar (1-255)
        denominator: Beat unit, a power of two (1-256)
        clocks_per_click: MIDI clocks per metronome click (0-255)
        thirty_seconds_per_quarter: 32nd notes per quarter note (0-255)
    """

    numerator: int = 4
    denominator: int = 4
    clocks_per_click: int = 24
    thirty_seconds_per_quarter: int = 8

    meta_type: ClassVar[int] = 0x58
    FIELD_CHECKS = {
        **Event.FIELD_CHECKS,
        "numerator": check.assert_numerator,
        "denominator": check.assert_denominator,
        "clocks_per_click": lambda value: check.assert_uint8(value, "Clocks per click"),
        "thirty_seconds_per_quarter": lambda value: check.assert_uint8(
            value, "32nd notes per quarter"
        ),
    }

    @property
    def denominator_power(self) -> int:
        """log2 of the denominator, as stored on the wire."""
        return self.denominator.bit_length() - 1

    @property
    def data(self) -> bytes:
        return bytes(
            [
                self.numerator,
                self.denominator_power,
                self.clocks_per_click,
                self.thirty_seconds_per_quarter,
            ]
        )

    @classmethod
    def from_payload(cls, delta_time, data):
        _check_payload_length("Time Signature", data, 4)
        if not data:
            return cls(delta_time)
        if data[1] > 8:
            raise MidiFormatError(f"Time signature denominator exponent {data[1]} exceeds 8")
        return cls(delta_time, data[0], 1 << data[1], data[2], data[3])

    def get_time_signature(self) -> Dict[str, int]:
        return {
            "numerator": self.numerator,
            "denominator": self.denominator,
            "clocks_per_metronome_click": self.clocks_per_click,
            "thirty_seconds_per_quarter": self.thirty_seconds_per_quarter,
        }

    def set_time_signature(
        self,
        numerator: int,
        denominator: int,
        clocks_per_click: int = 24,
        thirty_seconds_per_quarter: int = 8,
    ) -> None:
        self.numerator = numerator
        self.denominator = denominator
        self.clocks_per_click = clocks_per_click
        self.thirty_seconds_per_quarter = thirty_seconds_per_quarter


@dataclass
class KeySignatureEvent(MetaEvent):
    """
    Key Signature (0x59).

    Payload: sharps/flats as a two's complement byte (-3 -> 0xFD) and a
    major (0) / minor (1) flag. An empty payload means C major.

    Attributes:
        sharps_flats: -7 (seven flats) to 7 (seven sharps)
        is_minor: True for a minor key
    """

    sharps_flats: int = 0
    is_minor: bool = False

    meta_type: ClassVar[int] = 0x59
    FIELD_CHECKS = {
        **Event.FIELD_CHECKS,
        "sharps_flats": check.assert_sharps_flats,
        "is_minor": check.assert_is_minor,
    }

    @property
    def data(self) -> bytes:
        return bytes([self.sharps_flats & 0xFF, 1 if self.is_minor else 0])

    @classmethod
    def from_payload(cls, delta_time, data):
        _check_payload_length("Key Signature", data, 2)
        if not data:
            return cls(delta_time)
        sharps_flats = data[0] - 256 if data[0] > 127 else data[0]
        if data[1] not in (0, 1):
            raise MidiFormatError(f"Key signature mode byte must be 0 or 1, got {data[1]}")
        return cls(delta_time, sharps_flats, data[1] == 1)

    def get_key_signature(self) -> Dict[str, object]:
        return {"sharps_flats": self.sharps_flats, "is_minor": self.is_minor}

    def set_key_signature(self, sharps_flats: int, is_minor: bool = False) -> None:
        self.sharps_flats = sharps_flats
        self.is_minor = is_minor


# Registered meta event types by meta type byte
META_TYPES: Dict[int, Type[MetaEvent]] = {
    cls.meta_type: cls
    for cls in (
        SequenceNumberEvent,
        TextEvent,
        CopyrightEvent,
        SequenceNameEvent,
        InstrumentNameEvent,
        LyricEvent,
        MarkerEvent,
        CuePointEvent,
        ProgramNameEvent,
        DeviceNameEvent,
        ChannelPrefixEvent,
        PortEvent,
        EndOfTrackEvent,
        SetTempoEvent,
        SmpteOffsetEvent,
        TimeSignatureEvent,
        KeySignatureEvent,
        SequencerSpecificEvent,
    )
}
