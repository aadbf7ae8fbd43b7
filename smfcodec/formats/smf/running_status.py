"""
Event stream reading and writing with running status.

Every event in a track is written as:

    <delta time VLQ> [status byte] <data bytes>

Running status lets a channel voice message omit its status byte when it
repeats the status of the previous channel voice message:

    00 90 3C 64    Note On ch0, note 60, vel 100
    60 3C 00       Note On ch0, note 60, vel 0 (status 0x90 omitted)

So when reading, a lead byte below 0x80 is the first data byte of a message
that reuses the last status seen. System Exclusive, system and meta events
always carry their lead byte; on write they also clear the running status,
so the next channel message repeats its status byte.

The running status context is per track. A new one is created for every
track, for both reading and writing.
"""

from dataclasses import dataclass
from typing import BinaryIO, Iterable, Optional

from smfcodec.config import DEFAULT_OPTIONS, DecodeOptions
from smfcodec.errors import MidiFormatError
from smfcodec.models.events import (
    COMMAND_TYPES,
    META_STATUS,
    SYSTEM_TYPES,
    ChannelEvent,
    Event,
    MetaEvent,
    SystemEvent,
    SystemResetEvent,
)
from smfcodec.utils.binary_io import CountingWriter, read_uint8, write_uint8
from smfcodec.utils.vlq import read_vlq, write_vlq


@dataclass
class RunningStatus:
    """
    Running status state for one track.

    Attributes:
        previous_status: Status byte of the last channel voice message, or
            None when the next channel message must carry its status byte
    """

    previous_status: Optional[int] = None

    def reset(self) -> None:
        self.previous_status = None


def read_event(
    stream: BinaryIO,
    context: RunningStatus,
    options: DecodeOptions = DEFAULT_OPTIONS,
) -> Event:
    """
    Read one event (delta time included) from a stream.

    Args:
        stream: Binary input stream positioned at a delta time
        context: Running status state for the current track
        options: Decoding options

    Returns:
        The decoded event

    Raises:
        MidiFormatError: On a data byte with no running status, an unknown
            system status byte, or a malformed payload
        UnexpectedEndOfData: If the stream ends mid-event
    """
    delta_time = read_vlq(stream)
    lead_byte = read_uint8(stream)

    if lead_byte == META_STATUS:
        return MetaEvent.read_data(stream, delta_time, options)

    if lead_byte >= 0xF0:
        system_class = SYSTEM_TYPES.get(lead_byte)
        if system_class is None:
            raise MidiFormatError(f"Unknown system message status byte 0x{lead_byte:02X}")
        return system_class.read_data(stream, delta_time, options)

    if lead_byte & 0x80:
        status = lead_byte
        context.previous_status = status
        first_data_byte = None
    else:
        if context.previous_status is None:
            raise MidiFormatError(
                f"Data byte 0x{lead_byte:02X} found with no running status in effect"
            )
        status = context.previous_status
        first_data_byte = lead_byte

    event_class = COMMAND_TYPES.get(status & 0xF0)
    if event_class is None:
        raise MidiFormatError(f"Unknown channel command 0x{status & 0xF0:02X}")
    return event_class.read_data(stream, delta_time, status & 0x0F, first_data_byte)


def write_event(stream: BinaryIO, event: Event, context: RunningStatus) -> None:
    """
    Write one event (delta time included) to a stream.

    The status byte of a channel voice message is omitted when it equals
    the running status.

    Raises:
        MidiFormatError: If the event is a System Reset, whose 0xFF status
            would be read back as a meta event
        TypeError: If the object is not an encodable event
    """
    if isinstance(event, SystemResetEvent):
        raise MidiFormatError("System Reset (0xFF) cannot be stored in a MIDI file track")
    if not isinstance(event, (ChannelEvent, SystemEvent, MetaEvent)):
        raise TypeError(f"Cannot encode {type(event).__name__} as a MIDI event")

    write_vlq(stream, event.delta_time)

    status = event.status_byte
    if isinstance(event, ChannelEvent):
        if status != context.previous_status:
            write_uint8(stream, status)
            context.previous_status = status
    else:
        write_uint8(stream, status)
        context.reset()

    event.write_data(stream)


def write_events(stream: BinaryIO, events: Iterable[Event]) -> None:
    """Write a sequence of events with a fresh running status context."""
    context = RunningStatus()
    for event in events:
        write_event(stream, event, context)


def measure_events(events: Iterable[Event]) -> int:
    """Number of bytes ``write_events`` would produce for these events."""
    counter = CountingWriter()
    write_events(counter, events)
    return counter.count
