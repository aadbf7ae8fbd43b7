"""
MTrk chunk encoding and decoding.

Chunk layout:
    Offset  Size  Content
    0x00    4     "MTrk"
    0x04    4     Body length in bytes (big-endian)
    0x08    N     Events (see running_status)

The body length is computed by running the event serializer against a
byte counter first, so the header can be written before the body.
Reading consumes exactly the declared number of bytes.
"""

import io
import logging
from typing import BinaryIO

from smfcodec.config import DEFAULT_OPTIONS, TRACK_TAG, DecodeOptions
from smfcodec.errors import MidiFormatError
from smfcodec.formats.smf.chunks import read_chunk_header, write_chunk_header
from smfcodec.formats.smf.running_status import (
    RunningStatus,
    measure_events,
    read_event,
    write_events,
)
from smfcodec.models.track import Track

logger = logging.getLogger(__name__)


def read_track(stream: BinaryIO, options: DecodeOptions = DEFAULT_OPTIONS) -> Track:
    """
    Read one MTrk chunk.

    Args:
        stream: Binary input stream positioned at the chunk tag
        options: Decoding options

    Returns:
        The decoded track

    Raises:
        MidiFormatError: If the tag is not "MTrk" or the events overrun the
            declared chunk length
        UnexpectedEndOfData: If the stream ends inside the chunk
    """
    length = read_chunk_header(stream, TRACK_TAG)
    start = stream.tell()
    end = start + length

    track = Track()
    context = RunningStatus()
    while stream.tell() < end:
        track.events.append(read_event(stream, context, options))

    position = stream.tell()
    if position != end:
        raise MidiFormatError(
            f"Track events overran the chunk length (read {position - start} bytes, "
            f"chunk declares {length})"
        )

    logger.debug("Read track: %d events, %d bytes", len(track.events), length)
    return track


def write_track(stream: BinaryIO, track: Track) -> None:
    """
    Write one MTrk chunk.

    The events are serialized once into a buffer, and the buffer length is
    written as the chunk length.
    """
    body = io.BytesIO()
    write_events(body, track.events)
    data = body.getvalue()

    write_chunk_header(stream, TRACK_TAG, len(data))
    stream.write(data)


def measure_track(track: Track) -> int:
    """Total chunk size in bytes (8-byte header plus body)."""
    return 8 + measure_events(track.events)
