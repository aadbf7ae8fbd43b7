"""
Chunk framing and the MThd header chunk.

Every SMF chunk starts with a 4-byte ASCII tag and a 4-byte big-endian
length. The header chunk always has length 6:

    Offset  Size  Content
    0x00    4     "MThd"
    0x04    4     6
    0x08    2     Format (0, 1 or 2)
    0x0A    2     Number of tracks
    0x0C    2     Division (see models.division)
"""

from dataclasses import dataclass
from typing import BinaryIO, Iterator, Tuple

from smfcodec.config import HEADER_LENGTH, HEADER_TAG
from smfcodec.errors import MidiFormatError
from smfcodec.models.division import Division, division_from_raw
from smfcodec.utils.binary_io import (
    read_bytes,
    read_uint16,
    read_uint32,
    write_uint16,
    write_uint32,
)


@dataclass
class HeaderChunk:
    """
    MThd contents as stored on disk.

    The division is kept raw; ``division`` decodes it on access, so a header
    with an unusable division can still be inspected.
    """

    format: int
    track_count: int
    raw_division: int

    @property
    def division(self) -> Division:
        """
        Decoded time division.

        Raises:
            ValidationError: If the raw value holds an unknown SMPTE frame rate
        """
        return division_from_raw(self.raw_division)


def read_chunk_header(stream: BinaryIO, expected_tag: bytes) -> int:
    """
    Read a chunk tag and length, checking the tag.

    Returns:
        The chunk body length

    Raises:
        MidiFormatError: If the tag does not match
    """
    tag = read_bytes(stream, 4)
    if tag != expected_tag:
        raise MidiFormatError(
            f"Expected {expected_tag.decode('ascii')!r} chunk, got {tag!r}"
        )
    return read_uint32(stream)


def write_chunk_header(stream: BinaryIO, tag: bytes, length: int) -> None:
    stream.write(tag)
    write_uint32(stream, length)


def read_header(stream: BinaryIO) -> HeaderChunk:
    """
    Read the MThd chunk.

    Raises:
        MidiFormatError: If the tag is not "MThd" or the length is not 6
        UnexpectedEndOfData: If the stream ends inside the header
    """
    length = read_chunk_header(stream, HEADER_TAG)
    if length != HEADER_LENGTH:
        raise MidiFormatError(f"Invalid MIDI header length: {length} (expected {HEADER_LENGTH})")

    file_format = read_uint16(stream)
    track_count = read_uint16(stream)
    raw_division = read_uint16(stream)

    return HeaderChunk(
        format=file_format,
        track_count=track_count,
        raw_division=raw_division,
    )


def write_header(stream: BinaryIO, file_format: int, track_count: int, division: Division) -> None:
    write_chunk_header(stream, HEADER_TAG, HEADER_LENGTH)
    write_uint16(stream, file_format)
    write_uint16(stream, track_count)
    write_uint16(stream, division.to_raw())


def iter_chunks(data: bytes) -> Iterator[Tuple[int, bytes, int]]:
    """
    Walk the chunk framing of raw file data without decoding the bodies.

    Yields:
        Tuples of (offset, tag, body length). A chunk whose declared length
        runs past the end of the data is still yielded; iteration stops
        after it.
    """
    offset = 0
    while offset + 8 <= len(data):
        tag = data[offset : offset + 4]
        length = int.from_bytes(data[offset + 4 : offset + 8], "big")
        yield offset, tag, length
        offset += 8 + length
