"""
Fixed-width integer I/O over binary streams.

All multi-byte integers in a Standard MIDI File are big-endian. The only
exception is the 14-bit pair used by Pitch Wheel and Song Position Pointer,
which is sent low 7 bits first:

    value = 0x2000 (8192, pitch wheel centre)
    LSB   = value & 0x7F        -> 0x00
    MSB   = (value >> 7) & 0x7F -> 0x40

Reads must return exactly the requested number of bytes; a short read raises
UnexpectedEndOfData. Writes raise ValueError when the value does not fit the
target width, which always indicates a bug in the caller.
"""

import struct
from typing import BinaryIO, Tuple

from smfcodec.errors import UnexpectedEndOfData


def read_bytes(stream: BinaryIO, count: int) -> bytes:
    """
    Read exactly ``count`` bytes from a stream.

    Raises:
        UnexpectedEndOfData: If fewer than ``count`` bytes are available
    """
    data = stream.read(count)
    if data is None or len(data) != count:
        raise UnexpectedEndOfData(count, len(data) if data else 0)
    return data


def read_uint8(stream: BinaryIO) -> int:
    """Read one unsigned byte."""
    return read_bytes(stream, 1)[0]


def read_uint16(stream: BinaryIO) -> int:
    """Read a big-endian 16-bit unsigned integer."""
    return struct.unpack(">H", read_bytes(stream, 2))[0]


def read_uint32(stream: BinaryIO) -> int:
    """Read a big-endian 32-bit unsigned integer."""
    return struct.unpack(">I", read_bytes(stream, 4))[0]


def _check_width(value: int, bits: int) -> None:
    limit = (1 << bits) - 1
    if not isinstance(value, int) or not 0 <= value <= limit:
        raise ValueError(f"Value {value!r} does not fit in {bits} bits (0-{limit})")


def write_uint8(stream: BinaryIO, value: int) -> None:
    """Write one unsigned byte."""
    _check_width(value, 8)
    stream.write(bytes([value]))


def write_uint16(stream: BinaryIO, value: int) -> None:
    """Write a big-endian 16-bit unsigned integer."""
    _check_width(value, 16)
    stream.write(struct.pack(">H", value))


def write_uint32(stream: BinaryIO, value: int) -> None:
    """Write a big-endian 32-bit unsigned integer."""
    _check_width(value, 32)
    stream.write(struct.pack(">I", value))


def split_14bit(value: int) -> Tuple[int, int]:
    """
    Split a 14-bit value into its (lsb, msb) 7-bit halves.

    Args:
        value: Value in 0-16383

    Returns:
        Tuple of (low 7 bits, high 7 bits)
    """
    _check_width(value, 14)
    return value & 0x7F, (value >> 7) & 0x7F


def join_14bit(lsb: int, msb: int) -> int:
    """Combine two 7-bit halves (low first) into a 14-bit value."""
    return ((msb & 0x7F) << 7) | (lsb & 0x7F)


def write_uint14_le(stream: BinaryIO, value: int) -> None:
    """Write a 14-bit value as two data bytes, low 7 bits first."""
    lsb, msb = split_14bit(value)
    stream.write(bytes([lsb, msb]))


class CountingWriter:
    """
    File-like sink that counts the bytes written to it and discards them.

    Running the real serializer against a CountingWriter gives the exact
    encoded length without buffering the output.

    Example:
        counter = CountingWriter()
        write_uint32(counter, 0)
        assert counter.count == 4
    """

    def __init__(self):
        self.count = 0

    def write(self, data: bytes) -> int:
        self.count += len(data)
        return len(data)
