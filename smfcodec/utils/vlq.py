"""
MIDI variable-length quantity (VLQ) encoding/decoding utilities.

A VLQ stores an integer 7 bits per byte, most significant group first.
Every byte except the last has its high bit (bit 7) set as a continuation
flag. Standard MIDI Files never use more than 4 bytes, so the largest
encodable value is 0x0FFFFFFF.

Encoding tiers:
    0x00000000 - 0x0000007F  ->  1 byte
    0x00000080 - 0x00003FFF  ->  2 bytes
    0x00004000 - 0x001FFFFF  ->  3 bytes
    0x00200000 - 0x0FFFFFFF  ->  4 bytes

Example:
    Input:  0x2000
    Groups: 0b1000000 0b0000000
    Output: [0xC0, 0x00]
"""

from typing import BinaryIO, Tuple, Union

from smfcodec.config import VLQ_MAX
from smfcodec.errors import MidiFormatError
from smfcodec.utils.binary_io import read_uint8

MAX_VLQ_BYTES = 4


def encode_vlq(value: int) -> bytes:
    """
    Encode a non-negative integer as a VLQ.

    Args:
        value: Integer in 0-0x0FFFFFFF

    Returns:
        1 to 4 encoded bytes

    Raises:
        ValueError: If value is negative, not an integer, or too large

    Example:
        >>> encode_vlq(0x80)
        b'\\x81\\x00'
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"VLQ value must be an integer, got {value!r}")
    if not 0 <= value <= VLQ_MAX:
        raise ValueError(f"VLQ value must be 0-{VLQ_MAX}, got {value}")

    # Build groups least significant first, then reverse
    groups = [value & 0x7F]
    value >>= 7
    while value:
        groups.append((value & 0x7F) | 0x80)
        value >>= 7

    return bytes(reversed(groups))


def decode_vlq(data: Union[bytes, bytearray], offset: int = 0) -> Tuple[int, int]:
    """
    Decode a VLQ from a byte buffer.

    Args:
        data: Buffer holding the encoded value
        offset: Position of the first VLQ byte

    Returns:
        Tuple of (value, number of bytes consumed)

    Raises:
        MidiFormatError: If the buffer ends mid-value or the VLQ is longer
            than 4 bytes
    """
    value = 0
    for i in range(MAX_VLQ_BYTES):
        if offset + i >= len(data):
            raise MidiFormatError("Truncated variable-length quantity")
        byte = data[offset + i]
        value = (value << 7) | (byte & 0x7F)
        if not byte & 0x80:
            return value, i + 1

    raise MidiFormatError(f"Variable-length quantity longer than {MAX_VLQ_BYTES} bytes")


def read_vlq(stream: BinaryIO) -> int:
    """
    Read a VLQ from a stream.

    Raises:
        UnexpectedEndOfData: If the stream ends mid-value
        MidiFormatError: If the VLQ is longer than 4 bytes
    """
    value = 0
    for _ in range(MAX_VLQ_BYTES):
        byte = read_uint8(stream)
        value = (value << 7) | (byte & 0x7F)
        if not byte & 0x80:
            return value

    raise MidiFormatError(f"Variable-length quantity longer than {MAX_VLQ_BYTES} bytes")


def write_vlq(stream: BinaryIO, value: int) -> None:
    """Write a VLQ to a stream."""
    stream.write(encode_vlq(value))


def vlq_length(value: int) -> int:
    """Number of bytes the VLQ encoding of ``value`` occupies."""
    return len(encode_vlq(value))
