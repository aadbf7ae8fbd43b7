"""Tests for variable-length quantity encoding."""

import io
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from smfcodec.errors import MidiFormatError, UnexpectedEndOfData
from smfcodec.utils.vlq import (
    decode_vlq,
    encode_vlq,
    read_vlq,
    vlq_length,
    write_vlq,
)


class TestEncodeVLQ:
    """Test cases for VLQ encoding."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            (0x00, b"\x00"),
            (0x40, b"\x40"),
            (0x7F, b"\x7f"),
            (0x80, b"\x81\x00"),
            (0x2000, b"\xc0\x00"),
            (0x3FFF, b"\xff\x7f"),
            (0x4000, b"\x81\x80\x00"),
            (0x1FFFFF, b"\xff\xff\x7f"),
            (0x200000, b"\x81\x80\x80\x00"),
            (0x8000000, b"\xc0\x80\x80\x00"),
            (0x0FFFFFFF, b"\xff\xff\xff\x7f"),
        ],
    )
    def test_known_encodings(self, value, expected):
        """Test the encodings from the SMF reference table."""
        assert encode_vlq(value) == expected

    def test_length_tiers(self):
        """Test encoded length at each tier boundary."""
        assert vlq_length(0x7F) == 1
        assert vlq_length(0x80) == 2
        assert vlq_length(0x3FFF) == 2
        assert vlq_length(0x4000) == 3
        assert vlq_length(0x200000) == 4

    def test_continuation_bits(self):
        """Test that all bytes but the last have bit 7 set."""
        encoded = encode_vlq(0x0FFFFFFF)
        assert all(b & 0x80 for b in encoded[:-1])
        assert not encoded[-1] & 0x80

    def test_too_large(self):
        """Test that values beyond 28 bits are rejected."""
        with pytest.raises(ValueError):
            encode_vlq(0x10000000)

    def test_negative(self):
        """Test that negative values are rejected."""
        with pytest.raises(ValueError):
            encode_vlq(-1)

    def test_non_integer(self):
        """Test that floats and bools are rejected."""
        with pytest.raises(ValueError):
            encode_vlq(1.5)
        with pytest.raises(ValueError):
            encode_vlq(True)


class TestDecodeVLQ:
    """Test cases for VLQ decoding."""

    def test_decode_with_offset(self):
        """Test decoding from the middle of a buffer."""
        data = b"\xff\x81\x00\x7f"
        assert decode_vlq(data, 1) == (0x80, 2)

    def test_decode_max(self):
        """Test decoding the largest 4-byte value."""
        assert decode_vlq(b"\xff\xff\xff\x7f") == (0x0FFFFFFF, 4)

    def test_decode_truncated(self):
        """Test that a buffer ending mid-value is rejected."""
        with pytest.raises(MidiFormatError):
            decode_vlq(b"\x81\x80")

    def test_decode_too_long(self):
        """Test that a fifth continuation byte is rejected."""
        with pytest.raises(MidiFormatError):
            decode_vlq(b"\x81\x80\x80\x80\x00")

    def test_roundtrip_boundaries(self):
        """Test decode(encode(v)) at every tier boundary."""
        for value in (0, 0x7F, 0x80, 0x3FFF, 0x4000, 0x1FFFFF, 0x200000, 0x0FFFFFFF):
            encoded = encode_vlq(value)
            assert decode_vlq(encoded) == (value, len(encoded))


class TestStreamVLQ:
    """Test cases for stream VLQ I/O."""

    def test_read_leaves_stream_after_value(self):
        """Test that reading consumes exactly the VLQ bytes."""
        stream = io.BytesIO(b"\x81\x00\x90")
        assert read_vlq(stream) == 0x80
        assert stream.read() == b"\x90"

    def test_read_truncated(self):
        """Test reading from a stream that ends mid-value."""
        with pytest.raises(UnexpectedEndOfData):
            read_vlq(io.BytesIO(b"\x81"))

    def test_read_too_long(self):
        """Test reading a VLQ longer than 4 bytes."""
        with pytest.raises(MidiFormatError):
            read_vlq(io.BytesIO(b"\xff\xff\xff\xff\x7f"))

    def test_write(self):
        """Test writing to a stream."""
        stream = io.BytesIO()
        write_vlq(stream, 0x2000)
        assert stream.getvalue() == b"\xc0\x00"
