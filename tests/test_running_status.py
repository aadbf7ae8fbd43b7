"""Tests for running status encoding and decoding."""

import io
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from smfcodec.errors import MidiFormatError
from smfcodec.formats.smf.running_status import (
    RunningStatus,
    measure_events,
    read_event,
    write_event,
    write_events,
)
from smfcodec.models.events import (
    ControllerChangeEvent,
    EndOfTrackEvent,
    NoteBeginEvent,
    NoteEndEvent,
    SystemExclusiveEvent,
    SystemResetEvent,
    TextEvent,
    TimingClockEvent,
)


def encode_all(events):
    stream = io.BytesIO()
    write_events(stream, events)
    return stream.getvalue()


def decode_all(data):
    stream = io.BytesIO(data)
    context = RunningStatus()
    decoded = []
    while stream.tell() < len(data):
        decoded.append(read_event(stream, context))
    return decoded


class TestRunningStatusWrite:
    """Test cases for status byte compression on write."""

    def test_repeated_status_omitted(self):
        """Test that a repeated status byte is written once."""
        data = encode_all([NoteBeginEvent(0, 0, 60, 100), NoteBeginEvent(96, 0, 60, 0)])
        assert data == b"\x00\x90\x3c\x64\x60\x3c\x00"

    def test_channel_change_writes_status(self):
        """Test that the same command on another channel repeats the status."""
        data = encode_all([NoteBeginEvent(0, 0, 60, 100), NoteBeginEvent(0, 1, 60, 100)])
        assert data == b"\x00\x90\x3c\x64\x00\x91\x3c\x64"

    def test_command_change_writes_status(self):
        """Test that Note Off after Note On writes its status."""
        data = encode_all([NoteBeginEvent(0, 0, 60, 100), NoteEndEvent(0, 0, 60, 0)])
        assert data == b"\x00\x90\x3c\x64\x00\x80\x3c\x00"

    def test_meta_event_clears_running_status(self):
        """Test that a channel message after a meta event writes its status."""
        data = encode_all(
            [
                NoteBeginEvent(0, 0, 60, 100),
                TextEvent.from_text(0, "x"),
                NoteBeginEvent(0, 0, 62, 100),
            ]
        )
        assert data == b"\x00\x90\x3c\x64\x00\xff\x01\x01x\x00\x90\x3e\x64"

    def test_sysex_clears_running_status(self):
        """Test that SysEx always writes its lead byte and clears the status."""
        data = encode_all(
            [
                ControllerChangeEvent(0, 0, 7, 100),
                SystemExclusiveEvent(0, b"\x01"),
                ControllerChangeEvent(0, 0, 10, 64),
            ]
        )
        assert data == b"\x00\xb0\x07\x64\x00\xf0\x01\xf7\x00\xb0\x0a\x40"

    def test_context_tracks_last_status(self):
        """Test the context after writing a channel message."""
        context = RunningStatus()
        write_event(io.BytesIO(), ControllerChangeEvent(0, 5, 1, 1), context)
        assert context.previous_status == 0xB5
        write_event(io.BytesIO(), TimingClockEvent(0), context)
        assert context.previous_status is None

    def test_system_reset_rejected(self):
        """Test that System Reset cannot be written into a track."""
        stream = io.BytesIO()
        with pytest.raises(MidiFormatError):
            write_event(stream, SystemResetEvent(0), RunningStatus())
        assert stream.getvalue() == b""

    def test_non_event_rejected(self):
        """Test that arbitrary objects are not encoded."""
        with pytest.raises(TypeError):
            write_event(io.BytesIO(), "note", RunningStatus())

    def test_measure_matches_write(self):
        """Test that the counting pass agrees with the real output."""
        events = [
            NoteBeginEvent(0, 0, 60, 100),
            NoteBeginEvent(200, 0, 60, 0),
            TextEvent(0, b"y" * 150),
            EndOfTrackEvent(0),
        ]
        assert measure_events(events) == len(encode_all(events))


class TestRunningStatusRead:
    """Test cases for running status resolution on read."""

    def test_data_byte_reuses_status(self):
        """Test that a lead byte below 0x80 reuses the previous status."""
        events = decode_all(b"\x00\x90\x3c\x64\x60\x3c\x00")
        assert events == [NoteBeginEvent(0, 0, 60, 100), NoteBeginEvent(96, 0, 60, 0)]

    def test_single_data_byte_command(self):
        """Test running status with a one-data-byte command."""
        events = decode_all(b"\x00\xc1\x05\x00\x06")
        assert [e.program for e in events] == [5, 6]
        assert all(e.channel == 1 for e in events)

    def test_no_previous_status(self):
        """Test that a data byte at the start of a track is rejected."""
        with pytest.raises(MidiFormatError):
            decode_all(b"\x00\x3c\x64")

    def test_status_kept_across_meta_event(self):
        """Test that a meta event between channel messages keeps the status on read."""
        events = decode_all(b"\x00\x90\x3c\x64\x00\xff\x2f\x00\x00\x3e\x64")
        assert events[2] == NoteBeginEvent(0, 0, 62, 100)

    def test_roundtrip_mixed(self):
        """Test decode(encode(events)) over a mixed sequence."""
        events = [
            NoteBeginEvent(0, 0, 60, 100),
            NoteBeginEvent(0, 0, 64, 100),
            ControllerChangeEvent(10, 0, 64, 127),
            SystemExclusiveEvent(0, b"\x7e\x7f\x09\x01"),
            NoteEndEvent(86, 0, 60, 0),
            NoteEndEvent(0, 0, 64, 0),
            EndOfTrackEvent(0),
        ]
        assert decode_all(encode_all(events)) == events
