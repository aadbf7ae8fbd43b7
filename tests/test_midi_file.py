"""Tests for the MidiFile model, time division and whole-file encoding."""

import io
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from smfcodec.errors import InvalidFormatError, MidiFormatError, UnexpectedEndOfData
from smfcodec.models.division import SmpteDivision, TicksPerQuarter, division_from_raw
from smfcodec.models.events import (
    EndOfTrackEvent,
    NoteBeginEvent,
    NoteEndEvent,
    SetTempoEvent,
    TimeSignatureEvent,
)
from smfcodec.models.midi_file import MidiFile
from smfcodec.models.track import Track
from smfcodec.utils.validation import ValidationError


def simple_track(note=60):
    return Track(
        [
            NoteBeginEvent(0, 0, note, 100),
            NoteEndEvent(96, 0, note, 0),
            EndOfTrackEvent(0),
        ]
    )


class TestDivision:
    """Test cases for the header division field."""

    def test_ticks_per_quarter_raw(self):
        """Test that musical time is stored as-is."""
        assert TicksPerQuarter(480).to_raw() == 480
        assert division_from_raw(96) == TicksPerQuarter(96)

    def test_ticks_per_quarter_range(self):
        """Test the 1-0x7FFF tick range."""
        with pytest.raises(ValidationError):
            TicksPerQuarter(0)
        with pytest.raises(ValidationError):
            TicksPerQuarter(0x8000)

    def test_smpte_25_40(self):
        """Test the raw encoding of 25 fps / 40 ticks per frame."""
        division = SmpteDivision(25, 40)
        assert division.encoded == -6440
        assert division.to_raw() == 0xE6D8
        assert division.to_raw() & 0x8000

    def test_smpte_decode(self):
        """Test decoding 0xE6D8."""
        assert division_from_raw(0xE6D8) == SmpteDivision(25, 40)

    def test_smpte_drop_frame(self):
        """Test that 29.97 fps uses frame rate code 29."""
        division = SmpteDivision(29.97, 80)
        assert division.frame_rate_code == 29
        assert division_from_raw(division.to_raw()) == division

    def test_smpte_invalid_rate(self):
        """Test that only the four SMPTE frame rates are accepted."""
        with pytest.raises(ValidationError):
            SmpteDivision(60, 10)

    def test_smpte_unknown_code_on_decode(self):
        """Test that an unknown frame rate code in a header is rejected."""
        raw = -((31 << 8) | 10) + 0x10000
        with pytest.raises(ValidationError):
            division_from_raw(raw)

    def test_str(self):
        """Test the display forms."""
        assert str(TicksPerQuarter(96)) == "96 TPQN"
        assert str(SmpteDivision(25, 40)) == "SMPTE(25 fps, 40 tpf)"
        assert str(SmpteDivision(29.97, 4)) == "SMPTE(29.97 fps, 4 tpf)"


class TestMidiFileModel:
    """Test cases for MidiFile accessors."""

    def test_defaults(self):
        """Test a freshly built file."""
        song = MidiFile()
        assert song.format == 1
        assert song.division == TicksPerQuarter(96)
        assert song.tracks == []

    def test_int_division_coerced(self):
        """Test that a plain int becomes ticks per quarter note."""
        song = MidiFile(division=480)
        assert song.division == TicksPerQuarter(480)
        assert song.ticks_per_quarter == 480
        assert not song.is_smpte()

    def test_smpte_timing(self):
        """Test switching to SMPTE timing and reading it back."""
        song = MidiFile()
        assert song.get_smpte_timing() == (None, None)
        song.set_smpte_timing(25, 40)
        assert song.is_smpte()
        assert song.ticks_per_quarter is None
        assert song.get_smpte_timing() == (25, 40)

        song.ticks_per_quarter = 120
        assert song.division == TicksPerQuarter(120)

    def test_format_predicates(self):
        """Test is_format_0/1/2 and format names."""
        song = MidiFile(format=2)
        assert song.is_format_2()
        assert not song.is_format_0()
        assert "Asynchronous" in song.format_name
        assert "Unknown" in MidiFile(format=5).format_name

    def test_validate_format(self):
        """Test the format / track count rules."""
        assert MidiFile(format=0, tracks=[simple_track()]).validate_format() == (True, None)
        assert MidiFile(format=1, tracks=[]).validate_format() == (True, None)

        ok, message = MidiFile(format=0, tracks=[simple_track(), simple_track()]).validate_format()
        assert not ok
        assert "exactly 1 track" in message

        ok, message = MidiFile(format=3).validate_format()
        assert not ok
        assert "Invalid format number" in message

    @pytest.mark.parametrize("file_format", [1.0, "1", True, None])
    def test_validate_format_rejects_non_integers(self, file_format):
        """Test that a format number must be a real int."""
        song = MidiFile(format=file_format, tracks=[simple_track()])
        ok, message = song.validate_format()
        assert not ok
        assert message == f"Format must be an integer, got {file_format!r}"
        with pytest.raises(InvalidFormatError, match="Format must be an integer"):
            song.to_bytes()

    def test_get_pattern(self):
        """Test 0-based pattern access in format 2."""
        first, second = simple_track(60), simple_track(62)
        song = MidiFile(format=2, tracks=[first, second])
        assert song.get_pattern(0) is first
        assert song.get_pattern(1) is second
        assert song.get_pattern(2) is None
        assert song.pattern_count == 2

    def test_get_pattern_requires_format_2(self):
        """Test that patterns only exist in format 2 files."""
        with pytest.raises(InvalidFormatError):
            MidiFile(format=1, tracks=[simple_track()]).get_pattern(0)

    def test_clone_is_deep(self, sample_midi_file):
        """Test that a clone shares no tracks or events."""
        copy = sample_midi_file.clone()
        assert copy == sample_midi_file
        copy.tracks[0].events[1].tempo = 400000
        assert sample_midi_file.tracks[0].events[1].tempo == 500000

    def test_event_count(self, sample_midi_file):
        """Test the total event count."""
        assert sample_midi_file.event_count == 5 + 11

    def test_str(self):
        """Test the string rendering."""
        song = MidiFile(format=0, tracks=[Track([EndOfTrackEvent(0)])])
        assert str(song) == "MidiFile{format=0, division=96 TPQN, tracks={Track{events={EndOfTrackEvent(0)}}}}"


class TestEncodeFile:
    """Test cases for writing whole files."""

    def test_minimal_file_bytes(self, minimal_smf_bytes):
        """Test the exact bytes of a small format 0 file."""
        song = MidiFile(
            format=0,
            division=96,
            tracks=[Track([NoteBeginEvent(0, 0, 60, 100), NoteBeginEvent(96, 0, 60, 0), EndOfTrackEvent(0)])],
        )
        assert song.to_bytes() == minimal_smf_bytes

    def test_header_layout(self, sample_midi_file):
        """Test the MThd fields of an encoded format 1 file."""
        data = sample_midi_file.to_bytes()
        assert data[:4] == b"MThd"
        assert data[4:8] == b"\x00\x00\x00\x06"
        assert data[8:10] == b"\x00\x01"
        assert data[10:12] == b"\x00\x02"
        assert data[12:14] == b"\x00\x60"
        assert data[14:18] == b"MTrk"

    def test_format_0_with_two_tracks(self):
        """Test that an invalid format is rejected before anything is written."""
        song = MidiFile(format=0, tracks=[simple_track(), simple_track()])
        stream = io.BytesIO()
        with pytest.raises(InvalidFormatError):
            song.write(stream)
        assert stream.getvalue() == b""

    def test_smpte_header(self):
        """Test the encoded division bytes for SMPTE 25/40."""
        song = MidiFile(format=0, division=SmpteDivision(25, 40), tracks=[simple_track()])
        data = song.to_bytes()
        assert data[12:14] == b"\xe6\xd8"

    def test_write_to_path(self, tmp_path, sample_midi_file):
        """Test writing to disk and reading back."""
        path = tmp_path / "out.mid"
        sample_midi_file.write(path)
        assert MidiFile.read(path) == sample_midi_file


class TestDecodeFile:
    """Test cases for reading whole files."""

    def test_minimal_file(self, minimal_smf_bytes):
        """Test decoding a hand-assembled file with running status."""
        song = MidiFile.from_bytes(minimal_smf_bytes)
        assert song.format == 0
        assert song.division == TicksPerQuarter(96)
        assert len(song.tracks) == 1
        assert song.tracks[0].events == [
            NoteBeginEvent(0, 0, 60, 100),
            NoteBeginEvent(96, 0, 60, 0),
            EndOfTrackEvent(0),
        ]

    def test_read_from_stream(self, minimal_smf_bytes):
        """Test reading from an open binary stream."""
        song = MidiFile.read(io.BytesIO(minimal_smf_bytes))
        assert len(song.tracks[0]) == 3

    def test_read_from_path(self, sample_midi_path, sample_midi_file):
        """Test reading from a path string."""
        assert MidiFile.read(str(sample_midi_path)) == sample_midi_file

    def test_roundtrip_sample(self, sample_midi_file):
        """Test that an encoded file decodes to an equal model."""
        assert MidiFile.from_bytes(sample_midi_file.to_bytes()) == sample_midi_file

    def test_roundtrip_smpte(self):
        """Test that SMPTE timing survives encoding."""
        song = MidiFile(format=0, division=SmpteDivision(25, 40), tracks=[simple_track()])
        decoded = MidiFile.from_bytes(song.to_bytes())
        assert decoded.get_smpte_timing() == (25, 40)

    def test_format_2_roundtrip(self):
        """Test a format 2 file with two patterns."""
        song = MidiFile(format=2, tracks=[simple_track(60), simple_track(72)])
        decoded = MidiFile.from_bytes(song.to_bytes())
        assert decoded.pattern_count == 2
        assert decoded.get_pattern(1).events[0].note == 72

    def test_end_to_end(self):
        """Test building, encoding and decoding a two-track song."""
        conductor = Track()
        conductor.append(SetTempoEvent(0, 600000))
        conductor.append(TimeSignatureEvent(0, 3, 4))
        conductor.append(EndOfTrackEvent(0))

        melody = Track()
        for note in [60, 62, 64]:
            melody.append(NoteBeginEvent(0, 0, note, 90))
            melody.append(NoteEndEvent(120, 0, note, 0))
        melody.append(EndOfTrackEvent(0))

        song = MidiFile(format=1, division=120, tracks=[conductor, melody])
        decoded = MidiFile.from_bytes(song.to_bytes())

        assert decoded == song
        assert decoded.tracks[0].events[0].bpm == 100
        assert decoded.tracks[0].events[1].get_time_signature()["numerator"] == 3
        assert decoded.tracks[1].duration == 360

    def test_trailing_bytes_ignored(self, minimal_smf_bytes):
        """Test that data after the declared tracks is left unread."""
        song = MidiFile.from_bytes(minimal_smf_bytes + b"junk")
        assert len(song.tracks) == 1


class TestMalformedInput:
    """Test cases for rejecting malformed files."""

    def test_wrong_header_tag(self):
        """Test that a RIFF file is not read as SMF."""
        with pytest.raises(MidiFormatError):
            MidiFile.from_bytes(b"RIFF\x00\x00\x00\x06\x00\x00\x00\x01\x00\x60")

    def test_header_length_not_6(self):
        """Test that a header chunk of another length is rejected."""
        with pytest.raises(MidiFormatError):
            MidiFile.from_bytes(b"MThd\x00\x00\x00\x08\x00\x00\x00\x00\x00\x60\x00\x00")

    def test_truncated_header(self):
        """Test a header cut short."""
        with pytest.raises(UnexpectedEndOfData):
            MidiFile.from_bytes(b"MThd\x00\x00\x00\x06\x00")

    def test_missing_track(self):
        """Test a header promising a track that is not there."""
        with pytest.raises(UnexpectedEndOfData):
            MidiFile.from_bytes(b"MThd\x00\x00\x00\x06\x00\x00\x00\x01\x00\x60")

    def test_empty_input(self):
        """Test that empty data is a format error."""
        with pytest.raises(MidiFormatError):
            MidiFile.from_bytes(b"")

    def test_unknown_format_number_still_decodes(self):
        """Test that the format number is not checked on read."""
        data = b"MThd\x00\x00\x00\x06\x00\x07\x00\x00\x00\x60"
        song = MidiFile.from_bytes(data)
        assert song.format == 7
        assert song.validate_format()[0] is False

    def test_strict_meta_option(self):
        """Test that strict_meta is passed through to event decoding."""
        data = (
            b"MThd\x00\x00\x00\x06\x00\x00\x00\x01\x00\x60"
            b"MTrk\x00\x00\x00\x09"
            b"\x00\xff\x60\x01\x01"
            b"\x00\xff\x2f\x00"
        )
        assert len(MidiFile.from_bytes(data).tracks[0]) == 2
        with pytest.raises(MidiFormatError):
            MidiFile.from_bytes(data, strict_meta=True)
