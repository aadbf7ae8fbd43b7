"""Test configuration and fixtures."""

import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from smfcodec.models.events import (
    ControllerChangeEvent,
    EndOfTrackEvent,
    KeySignatureEvent,
    NoteBeginEvent,
    NoteEndEvent,
    PitchWheelChangeEvent,
    ProgramChangeEvent,
    SequenceNameEvent,
    SetTempoEvent,
    TimeSignatureEvent,
)
from smfcodec.models.midi_file import MidiFile
from smfcodec.models.track import Track

# Format 0, 96 TPQN, one track: Note On C4, Note On C4 vel 0 (running status), End of Track
MINIMAL_SMF = bytes.fromhex(
    "4d546864 00000006 0000 0001 0060"
    "4d54726b 0000000b"
    "00 90 3c 64"
    "60 3c 00"
    "00 ff 2f 00"
)


@pytest.fixture
def minimal_smf_bytes():
    """Return a hand-assembled format 0 file using running status."""
    return MINIMAL_SMF


@pytest.fixture
def conductor_track():
    """Return a tempo/meter track."""
    return Track(
        [
            SequenceNameEvent.from_text(0, "Conductor"),
            SetTempoEvent(0, 500000),
            TimeSignatureEvent(0, 7, 8, 24, 8),
            KeySignatureEvent(0, -3, True),
            EndOfTrackEvent(0),
        ]
    )


@pytest.fixture
def piano_track():
    """Return a short piano part on channel 0."""
    return Track(
        [
            SequenceNameEvent.from_text(0, "Piano"),
            ProgramChangeEvent(0, 0, 0),
            ControllerChangeEvent(0, 0, 7, 100),
            NoteBeginEvent(0, 0, 60, 100),
            NoteBeginEvent(0, 0, 64, 90),
            NoteEndEvent(96, 0, 60, 0),
            NoteEndEvent(0, 0, 64, 0),
            PitchWheelChangeEvent(10, 0, 10000),
            NoteBeginEvent(0, 0, 67, 80),
            NoteBeginEvent(96, 0, 67, 0),
            EndOfTrackEvent(0),
        ]
    )


@pytest.fixture
def sample_midi_file(conductor_track, piano_track):
    """Return a format 1 file with a conductor track and a piano track."""
    return MidiFile(format=1, division=96, tracks=[conductor_track, piano_track])


@pytest.fixture
def sample_midi_path(tmp_path, sample_midi_file):
    """Write the sample file to disk and return its path."""
    path = tmp_path / "sample.mid"
    path.write_bytes(sample_midi_file.to_bytes())
    return path
