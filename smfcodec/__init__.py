"""
smfcodec - Standard MIDI File reader and writer.

This library provides tools to:
- Read and write Standard MIDI Files (formats 0, 1 and 2)
- Build tracks programmatically from validated event objects
- Inspect tempo, time signature, key signature and SMPTE data

Example usage:
    from smfcodec import MidiFile, Track
    from smfcodec.models.events import NoteBeginEvent, NoteEndEvent, EndOfTrackEvent

    track = Track([
        NoteBeginEvent(0, 0, 60, 100),
        NoteEndEvent(96, 0, 60, 0),
        EndOfTrackEvent(0),
    ])
    song = MidiFile(format=0, division=96, tracks=[track])
    song.write("middle_c.mid")

    song = MidiFile.read("middle_c.mid")
"""

__version__ = "0.3.0"
__author__ = "smfcodec Contributors"

from smfcodec.errors import InvalidFormatError, MidiFormatError, UnexpectedEndOfData
from smfcodec.models import events
from smfcodec.models.division import SmpteDivision, TicksPerQuarter
from smfcodec.models.midi_file import MidiFile
from smfcodec.models.track import Track
from smfcodec.formats.smf.reader import SMFReader
from smfcodec.formats.smf.writer import SMFWriter
from smfcodec.utils.validation import ValidationError

__all__ = [
    "MidiFile",
    "Track",
    "TicksPerQuarter",
    "SmpteDivision",
    "SMFReader",
    "SMFWriter",
    "MidiFormatError",
    "UnexpectedEndOfData",
    "InvalidFormatError",
    "ValidationError",
    "events",
]
