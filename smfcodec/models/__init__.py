"""Data models for MIDI files, tracks and events."""

from smfcodec.models.division import SmpteDivision, TicksPerQuarter
from smfcodec.models.midi_file import MidiFile
from smfcodec.models.track import Track

__all__ = [
    "MidiFile",
    "Track",
    "TicksPerQuarter",
    "SmpteDivision",
]
