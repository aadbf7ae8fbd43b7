"""
MIDI file data model.

A Standard MIDI File holds a format number, a time division and a list of
tracks:

- Format 0: a single track holding all data
- Format 1: several tracks played together (the common case)
- Format 2: several independent patterns

Example:
    song = MidiFile(format=1, division=96)
    track = Track()
    track.append(NoteBeginEvent(0, 0, 60, 100))
    track.append(NoteEndEvent(96, 0, 60, 0))
    track.append(EndOfTrackEvent(0))
    song.tracks.append(track)

    data = song.to_bytes()
    assert MidiFile.from_bytes(data) == song
"""

import copy
from dataclasses import dataclass, field
from pathlib import Path
from typing import BinaryIO, List, Optional, Tuple, Union

from smfcodec.config import DEFAULT_FORMAT
from smfcodec.errors import InvalidFormatError
from smfcodec.models.division import Division, SmpteDivision, TicksPerQuarter, coerce_division
from smfcodec.models.track import Track

FORMAT_NAMES = {
    0: "Format 0 (Single Track)",
    1: "Format 1 (Multi-Track Synchronous)",
    2: "Format 2 (Multi-Track Asynchronous)",
}


@dataclass
class MidiFile:
    """
    A Standard MIDI File.

    Attributes:
        format: File format (0, 1 or 2)
        division: TicksPerQuarter or SmpteDivision. A plain int is accepted
            and treated as ticks per quarter note.
        tracks: Tracks in file order

    The format / track count rule (format 0 needs exactly one track) is not
    enforced while building a file; it is checked by ``validate_format`` and
    before every write.
    """

    format: int = DEFAULT_FORMAT
    division: Division = field(default_factory=TicksPerQuarter)
    tracks: List[Track] = field(default_factory=list)

    def __post_init__(self):
        self.division = coerce_division(self.division)

    # ------------------------------------------------------------------
    # Format
    # ------------------------------------------------------------------

    @property
    def format_name(self) -> str:
        return FORMAT_NAMES.get(self.format, f"Unknown Format ({self.format})")

    def is_format_0(self) -> bool:
        return self.format == 0

    def is_format_1(self) -> bool:
        return self.format == 1

    def is_format_2(self) -> bool:
        return self.format == 2

    def validate_format(self) -> Tuple[bool, Optional[str]]:
        """
        Check the format number and the track count.

        Returns:
            (True, None) if valid, otherwise (False, message)
        """
        if isinstance(self.format, bool) or not isinstance(self.format, int):
            return False, f"Format must be an integer, got {self.format!r}"

        if self.format not in FORMAT_NAMES:
            return False, f"Invalid format number: {self.format} (must be 0, 1, or 2)"

        if self.format == 0 and len(self.tracks) != 1:
            return False, (
                f"Format 0 requires exactly 1 track, but has {len(self.tracks)} track(s)"
            )

        return True, None

    def assert_valid_format(self) -> None:
        """Raise InvalidFormatError if ``validate_format`` fails."""
        ok, message = self.validate_format()
        if not ok:
            raise InvalidFormatError(message)

    # ------------------------------------------------------------------
    # Format 2 patterns
    # ------------------------------------------------------------------

    def get_pattern(self, index: int) -> Optional[Track]:
        """
        Get a pattern of a format 2 file by 0-based index.

        Returns:
            The track, or None if the index is out of range

        Raises:
            InvalidFormatError: If the file is not format 2
        """
        if not self.is_format_2():
            raise InvalidFormatError("get_pattern() is only valid for Format 2 files")
        if 0 <= index < len(self.tracks):
            return self.tracks[index]
        return None

    @property
    def pattern_count(self) -> int:
        if not self.is_format_2():
            raise InvalidFormatError("pattern_count is only valid for Format 2 files")
        return len(self.tracks)

    # ------------------------------------------------------------------
    # Division
    # ------------------------------------------------------------------

    def is_smpte(self) -> bool:
        return isinstance(self.division, SmpteDivision)

    @property
    def ticks_per_quarter(self) -> Optional[int]:
        """Ticks per quarter note, or None for SMPTE timing."""
        if isinstance(self.division, TicksPerQuarter):
            return self.division.ticks
        return None

    @ticks_per_quarter.setter
    def ticks_per_quarter(self, ticks: int) -> None:
        self.division = TicksPerQuarter(ticks)

    def get_smpte_timing(self) -> Tuple[Optional[float], Optional[int]]:
        """Return (frame_rate, ticks_per_frame), or (None, None) for musical time."""
        if isinstance(self.division, SmpteDivision):
            return self.division.frame_rate, self.division.ticks_per_frame
        return None, None

    def set_smpte_timing(self, frame_rate: float, ticks_per_frame: int) -> None:
        """
        Switch to SMPTE time division.

        Raises:
            ValidationError: If the frame rate is not 24, 25, 29.97 or 30, or
                ticks_per_frame is outside 1-255
        """
        self.division = SmpteDivision(frame_rate, ticks_per_frame)

    # ------------------------------------------------------------------
    # Copy / display
    # ------------------------------------------------------------------

    def clone(self) -> "MidiFile":
        """Return a deep copy sharing no tracks or events with this file."""
        return copy.deepcopy(self)

    @property
    def event_count(self) -> int:
        return sum(len(track) for track in self.tracks)

    def __str__(self) -> str:
        return "MidiFile{format=%d, division=%s, tracks={%s}}" % (
            self.format,
            self.division,
            ", ".join(str(track) for track in self.tracks),
        )

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    @classmethod
    def read(cls, source: Union[str, Path, bytes, bytearray, BinaryIO], **options) -> "MidiFile":
        """
        Read a MIDI file from a path, a byte buffer or a binary stream.

        Keyword arguments are passed to DecodeOptions.
        """
        from smfcodec.formats.smf.reader import SMFReader

        reader = SMFReader(**options)
        if isinstance(source, (bytes, bytearray)):
            return reader.parse_bytes(bytes(source))
        if isinstance(source, (str, Path)):
            return reader.parse_file(source)
        return reader.parse_stream(source)

    @classmethod
    def from_bytes(cls, data: bytes, **options) -> "MidiFile":
        return cls.read(bytes(data), **options)

    def to_bytes(self) -> bytes:
        """
        Serialize to SMF bytes.

        Raises:
            InvalidFormatError: If the format / track count is invalid
        """
        from smfcodec.formats.smf.writer import SMFWriter

        return SMFWriter().to_bytes(self)

    def write(self, target: Union[str, Path, BinaryIO]) -> None:
        """Write to a path or a binary stream."""
        from smfcodec.formats.smf.writer import SMFWriter

        if isinstance(target, (str, Path)):
            SMFWriter.write(self, target)
        else:
            SMFWriter().write_stream(self, target)

