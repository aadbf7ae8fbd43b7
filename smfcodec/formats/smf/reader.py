"""
Standard MIDI File reader.

Decodes .mid/.midi files (formats 0, 1 and 2) into the MidiFile model.
"""

import io
import logging
from pathlib import Path
from typing import BinaryIO, Union

from smfcodec.config import HEADER_LENGTH, HEADER_TAG, DecodeOptions
from smfcodec.errors import MidiFormatError
from smfcodec.formats.smf.chunks import iter_chunks, read_header
from smfcodec.formats.smf.track_codec import read_track
from smfcodec.models.midi_file import FORMAT_NAMES, MidiFile

logger = logging.getLogger(__name__)


class SMFReader:
    """
    Reader for Standard MIDI Files.

    Decoding is strict about structure: a wrong chunk tag, a header length
    other than 6, a truncated stream or a track whose events do not fill
    its chunk exactly all raise MidiFormatError. Out-of-range field values
    raise ValidationError.

    Example:
        song = SMFReader.read("song.mid")
        print(f"{song.format_name}, {len(song.tracks)} tracks")

        # Reject unregistered meta events
        song = SMFReader(strict_meta=True).parse_bytes(data)
    """

    def __init__(self, strict_meta: bool = False, **options):
        self.options = DecodeOptions(strict_meta=strict_meta, **options)

    @classmethod
    def read(cls, filepath: Union[str, Path], **options) -> MidiFile:
        """
        Read a MIDI file from disk.

        Args:
            filepath: Path to .mid file
            **options: DecodeOptions fields

        Returns:
            Parsed MidiFile
        """
        reader = cls(**options)
        return reader.parse_file(filepath)

    def parse_file(self, filepath: Union[str, Path]) -> MidiFile:
        filepath = Path(filepath)

        if not filepath.exists():
            raise FileNotFoundError(f"File not found: {filepath}")

        logger.info("Reading %s", filepath)
        with open(filepath, "rb") as f:
            return self.parse_stream(f)

    def parse_bytes(self, data: bytes) -> MidiFile:
        """
        Parse a MIDI file held in memory.

        Args:
            data: Complete file contents

        Returns:
            Parsed MidiFile
        """
        return self.parse_stream(io.BytesIO(data))

    def parse_stream(self, stream: BinaryIO) -> MidiFile:
        """
        Parse a MIDI file from a seekable binary stream.

        Exactly the header and the declared number of tracks are read.
        Bytes after the last track are left unread.

        Raises:
            MidiFormatError: If the data is not a well-formed MIDI file
            ValidationError: If a field holds an out-of-range value
        """
        header = read_header(stream)
        division = header.division
        if header.format not in FORMAT_NAMES:
            logger.warning("Unknown MIDI file format %d", header.format)

        logger.debug(
            "Header: format %d, %d tracks, division %s",
            header.format,
            header.track_count,
            division,
        )

        midi_file = MidiFile(format=header.format, division=division)
        for _ in range(header.track_count):
            midi_file.tracks.append(read_track(stream, self.options))

        return midi_file

    @classmethod
    def can_read(cls, filepath: Union[str, Path]) -> bool:
        """
        Check if a file starts with a valid MThd header chunk.

        Args:
            filepath: Path to check

        Returns:
            True if the file looks like a Standard MIDI File
        """
        filepath = Path(filepath)

        if not filepath.is_file():
            return False

        with open(filepath, "rb") as f:
            header = f.read(8)

        return header == HEADER_TAG + HEADER_LENGTH.to_bytes(4, "big")

    @classmethod
    def get_file_info(cls, filepath: Union[str, Path]) -> dict:
        """
        Get basic information about a MIDI file without decoding events.

        Args:
            filepath: Path to .mid file

        Returns:
            Dictionary with file info
        """
        filepath = Path(filepath)

        with open(filepath, "rb") as f:
            data = f.read()

        info = {
            "valid": False,
            "size": len(data),
        }

        try:
            header = read_header(io.BytesIO(data))
        except MidiFormatError:
            return info

        info["valid"] = True
        info["format"] = header.format
        info["format_name"] = FORMAT_NAMES.get(header.format, f"Unknown Format ({header.format})")
        info["track_count"] = header.track_count
        info["raw_division"] = header.raw_division
        try:
            info["division"] = str(header.division)
        except ValueError:
            info["division"] = f"invalid (0x{header.raw_division:04X})"

        info["chunks"] = [
            {"offset": offset, "tag": tag.decode("ascii", errors="replace"), "length": length}
            for offset, tag, length in iter_chunks(data)
        ]

        return info
