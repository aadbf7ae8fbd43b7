"""
Standard MIDI File writer.

Encodes MidiFile objects to .mid files.
"""

import io
import logging
from pathlib import Path
from typing import BinaryIO, Union

from smfcodec.formats.smf.chunks import write_header
from smfcodec.formats.smf.track_codec import write_track
from smfcodec.models.midi_file import MidiFile

logger = logging.getLogger(__name__)


class SMFWriter:
    """
    Writer for Standard MIDI Files.

    The file's format is validated before anything is written, so an
    invalid file (e.g. format 0 with two tracks) never produces partial
    output.

    Example:
        song = MidiFile(format=0, division=480, tracks=[track])
        SMFWriter.write(song, "song.mid")
    """

    @classmethod
    def write(cls, midi_file: MidiFile, filepath: Union[str, Path]) -> None:
        """
        Write a MidiFile to disk.

        Args:
            midi_file: File to write
            filepath: Output file path

        Raises:
            InvalidFormatError: If the format / track count is invalid
        """
        writer = cls()
        data = writer.to_bytes(midi_file)

        filepath = Path(filepath)
        with open(filepath, "wb") as f:
            f.write(data)

        logger.info("Wrote %s (%d bytes)", filepath, len(data))

    def to_bytes(self, midi_file: MidiFile) -> bytes:
        """
        Serialize a MidiFile to bytes.

        Returns:
            Complete SMF file contents
        """
        buffer = io.BytesIO()
        self.write_stream(midi_file, buffer)
        return buffer.getvalue()

    def write_stream(self, midi_file: MidiFile, stream: BinaryIO) -> None:
        """Write a MidiFile to an open binary stream."""
        midi_file.assert_valid_format()

        write_header(stream, midi_file.format, len(midi_file.tracks), midi_file.division)
        for track in midi_file.tracks:
            write_track(stream, track)

        logger.debug(
            "Encoded %s with %d tracks", midi_file.format_name, len(midi_file.tracks)
        )
