"""Standard MIDI File (.mid) format handlers."""

from smfcodec.formats.smf.reader import SMFReader
from smfcodec.formats.smf.writer import SMFWriter
from smfcodec.formats.smf.running_status import RunningStatus, read_event, write_event
from smfcodec.formats.smf.track_codec import measure_track, read_track, write_track

__all__ = [
    "SMFReader",
    "SMFWriter",
    "RunningStatus",
    "read_event",
    "write_event",
    "read_track",
    "write_track",
    "measure_track",
]
