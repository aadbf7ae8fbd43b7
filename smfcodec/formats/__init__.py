"""Format handlers for Standard MIDI Files."""

from smfcodec.formats.smf import SMFReader, SMFWriter

__all__ = ["SMFReader", "SMFWriter"]
