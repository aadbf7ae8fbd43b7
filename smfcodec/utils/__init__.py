"""Utility functions for binary I/O, VLQ encoding, validation and GM names."""

from smfcodec.utils.vlq import decode_vlq, encode_vlq, read_vlq, write_vlq
from smfcodec.utils.gm_instruments import get_instrument_name, get_instrument_category

__all__ = [
    "encode_vlq",
    "decode_vlq",
    "read_vlq",
    "write_vlq",
    "get_instrument_name",
    "get_instrument_category",
]
