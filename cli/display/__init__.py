"""
CLI display modules.
"""

from cli.display.tables import (
    display_file_info,
    display_track_table,
    display_events_table,
)
from cli.display.hex_view import display_hex_dump

__all__ = [
    "display_file_info",
    "display_track_table",
    "display_events_table",
    "display_hex_dump",
]
