"""
Hex dump display utilities.

Dumps are annotated with the SMF chunk each byte belongs to.
"""

from typing import List, Tuple

from rich.console import Console
from rich.text import Text

from smfcodec.formats.smf.chunks import iter_chunks

console = Console()

# (start, end, label, color)
Region = Tuple[int, int, str, str]


def build_regions(data: bytes) -> List[Region]:
    """
    Split raw file data into labelled chunk regions.

    Each chunk yields a header region (tag + length) and a body region.
    Bytes not covered by any chunk are labelled TRAILING.
    """
    regions: List[Region] = []
    track_index = 0
    covered = 0

    for offset, tag, length in iter_chunks(data):
        body_end = min(offset + 8 + length, len(data))
        if tag == b"MThd":
            regions.append((offset, offset + 8, "MThd", "bright_blue"))
            regions.append((offset + 8, body_end, "HEADER", "cyan"))
        elif tag == b"MTrk":
            regions.append((offset, offset + 8, f"MTrk {track_index}", "green"))
            regions.append((offset + 8, body_end, f"TRACK {track_index}", "white"))
            track_index += 1
        else:
            label = tag.decode("ascii", errors="replace")
            regions.append((offset, body_end, label, "yellow"))
        covered = body_end

    if covered < len(data):
        regions.append((covered, len(data), "TRAILING", "red"))

    return regions


def get_region_for_offset(regions: List[Region], offset: int) -> Tuple[str, str]:
    """Get region label and color for an offset."""
    for start, end, label, color in regions:
        if start <= offset < end:
            return label, color
    return "?", "dim"


def format_hex_line(data: bytes, offset: int, regions: List[Region], bytes_per_line: int = 16) -> Text:
    """
    Format a single line of hex dump with colors and annotations.

    Each byte takes the color of its region; the line is tagged with the
    region of its first byte. Status bytes (0x80 and up) inside track
    bodies are shown bold.
    """
    label, _ = get_region_for_offset(regions, offset)

    text = Text()
    text.append(f"{offset:08X} ", style="dim")
    text.append(f"[{label:8s}] ", style="dim")

    for i, byte in enumerate(data):
        _, color = get_region_for_offset(regions, offset + i)
        style = f"bold {color}" if byte & 0x80 else color
        text.append(f"{byte:02X}", style=style)
        text.append(" ")

    if len(data) < bytes_per_line:
        text.append("   " * (bytes_per_line - len(data)))

    text.append(" ")
    for byte in data:
        if 32 <= byte < 127:
            text.append(chr(byte), style="green")
        else:
            text.append(".", style="dim")

    return text


def display_hex_dump(data: bytes, bytes_per_line: int = 16, max_lines: int = 0) -> int:
    """
    Print an annotated hex dump.

    Args:
        data: Raw file contents
        bytes_per_line: Bytes shown per line
        max_lines: Stop after this many lines (0 = no limit)

    Returns:
        Number of lines printed
    """
    regions = build_regions(data)

    header = Text()
    header.append("OFFSET   ", style="dim")
    header.append(f"{'CHUNK':11s}", style="dim")
    header.append(" ".join(f"{i:02X}" for i in range(bytes_per_line)), style="dim")
    header.append("  ASCII", style="dim")
    console.print(header)
    console.print("─" * (9 + 11 + bytes_per_line * 3 + 2 + bytes_per_line))

    lines_shown = 0
    for offset in range(0, len(data), bytes_per_line):
        if max_lines and lines_shown >= max_lines:
            remaining = len(data) - offset
            console.print(f"[dim]... {remaining} more bytes ...[/dim]")
            break
        console.print(format_hex_line(data[offset : offset + bytes_per_line], offset, regions, bytes_per_line))
        lines_shown += 1

    return lines_shown
