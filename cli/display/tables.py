"""
Rich table displays for MIDI file information.
"""

from typing import Optional

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from cli.display.formatters import describe_event, format_key_signature, format_tempo
from smfcodec.formats.smf.track_codec import measure_track
from smfcodec.models import events as ev
from smfcodec.models.midi_file import MidiFile
from smfcodec.models.track import Track
from smfcodec.utils.gm_instruments import (
    PERCUSSION_CHANNEL,
    get_instrument_category,
    get_instrument_name,
)

console = Console()


def track_name(track: Track) -> str:
    """First sequence/track name in a track, or an empty string."""
    for event in track.events_of_type(ev.SequenceNameEvent):
        return event.text
    return ""


def track_channels(track: Track) -> str:
    channels = sorted({event.channel + 1 for event in track.events_of_type(ev.ChannelEvent)})
    return ", ".join(str(c) for c in channels) if channels else "-"


def track_programs(track: Track) -> str:
    names = []
    for event in track.events_of_type(ev.ProgramChangeEvent):
        name = get_instrument_name(event.program, event.channel)
        if name not in names:
            names.append(name)
    return ", ".join(names)


def display_file_info(midi_file: MidiFile, filepath: str, size: Optional[int] = None) -> None:
    """Display header, timing and per-track summary of a MIDI file."""

    ok, message = midi_file.validate_format()
    status = "[green]Valid[/green]" if ok else f"[red]Invalid[/red] ({message})"

    header_content = f"""[bold]File:[/bold] {filepath}
[bold]Format:[/bold] {midi_file.format_name}
[bold]Tracks:[/bold] {len(midi_file.tracks)}
[bold]Division:[/bold] {midi_file.division}
[bold]Events:[/bold] {midi_file.event_count}
[bold]Status:[/bold] {status}"""
    if size is not None:
        header_content += f"\n[bold]Size:[/bold] {size} bytes"

    console.print(Panel(header_content, title="[bold]MIDI File[/bold]", border_style="blue"))

    # Timing events, in file order
    timing_table = Table(title="Timing", box=box.SIMPLE, show_header=True, header_style="dim")
    timing_table.add_column("Track", width=6)
    timing_table.add_column("Tick", justify="right", width=8)
    timing_table.add_column("Event", width=16)
    timing_table.add_column("Value")

    for index, track in enumerate(midi_file.tracks):
        tick = 0
        for event in track.events:
            tick += event.delta_time
            if isinstance(event, ev.SetTempoEvent):
                value = format_tempo(event.tempo)
            elif isinstance(event, ev.TimeSignatureEvent):
                value = f"{event.numerator}/{event.denominator}"
            elif isinstance(event, ev.KeySignatureEvent):
                value = format_key_signature(event.sharps_flats, event.is_minor)
            else:
                continue
            timing_table.add_row(str(index), str(tick), type(event).__name__[:-5], value)

    if timing_table.row_count:
        console.print(timing_table)

    display_track_table(midi_file)


def display_track_table(midi_file: MidiFile) -> None:
    """Display one row per track."""
    table = Table(title="Tracks", box=box.ROUNDED, show_header=True, header_style="bold")
    table.add_column("#", width=4)
    table.add_column("Name", width=24)
    table.add_column("Events", justify="right", width=7)
    table.add_column("Bytes", justify="right", width=8)
    table.add_column("Ticks", justify="right", width=8)
    table.add_column("Channels", width=14)
    table.add_column("Programs")
    table.add_column("EOT", width=4)

    for index, track in enumerate(midi_file.tracks):
        eot = "[green]✓[/green]" if track.has_end_of_track else "[yellow]✗[/yellow]"
        table.add_row(
            str(index),
            escape(track_name(track)[:24]),
            str(len(track)),
            str(measure_track(track)),
            str(track.duration),
            track_channels(track),
            track_programs(track),
            eot,
        )

    console.print(table)


def display_events_table(track: Track, index: int, limit: int = 0) -> None:
    """Display the events of a track with absolute tick positions."""
    title = f"Track {index}"
    name = track_name(track)
    if name:
        title += f": {escape(name)}"

    table = Table(title=title, box=box.SIMPLE, show_header=True, header_style="bold")
    table.add_column("Tick", justify="right", width=8)
    table.add_column("Δ", justify="right", width=6)
    table.add_column("Event", width=22)
    table.add_column("Ch", justify="right", width=3)
    table.add_column("Details")

    tick = 0
    for i, event in enumerate(track.events):
        tick += event.delta_time
        if limit and i >= limit:
            break
        kind, channel, details = describe_event(event)
        table.add_row(str(tick), str(event.delta_time), kind, channel, escape(details))

    console.print(table)
    if limit and len(track) > limit:
        console.print(f"[dim]... {len(track) - limit} more events[/dim]")

    programs = track.events_of_type(ev.ProgramChangeEvent)
    if programs:
        families = sorted(
            {get_instrument_category(p.program) for p in programs if p.channel != PERCUSSION_CHANNEL}
        )
        if families:
            console.print(f"[dim]Families: {', '.join(families)}[/dim]")
