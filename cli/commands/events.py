"""
Events command - list the events of one or all tracks.
"""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from cli.display.tables import display_events_table
from smfcodec.formats.smf.reader import SMFReader

console = Console()
app = typer.Typer()


@app.command()
def events(
    file: Path = typer.Argument(..., help="MIDI file to list"),
    track: Optional[int] = typer.Option(None, "--track", "-t", help="Track index (0-based)"),
    limit: int = typer.Option(0, "--limit", "-n", help="Maximum events per track (0=all)"),
) -> None:
    """
    List MIDI events with absolute tick positions.

    Program changes are shown with their General MIDI instrument names
    (drum kits on channel 10).

    Examples:

        smfcodec events song.mid

        smfcodec events song.mid --track 1 --limit 50
    """
    if not file.exists():
        console.print(f"[red]Error: File not found: {file}[/red]")
        raise typer.Exit(1)

    try:
        midi_file = SMFReader.read(file)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    if track is not None:
        if not 0 <= track < len(midi_file.tracks):
            console.print(
                f"[red]Error: Track {track} out of range (file has {len(midi_file.tracks)} tracks)[/red]"
            )
            raise typer.Exit(1)
        display_events_table(midi_file.tracks[track], track, limit)
        return

    for index, midi_track in enumerate(midi_file.tracks):
        display_events_table(midi_track, index, limit)


if __name__ == "__main__":
    app()
