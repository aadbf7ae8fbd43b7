"""
Info command - display MIDI file header and track summary.
"""

from pathlib import Path

import typer
from rich.console import Console

from cli.display.tables import display_file_info
from smfcodec.formats.smf.reader import SMFReader

console = Console()
app = typer.Typer()


@app.command()
def info(
    file: Path = typer.Argument(..., help="MIDI file to analyze"),
) -> None:
    """
    Display MIDI file information.

    Shows the header (format, track count, division), tempo, time and key
    signature changes, and one summary row per track.

    Examples:

        smfcodec info song.mid
    """
    if not file.exists():
        console.print(f"[red]Error: File not found: {file}[/red]")
        raise typer.Exit(1)

    try:
        midi_file = SMFReader.read(file)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    display_file_info(midi_file, str(file), size=file.stat().st_size)


if __name__ == "__main__":
    app()
