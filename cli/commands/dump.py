"""
Dump command - chunk-annotated hex dump of a MIDI file.
"""

from pathlib import Path

import typer
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from cli.display.hex_view import display_hex_dump
from smfcodec.formats.smf.chunks import iter_chunks

console = Console()
app = typer.Typer()


def create_chunk_table(data: bytes) -> Table:
    """Create a table listing the chunks found in the file."""
    table = Table(title="Chunks", box=box.SIMPLE, show_header=True, header_style="dim")
    table.add_column("Offset", width=10)
    table.add_column("Tag", width=6)
    table.add_column("Length", justify="right", width=10)
    table.add_column("Status")

    for offset, tag, length in iter_chunks(data):
        available = len(data) - offset - 8
        if length > available:
            status = f"[red]truncated ({available} bytes available)[/red]"
        else:
            status = "[green]ok[/green]"
        table.add_row(
            f"0x{offset:06X}", tag.decode("ascii", errors="replace"), str(length), status
        )

    return table


@app.command()
def dump(
    file: Path = typer.Argument(..., help="MIDI file to dump"),
    width: int = typer.Option(16, "--width", "-w", help="Bytes per line"),
    lines: int = typer.Option(0, "--lines", "-l", help="Maximum lines to show (0=all)"),
    no_chunks: bool = typer.Option(False, "--no-chunks", help="Hide the chunk table"),
) -> None:
    """
    Annotated hex dump of a MIDI file.

    The file is not decoded, so malformed files can be dumped too. Each line
    is tagged with the chunk it starts in; status bytes are shown bold.

    Examples:

        smfcodec dump song.mid

        smfcodec dump song.mid --width 8 --lines 40
    """
    if not file.exists():
        console.print(f"[red]Error: File not found: {file}[/red]")
        raise typer.Exit(1)

    if width < 1:
        console.print("[red]Error: --width must be at least 1[/red]")
        raise typer.Exit(1)

    with open(file, "rb") as f:
        data = f.read()

    console.print(
        Panel(
            f"[bold]File:[/bold] {file}\n[bold]Size:[/bold] {len(data)} bytes",
            title="[bold]MIDI Hex Dump[/bold]",
            border_style="blue",
        )
    )

    if not no_chunks:
        console.print(create_chunk_table(data))
        console.print()

    lines_shown = display_hex_dump(data, bytes_per_line=width, max_lines=lines)

    console.print()
    console.print(f"[dim]Total: {lines_shown} lines displayed[/dim]")


if __name__ == "__main__":
    app()
