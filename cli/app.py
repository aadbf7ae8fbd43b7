"""
smfcodec - Standard MIDI File inspector.

A CLI tool for inspecting and validating .mid files.
"""

import logging

import typer
from rich.console import Console
from rich.logging import RichHandler

from cli.commands.info import info
from cli.commands.events import events
from cli.commands.validate import validate
from cli.commands.dump import dump
from smfcodec import __version__

console = Console()

# Main app
app = typer.Typer(
    name="smfcodec",
    help="Inspect and validate Standard MIDI Files.",
    add_completion=False,
    rich_markup_mode="rich",
)

# Add commands directly
app.command(name="info")(info)
app.command(name="events")(events)
app.command(name="validate")(validate)
app.command(name="dump")(dump)


@app.command()
def version() -> None:
    """Show version information."""
    console.print(f"[bold]smfcodec[/bold] version {__version__}")
    console.print("[dim]Standard MIDI File reader and writer[/dim]")


def configure_logging(verbose: bool) -> None:
    """Route library log records through Rich; debug level when verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version_flag: bool = typer.Option(False, "--version", "-V", help="Show version"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show decoder log output"),
) -> None:
    """
    smfcodec - Inspect and validate Standard MIDI Files.

    Reads formats 0, 1 and 2, with musical (ticks per quarter) or SMPTE
    time division.

    [bold]Commands:[/bold]

        smfcodec info song.mid              # Header and track summary
        smfcodec events song.mid -t 1       # Event list of track 1
        smfcodec validate song.mid          # Structure and format checks
        smfcodec dump song.mid              # Chunk-annotated hex dump

    Use --help with any command for more details.
    """
    configure_logging(verbose)

    if version_flag:
        version()
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


def run() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    run()
