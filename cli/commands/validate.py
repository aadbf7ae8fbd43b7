"""
Validate command - check MIDI file structure and format rules.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

import typer
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from smfcodec.formats.smf.chunks import iter_chunks
from smfcodec.formats.smf.reader import SMFReader
from smfcodec.models import events as ev
from smfcodec.models.midi_file import MidiFile

console = Console()
app = typer.Typer()


@dataclass
class ValidationIssue:
    """A single validation issue."""

    severity: str  # "error", "warning", "info"
    area: str
    message: str
    track: Optional[int] = None


@dataclass
class ValidationResult:
    """Result of validating a MIDI file."""

    filepath: str
    valid: bool
    errors: List[ValidationIssue] = field(default_factory=list)
    warnings: List[ValidationIssue] = field(default_factory=list)
    info: List[ValidationIssue] = field(default_factory=list)

    @property
    def total_issues(self) -> int:
        return len(self.errors) + len(self.warnings) + len(self.info)


class MidiFileValidator:
    """Decode a MIDI file and check it against the SMF rules."""

    def __init__(self, data: bytes, filepath: str, strict: bool = False):
        self.data = data
        self.filepath = filepath
        self.strict = strict
        self.issues: List[ValidationIssue] = []

    def validate(self) -> ValidationResult:
        """Perform full validation and return result."""
        self.issues = []

        midi_file = self._decode()
        if midi_file is not None:
            self._validate_format(midi_file)
            self._validate_division(midi_file)
            self._validate_tracks(midi_file)
            self._validate_trailing_data()

        errors = [i for i in self.issues if i.severity == "error"]
        warnings = [i for i in self.issues if i.severity == "warning"]
        info = [i for i in self.issues if i.severity == "info"]

        return ValidationResult(
            filepath=self.filepath,
            valid=len(errors) == 0,
            errors=errors,
            warnings=warnings,
            info=info,
        )

    def _add_issue(self, severity: str, area: str, message: str, track: Optional[int] = None) -> None:
        self.issues.append(ValidationIssue(severity, area, message, track))

    def _decode(self) -> Optional[MidiFile]:
        try:
            midi_file = SMFReader(strict_meta=self.strict).parse_bytes(self.data)
        except ValueError as e:
            self._add_issue("error", "Decode", str(e))
            return None

        self._add_issue("info", "Decode", f"{len(midi_file.tracks)} tracks decoded")
        return midi_file

    def _validate_format(self, midi_file: MidiFile) -> None:
        ok, message = midi_file.validate_format()
        if ok:
            self._add_issue("info", "Format", midi_file.format_name)
        else:
            self._add_issue("error", "Format", message)

    def _validate_division(self, midi_file: MidiFile) -> None:
        if midi_file.is_smpte():
            rate, ticks = midi_file.get_smpte_timing()
            self._add_issue("info", "Division", f"SMPTE {rate:g} fps, {ticks} ticks per frame")
        else:
            self._add_issue("info", "Division", f"{midi_file.ticks_per_quarter} ticks per quarter")

    def _validate_tracks(self, midi_file: MidiFile) -> None:
        for index, track in enumerate(midi_file.tracks):
            if not track.has_end_of_track:
                self._add_issue("warning", "End of Track", "Track does not end with End of Track", index)

            eot_count = len(track.events_of_type(ev.EndOfTrackEvent))
            if eot_count > 1:
                self._add_issue("warning", "End of Track", f"{eot_count} End of Track events", index)

            unknown = track.events_of_type(ev.UnknownMetaEvent)
            if unknown:
                types = ", ".join(sorted({f"0x{e.meta_type:02X}" for e in unknown}))
                self._add_issue("warning", "Meta", f"Unregistered meta types: {types}", index)

    def _validate_trailing_data(self) -> None:
        end = 0
        for offset, _, length in iter_chunks(self.data):
            end = offset + 8 + length
        if end < len(self.data):
            self._add_issue(
                "warning", "Trailing Data", f"{len(self.data) - end} bytes after the last chunk"
            )


def display_validation(result: ValidationResult) -> None:
    """Display validation result with Rich formatting."""
    if result.valid:
        status = "[bold green]VALID[/bold green]"
        border = "green"
    else:
        status = "[bold red]INVALID[/bold red]"
        border = "red"

    console.print(
        Panel(
            f"[bold]File:[/bold] {result.filepath}\n"
            f"[bold]Status:[/bold] {status}\n\n"
            f"Errors: [red]{len(result.errors)}[/red]  "
            f"Warnings: [yellow]{len(result.warnings)}[/yellow]  "
            f"Info: [blue]{len(result.info)}[/blue]",
            title="[bold]Validation Result[/bold]",
            border_style=border,
        )
    )

    if result.errors or result.warnings:
        table = Table(title="Issues", box=box.ROUNDED, show_header=True, header_style="bold cyan")
        table.add_column("Severity", width=10)
        table.add_column("Area", style="cyan", width=14)
        table.add_column("Track", style="dim", width=6)
        table.add_column("Message")

        for issue in result.errors:
            table.add_row("[red]ERROR[/red]", issue.area, _track_label(issue), escape(issue.message))

        for issue in result.warnings:
            table.add_row("[yellow]WARN[/yellow]", issue.area, _track_label(issue), escape(issue.message))

        console.print(table)

    if result.info and (not result.errors and not result.warnings):
        info_table = Table(title="Validation Checks", box=box.SIMPLE, show_header=False)
        info_table.add_column("")

        for issue in result.info:
            info_table.add_row(f"[green]OK[/green] {issue.area}: {escape(issue.message)}")

        console.print(info_table)


def _track_label(issue: ValidationIssue) -> str:
    return "-" if issue.track is None else str(issue.track)


@app.command()
def validate(
    file: Path = typer.Argument(..., help="MIDI file to validate"),
    strict: bool = typer.Option(
        False, "--strict", "-s", help="Reject unregistered meta events and treat warnings as errors"
    ),
) -> None:
    """
    Validate a MIDI file structure and format rules.

    Checks for:

    - Well-formed MThd / MTrk chunks and events
    - Field values within their MIDI ranges
    - Format number and track count (format 0 needs exactly one track)
    - End of Track at the end of every track
    - Data after the last chunk

    Examples:

        smfcodec validate song.mid

        smfcodec validate song.mid --strict
    """
    if not file.exists():
        console.print(f"[red]Error: File not found: {file}[/red]")
        raise typer.Exit(1)

    with open(file, "rb") as f:
        data = f.read()

    validator = MidiFileValidator(data, str(file), strict=strict)
    result = validator.validate()

    # In strict mode, treat warnings as errors
    if strict and result.warnings:
        result.valid = False

    display_validation(result)

    if not result.valid:
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
