"""
Validate command - check SMF structure and decode every track.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich import box

from smfreader.formats.smf.chunks import HEADER_SIZE
from smfreader.formats.smf.events import META_END_OF_TRACK, META_EVENT
from smfreader.formats.smf.midi_file import MidiFile
from smfreader.utils.validation import CorruptTrackError, SMFError

console = Console()
app = typer.Typer()


@dataclass
class ValidationIssue:
    """A single validation issue."""

    severity: str  # "error", "warning", "info"
    area: str
    offset: int
    message: str


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


class SMFValidator:
    """Validate SMF structure and event streams."""

    END_OF_TRACK = bytes([META_EVENT, META_END_OF_TRACK, 0x00])

    def __init__(self, data: bytes, filepath: str):
        self.data = data
        self.filepath = filepath
        self.issues: List[ValidationIssue] = []

    def validate(self) -> ValidationResult:
        """Perform full validation and return result."""
        self.issues = []

        midi = self._validate_structure()
        if midi is not None:
            self._validate_trailing_data(midi)
            for track in range(midi.num_tracks):
                self._validate_track(midi, track)

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

    def _add_issue(self, severity: str, area: str, offset: int, message: str) -> None:
        """Add a validation issue."""
        self.issues.append(
            ValidationIssue(severity=severity, area=area, offset=offset, message=message)
        )

    def _validate_structure(self) -> Optional[MidiFile]:
        """Parse header and track chunks."""
        try:
            midi = MidiFile.from_bytes(self.data)
        except CorruptTrackError as e:
            self._add_issue("error", f"Track {e.track}", e.offset, f"Tempo scan failed: {e}")
            return None
        except SMFError as e:
            self._add_issue("error", "Structure", getattr(e, "offset", 0), str(e))
            return None

        self._add_issue(
            "info",
            "Header",
            0,
            f"Format {midi.format}, {midi.num_tracks} track(s), division 0x{midi.division:04X}",
        )
        return midi

    def _validate_trailing_data(self, midi: MidiFile) -> None:
        """Report bytes after the last track chunk."""
        end = midi.track_chunks[-1].end if midi.track_chunks else HEADER_SIZE
        extra = len(self.data) - end
        if extra > 0:
            self._add_issue("warning", "File", end, f"{extra} byte(s) after the last track chunk")

    def _validate_track(self, midi: MidiFile, track: int) -> None:
        """Decode a whole track."""
        area = f"Track {track}"
        chunk = midi.track_chunks[track]
        count = 0
        last = None

        try:
            for _, message in midi.iter_events(track):
                count += 1
                last = message
        except CorruptTrackError as e:
            self._add_issue("error", area, e.offset, str(e))
            return
        finally:
            midi.rewind_track(track)

        if last != self.END_OF_TRACK:
            self._add_issue("warning", area, chunk.end, "Track does not end with End of Track")
        else:
            self._add_issue("info", area, chunk.offset, f"{count} events decoded")


def display_validation(result: ValidationResult, verbose: bool = False) -> None:
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

    shown = result.errors + result.warnings
    if verbose or not shown:
        shown = shown + result.info

    if shown:
        table = Table(title="Issues", box=box.ROUNDED, show_header=True, header_style="bold cyan")
        table.add_column("Severity", width=10)
        table.add_column("Area", width=12)
        table.add_column("Offset", width=10)
        table.add_column("Message", width=60)

        colors = {"error": "red", "warning": "yellow", "info": "blue"}
        for issue in shown:
            color = colors[issue.severity]
            table.add_row(
                f"[{color}]{issue.severity.upper()}[/{color}]",
                issue.area,
                f"0x{issue.offset:06X}",
                issue.message,
            )

        console.print(table)


@app.command()
def validate(
    file: Path = typer.Argument(..., help="MIDI file to validate"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show all validation details"),
    strict: bool = typer.Option(False, "--strict", "-s", help="Treat warnings as errors"),
) -> None:
    """
    Validate a MIDI file structure and its event streams.

    Checks for:

    - Valid MThd header (magic, length, format, track count)
    - Valid MTrk chunks within the file
    - Decodable event streams (VLQs, running status, track bounds)
    - End of Track meta event at the end of each track

    Examples:

        smfread validate song.mid

        smfread validate song.mid --strict
    """
    if not file.exists():
        console.print(f"[red]Error: File not found: {file}[/red]")
        raise typer.Exit(1)

    with open(file, "rb") as f:
        data = f.read()

    validator = SMFValidator(data, str(file))
    result = validator.validate()

    # In strict mode, treat warnings as errors
    if strict and result.warnings:
        result.valid = False

    display_validation(result, verbose=verbose)

    if not result.valid:
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
