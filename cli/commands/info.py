"""
Info command - display header and track summary.
"""

from pathlib import Path

import typer
from rich.console import Console

from smfreader.formats.smf.midi_file import MidiFile
from smfreader.formats.smf.reader import SMFReader
from smfreader.models.midi_data import MidiData
from smfreader.utils.validation import SMFError
from cli.display.tables import display_file_info

console = Console()
app = typer.Typer()


def load_midi_file(file: Path) -> MidiFile:
    """Read a MIDI file or exit with an error message."""
    if not file.exists():
        console.print(f"[red]Error: File not found: {file}[/red]")
        raise typer.Exit(1)

    try:
        return SMFReader.read(file)
    except SMFError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)


@app.command()
def info(
    file: Path = typer.Argument(..., help="MIDI file to inspect"),
) -> None:
    """
    Show header fields and a per-track summary.

    Examples:

        smfread info song.mid
    """
    midi = load_midi_file(file)

    try:
        data = MidiData.from_midi_file(midi)
    except SMFError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    display_file_info(str(file), midi, data)


if __name__ == "__main__":
    app()
