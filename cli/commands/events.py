"""
Events command - list decoded events of a track.
"""

from pathlib import Path

import typer
from rich.console import Console

from smfreader.utils.validation import CorruptTrackError
from cli.commands.info import load_midi_file
from cli.display.tables import display_events

console = Console()
app = typer.Typer()


@app.command()
def events(
    file: Path = typer.Argument(..., help="MIDI file to read"),
    track: int = typer.Option(0, "--track", "-t", help="Track index (0-based)"),
    midi_only: bool = typer.Option(
        False, "--midi-only", "-m", help="Skip meta and sysex events"
    ),
    limit: int = typer.Option(0, "--limit", "-l", help="Maximum events to show (0 = all)"),
    seconds: bool = typer.Option(False, "--seconds", "-s", help="Show wall-clock time"),
) -> None:
    """
    List the events of one track.

    Each row shows the absolute tick, the delta-time, the raw bytes and a
    short description.

    Examples:

        smfread events song.mid

        smfread events song.mid --track 2 --midi-only --limit 20

        smfread events song.mid -t 1 --seconds
    """
    midi = load_midi_file(file)

    if not 0 <= track < midi.num_tracks:
        console.print(f"[red]Error: Track must be 0-{midi.num_tracks - 1}, got {track}[/red]")
        raise typer.Exit(1)

    rows = []
    tick = 0
    shown_tick = 0
    elapsed = 0.0
    error = None

    # Every event is decoded so skipped tempo changes still move the clock
    while not limit or len(rows) < limit:
        rate = midi.tick_seconds(track)
        try:
            delta, message = midi.next_event(track)
        except CorruptTrackError as e:
            error = e
            break
        if message is None:
            break
        tick += delta
        elapsed += delta * rate
        if midi_only and message[0] >= 0xF0:
            continue
        rows.append((tick, tick - shown_tick, elapsed if seconds else None, message))
        shown_tick = tick

    display_events(track, rows, show_seconds=seconds)

    if error is not None:
        console.print(f"[red]Error: {error}[/red]")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
