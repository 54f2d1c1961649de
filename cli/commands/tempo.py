"""
Tempo command - display the tempo map.
"""

from pathlib import Path

import typer

from cli.commands.info import load_midi_file
from cli.display.tables import display_tempo_map

app = typer.Typer()


@app.command()
def tempo(
    file: Path = typer.Argument(..., help="MIDI file to inspect"),
) -> None:
    """
    Show the tempo map (tick, seconds per tick, BPM).

    For format 1 files the map is read from track 0 and shared by all
    tracks. Other formats show only the initial rate.

    Examples:

        smfread tempo song.mid
    """
    midi = load_midi_file(file)
    display_tempo_map(midi)


if __name__ == "__main__":
    app()
