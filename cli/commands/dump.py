"""
Dump command - annotated hex dump of SMF chunks.
"""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel

from smfreader.formats.smf.chunks import CHUNK_HEADER_SIZE, HEADER_SIZE
from cli.commands.info import load_midi_file
from cli.display.hex_view import chunk_regions, display_hex_dump

console = Console()
app = typer.Typer()


@app.command()
def dump(
    file: Path = typer.Argument(..., help="MIDI file to dump"),
    track: Optional[int] = typer.Option(
        None, "--track", "-t", help="Track chunk to dump (default: header chunk)"
    ),
    max_lines: int = typer.Option(32, "--lines", "-n", help="Maximum lines to show"),
) -> None:
    """
    Annotated hex dump of the header chunk or a track chunk.

    Examples:

        smfread dump song.mid

        smfread dump song.mid --track 1 --lines 64
    """
    midi = load_midi_file(file)
    data = midi.raw_data

    if track is None:
        console.print(
            Panel(
                f"[bold]File:[/bold] {file}\n"
                f"[bold]Size:[/bold] {len(data)} bytes\n"
                f"[bold]Chunk:[/bold] MThd (0x000000-0x{HEADER_SIZE - 1:06X})",
                title="[bold]Header Chunk[/bold]",
                border_style="cyan",
                expand=False,
            )
        )
        display_hex_dump(
            data[:HEADER_SIZE],
            title="MThd",
            max_lines=max_lines,
            regions=chunk_regions(0, HEADER_SIZE),
        )
        return

    if not 0 <= track < midi.num_tracks:
        console.print(f"[red]Error: Track must be 0-{midi.num_tracks - 1}, got {track}[/red]")
        raise typer.Exit(1)

    chunk = midi.track_chunks[track]
    start = chunk.offset - CHUNK_HEADER_SIZE

    console.print(
        Panel(
            f"[bold]File:[/bold] {file}\n"
            f"[bold]Chunk:[/bold] MTrk #{track}\n"
            f"[bold]Header:[/bold] 0x{start:06X}\n"
            f"[bold]Payload:[/bold] 0x{chunk.offset:06X}-0x{chunk.end - 1:06X} "
            f"({chunk.length} bytes)",
            title="[bold]Track Chunk[/bold]",
            border_style="cyan",
            expand=False,
        )
    )
    display_hex_dump(
        data[start : chunk.end],
        title=f"MTrk {track}",
        start_offset=start,
        max_lines=max_lines,
        regions=chunk_regions(start, chunk.end),
    )


if __name__ == "__main__":
    app()
