"""
Rich table displays for MIDI file information.
"""

from typing import List, Optional, Tuple

from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich import box

from smfreader.formats.smf.midi_file import MidiFile
from smfreader.models.midi_data import MidiData
from cli.display.formatters import (
    describe_event,
    format_bpm,
    format_division,
    format_hex,
    format_seconds,
)

console = Console()

FORMAT_NAMES = {
    0: "0 (single track)",
    1: "1 (multi-track, shared tempo map)",
    2: "2 (independent tracks)",
}

# (absolute tick, delta, seconds or None, raw message)
EventRow = Tuple[int, int, Optional[float], bytes]


def display_file_info(filepath: str, midi: MidiFile, data: MidiData) -> None:
    """Display header and per-track summary."""
    timecode = "[yellow]Yes[/yellow]" if midi.using_time_code else "No"

    header_content = f"""[bold]File:[/bold] {filepath}
[bold]Size:[/bold] {len(midi.raw_data)} bytes
[bold]Format:[/bold] {FORMAT_NAMES.get(midi.format, str(midi.format))}
[bold]Tracks:[/bold] {midi.num_tracks}
[bold]Division:[/bold] 0x{midi.division:04X} - {format_division(midi.division, midi.using_time_code, midi.tick_rate)}
[bold]SMPTE Timecode:[/bold] {timecode}
[bold]Tempo Changes:[/bold] {len(midi.tempo_map)}"""

    console.print(
        Panel(
            header_content,
            title="[bold blue]MIDI File Info[/bold blue]",
            border_style="blue",
            expand=False,
        )
    )

    track_table = Table(
        title="Tracks", box=box.ROUNDED, show_header=True, header_style="bold magenta"
    )
    track_table.add_column("#", style="dim", width=3)
    track_table.add_column("Name", style="cyan", width=24)
    track_table.add_column("Offset", style="dim", width=10)
    track_table.add_column("Length", width=8)
    track_table.add_column("Events", width=8)
    track_table.add_column("Channel", width=8)
    track_table.add_column("End Tick", width=10)

    for chunk, track in zip(midi.track_chunks, data.tracks):
        channel_events = sum(1 for e in track if e.is_channel)
        track_table.add_row(
            str(chunk.index),
            track.name or "[dim]-[/dim]",
            f"0x{chunk.offset:06X}",
            str(chunk.length),
            str(len(track)),
            str(channel_events),
            str(track.end_tick),
        )

    console.print(track_table)


def display_tempo_map(midi: MidiFile) -> None:
    """Display the tempo map."""
    table = Table(title="Tempo Map", box=box.ROUNDED, show_header=True, header_style="bold cyan")
    table.add_column("#", style="dim", width=4)
    table.add_column("Tick", width=10)
    table.add_column("Seconds/Tick", width=16)
    table.add_column("BPM", width=10)

    for i, change in enumerate(midi.tempo_map):
        if midi.using_time_code:
            bpm = "[dim]-[/dim]"
        else:
            bpm = format_bpm(change.tick_seconds, midi.division)
        table.add_row(str(i), str(change.tick), f"{change.tick_seconds:.9f}", bpm)

    console.print(table)

    if midi.using_time_code:
        console.print("[dim]SMPTE timecode division: tempo events do not change the tick rate[/dim]")
    elif midi.format != 1:
        console.print("[dim]Tempo events are applied per track as they are read[/dim]")


def display_events(track: int, rows: List[EventRow], show_seconds: bool = False) -> None:
    """Display decoded events of a track."""
    table = Table(
        title=f"Track {track} Events", box=box.SIMPLE, show_header=True, header_style="bold"
    )
    table.add_column("Tick", justify="right", width=10, no_wrap=True)
    table.add_column("Delta", justify="right", width=8, no_wrap=True)
    if show_seconds:
        table.add_column("Time", justify="right", width=10, no_wrap=True)
    # Raw and Event shrink first on narrow consoles
    table.add_column("Raw", style="dim", max_width=30)
    table.add_column("Event", max_width=44)

    for tick, delta, seconds, message in rows:
        row = [str(tick), str(delta)]
        if show_seconds:
            row.append(format_seconds(seconds or 0.0))
        row.extend([format_hex(message, 10), describe_event(message)])
        table.add_row(*row)

    console.print(table)
