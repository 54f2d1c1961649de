"""
Tick clock and tempo map.

Ticks are converted to seconds with a per-track seconds-per-tick rate:

    ticks per quarter note:  0.5 / tick_rate            (default 120 BPM)
    after a tempo event:     tempo_us * 1e-6 / tick_rate
    SMPTE timecode:          1 / tick_rate              (tempo ignored)

Format 1 files keep all tempo changes in track 0. Before the tracks are
handed out, track 0 is scanned once with a private cursor and every
tempo change is recorded at its absolute tick.
"""

from dataclasses import dataclass
from typing import List

from smfreader.formats.smf.chunks import TrackChunk, tick_rate, uses_time_code
from smfreader.formats.smf.events import TrackCursor, decode_event, is_tempo_event

MICROSECONDS = 0.000001


@dataclass(frozen=True)
class TempoChange:
    """
    A tempo map breakpoint.

    Attributes:
        tick: Absolute tick where the rate takes effect
        tick_seconds: Seconds per tick from this tick on
    """

    tick: int
    tick_seconds: float


def default_tick_seconds(division: int) -> float:
    """Initial seconds-per-tick rate derived from the division field."""
    if uses_time_code(division):
        return 1.0 / tick_rate(division)
    return 0.5 / tick_rate(division)


def tempo_value(message: bytes) -> int:
    """Microseconds per quarter note from a tempo meta event."""
    return (message[3] << 16) | (message[4] << 8) | message[5]


def tempo_tick_seconds(message: bytes, division: int) -> float:
    """
    Seconds-per-tick rate for a tempo meta event.

    Args:
        message: Raw tempo event (FF 51 03 tt tt tt)
        division: Raw division field (ticks per quarter note)

    Returns:
        Seconds per tick
    """
    return MICROSECONDS * tempo_value(message) / tick_rate(division)


def tick_seconds_to_bpm(tick_seconds: float, division: int) -> float:
    """Convert a seconds-per-tick rate back to beats per minute."""
    return 60.0 / (tick_seconds * tick_rate(division))


def build_tempo_map(data: bytes, chunk: TrackChunk, division: int) -> List[TempoChange]:
    """
    Collect the tempo changes of a track.

    Multiple tempo changes at the same tick collapse to the last one,
    including changes at tick 0 which replace the default entry.

    Args:
        data: Complete file contents
        chunk: Track holding the tempo events (track 0 of a format 1 file)
        division: Raw division field

    Returns:
        Tempo map ordered by tick; entry 0 is always at tick 0

    Raises:
        CorruptTrackError: If the track cannot be decoded
    """
    tempo_map = [TempoChange(tick=0, tick_seconds=default_tick_seconds(division))]
    cursor = TrackCursor.start(chunk, tempo_map[0].tick_seconds)
    ticks = 0

    while True:
        event = decode_event(data, cursor)
        if event is None:
            break

        ticks += event.delta
        if not is_tempo_event(event.message):
            continue

        change = TempoChange(tick=ticks, tick_seconds=tempo_tick_seconds(event.message, division))
        if ticks > tempo_map[-1].tick:
            tempo_map.append(change)
        else:
            tempo_map[-1] = change

    return tempo_map
