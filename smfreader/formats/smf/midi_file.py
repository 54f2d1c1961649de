"""
Decoded Standard MIDI File with per-track event cursors.

This is the low-level interface: each track is read by repeatedly calling
next_event() until it returns (0, None). Absolute ticks are left to the
caller (see smfreader.models.midi_data for the aggregated view).

Example:
    midi = SMFReader.read("song.mid")
    for track in range(midi.num_tracks):
        tick = 0
        while True:
            delta, event = midi.next_event(track)
            if event is None:
                break
            tick += delta
"""

from typing import Iterator, List, Optional, Tuple

from smfreader.formats.smf.chunks import SMFHeader, TrackChunk, parse_header, index_tracks
from smfreader.formats.smf.events import (
    RunningStatus,
    TrackCursor,
    decode_event,
    is_tempo_event,
)
from smfreader.formats.smf.tempo import (
    TempoChange,
    build_tempo_map,
    default_tick_seconds,
    tempo_tick_seconds,
)
from smfreader.utils.validation import validate_track_index


class MidiFile:
    """
    Decoded SMF with one cursor per track.

    The raw buffer, header, track bounds and tempo map are fixed at
    construction; only the track cursors change afterwards. A single
    track's cursor must not be advanced from several threads at once.
    """

    def __init__(
        self,
        data: bytes,
        header: SMFHeader,
        chunks: List[TrackChunk],
        tempo_map: List[TempoChange],
    ):
        self._data = bytes(data)
        self.header = header
        self._chunks = tuple(chunks)
        self._tempo_map = tuple(tempo_map)
        self._cursors = [
            TrackCursor.start(chunk, self._tempo_map[0].tick_seconds) for chunk in self._chunks
        ]

    @classmethod
    def from_bytes(cls, data: bytes) -> "MidiFile":
        """
        Parse a complete SMF image.

        Args:
            data: Raw file contents

        Returns:
            Decoded file ready for iteration

        Raises:
            InvalidHeaderError: If the MThd chunk is malformed
            InvalidTrackHeaderError: If an MTrk chunk is missing or truncated
            CorruptTrackError: If track 0 of a format 1 file cannot be
                scanned for tempo changes
        """
        data = bytes(data)
        header = parse_header(data)
        chunks = index_tracks(data, header.num_tracks)

        if header.format == 1 and not header.using_time_code and chunks:
            tempo_map = build_tempo_map(data, chunks[0], header.division)
        else:
            tempo_map = [TempoChange(tick=0, tick_seconds=default_tick_seconds(header.division))]

        return cls(data, header, chunks, tempo_map)

    # Header fields

    @property
    def format(self) -> int:
        return self.header.format

    @property
    def num_tracks(self) -> int:
        return self.header.num_tracks

    @property
    def division(self) -> int:
        return self.header.division

    @property
    def using_time_code(self) -> bool:
        return self.header.using_time_code

    @property
    def tick_rate(self) -> float:
        return self.header.tick_rate

    @property
    def tempo_map(self) -> Tuple[TempoChange, ...]:
        """Tempo breakpoints ordered by tick; entry 0 is the initial rate."""
        return self._tempo_map

    @property
    def track_chunks(self) -> Tuple[TrackChunk, ...]:
        return self._chunks

    @property
    def raw_data(self) -> bytes:
        return self._data

    # Track cursors

    def next_event(self, track: int) -> Tuple[int, Optional[bytes]]:
        """
        Decode the next event of a track.

        Args:
            track: Track index

        Returns:
            Tuple of (delta ticks, raw event bytes), or (0, None) once the
            track is exhausted

        Raises:
            TrackIndexError: If track is out of range
            CorruptTrackError: If the event stream is malformed; the track
                cursor is not advanced
        """
        cursor = self._cursor(track)
        event = decode_event(self._data, cursor)
        if event is None:
            return 0, None

        if not self.using_time_code:
            if self.format != 1 and is_tempo_event(event.message):
                cursor.tick_seconds = tempo_tick_seconds(event.message, self.division)

            if self.format == 1:
                cursor.ticks += event.delta
                self._follow_tempo_map(cursor)

        return event.delta, event.message

    def next_midi_event(self, track: int) -> Tuple[int, Optional[bytes]]:
        """
        Decode the next channel event, skipping meta and sysex events.

        Returns:
            Tuple of (delta ticks, raw event bytes), or (0, None) at the end
            of the track. The delta includes the deltas of skipped events,
            so it is relative to the previously returned channel event.
        """
        skipped = 0
        while True:
            delta, event = self.next_event(track)
            if event is None:
                return 0, None
            if event[0] < 0xF0:
                return skipped + delta, event
            skipped += delta

    def iter_events(self, track: int) -> Iterator[Tuple[int, bytes]]:
        """Yield (delta ticks, raw event bytes) until the track is exhausted."""
        while True:
            delta, event = self.next_event(track)
            if event is None:
                return
            yield delta, event

    def rewind_track(self, track: int) -> None:
        """Reset a track to its first event and the initial tempo."""
        self._cursor(track).rewind(self._tempo_map[0].tick_seconds)

    def tick_seconds(self, track: int) -> float:
        """Seconds per tick at the track's current position."""
        return self._cursor(track).tick_seconds

    def track_position(self, track: int) -> int:
        """Absolute byte offset of the track cursor."""
        return self._cursor(track).position

    def running_status(self, track: int) -> RunningStatus:
        """Running status the track's next data byte would reuse."""
        return self._cursor(track).status

    def tempo_index(self, track: int) -> int:
        """Index of the tempo map entry in effect for the track."""
        return self._cursor(track).tempo_index

    def _cursor(self, track: int) -> TrackCursor:
        validate_track_index(track, self.num_tracks)
        return self._cursors[track]

    def _follow_tempo_map(self, cursor: TrackCursor) -> None:
        """Adopt every tempo map entry the track's tick count has reached."""
        tempo_map = self._tempo_map
        while (
            cursor.tempo_index < len(tempo_map) - 1
            and tempo_map[cursor.tempo_index + 1].tick <= cursor.ticks
        ):
            cursor.tempo_index += 1
            cursor.tick_seconds = tempo_map[cursor.tempo_index].tick_seconds

    def __repr__(self) -> str:
        return (
            f"MidiFile(format={self.format}, tracks={self.num_tracks}, "
            f"division=0x{self.division:04X})"
        )
