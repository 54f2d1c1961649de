"""
Track event decoder.

Decodes one (delta-ticks, raw event bytes) pair at a time from a track's
event stream, maintaining MIDI running status between calls.

Event layouts (as returned):
    Channel:  status data1 [data2]
    Meta:     FF type <VLQ length> payload
    Sysex:    F0|F7 <VLQ length> payload
"""

from dataclasses import dataclass
from typing import Optional, Tuple

from smfreader.formats.smf.chunks import TrackChunk
from smfreader.utils.validation import CorruptTrackError, VariableLengthError
from smfreader.utils.vlq import read_variable_length

META_EVENT = 0xFF
SYSEX_EVENTS = (0xF0, 0xF7)

META_TEMPO = 0x51
META_TRACK_NAME = 0x03
META_END_OF_TRACK = 0x2F

# Status nibbles followed by a single data byte
SINGLE_DATA_BYTE = (0xC0, 0xD0)


@dataclass(frozen=True)
class RunningStatus:
    """
    Running-status state of a track.

    Either no status has been seen yet (status is None) or the last
    channel-voice status byte is stored for reuse.
    """

    status: Optional[int] = None

    @property
    def is_set(self) -> bool:
        return self.status is not None

    @classmethod
    def voice(cls, status: int) -> "RunningStatus":
        return cls(status=status)


NO_STATUS = RunningStatus()


@dataclass
class TrackCursor:
    """
    Mutable decoding state of one track.

    Attributes:
        chunk: Byte bounds of the track
        position: Next byte to read (chunk.offset <= position <= chunk.end)
        status: Running status
        tick_seconds: Seconds per tick at this position
        ticks: Ticks accumulated since the start of the track
        tempo_index: Index of the tempo map entry currently in effect
    """

    chunk: TrackChunk
    position: int
    status: RunningStatus
    tick_seconds: float
    ticks: int = 0
    tempo_index: int = 0

    @classmethod
    def start(cls, chunk: TrackChunk, tick_seconds: float) -> "TrackCursor":
        """Create a cursor positioned at the start of a track."""
        return cls(chunk=chunk, position=chunk.offset, status=NO_STATUS, tick_seconds=tick_seconds)

    def rewind(self, tick_seconds: float) -> None:
        """Return to the start of the track without reparsing."""
        self.position = self.chunk.offset
        self.status = NO_STATUS
        self.tick_seconds = tick_seconds
        self.ticks = 0
        self.tempo_index = 0

    @property
    def at_end(self) -> bool:
        return self.position >= self.chunk.end


@dataclass(frozen=True)
class DecodedEvent:
    """A single decoded event."""

    delta: int
    message: bytes


def data_length(status: int) -> int:
    """Number of data bytes following a channel-voice status byte."""
    return 1 if (status & 0xF0) in SINGLE_DATA_BYTE else 2


def is_tempo_event(message: bytes) -> bool:
    """Check for a Set Tempo meta event (FF 51 03 tt tt tt)."""
    return (
        len(message) == 6
        and message[0] == META_EVENT
        and message[1] == META_TEMPO
        and message[2] == 0x03
    )


def decode_event(data: bytes, cursor: TrackCursor) -> Optional[DecodedEvent]:
    """
    Decode the next event of a track and advance its cursor.

    Args:
        data: Complete file contents
        cursor: Track cursor to read from; position and running status
            are updated only when an event decodes successfully

    Returns:
        The decoded event, or None if the cursor is at the end of the track

    Raises:
        CorruptTrackError: If the event stream is malformed or an event
            extends past the track's declared length
    """
    if cursor.at_end:
        return None

    chunk = cursor.chunk
    end = chunk.end

    delta, position = _read_length(data, cursor.position, end, chunk)
    if position >= end:
        raise CorruptTrackError("delta-time without an event", chunk.index, position)

    event_start = position
    opcode = data[position]
    position += 1
    status = cursor.status

    if opcode == META_EVENT:
        if position >= end:
            raise CorruptTrackError("meta event without a type", chunk.index, event_start)
        length, payload = _read_length(data, position + 1, end, chunk)
        position = _require(payload, length, end, chunk, event_start)
        message = bytes(data[event_start:position])
        status = NO_STATUS

    elif opcode in SYSEX_EVENTS:
        length, payload = _read_length(data, position, end, chunk)
        position = _require(payload, length, end, chunk, event_start)
        message = bytes(data[event_start:position])
        status = NO_STATUS

    elif opcode & 0x80:
        if opcode > 0xF0:
            raise CorruptTrackError(
                f"invalid channel event status 0x{opcode:02X}", chunk.index, event_start
            )
        count = data_length(opcode)
        data_start = position
        position = _require(data_start, count, end, chunk, event_start)
        message = bytes([opcode]) + bytes(data[data_start:position])
        status = RunningStatus.voice(opcode)

    else:
        if not status.is_set:
            raise CorruptTrackError(
                f"data byte 0x{opcode:02X} without running status", chunk.index, event_start
            )
        # The opcode byte is already the first data byte
        count = data_length(status.status) - 1
        data_start = position
        position = _require(data_start, count, end, chunk, event_start)
        message = bytes([status.status, opcode]) + bytes(data[data_start:position])

    cursor.position = position
    cursor.status = status

    return DecodedEvent(delta=delta, message=message)


def _read_length(data: bytes, offset: int, end: int, chunk: TrackChunk) -> Tuple[int, int]:
    """Read a VLQ bounded by the track end."""
    try:
        return read_variable_length(data, offset, end)
    except VariableLengthError as e:
        raise CorruptTrackError("unterminated variable-length value", chunk.index, e.offset) from e


def _require(offset: int, count: int, end: int, chunk: TrackChunk, event_start: int) -> int:
    """Check that count bytes starting at offset lie within the track."""
    if offset + count > end:
        raise CorruptTrackError(
            f"event needs {count} bytes at 0x{offset:X} but track ends at 0x{end:X}",
            chunk.index,
            event_start,
        )
    return offset + count
