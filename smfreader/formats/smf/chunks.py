"""
SMF chunk parser.

Parses the MThd header chunk and indexes the MTrk track chunks of a
Standard MIDI File. All integers are big-endian.

Header chunk (14 bytes):
    Offset  Size    Description
    0x00    4       "MThd"
    0x04    4       Header length (always 6)
    0x08    2       Format (0, 1 or 2)
    0x0A    2       Number of tracks
    0x0C    2       Division

Track chunk:
    Offset  Size    Description
    0x00    4       "MTrk"
    0x04    4       Payload length
    0x08    n       Event stream

Division:
    bit 15 clear: ticks per quarter note (bits 14-0)
    bit 15 set:   SMPTE timecode, bits 14-8 = negative frames/sec,
                  bits 7-0 = ticks per frame
"""

from dataclasses import dataclass
from typing import List
import struct

from smfreader.utils.validation import InvalidHeaderError, InvalidTrackHeaderError

HEADER_MAGIC = b"MThd"
TRACK_MAGIC = b"MTrk"
HEADER_LENGTH = 6
HEADER_SIZE = 14
CHUNK_HEADER_SIZE = 8

VALID_FORMATS = (0, 1, 2)


@dataclass(frozen=True)
class SMFHeader:
    """
    Parsed MThd chunk.
    """

    format: int  # 0 single track, 1 shared tempo map, 2 independent
    num_tracks: int
    division: int  # Raw 16-bit division field

    @property
    def using_time_code(self) -> bool:
        """True if the division field encodes SMPTE timecode."""
        return uses_time_code(self.division)

    @property
    def tick_rate(self) -> float:
        """Ticks per quarter note, or ticks per second for timecode files."""
        return tick_rate(self.division)


@dataclass(frozen=True)
class TrackChunk:
    """
    Byte bounds of one track's event stream within the file buffer.
    """

    index: int
    offset: int  # First payload byte
    length: int  # Payload length in bytes

    @property
    def end(self) -> int:
        """Offset just past the last payload byte."""
        return self.offset + self.length


def uses_time_code(division: int) -> bool:
    """Check whether a division field uses SMPTE timecode."""
    return bool(division & 0x8000)


def tick_rate(division: int) -> float:
    """
    Derive the tick rate from a division field.

    Args:
        division: Raw 16-bit division value

    Returns:
        Ticks per second for timecode divisions, otherwise ticks per
        quarter note
    """
    if uses_time_code(division):
        # High byte is a two's complement negative frame rate
        frames = 256 - ((division >> 8) & 0xFF)
        fps = 29.97 if frames == 29 else float(frames)
        return fps * (division & 0x00FF)

    return float(division & 0x7FFF)


def parse_header(data: bytes) -> SMFHeader:
    """
    Parse and validate the MThd chunk.

    Args:
        data: Complete file contents

    Returns:
        Parsed header

    Raises:
        InvalidHeaderError: If the header is missing or malformed
    """
    if len(data) < HEADER_SIZE:
        raise InvalidHeaderError(
            f"File too short for MThd header: {len(data)} bytes (expected {HEADER_SIZE})"
        )

    magic, length, fmt, num_tracks, division = struct.unpack(">4sIhHH", data[:HEADER_SIZE])

    if magic != HEADER_MAGIC:
        raise InvalidHeaderError(
            f"Invalid header: {magic.decode('latin-1')!r}. Expected to be MThd."
        )

    if length != HEADER_LENGTH:
        raise InvalidHeaderError(
            f"Invalid header length: {length} (expected {HEADER_LENGTH}). "
            "Doesn't appear to be a MIDI file."
        )

    if fmt not in VALID_FORMATS:
        raise InvalidHeaderError(f"Invalid format: {fmt} (expected 0, 1 or 2)")

    if fmt == 0 and num_tracks != 1:
        raise InvalidHeaderError(f"Invalid number of tracks for format 0: {num_tracks}")

    if tick_rate(division) <= 0:
        raise InvalidHeaderError(f"Invalid division: 0x{division:04X}")

    return SMFHeader(format=fmt, num_tracks=num_tracks, division=division)


def index_tracks(data: bytes, num_tracks: int, start: int = HEADER_SIZE) -> List[TrackChunk]:
    """
    Locate each MTrk chunk in file order.

    Args:
        data: Complete file contents
        num_tracks: Number of tracks declared by the header
        start: Offset of the first track chunk

    Returns:
        One TrackChunk per track

    Raises:
        InvalidTrackHeaderError: On a wrong chunk magic or a chunk that runs
            past the end of the data
    """
    chunks = []
    offset = start

    for index in range(num_tracks):
        if offset + CHUNK_HEADER_SIZE > len(data):
            raise InvalidTrackHeaderError(
                f"Track {index} header at 0x{offset:X} is truncated", index, offset
            )

        magic, length = struct.unpack_from(">4sI", data, offset)
        if magic != TRACK_MAGIC:
            raise InvalidTrackHeaderError(
                f"Invalid track header for track {index} at 0x{offset:X}: "
                f"{magic.decode('latin-1')!r}. Expected to be MTrk.",
                index,
                offset,
            )

        payload = offset + CHUNK_HEADER_SIZE
        if payload + length > len(data):
            raise InvalidTrackHeaderError(
                f"Track {index} declares {length} bytes but only "
                f"{len(data) - payload} remain",
                index,
                offset,
            )

        chunks.append(TrackChunk(index=index, offset=payload, length=length))
        offset = payload + length

    return chunks
