"""Test configuration and fixtures."""

import struct
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from smfreader.utils.vlq import encode_variable_length

END_OF_TRACK = bytes([0x00, 0xFF, 0x2F, 0x00])


def header_chunk(fmt: int, num_tracks: int, division: int, length: int = 6) -> bytes:
    """Build an MThd chunk."""
    return b"MThd" + struct.pack(">IhHH", length, fmt, num_tracks, division)


def track_chunk(events: bytes, magic: bytes = b"MTrk") -> bytes:
    """Build an MTrk chunk around an event stream."""
    return magic + struct.pack(">I", len(events)) + events


def event(delta: int, *data: int) -> bytes:
    """Delta-time followed by raw event bytes."""
    return encode_variable_length(delta) + bytes(data)


def meta(delta: int, meta_type: int, payload: bytes) -> bytes:
    """Delta-time followed by a meta event."""
    return (
        encode_variable_length(delta)
        + bytes([0xFF, meta_type])
        + encode_variable_length(len(payload))
        + payload
    )


def tempo(delta: int, microseconds: int) -> bytes:
    """Delta-time followed by a Set Tempo meta event."""
    return meta(delta, 0x51, microseconds.to_bytes(3, "big"))


def build_smf(fmt: int, division: int, *tracks: bytes) -> bytes:
    """Build a complete SMF image from track event streams."""
    return header_chunk(fmt, len(tracks), division) + b"".join(track_chunk(t) for t in tracks)


# Format 0, 480 ticks/qn, running status for note and program change events
FORMAT0_TRACK = (
    meta(0, 0x03, b"Piano")
    + event(0, 0xC0, 0x05)
    + event(0, 0x06)
    + event(0, 0x90, 0x3C, 0x64)
    + event(240, 0x3C, 0x00)
    + event(0, 0x40, 0x64)
    + event(240, 0x80, 0x40, 0x00)
    + END_OF_TRACK
)

# Format 1: tempo track plus two note tracks, tempo change at tick 480
FORMAT1_TEMPO_TRACK = meta(0, 0x03, b"Tempo") + tempo(0, 500000) + tempo(480, 250000) + END_OF_TRACK
FORMAT1_NOTE_TRACK = (
    meta(0, 0x03, b"Lead")
    + event(0, 0x90, 0x3C, 0x64)
    + event(240, 0x80, 0x3C, 0x00)
    + event(240, 0x90, 0x3E, 0x64)
    + event(480, 0x80, 0x3E, 0x00)
    + END_OF_TRACK
)
FORMAT1_BASS_TRACK = (
    event(0, 0x91, 0x24, 0x50)
    + event(480, 0x24, 0x00)
    + event(480, 0x81, 0x24, 0x00)
    + END_OF_TRACK
)


@pytest.fixture
def format0_data():
    """Single-track file using running status."""
    return build_smf(0, 480, FORMAT0_TRACK)


@pytest.fixture
def format1_data():
    """Three-track file with a tempo change at tick 480."""
    return build_smf(1, 480, FORMAT1_TEMPO_TRACK, FORMAT1_NOTE_TRACK, FORMAT1_BASS_TRACK)


@pytest.fixture
def smpte_data():
    """Single-track file with 30 fps x 80 ticks/frame division."""
    track = tempo(0, 250000) + event(2400, 0x90, 0x3C, 0x64) + END_OF_TRACK
    return build_smf(0, 0xE250, track)


@pytest.fixture
def format1_file(tmp_path, format1_data):
    """Path to a format 1 .mid file."""
    path = tmp_path / "song.mid"
    path.write_bytes(format1_data)
    return path
