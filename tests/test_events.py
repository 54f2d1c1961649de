"""Tests for the track event decoder."""

import pytest
import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

from smfreader.formats.smf.chunks import TrackChunk
from smfreader.formats.smf.events import (
    NO_STATUS,
    RunningStatus,
    TrackCursor,
    data_length,
    decode_event,
    is_tempo_event,
)
from smfreader.formats.smf.reader import parse
from smfreader.utils.validation import CorruptTrackError, TrackIndexError

from conftest import END_OF_TRACK, build_smf, event, meta


def read_all(midi, track=0):
    """Collect (delta, event) pairs until end of track."""
    return list(midi.iter_events(track))


class TestDecodeEvent:
    """Test cases for decoding events from a cursor."""

    def test_channel_event_sets_running_status(self):
        """Test a full status byte."""
        data = event(96, 0x92, 0x40, 0x7F)
        cursor = TrackCursor.start(TrackChunk(0, 0, len(data)), 0.001)

        decoded = decode_event(data, cursor)

        assert decoded.delta == 96
        assert decoded.message == bytes([0x92, 0x40, 0x7F])
        assert cursor.status == RunningStatus.voice(0x92)
        assert cursor.position == len(data)
        assert cursor.at_end

    def test_end_of_track_returns_none(self):
        """Test that an exhausted cursor yields None."""
        cursor = TrackCursor.start(TrackChunk(0, 0, 0), 0.001)

        assert decode_event(b"", cursor) is None

    def test_data_length(self):
        """Test trailing byte counts per status family."""
        assert data_length(0x80) == 2
        assert data_length(0x9F) == 2
        assert data_length(0xA0) == 2
        assert data_length(0xB3) == 2
        assert data_length(0xC0) == 1
        assert data_length(0xDF) == 1
        assert data_length(0xE0) == 2

    def test_running_status_state(self):
        """Test the tagged running status."""
        assert NO_STATUS.is_set is False
        assert RunningStatus.voice(0x90).is_set is True
        assert RunningStatus.voice(0x90).status == 0x90


class TestNextEvent:
    """Test cases for MidiFile.next_event."""

    def test_format0_sequence(self, format0_data):
        """Test the decoded sequence of a running-status track."""
        midi = parse(format0_data)
        events = read_all(midi)

        assert events == [
            (0, b"\xff\x03\x05Piano"),
            (0, bytes([0xC0, 0x05])),
            (0, bytes([0xC0, 0x06])),
            (0, bytes([0x90, 0x3C, 0x64])),
            (240, bytes([0x90, 0x3C, 0x00])),
            (0, bytes([0x90, 0x40, 0x64])),
            (240, bytes([0x80, 0x40, 0x00])),
            (0, bytes([0xFF, 0x2F, 0x00])),
        ]

    def test_consumes_exactly_track_length(self, format0_data):
        """Test that the cursor ends exactly at the declared length."""
        midi = parse(format0_data)
        chunk = midi.track_chunks[0]

        read_all(midi)

        assert midi.track_position(0) == chunk.offset + chunk.length
        assert midi.next_event(0) == (0, None)
        assert midi.next_event(0) == (0, None)

    def test_running_status_single_data_byte(self):
        """Test running status for channel pressure."""
        track = event(0, 0xD3, 0x10) + event(10, 0x20) + event(10, 0x30) + END_OF_TRACK
        midi = parse(build_smf(0, 96, track))

        events = read_all(midi)

        assert events[:3] == [
            (0, bytes([0xD3, 0x10])),
            (10, bytes([0xD3, 0x20])),
            (10, bytes([0xD3, 0x30])),
        ]

    def test_running_status_two_data_bytes(self):
        """Test running status for pitch bend."""
        track = event(0, 0xE1, 0x00, 0x40) + event(5, 0x7F, 0x7F) + END_OF_TRACK
        midi = parse(build_smf(0, 96, track))

        assert read_all(midi)[1] == (5, bytes([0xE1, 0x7F, 0x7F]))

    def test_meta_event_with_long_length(self):
        """Test a meta event whose length needs a two-byte VLQ."""
        text = b"x" * 200
        track = meta(0, 0x01, text) + END_OF_TRACK
        midi = parse(build_smf(0, 96, track))

        delta, message = midi.next_event(0)

        assert message[:4] == bytes([0xFF, 0x01, 0x81, 0x48])
        assert message[4:] == text

    def test_sysex_events(self):
        """Test F0 and F7 events keep their length prefix."""
        track = (
            event(0, 0xF0, 0x03, 0x43, 0x12, 0xF7)
            + event(20, 0xF7, 0x02, 0x01, 0x02)
            + END_OF_TRACK
        )
        midi = parse(build_smf(0, 96, track))

        events = read_all(midi)

        assert events[0] == (0, bytes([0xF0, 0x03, 0x43, 0x12, 0xF7]))
        assert events[1] == (20, bytes([0xF7, 0x02, 0x01, 0x02]))

    def test_meta_clears_running_status(self):
        """Test that a data byte after a meta event is rejected."""
        track = event(0, 0x90, 0x3C, 0x64) + meta(0, 0x01, b"hi") + event(0, 0x3C, 0x00)
        midi = parse(build_smf(0, 96, track))

        midi.next_event(0)
        midi.next_event(0)
        with pytest.raises(CorruptTrackError, match="without running status"):
            midi.next_event(0)

    def test_sysex_clears_running_status(self):
        """Test that a data byte after a sysex event is rejected."""
        track = event(0, 0x90, 0x3C, 0x64) + event(0, 0xF0, 0x01, 0xF7) + event(0, 0x3C, 0x00)
        midi = parse(build_smf(0, 96, track))

        midi.next_event(0)
        midi.next_event(0)
        with pytest.raises(CorruptTrackError):
            midi.next_event(0)

    def test_data_byte_without_status(self):
        """Test that the first event cannot use running status."""
        midi = parse(build_smf(0, 96, event(0, 0x3C, 0x64) + END_OF_TRACK))

        with pytest.raises(CorruptTrackError) as exc_info:
            midi.next_event(0)

        assert exc_info.value.track == 0
        assert exc_info.value.offset == midi.track_chunks[0].offset + 1

    @pytest.mark.parametrize("status", [0xF1, 0xF2, 0xF3, 0xF6, 0xF8, 0xFE])
    def test_system_status_rejected(self, status):
        """Test that non-sysex system status bytes are invalid in a track."""
        midi = parse(build_smf(0, 96, event(0, status, 0x00, 0x00) + END_OF_TRACK))

        with pytest.raises(CorruptTrackError, match="invalid channel event status"):
            midi.next_event(0)

    def test_event_past_track_end(self):
        """Test that an event overrunning the declared length is rejected."""
        track = event(0, 0x90, 0x3C)
        midi = parse(build_smf(0, 96, track))

        with pytest.raises(CorruptTrackError, match="track ends"):
            midi.next_event(0)

    def test_meta_payload_past_track_end(self):
        """Test a meta length that runs past the track, even with bytes after it."""
        data = build_smf(0, 96, bytes([0x00, 0xFF, 0x01, 0x05, 0x41])) + b"BCDEF"
        midi = parse(data)

        with pytest.raises(CorruptTrackError):
            midi.next_event(0)

    def test_unterminated_delta(self):
        """Test a delta-time VLQ that never ends within the track."""
        midi = parse(build_smf(0, 96, bytes([0x81, 0x80])))

        with pytest.raises(CorruptTrackError, match="variable-length"):
            midi.next_event(0)

    def test_error_leaves_cursor_unchanged(self):
        """Test that a failed call does not advance the cursor."""
        track = event(0, 0x90, 0x3C, 0x64) + event(0, 0xF4)
        midi = parse(build_smf(0, 96, track))
        midi.next_event(0)
        position = midi.track_position(0)

        with pytest.raises(CorruptTrackError):
            midi.next_event(0)

        assert midi.track_position(0) == position

    def test_corrupt_track_does_not_affect_others(self):
        """Test that other tracks stay readable after a stream error."""
        bad = event(0, 0x40, 0x40)
        good = event(0, 0x90, 0x3C, 0x64) + END_OF_TRACK
        midi = parse(build_smf(2, 96, bad, good))

        with pytest.raises(CorruptTrackError):
            midi.next_event(0)

        assert midi.next_event(1) == (0, bytes([0x90, 0x3C, 0x64]))

    def test_is_tempo_event(self):
        """Test tempo event detection."""
        assert is_tempo_event(bytes([0xFF, 0x51, 0x03, 0x07, 0xA1, 0x20]))
        assert not is_tempo_event(bytes([0xFF, 0x51, 0x02, 0x07, 0xA1]))
        assert not is_tempo_event(bytes([0xFF, 0x2F, 0x00]))


class TestNextMidiEvent:
    """Test cases for the channel-event filter."""

    def test_skips_meta_and_sysex(self, format0_data):
        """Test that only channel events are returned."""
        midi = parse(format0_data)
        events = []
        while True:
            delta, message = midi.next_midi_event(0)
            if message is None:
                break
            events.append(message)

        assert all(message[0] < 0xF0 for message in events)
        assert len(events) == 6

    def test_skipped_deltas_are_kept(self):
        """Test that deltas of skipped events are added to the next channel event."""
        track = (
            event(0, 0x90, 0x3C, 0x64)
            + meta(100, 0x01, b"a")
            + event(50, 0xF0, 0x01, 0xF7)
            + event(10, 0x80, 0x3C, 0x00)
            + END_OF_TRACK
        )
        midi = parse(build_smf(0, 96, track))

        assert midi.next_midi_event(0) == (0, bytes([0x90, 0x3C, 0x64]))
        assert midi.next_midi_event(0) == (160, bytes([0x80, 0x3C, 0x00]))
        assert midi.next_midi_event(0) == (0, None)


class TestRewindAndIndex:
    """Test cases for rewinding and track index checks."""

    def test_rewind_restores_start(self, format0_data):
        """Test rewinding after partial consumption."""
        midi = parse(format0_data)
        first = midi.next_event(0)
        start = midi.track_chunks[0].offset
        midi.next_event(0)
        midi.next_event(0)

        midi.rewind_track(0)

        assert midi.track_position(0) == start
        assert midi.next_event(0) == first

    def test_rewind_clears_running_status(self):
        """Test that running status does not survive a rewind."""
        track = event(0, 0x90, 0x3C, 0x64) + END_OF_TRACK
        midi = parse(build_smf(0, 96, track))
        midi.next_event(0)
        assert midi.running_status(0) == RunningStatus.voice(0x90)

        midi.rewind_track(0)

        assert midi.running_status(0) == NO_STATUS

    @pytest.mark.parametrize("track", [-1, 1, 5])
    def test_track_index_errors(self, format0_data, track):
        """Test that every per-track operation rejects bad indices."""
        midi = parse(format0_data)

        with pytest.raises(TrackIndexError):
            midi.next_event(track)
        with pytest.raises(TrackIndexError):
            midi.next_midi_event(track)
        with pytest.raises(TrackIndexError):
            midi.rewind_track(track)
        with pytest.raises(IndexError):
            midi.tick_seconds(track)
