"""Cross-check decoding against files written and read by mido."""

import io
import sys
from pathlib import Path

import mido
import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))

from smfreader import MidiData, parse


def build_mido_file() -> bytes:
    """Write a two-tempo format 1 file with mido (uses running status)."""
    mid = mido.MidiFile(type=1, ticks_per_beat=480)

    tempo_track = mido.MidiTrack()
    tempo_track.append(mido.MetaMessage("track_name", name="Conductor", time=0))
    tempo_track.append(mido.MetaMessage("set_tempo", tempo=400000, time=0))
    tempo_track.append(mido.MetaMessage("set_tempo", tempo=600000, time=960))

    lead = mido.MidiTrack()
    lead.append(mido.MetaMessage("track_name", name="Lead", time=0))
    lead.append(mido.Message("program_change", channel=2, program=40, time=0))
    lead.append(mido.Message("note_on", channel=2, note=60, velocity=90, time=0))
    lead.append(mido.Message("note_on", channel=2, note=64, velocity=90, time=0))
    lead.append(mido.Message("note_on", channel=2, note=60, velocity=0, time=960))
    lead.append(mido.Message("note_on", channel=2, note=64, velocity=0, time=0))
    lead.append(mido.Message("control_change", channel=2, control=7, value=100, time=0))
    lead.append(mido.Message("pitchwheel", channel=2, pitch=1024, time=240))
    lead.append(mido.Message("sysex", data=[0x7E, 0x7F, 0x09, 0x01], time=240))

    mid.tracks.extend([tempo_track, lead])

    buf = io.BytesIO()
    mid.save(file=buf)
    return buf.getvalue()


class TestMidoCrossCheck:
    """Compare decoded events with mido's reading of the same file."""

    @pytest.fixture
    def mido_data(self):
        return build_mido_file()

    def test_header(self, mido_data):
        """Test header fields."""
        midi = parse(mido_data)

        assert midi.format == 1
        assert midi.num_tracks == 2
        assert midi.division == 480

    def test_events_match(self, mido_data):
        """Test absolute ticks and channel message bytes per track."""
        data = MidiData.from_midi_file(parse(mido_data))
        reference = mido.MidiFile(file=io.BytesIO(mido_data))

        for ours, theirs in zip(data, reference.tracks):
            assert len(ours) == len(theirs)
            tick = 0
            for event, msg in zip(ours, theirs):
                tick += msg.time
                assert event.tick == tick
                assert event.is_meta == msg.is_meta
                if not msg.is_meta and msg.type != "sysex":
                    assert event.message == bytes(msg.bytes())

    def test_sysex_payload_matches(self, mido_data):
        """Test the sysex event body."""
        lead = MidiData.from_midi_file(parse(mido_data))[1]
        sysex = [e for e in lead if e.is_sysex][0]

        assert sysex.payload == bytes([0x7E, 0x7F, 0x09, 0x01, 0xF7])

    def test_tempo_map_matches(self, mido_data):
        """Test the tempo map built from mido's conductor track."""
        midi = parse(mido_data)

        assert [c.tick for c in midi.tempo_map] == [0, 960]
        assert midi.tempo_map[0].tick_seconds == pytest.approx(
            mido.tick2second(1, 480, 400000)
        )
        assert midi.tempo_map[1].tick_seconds == pytest.approx(
            mido.tick2second(1, 480, 600000)
        )

    def test_track_duration_matches(self, mido_data):
        """Test wall-clock length computed from tick_seconds against mido."""
        midi = parse(mido_data)
        reference = mido.MidiFile(file=io.BytesIO(mido_data))

        elapsed = 0.0
        while True:
            rate = midi.tick_seconds(1)
            delta, message = midi.next_event(1)
            if message is None:
                break
            elapsed += delta * rate

        assert elapsed == pytest.approx(reference.length)
