"""Data models for aggregated MIDI data."""

from smfreader.models.midi_data import MidiData, MidiTrack, MidiEvent, read_midi

__all__ = [
    "MidiData",
    "MidiTrack",
    "MidiEvent",
    "read_midi",
]
