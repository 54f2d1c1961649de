"""
smfreader - Standard MIDI File decoder.

This library provides tools to:
- Validate SMF headers and index track chunks
- Pull time-stamped raw events from each track with running status
- Convert ticks to seconds with the file's tempo map

Example usage:
    from smfreader import SMFReader, MidiData

    # Low-level cursor API
    midi = SMFReader.read("song.mid")
    delta, event = midi.next_event(0)

    # Aggregated tracks with absolute ticks
    data = MidiData.from_midi_file(midi)
"""

__version__ = "0.1.0"
__author__ = "smfreader Contributors"

from smfreader.formats.smf.reader import SMFReader, parse, read_midi_file
from smfreader.formats.smf.midi_file import MidiFile
from smfreader.formats.smf.tempo import TempoChange
from smfreader.models.midi_data import MidiData, MidiTrack, MidiEvent, read_midi
from smfreader.utils.validation import (
    SMFError,
    InvalidHeaderError,
    InvalidTrackHeaderError,
    CorruptTrackError,
    TrackIndexError,
)

__all__ = [
    "SMFReader",
    "parse",
    "read_midi_file",
    "MidiFile",
    "TempoChange",
    "MidiData",
    "MidiTrack",
    "MidiEvent",
    "read_midi",
    "SMFError",
    "InvalidHeaderError",
    "InvalidTrackHeaderError",
    "CorruptTrackError",
    "TrackIndexError",
]
