"""Standard MIDI File format handlers."""

from smfreader.formats.smf.chunks import SMFHeader, TrackChunk, parse_header, index_tracks
from smfreader.formats.smf.events import RunningStatus, TrackCursor, DecodedEvent, decode_event
from smfreader.formats.smf.tempo import TempoChange, build_tempo_map
from smfreader.formats.smf.midi_file import MidiFile
from smfreader.formats.smf.reader import SMFReader, parse

__all__ = [
    "SMFHeader",
    "TrackChunk",
    "parse_header",
    "index_tracks",
    "RunningStatus",
    "TrackCursor",
    "DecodedEvent",
    "decode_event",
    "TempoChange",
    "build_tempo_map",
    "MidiFile",
    "SMFReader",
    "parse",
]
