"""Format handlers for MIDI files."""

from smfreader.formats.smf import SMFReader, MidiFile

__all__ = ["SMFReader", "MidiFile"]
