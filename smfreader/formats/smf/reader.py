"""
Standard MIDI File reader.

Reads .mid files into a MidiFile with per-track event cursors.
"""

from pathlib import Path
from typing import Any, Dict, Union

from smfreader.formats.smf.chunks import HEADER_SIZE, parse_header
from smfreader.formats.smf.midi_file import MidiFile
from smfreader.utils.validation import SMFError, validate_smf_header


class SMFReader:
    """
    Reader for Standard MIDI Files.

    The whole file is loaded into memory before decoding. Structural errors
    abort the parse; no partially decoded file is returned.

    Example:
        midi = SMFReader.read("song.mid")
        print(f"Format {midi.format}, {midi.num_tracks} tracks")
    """

    @classmethod
    def read(cls, filepath: Union[str, Path]) -> MidiFile:
        """
        Read a MIDI file and return a MidiFile.

        Args:
            filepath: Path to .mid file

        Returns:
            Decoded MidiFile
        """
        reader = cls()
        return reader.parse_file(filepath)

    def parse_file(self, filepath: Union[str, Path]) -> MidiFile:
        """
        Parse a MIDI file.

        Args:
            filepath: Path to .mid file

        Returns:
            Decoded MidiFile
        """
        filepath = Path(filepath)

        if not filepath.exists():
            raise FileNotFoundError(f"File not found: {filepath}")

        with open(filepath, "rb") as f:
            data = f.read()

        return self.parse_bytes(data)

    def parse_bytes(self, data: bytes) -> MidiFile:
        """
        Parse MIDI data from bytes.

        Args:
            data: Raw file contents

        Returns:
            Decoded MidiFile
        """
        return MidiFile.from_bytes(data)

    @classmethod
    def can_read(cls, filepath: Union[str, Path]) -> bool:
        """
        Check if a file looks like a Standard MIDI File.

        Args:
            filepath: Path to check

        Returns:
            True if the file starts with a valid MThd chunk
        """
        filepath = Path(filepath)

        if not filepath.exists():
            return False

        with open(filepath, "rb") as f:
            header = f.read(HEADER_SIZE)

        if not validate_smf_header(header):
            return False

        try:
            parse_header(header)
        except SMFError:
            return False
        return True

    @classmethod
    def get_file_info(cls, filepath: Union[str, Path]) -> Dict[str, Any]:
        """
        Read header information without decoding any events.

        Args:
            filepath: Path to .mid file

        Returns:
            Dictionary with size, format, track count and division
        """
        filepath = Path(filepath)
        data = filepath.read_bytes()
        header = parse_header(data)

        return {
            "size": len(data),
            "format": header.format,
            "num_tracks": header.num_tracks,
            "division": header.division,
            "using_time_code": header.using_time_code,
            "tick_rate": header.tick_rate,
        }


def parse(data: bytes) -> MidiFile:
    """Decode a complete SMF image held in memory."""
    return SMFReader().parse_bytes(data)


def read_midi_file(filepath: Union[str, Path]) -> MidiFile:
    """Read and decode a .mid file."""
    return SMFReader.read(filepath)
