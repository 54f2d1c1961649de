"""
Aggregated MIDI data: tracks of events at absolute ticks.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, List, Optional, Union

from smfreader.formats.smf.events import META_EVENT, META_TRACK_NAME, SYSEX_EVENTS
from smfreader.formats.smf.midi_file import MidiFile
from smfreader.formats.smf.reader import SMFReader
from smfreader.utils.vlq import read_variable_length


@dataclass(frozen=True)
class MidiEvent:
    """
    A raw event at an absolute tick.

    Attributes:
        tick: Absolute tick from the start of the track
        message: Raw event bytes as stored in the file
    """

    tick: int
    message: bytes

    @property
    def length(self) -> int:
        return len(self.message)

    @property
    def is_meta(self) -> bool:
        return self.message[0] == META_EVENT

    @property
    def is_sysex(self) -> bool:
        return self.message[0] in SYSEX_EVENTS

    @property
    def is_channel(self) -> bool:
        return self.message[0] < 0xF0

    @property
    def meta_type(self) -> Optional[int]:
        """Meta event type byte, None for other events."""
        return self.message[1] if self.is_meta else None

    @property
    def payload(self) -> bytes:
        """Meta/sysex payload without the length prefix; channel data bytes otherwise."""
        if self.is_meta:
            _, start = read_variable_length(self.message, 2)
            return self.message[start:]
        if self.is_sysex:
            _, start = read_variable_length(self.message, 1)
            return self.message[start:]
        return self.message[1:]


@dataclass
class MidiTrack:
    """A named list of events."""

    name: str = ""
    events: List[MidiEvent] = field(default_factory=list)

    def append(self, event: MidiEvent) -> None:
        self.events.append(event)

    @property
    def end_tick(self) -> int:
        """Absolute tick of the last event (0 for an empty track)."""
        return self.events[-1].tick if self.events else 0

    def __len__(self) -> int:
        return len(self.events)

    def __getitem__(self, index: int) -> MidiEvent:
        return self.events[index]

    def __iter__(self) -> Iterator[MidiEvent]:
        return iter(self.events)


@dataclass
class MidiData:
    """
    All tracks of a MIDI file with absolute event ticks.

    Example:
        data = MidiData.from_midi_file(SMFReader.read("song.mid"))
        for track in data:
            print(track.name, len(track))
    """

    format: int
    division: int
    tracks: List[MidiTrack] = field(default_factory=list)
    name: str = ""

    def append(self, track: MidiTrack) -> None:
        self.tracks.append(track)

    def __len__(self) -> int:
        return len(self.tracks)

    def __getitem__(self, index: int) -> MidiTrack:
        return self.tracks[index]

    def __iter__(self) -> Iterator[MidiTrack]:
        return iter(self.tracks)

    @classmethod
    def from_midi_file(cls, midi_file: MidiFile) -> "MidiData":
        """
        Read every track of a MidiFile into absolute-tick events.

        Each track is rewound before and after reading, so the MidiFile
        can still be iterated afterwards.

        Args:
            midi_file: Decoded file

        Returns:
            Aggregated MidiData

        Raises:
            CorruptTrackError: If a track's event stream is malformed
        """
        data = cls(format=midi_file.format, division=midi_file.division)

        for index in range(midi_file.num_tracks):
            midi_file.rewind_track(index)
            track = MidiTrack()
            tick = 0

            for delta, message in midi_file.iter_events(index):
                tick += delta
                event = MidiEvent(tick=tick, message=message)
                if not track.name and event.meta_type == META_TRACK_NAME:
                    track.name = event.payload.decode("latin-1")
                track.append(event)

            midi_file.rewind_track(index)
            data.append(track)

        if data.tracks:
            data.name = data.tracks[0].name

        return data


def read_midi(filepath: Union[str, Path]) -> MidiData:
    """Read a .mid file into MidiData."""
    return MidiData.from_midi_file(SMFReader.read(filepath))
