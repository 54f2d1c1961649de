#!/usr/bin/env python3
"""
Example: Basic MIDI file analysis

Shows how to walk the tracks of a MIDI file with the cursor API and
convert ticks to seconds.
"""

import sys

sys.path.insert(0, "..")

from smfreader import SMFReader, CorruptTrackError


def main():
    if len(sys.argv) < 2:
        print("usage: basic_analysis.py FILE.mid")
        sys.exit(1)

    midi = SMFReader.read(sys.argv[1])

    # Header
    print(f"Format: {midi.format}")
    print(f"Tracks: {midi.num_tracks}")
    print(f"Division: 0x{midi.division:04X}")
    print(f"SMPTE: {midi.using_time_code}")
    print()

    # Tempo map
    print("Tempo map:")
    for change in midi.tempo_map:
        print(f"  tick {change.tick}: {change.tick_seconds * 1000:.4f} ms/tick")
    print()

    # Channel events per track with wall-clock time
    for track in range(midi.num_tracks):
        tick = 0
        seconds = 0.0
        count = 0
        last_tick, last_seconds = 0, 0.0
        try:
            while True:
                rate = midi.tick_seconds(track)
                delta, event = midi.next_event(track)
                if event is None:
                    break
                tick += delta
                seconds += delta * rate
                if event[0] < 0xF0:
                    count += 1
                    last_tick, last_seconds = tick, seconds
        except CorruptTrackError as e:
            print(f"Track {track}: {e}")
            continue

        print(f"Track {track}: {count} channel events, last at tick {last_tick} ({last_seconds:.3f}s)")


if __name__ == "__main__":
    main()
