"""
Display formatting utilities for CLI output.

Provides hex strings, event labels, and tempo formatting.
"""

from typing import Optional

import mido

from smfreader.formats.smf.events import META_EVENT, SYSEX_EVENTS
from smfreader.formats.smf.tempo import tempo_value, tick_seconds_to_bpm
from smfreader.utils.vlq import read_variable_length

META_TYPE_NAMES = {
    0x00: "sequence_number",
    0x01: "text",
    0x02: "copyright",
    0x03: "track_name",
    0x04: "instrument_name",
    0x05: "lyrics",
    0x06: "marker",
    0x07: "cue_marker",
    0x20: "channel_prefix",
    0x21: "midi_port",
    0x2F: "end_of_track",
    0x51: "set_tempo",
    0x54: "smpte_offset",
    0x58: "time_signature",
    0x59: "key_signature",
    0x7F: "sequencer_specific",
}

# Meta types whose payload is text
TEXT_META_TYPES = (0x01, 0x02, 0x03, 0x04, 0x05, 0x06, 0x07)


def format_hex(data: bytes, limit: Optional[int] = 16) -> str:
    """
    Format bytes as spaced uppercase hex.

    Args:
        data: Bytes to format
        limit: Maximum number of bytes shown (None for all)

    Returns:
        String like "FF 51 03 07 A1 20", with "…" when truncated
    """
    shown = data if limit is None else data[:limit]
    text = " ".join(f"{b:02X}" for b in shown)
    if limit is not None and len(data) > limit:
        text += " …"
    return text


def describe_event(message: bytes) -> str:
    """
    Human-readable label for a raw event.

    Channel messages are described by mido; meta and sysex events by type.
    """
    if message[0] == META_EVENT:
        return describe_meta(message)

    if message[0] in SYSEX_EVENTS:
        length, _ = read_variable_length(message, 1)
        kind = "sysex" if message[0] == 0xF0 else "sysex_escape"
        return f"{kind} ({length} bytes)"

    try:
        msg = mido.Message.from_bytes(list(message))
    except ValueError:
        return "[red]invalid channel message[/red]"
    return str(msg).rsplit(" time=", 1)[0]


def describe_meta(message: bytes) -> str:
    """Label a meta event (FF type len payload)."""
    meta_type = message[1]
    name = META_TYPE_NAMES.get(meta_type, f"meta_0x{meta_type:02X}")
    length, start = read_variable_length(message, 2)
    payload = message[start:]

    if meta_type == 0x51 and length == 3:
        return f"{name} {tempo_value(message)} us/qn"
    if meta_type in TEXT_META_TYPES:
        return f"{name} {payload.decode('latin-1')!r}"
    if meta_type == 0x58 and length == 4:
        return f"{name} {payload[0]}/{2 ** payload[1]}"
    return name


def format_bpm(tick_seconds: float, division: int) -> str:
    """Format a seconds-per-tick rate as BPM."""
    return f"{tick_seconds_to_bpm(tick_seconds, division):.2f}"


def format_seconds(seconds: float) -> str:
    """Format seconds as m:ss.mmm."""
    minutes, rest = divmod(seconds, 60.0)
    return f"{int(minutes)}:{rest:06.3f}"


def format_division(division: int, using_time_code: bool, tick_rate: float) -> str:
    """Describe the division field."""
    if using_time_code:
        ticks_per_frame = division & 0xFF
        fps = tick_rate / ticks_per_frame
        return f"SMPTE {fps:g} fps x {ticks_per_frame} ticks/frame ({tick_rate:g} ticks/s)"
    return f"{int(tick_rate)} ticks per quarter note"
