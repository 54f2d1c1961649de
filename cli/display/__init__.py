"""
CLI display modules.
"""

from cli.display.tables import (
    display_file_info,
    display_tempo_map,
    display_events,
)
from cli.display.hex_view import display_hex_dump

__all__ = [
    "display_file_info",
    "display_tempo_map",
    "display_events",
    "display_hex_dump",
]
