"""
Hex dump display utilities.
"""

from typing import List, Optional, Tuple

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel

console = Console()

# (start, end, style) in absolute file offsets
Region = Tuple[int, int, str]


def chunk_regions(chunk_start: int, payload_end: int) -> List[Region]:
    """Color regions for a chunk: magic, length field, payload."""
    return [
        (chunk_start, chunk_start + 4, "bold cyan"),
        (chunk_start + 4, chunk_start + 8, "yellow"),
        (chunk_start + 8, payload_end, "white"),
    ]


def _style_at(offset: int, regions: List[Region]) -> Optional[str]:
    for start, end, style in regions:
        if start <= offset < end:
            return style
    return None


def display_hex_dump(
    data: bytes,
    title: str = "Hex Dump",
    start_offset: int = 0,
    bytes_per_line: int = 16,
    max_lines: int = 32,
    regions: Optional[List[Region]] = None,
) -> None:
    """
    Display a hex dump with Rich.

    Args:
        data: Bytes to show
        title: Panel title
        start_offset: File offset of data[0], used for addresses and regions
        bytes_per_line: Bytes per row
        max_lines: Rows shown before truncating
        regions: Optional color regions in file offsets
    """
    regions = regions or []
    lines = []
    end = min(len(data), max_lines * bytes_per_line)

    for offset in range(0, end, bytes_per_line):
        chunk = data[offset : offset + bytes_per_line]
        addr = start_offset + offset

        hex_parts = []
        for i, b in enumerate(chunk):
            if i == 8:
                hex_parts.append("")  # Extra space at midpoint
            style = _style_at(addr + i, regions)
            hex_parts.append(f"[{style}]{b:02X}[/{style}]" if style else f"{b:02X}")
        hex_str = " ".join(hex_parts)

        # Pad by visible width since markup tags take no space
        visible = len(chunk) * 3 - 1 + (1 if len(chunk) > 8 else 0)
        padding = " " * (bytes_per_line * 3 - visible)

        ascii_str = "".join(chr(b) if 32 <= b < 127 else "." for b in chunk)

        lines.append(f"[dim]{addr:08X}[/dim]  {hex_str}{padding}  [cyan]{escape(ascii_str)}[/cyan]")

    if len(data) > end:
        remaining = len(data) - end
        lines.append(f"[dim]... {remaining} more bytes ...[/dim]")

    content = "\n".join(lines) if lines else "[dim](empty)[/dim]"
    console.print(Panel(content, title=title, border_style="blue", expand=False))
