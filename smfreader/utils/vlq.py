"""
Variable-length quantity (VLQ) helpers.

SMF stores delta-times and meta/sysex lengths as big-endian base-128
integers. Each byte carries 7 data bits; the high bit is set on every
byte except the last one.

Example:
    0x00        -> 0x00
    0x7F        -> 0x7F
    0x80        -> 0x81 0x00
    0x3FFF      -> 0xFF 0x7F
    0x4000      -> 0x81 0x80 0x00
"""

from typing import Optional, Tuple

from smfreader.utils.validation import VariableLengthError


def read_variable_length(data: bytes, offset: int, end: Optional[int] = None) -> Tuple[int, int]:
    """
    Decode a variable-length quantity.

    Args:
        data: Buffer to read from
        offset: Offset of the first VLQ byte
        end: Exclusive read limit (defaults to len(data))

    Returns:
        Tuple of (value, offset just past the last consumed byte)

    Raises:
        VariableLengthError: If no terminating byte is found before end

    Example:
        >>> read_variable_length(bytes([0x81, 0x80, 0x00]), 0)
        (16384, 3)
    """
    if end is None:
        end = len(data)

    value = 0
    position = offset

    while True:
        if position >= end:
            raise VariableLengthError(
                f"Variable-length quantity at 0x{offset:X} is not terminated", offset
            )
        byte = data[position]
        position += 1
        value = (value << 7) | (byte & 0x7F)
        if not byte & 0x80:
            return value, position


def encode_variable_length(value: int) -> bytes:
    """
    Encode a non-negative integer as a variable-length quantity.

    Args:
        value: Integer to encode

    Returns:
        Encoded bytes (at least one byte)
    """
    if value < 0:
        raise ValueError(f"Variable-length value must be non-negative, got {value}")

    groups = [value & 0x7F]
    value >>= 7
    while value:
        groups.append((value & 0x7F) | 0x80)
        value >>= 7

    return bytes(reversed(groups))
