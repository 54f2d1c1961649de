"""Utility functions for smfreader."""

from smfreader.utils.vlq import read_variable_length, encode_variable_length
from smfreader.utils.validation import (
    SMFError,
    InvalidHeaderError,
    InvalidTrackHeaderError,
    VariableLengthError,
    CorruptTrackError,
    TrackIndexError,
    validate_track_index,
)

__all__ = [
    "read_variable_length",
    "encode_variable_length",
    "SMFError",
    "InvalidHeaderError",
    "InvalidTrackHeaderError",
    "VariableLengthError",
    "CorruptTrackError",
    "TrackIndexError",
    "validate_track_index",
]
