"""
Error types and validation helpers for Standard MIDI File decoding.
"""


class SMFError(ValueError):
    """Raised when Standard MIDI File data cannot be decoded."""

    pass


class InvalidHeaderError(SMFError):
    """Raised when the MThd header chunk is malformed."""

    pass


class InvalidTrackHeaderError(SMFError):
    """Raised when an MTrk chunk header is missing or truncated."""

    def __init__(self, message: str, track: int, offset: int):
        super().__init__(message)
        self.track = track
        self.offset = offset


class VariableLengthError(SMFError):
    """Raised when a variable-length quantity runs past its bounds."""

    def __init__(self, message: str, offset: int):
        super().__init__(message)
        self.offset = offset


class CorruptTrackError(SMFError):
    """
    Raised when a track's event stream is corrupt.

    The track cursor is left where it was before the failing call, so the
    caller can give up on this track and keep reading the others.

    Attributes:
        track: Track index
        offset: Absolute byte offset where decoding failed
    """

    def __init__(self, message: str, track: int, offset: int):
        super().__init__(f"track {track} @0x{offset:X}: {message}")
        self.track = track
        self.offset = offset


class TrackIndexError(SMFError, IndexError):
    """Raised when a track index is outside the file's track range."""

    pass


def validate_track_index(track: int, num_tracks: int) -> None:
    """
    Validate a track index.

    Args:
        track: Track index requested by the caller
        num_tracks: Number of tracks in the file

    Raises:
        TrackIndexError: If track is not in 0..num_tracks-1
    """
    if not 0 <= track < num_tracks:
        raise TrackIndexError(f"Track index must be 0-{num_tracks - 1}, got {track}")


def validate_smf_header(data: bytes) -> bool:
    """
    Quick check for the MThd magic.

    Args:
        data: File data (at least 4 bytes)

    Returns:
        True if data starts with an SMF header chunk
    """
    if len(data) < 4:
        return False

    return data[:4] == b"MThd"
