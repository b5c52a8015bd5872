class HLSRecError(Exception):
    """Any error caused by hlsrec will be caught with this exception."""


class StreamError(HLSRecError):
    """Recoverable errors of a single request, segment or key."""


class PlaylistError(HLSRecError):
    """The playlist response could not be decoded as a media playlist."""


class OutputError(HLSRecError):
    """The output could not be opened or written to."""


__all__ = [
    "HLSRecError",
    "StreamError",
    "PlaylistError",
    "OutputError",
]
