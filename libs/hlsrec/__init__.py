"""
hlsrec records live HTTP Live Streaming (HLS) media playlists.

The playlist is polled until it ends or a target duration has been recorded,
new segments are fetched in playlist order, decrypted if needed, and appended
to a single output file.
"""

__version__ = "1.0.2"
__title__ = "hlsrec"
__license__ = "GPL-3.0-or-later"


from hlsrec.exceptions import HLSRecError, OutputError, PlaylistError, StreamError  # noqa: E402
from hlsrec.session import RecorderSession  # noqa: E402


__all__ = [
    "HLSRecError",
    "OutputError",
    "PlaylistError",
    "RecorderSession",
    "StreamError",
    "__version__",
]
