from __future__ import annotations

from typing import NamedTuple


class Key(NamedTuple):
    method: str
    uri: str | None
    iv: bytes | None
    # set if the key entry can't be used, segments with such a key get skipped
    error: str | None = None


class Segment(NamedTuple):
    """A segment entry as declared by the playlist"""

    uri: str
    duration: float
    key: Key | None


class HLSPlaylist(NamedTuple):
    """A snapshot of a media playlist, as returned by a single playlist request"""

    uri: str
    segments: list[Segment]
    media_sequence: int
    targetduration: float
    is_endlist: bool


class HLSSegment(NamedTuple):
    """A queued segment job: a resolved segment URL, its media sequence number and the recorded duration at enqueue time"""

    uri: str
    num: int
    key: Key | None
    duration: float
    recorded: float
