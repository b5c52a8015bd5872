from __future__ import annotations

from typing import TYPE_CHECKING

import m3u8
from m3u8.parser import ParseError

from hlsrec.exceptions import PlaylistError
from hlsrec.stream.hls.segment import HLSPlaylist, Key, Segment
from hlsrec.utils.crypto import parse_iv
from hlsrec.utils.url import absolute_url


if TYPE_CHECKING:
    from requests import Response


EXTM3U = "#EXTM3U"


def _parse_key(key: m3u8.Key | None, base_uri: str) -> Key | None:
    if key is None or not key.method:
        return None

    uri = key.uri
    if uri:
        try:
            uri = absolute_url(base_uri, uri)
        except ValueError as err:
            return Key(method=key.method, uri=None, iv=None, error=f"Invalid key URI {uri!r}: {err}")

    iv = None
    if key.iv:
        try:
            iv = parse_iv(key.iv)
        except ValueError as err:
            return Key(method=key.method, uri=uri, iv=None, error=f"Invalid key IV {key.iv!r}: {err}")

    return Key(method=key.method, uri=uri, iv=iv)


def parse_m3u8(data: str | Response, base_uri: str | None = None) -> HLSPlaylist:
    """
    Decode the content of a media playlist.

    :param data: The playlist's text content, or the response of the playlist request
    :param base_uri: The playlist's own URL, used for resolving key URIs, defaults to the response URL
    :raises PlaylistError: if the content is not a valid media playlist
    """
    if not isinstance(data, str):
        base_uri = base_uri or data.url
        data = data.text

    base_uri = base_uri or ""
    content = data.lstrip("\ufeff").strip()
    if not content.startswith(EXTM3U):
        raise PlaylistError(f"Missing {EXTM3U} header")

    try:
        playlist = m3u8.loads(content)
    except (ParseError, ValueError, TypeError) as err:
        raise PlaylistError(f"Unable to parse playlist: {err}") from err

    if playlist.is_variant:
        raise PlaylistError("Not a valid media playlist")

    segments = []
    for segment in playlist.segments:
        if not segment.uri:
            continue
        segments.append(Segment(
            uri=segment.uri,
            duration=float(segment.duration or 0),
            key=_parse_key(segment.key, base_uri),
        ))

    return HLSPlaylist(
        uri=base_uri,
        segments=segments,
        media_sequence=int(playlist.media_sequence or 0),
        targetduration=float(playlist.target_duration or 0),
        is_endlist=bool(playlist.is_endlist),
    )


__all__ = ["EXTM3U", "parse_m3u8"]
