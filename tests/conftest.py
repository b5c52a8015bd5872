from __future__ import annotations

from io import BytesIO

import pytest

from hlsrec.output import FileOutput
from hlsrec.session import RecorderSession


def playlist(*segments, media_sequence=0, targetduration=6, endlist=False, keys=None, header=True):
    """
    Build a media playlist.

    ``segments`` are ``(uri, duration)`` tuples, ``keys`` maps segment indexes to ``EXT-X-KEY`` attribute strings.
    """
    keys = keys or {}
    lines = ["#EXTM3U"] if header else []
    lines.append("#EXT-X-VERSION:3")
    if targetduration is not None:
        lines.append(f"#EXT-X-TARGETDURATION:{targetduration}")
    lines.append(f"#EXT-X-MEDIA-SEQUENCE:{media_sequence}")
    for index, (uri, duration) in enumerate(segments):
        if index in keys:
            lines.append(f"#EXT-X-KEY:{keys[index]}")
        lines.append(f"#EXTINF:{duration:.3f},")
        lines.append(uri)
    if endlist:
        lines.append("#EXT-X-ENDLIST")

    return "\n".join(lines) + "\n"


@pytest.fixture()
def session():
    return RecorderSession()


@pytest.fixture()
def output():
    return FileOutput(fd=BytesIO())
