from __future__ import annotations

import logging
from typing import Any

from hlsrec import __version__
from hlsrec.session.http import HTTPSession
from hlsrec.session.options import RecorderOptions


log = logging.getLogger(".".join(__name__.split(".")[:-1]))

DEFAULT_USER_AGENT = f"hlsrec/{__version__}"


class RecorderSession:
    """
    The configuration shared by the playlist worker and the segment writer.

    Holds the HTTP client, which every request goes through, and the recorder's options.
    A session is created once per recording and passed explicitly to the stream.
    """

    def __init__(self, options: dict[str, Any] | None = None):
        self.http = HTTPSession()
        self.options = RecorderOptions(self)
        self.options.set("user-agent", DEFAULT_USER_AGENT)
        if options:
            self.options.update(options)

    def set_option(self, key: str, value: Any) -> None:
        """
        Sets general options used by the recorder session and its streams.

        :param key: key of the option
        :param value: value to set the option to
        """
        self.options.set(key, value)

    def get_option(self, key: str) -> Any:
        """
        Returns the current value of the specified option.

        :param key: key of the option
        """
        return self.options.get(key)

    def hls(self, url: str, **kwargs):
        """Create an :class:`HLSStream` of the given media playlist URL, bound to this session"""
        from hlsrec.stream.hls import HLSStream  # noqa: PLC0415

        log.debug(f"Creating HLS stream: {url}")
        return HLSStream(self, url, **kwargs)
