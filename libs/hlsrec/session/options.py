from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar

from hlsrec.options import Options
from hlsrec.session.http import DEFAULT_TIMEOUT
from hlsrec.utils.url import update_scheme


if TYPE_CHECKING:
    from collections.abc import Callable, Iterator, Mapping

    from hlsrec.session.session import RecorderSession


class RecorderOptions(Options):
    """
    The recorder session's options.

    The ``http-*`` and ``user-agent`` options are stored on the session's :class:`HTTPSession` directly,
    so that every playlist, segment and key request carries them.
    """

    def __init__(self, session: RecorderSession) -> None:
        super().__init__({
            "hls-duration": 0.0,                   # 0 == infinite
            "hls-local-time": False,               # track duration using the local clock instead of segment durations
            "hls-segment-queue-size": 1024,
            "hls-segment-cache-size": 1024,
            "hls-playlist-retry-delay": 3.0,
            "hls-playlist-reload-time": 6.0,       # used when the playlist declares no target duration
            "stream-segment-threads": 1,
        })
        self.session = session

    # ---- utils

    @staticmethod
    def _parse_key_equals_value_string(delimiter: str, value: str) -> Iterator[tuple[str, str]]:
        for keyval in value.split(delimiter):
            try:
                key, val = keyval.split("=", 1)
                yield key.strip(), val.strip()
            except ValueError:
                continue

    # ---- getters

    def _get_http_proxy(self, key):
        return self.session.http.proxies.get("http")

    def _get_http_attr(self, key):
        return getattr(self.session.http, self._OPTIONS_HTTP_ATTRS[key])

    def _get_user_agent(self, key):
        return self.session.http.headers.get("User-Agent")

    # ---- setters

    def _set_http_proxy(self, key, value):
        self.session.http.proxies["http"] \
            = self.session.http.proxies["https"] \
            = update_scheme("https://", value, force=False)  # fmt: skip

    def _set_http_attr(self, key, value):
        setattr(self.session.http, self._OPTIONS_HTTP_ATTRS[key], value)

    def _set_http_timeout(self, key, value):
        setattr(self.session.http, self._OPTIONS_HTTP_ATTRS[key], float(value) if value else DEFAULT_TIMEOUT)

    def _set_user_agent(self, key, value):
        self.session.http.headers["User-Agent"] = value

    @staticmethod
    def _factory_set_http_attr_key_equals_value(delimiter: str) -> Callable[[RecorderOptions, str, Any], None]:
        def inner(self: RecorderOptions, key: str, value: Any) -> None:
            getattr(self.session.http, self._OPTIONS_HTTP_ATTRS[key]).update(
                value if isinstance(value, dict) else dict(self._parse_key_equals_value_string(delimiter, value)),
            )

        return inner

    # ----

    _OPTIONS_HTTP_ATTRS: ClassVar[Mapping[str, str]] = {
        "http-headers": "headers",
        "http-ssl-verify": "verify",
        "http-timeout": "timeout",
    }

    _MAP_GETTERS: ClassVar[Mapping[str, Callable[[RecorderOptions, str], Any]]] = {
        "user-agent": _get_user_agent,
        "http-proxy": _get_http_proxy,
        "http-headers": _get_http_attr,
        "http-ssl-verify": _get_http_attr,
        "http-timeout": _get_http_attr,
    }

    _MAP_SETTERS: ClassVar[Mapping[str, Callable[[RecorderOptions, str, Any], None]]] = {
        "user-agent": _set_user_agent,
        "http-proxy": _set_http_proxy,
        "http-headers": _factory_set_http_attr_key_equals_value(";"),
        "http-ssl-verify": _set_http_attr,
        "http-timeout": _set_http_timeout,
    }
