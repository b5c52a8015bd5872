from __future__ import annotations

import argparse

from hlsrec import __version__
from hlsrec.logger import LOG_LEVELS
from hlsrec.session import DEFAULT_USER_AGENT
from hlsrec.utils.times import hours_minutes_seconds
from hlsrec.utils.url import is_http_url


def playlist_url(value: str) -> str:
    if not is_http_url(value):
        raise argparse.ArgumentTypeError(f"{value!r} is not an HTTP(S) URL")
    return value


def duration(value: str) -> float:
    try:
        return hours_minutes_seconds(value)
    except ValueError as err:
        raise argparse.ArgumentTypeError(str(err)) from None


def num(type_, ge=None):
    def func(value):
        value = type_(value)
        if ge is not None and value < ge:
            raise argparse.ArgumentTypeError(f"{type_.__name__} value must be >={ge}, but is {value}")
        return value

    func.__name__ = type_.__name__

    return func


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hlsrec",
        usage="%(prog)s [OPTIONS] <media-playlist-url> <output-file>",
        description="HTTP Live Streaming (HLS) recorder.",
    )

    parser.add_argument(
        "url",
        metavar="media-playlist-url",
        type=playlist_url,
        help="The URL of the HLS media playlist.",
    )
    parser.add_argument(
        "output",
        metavar="output-file",
        help="The file the segments get written to, or - for standard output.",
    )

    general = parser.add_argument_group("General options")
    general.add_argument(
        "-V", "--version",
        action="version",
        version=f"%(prog)s {__version__}",
        help="Show version number and exit.",
    )
    general.add_argument(
        "--loglevel",
        metavar="LEVEL",
        choices=LOG_LEVELS,
        default="info",
        help="Set the log message threshold. Valid levels are: none, error, warning, info, debug. Default is: info.",
    )

    recording = parser.add_argument_group("Recording options")
    recording.add_argument(
        "-t", "--duration",
        metavar="DURATION",
        type=duration,
        default=0.0,
        help="""
        Recording duration, e.g. 90, 01:30:00 or 1h30m. Default is 0, which records until the playlist ends.
        """,
    )
    recording.add_argument(
        "-l", "--local-time",
        action="store_true",
        help="Use the local clock to track the recorded duration instead of the playlist's segment durations.",
    )
    recording.add_argument(
        "--segment-threads",
        metavar="COUNT",
        type=num(int, ge=1),
        default=1,
        help="The number of segments fetched concurrently. Segments are always written in playlist order. Default is 1.",
    )

    http = parser.add_argument_group("HTTP options")
    http.add_argument(
        "--ua", "--user-agent",
        dest="user_agent",
        metavar="USER_AGENT",
        default=DEFAULT_USER_AGENT,
        help=f"User-Agent of all HTTP requests. Default is: {DEFAULT_USER_AGENT}.",
    )
    http.add_argument(
        "--http-header",
        metavar="KEY=VALUE",
        action="append",
        default=[],
        help="A HTTP header to add to each HTTP request. Can be repeated.",
    )
    http.add_argument(
        "--http-proxy",
        metavar="HTTP_PROXY",
        help="A HTTP proxy to use for all HTTP requests.",
    )
    http.add_argument(
        "--http-timeout",
        metavar="TIMEOUT",
        type=num(float, ge=0),
        help="General timeout of each HTTP request in seconds.",
    )
    http.add_argument(
        "--http-no-ssl-verify",
        action="store_true",
        help="Don't attempt to verify SSL certificates.",
    )

    return parser


__all__ = ["build_parser"]
