from __future__ import annotations

import logging
import sys
from typing import Sequence

from hlsrec import __version__
from hlsrec.exceptions import HLSRecError
from hlsrec.logger import basic_config
from hlsrec.output import FileOutput
from hlsrec.session import RecorderSession
from hlsrec_cli.argparser import build_parser


log = logging.getLogger("hlsrec.cli")

BANNER = (
    f"hlsrec {__version__} - HTTP Live Streaming (HLS) recorder\n"
    "Licensed for use under the GNU GPL version 3 or later.\n"
)


def setup_session(args) -> RecorderSession:
    session = RecorderSession({
        "user-agent": args.user_agent,
        "hls-duration": args.duration,
        "hls-local-time": args.local_time,
        "stream-segment-threads": args.segment_threads,
    })

    if args.http_header:
        session.set_option("http-headers", ";".join(args.http_header))
    if args.http_proxy:
        session.set_option("http-proxy", args.http_proxy)
    if args.http_timeout is not None:
        session.set_option("http-timeout", args.http_timeout)
    if args.http_no_ssl_verify:
        session.set_option("http-ssl-verify", False)

    return session


def main(argv: Sequence[str] | None = None) -> None:
    parser = build_parser()

    sys.stderr.write(BANNER)
    args = parser.parse_args(argv)

    basic_config(args.loglevel)

    session = setup_session(args)
    output = FileOutput(args.output)

    exit_code = 0
    try:
        stream = session.hls(args.url)
        log.info(f"Recording {args.url} to {args.output}")
        stream.record(output)
        log.info(f"Recording finished, {output.bytes_written} bytes written")
    except KeyboardInterrupt:
        log.info("Interrupted! Exiting...")
        exit_code = 130
    except HLSRecError as err:
        log.error(err)
        exit_code = 1

    sys.exit(exit_code)
