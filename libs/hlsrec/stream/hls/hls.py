from __future__ import annotations

import logging
from time import monotonic
from typing import TYPE_CHECKING, ClassVar, Generator

from hlsrec.exceptions import StreamError
from hlsrec.stream.hls.m3u8 import parse_m3u8
from hlsrec.stream.hls.segment import HLSSegment
from hlsrec.stream.segmented import SegmentedStreamReader, SegmentedStreamWorker, SegmentedStreamWriter
from hlsrec.utils import LRUCache
from hlsrec.utils.crypto import AES, AES_128, decrypt_aes128, num_to_iv
from hlsrec.utils.url import absolute_url, is_http_url, normalize_url


if TYPE_CHECKING:
    from requests import Response

    from hlsrec.output import FileOutput
    from hlsrec.session import RecorderSession
    from hlsrec.stream.hls.segment import HLSPlaylist, Key


log = logging.getLogger(".".join(__name__.split(".")[:-1]))


def _format_duration(seconds: float) -> str:
    minutes, secs = divmod(seconds, 60)
    hours, minutes = divmod(int(minutes), 60)
    return f"{hours:02d}:{minutes:02d}:{secs:06.3f}"


class KeyStore:
    """Decryption keys by key URI, fetched on first use and kept for the rest of the recording"""

    def __init__(self, session: RecorderSession) -> None:
        self.session = session
        self.keys: dict[str, bytes] = {}

    def __len__(self) -> int:
        return len(self.keys)

    def get(self, uri: str) -> bytes:
        key_data = self.keys.get(uri)
        if key_data is not None:
            return key_data

        log.debug(f"Fetching decryption key: {uri}")
        key_data = self.session.http.get_bytes(uri, exception=StreamError)
        if len(key_data) != AES.block_size:
            raise StreamError(f"Invalid decryption key length of {len(key_data)} bytes: {uri}")

        self.keys[uri] = key_data
        return key_data


class HLSStreamWriter(SegmentedStreamWriter[HLSSegment, bytes]):
    reader: HLSStreamReader
    stream: HLSStream

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.key_store = KeyStore(self.session)

    def decrypt(self, key: Key, num: int, data: bytes) -> bytes:
        if key.error:
            raise StreamError(key.error)

        if key.method.upper() != AES_128:
            log.warning(f"Unable to decrypt cipher {key.method}, writing segment {num} as is")
            return data

        if not key.uri:
            raise StreamError("Missing URI for decryption key")

        key_data = self.key_store.get(key.uri)
        iv = key.iv or num_to_iv(num)

        try:
            return decrypt_aes128(data, key_data, iv)
        except ValueError as err:
            raise StreamError(err) from err

    def fetch(self, segment: HLSSegment) -> bytes | None:
        if self.closed:  # pragma: no cover
            return None

        try:
            return self.session.http.get_bytes(segment.uri, exception=StreamError)
        except StreamError as err:
            log.error(f"Failed to fetch segment {segment.num}: {err}")
            return None

    def write(self, segment: HLSSegment, result: bytes) -> None:
        data = result
        if segment.key and segment.key.method.upper() != "NONE":
            try:
                data = self.decrypt(segment.key, segment.num, result)
            except StreamError as err:
                log.error(f"Failed to decrypt segment {segment.num}: {err}")
                return

        self.reader.output.write(data)
        log.debug(f"Downloaded {segment.uri}")


class HLSStreamWorker(SegmentedStreamWorker[HLSSegment, bytes]):
    reader: HLSStreamReader
    writer: HLSStreamWriter
    stream: HLSStream

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        options = self.session.options

        self.duration: float = float(options.get("hls-duration") or 0)
        self.local_time: bool = bool(options.get("hls-local-time"))
        self.playlist_retry_delay: float = float(options.get("hls-playlist-retry-delay"))
        self.playlist_reload_time: float = float(options.get("hls-playlist-reload-time"))
        self.segment_cache: LRUCache[str] = LRUCache(int(options.get("hls-segment-cache-size")))

        self.playlist_encrypted = False
        self.recorded: float = 0.0
        self.record_start: float = monotonic()

    def _fetch_playlist(self) -> Response:
        return self.session.http.get(
            self.stream.url,
            headers={
                "Cache-Control": "max-age=0, no-cache",
                "Pragma": "no-cache",
            },
            exception=StreamError,
        )

    def reload_playlist(self) -> HLSPlaylist | None:
        """
        Fetches and decodes the playlist, retrying failed requests after a fixed delay until the worker gets closed.

        :raises PlaylistError: if the response can't be decoded as a media playlist
        """
        while not self.closed:
            try:
                res = self._fetch_playlist()
            except StreamError as err:
                log.warning(f"Failed to reload playlist: {err}")
                self.wait(self.playlist_retry_delay)
                continue

            try:
                res.encoding = "utf-8"
                return parse_m3u8(res)
            finally:
                res.close()

        return None

    def _playlist_reload_time(self, playlist: HLSPlaylist) -> float:
        if playlist.targetduration > 0:
            return playlist.targetduration
        return self.playlist_reload_time

    def _update_recorded(self, duration: float) -> None:
        if self.local_time:
            self.recorded = max(self.recorded, monotonic() - self.record_start)
        else:
            self.recorded += max(duration, 0.0)

    def duration_reached(self) -> bool:
        return self.duration > 0 and self.recorded >= self.duration

    def process_segments(self, playlist: HLSPlaylist) -> Generator[HLSSegment, None, None]:
        """Yields the playlist's segments which haven't been seen yet, in playlist order"""
        if not self.playlist_encrypted and any(s.key and s.key.method.upper() != "NONE" for s in playlist.segments):
            log.debug("Segments in this playlist are encrypted")
            self.playlist_encrypted = True

        for index, segment in enumerate(playlist.segments):
            try:
                uri = absolute_url(playlist.uri, segment.uri)
            except ValueError as err:
                log.warning(f"Failed to resolve segment URI {segment.uri!r}: {err}")
                continue

            cache_key = normalize_url(uri)
            if self.segment_cache.lookup(cache_key):
                continue
            self.segment_cache.record(cache_key)

            self._update_recorded(segment.duration)
            num = playlist.media_sequence + index
            log.debug(f"Queued segment {num}: {uri}")
            target = _format_duration(self.duration) if self.duration else "infinite"
            log.info(f"Recorded {_format_duration(self.recorded)} of {target}")

            yield HLSSegment(
                uri=uri,
                num=num,
                key=segment.key,
                duration=segment.duration,
                recorded=self.recorded,
            )

    def iter_segments(self) -> Generator[HLSSegment, None, None]:
        self.recorded = 0.0
        self.record_start = monotonic()

        while not self.closed:
            playlist = self.reload_playlist()
            if playlist is None:
                return

            for segment in self.process_segments(playlist):
                yield segment
                if self.duration_reached():
                    log.info(f"Reached recording duration of {_format_duration(self.duration)}")
                    return

            if playlist.is_endlist:
                log.info("Playlist has ended")
                return

            time_wait = self._playlist_reload_time(playlist)
            log.debug(f"Reloading playlist in {time_wait:.3f}s")
            self.wait(time_wait)


class HLSStreamReader(SegmentedStreamReader[HLSSegment, bytes]):
    __worker__ = HLSStreamWorker
    __writer__ = HLSStreamWriter

    worker: HLSStreamWorker
    writer: HLSStreamWriter
    stream: HLSStream


class HLSStream:
    """
    A live or on-demand HLS media playlist.

    Recording polls the playlist for new segments until it ends or the ``hls-duration`` option's duration
    has been recorded, and appends the segments to the output in playlist order.
    """

    __reader__: ClassVar[type[HLSStreamReader]] = HLSStreamReader

    def __init__(self, session: RecorderSession, url: str, name: str | None = None):
        """
        :param session: Recorder session instance
        :param url: The URL of the HLS media playlist
        :param name: Optional name suffix for the stream's worker and writer threads
        """
        if not is_http_url(url):
            raise StreamError(f"Not an HTTP(S) URL: {url}")

        self.session = session
        self.url = url
        self.name = name

    def __repr__(self):
        return f"<HLSStream({self.url!r})>"

    def open(self, output: FileOutput) -> HLSStreamReader:
        """Opens the output and starts the worker and writer threads"""
        reader = self.__reader__(self, output, name=self.name)
        reader.open()

        return reader

    def record(self, output: FileOutput) -> None:
        """Records the stream into the output, blocking until the recording has finished"""
        reader = self.open(output)
        reader.wait()
