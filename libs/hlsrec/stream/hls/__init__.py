from hlsrec.stream.hls.hls import HLSStream, HLSStreamReader, HLSStreamWorker, HLSStreamWriter, KeyStore
from hlsrec.stream.hls.m3u8 import parse_m3u8
from hlsrec.stream.hls.segment import HLSPlaylist, HLSSegment, Key, Segment


__all__ = [
    "HLSPlaylist",
    "HLSSegment",
    "HLSStream",
    "HLSStreamReader",
    "HLSStreamWorker",
    "HLSStreamWriter",
    "Key",
    "KeyStore",
    "Segment",
    "parse_m3u8",
]
