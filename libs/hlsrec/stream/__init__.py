from hlsrec.stream.hls import HLSStream
from hlsrec.stream.segmented import SegmentQueue


__all__ = ["HLSStream", "SegmentQueue"]
