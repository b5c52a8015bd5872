import queue
import threading

import pytest

from hlsrec.exceptions import StreamError
from hlsrec.stream.segmented import SegmentQueue


def test_fifo_order():
    q: SegmentQueue[int] = SegmentQueue(4)
    for item in (1, 2, 3):
        assert q.put(item)

    assert len(q) == 3
    assert [q.get(), q.get(), q.get()] == [1, 2, 3]


def test_close_drains_remaining_items():
    q: SegmentQueue[int] = SegmentQueue(4)
    q.put(1)
    q.put(2)
    q.close()

    assert q.get() == 1
    assert q.get() == 2
    assert q.get() is None
    assert q.get() is None


def test_put_after_close():
    q: SegmentQueue[int] = SegmentQueue(4)
    q.close()

    with pytest.raises(StreamError, match="closed queue"):
        q.put(1)


def test_get_non_blocking():
    q: SegmentQueue[int] = SegmentQueue(1)

    with pytest.raises(queue.Empty):
        q.get(block=False)


def test_put_blocks_when_full():
    q: SegmentQueue[int] = SegmentQueue(1)
    q.put(1)

    done = threading.Event()

    def producer():
        q.put(2)
        done.set()

    thread = threading.Thread(target=producer, daemon=True)
    thread.start()

    assert not done.wait(0.1), "put must block while the queue is full"
    assert q.get() == 1
    assert done.wait(2)
    assert q.get() == 2
    thread.join(2)


def test_get_blocks_until_closed():
    q: SegmentQueue[int] = SegmentQueue(1)
    result = []

    thread = threading.Thread(target=lambda: result.append(q.get()), daemon=True)
    thread.start()
    thread.join(0.1)
    assert thread.is_alive()

    q.close()
    thread.join(2)
    assert result == [None]


def test_abort_unblocks_producer():
    q: SegmentQueue[int] = SegmentQueue(1)
    q.put(1)
    result = []

    thread = threading.Thread(target=lambda: result.append(q.put(2)), daemon=True)
    thread.start()
    thread.join(0.1)

    q.abort()
    thread.join(2)
    assert result == [False]
    assert len(q) == 0
    assert q.get() is None
    assert not q.put(3)


def test_invalid_size():
    with pytest.raises(ValueError, match="at least 1"):
        SegmentQueue(0)
