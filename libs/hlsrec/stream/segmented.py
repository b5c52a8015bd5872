from __future__ import annotations

import logging
import queue
import threading
from collections import deque
from concurrent.futures import Future, ThreadPoolExecutor
from typing import TYPE_CHECKING, ClassVar, Deque, Generator, Generic, TypeVar

from hlsrec.exceptions import StreamError


if TYPE_CHECKING:
    from hlsrec.output import FileOutput


log = logging.getLogger(".".join(__name__.split(".")[:-1]))


TSegment = TypeVar("TSegment")
TResult = TypeVar("TResult")


class SegmentQueue(Generic[TSegment]):
    """
    A bounded FIFO queue which can be closed once by the producer.

    - :meth:`put` blocks while the queue is full
    - :meth:`get` blocks while the queue is empty, and returns ``None`` once the queue
      has been closed and all remaining items have been taken
    - :meth:`abort` drops all pending items and unblocks both sides immediately
    """

    def __init__(self, maxsize: int):
        if maxsize < 1:
            raise ValueError("SegmentQueue size must be at least 1")
        self.maxsize = maxsize
        self.closed = False
        self.aborted = False
        self._items: Deque[TSegment] = deque()
        self._cond = threading.Condition()

    def __len__(self) -> int:
        with self._cond:
            return len(self._items)

    def put(self, item: TSegment) -> bool:
        """Append an item, returns ``False`` if the queue got aborted while waiting for a free slot"""
        with self._cond:
            if self.aborted:
                return False
            if self.closed:
                raise StreamError("Can't add segments to a closed queue")
            while len(self._items) >= self.maxsize and not self.aborted:
                self._cond.wait()
            if self.aborted:
                return False
            self._items.append(item)
            self._cond.notify_all()
            return True

    def get(self, block: bool = True) -> TSegment | None:
        """
        Take the oldest item.

        Raises :class:`queue.Empty` if ``block`` is false and no item is available yet.
        """
        with self._cond:
            while not self._items and not self.closed:
                if not block:
                    raise queue.Empty
                self._cond.wait()
            if not self._items:
                return None
            item = self._items.popleft()
            self._cond.notify_all()
            return item

    def close(self) -> None:
        with self._cond:
            self.closed = True
            self._cond.notify_all()

    def abort(self) -> None:
        with self._cond:
            self.closed = True
            self.aborted = True
            self._items.clear()
            self._cond.notify_all()


class SegmentedStreamWorker(threading.Thread, Generic[TSegment, TResult]):
    """
    The segment producer.

    Iterates over the segments returned by :meth:`iter_segments` and hands them to the writer,
    closing the writer's queue once the iteration has finished.
    """

    reader: SegmentedStreamReader
    writer: SegmentedStreamWriter

    def __init__(self, reader: SegmentedStreamReader, name: str | None = None) -> None:
        super().__init__(daemon=True, name=f"Thread-{name or self.__class__.__name__}")
        self.closed = False
        self.reader = reader
        self.writer = reader.writer
        self.stream = reader.stream
        self.session = reader.session

        self._wait = threading.Event()

    def close(self) -> None:
        """Shuts down the thread"""
        if self.closed:  # pragma: no cover
            return

        log.debug("Closing worker thread")

        self.closed = True
        self._wait.set()

    def wait(self, time: float) -> bool:
        """
        Pauses the thread for a specified time.

        Returns ``False`` if interrupted by another thread and ``True`` if the time runs out normally.
        """
        return not self._wait.wait(time)

    def iter_segments(self) -> Generator[TSegment, None, None]:
        """
        The iterator that generates segments for the worker thread.

        Should be overridden by the inheriting class.
        """
        return
        yield

    def run(self) -> None:
        try:
            for segment in self.iter_segments():
                if self.closed:
                    break
                self.writer.put(segment)

            # End of stream, tells the writer to exit after the remaining segments
            self.writer.put(None)
        except Exception as err:
            self.reader.fail(err)
        finally:
            self.close()


class SegmentedStreamWriter(threading.Thread, Generic[TSegment, TResult]):
    """
    The segment consumer.

    Takes segments off the queue, fetches them using a thread pool and writes the results
    in the same order the segments were queued.
    """

    reader: SegmentedStreamReader

    def __init__(
        self,
        reader: SegmentedStreamReader,
        size: int | None = None,
        threads: int | None = None,
        name: str | None = None,
    ) -> None:
        super().__init__(daemon=True, name=f"Thread-{name or self.__class__.__name__}")
        self.closed = False
        self.reader = reader
        self.stream = reader.stream
        self.session = reader.session

        if not size:
            size = self.session.options.get("hls-segment-queue-size")
        if not threads:
            threads = self.session.options.get("stream-segment-threads")

        self.threads = max(1, int(threads or 1))
        self.executor = ThreadPoolExecutor(max_workers=self.threads)
        self.queue: SegmentQueue[TSegment] = SegmentQueue(int(size))

    def close(self) -> None:
        """Shuts down the thread, its executor and drops all pending segments"""
        if self.closed:  # pragma: no cover
            return

        log.debug("Closing writer thread")

        self.closed = True
        self.queue.abort()
        self.executor.shutdown(wait=False, cancel_futures=True)

    def put(self, segment: TSegment | None) -> None:
        """Adds a segment to the queue, or closes the queue if the segment is ``None``"""
        if self.closed:  # pragma: no cover
            return

        if segment is None:
            self.queue.close()
        else:
            self.queue.put(segment)

    def fetch(self, segment: TSegment) -> TResult | None:
        """
        Fetches a segment.

        Should be overridden by the inheriting class. Returning ``None`` skips the segment.
        """

    def write(self, segment: TSegment, result: TResult) -> None:
        """
        Writes a segment's result to the output.

        Should be overridden by the inheriting class.
        """

    def _write_next(self, pending: Deque[tuple[TSegment, Future]]) -> None:
        segment, future = pending.popleft()
        result = future.result()
        if self.closed or result is None:
            return
        self.write(segment, result)

    def run(self) -> None:
        pending: Deque[tuple[TSegment, Future]] = deque()
        try:
            while not self.closed:
                try:
                    # don't block while fetched segments are waiting to be written
                    segment = self.queue.get(block=not pending)
                except queue.Empty:
                    self._write_next(pending)
                    continue

                if segment is None:
                    break

                pending.append((segment, self.executor.submit(self.fetch, segment)))
                if len(pending) >= self.threads:
                    self._write_next(pending)

            while pending and not self.closed:
                self._write_next(pending)
        except Exception as err:
            self.reader.fail(err)
        finally:
            self.close()


class SegmentedStreamReader(Generic[TSegment, TResult]):
    """
    Connects a worker and a writer thread and the output both of them lead to.

    A fatal error in either thread closes both of them and is raised again by :meth:`wait`.
    """

    __worker__: ClassVar[type[SegmentedStreamWorker]] = SegmentedStreamWorker
    __writer__: ClassVar[type[SegmentedStreamWriter]] = SegmentedStreamWriter

    worker: SegmentedStreamWorker
    writer: SegmentedStreamWriter

    def __init__(self, stream, output: FileOutput, name: str | None = None) -> None:
        self.stream = stream
        self.session = stream.session
        self.output = output
        self.error: BaseException | None = None
        self._lock = threading.Lock()

        self.writer = self.__writer__(self, name=name and f"{name}-writer")
        self.worker = self.__worker__(self, name=name and f"{name}-worker")

    def open(self) -> None:
        # the output must be writable before any segment gets fetched
        self.output.open()

        self.writer.start()
        self.worker.start()

    def fail(self, err: BaseException) -> None:
        with self._lock:
            if self.error is None:
                self.error = err
        self.close()

    def close(self) -> None:
        self.worker.close()
        self.writer.close()

    def wait(self) -> None:
        """Waits until both threads have finished, then closes the output"""
        try:
            self.worker.join()
            self.writer.join()
        except KeyboardInterrupt:
            self.close()
            raise
        finally:
            if not self.worker.is_alive() and not self.writer.is_alive():
                self.output.close()

        if self.error is not None:
            raise self.error
