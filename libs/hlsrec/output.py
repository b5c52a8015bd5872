from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import BinaryIO

from hlsrec.exceptions import OutputError


log = logging.getLogger(__name__)

STDOUT = "-"


class FileOutput:
    """
    The single append-only destination of a recording.

    Writes to the file at ``filename``, to standard output if ``filename`` is ``"-"``,
    or to an already opened binary file object ``fd``.
    """

    def __init__(self, filename: str | Path | None = None, fd: BinaryIO | None = None):
        if filename is None and fd is None:
            raise ValueError("Either a filename or a file object is required")

        self.filename = filename
        self.fd = fd
        self.opened = False
        self.bytes_written = 0
        self._close_fd = False

    def __repr__(self):
        return f"<FileOutput({self.filename or self.fd})>"

    def open(self) -> None:
        if self.opened:
            return

        if self.fd is None:
            if str(self.filename) == STDOUT:
                self.fd = sys.stdout.buffer
            else:
                try:
                    self.fd = open(self.filename, "wb")  # noqa: SIM115
                except OSError as err:
                    raise OutputError(f"Failed to open output: {self.filename} ({err})") from err
                self._close_fd = True

        log.debug(f"Opened output: {self.filename or self.fd}")
        self.opened = True

    def write(self, data: bytes) -> None:
        if not self.opened:
            raise OutputError("Output is not opened")

        try:
            self.fd.write(data)
            self.fd.flush()
        except OSError as err:
            raise OutputError(f"Error when writing to output: {err}") from err

        self.bytes_written += len(data)

    def close(self) -> None:
        if not self.opened:
            return

        self.opened = False
        if self._close_fd:
            self.fd.close()
            self.fd = None
            self._close_fd = False


__all__ = ["FileOutput", "STDOUT"]
