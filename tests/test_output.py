import sys
from io import BytesIO

import pytest

from hlsrec.exceptions import OutputError
from hlsrec.output import FileOutput


def test_requires_target():
    with pytest.raises(ValueError, match="filename or a file object"):
        FileOutput()


def test_file(tmp_path):
    path = tmp_path / "output.ts"
    output = FileOutput(path)
    assert repr(output) == f"<FileOutput({path})>"

    output.open()
    assert output.opened
    output.write(b"foo")
    output.write(b"bar")
    output.close()

    assert not output.opened
    assert output.fd is None
    assert output.bytes_written == 6
    assert path.read_bytes() == b"foobar"


def test_file_truncates(tmp_path):
    path = tmp_path / "output.ts"
    path.write_bytes(b"old content")
    output = FileOutput(path)

    output.open()
    output.write(b"new")
    output.close()

    assert path.read_bytes() == b"new"


def test_open_failure(tmp_path):
    output = FileOutput(tmp_path / "missing" / "output.ts")

    with pytest.raises(OutputError, match="Failed to open output"):
        output.open()
    assert not output.opened


def test_write_not_opened():
    with pytest.raises(OutputError, match="not opened"):
        FileOutput(fd=BytesIO()).write(b"foo")


def test_fd_is_not_closed():
    fd = BytesIO()
    output = FileOutput(fd=fd)

    output.open()
    output.write(b"foo")
    output.close()

    assert not fd.closed
    assert fd.getvalue() == b"foo"


def test_stdout(monkeypatch):
    class FakeStdout:
        buffer = BytesIO()

    monkeypatch.setattr(sys, "stdout", FakeStdout)
    output = FileOutput("-")

    output.open()
    output.write(b"foo")
    output.close()

    assert output.fd is FakeStdout.buffer
    assert FakeStdout.buffer.getvalue() == b"foo"
