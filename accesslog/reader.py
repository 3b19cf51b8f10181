"""Line scanning and in-place truncation over an open binary log handle."""

from typing import BinaryIO, Generator


def read_lines(handle: BinaryIO) -> Generator[tuple[int, bytes], None, None]:
    """Yield (line_number, raw) for each line, numbered from 1.

    The trailing ``\\n`` and at most one ``\\r`` before it are stripped. A
    final line without a terminator is still yielded; a terminating newline
    does not produce an extra empty line.
    """
    for line_number, line in enumerate(handle, 1):
        if line.endswith(b"\n"):
            line = line[:-1]
        if line.endswith(b"\r"):
            line = line[:-1]
        yield line_number, line


def truncate(handle: BinaryIO) -> None:
    """Destroy the file's content through *handle* (opened for writing)."""
    handle.seek(0)
    handle.truncate(0)
    handle.flush()
