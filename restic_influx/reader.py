"""Line sources: stdin or a file, one line at a time.

Undecodable bytes are replaced rather than raised, so a garbled line
reaches the decoder and is dropped there like any other bad line.
"""

import sys
from typing import Generator, TextIO


def read_stream(stream: TextIO) -> Generator[str, None, None]:
    """Yield lines from an open text stream until it is exhausted."""
    for line in stream:
        yield line


def _stdin() -> TextIO:
    if hasattr(sys.stdin, "reconfigure"):
        sys.stdin.reconfigure(encoding="utf-8", errors="replace")
    return sys.stdin


def read_lines(path: str = "-") -> Generator[str, None, None]:
    """Yield lines from path, or from stdin when path is ``-``."""
    if path == "-":
        yield from read_stream(_stdin())
        return

    with open(path, "r", encoding="utf-8", errors="replace") as f:
        yield from read_stream(f)
