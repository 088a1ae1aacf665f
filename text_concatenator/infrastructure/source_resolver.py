"""
Source resolution infrastructure.
Turns a source token into a readable stream of lines.
"""

import codecs
from contextlib import contextmanager
from dataclasses import dataclass
from typing import BinaryIO, ContextManager, Iterator, Protocol, runtime_checkable

import click

from ..domain.entities import DEFAULT_ENCODING, STDIN_SENTINEL
from ..domain.errors import OpenError, ReadError


@runtime_checkable
class LineSource(Protocol):
    """Anything that can be opened as a lazy sequence of lines."""

    token: str

    def lines(self) -> ContextManager[Iterator[str]]:
        """Open the source and yield its lines without terminators."""
        ...


def _strip_terminator(line: str) -> str:
    # Only \n ends a line; a \r directly before it belongs to the terminator
    if line.endswith("\n"):
        line = line[:-1]
        if line.endswith("\r"):
            line = line[:-1]
    return line


def _iter_lines(token: str, handle: BinaryIO, encoding: str) -> Iterator[str]:
    """Yield decoded lines from a binary handle, one line at a time.

    Each line is decoded as soon as it is read, so every line before a bad
    one is handed out before the ReadError is raised.
    """
    decoder = codecs.getincrementaldecoder(encoding)()
    while True:
        try:
            raw = handle.readline()
            text = decoder.decode(raw, final=not raw.endswith(b"\n"))
        except (UnicodeDecodeError, OSError) as e:
            raise ReadError(token, e) from e
        if not raw:
            return
        yield _strip_terminator(text)


@dataclass(frozen=True)
class FileSource:
    """A named file on disk."""

    token: str
    encoding: str = DEFAULT_ENCODING

    @contextmanager
    def lines(self) -> Iterator[Iterator[str]]:
        try:
            handle = open(self.token, "rb")
        except OSError as e:
            raise OpenError(self.token, e) from e

        with handle:
            yield _iter_lines(self.token, handle, self.encoding)


@dataclass(frozen=True)
class StdinSource:
    """The process standard input. Never closed by us."""

    token: str = STDIN_SENTINEL
    encoding: str = DEFAULT_ENCODING

    @contextmanager
    def lines(self) -> Iterator[Iterator[str]]:
        try:
            stream = click.get_binary_stream("stdin")
        except (OSError, RuntimeError) as e:
            raise OpenError(self.token, e) from e

        yield _iter_lines(self.token, stream, self.encoding)


def open_source(token: str, encoding: str = DEFAULT_ENCODING) -> LineSource:
    """Pick the source variant for a token."""
    if token == STDIN_SENTINEL:
        return StdinSource(encoding=encoding)
    return FileSource(token, encoding=encoding)


class SourceResolver:
    """Resolves tokens to sources using one decoding for the whole run."""

    def __init__(self, encoding: str = DEFAULT_ENCODING):
        self.encoding = encoding

    def resolve(self, token: str) -> LineSource:
        return open_source(token, self.encoding)
