"""
Application use case for rendering sources to the output stream.
Streams every source in order and applies the numbering policy.
"""

from typing import Callable, Iterable, Iterator, Optional

import click
from rich.console import Console

from ..domain.entities import Configuration, NumberingMode, RenderResult, SourceFailure
from ..domain.errors import SourceError
from ..infrastructure.source_resolver import SourceResolver


NUMBER_WIDTH = 6


def format_numbered(index: int, line: str) -> str:
    """Right-align the index in a 6 character field, then a tab and the line."""
    return f"{index:>{NUMBER_WIDTH}}\t{line}"


def number_lines(lines: Iterable[str], mode: NumberingMode) -> Iterator[str]:
    """Apply a numbering policy to the lines of one source.

    Counters start at zero for every call, so each source is numbered
    on its own.
    """
    line_index = 0
    nonblank_index = 0

    for line in lines:
        if mode is NumberingMode.ALL:
            line_index += 1
            yield format_numbered(line_index, line)
        elif mode is NumberingMode.NONBLANK:
            if line:
                nonblank_index += 1
                yield format_numbered(nonblank_index, line)
            else:
                yield ""
        else:
            yield line


def diagnostics_console(**kwargs) -> Console:
    """Console for stderr messages that prints text exactly as given."""
    kwargs.setdefault("stderr", True)
    return Console(
        markup=False,
        highlight=False,
        emoji=False,
        soft_wrap=True,
        **kwargs,
    )


def _echo_line(text: str) -> None:
    # color=True keeps escape sequences from the input intact
    click.echo(text, color=True)


class RenderSourcesUseCase:
    """Concatenates the configured sources onto the output stream."""

    def __init__(
        self,
        config: Configuration,
        resolver: Optional[SourceResolver] = None,
        write_line: Optional[Callable[[str], None]] = None,
        console: Optional[Console] = None,
    ):
        """Initialize with optional dependencies for testing."""
        self.config = config
        self.resolver = resolver or SourceResolver(config.encoding)
        self.write_line = write_line or _echo_line
        self.console = console or diagnostics_console()

    def execute(self) -> RenderResult:
        """Render every source in order.

        Open failures are reported and skipped. A ReadError propagates and
        stops the run; the failing source is closed before it leaves.
        """
        result = RenderResult()

        for token in self.config.sources:
            source = self.resolver.resolve(token)
            try:
                with source.lines() as lines:
                    result.lines_written += self._render(lines)
            except SourceError as e:
                if e.is_fatal:
                    raise
                self._report_failure(e)
                result.failures.append(SourceFailure(token=e.token, reason=e.reason))
                continue

            result.sources_processed += 1

        return result

    def _render(self, lines: Iterable[str]) -> int:
        """Write the numbered lines of one source and return how many were written."""
        written = 0
        for text in number_lines(lines, self.config.numbering):
            self.write_line(text)
            written += 1
        return written

    def _report_failure(self, error: SourceError) -> None:
        self.console.print(f"{error.token}: {error.reason}")
