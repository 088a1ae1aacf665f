"""
Command line interface for catr.
Builds the run configuration from arguments and renders the sources.
"""

import sys
from pathlib import Path
from typing import Optional, Tuple

import click
from pydantic import ValidationError

from .. import __version__
from ..application.render_sources import RenderSourcesUseCase, diagnostics_console
from ..domain.entities import Configuration, RunSettings, STDIN_SENTINEL
from ..domain.errors import ReadError
from ..infrastructure.config_loader import ConfigurationError, load_run_settings


# Global console for diagnostics, always on stderr
console = diagnostics_console()


def _print_error(message: str, style: Optional[str] = None) -> None:
    console.print(message, style=style)


def _load_settings_or_exit(config_path: Optional[Path]) -> RunSettings:
    """Load the settings file or exit with a clean error."""
    if config_path is None:
        return RunSettings()

    try:
        return load_run_settings(config_path)
    except ConfigurationError as e:
        _print_error("Configuration Error:", style="red")
        _print_error(str(e).replace("Configuration validation failed:\n", ""))
        sys.exit(1)


def _check_numbering_flags(number_all: bool, number_nonblank: bool) -> None:
    if number_all and number_nonblank:
        raise click.UsageError(
            "-n/--number and -b/--number-nonblank are mutually exclusive"
        )


def build_configuration(
    files: Tuple[str, ...],
    number_all: bool,
    number_nonblank: bool,
    encoding: str,
) -> Configuration:
    """Turn parsed arguments into a Configuration, raising UsageError on conflicts."""
    _check_numbering_flags(number_all, number_nonblank)

    try:
        return Configuration(
            sources=list(files) or [STDIN_SENTINEL],
            number_all=number_all,
            number_nonblank=number_nonblank,
            encoding=encoding,
        )
    except ValidationError as e:
        message = e.errors()[0]["msg"].replace("Value error, ", "")
        raise click.UsageError(message) from e


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("files", nargs=-1, metavar="[FILE]...")
@click.option('--number', '-n', 'number_all', is_flag=True,
              help='Number lines')
@click.option('--number-nonblank', '-b', 'number_nonblank', is_flag=True,
              help='Number non-blank lines')
@click.option('--config', '-c',
              type=click.Path(exists=True, dir_okay=False, path_type=Path),
              help='Path to a YAML settings file')
@click.option('--encoding',
              help='Text encoding of the sources (default: utf-8)')
@click.option('--verbose', '-v', is_flag=True,
              help='Enable verbose output')
@click.version_option(__version__, prog_name="catr")
def cli(
    files: Tuple[str, ...],
    number_all: bool,
    number_nonblank: bool,
    config: Optional[Path],
    encoding: Optional[str],
    verbose: bool,
):
    """
    Concatenate FILE(s) to standard output.

    With no FILE, or when FILE is -, read standard input.
    """
    _check_numbering_flags(number_all, number_nonblank)
    settings = _load_settings_or_exit(config)
    verbose = verbose or settings.verbose

    configuration = build_configuration(
        files, number_all, number_nonblank, encoding or settings.encoding
    )

    use_case = RenderSourcesUseCase(configuration, console=console)

    try:
        result = use_case.execute()
    except ReadError as e:
        _print_error(str(e), style="red")
        if verbose:
            console.print_exception()
        sys.exit(1)

    if verbose:
        _print_error(result.get_summary(), style="dim")


# Entry point for the CLI
def main():
    """Main entry point for the CLI application."""
    try:
        cli()
    except Exception as e:
        _print_error(f"Unexpected error: {e}", style="red")
        sys.exit(1)


if __name__ == '__main__':
    main()
