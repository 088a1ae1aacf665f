"""
catr v0.1.0

Concatenate text sources to standard output, optionally numbering
every line or only the non-blank ones.
"""

__version__ = "0.1.0"
__description__ = "Concatenate and display text files with optional line numbers"

# Public API exports
from .application.render_sources import RenderSourcesUseCase, format_numbered, number_lines
from .domain.entities import (
    Configuration,
    NumberingMode,
    RenderResult,
    RunSettings,
    SourceFailure,
)
from .domain.errors import OpenError, ReadError, Severity, SourceError
from .infrastructure.config_loader import (
    ConfigurationError,
    YamlConfigLoader,
    load_run_settings,
)
from .infrastructure.source_resolver import (
    FileSource,
    LineSource,
    SourceResolver,
    StdinSource,
    open_source,
)

__all__ = [
    "RenderSourcesUseCase",
    "format_numbered",
    "number_lines",
    "Configuration",
    "NumberingMode",
    "RenderResult",
    "RunSettings",
    "SourceFailure",
    "SourceError",
    "OpenError",
    "ReadError",
    "Severity",
    "ConfigurationError",
    "YamlConfigLoader",
    "load_run_settings",
    "FileSource",
    "StdinSource",
    "LineSource",
    "SourceResolver",
    "open_source",
]
