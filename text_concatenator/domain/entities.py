"""
Domain entities for the text concatenator.
Run configuration, optional file settings and the summary of a run.
"""

import codecs
from dataclasses import dataclass
from enum import Enum
from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


STDIN_SENTINEL = "-"
DEFAULT_ENCODING = "utf-8"


class NumberingMode(str, Enum):
    """Which output lines receive a line number."""

    NONE = "none"
    ALL = "all"
    NONBLANK = "nonblank"


def _check_encoding(value: str) -> str:
    try:
        codecs.lookup(value)
    except LookupError:
        raise ValueError(f"Unknown encoding: {value}")
    return value


class RunSettings(BaseModel):
    """Settings that can be stored in a YAML settings file."""

    encoding: str = Field(default=DEFAULT_ENCODING)
    verbose: bool = Field(default=False)


class Configuration(BaseModel):
    """Immutable description of a single run."""

    model_config = ConfigDict(frozen=True)

    sources: List[str] = Field(default_factory=lambda: [STDIN_SENTINEL])
    number_all: bool = Field(default=False, description="Number every line (-n)")
    number_nonblank: bool = Field(
        default=False, description="Number non-empty lines only (-b)"
    )
    encoding: str = Field(default=DEFAULT_ENCODING)

    @field_validator("sources")
    @classmethod
    def _sources_not_empty(cls, value: List[str]) -> List[str]:
        if not value:
            raise ValueError("At least one source is required")
        if any(token == "" for token in value):
            raise ValueError("Source names must not be empty")
        return value

    @field_validator("encoding")
    @classmethod
    def _known_encoding(cls, value: str) -> str:
        return _check_encoding(value)

    @model_validator(mode="after")
    def _numbering_flags_exclusive(self) -> "Configuration":
        if self.number_all and self.number_nonblank:
            raise ValueError("number_all and number_nonblank are mutually exclusive")
        return self

    @property
    def numbering(self) -> NumberingMode:
        """Numbering policy, with number_all taking precedence."""
        if self.number_all:
            return NumberingMode.ALL
        if self.number_nonblank:
            return NumberingMode.NONBLANK
        return NumberingMode.NONE


@dataclass(frozen=True)
class SourceFailure:
    """A source that could not be opened."""

    token: str
    reason: str


class RenderResult(BaseModel):
    """Result of rendering every configured source."""

    sources_processed: int = 0
    lines_written: int = 0
    failures: List[SourceFailure] = Field(default_factory=list)

    @property
    def failed_sources(self) -> List[str]:
        return [failure.token for failure in self.failures]

    def get_summary(self) -> str:
        """Get a human-readable summary of the run."""
        return (
            f"{self.sources_processed} sources, "
            f"{self.lines_written} lines written, "
            f"{len(self.failures)} failed"
        )
