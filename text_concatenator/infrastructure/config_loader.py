"""
Settings file loading infrastructure.
Reads optional run settings from a YAML file.
"""

import codecs
from pathlib import Path
from typing import List

import yaml
from pydantic import ValidationError

from ..domain.entities import RunSettings


class ConfigurationError(Exception):
    """Raised when there's an error loading or parsing the settings file."""
    pass


class YamlConfigLoader:
    """Loads run settings from a YAML file with a top level `settings` mapping."""

    def __init__(self, config_path: Path):
        self.config_path = config_path

    def load_configuration(self) -> RunSettings:
        """Load and parse the settings file."""
        if not self.config_path.exists():
            raise ConfigurationError(
                f"Configuration file not found: {self.config_path}"
            )

        try:
            with open(self.config_path, 'r', encoding='utf-8') as file:
                raw_config = yaml.safe_load(file)
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML syntax: {e}") from e
        except (OSError, UnicodeDecodeError) as e:
            raise ConfigurationError(f"Error loading configuration: {e}") from e

        return self._parse_configuration(raw_config)

    def _parse_configuration(self, raw_config) -> RunSettings:
        """Parse raw YAML data into settings."""
        if raw_config is None:
            return RunSettings()
        if not isinstance(raw_config, dict):
            raise ConfigurationError("Top level of the configuration must be a mapping")

        settings = raw_config.get("settings") or {}
        if not isinstance(settings, dict):
            raise ConfigurationError("'settings' must be a mapping")

        try:
            return RunSettings(**settings)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid settings: {e}") from e


class ConfigurationValidator:
    """Validates run settings for common issues."""

    def validate_configuration(self, settings: RunSettings) -> List[str]:
        """Validate settings and return list of issues found."""
        issues = []

        try:
            codecs.lookup(settings.encoding)
        except LookupError:
            issues.append(f"Unknown encoding: {settings.encoding}")

        return issues


def load_run_settings(config_path: Path) -> RunSettings:
    """Convenience function to load and validate settings."""
    loader = YamlConfigLoader(config_path)
    settings = loader.load_configuration()

    validator = ConfigurationValidator()
    issues = validator.validate_configuration(settings)

    if issues:
        raise ConfigurationError(
            "Configuration validation failed:\n" + "\n".join(f"- {issue}" for issue in issues)
        )

    return settings
