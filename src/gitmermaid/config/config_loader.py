"""
Configuration loader for gitmermaid.

The configuration file is optional. ``--config`` names one explicitly,
otherwise ``.gitmermaid.yml`` in the working directory is used when it exists.
Command-line flags are merged on top by the CLI.

"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from gitmermaid.config.config_schema import AppConfigSchema

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = ".gitmermaid.yml"


class ConfigError(Exception):
	"""Exception raised for configuration errors."""


class ConfigParsingError(ConfigError):
	"""Exception raised when the configuration file cannot be read or validated."""


class ConfigLoader:
	"""Reads and validates the configuration once, on construction."""

	def __init__(self, config_file: Path | None = None) -> None:
		"""
		Initialize the configuration loader.

		Args:
		    config_file: Explicit configuration file (optional).

		Raises:
		    ConfigParsingError: If the file exists but is not a valid configuration.

		"""
		self._config_file = self._resolve_config_file(config_file)
		self._app_config = self._load_config()

	@staticmethod
	def _resolve_config_file(config_file: Path | None) -> Path | None:
		if config_file:
			return config_file.expanduser().resolve()
		local_config = Path(DEFAULT_CONFIG_FILE)
		return local_config if local_config.exists() else None

	@staticmethod
	def _read_mapping(file_path: Path) -> dict[str, Any]:
		"""
		Parse a YAML file that must hold a mapping.

		An empty file is an empty mapping.

		Raises:
		    ConfigParsingError: If the file cannot be read or is not a YAML mapping.

		"""
		try:
			with file_path.open(encoding="utf-8") as f:
				content = yaml.safe_load(f)
		except yaml.YAMLError as e:
			msg = f"Configuration file {file_path} is not valid YAML: {e}"
			raise ConfigParsingError(msg) from e
		except OSError as e:
			msg = f"Error accessing configuration file {file_path}: {e}"
			raise ConfigParsingError(msg) from e

		if content is None:
			return {}
		if not isinstance(content, dict):
			msg = f"Configuration file {file_path} must contain a mapping, not {type(content).__name__}"
			raise ConfigParsingError(msg)
		return content

	def _load_config(self) -> AppConfigSchema:
		config_file = self._config_file
		if config_file is None:
			logger.debug("No configuration file found, using defaults")
			return AppConfigSchema()
		if not config_file.exists():
			logger.warning("Configuration file not found: %s, using defaults", config_file)
			return AppConfigSchema()

		values = self._read_mapping(config_file)
		try:
			app_config = AppConfigSchema.model_validate(values)
		except ValidationError as e:
			msg = f"Invalid configuration in {config_file}: {e}"
			raise ConfigParsingError(msg) from e
		logger.info("Loaded configuration from %s", config_file)
		return app_config

	@property
	def config_file(self) -> Path | None:
		"""The configuration file in use, if any."""
		return self._config_file

	@property
	def get(self) -> AppConfigSchema:
		"""
		Get the loaded configuration.

		Returns:
		    AppConfigSchema: Validated configuration with defaults filled in.

		"""
		return self._app_config
