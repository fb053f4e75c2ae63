"""Configuration for gitmermaid."""

from gitmermaid.config.config_loader import ConfigError, ConfigLoader, ConfigParsingError
from gitmermaid.config.config_schema import AppConfigSchema, DiagramSchema, WatchSchema

__all__ = [
	"AppConfigSchema",
	"ConfigError",
	"ConfigLoader",
	"ConfigParsingError",
	"DiagramSchema",
	"WatchSchema",
]
