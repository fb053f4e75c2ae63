"""Utility module for gitmermaid package."""

from .cli_utils import exit_with_error, show_error, show_warning
from .log_setup import console, setup_logging

__all__ = ["console", "exit_with_error", "setup_logging", "show_error", "show_warning"]
