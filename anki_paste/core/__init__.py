# Path: anki_paste/core/__init__.py
from .config import settings
from .logging_config import setup_logging
from .parser import parse_notes, collect_format_errors, ConfigurationError, FormatError

__all__ = ["settings", "setup_logging", "parse_notes", "collect_format_errors", "ConfigurationError", "FormatError"]
