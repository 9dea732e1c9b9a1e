"""Common utilities for URL shortener."""

from .validators import is_valid_url
from .url_builder import build_short_path, normalize_redirect_target
from .logging_config import setup_logging, get_logger

__all__ = [
    "is_valid_url",
    "build_short_path",
    "normalize_redirect_target",
    "setup_logging",
    "get_logger",
]
