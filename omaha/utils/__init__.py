"""Omaha utilities

- configuration (OmahaConfig)
- logging (configure_logging, get_logger)
"""

from .config import OmahaConfig
from .logger import configure_logging, get_logger

__all__ = [
    "OmahaConfig",
    "configure_logging",
    "get_logger",
]
