"""Omaha configuration

Settings for logging and local system detection. Values come from, in order
of priority: environment variables, runtime updates, defaults.

Protocol literals (protocol version, server name, client version) are fixed
and deliberately not part of the configuration.
"""

import os
from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass
class OmahaConfig:
    """Configuration options for the Omaha library."""

    # logging
    log_level: str = "INFO"
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    log_file: Optional[str] = None
    enable_rich_logging: bool = True

    # local system detection overrides
    platform: Optional[str] = None
    arch: Optional[str] = None

    custom: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_env(cls) -> "OmahaConfig":
        """Create a configuration from ``OMAHA_<NAME>`` environment variables."""
        config = cls()

        config.log_level = os.getenv("OMAHA_LOG_LEVEL", config.log_level)
        config.log_format = os.getenv("OMAHA_LOG_FORMAT", config.log_format)
        config.log_file = os.getenv("OMAHA_LOG_FILE", config.log_file)
        config.enable_rich_logging = (
            os.getenv("OMAHA_ENABLE_RICH_LOGGING", "true").lower() == "true"
        )

        config.platform = os.getenv("OMAHA_PLATFORM", config.platform)
        config.arch = os.getenv("OMAHA_ARCH", config.arch)

        return config

    def update(self, **kwargs) -> None:
        """Update settings; unknown keys are kept in ``custom``."""
        for key, value in kwargs.items():
            if hasattr(self, key):
                setattr(self, key, value)
            else:
                self.custom[key] = value

    def get(self, key: str, default: Any = None) -> Any:
        if hasattr(self, key):
            return getattr(self, key)
        return self.custom.get(key, default)

    def to_dict(self) -> Dict[str, Any]:
        result = {
            "log_level": self.log_level,
            "log_format": self.log_format,
            "log_file": self.log_file,
            "enable_rich_logging": self.enable_rich_logging,
            "platform": self.platform,
            "arch": self.arch,
        }
        result.update(self.custom)
        return result
