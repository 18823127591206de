"""
Omaha - Python implementation of Google's Omaha update protocol, version 3

Request/response message model and XML wire format
"""

from .version import __version__

__description__ = "Omaha v3 update protocol message model"

# Protocol core
from .protocol import (
    # Enums
    AppStatus,
    UpdateStatus,
    EventType,
    EventResult,
    # Messages
    Request,
    Response,
    OS,
    App,
    Ping,
    Event,
    DayStart,
    UpdateCheck,
    URLs,
    URL,
    Manifest,
    Package,
    Action,
    # Factories
    new_request,
    new_response,
    parse_message,
    # Exceptions
    ProtocolException,
    SerializationException,
    MessageFormatException,
    ValidationException,
)

# Local system
from .local import local_platform, local_arch

# Utilities
from .utils import OmahaConfig, configure_logging, get_logger

__all__ = [
    # Version info
    "__version__",
    "__description__",
    # Protocol core
    "AppStatus",
    "UpdateStatus",
    "EventType",
    "EventResult",
    "Request",
    "Response",
    "OS",
    "App",
    "Ping",
    "Event",
    "DayStart",
    "UpdateCheck",
    "URLs",
    "URL",
    "Manifest",
    "Package",
    "Action",
    "new_request",
    "new_response",
    "parse_message",
    "ProtocolException",
    "SerializationException",
    "MessageFormatException",
    "ValidationException",
    # Local system
    "local_platform",
    "local_arch",
    # Utils
    "OmahaConfig",
    "configure_logging",
    "get_logger",
]


def get_version() -> str:
    """Get the current version of the Omaha library."""
    return __version__
