"""Omaha protocol core: message model, wire format and status vocabularies"""

from .exceptions import (
    ProtocolException,
    SerializationException,
    MessageFormatException,
    ValidationException,
)
from .types import AppStatus, UpdateStatus, EventType, EventResult
from .messages import (
    # roots
    Request,
    Response,
    # request side
    OS,
    App,
    Ping,
    Event,
    # response side
    DayStart,
    UpdateCheck,
    URLs,
    URL,
    Manifest,
    Package,
    Action,
    # constants
    PROTOCOL_VERSION,
    SERVER_NAME,
    # factory functions
    new_request,
    new_response,
    parse_message,
)

__all__ = [
    # exceptions
    "ProtocolException",
    "SerializationException",
    "MessageFormatException",
    "ValidationException",
    # enums
    "AppStatus",
    "UpdateStatus",
    "EventType",
    "EventResult",
    # messages
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
    "PROTOCOL_VERSION",
    "SERVER_NAME",
    # factory functions
    "new_request",
    "new_response",
    "parse_message",
]
