"""Omaha protocol exceptions

Errors raised while decoding Omaha documents. Building and serializing a
message tree never raises these.
"""


class ProtocolException(Exception):
    """Base class for all Omaha protocol errors."""

    pass


class SerializationException(ProtocolException):
    """Raised when input bytes are not a well-formed XML document."""

    pass


class MessageFormatException(ProtocolException):
    """Raised when a document has the wrong root or element tag."""

    pass


class ValidationException(ProtocolException):
    """Raised when a mandatory attribute is missing or cannot be decoded.

    ``element`` and ``attribute`` name the offending location when known.
    """

    def __init__(self, message: str, element: str = None, attribute: str = None):
        super().__init__(message)
        self.message = message
        self.element = element
        self.attribute = attribute
