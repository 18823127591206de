"""Omaha protocol status vocabularies

The Omaha wire format carries every status and result code as a string
attribute. Each enum below lists the tokens this library knows about, but
lookups never fail: an unknown token produces an unrecognized member that
keeps the raw string so it can be passed through unchanged.
"""

from enum import Enum


class OpenEnum(str, Enum):
    """String enum that preserves unrecognized tokens."""

    @classmethod
    def _missing_(cls, value):
        if not isinstance(value, str):
            return None
        member = str.__new__(cls, value)
        member._name_ = None
        member._value_ = value
        return member

    @property
    def known(self) -> bool:
        """True if the token is one of the enum's declared members."""
        return self._name_ is not None

    def __str__(self) -> str:
        return self._value_


class AppStatus(OpenEnum):
    """Server's status for one application in a response."""

    OK = "ok"
    RESTRICTED = "restricted"
    ERROR = "error"
    UNKNOWN_APPLICATION = "error-unknownApplication"
    INVALID_APP_ID = "error-invalidAppId"


class UpdateStatus(OpenEnum):
    """Outcome of an update check."""

    NO_UPDATE = "noupdate"
    OK = "ok"
    UPDATE = "update"
    ERROR = "error"
    OWNER_ERROR = "ownerError"
    OS_NOT_SUPPORTED = "error-osnotsupported"
    UNSUPPORTED_PROTOCOL = "error-unsupportedProtocol"
    PLUGIN_RESTRICTED_HOST = "error-pluginRestrictedHost"
    HASH_ERROR = "error-hash"
    INTERNAL_ERROR = "error-internal"


class EventType(OpenEnum):
    """Lifecycle stage reported by a client event."""

    INSTALL = "install"
    UPDATE = "update"
    UNINSTALL = "uninstall"


class EventResult(OpenEnum):
    """Result of a reported lifecycle stage."""

    SUCCESS = "success"
    ERROR = "error"
