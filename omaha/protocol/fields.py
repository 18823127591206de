"""Attribute tables for the Omaha XML wire format

Every message class declares an ordered tuple of :class:`Attribute` entries
mapping a dataclass field to an XML attribute. The order of the tuple is the
order attributes are written in, which keeps serialization deterministic.

Each attribute carries one of three presence policies:

- ``OMIT_EMPTY``: written only when the value is non-empty/non-zero, optional
  when decoding.
- ``ALWAYS``: always written, optional when decoding.
- ``REQUIRED``: always written, decoding fails if it is missing.
"""

import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Iterable

from .exceptions import ValidationException

OMIT_EMPTY = "omitempty"
ALWAYS = "always"
REQUIRED = "required"

_TRUE_TOKENS = {"1", "t", "true"}
_FALSE_TOKENS = {"0", "f", "false"}

UINT64_MAX = 2**64 - 1
_UINT_PATTERN = re.compile(r"[0-9]+")
_INVALID_XML_CHARS = re.compile(
    "[^\x09\x0a\x0d\x20-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]"
)


def decode_bool(raw: str) -> bool:
    token = raw.strip().lower()
    if token in _TRUE_TOKENS:
        return True
    if token in _FALSE_TOKENS:
        return False
    raise ValueError(f"invalid boolean {raw!r}")


def decode_uint(raw: str) -> int:
    """Decode an unsigned 64-bit decimal made of ASCII digits only."""
    if not _UINT_PATTERN.fullmatch(raw):
        raise ValueError(f"invalid unsigned integer {raw!r}")
    value = int(raw, 10)
    if value > UINT64_MAX:
        raise ValueError(f"value {raw!r} exceeds 64 bits")
    return value


def encode_value(value: Any) -> str:
    """Render a field value as attribute text.

    Characters outside the XML 1.0 ``Char`` production are replaced with
    U+FFFD so the output is always well-formed.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, Enum):
        text = value.value
    else:
        text = str(value)
    return _INVALID_XML_CHARS.sub("\ufffd", text)


@dataclass(frozen=True)
class Attribute:
    """One dataclass field rendered as an XML attribute."""

    field: str
    name: str
    policy: str = OMIT_EMPTY
    decode: Callable[[str], Any] = str


def write_attributes(obj: Any, element: ET.Element, table: Iterable[Attribute]) -> None:
    """Set the attributes of ``element`` from ``obj`` following ``table``."""
    for attribute in table:
        value = getattr(obj, attribute.field)
        if attribute.policy == OMIT_EMPTY and not value:
            continue
        element.set(attribute.name, encode_value(value))


def read_attributes(element: ET.Element, table: Iterable[Attribute]) -> Dict[str, Any]:
    """Decode the attributes of ``element`` into dataclass keyword arguments.

    Attributes absent from the element are left out of the result so the
    dataclass defaults apply.

    Raises:
        ValidationException: a required attribute is missing or a value
            cannot be decoded
    """
    kwargs = {}
    for attribute in table:
        raw = element.get(attribute.name)
        if raw is None:
            if attribute.policy == REQUIRED:
                raise ValidationException(
                    f"<{element.tag}> is missing required attribute "
                    f"{attribute.name!r}",
                    element=element.tag,
                    attribute=attribute.name,
                )
            continue
        try:
            kwargs[attribute.field] = attribute.decode(raw)
        except ValueError as e:
            raise ValidationException(
                f"<{element.tag}> has invalid {attribute.name!r}: {e}",
                element=element.tag,
                attribute=attribute.name,
            )
    return kwargs
