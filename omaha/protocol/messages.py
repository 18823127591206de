"""Omaha v3 message definitions

Google's Omaha application update protocol is a poll based exchange of XML
documents. Clients send a ``<request>`` describing installed applications,
update checks and progress events; servers reply with a ``<response>``
carrying update information or an acknowledgement.

Every record is a dataclass with ``to_element``/``from_element`` methods; the
two roots add ``to_xml``/``from_xml``. Trees are meant to be built through
the ``add_*`` methods, which attach a new child and return it for further
population.

https://github.com/google/omaha/blob/master/doc/ServerProtocolV3.md
"""

import xml.etree.ElementTree as ET
from collections import namedtuple
from dataclasses import dataclass, field
from typing import List, Optional, Union

from ..local import local_arch, local_platform
from ..utils.config import OmahaConfig
from ..utils.logger import get_logger
from ..version import __version__
from .exceptions import (
    MessageFormatException,
    ProtocolException,
    SerializationException,
)
from .fields import (
    ALWAYS,
    REQUIRED,
    Attribute,
    decode_bool,
    decode_uint,
    read_attributes,
    write_attributes,
)
from .types import AppStatus, EventResult, EventType, UpdateStatus

PROTOCOL_VERSION = "3.0"
SERVER_NAME = "mantle"

logger = get_logger(__name__)


class _Element:
    """XML plumbing shared by all message records.

    Subclasses set ``TAG`` and ``ATTRIBUTES`` and override ``_write_children``
    / ``_read_child`` when they have nested elements. Unknown child elements
    are ignored when decoding.
    """

    TAG = ""
    ATTRIBUTES = ()

    def to_element(self) -> ET.Element:
        element = ET.Element(self.TAG)
        write_attributes(self, element, self.ATTRIBUTES)
        self._write_children(element)
        return element

    def _write_children(self, element: ET.Element) -> None:
        pass

    @classmethod
    def from_element(cls, element: ET.Element):
        if element.tag != cls.TAG:
            raise MessageFormatException(
                f"Expected <{cls.TAG}> element, got <{element.tag}>"
            )
        obj = cls(**read_attributes(element, cls.ATTRIBUTES))
        for child in element:
            obj._read_child(child)
        return obj

    def _read_child(self, child: ET.Element) -> None:
        pass


# === Request side ===


@dataclass
class OS(_Element):
    """Client operating system descriptor."""

    platform: str = ""
    version: str = ""
    service_pack: str = ""
    arch: str = ""

    TAG = "os"
    ATTRIBUTES = (
        Attribute("platform", "platform"),
        Attribute("version", "version"),
        Attribute("service_pack", "sp"),
        Attribute("arch", "arch"),
    )


@dataclass
class Ping(_Element):
    """Usage heartbeat; its presence alone is meaningful."""

    last_report_days: str = ""
    status: str = ""

    TAG = "ping"
    ATTRIBUTES = (
        Attribute("last_report_days", "r"),
        Attribute("status", "status"),
    )


@dataclass
class Event(_Element):
    """A lifecycle event reported by the client.

    ``event_type`` and ``event_result`` must be set before the event is
    serialized; they are the only mandatory attributes.
    """

    event_type: Optional[EventType] = None
    event_result: Optional[EventResult] = None
    previous_version: str = ""
    error_code: str = ""
    status: str = ""

    TAG = "event"
    ATTRIBUTES = (
        Attribute("event_type", "eventtype", REQUIRED, EventType),
        Attribute("event_result", "eventresult", REQUIRED, EventResult),
        Attribute("previous_version", "previousversion"),
        Attribute("error_code", "errorcode"),
        Attribute("status", "status"),
    )


# === Response side ===


@dataclass
class DayStart(_Element):
    """Server side elapsed time bookkeeping."""

    elapsed_seconds: str = "0"

    TAG = "daystart"
    ATTRIBUTES = (Attribute("elapsed_seconds", "elapsed_seconds", ALWAYS),)


@dataclass
class URL(_Element):
    """A codebase an update package can be downloaded from."""

    codebase: str = ""

    TAG = "url"
    ATTRIBUTES = (Attribute("codebase", "codebase", REQUIRED),)


@dataclass
class URLs(_Element):
    """Wrapper around the codebase list of an update check.

    Only ever created by :meth:`UpdateCheck.add_url`, so it always holds at
    least one URL. An update check without URLs has no ``<urls>`` element.
    """

    urls: List[URL] = field(default_factory=list)

    TAG = "urls"
    omit_when_empty = True

    def _write_children(self, element: ET.Element) -> None:
        for url in self.urls:
            element.append(url.to_element())

    def _read_child(self, child: ET.Element) -> None:
        if child.tag == URL.TAG:
            self.urls.append(URL.from_element(child))


@dataclass
class Package(_Element):
    """One downloadable file of an update payload."""

    hash: str = ""
    name: str = ""
    size: int = 0
    required: bool = False

    TAG = "package"
    ATTRIBUTES = (
        Attribute("hash", "hash", REQUIRED),
        Attribute("name", "name", REQUIRED),
        Attribute("size", "size", REQUIRED, decode_uint),
        Attribute("required", "required", ALWAYS, decode_bool),
    )


@dataclass
class Action(_Element):
    """A post-download instruction, keyed by event name (e.g. "postinstall").

    Apart from ``event`` the fields are update_engine extensions.
    """

    event: str = ""
    chromeos_version: str = ""
    sha256: str = ""
    needs_admin: bool = False
    is_delta: bool = False
    disable_payload_backoff: bool = False
    metadata_signature_rsa: str = ""
    metadata_size: str = ""
    deadline: str = ""

    TAG = "action"
    ATTRIBUTES = (
        Attribute("event", "event", REQUIRED),
        Attribute("chromeos_version", "ChromeOSVersion"),
        Attribute("sha256", "sha256"),
        Attribute("needs_admin", "needsadmin", ALWAYS, decode_bool),
        Attribute("is_delta", "IsDelta", ALWAYS, decode_bool),
        Attribute("disable_payload_backoff", "DisablePayloadBackoff", decode=decode_bool),
        Attribute("metadata_signature_rsa", "MetadataSignatureRsa"),
        Attribute("metadata_size", "MetadataSize"),
        Attribute("deadline", "deadline"),
    )


# field name, group tag, item class, omit the group when it has no items
_Group = namedtuple("_Group", "field tag item omit_when_empty")


@dataclass
class Manifest(_Element):
    """Description of one update payload."""

    version: str = ""
    packages: List[Package] = field(default_factory=list)
    actions: List[Action] = field(default_factory=list)

    TAG = "manifest"
    ATTRIBUTES = (Attribute("version", "version", REQUIRED),)
    GROUPS = (
        _Group("packages", "packages", Package, False),
        _Group("actions", "actions", Action, False),
    )

    def add_package(self) -> Package:
        package = Package()
        self.packages.append(package)
        return package

    def add_action(self, event: str) -> Action:
        action = Action(event=event)
        self.actions.append(action)
        return action

    def _write_children(self, element: ET.Element) -> None:
        for group in self.GROUPS:
            items = getattr(self, group.field)
            if group.omit_when_empty and not items:
                continue
            container = ET.SubElement(element, group.tag)
            for item in items:
                container.append(item.to_element())

    def _read_child(self, child: ET.Element) -> None:
        for group in self.GROUPS:
            if child.tag == group.tag:
                items = getattr(self, group.field)
                for grandchild in child:
                    if grandchild.tag == group.item.TAG:
                        items.append(group.item.from_element(grandchild))


@dataclass
class UpdateCheck(_Element):
    """Update check request or the server's verdict for one app."""

    urls: Optional[URLs] = None
    manifest: Optional[Manifest] = None
    target_version_prefix: str = ""
    status: Optional[UpdateStatus] = None

    TAG = "updatecheck"
    ATTRIBUTES = (
        Attribute("target_version_prefix", "targetversionprefix"),
        Attribute("status", "status", decode=UpdateStatus),
    )

    def add_url(self, codebase: str) -> URL:
        if self.urls is None:
            self.urls = URLs()
        url = URL(codebase=codebase)
        self.urls.urls.append(url)
        return url

    def add_manifest(self, version: str) -> Manifest:
        self.manifest = Manifest(version=version)
        return self.manifest

    def _write_children(self, element: ET.Element) -> None:
        if self.urls is not None:
            if self.urls.urls or not self.urls.omit_when_empty:
                element.append(self.urls.to_element())
        if self.manifest is not None:
            element.append(self.manifest.to_element())

    def _read_child(self, child: ET.Element) -> None:
        if child.tag == URLs.TAG:
            urls = URLs.from_element(child)
            if urls.urls:
                if self.urls is None:
                    self.urls = urls
                else:
                    self.urls.urls.extend(urls.urls)
        elif child.tag == Manifest.TAG:
            self.manifest = Manifest.from_element(child)


@dataclass
class App(_Element):
    """One application, as reported by a client or answered by a server.

    Requests use ``version``, ``ping`` and ``events``; responses use
    ``status`` and ``update_check``. Both sides may send an update check.
    """

    ping: Optional[Ping] = None
    update_check: Optional[UpdateCheck] = None
    events: List[Event] = field(default_factory=list)
    app_id: str = ""
    version: str = ""
    next_version: str = ""
    lang: str = ""
    client: str = ""
    install_age: str = ""
    status: Optional[AppStatus] = None

    # update engine extensions
    track: str = ""
    from_track: str = ""

    # coreos update engine extensions
    boot_id: str = ""
    machine_id: str = ""
    oem: str = ""

    TAG = "app"
    ATTRIBUTES = (
        Attribute("app_id", "appid"),
        Attribute("version", "version"),
        Attribute("next_version", "nextversion"),
        Attribute("lang", "lang"),
        Attribute("client", "client"),
        Attribute("install_age", "installage"),
        Attribute("status", "status", decode=AppStatus),
        Attribute("track", "track"),
        Attribute("from_track", "from_track"),
        Attribute("boot_id", "bootid"),
        Attribute("machine_id", "machineid"),
        Attribute("oem", "oem"),
    )

    def add_ping(self) -> Ping:
        self.ping = Ping()
        return self.ping

    def add_update_check(self) -> UpdateCheck:
        self.update_check = UpdateCheck()
        return self.update_check

    def add_event(self) -> Event:
        event = Event()
        self.events.append(event)
        return event

    def _write_children(self, element: ET.Element) -> None:
        if self.ping is not None:
            element.append(self.ping.to_element())
        if self.update_check is not None:
            element.append(self.update_check.to_element())
        for event in self.events:
            element.append(event.to_element())

    def _read_child(self, child: ET.Element) -> None:
        if child.tag == Ping.TAG:
            self.ping = Ping.from_element(child)
        elif child.tag == UpdateCheck.TAG:
            self.update_check = UpdateCheck.from_element(child)
        elif child.tag == Event.TAG:
            self.events.append(Event.from_element(child))


# === Document roots ===


class _Document(_Element):
    """Byte level encoding shared by the two document roots."""

    def to_xml(self, pretty: bool = False, declaration: bool = False) -> bytes:
        """Serialize the tree to UTF-8 encoded XML.

        Empty elements are written with an explicit end tag. Attributes keep
        their declaration order, so repeated calls give identical output.

        Args:
            pretty: indent nested elements
            declaration: prefix an ``<?xml ...?>`` declaration
        """
        element = self.to_element()
        if pretty:
            ET.indent(element)
        return ET.tostring(
            element,
            encoding="utf-8",
            xml_declaration=declaration,
            short_empty_elements=False,
        )

    @classmethod
    def from_xml(cls, data: Union[bytes, str]):
        """Parse an XML document into a message tree.

        Raises:
            SerializationException: the input is not well-formed XML
            MessageFormatException: the root element is not ``cls.TAG``
            ValidationException: a mandatory attribute is missing or invalid
        """
        return cls._decode(_parse(data))

    @classmethod
    def _decode(cls, root: ET.Element):
        try:
            message = cls.from_element(root)
        except ProtocolException as e:
            logger.debug("Rejected <%s> document: %s", root.tag, e)
            raise
        logger.debug("Decoded <%s> with %d app(s)", root.tag, len(message.apps))
        return message


@dataclass
class Request(_Document):
    """Root of a client submission."""

    os: Optional[OS] = None
    apps: List[App] = field(default_factory=list)
    protocol: str = ""
    version: str = ""
    is_machine: str = ""
    session_id: str = ""
    user_id: str = ""
    install_source: str = ""
    test_source: str = ""
    request_id: str = ""
    updater_version: str = ""

    TAG = "request"
    ATTRIBUTES = (
        Attribute("protocol", "protocol", ALWAYS),
        Attribute("version", "version"),
        Attribute("is_machine", "ismachine"),
        Attribute("session_id", "sessionid"),
        Attribute("user_id", "userid"),
        Attribute("install_source", "installsource"),
        Attribute("test_source", "testsource"),
        Attribute("request_id", "requestid"),
        Attribute("updater_version", "updaterversion"),
    )

    def add_app(self, app_id: str, version: str) -> App:
        """Append an app; ids are not checked for uniqueness."""
        app = App(app_id=app_id, version=version)
        self.apps.append(app)
        return app

    def _write_children(self, element: ET.Element) -> None:
        if self.os is not None:
            element.append(self.os.to_element())
        for app in self.apps:
            element.append(app.to_element())

    def _read_child(self, child: ET.Element) -> None:
        if child.tag == OS.TAG:
            self.os = OS.from_element(child)
        elif child.tag == App.TAG:
            self.apps.append(App.from_element(child))


@dataclass
class Response(_Document):
    """Root of a server reply."""

    day_start: DayStart = field(default_factory=DayStart)
    apps: List[App] = field(default_factory=list)
    protocol: str = ""
    server: str = ""

    TAG = "response"
    ATTRIBUTES = (
        Attribute("protocol", "protocol", ALWAYS),
        Attribute("server", "server", ALWAYS),
    )

    def add_app(self, app_id: str, status: AppStatus) -> App:
        app = App(app_id=app_id, status=status)
        self.apps.append(app)
        return app

    def _write_children(self, element: ET.Element) -> None:
        element.append(self.day_start.to_element())
        for app in self.apps:
            element.append(app.to_element())

    def _read_child(self, child: ET.Element) -> None:
        if child.tag == DayStart.TAG:
            self.day_start = DayStart.from_element(child)
        elif child.tag == App.TAG:
            self.apps.append(App.from_element(child))


# === Factories ===


def new_request(config: Optional[OmahaConfig] = None) -> Request:
    """Create a request describing this client and the local system."""
    return Request(
        protocol=PROTOCOL_VERSION,
        version=__version__,
        os=OS(platform=local_platform(config), arch=local_arch(config)),
    )


def new_response() -> Response:
    """Create an empty server response."""
    return Response(
        protocol=PROTOCOL_VERSION,
        server=SERVER_NAME,
        day_start=DayStart(elapsed_seconds="0"),
    )


def _parse(data: Union[bytes, str]) -> ET.Element:
    try:
        return ET.fromstring(data)
    except ET.ParseError as e:
        logger.debug("Malformed XML document: %s", e)
        raise SerializationException(f"Invalid XML document: {e}")


def parse_message(data: Union[bytes, str]) -> Union[Request, Response]:
    """Parse either document root, dispatching on its tag (factory function)."""
    root = _parse(data)
    if root.tag == Request.TAG:
        return Request._decode(root)
    elif root.tag == Response.TAG:
        return Response._decode(root)
    else:
        raise MessageFormatException(f"Unknown document root: <{root.tag}>")
