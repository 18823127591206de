"""Tests for decoding Omaha documents and the errors decoding reports"""

import pytest

from omaha.protocol import (
    AppStatus,
    EventType,
    MessageFormatException,
    ProtocolException,
    Request,
    Response,
    SerializationException,
    UpdateStatus,
    ValidationException,
    parse_message,
)

# Trimmed reply from a CoreOS update server.
SERVER_RESPONSE = b"""<?xml version="1.0" encoding="UTF-8"?>
<response protocol="3.0" server="update.core-os.net">
  <daystart elapsed_seconds="0"></daystart>
  <app appid="{e96281a6-d1af-4bde-9a0a-97b76e56dc57}" status="ok">
    <updatecheck status="ok">
      <urls>
        <url codebase="https://commondatastorage.googleapis.com/update-storage.core-os.net/amd64-usr/1010.5.0/"></url>
      </urls>
      <manifest version="1010.5.0">
        <packages>
          <package hash="+LXvjiaPkeYDLHoNKlf9qbJwvnk=" name="update.gz" size="212555113" required="false"></package>
        </packages>
        <actions>
          <action event="postinstall" ChromeOSVersion="" sha256="cyPMhvYywVFhB6dTAoT0zk7jsbfIhzHiJGdxTpBz0Ek=" needsadmin="false" IsDelta="true" DisablePayloadBackoff="true"></action>
        </actions>
      </manifest>
    </updatecheck>
  </app>
</response>
"""


def test_decode_server_response():
    response = Response.from_xml(SERVER_RESPONSE)

    assert response.protocol == "3.0"
    assert response.server == "update.core-os.net"
    assert response.day_start.elapsed_seconds == "0"

    app = response.apps[0]
    assert app.status is AppStatus.OK
    assert app.update_check.status is UpdateStatus.OK
    assert len(app.update_check.urls.urls) == 1

    manifest = app.update_check.manifest
    assert manifest.version == "1010.5.0"
    package = manifest.packages[0]
    assert package.name == "update.gz"
    assert package.size == 212555113
    assert package.required is False

    action = manifest.actions[0]
    assert action.event == "postinstall"
    assert action.needs_admin is False
    assert action.is_delta is True
    assert action.disable_payload_backoff is True
    assert action.chromeos_version == ""


def test_parse_message_dispatches_on_root():
    assert isinstance(parse_message(SERVER_RESPONSE), Response)
    assert isinstance(parse_message('<request protocol="3.0"></request>'), Request)


def test_unknown_root_rejected():
    with pytest.raises(MessageFormatException):
        parse_message(b"<reply></reply>")


def test_wrong_root_for_class():
    with pytest.raises(MessageFormatException):
        Request.from_xml(SERVER_RESPONSE)


def test_malformed_xml():
    with pytest.raises(SerializationException):
        Response.from_xml(b"<response><app></response>")


def test_all_errors_share_base():
    with pytest.raises(ProtocolException):
        Response.from_xml(b"not xml")


@pytest.mark.parametrize(
    "document, element, attribute",
    [
        (
            b'<request><app><event eventresult="success"></event></app></request>',
            "event",
            "eventtype",
        ),
        (
            b'<request><app><event eventtype="update"></event></app></request>',
            "event",
            "eventresult",
        ),
        (
            b"<response><app><updatecheck><manifest></manifest></updatecheck></app></response>",
            "manifest",
            "version",
        ),
        (
            b'<response><app><updatecheck><manifest version="1">'
            b'<packages><package name="a" size="1"></package></packages>'
            b"</manifest></updatecheck></app></response>",
            "package",
            "hash",
        ),
        (
            b'<response><app><updatecheck><manifest version="1">'
            b'<packages><package hash="h" size="1"></package></packages>'
            b"</manifest></updatecheck></app></response>",
            "package",
            "name",
        ),
        (
            b'<response><app><updatecheck><manifest version="1">'
            b'<packages><package hash="h" name="a"></package></packages>'
            b"</manifest></updatecheck></app></response>",
            "package",
            "size",
        ),
        (
            b'<response><app><updatecheck><manifest version="1">'
            b"<actions><action></action></actions>"
            b"</manifest></updatecheck></app></response>",
            "action",
            "event",
        ),
        (
            b"<response><app><updatecheck><urls><url></url></urls></updatecheck></app></response>",
            "url",
            "codebase",
        ),
    ],
)
def test_missing_mandatory_attribute(document, element, attribute):
    parse = Request.from_xml if document.startswith(b"<request") else Response.from_xml

    with pytest.raises(ValidationException) as excinfo:
        parse(document)

    assert excinfo.value.element == element
    assert excinfo.value.attribute == attribute


@pytest.mark.parametrize(
    "size",
    ["-1", "lots", "", "1_000", "+5", " 5", "5 ", "\u0663", "18446744073709551616"],
)
def test_invalid_size(size):
    document = (
        '<response><app><updatecheck><manifest version="1"><packages>'
        f'<package hash="h" name="a" size="{size}"></package>'
        "</packages></manifest></updatecheck></app></response>"
    )

    with pytest.raises(ValidationException):
        Response.from_xml(document)


@pytest.mark.parametrize("size", ["0", "007", "18446744073709551615"])
def test_valid_size(size):
    document = (
        '<response><app><updatecheck><manifest version="1"><packages>'
        f'<package hash="h" name="a" size="{size}"></package>'
        "</packages></manifest></updatecheck></app></response>"
    )

    package = Response.from_xml(document).apps[0].update_check.manifest.packages[0]

    assert package.size == int(size)


def test_invalid_boolean():
    document = (
        '<response><app><updatecheck><manifest version="1"><packages>'
        '<package hash="h" name="a" size="1" required="maybe"></package>'
        "</packages></manifest></updatecheck></app></response>"
    )

    with pytest.raises(ValidationException):
        Response.from_xml(document)


@pytest.mark.parametrize(
    "token, expected",
    [("1", True), ("true", True), ("True", True), ("t", True), ("0", False), ("FALSE", False)],
)
def test_boolean_tokens(token, expected):
    document = (
        '<response><app><updatecheck><manifest version="1"><packages>'
        f'<package hash="h" name="a" size="1" required="{token}"></package>'
        "</packages></manifest></updatecheck></app></response>"
    )

    package = Response.from_xml(document).apps[0].update_check.manifest.packages[0]

    assert package.required is expected


def test_unknown_status_preserved():
    document = b'<response protocol="3.0" server="x"><app appid="a" status="error-futureCode"></app></response>'

    response = Response.from_xml(document)

    status = response.apps[0].status
    assert status == "error-futureCode"
    assert not status.known
    assert b'status="error-futureCode"' in response.to_xml()


def test_unknown_event_type_preserved():
    document = b'<request><app><event eventtype="14" eventresult="success"></event></app></request>'

    event = Request.from_xml(document).apps[0].events[0]

    assert event.event_type.value == "14"
    assert event.event_type != EventType.UPDATE
    assert event.event_result.known


def test_empty_urls_element_dropped():
    document = b"<response><app><updatecheck><urls></urls></updatecheck></app></response>"

    update_check = Response.from_xml(document).apps[0].update_check

    assert update_check.urls is None
    assert b"<urls" not in Response.from_xml(document).to_xml()


def test_unknown_elements_and_attributes_ignored():
    document = (
        b'<request protocol="3.0" dedup="cr"><hw physmemory="16"></hw>'
        b'<app appid="a" version="1" cohort="beta"><data name="install"></data></app>'
        b"</request>"
    )

    request = Request.from_xml(document)

    assert request.protocol == "3.0"
    assert request.os is None
    assert len(request.apps) == 1
    assert request.apps[0].app_id == "a"


def test_missing_daystart_defaults():
    response = Response.from_xml(b'<response protocol="3.0" server="x"></response>')

    assert response.day_start.elapsed_seconds == "0"
    assert response.apps == []


def test_accepts_text_input():
    request = Request.from_xml('<request protocol="3.0"><os platform="win"></os></request>')

    assert request.os.platform == "win"
