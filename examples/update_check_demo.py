#!/usr/bin/env python3
"""
Omaha update check demo

Plays both sides of one exchange without a network:
- client builds an update check request
- server answers with a manifest
- client inspects the answer
"""

import argparse

from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table

from omaha import (
    AppStatus,
    EventResult,
    EventType,
    OmahaConfig,
    Request,
    Response,
    UpdateStatus,
    configure_logging,
    new_request,
    new_response,
)

APP_ID = "{e96281a6-d1af-4bde-9a0a-97b76e56dc57}"

console = Console()


def build_request(version: str) -> Request:
    request = new_request(OmahaConfig.from_env())
    app = request.add_app(APP_ID, version)
    app.track = "stable"
    app.add_ping().last_report_days = "1"
    app.add_update_check()
    event = app.add_event()
    event.event_type = EventType.UPDATE
    event.event_result = EventResult.SUCCESS
    return request


def answer(request: Request, latest: str) -> Response:
    response = new_response()
    for app in request.apps:
        update_check = response.add_app(app.app_id, AppStatus.OK).add_update_check()
        if app.version == latest:
            update_check.status = UpdateStatus.NO_UPDATE
            continue
        update_check.status = UpdateStatus.OK
        update_check.add_url("https://update.example.com/stable/")
        manifest = update_check.add_manifest(latest)
        package = manifest.add_package()
        package.name = "update.gz"
        package.hash = "+LXvjiaPkeYDLHoNKlf9qbJwvnk="
        package.size = 212555113
        package.required = True
        manifest.add_action("postinstall").sha256 = "cyPMhvYywVFhB6dTAoT0zk7jsbfIhzHiJGdxTpBz0Ek="
    return response


def show(title: str, data: bytes) -> None:
    console.rule(title)
    console.print(Syntax(data.decode(), "xml", word_wrap=True))


def main():
    parser = argparse.ArgumentParser(description="Omaha update check demo")
    parser.add_argument("--installed", default="1.0.0", help="installed version")
    parser.add_argument("--latest", default="2.0.0", help="version offered by the server")
    parser.add_argument("--log-level", default="info")
    args = parser.parse_args()

    configure_logging(level=args.log_level)

    request_xml = build_request(args.installed).to_xml(pretty=True)
    show("request", request_xml)

    response_xml = answer(Request.from_xml(request_xml), args.latest).to_xml(pretty=True)
    show("response", response_xml)

    table = Table(title="updates")
    table.add_column("app")
    table.add_column("status")
    table.add_column("version")
    table.add_column("packages")
    for app in Response.from_xml(response_xml).apps:
        update_check = app.update_check
        manifest = update_check.manifest
        table.add_row(
            app.app_id,
            update_check.status.value,
            manifest.version if manifest else "-",
            ", ".join(p.name for p in manifest.packages) if manifest else "-",
        )
    console.print(table)


if __name__ == "__main__":
    main()
