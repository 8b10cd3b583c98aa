#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""Server information returned by the ``serverInfo`` endpoint."""
import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Tuple
from urllib.parse import urlparse

from jirasimple.exceptions import JiraResponseError
from jirasimple.json_nav import int_or_none, read


# yyyy-M-d'T'H:m:s.fff+hh:mm, the colon of the offset is optional
SERVER_DATE_PATTERN = re.compile(
    r"^(\d{4})-(\d{1,2})-(\d{1,2})T(\d{1,2}):(\d{1,2}):(\d{1,2})\.(\d{3})"
    r"([+-])(\d{2}):?(\d{2})$"
)
VERSION_PATTERN = re.compile(r"^(\d+(?:\.\d+){1,3})")


def parse_server_date(value: str, field: str = "date") -> datetime:
    """Parse a Jira server timestamp and convert it to UTC.

    :param value: e.g. ``2023-5-1T10:0:0.000+02:00``
    :param field: Field name reported on failure

    :return: Timezone-aware datetime in UTC

    :raises JiraResponseError: If the value does not match the pattern
    """
    match = SERVER_DATE_PATTERN.match(value.strip()) if isinstance(value, str) else None
    if not match:
        raise JiraResponseError(f"Invalid timestamp: {value!r}", field=field)

    year, month, day, hour, minute, second, millis = (int(g) for g in match.groups()[:7])
    sign, offset_hours, offset_minutes = match.group(8), int(match.group(9)), int(match.group(10))
    offset = timedelta(hours=offset_hours, minutes=offset_minutes)
    if sign == "-":
        offset = -offset

    try:
        local = datetime(
            year, month, day, hour, minute, second, millis * 1000,
            tzinfo=timezone(offset),
        )
    except ValueError as e:
        raise JiraResponseError(f"Invalid timestamp: {value!r}", field=field) from e
    return local.astimezone(timezone.utc)


def parse_version(value: str) -> Tuple[int, ...]:
    """Parse ``major.minor[.build[.revision]]``, ignoring any suffix."""
    match = VERSION_PATTERN.match(value.strip()) if isinstance(value, str) else None
    if not match:
        raise JiraResponseError(f"Invalid version: {value!r}", field="version")
    return tuple(int(part) for part in match.group(1).split("."))


def _required_string(document: Any, field: str) -> str:
    value = read(document, field)
    if not isinstance(value, str):
        raise JiraResponseError(f"Missing or invalid '{field}'", field=field)
    return value


@dataclass(frozen=True)
class ServerInfo:
    """Read-only description of a Jira server.

    Attributes:
        url: Base URL reported by the server.
        version: Version as a tuple of integers, e.g. ``(9, 4, 0)``.
        build_number: Build number.
        build_date: Build timestamp in UTC.
        server_date: Server clock in UTC at the time of the call.
        title: Server title.
        scm_info: Source control revision of the build.

    Example::

        info = connection.command().server_info()
        print(f"{info} runs Jira {'.'.join(map(str, info.version))}")
    """

    url: str
    version: Tuple[int, ...]
    build_number: int
    build_date: datetime
    server_date: datetime
    title: str
    scm_info: str

    @classmethod
    def from_document(cls, document: Any) -> "ServerInfo":
        """Build the value from a ``serverInfo`` response.

        :param document: Parsed JSON object

        :return: ServerInfo instance

        :raises JiraResponseError: If a field is missing or malformed
        """
        if not isinstance(document, dict):
            raise JiraResponseError("Server info must be a JSON object")

        url = _required_string(document, "baseUrl")
        parsed = urlparse(url)
        if not parsed.scheme or not parsed.netloc:
            raise JiraResponseError(f"Invalid URL: {url!r}", field="baseUrl")

        build_number = int_or_none(read(document, "buildNumber"))
        if build_number is None:
            raise JiraResponseError("Missing or invalid 'buildNumber'", field="buildNumber")

        return cls(
            url=url,
            version=parse_version(_required_string(document, "version")),
            build_number=build_number,
            build_date=parse_server_date(_required_string(document, "buildDate"), "buildDate"),
            server_date=parse_server_date(_required_string(document, "serverTime"), "serverTime"),
            title=_required_string(document, "serverTitle"),
            scm_info=_required_string(document, "scmInfo"),
        )

    def __str__(self) -> str:
        return self.title
