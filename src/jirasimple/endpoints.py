#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""Address resolution for the Jira REST API.

Endpoints are written in a shorthand that names the API family and the
path below ``rest/{family}/latest``:

=================================  ==================================================
Shorthand                          Resolved against ``https://jira.example.com``
=================================  ==================================================
``search?jql=project=TEST``        ``https://jira.example.com/rest/api/latest/search?jql=project=TEST``
``agile:board/12/sprint``          ``https://jira.example.com/rest/agile/latest/board/12/sprint``
``greenhopper;rapid/1.0/sprints``  ``https://jira.example.com/rest/greenhopper/latest/rapid/1.0/sprints``
``:serverInfo``                    ``https://jira.example.com/rest/api/latest/serverInfo``
``rest/agile/1.0/board``           ``https://jira.example.com/rest/agile/1.0/board``
=================================  ==================================================

Example::

    from jirasimple.endpoints import resolve_address

    url = resolve_address("https://jira.example.com", "agile:board")
"""
import re
from typing import Any
from urllib.parse import quote

from jirasimple.exceptions import JiraValidationError
from jirasimple.validation import require_text


DEFAULT_API_FAMILY = "api"
API_VERSION = "latest"
SESSION_PATH = "rest/auth/1/session"
SERVER_INFO_PATH = "serverInfo"

# A run of letters/digits followed by ';', ':' or ','
FAMILY_PREFIX_PATTERN = re.compile(r"^\s*([^\W_]*)\s*[;,:]+\s*")

_TRIM = "/ "


def resolve_address(server: str, address: str) -> str:
    """Expand a shorthand endpoint into a fully qualified URL.

    :param server: Server base URL without trailing slash
    :param address: Shorthand endpoint, e.g. ``agile:board``

    :return: ``{server}/rest/{family}/latest/{path}``, or
             ``{server}/{address}`` when the address starts with ``rest/``

    :raises JiraValidationError: If the address is blank
    """
    require_text(address, "address")
    address = address.strip(_TRIM)

    if address.lower().startswith("rest/"):
        return "/".join((server, address))

    match = FAMILY_PREFIX_PATTERN.match(address)
    if match:
        family = match.group(1) or DEFAULT_API_FAMILY
        path = address[match.end():].strip(_TRIM)
    else:
        family = DEFAULT_API_FAMILY
        path = address

    return "/".join((server, f"rest/{family}/{API_VERSION}", path))


def session_url(server: str) -> str:
    """Return the URL of the cookie session endpoint."""
    return "/".join((server, SESSION_PATH))


def append_query_parameter(url: str, name: str, value: Any) -> str:
    """Append ``name=value`` using ``?`` or ``&`` as needed.

    :param url: URL, with or without a query string
    :param name: Parameter name
    :param value: Parameter value, written with ``str()``

    :return: URL with the parameter appended
    """
    separator = "&" if "?" in url else "?"
    return f"{url}{separator}{name}={value}"


def jql_address(jql: str) -> str:
    """Return the search shorthand for a JQL query.

    :param jql: JQL query, e.g. ``project = TEST ORDER BY created``

    :return: ``search?jql=<quoted jql>``
    """
    if jql is None:
        raise JiraValidationError(message="jql cannot be None", field="jql")
    return f"search?jql={quote(jql)}"
