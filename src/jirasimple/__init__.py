#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""jirasimple - a small client for the Jira REST API.

jirasimple logs into a Jira server through its cookie session endpoint,
resolves shorthand endpoint names and returns parsed JSON documents,
including every page of paged collections.

Features:
    * Lazy, exactly-once login shared by all threads
    * Shorthand addresses (``search``, ``agile:board``, ``rest/api/2/myself``)
    * Single queries with GET/POST inference
    * Paged queries over ``startAt``/``isLast`` endpoints
    * Null-safe navigation of JSON documents
    * Cooperative cancellation
    * Connection pooling through requests

Quick Start
-----------

Connecting and querying::

    from jirasimple import JiraConnection

    with JiraConnection("bot", "secret", "https://jira.example.com") as connection:
        command = connection.command()
        me = command.query("myself")
        print(me["displayName"])

Using a connection string::

    connection = JiraConnection.from_connection_string(
        "Data Source=https://jira.example.com;User ID=bot;password=secret"
    )

Iterating over paged results::

    for issue in command.jql_paged("project = TEST", page_size=100).items("issues"):
        print(issue["key"])

Reading nested values without KeyError::

    from jirasimple import read, string_or_none

    summary = string_or_none(read(issue, "fields", "summary"))

Bounding the time spent::

    from jirasimple import CancellationToken

    token = CancellationToken()
    token.cancel_after(60)
    pages = command.query_paged("agile:board", cancel=token).collect()

"""
from jirasimple.cancellation import CancellationToken
from jirasimple.command import JiraCommand
from jirasimple.connection import ConnectionState, JiraConnection
from jirasimple.endpoints import (
    append_query_parameter,
    jql_address,
    resolve_address,
)
from jirasimple.exceptions import (
    JiraSimpleError,
    JiraAPIError,
    JiraAuthenticationError,
    JiraCancelledError,
    JiraDisposedError,
    JiraResponseError,
    JiraValidationError,
    raise_for_status,
)
from jirasimple.jira_logs import add_log, enable_file_logging, mask_sensitive_string
from jirasimple.json_nav import (
    boolean_or_none,
    datetime_or_none,
    decimal_or_none,
    float_or_none,
    int_or_none,
    iter_array,
    read,
    string_or_none,
    uuid_or_none,
)
from jirasimple.pagination import DEFAULT_PAGE_SIZE, PagedQuery, PageMode
from jirasimple.server_info import ServerInfo
from jirasimple.transport import HttpTransport, TransportConfig, create_session
from jirasimple.validation import parse_connection_string

__version__ = "0.1.0"
__all__ = [
    # Core
    "JiraConnection",
    "ConnectionState",
    "JiraCommand",
    "CancellationToken",
    "ServerInfo",
    # Pagination
    "PagedQuery",
    "PageMode",
    "DEFAULT_PAGE_SIZE",
    # Endpoints
    "resolve_address",
    "append_query_parameter",
    "jql_address",
    # Transport
    "HttpTransport",
    "TransportConfig",
    "create_session",
    # Exceptions
    "JiraSimpleError",
    "JiraAPIError",
    "JiraAuthenticationError",
    "JiraCancelledError",
    "JiraDisposedError",
    "JiraResponseError",
    "JiraValidationError",
    "raise_for_status",
    # Logging
    "add_log",
    "enable_file_logging",
    "mask_sensitive_string",
    # JSON navigation
    "read",
    "iter_array",
    "boolean_or_none",
    "int_or_none",
    "float_or_none",
    "decimal_or_none",
    "datetime_or_none",
    "uuid_or_none",
    "string_or_none",
    # Validation
    "parse_connection_string",
]
