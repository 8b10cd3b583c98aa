#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""Queries against a connected Jira server.

A :class:`JiraCommand` is bound to one :class:`~jirasimple.JiraConnection`.
It resolves shorthand addresses, connects on first use and turns
responses into parsed JSON documents.

Example::

    command = connection.command()

    # GET, because there is no body
    me = command.query("myself")

    # POST, because there is a body
    found = command.query("search", {"jql": "project = TEST", "maxResults": 10})

    # every page of a paged endpoint
    for page in command.query_paged("agile:board", page_size=50):
        for board in page["values"]:
            print(board["name"])
"""
import json
from typing import TYPE_CHECKING, Any, Optional, Tuple

from jirasimple.cancellation import CancellationToken
from jirasimple.endpoints import (
    SERVER_INFO_PATH,
    jql_address,
    resolve_address,
)
from jirasimple.exceptions import (
    JiraDisposedError,
    JiraResponseError,
    JiraValidationError,
    is_success_status,
    raise_for_status,
)
from jirasimple.jira_logs import add_log
from jirasimple.pagination import DEFAULT_PAGE_SIZE, PagedQuery, PageMode
from jirasimple.server_info import ServerInfo
from jirasimple.validation import require_text

if TYPE_CHECKING:
    from jirasimple.connection import JiraConnection


EMPTY_BODY = "{}"


def prepare_request(body: Any, method: Optional[str]) -> Tuple[str, str]:
    """Pick the HTTP method and serialize the body.

    A missing or blank body is sent as ``{}``. Without an explicit method
    a blank body means GET and anything else means POST.

    :param body: JSON text, or a value serialized with ``json.dumps``
    :param method: HTTP method, or None to infer it

    :return: ``(method, json_text)``
    """
    blank = body is None or (isinstance(body, str) and not body.strip())
    if method is None:
        method = "GET" if blank else "POST"
    if blank:
        payload = EMPTY_BODY
    elif isinstance(body, str):
        payload = body
    else:
        payload = json.dumps(body)
    return str(method).upper(), payload


class JiraCommand:
    """Issues single and paged queries through a connection.

    Attributes:
        connection: The connection the command is bound to. It is shared,
            not owned: disposing the command is not needed.
    """

    def __init__(self, connection: "JiraConnection") -> None:
        """Bind the command to a connection.

        :param connection: An open JiraConnection

        :raises JiraValidationError: If connection is None
        :raises JiraDisposedError: If the connection has been disposed
        """
        if connection is None:
            raise JiraValidationError(message="connection cannot be None", field="connection")
        if connection.is_disposed:
            raise JiraDisposedError()
        self.connection = connection

    def _check_ready(self, address: str) -> None:
        require_text(address, "address")
        if self.connection.is_disposed:
            raise JiraDisposedError()

    def ensure_connected(self, cancel: Optional[CancellationToken] = None) -> None:
        """Log in if the connection has not done so yet."""
        if not self.connection.is_connected:
            self.connection.connect(cancel)

    def resolve(self, address: str) -> str:
        """Return the fully qualified URL for a shorthand address."""
        return resolve_address(self.connection.server, address)

    def send(
        self,
        method: str,
        url: str,
        payload: str,
        cancel: Optional[CancellationToken] = None,
    ) -> Any:
        """Send one request to a resolved URL and parse the answer.

        :param method: HTTP method
        :param url: Fully qualified URL
        :param payload: JSON text body
        :param cancel: Cancellation token

        :return: Parsed JSON document, None for an empty body

        :raises JiraAPIError: On a non-success status
        :raises JiraResponseError: If the body is not valid JSON
        """
        response = self.connection.transport.send(method, url, payload, cancel)

        if not is_success_status(response.status_code):
            add_log(f"{method} {url} failed: {response.status_code} {response.reason}", "error")
            raise_for_status(response)

        if not response.content or not response.content.strip():
            return None
        try:
            return response.json()
        except ValueError as e:
            add_log(f"{method} {url} returned invalid JSON", "error")
            raise JiraResponseError(f"Response is not valid JSON: {e}") from e

    def query(
        self,
        address: str,
        body: Any = None,
        method: Optional[str] = None,
        cancel: Optional[CancellationToken] = None,
    ) -> Any:
        """Run a single query and return the parsed answer.

        :param address: Shorthand address, see :func:`~jirasimple.endpoints.resolve_address`
        :param body: JSON text or a JSON-serializable value
        :param method: HTTP method; inferred from the body when omitted
        :param cancel: Cancellation token

        :return: Parsed JSON document

        :raises JiraValidationError: If address is blank
        :raises JiraDisposedError: If the connection has been disposed
        :raises JiraAPIError: On a non-success status
        """
        self._check_ready(address)
        self.ensure_connected(cancel)
        method, payload = prepare_request(body, method)
        return self.send(method, self.resolve(address), payload, cancel)

    def query_paged(
        self,
        address: str,
        body: Any = None,
        method: Optional[str] = None,
        page_size: int = -1,
        cancel: Optional[CancellationToken] = None,
        mode: PageMode = PageMode.DETECT,
    ) -> PagedQuery:
        """Return an iterable over every page of a paged endpoint.

        Nothing is sent until iteration starts; each new iteration fetches
        again from the first page.

        :param address: Shorthand address
        :param body: JSON text or a JSON-serializable value
        :param method: HTTP method; inferred from the body when omitted
        :param page_size: Page size, values <= 0 mean ``DEFAULT_PAGE_SIZE``
        :param cancel: Cancellation token
        :param mode: How the last page is recognized

        :return: PagedQuery yielding one parsed document per page

        :raises JiraValidationError: If address is blank
        :raises JiraDisposedError: If the connection has been disposed
        """
        self._check_ready(address)
        method, payload = prepare_request(body, method)
        if page_size is None or page_size <= 0:
            page_size = DEFAULT_PAGE_SIZE
        return PagedQuery(
            command=self,
            url=self.resolve(address),
            payload=payload,
            method=method,
            page_size=page_size,
            cancel=cancel,
            mode=mode,
        )

    def jql(self, jql: str, cancel: Optional[CancellationToken] = None) -> Any:
        """Run a JQL search and return the first page of results.

        :param jql: JQL query, e.g. ``project = TEST ORDER BY created``
        :param cancel: Cancellation token
        """
        return self.query(jql_address(jql), None, "GET", cancel)

    def jql_paged(
        self,
        jql: str,
        page_size: int = -1,
        cancel: Optional[CancellationToken] = None,
        mode: PageMode = PageMode.DETECT,
    ) -> PagedQuery:
        """Run a JQL search over every page of results."""
        return self.query_paged(jql_address(jql), None, "GET", page_size, cancel, mode)

    def server_info(self, cancel: Optional[CancellationToken] = None) -> ServerInfo:
        """Read the ``serverInfo`` endpoint.

        :raises JiraResponseError: If the answer lacks an expected field
        """
        return ServerInfo.from_document(self.query(SERVER_INFO_PATH, cancel=cancel))

    def __repr__(self) -> str:
        return f"JiraCommand({self.connection})"
