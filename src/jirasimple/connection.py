#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""Authenticated connection to a Jira server.

A connection holds the credentials and the HTTP transport. It logs in
lazily, through the cookie session endpoint, the first time a command
needs the server, and it does so exactly once however many threads race
for it. A connection is meant to be created once per application and
shared; commands are cheap and can be created per call.

State machine::

    DISCONNECTED --connect()--> CONNECTED
         |                          |
         +-------dispose()----------+--> DISPOSED (terminal)

Example::

    from jirasimple import JiraConnection

    with JiraConnection("bot", "secret", "https://jira.example.com") as connection:
        command = connection.command()
        print(command.query("myself")["displayName"])

    # or from a connection string
    connection = JiraConnection.from_connection_string(
        "Data Source=https://jira.example.com;User ID=bot;password=secret"
    )
"""
import enum
import threading
from typing import Any, Optional

import requests

from jirasimple.cancellation import CancellationToken, check_cancelled
from jirasimple.command import JiraCommand
from jirasimple.endpoints import session_url
from jirasimple.exceptions import (
    JiraAuthenticationError,
    JiraDisposedError,
    JiraValidationError,
    is_success_status,
)
from jirasimple.jira_logs import add_log, mask_sensitive_string
from jirasimple.transport import HttpTransport, TransportConfig
from jirasimple.validation import (
    credentials_from_connection_string,
    escape_json_string,
    require_text,
    validate_server_url,
)


SESSION_COOKIE = "JSESSIONID"
XSRF_COOKIE = "atlassian.xsrf.token"

# Interval at which a thread waiting for the lock looks at its cancellation token
LOCK_POLL_INTERVAL = 0.05


class ConnectionState(enum.Enum):
    """Lifecycle state of a :class:`JiraConnection`."""

    DISCONNECTED = "disconnected"
    CONNECTED = "connected"
    DISPOSED = "disposed"


class JiraConnection:
    """Cookie-session connection to a Jira server.

    Attributes:
        transport: The HTTP transport owned by this connection.

    Example::

        connection = JiraConnection(
            login="bot",
            password="secret",
            server="https://jira.example.com/",
        )
        connection.server   # 'https://jira.example.com'
        connection.connect()
        connection.is_connected  # True
        connection.dispose()
    """

    def __init__(
        self,
        login: str,
        password: str,
        server: str,
        config: Optional[TransportConfig] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        """Initialize the connection. No network traffic happens here.

        :param login: User name
        :param password: User password
        :param server: Server base URL, e.g. ``https://jira.example.com``
        :param config: Transport configuration
        :param session: Optional existing requests session to use

        :raises JiraValidationError: If an argument is missing or invalid
        """
        self._login = require_text(login, "login")
        if password is None:
            raise JiraValidationError(message="password cannot be None", field="password")
        self._password = password
        self._server = validate_server_url(server)

        self._state = ConnectionState.DISCONNECTED
        self._lock = threading.Lock()
        # Guarded by _lock
        self._login_attempts = 0
        self._login_failure: Optional[JiraAuthenticationError] = None
        self.transport = HttpTransport(config=config, session=session)

    @classmethod
    def from_connection_string(
        cls,
        connection_string: str,
        config: Optional[TransportConfig] = None,
        session: Optional[requests.Session] = None,
    ) -> "JiraConnection":
        """Create a connection from ``Key=Value;...`` pairs.

        Required keys are ``User ID``, ``password`` and ``Data Source``.

        :param connection_string: e.g.
            ``Data Source=https://jira.example.com;User ID=bot;password=secret``
        :param config: Transport configuration
        :param session: Optional existing requests session to use

        :return: JiraConnection instance

        :raises JiraValidationError: If a key is missing or the text is malformed
        """
        login, password, server = credentials_from_connection_string(connection_string)
        return cls(login, password, server, config=config, session=session)

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def login(self) -> str:
        return self._login

    @property
    def password(self) -> str:
        return self._password

    @property
    def server(self) -> str:
        """Server base URL, never ending with ``/``."""
        return self._server

    @property
    def state(self) -> ConnectionState:
        return self._state

    @property
    def is_connected(self) -> bool:
        return self._state is ConnectionState.CONNECTED

    @property
    def is_disposed(self) -> bool:
        return self._state is ConnectionState.DISPOSED

    @property
    def session_id(self) -> Optional[str]:
        """Value of the ``JSESSIONID`` cookie, or None when not connected."""
        return self._cookie(SESSION_COOKIE)

    @property
    def xsrf_token(self) -> Optional[str]:
        """Value of the ``atlassian.xsrf.token`` cookie, or None when not connected."""
        return self._cookie(XSRF_COOKIE)

    def _cookie(self, name: str) -> Optional[str]:
        if not self.is_connected:
            return None
        wanted = name.lower()
        for cookie in self.transport.session.cookies:
            if cookie.name.lower() == wanted:
                return cookie.value
        return None

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def _acquire(self, cancel: Optional[CancellationToken]) -> None:
        """Take the connection lock, giving up when ``cancel`` fires."""
        if cancel is None:
            self._lock.acquire()
            return
        while not self._lock.acquire(timeout=LOCK_POLL_INTERVAL):
            check_cancelled(cancel)
        if cancel.cancelled:
            self._lock.release()
            check_cancelled(cancel)

    def connect(self, cancel: Optional[CancellationToken] = None) -> None:
        """Log in once. Returns immediately when already connected.

        Concurrent callers are collapsed into a single login request: the
        state is checked again once the lock is held. Callers that queued
        while that request was rejected get the same error without sending
        another one; a later call tries again.

        :param cancel: Cancellation token

        :raises JiraDisposedError: If the connection has been disposed
        :raises JiraAuthenticationError: If the server rejects the credentials
        :raises JiraCancelledError: If cancellation was requested
        """
        if self.is_disposed:
            raise JiraDisposedError()
        if self.is_connected:
            return

        attempts_seen = self._login_attempts
        self._acquire(cancel)
        try:
            if self.is_disposed:
                raise JiraDisposedError()
            if self.is_connected:
                return

            failure = self._login_failure
            if failure is not None and self._login_attempts != attempts_seen:
                raise JiraAuthenticationError(
                    message=failure.messages,
                    status_code=failure.status_code,
                    reason=failure.reason,
                )

            self._login_failure = None
            try:
                self._authenticate(cancel)
            except JiraAuthenticationError as e:
                self._login_failure = e
                raise
            finally:
                # Counted once finished, callers arriving meanwhile see the old value
                self._login_attempts += 1
            self._state = ConnectionState.CONNECTED
            add_log(f"Connected to {self._server} as {self._login}", "info")
        finally:
            self._lock.release()

    def _authenticate(self, cancel: Optional[CancellationToken]) -> None:
        body = (
            "{"
            f'"username": "{escape_json_string(self._login)}", '
            f'"password": "{escape_json_string(self._password)}"'
            "}"
        )
        response = self.transport.send("POST", session_url(self._server), body, cancel)
        if not is_success_status(response.status_code):
            add_log(
                f"Login to {self._server} as {self._login} failed: "
                f"{response.status_code} {response.reason}",
                "error",
            )
            raise JiraAuthenticationError(
                message=f"Failed to connect to Jira: {response.reason}",
                status_code=response.status_code,
                reason=response.reason,
            )

    def dispose(self) -> None:
        """Release the transport. Every later operation fails.

        Safe to call more than once.
        """
        with self._lock:
            if self._state is ConnectionState.DISPOSED:
                return
            self._state = ConnectionState.DISPOSED
            self.transport.close()
        add_log(f"Connection to {self._server} disposed", "info")

    close = dispose

    def command(self) -> JiraCommand:
        """Create a command bound to this connection.

        :raises JiraDisposedError: If the connection has been disposed
        """
        return JiraCommand(self)

    def __enter__(self) -> "JiraConnection":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.dispose()

    # =========================================================================
    # Comparison and representation
    # =========================================================================

    def __eq__(self, other: Any) -> bool:
        if self is other:
            return True
        if not isinstance(other, JiraConnection):
            return NotImplemented
        return (
            self.is_connected == other.is_connected
            and self.is_disposed == other.is_disposed
            and self._server.casefold() == other._server.casefold()
            and self._login.casefold() == other._login.casefold()
        )

    def __hash__(self) -> int:
        return hash((self._server.casefold(), self._login.casefold()))

    def __str__(self) -> str:
        suffix = " (connected)" if self.is_connected else ""
        return f"{self._login}@{self._server}{suffix}"

    def __repr__(self) -> str:
        return (
            f"JiraConnection(login={self._login!r}, "
            f"password={mask_sensitive_string(self._password)!r}, "
            f"server={self._server!r}, state={self._state.value})"
        )
