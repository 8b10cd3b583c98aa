#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""HTTP transport with connection pooling for Jira REST requests.

The transport owns a ``requests.Session``, which keeps the session cookies
set by the login exchange and pools connections to the server. It adds
the JSON headers to every request and never retries.

Example::

    from jirasimple.transport import HttpTransport, TransportConfig

    transport = HttpTransport(TransportConfig(pool_maxsize=20))
    response = transport.send("GET", "https://jira.example.com/rest/api/latest/myself")
    transport.close()
"""
import threading
from dataclasses import dataclass
from typing import Optional

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from jirasimple.cancellation import CancellationToken, check_cancelled
from jirasimple.exceptions import JiraAPIError, JiraDisposedError
from jirasimple.jira_logs import add_log


JSON_HEADERS = {
    "Accept": "application/json",
    "Content-Type": "application/json",
}


@dataclass
class TransportConfig:
    """Configuration for the HTTP transport.

    Attributes:
        pool_connections: Number of connection pools to cache (default: 10)
        pool_maxsize: Maximum connections per pool (default: 10)
        timeout: Request timeout in seconds, None waits forever (default: None)
        verify_ssl: Whether to verify SSL certificates (default: True)
        user_agent: Optional User-Agent header

    Example::

        config = TransportConfig(pool_maxsize=30, timeout=120)
        connection = JiraConnection(login, password, server, config=config)
    """

    pool_connections: int = 10
    pool_maxsize: int = 10
    timeout: Optional[float] = None
    verify_ssl: bool = True
    user_agent: Optional[str] = None


def create_session(config: Optional[TransportConfig] = None) -> requests.Session:
    """Create a requests Session with connection pooling and no retries.

    :param config: Transport configuration

    :return: Configured requests Session
    """
    config = config or TransportConfig()
    session = requests.Session()

    adapter = HTTPAdapter(
        pool_connections=config.pool_connections,
        pool_maxsize=config.pool_maxsize,
        max_retries=Retry(total=0, read=False),
    )

    session.mount("https://", adapter)
    session.mount("http://", adapter)

    if config.user_agent:
        session.headers.update({"User-Agent": config.user_agent})

    return session


class HttpTransport:
    """Sends JSON requests over a pooled session.

    Attributes:
        config: The transport configuration.
        session: The underlying requests Session.
    """

    def __init__(
        self,
        config: Optional[TransportConfig] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        """Initialize the transport.

        :param config: Transport configuration
        :param session: Optional existing session to use
        """
        self.config = config or TransportConfig()
        self.session = session if session is not None else create_session(self.config)
        self._closed = False
        self._lock = threading.Lock()

    @property
    def closed(self) -> bool:
        """Return True once the transport has been closed."""
        return self._closed

    def send(
        self,
        method: str,
        url: str,
        body: Optional[str] = None,
        cancel: Optional[CancellationToken] = None,
    ) -> requests.Response:
        """Send a request and return the response, whatever its status.

        :param method: HTTP method (GET, POST, PUT, DELETE, ...)
        :param url: Fully qualified URL
        :param body: JSON text sent as the request body
        :param cancel: Cancellation token checked before and after the call

        :return: Response object

        :raises JiraDisposedError: If the transport has been closed
        :raises JiraAPIError: On connection failures and timeouts
        :raises JiraCancelledError: If cancellation was requested
        """
        if self._closed:
            raise JiraDisposedError("Transport has been closed")
        check_cancelled(cancel)

        add_log(f"{method} {url}", "debug")
        try:
            response = self.session.request(
                method=method,
                url=url,
                data=body.encode("utf-8") if body is not None else None,
                headers=JSON_HEADERS,
                timeout=self.config.timeout,
                verify=self.config.verify_ssl,
            )
        except requests.exceptions.Timeout as e:
            add_log(f"Request timeout: {url}", "error")
            raise JiraAPIError(
                message=f"Request timed out after {self.config.timeout}s",
                url=url,
                method=method,
            ) from e
        except requests.exceptions.ConnectionError as e:
            if self._closed:
                raise JiraDisposedError("Transport has been closed") from e
            add_log(f"Connection error: {url}", "error")
            raise JiraAPIError(
                message=f"Connection failed: {e}",
                url=url,
                method=method,
            ) from e

        check_cancelled(cancel)
        return response

    def close(self) -> None:
        """Close the session and release connections."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
        self.session.close()
        add_log("Transport session closed", "debug")
