#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""Exception classes for jirasimple.

This module provides the hierarchy of exception classes raised by the
connection, command and pagination layers.

Exception Hierarchy:
    JiraSimpleError (base)
    ├── JiraValidationError - Missing or malformed arguments
    ├── JiraDisposedError - Operation on a disposed connection
    ├── JiraAuthenticationError - Session login rejected by the server
    ├── JiraAPIError - Non-success status from a REST endpoint
    └── JiraResponseError - Response body could not be parsed or lacks a field

    JiraCancelledError - Cancellation requested by the caller. It is kept
    outside of JiraSimpleError so that ``except JiraSimpleError`` does not
    swallow it.
"""
from typing import Any, Dict, Optional


class JiraSimpleError(Exception):
    """Base class for all jirasimple exceptions.

    Attributes:
        errors: Error category string.
        messages: Error message string.
    """

    def __init__(
        self,
        errors: str = None,
        messages: str = None,
        *args: Any,
        **kwargs: Any
    ) -> None:
        """Initialize the exception.

        :param errors: Error category (value, disposed, login, remote, response)
        :param messages: Custom error message
        :param args: Additional positional arguments
        :param kwargs: Additional keyword arguments
        """
        self.errors = errors
        self.messages = messages
        super().__init__(self.__str__())

    def __invalid_value__(self) -> None:
        """A required value is missing or malformed."""

    def __disposed__(self) -> None:
        """The connection has been disposed."""

    def __login_issues__(self) -> None:
        """An issue with authenticating logins."""

    def __remote_failure__(self) -> None:
        """The server answered with an unsuccessful status."""

    def __bad_response__(self) -> None:
        """The server answer could not be understood."""

    def __str__(self) -> str:
        """Return the representation of the error messages."""
        err = self.errors
        if err == "value":
            msg = self.messages or self.__invalid_value__.__doc__
        elif err == "disposed":
            msg = self.messages or self.__disposed__.__doc__
        elif err == "login":
            msg = self.messages or self.__login_issues__.__doc__
        elif err == "response":
            msg = self.messages or self.__bad_response__.__doc__
        else:
            msg = self.messages or self.__remote_failure__.__doc__
        return f"<JiraSimpleError: {msg}>"


class JiraValidationError(JiraSimpleError):
    """Raised when an argument fails validation.

    Always raised before any network traffic happens.

    Example::

        try:
            command.query("")
        except JiraValidationError as e:
            print(e.field)  # address
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        value: Any = None,
    ) -> None:
        """Initialize the validation error.

        :param message: Error description
        :param field: Name of the field that failed validation
        :param value: The invalid value
        """
        self.field = field
        self.value = value
        super().__init__("value", message)

    def __str__(self) -> str:
        """Return formatted error message."""
        if self.field:
            return f"<JiraValidationError: {self.messages} (field: {self.field})>"
        return f"<JiraValidationError: {self.messages}>"


class JiraDisposedError(JiraSimpleError):
    """Raised when a disposed connection, or a command bound to it, is used."""

    def __init__(self, message: str = "Connection has been disposed") -> None:
        """Initialize the disposed error.

        :param message: Error description
        """
        super().__init__("disposed", message)

    def __str__(self) -> str:
        """Return formatted error message."""
        return f"<JiraDisposedError: {self.messages}>"


class JiraAuthenticationError(JiraSimpleError):
    """Raised when the session endpoint rejects the credentials.

    The connection stays disconnected, so a later call may try again.

    Example::

        try:
            connection.connect()
        except JiraAuthenticationError as e:
            print(f"Login failed: {e.reason}")
    """

    def __init__(
        self,
        message: str = "Authentication failed",
        status_code: Optional[int] = None,
        reason: Optional[str] = None,
    ) -> None:
        """Initialize the authentication error.

        :param message: Error description
        :param status_code: HTTP status code if available
        :param reason: HTTP reason phrase if available
        """
        self.status_code = status_code
        self.reason = reason
        super().__init__("login", message)

    def __str__(self) -> str:
        """Return formatted error message."""
        base_msg = self.messages or "Authentication failed"
        if self.status_code:
            return f"<JiraAuthenticationError: {base_msg} (HTTP {self.status_code})>"
        return f"<JiraAuthenticationError: {base_msg}>"


class JiraAPIError(JiraSimpleError):
    """Raised when a Jira REST request fails.

    Covers non-success statuses as well as transport failures, in which
    case ``status_code`` is ``None``.

    Attributes:
        status_code: HTTP status code from the response.
        reason: HTTP reason phrase from the response.
        response_body: Parsed JSON response body, if any.
        url: The URL that was requested.
        method: The HTTP method used.

    Example::

        try:
            document = command.query("issue/TEST-1")
        except JiraAPIError as e:
            print(f"API error: {e.status_code} - {e.reason}")
    """

    def __init__(
        self,
        message: str = "API request failed",
        status_code: Optional[int] = None,
        reason: Optional[str] = None,
        response_body: Optional[Dict] = None,
        url: Optional[str] = None,
        method: Optional[str] = None,
    ) -> None:
        """Initialize the API error.

        :param message: Error description
        :param status_code: HTTP status code
        :param reason: HTTP reason phrase
        :param response_body: API response body
        :param url: Request URL
        :param method: HTTP method
        """
        self.status_code = status_code
        self.reason = reason
        self.response_body = response_body
        self.url = url
        self.method = method
        super().__init__("remote", message)

    @classmethod
    def from_response(cls, response: Any, message: str = None) -> "JiraAPIError":
        """Create an exception from a requests Response object.

        The message is the reason phrase unless one is given.

        :param response: requests.Response object
        :param message: Optional custom message

        :return: JiraAPIError instance
        """
        try:
            body = response.json()
        except ValueError:
            body = None

        reason = getattr(response, "reason", None)
        request = getattr(response, "request", None)
        return cls(
            message=message or reason or f"Request failed with status {response.status_code}",
            status_code=response.status_code,
            reason=reason,
            response_body=body,
            url=getattr(response, "url", None),
            method=getattr(request, "method", None),
        )

    def __str__(self) -> str:
        """Return formatted error message."""
        parts = [f"<JiraAPIError: {self.messages}"]
        if self.status_code:
            parts.append(f" (HTTP {self.status_code})")
        if self.method and self.url:
            parts.append(f" [{self.method} {self.url}]")
        parts.append(">")
        return "".join(parts)


class JiraResponseError(JiraSimpleError):
    """Raised when a response is not valid JSON or misses an expected field.

    Example::

        try:
            info = command.server_info()
        except JiraResponseError as e:
            print(f"Unexpected server info: {e.field}")
    """

    def __init__(
        self,
        message: str = "Malformed response",
        field: Optional[str] = None,
    ) -> None:
        """Initialize the response error.

        :param message: Error description
        :param field: Name of the missing or malformed field
        """
        self.field = field
        super().__init__("response", message)

    def __str__(self) -> str:
        """Return formatted error message."""
        if self.field:
            return f"<JiraResponseError: {self.messages} (field: {self.field})>"
        return f"<JiraResponseError: {self.messages}>"


class JiraCancelledError(Exception):
    """Raised when a caller cancels an operation through its token."""

    def __init__(self, message: str = "Operation was cancelled") -> None:
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        """Return formatted error message."""
        return f"<JiraCancelledError: {self.message}>"


def is_success_status(status_code: int) -> bool:
    """Return True for 2xx statuses."""
    return 200 <= status_code < 300


def raise_for_status(response: Any, message: str = None) -> None:
    """Raise an appropriate exception for HTTP error responses.

    :param response: requests.Response object
    :param message: Optional custom error message

    :raises JiraAPIError: For any non-2xx response
    """
    if is_success_status(response.status_code):
        return
    raise JiraAPIError.from_response(response, message)
