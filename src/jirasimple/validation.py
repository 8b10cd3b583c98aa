#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""Input validation utilities for jirasimple.

This module validates user input before it is used in API requests:
required arguments, the server URL, structured connection strings and the
JSON string escaping used for the session login body.

Example::

    from jirasimple.validation import parse_connection_string

    pairs = parse_connection_string(
        "Data Source=https://jira.example.com;User ID=bot;password=secret"
    )
    # {'data source': 'https://jira.example.com', 'user id': 'bot', 'password': 'secret'}
"""
from typing import Any, Dict, Mapping, Tuple
from urllib.parse import urlparse

from jirasimple.exceptions import JiraValidationError


# Connection string keys, mapped to login, password and server
LOGIN_KEY = "User ID"
PASSWORD_KEY = "password"
SERVER_KEY = "Data Source"

JSON_ESCAPES: Mapping[str, str] = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\f": "\\f",
    "\b": "\\b",
}


def require_text(value: Any, field: str) -> str:
    """Ensure a required string argument is present and not blank.

    :param value: The value to check
    :param field: Argument name reported in the error

    :return: The value unchanged

    :raises JiraValidationError: If value is None, not a string or blank
    """
    if value is None or not isinstance(value, str) or not value.strip():
        raise JiraValidationError(
            message=f"{field} cannot be empty",
            field=field,
            value=value,
        )
    return value


def validate_server_url(url: str) -> str:
    """Validate a server base URL and strip trailing slashes and spaces.

    :param url: The server URL, e.g. ``https://jira.example.com/``

    :return: Normalized URL which never ends with ``/``

    :raises JiraValidationError: If the URL is empty or not http(s)

    Example::

        validate_server_url(" https://jira.example.com// ")
        # 'https://jira.example.com'
    """
    require_text(url, "server")
    url = url.strip().rstrip("/ ")

    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https"):
        raise JiraValidationError(
            message=f"Invalid URL scheme: '{parsed.scheme}'. Use http or https.",
            field="server",
            value=url,
        )
    if not parsed.netloc:
        raise JiraValidationError(
            message="URL must include a hostname",
            field="server",
            value=url,
        )
    return url


def escape_json_string(value: str) -> str:
    """Escape a string for embedding between double quotes in JSON.

    ``None`` is rendered as ``null``.

    :param value: Raw string
    :return: Escaped string (without surrounding quotes)
    """
    if value is None:
        return "null"
    parts = []
    for char in value:
        escaped = JSON_ESCAPES.get(char)
        if escaped is None and char < " ":
            escaped = f"\\u{ord(char):04x}"
        parts.append(escaped if escaped is not None else char)
    return "".join(parts)


def _invalid_connection_string(detail: str) -> JiraValidationError:
    return JiraValidationError(
        message=f"Invalid connection string: {detail}",
        field="connection_string",
    )


def parse_connection_string(text: str) -> Dict[str, str]:
    """Parse ``Key=Value;Key=Value`` pairs.

    Keys are case-insensitive and returned lower-cased. Values may be
    wrapped in single or double quotes; a doubled quote inside a quoted
    value stands for the quote itself. Empty segments are ignored.

    :param text: The connection string

    :return: Mapping of lower-cased keys to values

    :raises JiraValidationError: If the text is empty or malformed
    """
    require_text(text, "connection_string")
    pairs: Dict[str, str] = {}
    i, size = 0, len(text)

    while i < size:
        while i < size and (text[i] == ";" or text[i].isspace()):
            i += 1
        if i >= size:
            break

        eq = text.find("=", i)
        if eq < 0:
            raise _invalid_connection_string(f"missing '=' in '{text[i:].strip()}'")
        key = text[i:eq].strip()
        if not key or ";" in key:
            raise _invalid_connection_string(f"missing '=' in '{text[i:eq].strip()}'")

        i = eq + 1
        while i < size and text[i].isspace():
            i += 1

        if i < size and text[i] in "'\"":
            quote, i = text[i], i + 1
            chars = []
            while True:
                if i >= size:
                    raise _invalid_connection_string(f"unterminated value for '{key}'")
                if text[i] == quote:
                    if i + 1 < size and text[i + 1] == quote:
                        chars.append(quote)
                        i += 2
                        continue
                    i += 1
                    break
                chars.append(text[i])
                i += 1
            value = "".join(chars)
            while i < size and text[i].isspace():
                i += 1
            if i < size and text[i] != ";":
                raise _invalid_connection_string(f"unexpected text after value of '{key}'")
        else:
            end = text.find(";", i)
            if end < 0:
                end = size
            value = text[i:end].strip()
            i = end

        pairs[key.lower()] = value

    return pairs


def credentials_from_connection_string(text: str) -> Tuple[str, str, str]:
    """Extract login, password and server from a connection string.

    :param text: e.g. ``Data Source=https://jira.example.com;User ID=bot;password=secret``

    :return: ``(login, password, server)``

    :raises JiraValidationError: If a required key is missing; ``field`` names the key
    """
    pairs = parse_connection_string(text)
    values = []
    for key in (LOGIN_KEY, PASSWORD_KEY, SERVER_KEY):
        if key.lower() not in pairs:
            raise JiraValidationError(
                message=f"'{key}' not found in connection string",
                field=key,
            )
        values.append(pairs[key.lower()])
    login, password, server = values
    return login, password, server
