#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""Logging configuration and utilities for jirasimple.

This module provides logging setup with credential masking to prevent
sensitive information from being written to log files.

Features:
    - Automatic credential masking (passwords, session cookies, tokens)
    - Opt-in rotating file handler for log management
"""
import logging
import os
import re
from logging.handlers import RotatingFileHandler
from typing import List, Optional, Pattern


WORK_PATH = os.path.abspath(os.getcwd())

# Patterns for sensitive data that should be masked in logs
SENSITIVE_PATTERNS: List[Pattern] = [
    # Passwords, including the "password": "..." pair of the session body
    re.compile(r'(password|passwd|pwd)["\s:=]+["\']?([^\s"\',;]+)["\']?', re.I),
    # Session cookies
    re.compile(r'(JSESSIONID|atlassian\.xsrf\.token)["\s:=]+["\']?([^\s"\',;]+)["\']?', re.I),
    re.compile(r'(Bearer\s+)([A-Za-z0-9_\-\.]+)', re.I),
    re.compile(r'(Basic\s+)([A-Za-z0-9+/=]+)', re.I),
    re.compile(r'(api[_-]?token|secret)["\s:=]+["\']?([A-Za-z0-9_\-\.]+)["\']?', re.I),
]


class CredentialMaskingFilter(logging.Filter):
    """Logging filter that masks sensitive credentials in log messages.

    Example::

        logger = logging.getLogger(__name__)
        logger.addFilter(CredentialMaskingFilter())
        logger.info("Connecting with password=secret123")
        # Logged as: "Connecting with password=***MASKED***"
    """

    MASK = "***MASKED***"

    def filter(self, record: logging.LogRecord) -> bool:
        """Filter and mask sensitive data in log records.

        :param record: The log record to process
        :return: True to include the record in output
        """
        if record.msg:
            record.msg = self._mask_sensitive_data(str(record.msg))
        if record.args:
            record.args = tuple(
                self._mask_sensitive_data(arg) if isinstance(arg, str) else arg
                for arg in record.args
            )
        return True

    def _mask_sensitive_data(self, message: str) -> str:
        """Mask sensitive data in a message string.

        :param message: The message to process
        :return: Message with sensitive data masked
        """
        for pattern in SENSITIVE_PATTERNS:
            message = pattern.sub(rf'\1{self.MASK}', message)
        return message


class SecureFormatter(logging.Formatter):
    """Logging formatter that masks credentials in formatted output."""

    def format(self, record: logging.LogRecord) -> str:
        formatted = super().format(record)
        for pattern in SENSITIVE_PATTERNS:
            formatted = pattern.sub(rf'\1{CredentialMaskingFilter.MASK}', formatted)
        return formatted


logger = logging.getLogger(__name__)
formatting = SecureFormatter(
    "%(asctime)s %(levelname)s: %(message)s [in %(pathname)s:%(lineno)d]"
)

credential_filter = CredentialMaskingFilter()
logger.addFilter(credential_filter)
logger.addHandler(logging.NullHandler())


def enable_file_logging(
    directory: Optional[str] = None,
    filename: str = "app.log",
    level: int = logging.DEBUG,
) -> RotatingFileHandler:
    """Write library logs to a rotating file.

    :param directory: Folder for the log file (default: ``<cwd>/logs``)
    :param filename: Name of the log file
    :param level: Minimum level written to the file

    :return: The attached handler, so callers can detach it again

    Example::

        from jirasimple import enable_file_logging

        enable_file_logging("/var/log/jira-sync")
    """
    directory = directory or os.path.join(WORK_PATH, "logs")
    os.makedirs(directory, exist_ok=True)
    handler = RotatingFileHandler(
        os.path.join(directory, filename),
        maxBytes=1000000,
        backupCount=20
    )
    handler.setFormatter(formatting)
    handler.addFilter(credential_filter)
    handler.setLevel(level)
    logger.addHandler(handler)
    if logger.level == logging.NOTSET or logger.level > level:
        logger.setLevel(level)
    return handler


def add_log(message: str, level: str) -> None:
    """Write a log entry with automatic credential masking.

    :param message: The message to log
    :param level: Log level (info, debug, error)

    :return: None

    Example::

        from jirasimple import add_log

        add_log("Processing request", "info")
        add_log("password=abc123", "debug")  # password will be masked
    """
    if level.lower() == "debug":
        logger.debug(message)
    elif level.lower() == "error":
        logger.error(message)
    else:
        logger.info(message)


def mask_sensitive_string(value: str) -> str:
    """Mask a string value for safe display or logging.

    :param value: The string to mask
    :return: Masked string showing only first and last 2 characters

    Example::

        mask_sensitive_string("abc123xyz789")
        # 'ab***89'
    """
    if not value or len(value) < 4:
        return "***"
    return f"{value[:2]}***{value[-2:]}"
