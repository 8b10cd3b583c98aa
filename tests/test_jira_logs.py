#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""Unit tests for jirasimple.jira_logs module."""
import logging

import pytest

from jirasimple import jira_logs
from jirasimple.jira_logs import (
    CredentialMaskingFilter,
    add_log,
    enable_file_logging,
    mask_sensitive_string,
)


class TestCredentialMaskingFilter:
    """Tests for CredentialMaskingFilter."""

    @pytest.mark.parametrize(
        "message, secret",
        [
            ('{"username": "bot", "password": "s3cr3t"}', "s3cr3t"),
            ("password=hunter2", "hunter2"),
            ("Cookie: JSESSIONID=ABC123DEF", "ABC123DEF"),
            ("atlassian.xsrf.token=XYZ987", "XYZ987"),
            ("Authorization: Bearer abc.def.ghi", "abc.def.ghi"),
            ("Authorization: Basic Ym90OnNlY3JldA==", "Ym90OnNlY3JldA=="),
        ],
    )
    def test_masks_secrets(self, message, secret):
        """Test that credentials are replaced by the mask."""
        masked = CredentialMaskingFilter()._mask_sensitive_data(message)
        assert secret not in masked
        assert CredentialMaskingFilter.MASK in masked

    def test_leaves_plain_messages(self):
        """Test that ordinary messages pass unchanged."""
        message = "GET https://jira.example.com/rest/api/latest/myself"
        assert CredentialMaskingFilter()._mask_sensitive_data(message) == message

    def test_masks_record_args(self):
        """Test that string arguments are masked too."""
        record = logging.LogRecord("x", logging.INFO, __file__, 1, "%s", ("password=abc",), None)
        CredentialMaskingFilter().filter(record)
        assert "abc" not in record.getMessage()


class TestAddLog:
    """Tests for add_log()."""

    @pytest.mark.parametrize(
        "level, expected",
        [("debug", logging.DEBUG), ("error", logging.ERROR), ("info", logging.INFO), ("other", logging.INFO)],
    )
    def test_levels(self, caplog, level, expected):
        """Test the mapping of level names."""
        caplog.set_level(logging.DEBUG, logger=jira_logs.logger.name)
        add_log("hello", level)
        assert caplog.records[-1].levelno == expected

    def test_masks_messages(self, caplog):
        """Test that the module logger masks credentials."""
        caplog.set_level(logging.DEBUG, logger=jira_logs.logger.name)
        add_log("login with password=topsecret", "info")
        assert "topsecret" not in caplog.text


class TestEnableFileLogging:
    """Tests for enable_file_logging()."""

    def test_writes_masked_file(self, tmp_path):
        """Test that the rotating file receives masked entries."""
        previous_level = jira_logs.logger.level
        handler = enable_file_logging(str(tmp_path / "logs"), "jira.log")
        try:
            add_log("session JSESSIONID=ABC123 ready", "debug")
            handler.flush()
        finally:
            jira_logs.logger.removeHandler(handler)
            handler.close()
            jira_logs.logger.setLevel(previous_level)

        content = (tmp_path / "logs" / "jira.log").read_text()
        assert "ready" in content
        assert "ABC123" not in content
        assert handler.maxBytes == 1000000
        assert handler.backupCount == 20


class TestMaskSensitiveString:
    """Tests for mask_sensitive_string()."""

    def test_long_value(self):
        """Test that only the ends are kept."""
        assert mask_sensitive_string("abc123xyz789") == "ab***89"

    @pytest.mark.parametrize("value", ["", "abc", None])
    def test_short_value(self, value):
        """Test that short values are fully hidden."""
        assert mask_sensitive_string(value) == "***"
