#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""Unit tests for jirasimple.cancellation module."""
import pytest

from jirasimple.cancellation import CancellationToken, check_cancelled
from jirasimple.exceptions import JiraCancelledError


class TestCancellationToken:
    """Tests for CancellationToken."""

    def test_initial_state(self):
        """Test that a new token is not cancelled."""
        token = CancellationToken()
        assert token.cancelled is False
        token.raise_if_cancelled()

    def test_cancel(self):
        """Test that cancel() is one-way and repeatable."""
        token = CancellationToken()
        token.cancel()
        token.cancel()
        assert token.cancelled is True
        with pytest.raises(JiraCancelledError):
            token.raise_if_cancelled()

    def test_cancel_after(self):
        """Test that the timer cancels the token."""
        token = CancellationToken()
        token.cancel_after(0.01)
        assert token.wait(5) is True
        assert token.cancelled is True

    def test_wait_times_out(self):
        """Test that wait() returns False when nothing happens."""
        assert CancellationToken().wait(0.01) is False

    def test_repr(self):
        """Test the representation."""
        assert repr(CancellationToken()) == "<CancellationToken cancelled=False>"


class TestCheckCancelled:
    """Tests for check_cancelled()."""

    def test_none_is_never_cancelled(self):
        """Test that a missing token is ignored."""
        check_cancelled(None)

    def test_cancelled_token_raises(self):
        """Test that a cancelled token raises."""
        token = CancellationToken()
        token.cancel()
        with pytest.raises(JiraCancelledError):
            check_cancelled(token)
