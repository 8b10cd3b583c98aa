#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""Cooperative cancellation for long running Jira operations.

A :class:`CancellationToken` is handed to ``connect``, ``query`` or
``query_paged``. The library checks it before each request, after each
response and while waiting for the connection lock. A request that is
already on the wire is not interrupted.

Example::

    from jirasimple import CancellationToken

    token = CancellationToken()
    token.cancel_after(30)
    for page in command.query_paged("search?jql=project=TEST", cancel=token):
        ...
"""
import threading
from typing import Optional

from jirasimple.exceptions import JiraCancelledError


class CancellationToken:
    """Thread-safe, one-way cancellation flag."""

    def __init__(self) -> None:
        self._event = threading.Event()
        self._timer: Optional[threading.Timer] = None

    @property
    def cancelled(self) -> bool:
        """Return True once cancellation was requested."""
        return self._event.is_set()

    def cancel(self) -> None:
        """Request cancellation. Calling it more than once is harmless."""
        self._event.set()
        if self._timer is not None:
            self._timer.cancel()

    def cancel_after(self, seconds: float) -> None:
        """Request cancellation once ``seconds`` have elapsed.

        :param seconds: Delay before the token is cancelled
        """
        if self._timer is not None:
            self._timer.cancel()
        self._timer = threading.Timer(seconds, self._event.set)
        self._timer.daemon = True
        self._timer.start()

    def wait(self, timeout: Optional[float] = None) -> bool:
        """Block until cancelled or ``timeout`` expires.

        :return: True if the token is cancelled
        """
        return self._event.wait(timeout)

    def raise_if_cancelled(self) -> None:
        """Raise :class:`JiraCancelledError` if cancellation was requested."""
        if self._event.is_set():
            raise JiraCancelledError()

    def __repr__(self) -> str:
        return f"<CancellationToken cancelled={self.cancelled}>"


def check_cancelled(cancel: Optional[CancellationToken]) -> None:
    """Raise if ``cancel`` is set. ``None`` means the call cannot be cancelled."""
    if cancel is not None:
        cancel.raise_if_cancelled()
