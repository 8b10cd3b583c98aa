#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""Pagination over Jira collection endpoints.

Jira endpoints page their results through ``startAt`` and ``maxResults``
query parameters. The end of the collection is signalled in one of two
ways, and :class:`PageMode` selects how it is recognized:

* ``START_AT``: the page echoes ``startAt``; the collection is exhausted
  once a page comes back with an empty result array (``search``,
  ``project/search``, ...). The next offset advances by the requested page
  size.
* ``IS_LAST``: the page carries an ``isLast`` flag (agile ``board``,
  ``sprint``, ...). The next offset advances by the page's own
  ``maxResults``.
* ``DETECT``: pick one of the above per page, ``isLast`` first, and stop
  after a page that carries neither field.

A page is always yielded before the decision to stop is taken.

Example::

    from jirasimple.pagination import PageMode

    pages = command.query_paged("agile:board", page_size=50, mode=PageMode.IS_LAST)
    for board in pages.items("values"):
        print(board["name"])
"""
import enum
from typing import TYPE_CHECKING, Any, Iterator, Optional

from jirasimple.cancellation import CancellationToken, check_cancelled
from jirasimple.endpoints import append_query_parameter
from jirasimple.exceptions import JiraResponseError
from jirasimple.jira_logs import add_log
from jirasimple.json_nav import boolean_or_none, int_or_none, iter_array, read

if TYPE_CHECKING:
    from jirasimple.command import JiraCommand


DEFAULT_PAGE_SIZE = 500


class PageMode(enum.Enum):
    """How the last page of a paged endpoint is recognized."""

    DETECT = "detect"
    START_AT = "startAt"
    IS_LAST = "isLast"


def detect_page_mode(document: Any) -> Optional[PageMode]:
    """Return the page shape of a response, None if it is not a page."""
    if isinstance(document, dict):
        if "isLast" in document:
            return PageMode.IS_LAST
        if "startAt" in document:
            return PageMode.START_AT
    return None


def is_exhausted(document: Any) -> bool:
    """Return True when a cursor-shaped page has nothing more to offer.

    That is the case when one of its top-level arrays is empty, or when it
    has no array at all.
    """
    if isinstance(document, list):
        return not document
    if not isinstance(document, dict):
        return True
    arrays = [value for value in document.values() if isinstance(value, list)]
    return not arrays or any(not value for value in arrays)


class PagedQuery:
    """Iterable over the pages of one paged query.

    Every call to ``iter()`` starts a new fetch loop from offset 0, so the
    object can be iterated more than once at the cost of re-issuing every
    request. Only one request is in flight at a time.

    Attributes:
        command: The command issuing the requests.
        url: Resolved URL including the ``maxResults`` parameter.
        method: HTTP method.
        page_size: Requested page size.
        mode: How the last page is recognized.
    """

    def __init__(
        self,
        command: "JiraCommand",
        url: str,
        payload: str,
        method: str = "GET",
        page_size: int = DEFAULT_PAGE_SIZE,
        cancel: Optional[CancellationToken] = None,
        mode: PageMode = PageMode.DETECT,
    ) -> None:
        """Initialize the paged query. Nothing is sent yet.

        :param command: Command used to send the requests
        :param url: Resolved URL, without paging parameters
        :param payload: JSON text body sent with every request
        :param method: HTTP method
        :param page_size: Number of results per page
        :param cancel: Cancellation token checked around every request
        :param mode: How the last page is recognized
        """
        self.command = command
        self.url = append_query_parameter(url, "maxResults", page_size)
        self.payload = payload
        self.method = method
        self.page_size = page_size
        self.cancel = cancel
        self.mode = mode

    def __iter__(self) -> Iterator[Any]:
        return self._pages()

    def _pages(self) -> Iterator[Any]:
        self.command.ensure_connected(self.cancel)

        start_at = 0
        while start_at >= 0:
            check_cancelled(self.cancel)
            url = f"{self.url}&startAt={start_at}"
            document = self.command.send(self.method, url, self.payload, self.cancel)
            if document is None:
                add_log(f"Empty page at startAt={start_at}, stopping", "debug")
                return

            step = self._next_step(document)
            yield document
            if step is None:
                return
            start_at += step

    def _next_step(self, document: Any) -> Optional[int]:
        """Return how far to advance, or None when this is the last page."""
        mode = self.mode
        if mode is PageMode.DETECT:
            mode = detect_page_mode(document)
            if mode is None:
                return None

        if mode is PageMode.START_AT:
            return None if is_exhausted(document) else self.page_size

        is_last = boolean_or_none(read(document, "isLast"))
        if is_last is None:
            raise JiraResponseError("Page has no boolean 'isLast'", field="isLast")
        if is_last:
            return None
        max_results = int_or_none(read(document, "maxResults"))
        return max_results if max_results and max_results > 0 else self.page_size

    def items(self, key: str) -> Iterator[Any]:
        """Iterate over the elements of the ``key`` array of every page.

        :param key: Name of the result array, e.g. ``issues`` or ``values``

        Example::

            for issue in command.jql_paged("project = TEST").items("issues"):
                print(issue["key"])
        """
        for page in self:
            yield from iter_array(read(page, key))

    def collect(self) -> list:
        """Fetch every page into a list.

        Warning: This loads all pages into memory.
        """
        return list(self)

    def __repr__(self) -> str:
        return f"PagedQuery({self.method} {self.url}, mode={self.mode.value})"
