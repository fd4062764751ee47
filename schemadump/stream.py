"""
Lazy, paged iteration over a streaming query.
"""

import logging
from collections import deque
from typing import Any, Callable, Optional

from mysql.connector import Error as MySQLError

from .models import ResultStatus


class RowStream:
    """Iterator over the rows of one query, read a page at a time.

    Only one page of rows is held in memory. When the result is exhausted
    the optional ``finalize`` callback runs exactly once, after the last
    row. A failure to send the query or to read a page ends the stream
    early without calling ``finalize``; ``error`` then holds the reason.
    """

    DEFAULT_PAGE_SIZE = 500

    def __init__(
        self,
        connection,
        query: str,
        page_size: int = DEFAULT_PAGE_SIZE,
        finalize: Optional[Callable[[], Any]] = None
    ):
        self.connection = connection
        self.query = query
        self.page_size = page_size
        self.finalize = finalize
        self.error: Optional[str] = None
        self.rows_read = 0
        self._buffer: deque = deque()
        self._status: Optional[ResultStatus] = None
        self._closed = False

    @property
    def truncated(self) -> bool:
        return self.error is not None

    def __iter__(self) -> "RowStream":
        return self

    def __next__(self):
        if self._status is None:
            self._start()

        while not self._buffer:
            if self._status is not ResultStatus.MORE:
                self._close()
                raise StopIteration
            self._read_page()

        self.rows_read += 1
        return self._buffer.popleft()

    def _start(self) -> None:
        try:
            self.connection.send_query(self.query)
            self._status = ResultStatus.MORE
        except MySQLError as e:
            self._fail(str(e))

    def _read_page(self) -> None:
        try:
            page = self.connection.read_result(self.page_size)
        except MySQLError as e:
            self._buffer.clear()
            self._fail(str(e))
            return
        if page.status is ResultStatus.ERROR:
            self._buffer.clear()
            self._fail(page.error or "unknown error")
            return
        self._buffer.extend(page.rows)
        self._status = page.status

    def _fail(self, message: str) -> None:
        self.error = message
        self._status = ResultStatus.ERROR
        logging.error(f"Query failed after {self.rows_read} row(s): {message}")

    def _close(self) -> None:
        if self._closed:
            return
        self._closed = True
        if self._status is ResultStatus.DONE and self.finalize is not None:
            self.finalize()
