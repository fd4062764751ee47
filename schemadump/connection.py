"""
Database connection management for the schema dumper.
"""

import logging
from typing import Optional

import mysql.connector
from mysql.connector import Error as MySQLError

from .models import ResultPage, ResultStatus


class DatabaseConnection:
    """Manages a MySQL connection with context manager support.

    Offers a non-streaming ``query`` for metadata lookups and a streaming
    ``send_query``/``read_result`` pair for large result sets. Rows come
    back as flat tuples of raw server values in compact mode, keyed by
    column name otherwise.
    """

    DEFAULT_PORT = 3306
    DEFAULT_CHARSET = 'utf8mb4'
    DEFAULT_TIMEOUT = 10

    def __init__(
        self,
        host: str,
        port: int,
        user: str,
        password: str,
        database: Optional[str] = None,
        charset: str = DEFAULT_CHARSET,
        timeout: int = DEFAULT_TIMEOUT
    ):
        self.host = host
        self.port = port
        self.user = user
        self.password = password
        self.database = database
        self.charset = charset
        self.timeout = timeout
        self.compact_arrays = True
        self.connection = None
        self._cursor = None

    def __enter__(self) -> "DatabaseConnection":
        """Context manager entry - establish connection."""
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit - close connection."""
        self.disconnect()

    def connect(self) -> None:
        """Establish database connection."""
        try:
            self.connection = mysql.connector.connect(
                host=self.host,
                port=self.port,
                user=self.user,
                password=self.password,
                database=self.database,
                charset=self.charset,
                use_unicode=True,
                connection_timeout=self.timeout,
                consume_results=True
            )
            logging.info(f"Connected to {self.host}:{self.port}/{self.database or 'N/A'}")
        except MySQLError as e:
            logging.error(f"Failed to connect to database: {e}")
            raise

    def disconnect(self) -> None:
        """Close database connection."""
        self._close_cursor()
        if self.connection and self.connection.is_connected():
            self.connection.close()
            logging.debug("Database connection closed")

    def set_compact_arrays(self, compact: bool) -> None:
        """Choose flat tuple rows (True) or rows keyed by column name (False)."""
        self.compact_arrays = compact

    def _new_cursor(self, buffered: bool):
        # compact rows are unconverted: each value is the server's own bytes
        if self.compact_arrays:
            return self.connection.cursor(buffered=buffered, raw=True)
        return self.connection.cursor(buffered=buffered, dictionary=True)

    def _close_cursor(self) -> None:
        if self._cursor is None:
            return
        try:
            self._cursor.close()
        except MySQLError as e:
            logging.debug(f"Ignoring error while closing cursor: {e}")
        finally:
            self._cursor = None

    def query(self, sql: str) -> list:
        """Execute a query and return every row of its result."""
        cursor = self._new_cursor(buffered=True)
        try:
            cursor.execute(sql)
            return cursor.fetchall()
        finally:
            cursor.close()

    def send_query(self, sql: str) -> int:
        """Start a streaming query; rows are read with read_result().

        Returns the number of bytes sent.
        """
        self._close_cursor()
        cursor = self._new_cursor(buffered=False)
        try:
            cursor.execute(sql)
        except MySQLError:
            cursor.close()
            raise
        self._cursor = cursor
        return len(sql.encode('utf-8'))

    def read_result(self, size: int) -> ResultPage:
        """Read the next page of at most size rows of the streaming query."""
        if self._cursor is None:
            return ResultPage([], ResultStatus.ERROR, "no streaming query in progress")

        try:
            rows = self._cursor.fetchmany(size)
        except MySQLError as e:
            self._close_cursor()
            return ResultPage([], ResultStatus.ERROR, str(e))

        if len(rows) < size:
            self._close_cursor()
            return ResultPage(rows, ResultStatus.DONE)
        return ResultPage(rows, ResultStatus.MORE)
