"""
Database connection management for the database backup tool.
"""

import logging
from collections.abc import Iterator
from datetime import date, datetime, time, timedelta
from typing import Any, Optional, Protocol

import mysql.connector
from mysql.connector import Error as MySQLError

from .utils import escape_string


class Connection(Protocol):
    """What the export engine needs from a connection.

    ``query`` executes immediately, raising on failure, and yields the rows
    lazily. Connections that also expose a boolean ``buffered`` attribute
    let the engine switch to streaming results for the duration of an export.
    """

    def query(self, sql: str) -> Iterator[tuple]:
        ...

    def quote(self, value: Any) -> str:
        ...


def _format_timedelta(value: timedelta) -> str:
    # TIME columns come back as timedelta and may exceed 24 hours
    sign = '-' if value < timedelta(0) else ''
    value = abs(value)
    hours, remainder = divmod(value.days * 86400 + value.seconds, 3600)
    minutes, seconds = divmod(remainder, 60)
    text = f"{sign}{hours:02d}:{minutes:02d}:{seconds:02d}"
    if value.microseconds:
        text += f".{value.microseconds:06d}"
    return text


class DatabaseConnection:
    """Manages MySQL database connections with context manager support."""

    DEFAULT_PORT = 3306
    DEFAULT_CHARSET = 'utf8mb4'

    def __init__(
        self,
        host: str,
        port: int,
        user: str,
        password: str,
        database: Optional[str] = None,
        buffered: bool = True
    ):
        self.host = host
        self.port = port
        self.user = user
        self.password = password
        self.database = database
        self.buffered = buffered
        self.connection = None

        # Pre-build type formatters for faster dispatch
        self._type_formatters: dict[type, callable] = {
            bytes: lambda v: f"X'{v.hex()}'",
            bytearray: lambda v: f"X'{v.hex()}'",
            datetime: lambda v: f"'{v.isoformat(sep=' ')}'",
            date: lambda v: f"'{v.isoformat()}'",
            time: lambda v: f"'{v.isoformat()}'",
            timedelta: lambda v: f"'{_format_timedelta(v)}'",
            # SET columns: members joined the way MySQL stores them
            set: lambda v: f"'{escape_string(','.join(sorted(v)))}'",
            frozenset: lambda v: f"'{escape_string(','.join(sorted(v)))}'",
        }

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
                charset=self.DEFAULT_CHARSET,
                use_unicode=True
            )
            logging.info(f"Connected to {self.host}:{self.port}/{self.database or 'N/A'}")
        except MySQLError as e:
            logging.error(f"Failed to connect to database: {e}")
            raise

    def disconnect(self) -> None:
        """Close database connection."""
        if self.connection and self.connection.is_connected():
            self.connection.close()
            logging.debug("Database connection closed")

    def query(self, sql: str) -> Iterator[tuple]:
        """Execute a statement and return an iterator over its rows.

        With ``buffered`` off the rows are streamed from the server, so the
        iterator must be exhausted before the next statement is executed.
        """
        cursor = self.connection.cursor(buffered=self.buffered)
        try:
            cursor.execute(sql)
        except MySQLError:
            cursor.close()
            raise
        return self._iter_rows(cursor)

    def _iter_rows(self, cursor) -> Iterator[tuple]:
        try:
            for row in cursor:
                yield row
        finally:
            cursor.close()

    def quote(self, value: Any) -> str:
        """Render a value as a MySQL literal."""
        formatter = self._type_formatters.get(type(value))
        if formatter:
            return formatter(value)
        return f"'{escape_string(str(value))}'"
