"""
Table dumping functionality for the database backup tool.
"""

import logging
from typing import Any, TextIO

from .columns import get_escape_profile
from .connection import Connection
from .exceptions import InvalidInputError
from .utils import quote_identifier, to_text


class TableDumper:
    """Writes the schema and data of individual tables."""

    DEFAULT_BATCH_SIZE = 1000

    def __init__(self, connection: Connection, batch_size: int = DEFAULT_BATCH_SIZE):
        if type(batch_size) is not int or batch_size < 1:
            raise InvalidInputError(f"Batch size must be a positive integer, got {batch_size!r}")
        self.connection = connection
        self.batch_size = batch_size

    def write_schema(self, sink: TextIO, table: str) -> None:
        """
        Write DROP TABLE followed by the server's CREATE statement(s).

        A table whose definition cannot be read gets only the DROP; a missing
        table is reported when its data is selected.
        """
        quoted = quote_identifier(table)
        sink.write(f"DROP TABLE IF EXISTS {quoted};\n")

        try:
            result = self.connection.query(f"SHOW CREATE TABLE {quoted}")
        except Exception as e:
            logging.warning(f"Could not read definition of table '{table}': {e}")
            return

        for row in result:
            sink.write(f"{to_text(row[1])};\n")

    def write_data(self, sink: TextIO, table: str) -> int:
        """
        Write the rows of a table as batched INSERT statements.

        Args:
            sink: Text stream receiving the statements.
            table: Name of the table to dump.

        Returns:
            Number of rows written.

        Raises:
            InvalidInputError: If the table cannot be selected or its rows
                do not match its column metadata.
        """
        escape = get_escape_profile(self.connection, table)
        quoted = quote_identifier(table)

        try:
            result = self.connection.query(f"SELECT * FROM {quoted}")
        except Exception as e:
            raise InvalidInputError(f"Nonexistent table: {table}") from e

        logging.debug(f"Dumping data of table '{table}'")

        rows = 0
        for row in result:
            if rows % self.batch_size == 0:
                sink.write(("" if rows == 0 else ";") + f"\nINSERT INTO {quoted} VALUES (")
            else:
                sink.write(",\n(")

            if len(row) != len(escape):
                raise InvalidInputError(
                    f"Table '{table}' returned {len(row)} values but has {len(escape)} columns"
                )
            sink.write(",".join(
                self._format_value(value, quote) for value, quote in zip(row, escape)
            ))
            sink.write(")")
            rows += 1

        sink.write(";\n\n" if rows > 0 else "\n")
        return rows

    def _format_value(self, value: Any, quote: bool) -> str:
        if value is None:
            return "null"
        if value == '' or value == b'':
            return "''"
        if quote:
            return self.connection.quote(value)
        return str(value)
