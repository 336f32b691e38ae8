"""
Main export orchestration for the database backup tool.
"""

import io
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Optional, TextIO, Union

from .connection import Connection
from .models import Attachment, ExportStats
from .output import ensure_gzip_support, open_output
from .routine_dumper import RoutineDumper
from .table_dumper import TableDumper
from .table_selection import TableSelection


@contextmanager
def unbuffered(connection: Connection) -> Iterator[bool]:
    """
    Switch a buffered connection to streaming results for the block.

    Connections without a boolean ``buffered`` attribute are left alone.
    Yields whether the mode was changed; it is restored even on error.
    """
    if getattr(connection, 'buffered', None) is not True:
        yield False
        return

    connection.buffered = False
    logging.debug("Disabled buffered queries")
    try:
        yield True
    finally:
        connection.buffered = True
        logging.debug("Re-enabled buffered queries")


class DatabaseDumper:
    """Exports selected tables and stored routines as a SQL script."""

    VERSION = "1.0.0"

    SESSION_SETUP = (
        "SET NAMES utf8;\n"
        "SET foreign_key_checks = 0;\n"
        "SET sql_mode = 'NO_AUTO_VALUE_ON_ZERO';\n\n"
    )

    def __init__(
        self,
        connection: Connection,
        load_prefix: Optional[str] = '',
        routines: bool = True,
        batch_size: int = TableDumper.DEFAULT_BATCH_SIZE
    ):
        """
        Args:
            connection: Connected client, owned by the caller.
            load_prefix: Select every table starting with this prefix; an
                empty prefix selects all tables, None selects none.
            routines: Also export stored functions and procedures.
            batch_size: Maximum rows per INSERT statement.
        """
        self.connection = connection
        self.routines = routines
        self.selection = TableSelection(connection)
        self.table_dumper = TableDumper(connection, batch_size)
        self.routine_dumper = RoutineDumper(connection)
        self.stats = ExportStats()

        if load_prefix is not None:
            self.selection.load(load_prefix)

    def get_tables(self) -> dict[str, bool]:
        return self.selection.tables

    def set_tables(self, tables: dict[str, bool]) -> None:
        self.selection.set_tables(tables)

    def set_table(self, table: str, data: bool = True) -> None:
        self.selection.add_table(table, data)

    def create(
        self,
        file_name: Optional[str] = None,
        compress: bool = False,
        stream: Optional[BinaryIO] = None,
        directory: Optional[Path] = None
    ) -> Union[str, Attachment]:
        """
        Export the selected tables to SQL.

        Args:
            file_name: Deliver as ``<file_name>.sql[.gz]`` instead of
                returning the script text.
            compress: Gzip the delivered attachment.
            stream: Binary stream receiving the attachment body; defaults to
                a file in ``directory``.
            directory: Directory for the attachment file.

        Returns:
            The script text, or the Attachment when ``file_name`` is given.
        """
        if compress:
            ensure_gzip_support()

        self.stats = ExportStats()
        logging.info(f"Starting export of {len(self.selection)} table(s)")

        with unbuffered(self.connection):
            if not file_name:
                sink = io.StringIO()
                self._export(sink)
                return sink.getvalue()

            attachment = Attachment(name=file_name, compress=compress)
            with open_output(attachment, stream, directory) as sink:
                self._export(sink)
            return attachment

    def _export(self, sink: TextIO) -> None:
        sink.write(f"-- Database Backup {self.VERSION}\n\n")
        sink.write(self.SESSION_SETUP)

        for table, data in self.selection:
            self.table_dumper.write_schema(sink, table)
            if data:
                rows = self.table_dumper.write_data(sink, table)
                self.stats.rows += rows
                logging.info(f"  ✓ {table}: {rows} rows")
            else:
                logging.info(f"  ✓ {table}: schema only")
            self.stats.tables += 1

        if self.routines:
            for row in list(self.connection.query("SELECT database()")):
                if row[0] is not None:
                    self.stats.routines += self.routine_dumper.write_routines(sink, row[0])
