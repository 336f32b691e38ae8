"""
Stored function and procedure dumping for the database backup tool.
"""

import logging
from collections.abc import Iterator
from typing import TextIO

from .connection import Connection
from .models import Routine, RoutineKind
from .utils import quote_identifier, to_text


class RoutineDumper:
    """Writes stored routines of a database inside a DELIMITER block."""

    DELIMITER = ";;"

    NAME_COLUMN = 1
    STATEMENT_COLUMN = 2

    def __init__(self, connection: Connection):
        self.connection = connection

    def list_routines(self, database: str) -> Iterator[Routine]:
        """Yield functions, then procedures, that have a CREATE statement."""
        for kind in RoutineKind:
            # Consumed up front: an unbuffered connection cannot run the
            # SHOW CREATE statements while this result is still open
            rows = list(self.connection.query(
                f"SHOW {kind.value} STATUS WHERE Db = {self.connection.quote(database)}"
            ))
            for row in rows:
                name = to_text(row[self.NAME_COLUMN])
                result = list(self.connection.query(
                    f"SHOW CREATE {kind.value} {quote_identifier(name)}"
                ))
                statement = result[0][self.STATEMENT_COLUMN] if result else None
                if statement is not None:
                    statement = to_text(statement)
                if statement:
                    yield Routine(database=database, kind=kind, name=name, statement=statement)
                else:
                    logging.warning(f"No definition available for {kind.value} '{name}'")

    def write_routines(self, sink: TextIO, database: str) -> int:
        """Write all routines of a database, returning how many were written."""
        count = 0
        for routine in self.list_routines(database):
            if count == 0:
                sink.write(f"DELIMITER {self.DELIMITER}\n\n")
            sink.write(f"{routine.drop_statement()}{self.DELIMITER}\n")
            sink.write(f"{routine.create_statement()}{self.DELIMITER}\n\n")
            count += 1

        if count > 0:
            sink.write("DELIMITER ;\n\n")
            logging.info(f"Exported {count} routine(s) from '{database}'")
        return count
