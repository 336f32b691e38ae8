"""
Selection of tables to export.
"""

import logging
from collections.abc import Iterator, Mapping

from .connection import Connection
from .exceptions import InvalidInputError
from .utils import to_text


class TableSelection:
    """Ordered mapping of table name to whether its data is exported."""

    def __init__(self, connection: Connection):
        self.connection = connection
        self._tables: dict[str, bool] = {}

    def __iter__(self) -> Iterator[tuple[str, bool]]:
        return iter(list(self._tables.items()))

    def __len__(self) -> int:
        return len(self._tables)

    def __contains__(self, table: object) -> bool:
        return table in self._tables

    @property
    def tables(self) -> dict[str, bool]:
        return dict(self._tables)

    def load(self, prefix: str = '') -> None:
        """
        Add every table whose name starts with ``prefix``.

        Matching is case-insensitive and an empty prefix matches all tables.
        """
        lowered = prefix.lower()
        loaded = 0
        for row in self.connection.query("SHOW TABLES"):
            name = to_text(row[0])
            if not lowered or name.lower().startswith(lowered):
                self._tables[name] = True
                loaded += 1

        logging.info(f"Selected {loaded} table(s) matching prefix '{prefix}'")

    def set_tables(self, tables: Mapping[str, bool]) -> None:
        """Replace the selection; every value must be a plain bool."""
        if not isinstance(tables, Mapping):
            raise InvalidInputError(
                "List of tables must be a flat mapping of table name to bool."
            )
        for name, data in tables.items():
            if not isinstance(name, str) or type(data) is not bool:
                raise InvalidInputError(
                    "List of tables must be a flat mapping of table name to bool."
                )
        self._tables = dict(tables)

    def add_table(self, table: str, data: bool = True) -> None:
        self._tables[table] = data
