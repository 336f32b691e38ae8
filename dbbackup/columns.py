"""
Column type classification for value escaping.
"""

import logging
import re

from .connection import Connection
from .utils import quote_identifier, to_text

# Types whose values are written without quotes
NUMERIC_TYPES = frozenset({
    'tinyint', 'smallint', 'mediumint', 'int', 'bigint',
    'decimal', 'float', 'double', 'real', 'year',
})

BASE_TYPE_PATTERN = re.compile(r'^([^( ]+)')

TYPE_COLUMN = 1


def needs_quoting(column_type: str) -> bool:
    """Return False for numeric column types, True for everything else.

    Only the base type name counts: ``int unsigned`` and ``decimal(10,2)``
    are numeric, ``varchar(10)`` is not.
    """
    match = BASE_TYPE_PATTERN.match(column_type)
    return match is None or match.group(1) not in NUMERIC_TYPES


def get_escape_profile(connection: Connection, table: str) -> list[bool]:
    """
    Build the escape profile of a table.

    Entry ``i`` tells whether column ``i`` of ``SELECT *`` must be quoted.
    Relies on ``SHOW FULL COLUMNS`` listing columns in physical order.
    """
    try:
        result = connection.query(f"SHOW FULL COLUMNS FROM {quote_identifier(table)}")
    except Exception as e:
        logging.warning(f"Could not read columns of table '{table}': {e}")
        return []

    return [needs_quoting(to_text(row[TYPE_COLUMN])) for row in result]
