"""
Database Backup
===============
Exports a MySQL database to a SQL script that recreates it, with support for:
- Table selection by name prefix or explicit list
- Schema-only or schema + data per table
- Batched INSERT statements with type-aware escaping
- Stored functions and procedures
- Compression support
"""

from .config import ConfigLoader
from .connection import Connection, DatabaseConnection
from .database_dumper import DatabaseDumper, unbuffered
from .exceptions import BackupError, InvalidInputError, UnsupportedFeatureError
from .main import main
from .models import Attachment, BackupSettings, ExportStats, Routine, RoutineKind
from .routine_dumper import RoutineDumper
from .table_dumper import TableDumper
from .table_selection import TableSelection
from .utils import print_dry_run_info, quote_identifier, setup_logging

__version__ = DatabaseDumper.VERSION

__all__ = [
    # Main entry point
    "main",
    # Core classes
    "ConfigLoader",
    "Connection",
    "DatabaseConnection",
    "DatabaseDumper",
    "RoutineDumper",
    "TableDumper",
    "TableSelection",
    "unbuffered",
    # Exceptions
    "BackupError",
    "InvalidInputError",
    "UnsupportedFeatureError",
    # Models
    "Attachment",
    "BackupSettings",
    "ExportStats",
    "Routine",
    "RoutineKind",
    # Utilities
    "print_dry_run_info",
    "quote_identifier",
    "setup_logging",
]
