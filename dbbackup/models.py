"""
Data models and enums for the database backup tool.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Optional

from .utils import quote_identifier


class RoutineKind(Enum):
    """Stored routine kinds, in export order."""
    FUNCTION = "FUNCTION"
    PROCEDURE = "PROCEDURE"


@dataclass
class Routine:
    """A stored function or procedure and its recreation statement."""
    database: str
    kind: RoutineKind
    name: str
    statement: str

    def drop_statement(self) -> str:
        return f"DROP {self.kind.value} IF EXISTS {quote_identifier(self.name)}"

    def create_statement(self) -> str:
        """Return the statement with any definer clause removed.

        ``CREATE DEFINER=`user`@`host` PROCEDURE ...`` becomes
        ``CREATE PROCEDURE ...``.
        """
        pattern = rf'^CREATE (\S+) {self.kind.value}'
        return re.sub(pattern, f'CREATE {self.kind.value}', self.statement, count=1)


@dataclass
class Attachment:
    """Downloadable backup file descriptor."""
    name: str
    compress: bool = False
    path: Optional[Path] = None

    @property
    def filename(self) -> str:
        return f"{self.name}.sql" + (".gz" if self.compress else "")

    @property
    def content_type(self) -> str:
        return "application/x-gzip" if self.compress else "application/sql"

    @property
    def headers(self) -> dict[str, str]:
        return {
            "Content-Type": self.content_type,
            "Content-Disposition": f"attachment; filename={self.filename}",
        }


@dataclass
class ExportStats:
    """Statistics for a single export."""
    tables: int = 0
    rows: int = 0
    routines: int = 0


@dataclass
class BackupSettings:
    """Backup settings resolved from the ``backup`` config section."""
    prefix: Optional[str] = ""
    tables: list[tuple[str, bool]] = field(default_factory=list)
    routines: bool = True
    batch_size: int = 1000

    @classmethod
    def from_config(cls, backup_config: dict[str, Any]) -> "BackupSettings":
        """
        Create BackupSettings from the ``backup`` section.

        Without an explicit table list every table is discovered (empty
        prefix); with one, discovery only happens when a prefix is given.
        """
        tables = []
        for entry in backup_config.get('tables') or []:
            if isinstance(entry, dict):
                tables.append((entry['name'], entry.get('data', True)))
            else:
                tables.append((entry, True))

        default_prefix = None if tables else ""
        settings = {
            'prefix': backup_config.get('prefix', default_prefix),
            'tables': tables,
        }
        for key in ['routines', 'batch_size']:
            if key in backup_config:
                settings[key] = backup_config[key]
        return cls(**settings)
