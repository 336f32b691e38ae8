"""
Utility functions for the database backup tool.
"""

import logging
import sys
from collections.abc import Iterable
from pathlib import Path
from typing import Any

# MySQL string literal escapes
_ESCAPES = str.maketrans({
    "\\": "\\\\",
    "'": "\\'",
    '"': '\\"',
    "\0": "\\0",
    "\n": "\\n",
    "\r": "\\r",
    "\x1a": "\\Z",
})


def setup_logging(log_settings: dict[str, Any]) -> None:
    """Setup logging configuration."""
    log_level = getattr(logging, log_settings.get('level', 'INFO').upper())
    log_file = log_settings.get('file')

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file))

    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(levelname)s - %(message)s',
        handlers=handlers
    )


def quote_identifier(name: str) -> str:
    """Wrap a table or routine name in backticks.

    Backticks inside the name are not escaped.
    """
    return f"`{name}`"


def to_text(value: Any) -> str:
    """Return a SHOW result cell as text; some drivers hand back raw bytes."""
    if isinstance(value, (bytes, bytearray)):
        return value.decode()
    return str(value)


def escape_string(value: str) -> str:
    """Escape a string for use inside a single-quoted MySQL literal."""
    return value.translate(_ESCAPES)


def print_dry_run_info(tables: Iterable[tuple[str, bool]], routines: bool) -> None:
    """Log what would be exported in dry-run mode."""
    tables = list(tables)
    logging.info(f"Would export {len(tables)} table(s)")

    for name, data in tables:
        logging.info(f"  - {name} ({'schema + data' if data else 'schema only'})")

    if routines:
        logging.info("  + stored functions and procedures")
