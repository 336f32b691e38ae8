"""
Output delivery for the database backup tool.
"""

import io
import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import BinaryIO, Optional, TextIO

try:
    import gzip
except ImportError:  # interpreter built without zlib
    gzip = None

from .exceptions import UnsupportedFeatureError
from .models import Attachment

COMPRESS_LEVEL = 9


def ensure_gzip_support() -> None:
    if gzip is None:
        raise UnsupportedFeatureError("Missing gzip support")


@contextmanager
def open_output(
    attachment: Attachment,
    stream: Optional[BinaryIO] = None,
    directory: Optional[Path] = None
) -> Iterator[TextIO]:
    """
    Open a text sink for an attachment.

    The body is written to ``stream`` when given, otherwise to
    ``<directory>/<attachment.filename>`` whose path is stored on the
    attachment. ``stream`` is left open.
    """
    handle = None
    if stream is None:
        directory = Path(directory or '.')
        directory.mkdir(parents=True, exist_ok=True)
        attachment.path = directory / attachment.filename
        handle = stream = open(attachment.path, 'wb')

    try:
        if attachment.compress:
            ensure_gzip_support()
            binary = gzip.GzipFile(
                filename=attachment.filename, mode='wb',
                compresslevel=COMPRESS_LEVEL, fileobj=stream
            )
        else:
            binary = stream

        sink = io.TextIOWrapper(binary, encoding='utf-8', newline='')
        try:
            yield sink
        finally:
            sink.flush()
            sink.detach()
            if binary is not stream:
                binary.close()

        if handle is not None:
            logging.info(f"Backup written to {attachment.path}")
    finally:
        if handle is not None:
            handle.close()
