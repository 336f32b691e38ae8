"""
Exception hierarchy for the database backup tool.
"""


class BackupError(Exception):
    """Base exception for all backup errors."""

    pass


class InvalidInputError(BackupError, ValueError):
    """Raised when a table selection or a selected table is not usable."""

    pass


class UnsupportedFeatureError(BackupError):
    """Raised when a requested feature is unavailable in this runtime."""

    pass
