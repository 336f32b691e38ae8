"""
Unit tests for models.py
"""

from pathlib import Path

from dbbackup.models import (
    Attachment,
    BackupSettings,
    ExportStats,
    Routine,
    RoutineKind,
)


class TestRoutineKind:
    """Tests for RoutineKind enum."""

    def test_values(self):
        assert RoutineKind.FUNCTION.value == "FUNCTION"
        assert RoutineKind.PROCEDURE.value == "PROCEDURE"

    def test_order(self):
        assert list(RoutineKind) == [RoutineKind.FUNCTION, RoutineKind.PROCEDURE]


class TestRoutine:
    """Tests for Routine dataclass."""

    def test_drop_statement(self):
        routine = Routine("db", RoutineKind.PROCEDURE, "cleanup", "CREATE PROCEDURE `cleanup`() BEGIN END")
        assert routine.drop_statement() == "DROP PROCEDURE IF EXISTS `cleanup`"

    def test_definer_removed(self):
        routine = Routine(
            "db", RoutineKind.FUNCTION, "f",
            "CREATE DEFINER=`user`@`localhost` FUNCTION `f`() RETURNS int RETURN 1"
        )
        assert routine.create_statement() == "CREATE FUNCTION `f`() RETURNS int RETURN 1"

    def test_without_definer_unchanged(self):
        statement = "CREATE PROCEDURE `p`() BEGIN END"
        routine = Routine("db", RoutineKind.PROCEDURE, "p", statement)
        assert routine.create_statement() == statement

    def test_only_leading_create_rewritten(self):
        """Test CREATE statements inside the body are left alone."""
        statement = (
            "CREATE DEFINER=`u`@`h` PROCEDURE `p`()\n"
            "BEGIN\n"
            "  CREATE DEFINER=`u`@`h` PROCEDURE x;\n"
            "END"
        )
        routine = Routine("db", RoutineKind.PROCEDURE, "p", statement)

        assert routine.create_statement() == (
            "CREATE PROCEDURE `p`()\n"
            "BEGIN\n"
            "  CREATE DEFINER=`u`@`h` PROCEDURE x;\n"
            "END"
        )


class TestAttachment:
    """Tests for Attachment dataclass."""

    def test_plain(self):
        attachment = Attachment("test")
        assert attachment.filename == "test.sql"
        assert attachment.content_type == "application/sql"
        assert attachment.path is None

    def test_compressed(self):
        attachment = Attachment("test", compress=True)
        assert attachment.filename == "test.sql.gz"
        assert attachment.content_type == "application/x-gzip"

    def test_headers(self):
        attachment = Attachment("test")
        assert attachment.headers == {
            "Content-Type": "application/sql",
            "Content-Disposition": "attachment; filename=test.sql",
        }

    def test_with_path(self):
        attachment = Attachment("test", path=Path("/tmp/test.sql"))
        assert attachment.path == Path("/tmp/test.sql")


class TestExportStats:
    """Tests for ExportStats dataclass."""

    def test_default_values(self):
        stats = ExportStats()
        assert stats.tables == 0
        assert stats.rows == 0
        assert stats.routines == 0


class TestBackupSettings:
    """Tests for BackupSettings dataclass."""

    def test_default_values(self):
        settings = BackupSettings()
        assert settings.prefix == ""
        assert settings.tables == []
        assert settings.routines is True
        assert settings.batch_size == 1000

    def test_from_config_empty(self):
        settings = BackupSettings.from_config({})
        assert settings.prefix == ""
        assert settings.tables == []

    def test_from_config_prefix(self):
        settings = BackupSettings.from_config({"prefix": "wp_", "routines": False})
        assert settings.prefix == "wp_"
        assert settings.routines is False

    def test_from_config_tables_disable_discovery(self):
        """Test an explicit table list turns off discovery by default."""
        settings = BackupSettings.from_config({
            "tables": ["users", {"name": "logs", "data": False}, {"name": "orders"}]
        })
        assert settings.prefix is None
        assert settings.tables == [("users", True), ("logs", False), ("orders", True)]

    def test_from_config_tables_with_prefix(self):
        settings = BackupSettings.from_config({"prefix": "", "tables": ["extra"]})
        assert settings.prefix == ""
        assert settings.tables == [("extra", True)]

    def test_from_config_batch_size(self):
        settings = BackupSettings.from_config({"batch_size": 250})
        assert settings.batch_size == 250
