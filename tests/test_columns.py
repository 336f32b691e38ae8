"""
Unit tests for columns.py
"""

import logging

import pytest

from dbbackup.columns import get_escape_profile, needs_quoting


class TestNeedsQuoting:
    """Tests for needs_quoting function."""

    @pytest.mark.parametrize("column_type", [
        "tinyint", "tinyint(1)", "smallint(6)", "mediumint", "int", "int(11)",
        "int unsigned", "bigint(20) unsigned", "decimal(10,2)", "float",
        "double", "real", "year", "year(4)",
    ])
    def test_numeric_types_unquoted(self, column_type):
        assert needs_quoting(column_type) is False

    @pytest.mark.parametrize("column_type", [
        "varchar(10)", "char(2)", "text", "longtext", "date", "datetime",
        "timestamp", "time", "blob", "varbinary(16)", "enum('a','b')",
        "set('x','y')", "json", "bit(1)", "geometry",
    ])
    def test_other_types_quoted(self, column_type):
        assert needs_quoting(column_type) is True

    def test_match_is_case_sensitive(self):
        """Test only lower-case canonical names count as numeric."""
        assert needs_quoting("INT") is True

    def test_prefix_of_numeric_name_is_quoted(self):
        """Test base type must match exactly, not by prefix."""
        assert needs_quoting("integer") is True
        assert needs_quoting("interval") is True

    def test_empty_type_quoted(self):
        assert needs_quoting("") is True


class TestGetEscapeProfile:
    """Tests for get_escape_profile function."""

    def test_profile_in_column_order(self, make_connection):
        """Test one entry per column, in metadata order."""
        conn = make_connection({
            "SHOW FULL COLUMNS FROM `test`": [
                ("id", "int unsigned", None, "NO", "PRI", None, "auto_increment", "", ""),
                ("name", "varchar(10)", "utf8mb4_czech_ci", "NO", "", None, "", "", ""),
                ("price", "decimal(10,2)", None, "YES", "", None, "", "", ""),
                ("created", "datetime", None, "YES", "", None, "", "", ""),
            ]
        })

        assert get_escape_profile(conn, "test") == [False, True, False, True]

    def test_bytes_type_decoded(self, make_connection):
        """Test type names returned as bytes are handled."""
        conn = make_connection({
            "SHOW FULL COLUMNS FROM `t`": [
                ("id", b"bigint(20)", None, "NO", "", None, "", "", ""),
                ("data", bytearray(b"blob"), None, "YES", "", None, "", "", ""),
            ]
        })

        assert get_escape_profile(conn, "t") == [False, True]

    def test_queried_fresh_each_time(self, make_connection):
        """Test the profile is not cached between calls."""
        conn = make_connection({"SHOW FULL COLUMNS FROM `t`": [("id", "int")]})

        get_escape_profile(conn, "t")
        get_escape_profile(conn, "t")

        assert conn.query.call_count == 2

    def test_unreadable_columns(self, make_connection, caplog):
        """Test a failed column query yields an empty profile and a warning."""
        with caplog.at_level(logging.WARNING):
            assert get_escape_profile(make_connection({}), "missing") == []

        assert "Could not read columns of table 'missing'" in caplog.text
