"""Tests for the Oracle compatibility validator."""

import pytest
from ddl_import.validators import validate_oracle_dialect


class TestValidateOracleDialect:
    """Tests for validate_oracle_dialect."""

    @pytest.mark.parametrize("sql", ["", "   \n\t"])
    def test_empty_script_is_invalid(self, sql):
        result = validate_oracle_dialect(sql)

        assert result.is_valid is False
        assert result.table_count == 0
        assert len(result.errors) == 1
        error = result.errors[0]
        assert (error.line, error.message, error.type) == (1, "SQL script is empty", "syntax")
        assert error.suggestion == "Add CREATE TABLE statements to import"

    def test_counts_tables_without_warnings_for_clean_oracle(self):
        sql = """CREATE TABLE a (id NUMBER GENERATED ALWAYS AS IDENTITY);
  create table b (id NUMBER);
CREATE INDEX ix_b ON b (id);"""
        result = validate_oracle_dialect(sql)

        assert result.is_valid is True
        assert result.table_count == 2
        assert result.warnings == []

    @pytest.mark.parametrize(
        "line, fragment",
        [
            ("id INT AUTO_INCREMENT,", "AUTO_INCREMENT is MySQL syntax"),
            ("id SERIAL,", "SERIAL is PostgreSQL syntax"),
            ("id INT IDENTITY(1,1),", "IDENTITY(seed, increment) is SQL Server syntax"),
            ("flag TINYINT,", "TINYINT is not an Oracle type"),
            ("n MEDIUMINT,", "MEDIUMINT is not an Oracle type"),
            ("body NVARCHAR(MAX),", "NVARCHAR(max) is SQL Server syntax"),
            ("uid UNIQUEIDENTIFIER,", "UNIQUEIDENTIFIER is SQL Server syntax"),
            ("at DATETIME2,", "DATETIME2 is SQL Server syntax"),
            ("doc JSONB,", "JSONB is PostgreSQL syntax"),
            ("n NUMBER DEFAULT '1'::NUMBER,", ":: cast syntax is PostgreSQL specific"),
        ],
    )
    def test_warns_about_foreign_syntax(self, line, fragment):
        result = validate_oracle_dialect(f"CREATE TABLE t (\n{line}\n)")

        assert result.is_valid is True
        assert any(w.message.startswith("Line 2: ") and fragment in w.message for w in result.warnings)
        assert all(w.type == "compatibility" for w in result.warnings)

    def test_varchar_max_warning(self):
        result = validate_oracle_dialect("CREATE TABLE t (body VARCHAR(max));")
        assert [w.message for w in result.warnings] == [
            "Line 1: VARCHAR(max) is SQL Server syntax. Use CLOB in Oracle."
        ]

    def test_keyword_inside_identifier_is_not_flagged(self):
        sql = "CREATE TABLE parts (\n  SERIAL_NO VARCHAR2(20),\n  NO_AUTO_INCREMENT_FLAG CHAR(1)\n);"
        assert validate_oracle_dialect(sql).warnings == []

    def test_foreign_keywords_match_any_case(self):
        result = validate_oracle_dialect("CREATE TABLE t (\n  id serial\n);")
        assert [w.message for w in result.warnings] == [
            "Line 2: SERIAL is PostgreSQL syntax. Use GENERATED AS IDENTITY in Oracle."
        ]
