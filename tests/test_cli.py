"""Tests for the command-line interface."""

import json

import pytest
from click.testing import CliRunner

from ddl_import.cli import main


SCHEMA = """
CREATE TABLE departments (id NUMBER PRIMARY KEY, name VARCHAR2(30));
CREATE TABLE employees (
    id NUMBER PRIMARY KEY,
    dept_id NUMBER REFERENCES departments(id),
    email VARCHAR2(100)
);
CREATE UNIQUE INDEX ux_emp_email ON employees (email);
"""


class TestCli:
    """Tests for the ddl-import command."""

    @pytest.fixture
    def runner(self):
        return CliRunner()

    @pytest.fixture
    def schema_file(self, tmp_path):
        path = tmp_path / "schema.sql"
        path.write_text(SCHEMA)
        return path

    def test_prints_summary(self, runner, schema_file):
        result = runner.invoke(main, [str(schema_file)])

        assert result.exit_code == 0, result.output
        assert "Found 2 tables, 1 relationships" in result.output
        assert "  - departments: 2 columns" in result.output
        assert "  - employees: 3 columns, 1 FK, 1 indexes" in result.output

    def test_json_output(self, runner, schema_file):
        result = runner.invoke(main, [str(schema_file), "-f", "json", "--no-grammar"])

        assert result.exit_code == 0, result.output
        data = json.loads(result.output)
        assert [t["name"] for t in data["tables"]] == ["departments", "employees"]
        assert data["relationships"][0]["target_table_id"] == data["tables"][0]["id"]

    def test_diagram_output_to_file(self, runner, schema_file, tmp_path):
        output = tmp_path / "diagram.json"
        result = runner.invoke(main, [str(schema_file), "-f", "diagram", "--direction", "LR", "-o", str(output)])

        assert result.exit_code == 0, result.output
        assert f"Output saved to: {output}" in result.output
        data = json.loads(output.read_text())
        assert data["database_type"] == "oracle"
        assert len(data["tables"]) == 2
        assert len(data["relationships"]) == 1

    def test_no_grammar_from_environment(self, runner, schema_file):
        result = runner.invoke(main, [str(schema_file)], env={"DDL_IMPORT_NO_GRAMMAR": "1"})

        assert result.exit_code == 0, result.output
        assert "Found 2 tables" in result.output

    def test_validate_reports_foreign_syntax(self, runner, tmp_path):
        path = tmp_path / "mysql.sql"
        path.write_text("CREATE TABLE t (\n  id INT AUTO_INCREMENT PRIMARY KEY\n);\n")

        result = runner.invoke(main, [str(path), "--validate"])

        assert result.exit_code == 0, result.output
        assert "Warning: Line 2: AUTO_INCREMENT is MySQL syntax" in result.output

    def test_missing_input_file(self, runner, tmp_path):
        result = runner.invoke(main, [str(tmp_path / "missing.sql")])
        assert result.exit_code != 0

    def test_parse_errors_become_click_errors(self, runner, schema_file, monkeypatch):
        from ddl_import.exceptions import DDLParseError

        def explode(self, sql):
            raise DDLParseError("Error parsing Oracle DDL: boom")

        monkeypatch.setattr("ddl_import.cli.OracleParser.parse", explode)

        result = runner.invoke(main, [str(schema_file)])

        assert result.exit_code == 1
        assert "Error parsing Oracle DDL: boom" in result.output
