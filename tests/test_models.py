"""Tests for schema models."""

import pytest
from ddl_import.models import Column, Index, Table, get_qualified_table_name


class TestGetQualifiedTableName:
    """Tests for the get_qualified_table_name helper."""

    def test_returns_name_when_no_schema(self):
        table = Table(id="t1", name="employees")
        assert get_qualified_table_name(table) == "employees"

    def test_returns_qualified_name_when_schema_present(self):
        table = Table(id="t1", name="employees", schema="hr")
        assert get_qualified_table_name(table) == "hr.employees"

    def test_handles_none_schema(self):
        table = Table(id="t1", name="employees", schema=None)
        assert get_qualified_table_name(table) == "employees"

    def test_handles_empty_string_schema(self):
        table = Table(id="t1", name="employees", schema="")
        assert get_qualified_table_name(table) == "employees"


class TestTableLookups:
    """Tests for case-insensitive column and index lookups."""

    @pytest.fixture
    def table(self):
        return Table(
            id="t1",
            name="EMPLOYEES",
            columns=[Column(name="EMP_ID", type="number"), Column(name="Email", type="varchar2")],
            indexes=[Index(name="IDX_EMAIL", columns=["Email"], unique=True)],
        )

    def test_get_column_ignores_case(self, table):
        assert table.get_column("emp_id").name == "EMP_ID"
        assert table.get_column("EMAIL").name == "Email"

    def test_get_column_returns_none_when_missing(self, table):
        assert table.get_column("salary") is None

    def test_get_index_ignores_case(self, table):
        assert table.get_index("idx_email").unique is True
        assert table.get_index("idx_missing") is None

    def test_column_defaults(self):
        column = Column(name="note", type="clob")
        assert column.nullable is True
        assert column.primary_key is False
        assert column.unique is False
        assert column.increment is False
        assert column.default is None
        assert column.type_args is None
