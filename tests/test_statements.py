"""Tests for statement splitting and scanning helpers."""

import pytest
from ddl_import.parsers.common import (
    find_closing_paren,
    normalize_identifier,
    split_identifier_list,
    split_qualified,
    split_top_level,
)
from ddl_import.parsers.statements import (
    alter_table_statements,
    create_index_statements,
    create_table_statements,
    is_create_index,
    is_create_table,
    split_statements,
)


class TestSplitStatements:
    """Tests for split_statements."""

    def test_splits_on_terminator_and_trims(self):
        sql = """
            CREATE TABLE a (id NUMBER);
            CREATE TABLE b (id NUMBER);
        """
        assert split_statements(sql) == ["CREATE TABLE a (id NUMBER)", "CREATE TABLE b (id NUMBER)"]

    def test_discards_empty_fragments(self):
        assert split_statements(";;  ;\n") == []

    def test_keeps_statement_without_trailing_terminator(self):
        assert split_statements("CREATE TABLE a (id NUMBER)") == ["CREATE TABLE a (id NUMBER)"]

    def test_ignores_terminator_inside_quotes(self):
        sql = "INSERT INTO t VALUES ('a;b'); CREATE TABLE \"x;y\" (id NUMBER);"
        statements = split_statements(sql)

        assert len(statements) == 2
        assert statements[0] == "INSERT INTO t VALUES ('a;b')"
        assert statements[1] == 'CREATE TABLE "x;y" (id NUMBER)'

    def test_drops_comments(self):
        sql = """
            -- lookup table; do not edit
            CREATE TABLE a (id NUMBER); /* trailing; comment */
        """
        assert split_statements(sql) == ["CREATE TABLE a (id NUMBER)"]


class TestStatementSelection:
    """Tests for selecting statements by kind."""

    @pytest.fixture
    def statements(self):
        return [
            "CREATE TABLE a (id NUMBER)",
            "CREATE GLOBAL TEMPORARY TABLE tmp (id NUMBER)",
            "CREATE UNIQUE INDEX ux_a ON a (id)",
            "CREATE BITMAP INDEX bx_a ON a (id)",
            "ALTER TABLE a ADD CONSTRAINT pk_a PRIMARY KEY (id)",
            "ALTER TABLE b ADD CONSTRAINT fk_b FOREIGN KEY (a_id) REFERENCES a (id)",
            "INSERT INTO a VALUES (1)",
        ]

    def test_selects_create_table(self, statements):
        assert create_table_statements(statements) == statements[:2]

    def test_selects_create_index_variants(self, statements):
        assert create_index_statements(statements) == statements[2:4]

    def test_selects_alter_table_by_keyword(self, statements):
        assert alter_table_statements(statements) == statements[4:6]
        assert alter_table_statements(statements, "FOREIGN KEY") == [statements[5]]

    def test_create_table_is_not_an_index(self):
        assert is_create_table("CREATE TABLE t (id NUMBER, UNIQUE (id))")
        assert not is_create_index("CREATE TABLE t (id NUMBER, UNIQUE (id))")


class TestScanningHelpers:
    """Tests for identifier and parenthesis helpers."""

    def test_find_closing_paren_skips_quoted_parens(self):
        text = "t (a VARCHAR2(10) DEFAULT ')', b NUMBER) rest"
        close = find_closing_paren(text, text.index("("))
        assert text[close + 1:] == " rest"

    def test_find_closing_paren_returns_minus_one_when_unbalanced(self):
        assert find_closing_paren("(a, (b)", 0) == -1

    def test_split_top_level_respects_nesting_and_quotes(self):
        body = "amount NUMBER(10,2), note VARCHAR2(20) DEFAULT 'a,b', id NUMBER"
        assert split_top_level(body) == [
            "amount NUMBER(10,2)",
            "note VARCHAR2(20) DEFAULT 'a,b'",
            "id NUMBER",
        ]

    def test_normalize_identifier_strips_quotes_and_keeps_case(self):
        assert normalize_identifier('"MixedCase"') == "MixedCase"
        assert normalize_identifier("Employees") == "Employees"
        assert normalize_identifier(None) == ""

    def test_split_qualified(self):
        assert split_qualified("hr", "employees") == ("hr", "employees")
        assert split_qualified('"Employees"', None) == (None, "Employees")

    def test_split_identifier_list(self):
        assert split_identifier_list(' a , "B" ,c ') == ["a", "B", "c"]
