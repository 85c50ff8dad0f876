"""Tests for the per-parse table registry."""

import itertools

import pytest
from ddl_import.parsers.registry import TableRegistry


class TestTableRegistry:
    """Tests for TableRegistry."""

    @pytest.fixture
    def registry(self):
        counter = itertools.count(1)
        return TableRegistry(id_factory=lambda: f"t{next(counter)}")

    def test_assigns_ids_and_order(self, registry):
        first = registry.create_table("departments")
        second = registry.create_table("employees", "hr")

        assert (first.id, first.order) == ("t1", 0)
        assert (second.id, second.order) == ("t2", 1)
        assert len(registry) == 2
        assert [t.name for t in registry] == ["departments", "employees"]

    def test_records_qualified_and_bare_aliases(self, registry):
        table = registry.create_table("Employees", "HR")

        assert registry.aliases() == {"hr.employees": table.id, "employees": table.id}

    def test_empty_schema_is_stored_as_none(self, registry):
        assert registry.create_table("t", "").schema is None

    def test_lookup_with_schema_requires_exact_match(self, registry):
        registry.create_table("users", "app")

        assert registry.lookup("USERS", "APP") is not None
        assert registry.lookup("users", "audit") is None

    def test_lookup_without_schema_prefers_unqualified_table(self, registry):
        registry.create_table("users", "audit")
        plain = registry.create_table("users")

        assert registry.lookup("users") is plain

    def test_lookup_without_schema_falls_back_to_any_schema(self, registry):
        audit = registry.create_table("users", "audit")
        assert registry.lookup("Users") is audit

    def test_get_by_id(self, registry):
        table = registry.create_table("users")
        assert registry.get(table.id) is table
        assert registry.get("missing") is None

    def test_default_ids_are_unique(self):
        registry = TableRegistry()
        ids = {registry.create_table(f"t{i}").id for i in range(20)}
        assert len(ids) == 20
