"""Tests for layout engine."""

import pytest
from ddl_import.layout.networkx_layout import LayoutOptions, layout_tables
from ddl_import.models import Column, ForeignKey, ParseResult, Table


def relationship(source: Table, target: Table, column: str) -> ForeignKey:
    return ForeignKey(
        name=f"fk_{source.name}_{column}",
        source_table=source.name,
        source_column=column,
        target_table=target.name,
        target_column="id",
        source_table_id=source.id,
        target_table_id=target.id,
    )


class TestLayoutTables:
    """Tests for the layout engine."""

    @pytest.fixture
    def result(self):
        departments = Table(
            id="d",
            name="departments",
            columns=[Column(name="id", type="number", primary_key=True, nullable=False)],
            order=0,
        )
        employees = Table(
            id="e",
            name="employees",
            columns=[
                Column(name="id", type="number", primary_key=True, nullable=False),
                Column(name="dept_id", type="number"),
            ],
            order=1,
        )
        return ParseResult(
            tables=[departments, employees],
            relationships=[relationship(employees, departments, "dept_id")],
        )

    def test_positions_every_table_by_id(self, result):
        positions = layout_tables(result)
        assert set(positions) == {"d", "e"}

    def test_referencing_table_is_placed_above_referenced_table(self, result):
        positions = layout_tables(result)

        assert positions["e"].y < positions["d"].y
        assert positions["e"].x == positions["d"].x

    def test_left_to_right_direction(self, result):
        positions = layout_tables(result, LayoutOptions(direction="LR"))

        assert positions["e"].x < positions["d"].x
        assert positions["e"].y == positions["d"].y

    def test_handles_tables_with_same_name_in_different_schemas(self):
        result = ParseResult(
            tables=[
                Table(id="a", name="users", schema="public", order=0),
                Table(id="b", name="users", schema="audit", order=1),
            ]
        )

        positions = layout_tables(result)

        same_position = positions["a"].x == positions["b"].x and positions["a"].y == positions["b"].y
        assert not same_position, "Tables should have different positions"

    def test_handles_cycles(self):
        a = Table(id="a", name="a", columns=[Column(name="b_id", type="number")], order=0)
        b = Table(id="b", name="b", columns=[Column(name="a_id", type="number")], order=1)
        result = ParseResult(
            tables=[a, b],
            relationships=[relationship(a, b, "b_id"), relationship(b, a, "a_id")],
        )

        positions = layout_tables(result)

        assert positions["a"].y == positions["b"].y
        assert positions["a"].x < positions["b"].x

    def test_self_reference_is_ignored(self):
        node = Table(id="n", name="nodes", columns=[Column(name="parent_id", type="number")])
        result = ParseResult(tables=[node], relationships=[relationship(node, node, "parent_id")])

        assert layout_tables(result)["n"].x == 20.0

    def test_dimensions_grow_with_columns(self, result):
        opts = LayoutOptions()
        positions = layout_tables(result, opts)

        assert positions["e"].height == positions["d"].height + opts.row_height
        assert positions["d"].width >= opts.min_table_width

    def test_empty_result(self):
        assert layout_tables(ParseResult()) == {}
