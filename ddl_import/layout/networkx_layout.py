"""Layout engine using NetworkX for graph-based table positioning."""

from dataclasses import dataclass
from typing import Literal

import networkx as nx

from ddl_import.models import ParseResult, Table


@dataclass
class LayoutOptions:
    """Options for layout calculation."""
    char_width: int = 8
    row_height: int = 26
    padding: int = 20
    min_table_width: int = 150
    node_gap: int = 80
    rank_gap: int = 120
    direction: Literal["TB", "LR"] = "TB"


@dataclass
class TablePosition:
    """Position and size of a table, keyed by table id in layout results."""
    x: float
    y: float
    width: float
    height: float


def layout_tables(
    result: ParseResult,
    options: LayoutOptions | None = None,
) -> dict[str, TablePosition]:
    """Calculate positions for all tables in a parse result."""
    opts = options or LayoutOptions()

    g = nx.DiGraph()
    table_dims: dict[str, tuple[float, float]] = {}

    # Columns that reference another table, per table id
    fk_columns: dict[str, set[str]] = {}
    for fk in result.relationships:
        fk_columns.setdefault(fk.source_table_id, set()).add(fk.source_column.lower())

    for table in result.tables:
        dims = _calculate_table_dimensions(table, fk_columns.get(table.id, set()), opts)
        table_dims[table.id] = dims
        g.add_node(table.id, width=dims[0], height=dims[1], order=table.order)

    # Edges point from the referencing table to the referenced one
    for fk in result.relationships:
        if fk.source_table_id in table_dims and fk.target_table_id in table_dims:
            if fk.source_table_id != fk.target_table_id:
                g.add_edge(fk.source_table_id, fk.target_table_id)

    if len(g.nodes) > 0:
        positions = _hierarchical_layout(g, table_dims, opts)
    else:
        positions = {}

    layout: dict[str, TablePosition] = {}
    for table in result.tables:
        width, height = table_dims[table.id]
        x, y = positions.get(table.id, (0.0, 0.0))
        layout[table.id] = TablePosition(x=x, y=y, width=width, height=height)
    return layout


def _calculate_table_dimensions(
    table: Table,
    fk_columns: set[str],
    opts: LayoutOptions,
) -> tuple[float, float]:
    """Calculate width and height for a table."""
    header_length = len(table.name)

    column_lengths = []
    for col in table.columns:
        line = f"{col.name}: {col.type}"
        if col.primary_key:
            line += " PK"
        if col.name.lower() in fk_columns:
            line += " FK"
        if not col.nullable and not col.primary_key:
            line += " NN"
        column_lengths.append(len(line))

    max_length = max([header_length] + column_lengths) if column_lengths else header_length
    width = max(opts.min_table_width, max_length * opts.char_width + opts.padding * 2)

    # Height: header + columns
    header_height = opts.row_height + 4
    columns_height = len(table.columns) * opts.row_height
    height = header_height + columns_height + opts.padding

    return (width, height)


def _hierarchical_layout(
    g: nx.DiGraph,
    table_dims: dict[str, tuple[float, float]],
    opts: LayoutOptions,
) -> dict[str, tuple[float, float]]:
    """Create a hierarchical layout for the graph."""
    positions: dict[str, tuple[float, float]] = {}

    try:
        generations = list(nx.topological_generations(g))
    except nx.NetworkXUnfeasible:
        generations = _get_generations_with_cycles(g)

    # Table ids are random, so order each generation by first appearance.
    def order(node: str) -> int:
        return g.nodes[node]["order"]

    offset = 20.0
    for generation in generations:
        cross = 20.0
        for node in sorted(generation, key=order):
            width, height = table_dims[node]
            if opts.direction == "TB":
                positions[node] = (cross, offset)
                cross += width + opts.node_gap
            else:
                positions[node] = (offset, cross)
                cross += height + opts.node_gap

        # Move to the next row (TB) or column (LR)
        along = 1 if opts.direction == "TB" else 0
        offset += max(table_dims[node][along] for node in generation) + opts.rank_gap

    return positions


def _get_generations_with_cycles(g: nx.DiGraph) -> list[set[str]]:
    """Get generations for a graph that may have cycles."""
    # Simple fallback: put nodes in rows based on in-degree
    levels: dict[int, set[str]] = {}
    for node, degree in g.in_degree():
        levels.setdefault(degree, set()).add(node)

    return [levels[k] for k in sorted(levels.keys())]
