"""Convert a parse result into a positioned diagram."""

import logging
from dataclasses import dataclass, field

from ddl_import.layout import LayoutOptions, layout_tables
from ddl_import.models import (
    Cardinality,
    Column,
    Diagram,
    DiagramField,
    DiagramIndex,
    DiagramRelationship,
    DiagramTable,
    ParseResult,
    Table,
)
from ddl_import.parsers.registry import IdFactory, generate_id

logger = logging.getLogger(__name__)


CHARACTER_LENGTH_TYPES = {"varchar2", "nvarchar2", "char", "nchar", "raw"}
PRECISION_TYPES = {"number", "float"}


@dataclass
class DiagramOptions:
    """Options for diagram conversion."""
    name: str = "SQL Import (oracle)"
    id_factory: IdFactory | None = None
    layout: LayoutOptions = field(default_factory=LayoutOptions)


def determine_cardinality(source_unique: bool, target_unique: bool) -> tuple[Cardinality, Cardinality]:
    """Cardinalities for the two ends of a relationship, from their uniqueness."""
    return ("one" if source_unique else "many", "one" if target_unique else "many")


def _convert_field(column: Column, new_id: IdFactory) -> DiagramField:
    diagram_field = DiagramField(
        id=new_id(),
        name=column.name,
        type=column.type,
        nullable=column.nullable,
        primary_key=column.primary_key,
        unique=column.unique,
        increment=column.increment,
        default=column.default or "",
    )

    args = column.type_args
    if args is None:
        return diagram_field
    if args.length is not None and column.type in CHARACTER_LENGTH_TYPES:
        diagram_field.character_maximum_length = str(args.length)
    if args.precision is not None and column.type in PRECISION_TYPES:
        diagram_field.precision = args.precision
        diagram_field.scale = args.scale
    return diagram_field


def _convert_table(table: Table, order: int, new_id: IdFactory) -> DiagramTable:
    fields = [_convert_field(column, new_id) for column in table.columns]
    field_ids = {f.name.lower(): f.id for f in fields}

    indexes: list[DiagramIndex] = []
    for index in table.indexes:
        ids = []
        for column_name in index.columns:
            field_id = field_ids.get(column_name.lower())
            if field_id is None:
                logger.warning(
                    "Index %s references non-existent column %s in table %s, skipping column",
                    index.name, column_name, table.name,
                )
                continue
            ids.append(field_id)
        if not ids:
            logger.warning("Index %s has no valid columns, skipping index", index.name)
            continue
        indexes.append(DiagramIndex(id=new_id(), name=index.name, field_ids=ids, unique=index.unique))

    return DiagramTable(
        id=new_id(),
        name=table.name,
        schema=table.schema or "",
        order=order,
        fields=fields,
        indexes=indexes,
    )


def _find_field(table: DiagramTable, name: str) -> DiagramField | None:
    wanted = name.lower()
    return next((f for f in table.fields if f.name.lower() == wanted), None)


def convert_to_diagram(result: ParseResult, options: DiagramOptions | None = None) -> Diagram:
    """Build a diagram from a parse result.

    Relationships run from the referenced (key) side to the referencing
    side. Those whose columns cannot be found are skipped.
    """
    opts = options or DiagramOptions()
    new_id = opts.id_factory or generate_id

    positions = layout_tables(result, opts.layout)
    tables_by_id: dict[str, DiagramTable] = {}
    tables: list[DiagramTable] = []

    for order, table in enumerate(result.tables):
        diagram_table = _convert_table(table, order, new_id)
        position = positions.get(table.id)
        if position:
            diagram_table.x = position.x
            diagram_table.y = position.y
            diagram_table.width = position.width
            diagram_table.height = position.height
        tables_by_id[table.id] = diagram_table
        tables.append(diagram_table)

    relationships: list[DiagramRelationship] = []
    for fk in result.relationships:
        source_table = tables_by_id.get(fk.source_table_id)
        target_table = tables_by_id.get(fk.target_table_id)
        if source_table is None or target_table is None:
            logger.warning("Relationship %s refers to a table that is not in the result", fk.name)
            continue

        source_field = _find_field(source_table, fk.source_column)
        target_field = _find_field(target_table, fk.target_column)
        if source_field is None or target_field is None:
            continue

        # Swapped: the diagram's source is the referenced table.
        source_cardinality, target_cardinality = determine_cardinality(
            target_field.unique or target_field.primary_key,
            source_field.unique or source_field.primary_key,
        )
        relationships.append(
            DiagramRelationship(
                id=new_id(),
                name=fk.name,
                source_schema=target_table.schema,
                target_schema=source_table.schema,
                source_table_id=target_table.id,
                target_table_id=source_table.id,
                source_field_id=target_field.id,
                target_field_id=source_field.id,
                source_cardinality=source_cardinality,
                target_cardinality=target_cardinality,
            )
        )

    return Diagram(id=new_id(), name=opts.name, tables=tables, relationships=relationships)
