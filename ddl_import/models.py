"""Intermediate representation for imported database schemas."""

from dataclasses import dataclass, field
from typing import Literal


Cardinality = Literal["one", "many"]


@dataclass
class TypeArgs:
    """Type arguments: either a length or a precision/scale pair."""
    length: int | None = None
    precision: int | None = None
    scale: int | None = None


@dataclass
class Column:
    """Database column definition."""
    name: str
    type: str
    nullable: bool = True
    primary_key: bool = False
    unique: bool = False
    increment: bool = False
    default: str | None = None
    type_args: TypeArgs | None = None


@dataclass
class Index:
    """Database index."""
    name: str
    columns: list[str]
    unique: bool = False


@dataclass
class Table:
    """Database table definition."""
    id: str
    name: str
    schema: str | None = None
    columns: list[Column] = field(default_factory=list)
    indexes: list[Index] = field(default_factory=list)
    order: int = 0

    def get_column(self, name: str) -> Column | None:
        """Find a column by name, ignoring case."""
        wanted = name.lower()
        return next((c for c in self.columns if c.name.lower() == wanted), None)

    def get_index(self, name: str) -> Index | None:
        """Find an index by name, ignoring case."""
        wanted = name.lower()
        return next((i for i in self.indexes if i.name.lower() == wanted), None)


@dataclass
class ForeignKey:
    """Foreign key relationship between two tables.

    The table ids stay empty until the relationship linker resolves them.
    """
    name: str
    source_table: str
    source_column: str
    target_table: str
    target_column: str
    source_schema: str | None = None
    target_schema: str | None = None
    source_table_id: str = ""
    target_table_id: str = ""
    update_action: str | None = None
    delete_action: str | None = None


@dataclass
class ParseResult:
    """Tables and linked relationships recovered from a DDL script."""
    tables: list[Table] = field(default_factory=list)
    relationships: list[ForeignKey] = field(default_factory=list)


@dataclass
class DiagramField:
    """Column as shown on a diagram."""
    id: str
    name: str
    type: str
    nullable: bool = True
    primary_key: bool = False
    unique: bool = False
    increment: bool = False
    default: str = ""
    character_maximum_length: str | None = None
    precision: int | None = None
    scale: int | None = None


@dataclass
class DiagramIndex:
    """Index referencing diagram fields by id."""
    id: str
    name: str
    field_ids: list[str]
    unique: bool = False


@dataclass
class DiagramTable:
    """Table with diagram fields and a layout position."""
    id: str
    name: str
    schema: str
    order: int
    fields: list[DiagramField] = field(default_factory=list)
    indexes: list[DiagramIndex] = field(default_factory=list)
    x: float = 0.0
    y: float = 0.0
    width: float = 0.0
    height: float = 0.0


@dataclass
class DiagramRelationship:
    """Relationship from the referenced (key) side to the referencing side."""
    id: str
    name: str
    source_table_id: str
    target_table_id: str
    source_field_id: str
    target_field_id: str
    source_cardinality: Cardinality
    target_cardinality: Cardinality
    source_schema: str = ""
    target_schema: str = ""


@dataclass
class Diagram:
    """Diagram built from a parse result."""
    id: str
    name: str
    database_type: Literal["oracle"] = "oracle"
    tables: list[DiagramTable] = field(default_factory=list)
    relationships: list[DiagramRelationship] = field(default_factory=list)


def get_qualified_table_name(table: Table | DiagramTable) -> str:
    """Get a qualified table name for use as a unique key.

    Returns "schema.name" if schema is present, otherwise just "name".
    """
    return f"{table.schema}.{table.name}" if table.schema else table.name
