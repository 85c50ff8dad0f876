"""Resolve relationship table references and assemble the final result."""

import logging

from ddl_import.models import ForeignKey, ParseResult, Table, get_qualified_table_name
from ddl_import.parsers.registry import TableRegistry

logger = logging.getLogger(__name__)


def _build_lookup(tables: list[Table], aliases: dict[str, str]) -> dict[str, str]:
    lookup: dict[str, str] = {}
    for key, table_id in aliases.items():
        key = key.lower()
        lookup[key] = table_id
        if "." in key:
            lookup.setdefault(key.rsplit(".", 1)[-1], table_id)

    for table in tables:
        lookup[get_qualified_table_name(table).lower()] = table.id
        lookup.setdefault(table.name.lower(), table.id)
    return lookup


def _resolve(lookup: dict[str, str], table: str, schema: str | None) -> str:
    if schema:
        qualified = lookup.get(f"{schema}.{table}".lower())
        if qualified:
            return qualified
    return lookup.get(table.lower(), "")


def link_relationships(
    tables: list[Table],
    relationships: list[ForeignKey],
    aliases: dict[str, str] | None = None,
) -> list[ForeignKey]:
    """Fill in missing table ids and drop relationships that cannot be resolved.

    References to tables outside the script are expected in partial dumps,
    so unresolved relationships are dropped without raising.
    """
    lookup = _build_lookup(tables, aliases or {})
    linked: list[ForeignKey] = []

    for fk in relationships:
        if not fk.source_table_id:
            fk.source_table_id = _resolve(lookup, fk.source_table, fk.source_schema)
        if not fk.target_table_id:
            fk.target_table_id = _resolve(lookup, fk.target_table, fk.target_schema)

        if fk.source_table_id and fk.target_table_id:
            linked.append(fk)
        else:
            logger.debug(
                "Dropping relationship %s: %s -> %s could not be resolved",
                fk.name, fk.source_table, fk.target_table,
            )
    return linked


def assemble_result(registry: TableRegistry, relationships: list[ForeignKey]) -> ParseResult:
    return ParseResult(
        tables=sorted(registry.tables, key=lambda t: t.order),
        relationships=list(relationships),
    )
