"""Grammar-based extraction of indexes and foreign keys using sqlglot."""

import logging

import sqlglot
from sqlglot import exp
from sqlglot.errors import SqlglotError

from ddl_import.models import ForeignKey, Index
from ddl_import.parsers.registry import TableRegistry
from ddl_import.parsers.statements import split_statements

logger = logging.getLogger(__name__)

DIALECT = "oracle"


def parse_statements(sql: str) -> list[exp.Expression]:
    """Parse preprocessed SQL, falling back to one statement at a time.

    Statements the grammar rejects are dropped; if nothing parses the
    result is empty.
    """
    try:
        return [stmt for stmt in sqlglot.parse(sql, dialect=DIALECT) if stmt is not None]
    except SqlglotError as e:
        logger.debug("Whole-script parse failed, retrying per statement: %s", e)

    parsed: list[exp.Expression] = []
    for statement in split_statements(sql):
        try:
            parsed.extend(stmt for stmt in sqlglot.parse(statement, dialect=DIALECT) if stmt is not None)
        except SqlglotError as e:
            logger.debug("Skipping statement the grammar rejected (%s): %.60s", e, statement)
    return parsed


def _column_name(node: exp.Expression) -> str:
    if isinstance(node, exp.Ordered):
        node = node.this
    if isinstance(node, (exp.Column, exp.Identifier)):
        return node.name
    return node.sql(dialect=DIALECT)


def _index_columns(index: exp.Index) -> list[str]:
    params = index.args.get("params")
    columns = params.args.get("columns") if params else None
    return [_column_name(col) for col in columns or index.expressions or []]


def _attach_index(registry: TableRegistry, create: exp.Create) -> bool:
    """Attach a parsed CREATE INDEX to its table."""
    index = create.this
    if not isinstance(index, exp.Index):
        return False

    table_expr = index.args.get("table")
    if not isinstance(table_expr, exp.Table):
        return False

    table = registry.lookup(table_expr.name, table_expr.db or None)
    if table is None:
        logger.debug("Index targets unknown table %s", table_expr.name)
        return False

    # Schema-qualified index names parse as a dotted name.
    index_name = index.this.name if index.this else ""
    index_name = index_name.rsplit(".", 1)[-1]
    columns = _index_columns(index)
    if not index_name or not columns or table.get_index(index_name):
        return False

    table.indexes.append(
        Index(name=index_name, columns=columns, unique=bool(create.args.get("unique")))
    )
    return True


def _referential_action(fk: exp.ForeignKey, reference: exp.Reference, event: str) -> str | None:
    action = fk.args.get(event)
    if isinstance(action, str) and action:
        return action.upper()

    prefix = f"ON {event.upper()} "
    for option in reference.args.get("options") or []:
        text = option if isinstance(option, str) else option.sql(dialect=DIALECT)
        if text.upper().startswith(prefix):
            return " ".join(text[len(prefix):].upper().split())
    return None


def _foreign_keys_from_alter(registry: TableRegistry, alter: exp.Alter) -> list[ForeignKey]:
    source_expr = alter.this
    if not isinstance(source_expr, exp.Table):
        return []

    source = registry.lookup(source_expr.name, source_expr.db or None)
    if source is None:
        logger.debug("ALTER TABLE targets unknown table %s", source_expr.name)
        return []

    found: list[ForeignKey] = []
    for fk in alter.find_all(exp.ForeignKey):
        reference = fk.args.get("reference")
        if not isinstance(reference, exp.Reference):
            continue

        # reference.this is a Schema wrapping the target table and its columns
        target = reference.this
        target_columns = []
        if isinstance(target, exp.Schema):
            target_columns = [_column_name(col) for col in target.expressions]
            target = target.this
        if not isinstance(target, exp.Table):
            continue

        constraint = fk.find_ancestor(exp.Constraint, exp.AddConstraint)
        name = constraint.name if constraint else ""
        source_columns = [_column_name(col) for col in fk.expressions]

        for source_column, target_column in zip(source_columns, target_columns):
            found.append(
                ForeignKey(
                    name=name or f"fk_{source.name}_{source_column}",
                    source_table=source.name,
                    source_schema=source.schema,
                    source_column=source_column,
                    target_table=target.name,
                    target_schema=target.db or None,
                    target_column=target_column,
                    source_table_id=source.id,
                    update_action=_referential_action(fk, reference, "update"),
                    delete_action=_referential_action(fk, reference, "delete"),
                )
            )
    return found


def _relationship_key(fk: ForeignKey) -> tuple[str, str, str]:
    return fk.source_table.lower(), fk.source_column.lower(), fk.target_table.lower()


def extract_from_grammar(
    sql: str,
    registry: TableRegistry,
    relationships: list[ForeignKey],
) -> tuple[int, int]:
    """Reconcile what sqlglot finds with the manually extracted model.

    Indexes and foreign keys already present are left alone. Returns the
    number of indexes and relationships added.
    """
    seen = {_relationship_key(fk) for fk in relationships}
    indexes_added = 0
    relationships_added = 0

    for stmt in parse_statements(sql):
        if isinstance(stmt, exp.Create) and (stmt.kind or "").upper() == "INDEX":
            indexes_added += _attach_index(registry, stmt)
        elif isinstance(stmt, exp.Alter) and (stmt.args.get("kind") or "TABLE").upper() == "TABLE":
            for fk in _foreign_keys_from_alter(registry, stmt):
                key = _relationship_key(fk)
                if key in seen:
                    continue
                seen.add(key)
                relationships.append(fk)
                relationships_added += 1

    return indexes_added, relationships_added
