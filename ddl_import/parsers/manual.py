"""Regex-based extraction of tables, keys and indexes from raw Oracle DDL.

These extractors read the statement text directly, so they recover what they
can from statements no grammar accepts. Nothing here raises for malformed
DDL: a clause that does not match a known shape contributes nothing.
"""

import logging
import re
from dataclasses import dataclass, field

from ddl_import.models import Column, ForeignKey, Index, Table, TypeArgs
from ddl_import.parsers.common import (
    IDENTIFIER,
    find_closing_paren,
    normalize_identifier,
    qualified_name,
    split_identifier_list,
    split_qualified,
    split_top_level,
)
from ddl_import.parsers.registry import TableRegistry
from ddl_import.parsers.types import normalize_oracle_type

logger = logging.getLogger(__name__)


_FLAGS = re.IGNORECASE | re.DOTALL

_REFERENCES = (
    r"REFERENCES\s+" + qualified_name("target")
    + r"\s*\((?P<target_columns>[^)]*)\)"
)

_CREATE_TABLE_RE = re.compile(
    r"CREATE\s+(?:GLOBAL\s+TEMPORARY\s+)?TABLE\s+(?:IF\s+NOT\s+EXISTS\s+)?"
    + qualified_name("table") + r"\s*\(",
    _FLAGS,
)
_CONSTRAINT_RE = re.compile(rf"CONSTRAINT\s+(?P<name>{IDENTIFIER})\s+(?P<body>.*)", _FLAGS)
_CONSTRAINT_START_RE = re.compile(
    r"(?:PRIMARY\s+KEY|FOREIGN\s+KEY|UNIQUE\s*\(|UNIQUE\s+KEY|CHECK\s*\()", re.IGNORECASE
)
_SUPPLEMENTAL_LOG_RE = re.compile(r"SUPPLEMENTAL\s+LOG\b", re.IGNORECASE)
_PRIMARY_KEY_RE = re.compile(r"PRIMARY\s+KEY\s*\((?P<columns>[^)]*)\)", _FLAGS)
_UNIQUE_RE = re.compile(r"UNIQUE(?:\s+KEY)?\s*\((?P<columns>[^)]*)\)", _FLAGS)
_FOREIGN_KEY_RE = re.compile(
    r"FOREIGN\s+KEY\s*\((?P<columns>[^)]*)\)\s*" + _REFERENCES, _FLAGS
)
_ON_DELETE_RE = re.compile(r"\bON\s+DELETE\s+(CASCADE|SET\s+NULL|SET\s+DEFAULT|NO\s+ACTION|RESTRICT)\b", re.IGNORECASE)
_ON_UPDATE_RE = re.compile(r"\bON\s+UPDATE\s+(CASCADE|SET\s+NULL|SET\s+DEFAULT|NO\s+ACTION|RESTRICT)\b", re.IGNORECASE)

_COLUMN_RE = re.compile(
    rf"(?P<name>{IDENTIFIER})\s+"
    r"(?P<type>[A-Za-z_][\w$#]*(?:\.[A-Za-z_][\w$#]*)?)"
    r"(?:\s*\(\s*(?P<args>[^()]*?)\s*\))?"
    r"(?P<rest>.*)",
    _FLAGS,
)
_TYPE_ARG_RE = re.compile(r"\s*(\d+)\s*(?:BYTE|CHAR)?\s*", re.IGNORECASE)

_INLINE_REFERENCE_RE = re.compile(
    rf"(?:CONSTRAINT\s+(?P<name>{IDENTIFIER})\s+)?" + _REFERENCES, _FLAGS
)
_INLINE_UNIQUE_RE = re.compile(rf"(?:CONSTRAINT\s+(?P<name>{IDENTIFIER})\s+)?\bUNIQUE\b", re.IGNORECASE)
_PRIMARY_KEY_FLAG_RE = re.compile(r"\bPRIMARY\s+KEY\b", re.IGNORECASE)
_NOT_NULL_RE = re.compile(r"\bNOT\s+NULL\b", re.IGNORECASE)
_IDENTITY_RE = re.compile(
    r"\bGENERATED\s+(?:ALWAYS|BY\s+DEFAULT(?:\s+ON\s+NULL)?)\s+AS\s+IDENTITY\b|\bAUTO_INCREMENT\b",
    re.IGNORECASE,
)
_DEFAULT_RE = re.compile(r"\bDEFAULT\s+(?:ON\s+NULL\s+)?", re.IGNORECASE)
_CHECK_RE = re.compile(r"\bCHECK\s*\(", re.IGNORECASE)
_STRING_LITERAL_RE = re.compile(r"'(?:[^']|'')*'")
_DEFAULT_TOKEN_RE = re.compile(r"[\w$#.\"+-]+")

_ALTER_FOREIGN_KEY_RE = re.compile(
    r"ALTER\s+TABLE\s+" + qualified_name("source")
    + rf"\s+ADD\s*\(?\s*(?:CONSTRAINT\s+(?P<name>{IDENTIFIER})\s+)?"
    r"FOREIGN\s+KEY\s*\((?P<columns>[^)]*)\)\s*" + _REFERENCES,
    _FLAGS,
)
_ALTER_KEY_RE = re.compile(
    r"ALTER\s+TABLE\s+" + qualified_name("table")
    + rf"\s+ADD\s*\(?\s*(?:CONSTRAINT\s+(?P<name>{IDENTIFIER})\s+)?"
    r"(?P<kind>PRIMARY\s+KEY|UNIQUE)\s*\((?P<columns>[^)]*)\)",
    _FLAGS,
)
_CREATE_INDEX_RE = re.compile(
    r"CREATE\s+(?P<unique>UNIQUE\s+)?(?:BITMAP\s+)?INDEX\s+" + qualified_name("index")
    + r"\s+ON\s+" + qualified_name("table") + r"\s*\(",
    _FLAGS,
)
_SORT_ORDER_RE = re.compile(r"\s+(?:ASC|DESC)\s*$", re.IGNORECASE)

# Compound type spellings that continue after the base token.
_COMPOUND_TYPES = {
    "TIMESTAMP": re.compile(r"\s*WITH\s+(?:(?P<local>LOCAL)\s+)?TIME\s+ZONE\b", re.IGNORECASE),
    "INTERVAL": re.compile(
        r"\s*(?P<lead>YEAR|DAY)\s*(?:\(\s*\d+\s*\))?\s+TO\s+(?P<trail>MONTH|SECOND)\b\s*(?:\(\s*\d+\s*\))?",
        re.IGNORECASE,
    ),
    "LONG": re.compile(r"\s*RAW\b", re.IGNORECASE),
    "DOUBLE": re.compile(r"\s*PRECISION\b", re.IGNORECASE),
}


@dataclass
class ColumnClause:
    """A column definition, parsed later by :func:`parse_column`."""
    text: str


@dataclass
class PrimaryKeyClause:
    columns: list[str]
    name: str | None = None


@dataclass
class UniqueClause:
    columns: list[str]
    name: str | None = None


@dataclass
class ForeignKeyClause:
    columns: list[str]
    target_table: str
    target_columns: list[str] = field(default_factory=list)
    target_schema: str | None = None
    name: str | None = None
    update_action: str | None = None
    delete_action: str | None = None


Clause = ColumnClause | PrimaryKeyClause | UniqueClause | ForeignKeyClause


def _action(pattern: re.Pattern[str], text: str) -> str | None:
    match = pattern.search(text)
    return " ".join(match.group(1).upper().split()) if match else None


def _classify_constraint(body: str, name: str | None = None) -> Clause | None:
    if re.match(r"PRIMARY\s+KEY", body, re.IGNORECASE):
        match = _PRIMARY_KEY_RE.match(body)
        return PrimaryKeyClause(split_identifier_list(match.group("columns")), name) if match else None

    if re.match(r"FOREIGN\s+KEY", body, re.IGNORECASE):
        match = _FOREIGN_KEY_RE.match(body)
        if not match:
            return None
        schema, table = split_qualified(match.group("target_first"), match.group("target_second"))
        trailer = body[match.end():]
        return ForeignKeyClause(
            columns=split_identifier_list(match.group("columns")),
            target_table=table,
            target_columns=split_identifier_list(match.group("target_columns")),
            target_schema=schema,
            name=name,
            update_action=_action(_ON_UPDATE_RE, trailer),
            delete_action=_action(_ON_DELETE_RE, trailer),
        )

    if re.match(r"UNIQUE\b", body, re.IGNORECASE):
        match = _UNIQUE_RE.match(body)
        return UniqueClause(split_identifier_list(match.group("columns")), name) if match else None

    # CHECK and anything else carry nothing for the schema model.
    return None


def classify_clause(text: str) -> Clause | None:
    """Classify one top-level clause of a CREATE TABLE body."""
    text = text.strip()
    if _SUPPLEMENTAL_LOG_RE.match(text):
        return None
    constraint = _CONSTRAINT_RE.match(text)
    if constraint:
        return _classify_constraint(constraint.group("body"), normalize_identifier(constraint.group("name")))
    if _CONSTRAINT_START_RE.match(text):
        return _classify_constraint(text)
    if _COLUMN_RE.fullmatch(text):
        return ColumnClause(text)
    return None


def _parse_type_args(args: str | None) -> TypeArgs | None:
    if not args:
        return None
    values: list[int] = []
    for part in args.split(","):
        match = _TYPE_ARG_RE.fullmatch(part)
        if not match:
            return None
        values.append(int(match.group(1)))
    if len(values) == 1:
        return TypeArgs(length=values[0])
    return TypeArgs(precision=values[0], scale=values[1])


def _resolve_compound_type(base: str, rest: str) -> tuple[str, str]:
    pattern = _COMPOUND_TYPES.get(base.upper())
    match = pattern.match(rest) if pattern else None
    if not match:
        return base, rest

    upper = base.upper()
    if upper == "TIMESTAMP":
        name = "timestamp with local time zone" if match.group("local") else "timestamp with time zone"
    elif upper == "INTERVAL":
        name = f"interval {match.group('lead')} to {match.group('trail')}".lower()
    elif upper == "LONG":
        name = "long raw"
    else:
        name = "double precision"
    return name, rest[match.end():]


def _mask(text: str) -> str:
    """Blank out string literals and CHECK bodies, keeping offsets intact."""
    masked = _STRING_LITERAL_RE.sub(lambda m: "'" + " " * (len(m.group()) - 2) + "'", text)
    while match := _CHECK_RE.search(masked):
        close = find_closing_paren(masked, match.end() - 1)
        end = len(masked) if close == -1 else close + 1
        masked = masked[:match.start()] + " " * (end - match.start()) + masked[end:]
    return masked


def _read_default(text: str, start: int) -> str | None:
    """Read a DEFAULT expression: a quoted literal, a call, or a single token."""
    if start >= len(text):
        return None
    if text[start] == "'":
        match = _STRING_LITERAL_RE.match(text, start)
        return match.group() if match else text[start:].strip()
    if text[start] == "(":
        close = find_closing_paren(text, start)
        return text[start:close + 1] if close != -1 else None

    match = _DEFAULT_TOKEN_RE.match(text, start)
    if not match:
        return None
    end = match.end()
    if text.startswith("(", end):
        close = find_closing_paren(text, end)
        if close != -1:
            end = close + 1
    return text[start:end]


def parse_column(text: str) -> tuple[Column, re.Match[str] | None, str | None] | None:
    """Parse a column definition.

    Returns the column, the inline REFERENCES match (if any) and the name of
    an inline UNIQUE constraint (``""`` when unnamed, ``None`` when absent).
    """
    match = _COLUMN_RE.fullmatch(text.strip())
    if not match:
        return None

    type_name, rest = _resolve_compound_type(match.group("type"), match.group("rest"))
    masked = _mask(rest)

    is_primary_key = bool(_PRIMARY_KEY_FLAG_RE.search(masked))
    identity = _IDENTITY_RE.search(masked)
    # GENERATED BY DEFAULT is an identity marker, not a default expression.
    default_match = _DEFAULT_RE.search(_IDENTITY_RE.sub(lambda m: " " * len(m.group()), masked))
    unique_match = _INLINE_UNIQUE_RE.search(masked)

    column = Column(
        name=normalize_identifier(match.group("name")),
        type=normalize_oracle_type(type_name),
        nullable=not (is_primary_key or _NOT_NULL_RE.search(masked)),
        primary_key=is_primary_key,
        increment=bool(identity),
        default=_read_default(rest, default_match.end()) if default_match else None,
        type_args=_parse_type_args(match.group("args")),
    )

    unique_name = None
    if unique_match:
        unique_name = normalize_identifier(unique_match.group("name")) if unique_match.group("name") else ""
    return column, _INLINE_REFERENCE_RE.search(masked), unique_name


def _mark_primary_key(table: Table, columns: list[str]) -> None:
    for name in columns:
        column = table.get_column(name)
        if column:
            column.primary_key = True
            column.nullable = False
        else:
            logger.debug("Primary key column %s not found in table %s", name, table.name)


def _add_unique_index(table: Table, columns: list[str], name: str | None = None) -> None:
    if not columns:
        return
    name = name or f"{table.name}_{'_'.join(columns)}_unique"
    if table.get_index(name):
        return
    table.indexes.append(Index(name=name, columns=columns, unique=True))


def _has_single_column_unique_index(table: Table, column: Column) -> bool:
    return any(
        index.unique and len(index.columns) == 1 and index.columns[0].lower() == column.name.lower()
        for index in table.indexes
    )


def finalize_keys(table: Table) -> None:
    """Derive column uniqueness from the table's keys.

    A lone primary-key column is unique; columns of a composite key are
    unique only through their own single-column unique index.
    """
    primary_key = [c for c in table.columns if c.primary_key]
    for column in table.columns:
        if column.primary_key and len(primary_key) == 1:
            column.unique = True
        else:
            column.unique = _has_single_column_unique_index(table, column)


def _relationships_for(table: Table, clause: ForeignKeyClause) -> list[ForeignKey]:
    relationships = []
    for source, target in zip(clause.columns, clause.target_columns):
        relationships.append(
            ForeignKey(
                name=clause.name or f"FK_{table.name}_{source}",
                source_table=table.name,
                source_schema=table.schema,
                source_column=source,
                target_table=clause.target_table,
                target_schema=clause.target_schema,
                target_column=target,
                source_table_id=table.id,
                update_action=clause.update_action,
                delete_action=clause.delete_action,
            )
        )
    return relationships


def _add_column(table: Table, text: str, relationships: list[ForeignKey]) -> None:
    parsed = parse_column(text)
    if parsed is None:
        logger.debug("Skipping unrecognized clause in table %s: %.60s", table.name, text)
        return

    column, reference, unique_name = parsed
    if table.get_column(column.name):
        logger.debug("Duplicate column %s in table %s", column.name, table.name)
        return
    table.columns.append(column)

    if reference:
        schema, target = split_qualified(reference.group("target_first"), reference.group("target_second"))
        target_columns = split_identifier_list(reference.group("target_columns"))
        constraint_name = reference.group("name")
        relationships.extend(
            _relationships_for(
                table,
                ForeignKeyClause(
                    columns=[column.name],
                    target_table=target,
                    target_columns=target_columns[:1],
                    target_schema=schema,
                    name=normalize_identifier(constraint_name) if constraint_name else None,
                    delete_action=_action(_ON_DELETE_RE, text),
                ),
            )
        )

    if unique_name is not None and not column.primary_key:
        _add_unique_index(table, [column.name], unique_name or None)


def apply_clause(table: Table, clause: Clause, relationships: list[ForeignKey]) -> None:
    if isinstance(clause, ColumnClause):
        _add_column(table, clause.text, relationships)
    elif isinstance(clause, PrimaryKeyClause):
        _mark_primary_key(table, clause.columns)
    elif isinstance(clause, UniqueClause):
        _add_unique_index(table, clause.columns, clause.name)
    elif isinstance(clause, ForeignKeyClause):
        relationships.extend(_relationships_for(table, clause))


def extract_table(
    statement: str,
    registry: TableRegistry,
    relationships: list[ForeignKey],
) -> Table | None:
    """Extract one CREATE TABLE statement into the registry.

    Relationships found in the body are appended to ``relationships`` with
    their source table id already set.
    """
    header = _CREATE_TABLE_RE.search(statement)
    if not header:
        logger.debug("No CREATE TABLE header found: %.60s", statement)
        return None

    schema, name = split_qualified(header.group("table_first"), header.group("table_second"))
    open_index = header.end() - 1
    close_index = find_closing_paren(statement, open_index)
    body = statement[open_index + 1:close_index if close_index != -1 else len(statement)]

    table = registry.create_table(name, schema)
    for part in split_top_level(body):
        clause = classify_clause(part)
        if clause is None:
            logger.debug("Skipping clause in table %s: %.60s", name, part)
            continue
        apply_clause(table, clause, relationships)

    finalize_keys(table)
    return table


def extract_foreign_keys_from_alter(
    statements: list[str],
    registry: TableRegistry | None = None,
) -> list[ForeignKey]:
    """Foreign keys declared with ALTER TABLE ... ADD [CONSTRAINT] FOREIGN KEY.

    The registry, when given, is only read to fill in the source table id.
    """
    found: list[ForeignKey] = []
    for statement in statements:
        match = _ALTER_FOREIGN_KEY_RE.search(statement)
        if not match:
            continue

        source_schema, source_table = split_qualified(match.group("source_first"), match.group("source_second"))
        target_schema, target_table = split_qualified(match.group("target_first"), match.group("target_second"))
        source = registry.lookup(source_table, source_schema) if registry is not None else None
        name = normalize_identifier(match.group("name")) if match.group("name") else None
        trailer = statement[match.end():]

        for source_column, target_column in zip(
            split_identifier_list(match.group("columns")),
            split_identifier_list(match.group("target_columns")),
        ):
            found.append(
                ForeignKey(
                    name=name or f"fk_{source_table}_{source_column}",
                    source_table=source_table,
                    source_schema=source_schema,
                    source_column=source_column,
                    target_table=target_table,
                    target_schema=target_schema,
                    target_column=target_column,
                    source_table_id=source.id if source else "",
                    update_action=_action(_ON_UPDATE_RE, trailer),
                    delete_action=_action(_ON_DELETE_RE, trailer),
                )
            )
    return found


def apply_alter_table_constraints(statements: list[str], registry: TableRegistry) -> int:
    """Apply ALTER TABLE ... ADD PRIMARY KEY / UNIQUE to registered tables.

    Returns the number of constraints applied.
    """
    applied = 0
    for statement in statements:
        match = _ALTER_KEY_RE.search(statement)
        if not match:
            continue

        schema, name = split_qualified(match.group("table_first"), match.group("table_second"))
        table = registry.lookup(name, schema)
        if table is None:
            logger.debug("ALTER TABLE targets unknown table %s", name)
            continue

        columns = split_identifier_list(match.group("columns"))
        constraint_name = normalize_identifier(match.group("name")) if match.group("name") else None
        if match.group("kind").upper().startswith("PRIMARY"):
            _mark_primary_key(table, columns)
        else:
            _add_unique_index(table, columns, constraint_name)
        finalize_keys(table)
        applied += 1
    return applied


def extract_indexes(statements: list[str], registry: TableRegistry) -> int:
    """Attach CREATE [UNIQUE] INDEX statements to their tables.

    Index names already present on a table (ignoring case) are skipped.
    Returns the number of indexes added.
    """
    added = 0
    for statement in statements:
        match = _CREATE_INDEX_RE.search(statement)
        if not match:
            continue

        _, index_name = split_qualified(match.group("index_first"), match.group("index_second"))
        schema, table_name = split_qualified(match.group("table_first"), match.group("table_second"))
        table = registry.lookup(table_name, schema)
        if table is None:
            logger.debug("Index %s targets unknown table %s", index_name, table_name)
            continue
        if table.get_index(index_name):
            continue

        open_index = match.end() - 1
        close_index = find_closing_paren(statement, open_index)
        if close_index == -1:
            continue
        columns = [
            normalize_identifier(_SORT_ORDER_RE.sub("", part))
            for part in split_top_level(statement[open_index + 1:close_index])
        ]
        if not columns:
            continue

        table.indexes.append(Index(name=index_name, columns=columns, unique=bool(match.group("unique"))))
        added += 1
    return added
