"""Statement splitting and selection for DDL scripts."""

import re


STATEMENT_TERMINATOR = ";"

_CREATE_TABLE_RE = re.compile(r"\bCREATE\s+(?:GLOBAL\s+TEMPORARY\s+)?TABLE\b", re.IGNORECASE)
_CREATE_INDEX_RE = re.compile(r"\bCREATE\s+(?:UNIQUE\s+|BITMAP\s+)?INDEX\b", re.IGNORECASE)
_ALTER_TABLE_RE = re.compile(r"\bALTER\s+TABLE\b", re.IGNORECASE)


def strip_comments(text: str) -> str:
    """Remove -- and /* */ comments, leaving quoted text untouched."""
    out: list[str] = []
    quote: str | None = None
    i, n = 0, len(text)

    while i < n:
        ch = text[i]
        if quote:
            out.append(ch)
            if ch == quote:
                quote = None
            i += 1
        elif ch in ("'", '"'):
            quote = ch
            out.append(ch)
            i += 1
        elif text.startswith("--", i):
            end = text.find("\n", i)
            i = n if end == -1 else end
        elif text.startswith("/*", i):
            end = text.find("*/", i + 2)
            i = n if end == -1 else end + 2
            out.append(" ")
        else:
            out.append(ch)
            i += 1

    return "".join(out)


def split_statements(text: str) -> list[str]:
    """Split a script on statement terminators.

    Comments are dropped, terminators inside quotes are ignored and empty
    fragments are discarded. Nothing else about nesting is understood.
    """
    statements: list[str] = []
    current: list[str] = []
    quote: str | None = None

    for ch in strip_comments(text):
        if quote:
            if ch == quote:
                quote = None
        elif ch in ("'", '"'):
            quote = ch
        elif ch == STATEMENT_TERMINATOR:
            statement = "".join(current).strip()
            if statement:
                statements.append(statement)
            current = []
            continue
        current.append(ch)

    tail = "".join(current).strip()
    if tail:
        statements.append(tail)
    return statements


def is_create_table(statement: str) -> bool:
    return bool(_CREATE_TABLE_RE.search(statement))


def is_create_index(statement: str) -> bool:
    return bool(_CREATE_INDEX_RE.search(statement)) and not is_create_table(statement)


def is_alter_table(statement: str) -> bool:
    return bool(_ALTER_TABLE_RE.search(statement))


def is_schema_statement(statement: str) -> bool:
    """True for statements the schema model is built from."""
    return is_create_table(statement) or is_create_index(statement) or is_alter_table(statement)


def create_table_statements(statements: list[str]) -> list[str]:
    return [s for s in statements if is_create_table(s)]


def create_index_statements(statements: list[str]) -> list[str]:
    return [s for s in statements if is_create_index(s)]


def alter_table_statements(statements: list[str], keyword: str | None = None) -> list[str]:
    """ALTER TABLE statements, optionally only those mentioning a keyword."""
    selected = [s for s in statements if is_alter_table(s)]
    if keyword:
        pattern = re.compile(r"\b" + r"\s+".join(keyword.split()) + r"\b", re.IGNORECASE)
        selected = [s for s in selected if pattern.search(s)]
    return selected
