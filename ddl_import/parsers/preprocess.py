"""Rewrite rules that turn an Oracle script into SQL a grammar parser can digest.

Every rule is a pure ``str -> str`` callable. :data:`ORACLE_RULES` applies
them left to right; new vendor quirks are handled by appending rules.
"""

import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from ddl_import.parsers.common import find_closing_paren
from ddl_import.parsers.statements import is_schema_statement, split_statements


Rule = Callable[[str], str]

_NAME = r'"?[\w$#]+"?'


@dataclass(frozen=True)
class RegexRule:
    """Rewrite rule backed by a single regular expression substitution."""
    name: str
    pattern: re.Pattern[str]
    replacement: str = ""

    def __call__(self, text: str) -> str:
        return self.pattern.sub(self.replacement, text)


def _rule(name: str, pattern: str, replacement: str = "", flags: int = 0) -> RegexRule:
    return RegexRule(name, re.compile(pattern, re.IGNORECASE | flags), replacement)


def replace_check_constraints(text: str) -> str:
    """Replace ``CHECK (...)`` bodies with an inert comment."""
    pattern = re.compile(r"\bCHECK\s*\(", re.IGNORECASE)
    out: list[str] = []
    pos = 0
    while match := pattern.search(text, pos):
        close = find_closing_paren(text, match.end() - 1)
        if close == -1:
            break
        out.append(text[pos:match.start()])
        out.append("/* CHECK CONSTRAINT */")
        pos = close + 1
    out.append(text[pos:])
    return "".join(out)


_DIRECTIVE_LINE = re.compile(
    r"^[ \t]*(?:"
    r"SET[ \t]+(?:DEFINE|ECHO|FEEDBACK|HEADING|LINESIZE|PAGESIZE|SERVEROUTPUT|TERMOUT"
    r"|TIMING|VERIFY|SQLBLANKLINES|TRIMSPOOL)\b"
    r"|WHENEVER[ \t]+(?:SQLERROR|OSERROR)\b"
    r"|PROMPT\b|SPOOL\b|EXIT\b|QUIT\b|REM(?:ARK)?\b"
    r"|/[ \t]*$"
    r")",
    re.IGNORECASE,
)


def _paren_balance(line: str) -> int:
    balance = 0
    quote: str | None = None
    for i, ch in enumerate(line):
        if quote:
            if ch == quote:
                quote = None
        elif ch in ("'", '"'):
            quote = ch
        elif line.startswith("--", i):
            break
        elif ch == "(":
            balance += 1
        elif ch == ")":
            balance -= 1
    return balance


def remove_script_directives(text: str) -> str:
    """Drop SQL*Plus directive lines (SET, PROMPT, SPOOL, REM, /, ...).

    Lines inside an open parenthesis are column definitions and are kept, so
    a column called ``prompt`` survives.
    """
    out: list[str] = []
    depth = 0
    for line in text.splitlines(keepends=True):
        if depth == 0 and _DIRECTIVE_LINE.match(line):
            out.append("\n" if line.endswith("\n") else "")
            continue
        depth = max(0, depth + _paren_balance(line))
        out.append(line)
    return "".join(out)


def keep_schema_statements(text: str) -> str:
    """Keep only CREATE TABLE, CREATE INDEX and ALTER TABLE statements."""
    statements = [s for s in split_statements(text) if is_schema_statement(s)]
    if not statements:
        return ""
    return ";\n".join(statements) + ";"


# SQL*Plus directives and procedural code; none of it describes tables.
SCRIPT_RULES: list[Rule] = [
    remove_script_directives,
    _rule(
        "plsql_blocks",
        r"\bCREATE\s+(?:OR\s+REPLACE\s+)?(?:(?:NON)?EDITIONABLE\s+)?"
        r"(?:PROCEDURE|FUNCTION|PACKAGE(?:\s+BODY)?|TRIGGER|TYPE\s+BODY)\s+"
        rf"[\s\S]*?\bEND\b(?!\s+(?:IF|LOOP|CASE)\b)\s*(?:{_NAME}\s*)?;",
    ),
    _rule(
        "anonymous_blocks",
        r"^[ \t]*(?:DECLARE\b|BEGIN[ \t]*$)[\s\S]*?^[ \t]*END[ \t]*;",
        flags=re.MULTILINE,
    ),
    _rule("execute_immediate", r"\bEXECUTE\s+IMMEDIATE\s+[^;]+;"),
    _rule(
        "exec",
        r"^[ \t]*EXEC(?:UTE)?[ \t]+[\w$#.\"]+[ \t]*(?:\([^;]*\))?[ \t]*;",
        flags=re.MULTILINE,
    ),
]

# Vendor syntax rewritten or stripped so the statement parses as portable SQL.
REWRITE_RULES: list[Rule] = [
    _rule(
        "identity",
        r"GENERATED\s+(?:ALWAYS|BY\s+DEFAULT(?:\s+ON\s+NULL)?)\s+AS\s+IDENTITY(?:\s*\([^)]*\))?",
        "AUTO_INCREMENT",
    ),
    _rule(
        "sequence_default",
        rf"DEFAULT\s+{_NAME}(?:\s*\.\s*{_NAME})?\s*\.\s*NEXTVAL\b",
        "DEFAULT 'sequence'",
    ),
    _rule(
        "lob_storage",
        r"\bLOB\s*\([^)]*\)\s*STORE\s+AS\s*(?:(?:SECUREFILE|BASICFILE)\s*)?"
        rf"(?:{_NAME}\s*)?(?:\([^()]*(?:\([^()]*\)[^()]*)*\))?",
    ),
    _rule("storage", r"\bSTORAGE\s*\([^)]*\)"),
    _rule("tablespace", rf"\bTABLESPACE\s+{_NAME}"),
    _rule("physical_attributes", r"\b(?:PCTFREE|PCTUSED|INITRANS|MAXTRANS)\s+\d+"),
    _rule("logging", r"\b(?:NO)?LOGGING\b"),
    _rule("compress", r"\b(?:NO)?COMPRESS\b(?:\s+\d+)?"),
    _rule("parallel", r"\b(?:NO)?PARALLEL\b(?:\s*\(\s*DEGREE\s+\d+\s*\)|\s+\d+)?"),
    _rule("segment_creation", r"\bSEGMENT\s+CREATION\s+(?:IMMEDIATE|DEFERRED)\b"),
    _rule("row_movement", r"\b(?:ENABLE|DISABLE)\s+ROW\s+MOVEMENT\b"),
    _rule("constraint_state", r"\b(?:ENABLE|DISABLE)\b(?:\s+(?:NO)?VALIDATE\b)?"),
    _rule(
        "using_index",
        rf"\bUSING\s+INDEX\b\s*(?:\([^)]*\)|{_NAME}(?:\s*\.\s*{_NAME})?)?",
    ),
    _rule("supplemental_log_statement", r"\bALTER\s+TABLE\s+[^;]*?\bADD\s+SUPPLEMENTAL\s+LOG\b[^;]*;"),
    _rule(
        "supplemental_log",
        r",\s*SUPPLEMENTAL\s+LOG\s+(?:DATA|GROUP)\b[^,;()]*(?:\([^)]*\)[^,;()]*)*",
    ),
    replace_check_constraints,
    _rule("default_sysdate", r"DEFAULT\s+SYSDATE\b", "DEFAULT 'sysdate'"),
    _rule("default_systimestamp", r"DEFAULT\s+SYSTIMESTAMP\b", "DEFAULT 'systimestamp'"),
    _rule("default_sys_guid", r"DEFAULT\s+SYS_GUID\s*\(\s*\)", "DEFAULT 'sys_guid'"),
    _rule("default_user", r"DEFAULT\s+USER\b", "DEFAULT 'user'"),
    _rule(
        "default_current_timestamp",
        r"DEFAULT\s+CURRENT_TIMESTAMP\b(?:\s*\(\s*\d*\s*\))?",
        "DEFAULT 'current_timestamp'",
    ),
    _rule("default_current_date", r"DEFAULT\s+CURRENT_DATE\b", "DEFAULT 'current_date'"),
]

ORACLE_RULES: list[Rule] = [*SCRIPT_RULES, *REWRITE_RULES, keep_schema_statements]


def apply_rules(text: str, rules: Sequence[Rule]) -> str:
    for rule in rules:
        text = rule(text)
    return text


def strip_script_noise(text: str) -> str:
    """Remove SQL*Plus directives and PL/SQL blocks, leaving table DDL untouched."""
    return apply_rules(text, SCRIPT_RULES)


def preprocess(text: str, rules: Sequence[Rule] | None = None) -> str:
    """Prepare an Oracle script for the grammar parser."""
    return apply_rules(text, ORACLE_RULES if rules is None else rules)
