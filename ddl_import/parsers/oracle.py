"""Oracle DDL import pipeline."""

import logging
import re
from dataclasses import dataclass

from ddl_import.exceptions import DDLImportError, DDLParseError
from ddl_import.models import ForeignKey, ParseResult
from ddl_import.parsers.grammar import extract_from_grammar
from ddl_import.parsers.linker import assemble_result, link_relationships
from ddl_import.parsers.manual import (
    apply_alter_table_constraints,
    extract_foreign_keys_from_alter,
    extract_indexes,
    extract_table,
)
from ddl_import.parsers.preprocess import preprocess, strip_script_noise
from ddl_import.parsers.registry import IdFactory, TableRegistry
from ddl_import.parsers.statements import (
    alter_table_statements,
    create_index_statements,
    create_table_statements,
    split_statements,
)

logger = logging.getLogger(__name__)


ORACLE_MARKERS = [
    "VARCHAR2",
    "NUMBER(",
    "SYSDATE",
    "SYSTIMESTAMP",
    "SYS_GUID",
    "GENERATED ALWAYS AS IDENTITY",
    "GENERATED BY DEFAULT AS IDENTITY",
    ".NEXTVAL",
    "TABLESPACE",
    "PCTFREE",
    "STORAGE (",
    "NVARCHAR2",
    "CLOB",
    "NCLOB",
    "BLOB",
    "BFILE",
    "BINARY_FLOAT",
    "BINARY_DOUBLE",
    "ROWID",
    "XMLTYPE",
    "CREATE SEQUENCE",
    "CREATE OR REPLACE",
]

_ENABLED_PRIMARY_KEY_RE = re.compile(r"CONSTRAINT\s+.*PRIMARY\s+KEY.*ENABLE", re.IGNORECASE)


def is_oracle_format(sql: str) -> bool:
    """Heuristically decide whether a script is written for Oracle."""
    upper = " ".join(sql.upper().split())
    if any(marker in upper for marker in ORACLE_MARKERS):
        return True
    return bool(_ENABLED_PRIMARY_KEY_RE.search(upper))


@dataclass
class ParserOptions:
    """Options for the Oracle import pipeline."""
    use_grammar: bool = True
    id_factory: IdFactory | None = None


class OracleParser:
    """Parser for Oracle DDL scripts.

    Combines a regex extraction over the raw script with a sqlglot pass over
    a cleaned-up copy, then links foreign keys once every table is known.
    """

    def __init__(self, options: ParserOptions | None = None):
        self.options = options or ParserOptions()

    def parse(self, sql: str) -> ParseResult:
        """Parse Oracle DDL and return its tables and linked relationships."""
        try:
            if not isinstance(sql, str):
                raise TypeError(f"expected str, got {type(sql).__name__}")
            return self._parse(sql)
        except DDLImportError:
            raise
        except Exception as e:
            raise DDLParseError(f"Error parsing Oracle DDL: {e}") from e

    def _parse(self, sql: str) -> ParseResult:
        registry = TableRegistry(self.options.id_factory)
        relationships: list[ForeignKey] = []

        # PL/SQL bodies may contain CREATE TABLE text; the manual pass never sees them.
        statements = split_statements(strip_script_noise(sql))

        for statement in create_table_statements(statements):
            extract_table(statement, registry, relationships)

        alter_statements = alter_table_statements(statements)
        apply_alter_table_constraints(alter_statements, registry)
        relationships.extend(
            extract_foreign_keys_from_alter(alter_table_statements(alter_statements, "FOREIGN KEY"), registry)
        )

        if self.options.use_grammar:
            self._extract_with_grammar(sql, registry, relationships)

        extract_indexes(create_index_statements(statements), registry)

        linked = link_relationships(registry.tables, relationships, registry.aliases())
        logger.debug(
            "Parsed %d tables, linked %d of %d relationships",
            len(registry), len(linked), len(relationships),
        )
        return assemble_result(registry, linked)

    def _extract_with_grammar(
        self,
        sql: str,
        registry: TableRegistry,
        relationships: list[ForeignKey],
    ) -> None:
        try:
            indexes, foreign_keys = extract_from_grammar(preprocess(sql), registry, relationships)
        except Exception as e:
            logger.warning("Grammar-based extraction failed, continuing without it: %s", e)
            return
        logger.debug("Grammar pass added %d indexes and %d relationships", indexes, foreign_keys)


def parse_oracle(sql: str, options: ParserOptions | None = None) -> ParseResult:
    """Parse an Oracle DDL script."""
    return OracleParser(options).parse(sql)
