"""ddl-import: Import Oracle DDL scripts into a normalized schema model."""

__version__ = "0.1.0"

from ddl_import.exceptions import DDLImportError, DDLParseError
from ddl_import.models import Column, ForeignKey, Index, ParseResult, Table
from ddl_import.parsers import OracleParser, ParserOptions, parse_oracle

__all__ = [
    "Column",
    "DDLImportError",
    "DDLParseError",
    "ForeignKey",
    "Index",
    "OracleParser",
    "ParseResult",
    "ParserOptions",
    "Table",
    "parse_oracle",
]
