"""DDL parsers."""

from ddl_import.parsers.oracle import OracleParser, ParserOptions, is_oracle_format, parse_oracle
from ddl_import.parsers.preprocess import preprocess
from ddl_import.parsers.statements import split_statements
from ddl_import.parsers.types import normalize_oracle_type

__all__ = [
    "OracleParser",
    "ParserOptions",
    "is_oracle_format",
    "parse_oracle",
    "preprocess",
    "split_statements",
    "normalize_oracle_type",
]
