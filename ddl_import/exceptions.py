"""Exceptions raised by ddl-import."""


class DDLImportError(Exception):
    """Base class for ddl-import errors."""


class DDLParseError(DDLImportError):
    """The import pipeline failed for a reason unrelated to DDL content."""
