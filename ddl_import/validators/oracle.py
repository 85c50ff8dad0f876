"""Compatibility checks for scripts imported as Oracle DDL."""

import re
from dataclasses import dataclass, field
from typing import Literal


@dataclass
class ValidationError:
    line: int
    message: str
    type: Literal["syntax", "unsupported", "compatibility"] = "syntax"
    suggestion: str | None = None


@dataclass
class ValidationWarning:
    message: str
    type: Literal["compatibility", "data_loss", "performance"] = "compatibility"


@dataclass
class ValidationResult:
    """Outcome of validating a script."""
    is_valid: bool
    errors: list[ValidationError] = field(default_factory=list)
    warnings: list[ValidationWarning] = field(default_factory=list)
    table_count: int = 0


_CREATE_TABLE_LINE = re.compile(r"^\s*CREATE\s+TABLE", re.IGNORECASE)

# Syntax from other databases that Oracle does not accept.
FOREIGN_SYNTAX: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"\bAUTO_INCREMENT\b", re.IGNORECASE), "AUTO_INCREMENT is MySQL syntax. Use GENERATED AS IDENTITY in Oracle."),
    (re.compile(r"\bSERIAL\b", re.IGNORECASE), "SERIAL is PostgreSQL syntax. Use GENERATED AS IDENTITY in Oracle."),
    (
        re.compile(r"\bIDENTITY\s*\(\s*\d+\s*,\s*\d+\s*\)", re.IGNORECASE),
        "IDENTITY(seed, increment) is SQL Server syntax. Use GENERATED AS IDENTITY in Oracle.",
    ),
    (re.compile(r"\bTINYINT\b", re.IGNORECASE), "TINYINT is not an Oracle type. Consider using NUMBER(3) instead."),
    (re.compile(r"\bMEDIUMINT\b", re.IGNORECASE), "MEDIUMINT is not an Oracle type. Consider using NUMBER(7) instead."),
    (re.compile(r"\bNVARCHAR\s*\(\s*max\s*\)", re.IGNORECASE), "NVARCHAR(max) is SQL Server syntax. Use NCLOB in Oracle."),
    (re.compile(r"\bVARCHAR\s*\(\s*max\s*\)", re.IGNORECASE), "VARCHAR(max) is SQL Server syntax. Use CLOB in Oracle."),
    (
        re.compile(r"\bUNIQUEIDENTIFIER\b", re.IGNORECASE),
        "UNIQUEIDENTIFIER is SQL Server syntax. Use RAW(16) or SYS_GUID() in Oracle.",
    ),
    (re.compile(r"\bDATETIME2\b", re.IGNORECASE), "DATETIME2 is SQL Server syntax. Use TIMESTAMP in Oracle."),
    (
        re.compile(r"\bJSONB\b", re.IGNORECASE),
        "JSONB is PostgreSQL syntax. Use JSON in Oracle 21c+ or CLOB for older versions.",
    ),
    (re.compile(r"::"), ":: cast syntax is PostgreSQL specific. Use CAST() in Oracle."),
]


def validate_oracle_dialect(sql: str) -> ValidationResult:
    """Check a script for syntax that belongs to other databases.

    Findings are warnings; only an empty script is invalid.
    """
    if not sql or not sql.strip():
        return ValidationResult(
            is_valid=False,
            errors=[
                ValidationError(
                    line=1,
                    message="SQL script is empty",
                    type="syntax",
                    suggestion="Add CREATE TABLE statements to import",
                )
            ],
        )

    warnings: list[ValidationWarning] = []
    table_count = 0

    for number, line in enumerate(sql.split("\n"), start=1):
        line = line.strip()
        if _CREATE_TABLE_LINE.match(line):
            table_count += 1
        for pattern, message in FOREIGN_SYNTAX:
            if pattern.search(line):
                warnings.append(ValidationWarning(message=f"Line {number}: {message}"))

    return ValidationResult(is_valid=True, warnings=warnings, table_count=table_count)
