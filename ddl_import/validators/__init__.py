"""Script validators."""

from ddl_import.validators.oracle import ValidationResult, validate_oracle_dialect

__all__ = ["ValidationResult", "validate_oracle_dialect"]
