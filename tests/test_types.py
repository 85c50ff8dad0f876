"""Tests for Oracle type normalization."""

import pytest
from ddl_import.parsers.types import (
    BINARY_TYPES,
    CHARACTER_TYPES,
    DATETIME_TYPES,
    NUMERIC_TYPES,
    SPECIAL_TYPES,
    normalize_oracle_type,
)


class TestNormalizeOracleType:
    """Tests for normalize_oracle_type."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("VARCHAR2", "varchar2"),
            ("varchar", "varchar2"),
            ("NVARCHAR2", "nvarchar2"),
            ("CHAR", "char"),
            ("NUMBER", "number"),
            ("NUMERIC", "number"),
            ("DECIMAL", "number"),
            ("INT", "integer"),
            ("INTEGER", "integer"),
            ("BINARY_DOUBLE", "binary_double"),
            ("DATE", "date"),
            ("TIMESTAMP", "timestamp"),
            ("TIMESTAMP WITH TIME ZONE", "timestamp"),
            ("timestamp  with local\ttime zone", "timestamp"),
            ("INTERVAL DAY TO SECOND", "interval"),
            ("INTERVAL YEAR TO MONTH", "interval"),
            ("CLOB", "clob"),
            ("BLOB", "blob"),
            ("LONG RAW", "long raw"),
            ("RAW", "raw"),
            ("ROWID", "rowid"),
            ("XMLTYPE", "xmltype"),
        ],
    )
    def test_maps_known_spellings(self, raw, expected):
        assert normalize_oracle_type(raw) == expected

    def test_passes_unknown_types_through_unchanged(self):
        assert normalize_oracle_type("SDO_GEOMETRY") == "SDO_GEOMETRY"
        assert normalize_oracle_type("MDSYS.SDO_GEOMETRY") == "MDSYS.SDO_GEOMETRY"

    def test_never_merges_across_families(self):
        families = [CHARACTER_TYPES, NUMERIC_TYPES, DATETIME_TYPES, BINARY_TYPES, SPECIAL_TYPES]
        canonical = [set(family.values()) for family in families]

        for i, values in enumerate(canonical):
            for other in canonical[i + 1:]:
                assert not values & other
