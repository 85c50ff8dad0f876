"""Oracle data type normalization."""

# Spellings are grouped by family; synonyms only collapse within a family.
CHARACTER_TYPES = {
    "varchar2": "varchar2",
    "varchar": "varchar2",
    "nvarchar2": "nvarchar2",
    "char": "char",
    "character": "char",
    "nchar": "nchar",
    "clob": "clob",
    "nclob": "nclob",
    "long": "long",
}

NUMERIC_TYPES = {
    "number": "number",
    "numeric": "number",
    "decimal": "number",
    "dec": "number",
    "integer": "integer",
    "int": "integer",
    "smallint": "smallint",
    "float": "float",
    "double precision": "float",
    "binary_float": "binary_float",
    "binary_double": "binary_double",
    "real": "real",
}

DATETIME_TYPES = {
    "date": "date",
    "timestamp": "timestamp",
    "timestamp with time zone": "timestamp",
    "timestamp with local time zone": "timestamp",
    "interval year to month": "interval",
    "interval day to second": "interval",
}

BINARY_TYPES = {
    "blob": "blob",
    "raw": "raw",
    "long raw": "long raw",
    "bfile": "bfile",
}

SPECIAL_TYPES = {
    "rowid": "rowid",
    "urowid": "urowid",
    "xmltype": "xmltype",
    "json": "json",
    "boolean": "boolean",
}

ORACLE_TYPE_MAP: dict[str, str] = {
    **CHARACTER_TYPES,
    **NUMERIC_TYPES,
    **DATETIME_TYPES,
    **BINARY_TYPES,
    **SPECIAL_TYPES,
}


def normalize_oracle_type(data_type: str) -> str:
    """Map an Oracle type spelling to its canonical lowercase name.

    Unknown spellings are returned unchanged.
    """
    key = " ".join(data_type.lower().split())
    return ORACLE_TYPE_MAP.get(key, data_type)
