"""Identifier and text-scanning helpers shared by the Oracle extractors."""

# Unquoted Oracle identifiers may also contain $ and #.
IDENTIFIER = r'(?:"[^"]+"|[A-Za-z_][\w$#]*)'


def qualified_name(prefix: str) -> str:
    """Regex for an optionally schema-qualified name.

    Captures ``<prefix>_first`` and ``<prefix>_second``; resolve them with
    :func:`split_qualified`.
    """
    return (
        rf"(?P<{prefix}_first>{IDENTIFIER})"
        rf"(?:\s*\.\s*(?P<{prefix}_second>{IDENTIFIER}))?"
    )


def split_qualified(first: str, second: str | None) -> tuple[str | None, str]:
    """Turn the two captures of :func:`qualified_name` into (schema, name)."""
    if second:
        return normalize_identifier(first) or None, normalize_identifier(second)
    return None, normalize_identifier(first)


def normalize_identifier(identifier: str | None) -> str:
    """Strip double quotes from an identifier.

    Quoted identifiers keep their case; unquoted ones are returned as written.
    """
    if not identifier:
        return ""
    identifier = identifier.strip()
    if len(identifier) >= 2 and identifier.startswith('"') and identifier.endswith('"'):
        return identifier[1:-1]
    return identifier


def find_closing_paren(text: str, open_index: int) -> int:
    """Index of the parenthesis closing the one at ``open_index``, or -1."""
    depth = 0
    quote: str | None = None
    for i in range(open_index, len(text)):
        ch = text[i]
        if quote:
            if ch == quote:
                quote = None
        elif ch in ("'", '"'):
            quote = ch
        elif ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
            if depth == 0:
                return i
    return -1


def split_top_level(text: str, separator: str = ",") -> list[str]:
    """Split on a separator that is outside parentheses and quotes."""
    parts: list[str] = []
    current: list[str] = []
    depth = 0
    quote: str | None = None

    for ch in text:
        if quote:
            if ch == quote:
                quote = None
        elif ch in ("'", '"'):
            quote = ch
        elif ch == "(":
            depth += 1
        elif ch == ")":
            depth -= 1
        elif ch == separator and depth == 0:
            parts.append("".join(current).strip())
            current = []
            continue
        current.append(ch)

    tail = "".join(current).strip()
    if tail:
        parts.append(tail)
    return [p for p in parts if p]


def split_identifier_list(text: str) -> list[str]:
    """Parse ``a, "B", c`` into normalized identifiers."""
    return [normalize_identifier(part) for part in split_top_level(text)]
