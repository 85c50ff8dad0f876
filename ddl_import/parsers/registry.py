"""Per-parse table registry shared by the extractors."""

import uuid
from collections.abc import Callable, Iterator

from ddl_import.models import Table, get_qualified_table_name


IdFactory = Callable[[], str]


def generate_id() -> str:
    return uuid.uuid4().hex


class TableRegistry:
    """Tables discovered during one parse, with case-insensitive aliases.

    Owned by a single parse call and passed explicitly to every extractor.
    """

    def __init__(self, id_factory: IdFactory | None = None):
        self._id_factory = id_factory or generate_id
        self._tables: list[Table] = []
        self._aliases: dict[str, str] = {}

    def __iter__(self) -> Iterator[Table]:
        return iter(self._tables)

    def __len__(self) -> int:
        return len(self._tables)

    @property
    def tables(self) -> list[Table]:
        return list(self._tables)

    def create_table(self, name: str, schema: str | None = None) -> Table:
        """Mint an id for a new table and register it under both aliases."""
        table = Table(
            id=self._id_factory(),
            name=name,
            schema=schema or None,
            order=len(self._tables),
        )
        self._tables.append(table)
        self._aliases[get_qualified_table_name(table).lower()] = table.id
        self._aliases[name.lower()] = table.id
        return table

    def aliases(self) -> dict[str, str]:
        """Lowercased ``schema.name`` and ``name`` keys mapped to table ids."""
        return dict(self._aliases)

    def get(self, table_id: str) -> Table | None:
        return next((t for t in self._tables if t.id == table_id), None)

    def lookup(self, name: str, schema: str | None = None) -> Table | None:
        """Find a table by name, honouring the schema when one is given.

        Without a schema, a schema-less table wins over same-named tables
        in other schemas.
        """
        wanted = name.lower()
        candidates = [t for t in self._tables if t.name.lower() == wanted]

        if schema:
            wanted_schema = schema.lower()
            return next(
                (t for t in candidates if (t.schema or "").lower() == wanted_schema),
                None,
            )

        unqualified = next((t for t in candidates if not t.schema), None)
        return unqualified or next(iter(candidates), None)
