"""Catalog reader issuing fixed queries against pg_catalog."""

from dataclasses import dataclass
from typing import Any, List, Optional

from ..errors import CatalogQueryError, NotFoundError
from ..session.base import Row, Transaction
from .model import Column

CURRENT_DATABASE_QUERY = """
    SELECT current_database() AS name
"""

SHARED_COMMENT_QUERY = """
    SELECT d.description
    FROM pg_catalog.pg_shdescription d
    JOIN pg_catalog.pg_database db ON d.objoid = db.oid
    WHERE d.classoid = 'pg_catalog.pg_database'::regclass
      AND db.datname = %s
"""

SCHEMA_OID_QUERY = """
    SELECT oid::int AS oid
    FROM pg_catalog.pg_namespace
    WHERE nspname = %s
"""

# Ordinary tables and views only; catalog order is kept.
RELATIONS_QUERY = """
    SELECT oid::int AS oid, relname
    FROM pg_catalog.pg_class
    WHERE relnamespace = %s::oid
      AND relkind = ANY (ARRAY['r', 'v'])
"""

COLUMNS_QUERY = """
    SELECT attname, atttypid::int AS atttypid
    FROM pg_catalog.pg_attribute
    WHERE attrelid = %s::oid
      AND attnum >= 1
      AND NOT attisdropped
    ORDER BY attnum
"""


@dataclass(frozen=True)
class RelationRef:
    """A relation listed in a schema, before its columns are read."""

    oid: int
    name: str


def _field(row: Row, key: str) -> Any:
    try:
        return row[key]
    except KeyError:
        raise CatalogQueryError(
            f"Catalog response is missing column '{key}' (got {sorted(row)})"
        ) from None


class CatalogReader:
    """Reads schemas, relations and columns through one transaction."""

    def __init__(self, transaction: Transaction):
        self.transaction = transaction

    async def current_database_name(self) -> str:
        row = await self.transaction.query_one(CURRENT_DATABASE_QUERY)
        return _field(row, "name")

    async def shared_comment(self, database_name: str) -> Optional[str]:
        """Get the shared comment attached to a database, if any."""
        row = await self.transaction.query_optional(
            SHARED_COMMENT_QUERY, (database_name,)
        )
        if row is None:
            return None
        return _field(row, "description")

    async def resolve_schema_oid(self, name: str) -> int:
        """Resolve a schema name to its object id.

        Raises:
            NotFoundError: If no schema has that exact name
        """
        row = await self.transaction.query_optional(SCHEMA_OID_QUERY, (name,))
        if row is None:
            raise NotFoundError("schema", name)
        return _field(row, "oid")

    async def list_relations(self, schema_oid: int) -> List[RelationRef]:
        rows = await self.transaction.query(RELATIONS_QUERY, (schema_oid,))
        relations = []
        for row in rows:
            relations.append(RelationRef(oid=_field(row, "oid"), name=_field(row, "relname")))
        return relations

    async def list_columns(self, relation_oid: int) -> List[Column]:
        """List user columns of a relation in attribute number order."""
        rows = await self.transaction.query(COLUMNS_QUERY, (relation_oid,))
        columns = []
        for row in rows:
            columns.append(Column(name=_field(row, "attname"), type_id=_field(row, "atttypid")))
        return columns
