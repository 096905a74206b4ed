"""Introspection tree builder.

Walks Database -> Schema -> Relation -> Column inside one read-only
transaction. Each level is a fetch function that takes the shared reader and
returns an owned, immutable value; siblings are composed with
:func:`fan_out`.
"""

import time
from typing import Optional

from ..config import IntrospectionConfig
from ..session.base import SessionProvider
from ..utils.logging import get_contextual_logger, get_logger
from .fanout import fan_out
from .model import Database, Introspection, Relation, Schema
from .reader import CatalogReader, RelationRef
from .selection import SchemaSelectionPolicy

logger = get_logger(__name__)


async def build(
    session_provider: SessionProvider, config: Optional[IntrospectionConfig] = None
) -> Introspection:
    """Introspect the database behind ``session_provider``.

    Args:
        session_provider: Source of the single read-only session
        config: Introspection settings, defaults if omitted

    Returns:
        Fully populated introspection tree

    Raises:
        IntrospectionError: The first failure met anywhere in the traversal;
            no partial tree is returned
    """
    if config is None:
        config = IntrospectionConfig()

    started = time.perf_counter()
    async with session_provider.read_only_session() as transaction:
        reader = CatalogReader(transaction)
        database = await fetch_database(reader, config)

    elapsed_ms = (time.perf_counter() - started) * 1000
    log = get_contextual_logger(__name__, {"database": database.name})
    log.info(
        f"Introspected {len(database.schemas)} schemas, "
        f"{len(database.flatten_relations())} relations in {elapsed_ms:.2f} ms"
    )
    return Introspection(database=database)


async def fetch_database(reader: CatalogReader, config: IntrospectionConfig) -> Database:
    name = await reader.current_database_name()
    policy = await SchemaSelectionPolicy.load(reader, name, config.default_schema)
    logger.debug(f"Introspecting database {name}, schemas {list(policy.schema_names)}")

    schemas = await fan_out(
        [_schema_fetch(reader, schema_name, config) for schema_name in policy.schema_names],
        concurrent=config.concurrent_fetch,
    )
    return Database(name=name, schemas=tuple(schemas))


async def fetch_schema(
    reader: CatalogReader, name: str, config: IntrospectionConfig
) -> Schema:
    """Resolve a schema by name and read all of its tables and views."""
    oid = await reader.resolve_schema_oid(name)
    refs = await reader.list_relations(oid)
    log = get_contextual_logger(__name__, {"schema": name, "schema_oid": oid})
    log.debug(f"Schema {name} has {len(refs)} tables and views")

    relations = await fan_out(
        [_relation_fetch(reader, ref) for ref in refs],
        concurrent=config.concurrent_fetch,
    )
    return Schema(name=name, relations=tuple(relations))


async def fetch_relation(reader: CatalogReader, ref: RelationRef) -> Relation:
    columns = await reader.list_columns(ref.oid)
    log = get_contextual_logger(__name__, {"relation": ref.name, "relation_oid": ref.oid})
    log.debug(f"Relation {ref.name} has {len(columns)} columns")
    return Relation(name=ref.name, columns=tuple(columns))


def _schema_fetch(reader, name, config):
    return lambda: fetch_schema(reader, name, config)


def _relation_fetch(reader, ref):
    return lambda: fetch_relation(reader, ref)
