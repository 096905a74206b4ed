"""Selection of the schemas to introspect.

The list of schemas is read from the shared comment on the current database
(``COMMENT ON DATABASE app IS 'public,billing'``). This is a private
convention of this package, not a PostgreSQL metadata standard:

- the comment is split on every literal comma;
- names are not trimmed and commas cannot be escaped;
- order is kept and duplicates are not removed;
- without a comment, only the default schema (``public``) is selected.

A name with stray whitespace is passed through as is and later fails to
resolve.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from .reader import CatalogReader

logger = logging.getLogger(__name__)

DEFAULT_SCHEMA = "public"
SCHEMA_SEPARATOR = ","


@dataclass(frozen=True)
class SchemaSelectionPolicy:
    """Ordered schema names to introspect and where they came from."""

    schema_names: Tuple[str, ...]
    source: str

    @classmethod
    def from_comment(
        cls, comment: Optional[str], default_schema: str = DEFAULT_SCHEMA
    ) -> "SchemaSelectionPolicy":
        if comment is None:
            return cls(schema_names=(default_schema,), source="default")
        return cls(schema_names=tuple(comment.split(SCHEMA_SEPARATOR)), source="comment")

    @classmethod
    async def load(
        cls,
        reader: CatalogReader,
        database_name: str,
        default_schema: str = DEFAULT_SCHEMA,
    ) -> "SchemaSelectionPolicy":
        """Read the database comment and derive the policy from it."""
        comment = await reader.shared_comment(database_name)
        policy = cls.from_comment(comment, default_schema)
        logger.debug(
            f"Schema selection for {database_name} from {policy.source}: {list(policy.schema_names)}"
        )
        return policy


async def select_schemas(
    reader: CatalogReader, database_name: str, default_schema: str = DEFAULT_SCHEMA
) -> List[str]:
    """Get the ordered list of schema names to introspect."""
    policy = await SchemaSelectionPolicy.load(reader, database_name, default_schema)
    return list(policy.schema_names)
