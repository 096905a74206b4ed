"""Error taxonomy for schema introspection.

Every error raised by :func:`schema_introspection.catalog.build` derives from
:class:`IntrospectionError`, so callers can catch one family and still branch
on the category.
"""

import builtins
from typing import Optional


class IntrospectionError(Exception):
    """Base class for all introspection failures."""


class ConnectionError(IntrospectionError, builtins.ConnectionError):
    """A pooled connection could not be acquired (exhaustion, timeout, refused)."""


class TransactionError(IntrospectionError):
    """The read-only transaction scope could not be opened."""


class CatalogQueryError(IntrospectionError):
    """A catalog query failed or returned rows of an unexpected shape."""


class NotFoundError(IntrospectionError):
    """A named catalog object does not exist."""

    def __init__(self, kind: str, name: str):
        self.kind = kind
        self.name = name
        super().__init__(f"{kind} {name!r} does not exist")


class CardinalityError(IntrospectionError):
    """A query expected to return exactly one row returned a different count."""

    def __init__(self, expected: str, actual: int, query: Optional[str] = None):
        self.expected = expected
        self.actual = actual
        self.query = query
        super().__init__(f"Expected {expected} row(s), got {actual}")
