"""Base session interface consumed by the introspection core."""

import asyncio
from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Dict, List, Optional, Sequence

from ..errors import CardinalityError

Row = Dict[str, Any]


class Transaction(ABC):
    """A read-only transactional scope presenting one consistent snapshot.

    Any number of tasks may await :meth:`query` concurrently; the round-trips
    themselves are serialized so that only one query is in flight on the
    underlying session at a time.
    """

    def __init__(self):
        self._lock = asyncio.Lock()

    @abstractmethod
    async def _run_query(self, sql: str, params: Sequence[Any]) -> List[Row]:
        """Execute one query on the underlying session and return all rows."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """End the scope without committing anything."""
        pass

    async def query(self, sql: str, params: Sequence[Any] = ()) -> List[Row]:
        """Run a query and return its rows in the order the server yields them.

        Args:
            sql: SQL text with ``%s`` placeholders
            params: Positional query parameters

        Returns:
            List of rows as column-name keyed dicts
        """
        async with self._lock:
            return await self._run_query(sql, params)

    async def query_one(self, sql: str, params: Sequence[Any] = ()) -> Row:
        """Run a query that must return exactly one row.

        Raises:
            CardinalityError: If zero or several rows come back
        """
        rows = await self.query(sql, params)
        if len(rows) != 1:
            raise CardinalityError("exactly one", len(rows), sql)
        return rows[0]

    async def query_optional(
        self, sql: str, params: Sequence[Any] = ()
    ) -> Optional[Row]:
        """Run a query that may return at most one row.

        Raises:
            CardinalityError: If several rows come back
        """
        rows = await self.query(sql, params)
        if len(rows) > 1:
            raise CardinalityError("at most one", len(rows), sql)
        if rows:
            return rows[0]
        return None


class Connection(ABC):
    """A connection checked out of a pool."""

    @abstractmethod
    async def begin_read_only(self) -> Transaction:
        """Open a read-only transaction on this connection.

        Raises:
            TransactionError: If the scope cannot be opened
        """
        pass

    @abstractmethod
    async def release(self) -> None:
        """Hand the connection back to its pool."""
        pass


class SessionProvider(ABC):
    """Supplies pooled connections and read-only transactional scopes."""

    @abstractmethod
    async def acquire(self) -> Connection:
        """Check a connection out of the pool.

        Raises:
            ConnectionError: On pool exhaustion, timeout or unreachable server
        """
        pass

    @asynccontextmanager
    async def read_only_session(self) -> AsyncIterator[Transaction]:
        """Yield one read-only transaction on one pooled connection.

        The transaction is closed and the connection released exactly once,
        whether the body succeeds or fails.
        """
        connection = await self.acquire()
        try:
            transaction = await connection.begin_read_only()
            try:
                yield transaction
            finally:
                await transaction.close()
        finally:
            await connection.release()

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"
