"""PostgreSQL session provider implementation."""

import asyncio
import logging
from typing import Any, Dict, List, Sequence

import psycopg2
from psycopg2 import pool
from psycopg2.extensions import ISOLATION_LEVEL_REPEATABLE_READ
from psycopg2.extras import RealDictCursor

from ..errors import CatalogQueryError, ConnectionError, TransactionError
from .base import Connection, Row, SessionProvider, Transaction

logger = logging.getLogger(__name__)


class PostgreSQLTransaction(Transaction):
    """Read-only REPEATABLE READ transaction on a psycopg2 connection.

    psycopg2 is blocking, so every round-trip runs in a worker thread while
    the base class keeps them one at a time.
    """

    def __init__(self, conn, name: str):
        super().__init__()
        self._conn = conn
        self._name = name
        self._closed = False

    async def _run_query(self, sql: str, params: Sequence[Any]) -> List[Row]:
        if self._closed:
            raise CatalogQueryError(f"Transaction on {self._name} is closed")
        future = asyncio.ensure_future(asyncio.to_thread(self._execute, sql, params))
        try:
            return await asyncio.shield(future)
        except asyncio.CancelledError:
            # The worker thread keeps running; hold the session until it returns.
            await asyncio.wait([future])
            if not future.cancelled():
                future.exception()
            raise

    def _execute(self, sql: str, params: Sequence[Any]) -> List[Row]:
        try:
            with self._conn.cursor(cursor_factory=RealDictCursor) as cursor:
                logger.debug(f"Executing catalog query on {self._name}: {sql.strip()[:100]}...")
                cursor.execute(sql, tuple(params))
                rows = []
                for row in cursor.fetchall():
                    rows.append(dict(row))
                return rows
        except psycopg2.Error as e:
            logger.error(f"Catalog query failed on {self._name}: {e}")
            raise CatalogQueryError(f"Catalog query failed: {e}") from e

    async def close(self) -> None:
        """Roll back and restore the connection's default session settings."""
        if self._closed:
            return
        self._closed = True
        async with self._lock:
            await asyncio.to_thread(self._reset)

    def _reset(self) -> None:
        try:
            self._conn.rollback()
            self._conn.set_session(isolation_level="DEFAULT", readonly="DEFAULT")
        except psycopg2.Error as e:
            logger.warning(f"Could not reset session on {self._name}: {e}")


class PostgreSQLConnection(Connection):
    """A connection checked out of a :class:`PostgreSQLSessionProvider` pool."""

    def __init__(self, provider: "PostgreSQLSessionProvider", conn):
        self._provider = provider
        self._conn = conn
        self._released = False

    async def begin_read_only(self) -> Transaction:
        await asyncio.to_thread(self._configure_read_only)
        return PostgreSQLTransaction(self._conn, self._provider.name)

    def _configure_read_only(self) -> None:
        try:
            self._conn.set_session(
                isolation_level=ISOLATION_LEVEL_REPEATABLE_READ,
                readonly=True,
                autocommit=False,
            )
        except psycopg2.Error as e:
            logger.error(f"Failed to open read-only transaction on {self._provider.name}: {e}")
            raise TransactionError(f"Could not open read-only transaction: {e}") from e

    async def release(self) -> None:
        if self._released:
            return
        self._released = True
        self._provider._return_connection(self._conn)


class PostgreSQLSessionProvider(SessionProvider):
    """PostgreSQL session provider with connection pooling."""

    def __init__(self, config: Dict[str, Any], name: str = "postgresql"):
        """Initialize PostgreSQL session provider.

        Config should include:
            - host: Database host
            - port: Database port (default: 5432)
            - database: Database name
            - user: Username
            - password: Password
            - min_connections: Minimum connections in pool (default: 1)
            - max_connections: Maximum connections in pool (default: 5)
            - connect_timeout: Seconds to wait for the server (optional)
        """
        self.name = name
        self.config = config
        self._pool = None
        self._min_connections = config.get("min_connections", 1)
        self._max_connections = config.get("max_connections", 5)

    def connect(self) -> None:
        """Establish connection pool to PostgreSQL."""
        options = {
            "host": self.config["host"],
            "port": self.config.get("port", 5432),
            "database": self.config["database"],
            "user": self.config["user"],
            "password": self.config.get("password"),
        }
        if self.config.get("connect_timeout") is not None:
            options["connect_timeout"] = self.config["connect_timeout"]
        try:
            logger.info(f"Connecting to PostgreSQL database '{self.config['database']}' at {self.config['host']}")
            self._pool = pool.ThreadedConnectionPool(
                self._min_connections,
                self._max_connections,
                **options,
            )
            logger.info(f"Successfully connected to PostgreSQL: {self.name}")
        except psycopg2.Error as e:
            logger.error(f"Failed to connect to PostgreSQL {self.name}: {e}")
            raise ConnectionError(f"PostgreSQL connection failed: {e}") from e

    def disconnect(self) -> None:
        """Close all connections in the pool."""
        if self._pool:
            self._pool.closeall()
            logger.info(f"Disconnected from PostgreSQL: {self.name}")
            self._pool = None

    def is_connected(self) -> bool:
        return self._pool is not None

    async def acquire(self) -> Connection:
        conn = await asyncio.to_thread(self._get_connection)
        return PostgreSQLConnection(self, conn)

    def _get_connection(self):
        """Get a connection from the pool."""
        if not self._pool:
            raise ConnectionError(f"Not connected to {self.name}")
        try:
            return self._pool.getconn()
        except pool.PoolError as e:
            logger.error(f"Connection pool exhausted on {self.name}: {e}")
            raise ConnectionError(f"No connection available: {e}") from e
        except psycopg2.Error as e:
            logger.error(f"Failed to acquire connection on {self.name}: {e}")
            raise ConnectionError(f"PostgreSQL connection failed: {e}") from e

    def _return_connection(self, conn) -> None:
        """Return a connection to the pool."""
        if self._pool:
            self._pool.putconn(conn)

    def __enter__(self):
        """Context manager entry."""
        self.connect()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.disconnect()
        return False

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(name={self.name})"
