"""
Database connection management with explicit lifecycle and leak monitoring.

The data store is opened once at process start, handed to repositories by
injection, and closed at shutdown. Each statement runs on its own cursor so a
single store can be shared between threads.
"""

from __future__ import annotations

import logging
import threading
import time
import weakref
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

import duckdb
import pandas as pd

from backend.error_handling import DataAccessError, ErrorCategory, categorize_error
from config.database import DatabaseConfig
from config.settings import Settings


class ConnectionMonitor:
    """Monitors database connection lifecycle to detect leaks."""

    def __init__(self):
        self._active_connections: dict[int, dict[str, Any]] = {}
        self._lock = threading.Lock()
        self._logger = logging.getLogger(__name__)

    def register_connection(
        self, conn: duckdb.DuckDBPyConnection, db_path: str
    ) -> None:
        """Register a new connection for monitoring."""
        with self._lock:
            conn_id = id(conn)
            self._active_connections[conn_id] = {
                "db_path": db_path,
                "created_at": time.time(),
                "thread_id": threading.get_ident(),
                "weakref": weakref.ref(conn, self._connection_finalized),
            }
            self._logger.debug(f"Registered connection {conn_id} to {db_path}")

    def unregister_connection(self, conn: duckdb.DuckDBPyConnection) -> None:
        """Unregister a connection when properly closed."""
        with self._lock:
            conn_id = id(conn)
            if conn_id in self._active_connections:
                db_path = self._active_connections[conn_id]["db_path"]
                del self._active_connections[conn_id]
                self._logger.debug(f"Unregistered connection {conn_id} to {db_path}")

    def _connection_finalized(self, weakref_obj) -> None:
        """Called when a connection is garbage collected without proper cleanup."""
        with self._lock:
            for conn_id, info in list(self._active_connections.items()):
                if info["weakref"] is weakref_obj:
                    self._logger.warning(
                        f"Connection {conn_id} to {info['db_path']} was garbage collected without explicit close()"
                    )
                    del self._active_connections[conn_id]
                    break

    def get_active_connections(self) -> dict[int, dict[str, Any]]:
        """Get information about currently active connections."""
        with self._lock:
            return dict(self._active_connections)


# Global connection monitor instance
_connection_monitor = ConnectionMonitor()


class DuckDBDataStore:
    """DuckDB-backed data store: ``(query, params) -> rows``.

    Example:
        with DuckDBDataStore(":memory:") as store:
            rows = store.execute("SELECT * FROM users WHERE id = $1", [1])
    """

    def __init__(
        self,
        db_path: Union[str, Path] = Settings.IN_MEMORY_DB,
        read_only: bool = DatabaseConfig.READ_ONLY_DEFAULT,
        logger_obj: Optional[logging.Logger] = None,
        monitor: Optional[ConnectionMonitor] = None,
    ):
        self.db_path = Settings.IN_MEMORY_DB if Settings.is_in_memory(db_path) else Path(db_path)
        self.read_only = read_only
        self.logger = logger_obj or logging.getLogger(__name__)
        self._monitor = monitor or _connection_monitor
        self._connection: Optional[duckdb.DuckDBPyConnection] = None
        self._lock = threading.Lock()

    @property
    def is_open(self) -> bool:
        return self._connection is not None

    def open(self) -> "DuckDBDataStore":
        """Acquire the underlying connection. Opening an open store is a no-op."""
        with self._lock:
            if self._connection is not None:
                return self

            if isinstance(self.db_path, Path):
                if not self.db_path.exists() and not self.read_only:
                    self.logger.info(f"Database {self.db_path} does not exist. It will be created.")
                    self.db_path.parent.mkdir(parents=True, exist_ok=True)
                database = self.db_path.as_posix()
            else:
                database = self.db_path

            try:
                conn = duckdb.connect(database=database, read_only=self.read_only)
            except duckdb.Error as e:
                self.logger.error(f"Error connecting to database at {self.db_path}: {e}", exc_info=True)
                raise DataAccessError(
                    f"Could not open database at {self.db_path}: {e}", ErrorCategory.CONNECTION
                ) from e

            self._monitor.register_connection(conn, str(self.db_path))
            self._connection = conn
            self.logger.debug(f"Successfully connected to DuckDB at {self.db_path} (read_only={self.read_only})")
            return self

    def close(self) -> None:
        """Release the underlying connection. Closing a closed store is a no-op."""
        with self._lock:
            if self._connection is None:
                return
            conn, self._connection = self._connection, None
            self._monitor.unregister_connection(conn)
            conn.close()
            self.logger.debug(f"Connection to {self.db_path} closed successfully")

    def __enter__(self) -> "DuckDBDataStore":
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _cursor(self, query: str, params: Optional[Sequence[Any]]) -> duckdb.DuckDBPyConnection:
        with self._lock:
            if self._connection is None:
                raise DataAccessError("Data store is not open", ErrorCategory.CONNECTION, query, params)
            return self._connection.cursor()

    def _fail(self, error: Exception, query: str, params: Optional[Sequence[Any]]) -> DataAccessError:
        query_info = f"Query: {query}"
        if params:
            query_info += f"\nParams: {list(params)}"
        self.logger.error(f"Query execution error: {error}\n{query_info}", exc_info=True)
        return DataAccessError(str(error), categorize_error(error), query, params)

    def execute(self, query: str, params: Optional[Sequence[Any]] = None) -> List[Dict[str, Any]]:
        """
        Execute a statement and return its rows as column-name mappings.

        Args:
            query: SQL with ``$N`` placeholders
            params: Values for the placeholders, in order

        Returns:
            List of row dicts; empty for statements that return no result set

        Raises:
            DataAccessError: If the store is closed or the statement fails
        """
        cursor = self._cursor(query, params)
        try:
            if params:
                self.logger.debug(f"Executing query: {query[:200]}... with params: {list(params)}")
                cursor.execute(query, list(params))
            else:
                self.logger.debug(f"Executing query: {query[:200]}...")
                cursor.execute(query)

            if cursor.description is None:
                return []
            columns = [desc[0] for desc in cursor.description]
            return [dict(zip(columns, row)) for row in cursor.fetchall()]
        except duckdb.Error as e:
            raise self._fail(e, query, params) from e
        finally:
            cursor.close()

    def fetch_df(self, query: str, params: Optional[Sequence[Any]] = None) -> pd.DataFrame:
        """Execute a query and return the result as a DataFrame."""
        cursor = self._cursor(query, params)
        try:
            if params:
                return cursor.execute(query, list(params)).df()
            return cursor.execute(query).df()
        except duckdb.Error as e:
            raise self._fail(e, query, params) from e
        finally:
            cursor.close()

    def insert_dataframe(self, table_name: str, df: pd.DataFrame, columns: Sequence[str]) -> int:
        """Insert the given DataFrame columns into a table; returns rows inserted."""
        if df.empty:
            return 0

        column_list = ", ".join(f'"{c}"' for c in columns)
        query = f'INSERT INTO "{table_name}" ({column_list}) SELECT {column_list} FROM incoming_df'
        cursor = self._cursor(query, None)
        try:
            cursor.register("incoming_df", df)
            cursor.execute(query)
            cursor.unregister("incoming_df")
            return len(df)
        except duckdb.Error as e:
            raise self._fail(e, query, None) from e
        finally:
            cursor.close()


def get_connection_stats() -> dict[str, Any]:
    """Get current connection monitoring statistics."""
    active_conns = _connection_monitor.get_active_connections()
    return {"active_count": len(active_conns), "connections": active_conns}
