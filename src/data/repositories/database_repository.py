from __future__ import annotations

"""Database repository providing common database operations."""

from typing import Any, Dict, List, Optional
import logging
import time

from backend.connection_manager import DuckDBDataStore
from utils.query_builder import ParameterizedQuery, describe_query, validate_column_name


class DatabaseRepository:
    """Encapsulates data store access patterns shared by the repositories."""

    def __init__(self, store: DuckDBDataStore, logger_obj: Optional[logging.Logger] = None) -> None:
        self.store = store
        self.logger = logger_obj or logging.getLogger(__name__)

    # ----------------------- Query Execution -----------------------
    def fetch_all(self, query: ParameterizedQuery) -> List[Dict[str, Any]]:
        """Execute a query and return every row, with timing."""
        self.logger.debug("Running %s", describe_query(query))
        start = time.perf_counter()
        rows = self.store.execute(query.sql, query.params)
        duration = time.perf_counter() - start
        self.logger.info("Query returned %d row(s) in %.3f sec", len(rows), duration)
        return rows

    def fetch_one(self, query: ParameterizedQuery) -> Optional[Dict[str, Any]]:
        """Execute a query and return its first row, or None."""
        rows = self.fetch_all(query)
        return rows[0] if rows else None

    # --------------------------- Tables ---------------------------
    def table_exists(self, table_name: str) -> bool:
        """Check if a table exists in the database."""
        sql = "SELECT COUNT(*) AS n FROM duckdb_tables() WHERE table_name = $1"
        return self.store.execute(sql, [table_name])[0]["n"] > 0

    def get_table_count(self, table_name: str) -> int:
        """Return the number of rows in a table."""
        sql = f"SELECT COUNT(*) AS n FROM {validate_column_name(table_name)}"
        return int(self.store.execute(sql)[0]["n"])
