"""DuckDB I/O utilities for loading LightBnB fixture data."""

from pathlib import Path
from typing import List, Optional
import logging
import pandas as pd

from backend.connection_manager import DuckDBDataStore
from config.database import DatabaseConfig


class DuckDBIO:
    """Utilities for DuckDB input/output operations on an open data store."""

    def __init__(self, store: DuckDBDataStore, logger_obj: Optional[logging.Logger] = None):
        self.store = store
        self.logger = logger_obj or logging.getLogger(__name__)

    def get_table_columns(self, table_name: str) -> List[str]:
        """Get a table's column names in declaration order."""
        rows = self.store.execute(
            "SELECT column_name FROM information_schema.columns "
            "WHERE table_name = $1 ORDER BY ordinal_position",
            [table_name],
        )
        return [row["column_name"] for row in rows]

    def list_tables(self) -> List[str]:
        """List all tables in the database."""
        rows = self.store.execute(
            "SELECT table_name FROM duckdb_tables() WHERE schema_name = 'main' ORDER BY table_name"
        )
        return [row["table_name"] for row in rows]

    def read_json_fixture(self, json_path: Path) -> pd.DataFrame:
        """
        Read a LightBnB JSON fixture: an object of records keyed by id.

        Records are returned in key order with the ``id`` column removed, so the
        table's id sequence assigns ids on insert.
        """
        df = pd.read_json(json_path, orient="index", dtype=False, convert_dates=False)
        df = df.sort_index()
        if "id" in df.columns:
            df = df.drop(columns=["id"])
        return df.reset_index(drop=True)

    def import_json_fixture(self, table_name: str, json_path: Path) -> int:
        """
        Import a JSON fixture file into a table.

        Fixture keys that are not columns of the table are ignored.

        Returns:
            Number of rows inserted
        """
        if not DatabaseConfig.is_known_table(table_name):
            raise ValueError(f"Unknown table: {table_name}")

        json_path = Path(json_path)
        df = self.read_json_fixture(json_path)
        table_columns = set(self.get_table_columns(table_name))
        columns = [c for c in df.columns if c in table_columns]
        skipped = [c for c in df.columns if c not in table_columns]
        if skipped:
            self.logger.debug(f"Ignoring fixture keys not in {table_name}: {skipped}")

        inserted = self.store.insert_dataframe(table_name, df[columns], columns)
        self.logger.info(f"Imported {inserted} rows from {json_path} into {table_name}")
        return inserted
