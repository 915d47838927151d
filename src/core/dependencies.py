"""Dependency injection container for the application."""

from pathlib import Path
from typing import Optional, Union
import logging

from backend.connection_manager import DuckDBDataStore
from backend.duckdb_io import DuckDBIO
from config.settings import Settings
from data.repositories.property_repository import PropertyRepository
from data.repositories.reservation_repository import ReservationRepository
from data.repositories.user_repository import UserRepository
from utils.logger_setup import setup_logging


class DependencyContainer:
    """Owns the data store lifecycle and hands it to the repositories.

    The store is opened on first use and released by :meth:`close` (or on
    leaving a ``with`` block).
    """

    def __init__(
        self,
        db_path: Optional[Union[str, Path]] = None,
        logger_name: str = Settings.LOGGER_NAME,
        read_only: bool = False,
        log_level: Union[int, str] = logging.INFO,
        console_output: bool = True,
    ):
        self.db_path = Settings.get_db_path(db_path)
        self.read_only = read_only
        self.logger = setup_logging(logger_name, log_level=log_level, console_output=console_output)

        self._store: Optional[DuckDBDataStore] = None
        self._users: Optional[UserRepository] = None
        self._reservations: Optional[ReservationRepository] = None
        self._properties: Optional[PropertyRepository] = None

    @property
    def store(self) -> DuckDBDataStore:
        """Get or open the data store."""
        if self._store is None:
            self._store = DuckDBDataStore(self.db_path, read_only=self.read_only, logger_obj=self.logger)
        return self._store.open()

    @property
    def users(self) -> UserRepository:
        if self._users is None:
            self._users = UserRepository(self.store, self.logger)
        return self._users

    @property
    def reservations(self) -> ReservationRepository:
        if self._reservations is None:
            self._reservations = ReservationRepository(self.store, self.logger)
        return self._reservations

    @property
    def properties(self) -> PropertyRepository:
        if self._properties is None:
            self._properties = PropertyRepository(self.store, self.logger)
        return self._properties

    @property
    def duckdb_io(self) -> DuckDBIO:
        return DuckDBIO(self.store, self.logger)

    def get_logger(self, name: Optional[str] = None) -> logging.Logger:
        """Get a logger instance."""
        if name:
            return logging.getLogger(name)
        return self.logger

    def close(self) -> None:
        """Release the data store; repositories must not be used afterwards."""
        if self._store is not None:
            self._store.close()
        self._store = None
        self._users = self._reservations = self._properties = None

    def __enter__(self) -> "DependencyContainer":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
