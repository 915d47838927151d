"""Application-wide settings and configuration."""

import os
from pathlib import Path
from typing import Optional, Union


class Settings:
    """Centralized application settings."""

    # Project paths
    PROJECT_ROOT = Path(__file__).parent.parent.parent
    DATA_DIR = PROJECT_ROOT / "data"
    LOGS_DIR = PROJECT_ROOT / "logs"

    # Default database settings
    DEFAULT_DB_PATH = DATA_DIR / "lightbnb.duckdb"
    IN_MEMORY_DB = ":memory:"

    # Environment overrides
    DB_PATH_ENV_VAR = "LIGHTBNB_DB_PATH"
    LOGS_DIR_ENV_VAR = "LIGHTBNB_LOG_DIR"

    # Query settings
    DEFAULT_RESULT_LIMIT = 10

    # Logging
    LOGGER_NAME = "lightbnb"

    @classmethod
    def get_db_path(cls, custom_path: Optional[Union[str, Path]] = None) -> Path:
        """Get the database path, with optional override.

        Precedence: explicit argument, then ``LIGHTBNB_DB_PATH``, then the default.
        """
        if custom_path:
            return Path(custom_path)
        env_path = os.getenv(cls.DB_PATH_ENV_VAR, "").strip()
        if env_path:
            return Path(env_path)
        return cls.DEFAULT_DB_PATH

    @classmethod
    def get_logs_dir(cls) -> Path:
        """Get the log directory, honouring ``LIGHTBNB_LOG_DIR``."""
        env_dir = os.getenv(cls.LOGS_DIR_ENV_VAR, "").strip()
        return Path(env_dir) if env_dir else cls.LOGS_DIR

    @classmethod
    def is_in_memory(cls, db_path: Union[str, Path]) -> bool:
        """Check whether a database path refers to an in-memory database."""
        return str(db_path) == cls.IN_MEMORY_DB
