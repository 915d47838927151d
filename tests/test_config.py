"""
Tests for configuration modules functionality.
"""
import logging
from pathlib import Path

import pytest

from config.database import DatabaseConfig
from config.settings import Settings
from utils.logger_setup import setup_logging


class TestSettings:
    """Test Settings configuration class."""

    def test_project_root_detection(self):
        project_root = Settings.PROJECT_ROOT

        assert isinstance(project_root, Path)
        assert (project_root / "src").exists()

    def test_default_paths(self):
        assert Settings.DATA_DIR.name == "data"
        assert Settings.LOGS_DIR.name == "logs"
        assert Settings.DEFAULT_DB_PATH.parent == Settings.DATA_DIR

    def test_get_db_path_default(self, monkeypatch):
        monkeypatch.delenv(Settings.DB_PATH_ENV_VAR, raising=False)
        assert Settings.get_db_path() == Settings.DEFAULT_DB_PATH

    def test_get_db_path_env_override(self, monkeypatch, tmp_path):
        monkeypatch.setenv(Settings.DB_PATH_ENV_VAR, str(tmp_path / "env.duckdb"))
        assert Settings.get_db_path() == tmp_path / "env.duckdb"

    def test_get_db_path_argument_wins_over_env(self, monkeypatch, tmp_path):
        monkeypatch.setenv(Settings.DB_PATH_ENV_VAR, str(tmp_path / "env.duckdb"))
        assert Settings.get_db_path("/custom/path/test.db") == Path("/custom/path/test.db")

    def test_get_logs_dir_env_override(self, tmp_path):
        # isolated_log_dir sets the variable for every test
        assert Settings.get_logs_dir() == tmp_path / "logs"

    def test_is_in_memory(self):
        assert Settings.is_in_memory(":memory:")
        assert not Settings.is_in_memory(Path("data/lightbnb.duckdb"))

    def test_default_result_limit(self):
        assert Settings.DEFAULT_RESULT_LIMIT == 10


class TestDatabaseConfig:
    """Test DatabaseConfig configuration class."""

    def test_tables_in_dependency_order(self):
        assert DatabaseConfig.get_all_tables() == ["users", "properties", "reservations", "property_reviews"]

    def test_get_all_tables_returns_copy(self):
        tables = DatabaseConfig.get_all_tables()
        tables.append("bookings")
        assert "bookings" not in DatabaseConfig.TABLES

    def test_is_known_table(self):
        assert DatabaseConfig.is_known_table("properties")
        assert not DatabaseConfig.is_known_table("bookings")

    def test_get_sequence(self):
        assert DatabaseConfig.get_sequence("users") == "users_id_seq"
        assert DatabaseConfig.get_sequence("other") == "other_id_seq"

    def test_property_columns_start_with_id(self):
        assert DatabaseConfig.PROPERTY_COLUMNS[0] == "id"
        assert "cost_per_night" in DatabaseConfig.PROPERTY_COLUMNS


class TestLoggerSetup:

    def test_writes_rotating_log_file(self, tmp_path):
        logger = setup_logging("lightbnb_test_file", log_dir=tmp_path, console_output=False)
        logger.info("hello from test")
        for handler in logger.handlers:
            handler.flush()

        log_file = tmp_path / "lightbnb_test_file.log"
        assert log_file.exists()
        assert "hello from test" in log_file.read_text(encoding="utf-8")

    def test_configures_once(self, tmp_path):
        first = setup_logging("lightbnb_test_once", log_dir=tmp_path, console_output=False)
        second = setup_logging("lightbnb_test_once", log_level="DEBUG", log_dir=tmp_path, console_output=False)

        assert first is second
        assert len(second.handlers) == 1
        assert second.level == logging.DEBUG

    def test_later_call_adds_requested_console_handler(self, tmp_path):
        setup_logging("lightbnb_test_console", log_dir=tmp_path, console_output=False)
        logger = setup_logging("lightbnb_test_console", log_dir=tmp_path, console_output=True)
        setup_logging("lightbnb_test_console", log_dir=tmp_path, console_output=True)

        console = [h for h in logger.handlers if type(h) is logging.StreamHandler]
        assert len(console) == 1
        assert len(logger.handlers) == 2

    def test_console_handler_replaces_null_handler(self):
        setup_logging("lightbnb_test_null_console", console_output=False, file_output=False)
        logger = setup_logging("lightbnb_test_null_console", file_output=False)

        assert not any(isinstance(h, logging.NullHandler) for h in logger.handlers)
        assert [type(h) for h in logger.handlers] == [logging.StreamHandler]

    def test_no_outputs_gets_null_handler(self):
        logger = setup_logging("lightbnb_test_null", console_output=False, file_output=False)
        assert isinstance(logger.handlers[0], logging.NullHandler)

    def test_unknown_level_raises(self):
        with pytest.raises(ValueError, match="Unknown log level"):
            setup_logging("lightbnb_test_bad_level", log_level="LOUD")
