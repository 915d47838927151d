# tests/conftest.py
import os
import sys
from pathlib import Path
from unittest.mock import MagicMock

import pytest

# 1. Make sure `src/` is on the import path:
ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
sys.path.insert(0, os.path.join(ROOT, "src"))

from backend.connection_manager import DuckDBDataStore  # noqa: E402
from backend.tables import create_schema  # noqa: E402

FIXTURES_DIR = Path(__file__).parent / "fixtures"

SAMPLE_USERS = [
    ("Alice Owner", "alice@example.com", "password"),
    ("Bob Guest", "bob@example.com", "password"),
    ("Carol Guest", "carol@example.com", "password"),
]

# (title, city, cost_per_night); all owned by user 1
SAMPLE_PROPERTIES = [
    ("Cozy Loft", "Vancouver", 8000),
    ("Harbour View", "North Vancouver", 15000),
    ("Prairie Cabin", "Calgary", 5000),
    ("Lake House", "Toronto", 25000),
]

# (start_date, end_date, property_id, guest_id)
SAMPLE_RESERVATIONS = [
    ("2024-06-01", "2024-06-05", 1, 2),
    ("2023-01-10", "2023-01-12", 3, 2),
    ("2024-02-01", "2024-02-03", 2, 3),
]

# (guest_id, property_id, reservation_id, rating); Lake House has no reviews
SAMPLE_REVIEWS = [
    (2, 1, 1, 4),
    (3, 1, None, 5),
    (3, 2, 3, 3),
    (2, 3, 2, 5),
    (3, 3, None, 4),
]


@pytest.fixture(autouse=True)
def isolated_log_dir(tmp_path, monkeypatch):
    """Keep rotating log files out of the project tree."""
    monkeypatch.setenv("LIGHTBNB_LOG_DIR", str(tmp_path / "logs"))


@pytest.fixture
def store():
    """Provide an open in-memory data store with the LightBnB schema."""
    with DuckDBDataStore(":memory:") as data_store:
        create_schema(data_store)
        yield data_store


def seed_sample_data(data_store):
    for name, email, password in SAMPLE_USERS:
        data_store.execute(
            "INSERT INTO users (name, email, password) VALUES ($1, $2, $3)",
            [name, email, password],
        )
    for title, city, cost in SAMPLE_PROPERTIES:
        data_store.execute(
            """
            INSERT INTO properties (owner_id, title, description, thumbnail_photo_url, cover_photo_url,
                cost_per_night, parking_spaces, number_of_bathrooms, number_of_bedrooms,
                country, street, city, province, post_code)
            VALUES (1, $1, 'description', 'https://example.com/thumb.jpg', 'https://example.com/cover.jpg',
                $2, 1, 1, 2, 'Canada', '1 Main St', $3, 'BC', 'V0V 0V0')
            """,
            [title, cost, city],
        )
    for start, end, property_id, guest_id in SAMPLE_RESERVATIONS:
        data_store.execute(
            "INSERT INTO reservations (start_date, end_date, property_id, guest_id) "
            "VALUES (CAST($1 AS DATE), CAST($2 AS DATE), $3, $4)",
            [start, end, property_id, guest_id],
        )
    for guest_id, property_id, reservation_id, rating in SAMPLE_REVIEWS:
        data_store.execute(
            "INSERT INTO property_reviews (guest_id, property_id, reservation_id, rating, message) "
            "VALUES ($1, $2, $3, $4, 'review')",
            [guest_id, property_id, reservation_id, rating],
        )


@pytest.fixture
def seeded_store(store):
    """Provide a data store populated with users, properties, reservations and reviews."""
    seed_sample_data(store)
    return store


@pytest.fixture
def seeded_db_file(tmp_path):
    """Provide a DuckDB file populated with the sample data."""
    db_path = tmp_path / "lightbnb.duckdb"
    with DuckDBDataStore(db_path) as data_store:
        create_schema(data_store)
        seed_sample_data(data_store)
    return db_path


@pytest.fixture
def mock_logger():
    """Provide a mock logger with assertion helpers."""
    logger = MagicMock()

    # Track all log calls
    logger._calls = {
        "debug": [],
        "info": [],
        "warning": [],
        "error": [],
    }

    def make_log_method(level):
        def log_method(msg, *args, **kwargs):
            logger._calls[level].append(str(msg) % args if args else str(msg))

        return log_method

    logger.debug = make_log_method("debug")
    logger.info = make_log_method("info")
    logger.warning = make_log_method("warning")
    logger.error = make_log_method("error")

    # Helper to assert log messages
    def assert_logged(level, substring):
        messages = logger._calls.get(level, [])
        assert any(substring in msg for msg in messages), (
            f"'{substring}' not found in {level} logs: {messages}"
        )

    logger.assert_logged = assert_logged

    return logger
