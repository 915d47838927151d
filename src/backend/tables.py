"""Table definitions and metadata for the LightBnB database."""

import logging
from dataclasses import dataclass, field
from typing import List, Optional

from config.database import DatabaseConfig


@dataclass
class TableMetadata:
    """Metadata for a database table."""
    name: str
    description: str
    columns_ddl: str
    primary_key: str = "id"
    dependencies: List[str] = field(default_factory=list)

    @property
    def sequence(self) -> str:
        return DatabaseConfig.get_sequence(self.name)

    def create_sequence_sql(self) -> str:
        return f"CREATE SEQUENCE IF NOT EXISTS {self.sequence} START 1"

    def create_table_sql(self) -> str:
        return (
            f"CREATE TABLE IF NOT EXISTS {self.name} (\n"
            f"    {self.primary_key} INTEGER PRIMARY KEY DEFAULT nextval('{self.sequence}'),\n"
            f"{self.columns_ddl}\n"
            ")"
        )


class LightBnBTables:
    """Centralized table definitions and metadata."""

    USERS = TableMetadata(
        name="users",
        description="Registered guests and property owners",
        columns_ddl="""    name VARCHAR NOT NULL,
    email VARCHAR NOT NULL,
    password VARCHAR NOT NULL""",
    )

    PROPERTIES = TableMetadata(
        name="properties",
        description="Rental property listings",
        columns_ddl="""    owner_id INTEGER NOT NULL,
    title VARCHAR NOT NULL,
    description VARCHAR,
    thumbnail_photo_url VARCHAR NOT NULL,
    cover_photo_url VARCHAR NOT NULL,
    cost_per_night INTEGER NOT NULL DEFAULT 0,
    parking_spaces INTEGER NOT NULL DEFAULT 0,
    number_of_bathrooms INTEGER NOT NULL DEFAULT 0,
    number_of_bedrooms INTEGER NOT NULL DEFAULT 0,
    country VARCHAR NOT NULL,
    street VARCHAR NOT NULL,
    city VARCHAR NOT NULL,
    province VARCHAR NOT NULL,
    post_code VARCHAR NOT NULL,
    active BOOLEAN NOT NULL DEFAULT TRUE,
    FOREIGN KEY (owner_id) REFERENCES users (id)""",
        dependencies=["users"],
    )

    RESERVATIONS = TableMetadata(
        name="reservations",
        description="Guest bookings of a property",
        columns_ddl="""    start_date DATE NOT NULL,
    end_date DATE NOT NULL,
    property_id INTEGER NOT NULL,
    guest_id INTEGER NOT NULL,
    FOREIGN KEY (property_id) REFERENCES properties (id),
    FOREIGN KEY (guest_id) REFERENCES users (id)""",
        dependencies=["users", "properties"],
    )

    PROPERTY_REVIEWS = TableMetadata(
        name="property_reviews",
        description="Guest ratings (0-5) of a property",
        columns_ddl="""    guest_id INTEGER NOT NULL,
    property_id INTEGER NOT NULL,
    reservation_id INTEGER,
    rating SMALLINT NOT NULL DEFAULT 0 CHECK (rating >= 0 AND rating <= 5),
    message VARCHAR,
    FOREIGN KEY (guest_id) REFERENCES users (id),
    FOREIGN KEY (property_id) REFERENCES properties (id),
    FOREIGN KEY (reservation_id) REFERENCES reservations (id)""",
        dependencies=["users", "properties", "reservations"],
    )

    @classmethod
    def get_all_tables(cls) -> List[TableMetadata]:
        """Get all table definitions in creation order."""
        by_name = {
            t.name: t for t in (cls.USERS, cls.PROPERTIES, cls.RESERVATIONS, cls.PROPERTY_REVIEWS)
        }
        return [by_name[name] for name in DatabaseConfig.get_all_tables()]


def create_schema(store, logger_obj: Optional[logging.Logger] = None) -> List[str]:
    """
    Create the LightBnB sequences and tables if they do not exist.

    Args:
        store: An open data store
        logger_obj: Optional logger

    Returns:
        Table names in creation order

    Raises:
        ValueError: If a table is ordered before a table it references
    """
    logger = logger_obj or logging.getLogger(__name__)
    created = []
    for table in LightBnBTables.get_all_tables():
        missing = [dep for dep in table.dependencies if dep not in created]
        if missing:
            raise ValueError(f"Table {table.name} must be created after {', '.join(missing)}")
        store.execute(table.create_sequence_sql())
        store.execute(table.create_table_sql())
        created.append(table.name)
        logger.info(f"Ensured table {table.name} ({table.description})")
    return created
