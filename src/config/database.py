"""Database configuration and connection settings."""

from typing import Dict, List, Tuple


class DatabaseConfig:
    """Database-specific configuration."""

    # Tables in dependency order (referenced tables first)
    TABLES = [
        "users",
        "properties",
        "reservations",
        "property_reviews",
    ]

    # Surrogate key sequences: table -> sequence name
    ID_SEQUENCES: Dict[str, str] = {
        "users": "users_id_seq",
        "properties": "properties_id_seq",
        "reservations": "reservations_id_seq",
        "property_reviews": "property_reviews_id_seq",
    }

    # Property columns returned by listing queries (id first)
    PROPERTY_COLUMNS: Tuple[str, ...] = (
        "id",
        "owner_id",
        "title",
        "description",
        "thumbnail_photo_url",
        "cover_photo_url",
        "cost_per_night",
        "parking_spaces",
        "number_of_bathrooms",
        "number_of_bedrooms",
        "country",
        "street",
        "city",
        "province",
        "post_code",
        "active",
    )

    RESERVATION_COLUMNS: Tuple[str, ...] = (
        "id",
        "start_date",
        "end_date",
        "property_id",
        "guest_id",
    )

    # Connection settings
    READ_ONLY_DEFAULT = False

    @classmethod
    def get_all_tables(cls) -> List[str]:
        """Get all table names in creation order."""
        return list(cls.TABLES)

    @classmethod
    def is_known_table(cls, table_name: str) -> bool:
        """Check if a table belongs to the LightBnB schema."""
        return table_name in cls.TABLES

    @classmethod
    def get_sequence(cls, table_name: str) -> str:
        """Get the id sequence name for a table."""
        return cls.ID_SEQUENCES.get(table_name, f"{table_name}_id_seq")
