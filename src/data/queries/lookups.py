"""Fixed single-purpose lookup and insert statements."""

from __future__ import annotations

from typing import Any

from config.database import DatabaseConfig
from config.settings import Settings
from data.models import NewProperty, NewUser
from utils.query_builder import (
    FilterOperator,
    ParameterizedQuery,
    SecureQueryBuilder,
    build_insert_query,
    normalize_limit,
)

RESERVATIONS_BASE = f"""
SELECT {', '.join(f'reservations.{c}' for c in DatabaseConfig.RESERVATION_COLUMNS)},
    {', '.join(f'properties.{c}' for c in DatabaseConfig.PROPERTY_COLUMNS if c != 'id')},
    ratings.average_rating
FROM reservations
JOIN properties ON reservations.property_id = properties.id
LEFT JOIN (
    SELECT property_id, avg(rating) AS average_rating
    FROM property_reviews
    GROUP BY property_id
) AS ratings ON properties.id = ratings.property_id
"""


def user_by_email_query(email: str) -> ParameterizedQuery:
    return SecureQueryBuilder("SELECT * FROM users").where("email", FilterOperator.EQUALS, email).build()


def user_by_id_query(user_id: Any) -> ParameterizedQuery:
    return SecureQueryBuilder("SELECT * FROM users").where("id", FilterOperator.EQUALS, user_id).build()


def insert_user_query(user: NewUser) -> ParameterizedQuery:
    return build_insert_query("users", user.to_row())


def insert_property_query(new_property: NewProperty) -> ParameterizedQuery:
    return build_insert_query("properties", new_property.to_row())


def reservations_for_guest_query(guest_id: Any, limit: Any = Settings.DEFAULT_RESULT_LIMIT) -> ParameterizedQuery:
    """Reservations of one guest with property details, earliest stay first."""
    return (
        SecureQueryBuilder(RESERVATIONS_BASE)
        .where("reservations.guest_id", FilterOperator.EQUALS, guest_id)
        .order_by("reservations.start_date")
        .order_by("reservations.id")
        .limit(normalize_limit(limit, Settings.DEFAULT_RESULT_LIMIT))
        .build()
    )
