"""SQL statements for the LightBnB data layer."""

from .lookups import (
    insert_property_query,
    insert_user_query,
    reservations_for_guest_query,
    user_by_email_query,
    user_by_id_query,
)
from .property_search import build_property_search_query

__all__ = [
    "build_property_search_query",
    "insert_property_query",
    "insert_user_query",
    "reservations_for_guest_query",
    "user_by_email_query",
    "user_by_id_query",
]
