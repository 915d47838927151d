"""Data layer modules: search models, SQL statements and repositories."""

from .models import FilterCriteria, NewProperty, NewUser
from .repositories.database_repository import DatabaseRepository
from .repositories.property_repository import PropertyRepository
from .repositories.reservation_repository import ReservationRepository
from .repositories.user_repository import UserRepository

__all__ = [
    "FilterCriteria",
    "NewProperty",
    "NewUser",
    "DatabaseRepository",
    "PropertyRepository",
    "ReservationRepository",
    "UserRepository",
]
