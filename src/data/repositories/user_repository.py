"""User lookups and registration."""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional, Union

from data.models import NewUser
from data.queries import insert_user_query, user_by_email_query, user_by_id_query
from data.repositories.database_repository import DatabaseRepository


class UserRepository(DatabaseRepository):
    """Reads and creates rows in ``users``."""

    def get_user_with_email(self, email: str) -> Optional[Dict[str, Any]]:
        """Get a single user given their email, or None."""
        return self.fetch_one(user_by_email_query(email))

    def get_user_with_id(self, user_id: Any) -> Optional[Dict[str, Any]]:
        """Get a single user given their id, or None."""
        return self.fetch_one(user_by_id_query(user_id))

    def add_user(self, user: Union[NewUser, Mapping[str, Any]]) -> Dict[str, Any]:
        """Add a new user and return the stored row, including its id."""
        if not isinstance(user, NewUser):
            user = NewUser.from_mapping(user)
        row = self.fetch_one(insert_user_query(user))
        self.logger.info(f"Added user {row['id']}")
        return row
