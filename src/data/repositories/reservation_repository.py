"""Reservation lookups."""

from __future__ import annotations

from typing import Any, Dict, List

from config.settings import Settings
from data.queries import reservations_for_guest_query
from data.repositories.database_repository import DatabaseRepository


class ReservationRepository(DatabaseRepository):

    def get_all_reservations(self, guest_id: Any, limit: Any = Settings.DEFAULT_RESULT_LIMIT) -> List[Dict[str, Any]]:
        """Get a guest's reservations with property details and average rating."""
        return self.fetch_all(reservations_for_guest_query(guest_id, limit))
