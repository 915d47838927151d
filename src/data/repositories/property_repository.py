"""Property search and listing creation."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Union

from config.settings import Settings
from data.models import FilterCriteria, NewProperty
from data.queries import build_property_search_query, insert_property_query
from data.repositories.database_repository import DatabaseRepository


class PropertyRepository(DatabaseRepository):
    """Reads and creates rows in ``properties``."""

    def get_all_properties(
        self,
        criteria: Optional[Union[FilterCriteria, Mapping[str, Any]]] = None,
        limit: Any = Settings.DEFAULT_RESULT_LIMIT,
    ) -> List[Dict[str, Any]]:
        """
        Get properties matching the search filters, cheapest first.

        Args:
            criteria: FilterCriteria or a search-form mapping (``city``,
                ``minimum_price_per_night``, ...)
            limit: Maximum number of rows; defaults to 10

        Returns:
            Property rows, each with a nullable ``average_rating``
        """
        return self.fetch_all(build_property_search_query(criteria, limit))

    def add_property(self, new_property: Union[NewProperty, Mapping[str, Any]]) -> Dict[str, Any]:
        """Add a property listing and return the stored row."""
        if not isinstance(new_property, NewProperty):
            new_property = NewProperty.from_mapping(new_property)
        row = self.fetch_one(insert_property_query(new_property))
        self.logger.info(f"Added property {row['id']} for owner {row['owner_id']}")
        return row
