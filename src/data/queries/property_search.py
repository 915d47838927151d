"""Property listing query with optional search filters.

The base query LEFT JOINs properties with per-property average review ratings,
so unreviewed properties are listed with a NULL ``average_rating``. Ratings are
aggregated before the join, which lets the minimum-rating filter sit in the same
WHERE/AND chain as the other predicates.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional, Union

from config.database import DatabaseConfig
from config.settings import Settings
from data.models import FilterCriteria
from utils.query_builder import FilterOperator, ParameterizedQuery, SecureQueryBuilder, normalize_limit

_PROPERTY_FIELDS = [f"properties.{column}" for column in DatabaseConfig.PROPERTY_COLUMNS]

PROPERTY_LISTING_BASE = f"""
SELECT {', '.join(_PROPERTY_FIELDS)}, ratings.average_rating
FROM properties
LEFT JOIN (
    SELECT property_id, avg(rating) AS average_rating
    FROM property_reviews
    GROUP BY property_id
) AS ratings ON properties.id = ratings.property_id
"""

# Grouping starts with properties.id; the remaining keys are functionally
# dependent on it and are listed so every selected column is grouped.
PROPERTY_LISTING_GROUP_BY = _PROPERTY_FIELDS + ["ratings.average_rating"]


def build_property_search_query(
    criteria: Optional[Union[FilterCriteria, Mapping[str, Any]]] = None,
    limit: Any = Settings.DEFAULT_RESULT_LIMIT,
) -> ParameterizedQuery:
    """
    Build the property listing query for a set of search filters.

    Filters are applied in a fixed order (location, minimum price, maximum price,
    minimum rating); absent or falsy filters add no predicate. The limit is always
    the last parameter and falls back to the default unless it is a positive int.

    Args:
        criteria: FilterCriteria or a search-form mapping
        limit: Maximum number of rows

    Returns:
        ParameterizedQuery whose ``$N`` placeholders match ``params`` in order
    """
    if not isinstance(criteria, FilterCriteria):
        criteria = FilterCriteria.from_options(criteria)

    builder = SecureQueryBuilder(PROPERTY_LISTING_BASE)

    if criteria.location_substring:
        builder.where("city", FilterOperator.LIKE, f"%{criteria.location_substring}%")

    if criteria.min_price_per_night:
        builder.where("cost_per_night", FilterOperator.GREATER_EQUAL, criteria.min_price_per_night)

    if criteria.max_price_per_night:
        builder.where("cost_per_night", FilterOperator.LESS_EQUAL, criteria.max_price_per_night)

    if criteria.min_rating:
        builder.where("ratings.average_rating", FilterOperator.GREATER_EQUAL, criteria.min_rating)

    return (
        builder.group_by(*PROPERTY_LISTING_GROUP_BY)
        .order_by("cost_per_night")
        .order_by("properties.id")
        .limit(normalize_limit(limit, Settings.DEFAULT_RESULT_LIMIT))
        .build()
    )
