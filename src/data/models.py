"""Typed contracts for LightBnB search filters and new records."""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from typing import Any, Mapping, Optional


@dataclass(frozen=True)
class FilterCriteria:
    """Optional, independent property search filters.

    Falsy values (None, "", 0) mean "not specified".
    """

    location_substring: Optional[str] = None
    min_price_per_night: Optional[float] = None
    max_price_per_night: Optional[float] = None
    min_rating: Optional[float] = None

    # Web form / camelCase keys accepted by from_options
    OPTION_ALIASES = {
        "city": "location_substring",
        "locationSubstring": "location_substring",
        "minimum_price_per_night": "min_price_per_night",
        "minPricePerNight": "min_price_per_night",
        "maximum_price_per_night": "max_price_per_night",
        "maxPricePerNight": "max_price_per_night",
        "minimum_rating": "min_rating",
        "minRating": "min_rating",
    }

    @classmethod
    def from_options(cls, options: Optional[Mapping[str, Any]]) -> "FilterCriteria":
        """Build criteria from a search-form mapping, ignoring unknown keys."""
        if not options:
            return cls()

        field_names = {f.name for f in fields(cls)}
        values = {}
        for key, value in options.items():
            name = cls.OPTION_ALIASES.get(key, key)
            if name in field_names:
                values[name] = value
        return cls(**values)

    def active_filters(self) -> dict[str, Any]:
        """Return only the filters that will produce a predicate."""
        return {name: value for name, value in asdict(self).items() if value}


@dataclass(frozen=True)
class NewUser:
    """A user to be inserted."""

    name: str
    email: str
    password: str

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "NewUser":
        """Build from a sign-up form mapping, ignoring unknown keys.

        Raises:
            ValueError: If name, email or password is missing
        """
        field_names = [f.name for f in fields(cls)]
        missing = [name for name in field_names if data.get(name) is None]
        if missing:
            raise ValueError(f"Missing user field(s): {', '.join(missing)}")
        return cls(**{name: data[name] for name in field_names})

    def to_row(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class NewProperty:
    """A property listing to be inserted.

    Fields left as None are omitted from the insert so table defaults apply.
    """

    owner_id: int
    title: str
    description: Optional[str] = None
    thumbnail_photo_url: Optional[str] = None
    cover_photo_url: Optional[str] = None
    cost_per_night: Optional[int] = None
    parking_spaces: Optional[int] = None
    number_of_bathrooms: Optional[int] = None
    number_of_bedrooms: Optional[int] = None
    country: Optional[str] = None
    street: Optional[str] = None
    city: Optional[str] = None
    province: Optional[str] = None
    post_code: Optional[str] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "NewProperty":
        """Build from a form mapping, ignoring unknown keys such as ``id``."""
        field_names = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in field_names})

    def to_row(self) -> dict[str, Any]:
        return {name: value for name, value in asdict(self).items() if value is not None}
