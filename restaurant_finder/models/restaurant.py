"""
Restaurant data models for the Restaurant Finder system.
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple


@dataclass(frozen=True)
class Cuisine:
    """Cuisine category, also used as a filter facet."""

    name: str
    unique_name: str
    count: Optional[int] = None

    @property
    def id(self) -> str:
        return self.unique_name

    def validate(self) -> bool:
        """Validate the cuisine data."""
        if not self.unique_name or not self.unique_name.strip():
            raise ValueError("Cuisine unique name cannot be empty")

        if self.count is not None and self.count < 0:
            raise ValueError("Cuisine count cannot be negative")

        return True


@dataclass(frozen=True)
class Rating:
    """Star rating and number of reviews."""

    star_rating: float
    count: int

    def validate(self) -> bool:
        """Validate the rating data."""
        # Star rating is expected in 0.0-5.0 but the directory is not held to it
        if self.count < 0:
            raise ValueError("Rating count cannot be negative")

        return True


@dataclass(frozen=True)
class Address:
    """Restaurant street address."""

    first_line: str
    city: str
    postal_code: str

    @property
    def formatted(self) -> str:
        return f"{self.first_line}, {self.city}, {self.postal_code}"


@dataclass(frozen=True)
class DeliveryEstimate:
    """Estimated delivery window in minutes."""

    range_lower: int
    range_upper: int

    @property
    def formatted(self) -> str:
        return f"{self.range_lower}-{self.range_upper} mins"


@dataclass(frozen=True)
class Restaurant:
    """A restaurant returned by the directory for a postcode."""

    id: str
    name: str
    logo_url: str
    cuisines: Tuple[Cuisine, ...]
    rating: Rating
    address: Address
    delivery_estimate: Optional[DeliveryEstimate] = None

    def validate(self) -> bool:
        """Validate the restaurant data."""
        if not self.id or not self.id.strip():
            raise ValueError("Restaurant ID cannot be empty")

        self.rating.validate()

        for cuisine in self.cuisines:
            cuisine.validate()

        return True

    def has_cuisine(self, unique_name: str) -> bool:
        """Check whether the restaurant serves the given cuisine."""
        return any(cuisine.unique_name == unique_name for cuisine in self.cuisines)


@dataclass(frozen=True)
class SearchMetadata:
    """Descriptive data the directory returns for the searched area."""

    canonical_name: Optional[str] = None
    district: Optional[str] = None
    postal_code: Optional[str] = None
    area: Optional[str] = None
    cuisine_details: Tuple[Cuisine, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class SearchResult:
    """Decoded directory response for one postcode search."""

    restaurants: Tuple[Restaurant, ...]
    metadata: Optional[SearchMetadata] = None

    @property
    def is_empty(self) -> bool:
        return not self.restaurants
