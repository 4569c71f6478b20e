"""Filter engine for applying rating, delivery time, and cuisine filters to restaurants."""

import logging
from typing import List, Sequence, Tuple

from ..models.criteria import FilterCriteria, SortMode
from ..models.restaurant import Restaurant

logger = logging.getLogger(__name__)

MAX_DISPLAY_COUNT = 20


class RestaurantFilter:
    """Derives the displayed restaurants from the raw list and the criteria.

    Filtering, sorting and truncation are pure: the same inputs always give
    the same output, and nothing is kept between calls.
    """

    def __init__(self, max_display_count: int = MAX_DISPLAY_COUNT):
        """Initialize filter with the maximum number of restaurants to display."""
        if max_display_count <= 0:
            raise ValueError("Max display count must be positive")
        self.max_display_count = max_display_count

    def check_min_rating(self, restaurant: Restaurant, criteria: FilterCriteria) -> bool:
        """Check if restaurant meets the minimum star rating."""
        if criteria.min_rating == 0:
            return True  # No rating filter set

        return restaurant.rating.star_rating >= criteria.min_rating

    def check_delivery_time(
        self, restaurant: Restaurant, criteria: FilterCriteria
    ) -> bool:
        """Check if restaurant delivers within the maximum delivery time."""
        if criteria.max_delivery_minutes is None:
            return True  # No delivery time limit set

        if restaurant.delivery_estimate is None:
            return True  # No estimate counts as unbounded, let it pass

        return restaurant.delivery_estimate.range_upper <= criteria.max_delivery_minutes

    def check_cuisines(self, restaurant: Restaurant, criteria: FilterCriteria) -> bool:
        """Check if restaurant serves any of the selected cuisines."""
        if not criteria.selected_cuisines:
            return True  # No cuisine filter set

        return any(
            restaurant.has_cuisine(unique_name)
            for unique_name in criteria.selected_cuisines
        )

    def passes_filters(self, restaurant: Restaurant, criteria: FilterCriteria) -> bool:
        """Check a restaurant against every filter."""
        return (
            self.check_min_rating(restaurant, criteria)
            and self.check_delivery_time(restaurant, criteria)
            and self.check_cuisines(restaurant, criteria)
        )

    def sort(
        self, restaurants: Sequence[Restaurant], sort_mode: SortMode
    ) -> List[Restaurant]:
        """Sort restaurants; equal keys keep their original order."""
        if sort_mode is SortMode.BY_RATING_DESCENDING:
            return sorted(
                restaurants, key=lambda r: r.rating.star_rating, reverse=True
            )

        if sort_mode is SortMode.BY_DELIVERY_TIME_ASCENDING:
            return sorted(
                restaurants,
                key=lambda r: r.delivery_estimate.range_lower
                if r.delivery_estimate is not None
                else 0,
            )

        return list(restaurants)

    def apply(
        self, raw: Sequence[Restaurant], criteria: FilterCriteria
    ) -> Tuple[Restaurant, ...]:
        """Filter, sort and truncate the raw restaurants."""
        filtered = [r for r in raw if self.passes_filters(r, criteria)]
        ordered = self.sort(filtered, criteria.sort_mode)
        displayed = tuple(ordered[: self.max_display_count])

        logger.debug(
            f"Derived {len(displayed)} of {len(raw)} restaurants "
            f"(matched={len(filtered)}, sort={criteria.sort_mode.value}, "
            f"min_rating={criteria.min_rating}, "
            f"max_delivery={criteria.max_delivery_minutes}, "
            f"cuisines={sorted(criteria.selected_cuisines)})"
        )

        return displayed


def derive_restaurants(
    raw: Sequence[Restaurant],
    criteria: FilterCriteria,
    max_display_count: int = MAX_DISPLAY_COUNT,
) -> Tuple[Restaurant, ...]:
    """Apply criteria to a raw restaurant list."""
    return RestaurantFilter(max_display_count).apply(raw, criteria)
