"""
Filter criteria models.
"""

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import AbstractSet, Optional, Set

MIN_RATING_FLOOR = 0
MIN_RATING_CEILING = 5


class SortMode(Enum):
    """Ordering applied to the displayed restaurants."""

    NONE = "none"
    BY_RATING_DESCENDING = "by_rating_descending"
    BY_DELIVERY_TIME_ASCENDING = "by_delivery_time_ascending"


@dataclass
class FilterCriteria:
    """User-selected filters for one search session."""

    sort_mode: SortMode = SortMode.NONE
    min_rating: int = 0
    max_delivery_minutes: Optional[int] = None  # None means unbounded, 0 is allowed
    selected_cuisines: AbstractSet[str] = field(default_factory=set)

    def validate(self) -> bool:
        """Validate the filter criteria."""
        if not isinstance(self.sort_mode, SortMode):
            raise ValueError("sort_mode must be a SortMode enum")

        if isinstance(self.min_rating, bool) or not isinstance(self.min_rating, int):
            raise ValueError("Minimum rating must be an integer")

        if not (MIN_RATING_FLOOR <= self.min_rating <= MIN_RATING_CEILING):
            raise ValueError(
                f"Minimum rating must be between {MIN_RATING_FLOOR} "
                f"and {MIN_RATING_CEILING}"
            )

        if self.max_delivery_minutes is not None:
            if isinstance(self.max_delivery_minutes, bool) or not isinstance(
                self.max_delivery_minutes, int
            ):
                raise ValueError("Maximum delivery minutes must be an integer")

            if self.max_delivery_minutes < 0:
                raise ValueError("Maximum delivery minutes cannot be negative")

        for unique_name in self.selected_cuisines:
            if not isinstance(unique_name, str) or not unique_name.strip():
                raise ValueError("All selected cuisines must be non-empty strings")

        return True

    def snapshot(self) -> "FilterCriteria":
        """Return a copy that callers cannot use to mutate the original."""
        return replace(self, selected_cuisines=frozenset(self.selected_cuisines))

    def with_changes(self, **changes) -> "FilterCriteria":
        """Return a copy with the given fields replaced."""
        if "selected_cuisines" in changes:
            changes["selected_cuisines"] = set(changes["selected_cuisines"])
        else:
            changes["selected_cuisines"] = set(self.selected_cuisines)
        return replace(self, **changes)


def toggled(selected: AbstractSet[str], unique_name: str) -> Set[str]:
    """Return the selection with unique_name added or removed."""
    updated = set(selected)
    if unique_name in updated:
        updated.remove(unique_name)
    else:
        updated.add(unique_name)
    return updated
