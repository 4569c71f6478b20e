"""
Protocol interfaces for the Restaurant Finder system.

These protocols establish the system boundaries and let collaborators be
injected, so tests can substitute the directory client and observers.
"""

from typing import TYPE_CHECKING, Protocol

from .models.restaurant import SearchResult

if TYPE_CHECKING:
    from .components.search_state import SearchState


class IRestaurantDirectoryClient(Protocol):
    """Protocol for looking up restaurants by postcode."""

    async def search(self, postcode: str) -> SearchResult:
        """Fetch the restaurants delivering to a postcode."""
        ...


class ISearchObserver(Protocol):
    """Protocol for components that re-render when search state changes."""

    def __call__(self, state: "SearchState") -> None:
        """Handle a state change."""
        ...
