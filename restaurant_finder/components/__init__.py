"""
Core components for the Restaurant Finder system.

This package contains the directory client, the response decoder, the
filter/sort derivation, and the search state that ties them together.
"""

from .directory_client import RestaurantDirectoryClient
from .response_decoder import ResponseDecoder
from .restaurant_filter import RestaurantFilter, derive_restaurants
from .search_state import SearchState

__all__ = [
    "RestaurantDirectoryClient",
    "ResponseDecoder",
    "RestaurantFilter",
    "derive_restaurants",
    "SearchState",
]
