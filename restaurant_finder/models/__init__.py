"""
Data models for the Restaurant Finder system.

This module contains the data classes and type definitions used throughout
the application for representing restaurants, search criteria, search
status, and configuration.
"""

from .config import Configuration
from .criteria import FilterCriteria, SortMode
from .restaurant import (
    Address,
    Cuisine,
    DeliveryEstimate,
    Rating,
    Restaurant,
    SearchMetadata,
    SearchResult,
)
from .status import ErrorKind, SearchStatus

__all__ = [
    "Address",
    "Cuisine",
    "DeliveryEstimate",
    "Rating",
    "Restaurant",
    "SearchMetadata",
    "SearchResult",
    "FilterCriteria",
    "SortMode",
    "ErrorKind",
    "SearchStatus",
    "Configuration",
]
