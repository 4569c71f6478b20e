"""
Pytest configuration and shared fixtures.

This module provides common fixtures and configuration for all tests
in the Restaurant Finder test suite.
"""

import asyncio
from typing import Dict, List, Optional

import pytest

from restaurant_finder.models.restaurant import (
    Address,
    Cuisine,
    DeliveryEstimate,
    Rating,
    Restaurant,
    SearchMetadata,
    SearchResult,
)
from restaurant_finder.utils.error_handling import get_error_tracker

PIZZA = Cuisine(name="Pizza", unique_name="pizza")
CHINESE = Cuisine(name="Chinese", unique_name="chinese")
INDIAN = Cuisine(name="Indian", unique_name="indian")


def make_restaurant(
    restaurant_id: str,
    star_rating: float = 4.0,
    eta: Optional[tuple] = (20, 30),
    cuisines: tuple = (PIZZA,),
    name: Optional[str] = None,
) -> Restaurant:
    """Build a Restaurant with sensible defaults."""
    return Restaurant(
        id=restaurant_id,
        name=name or f"Restaurant {restaurant_id}",
        logo_url=f"https://example.com/logos/{restaurant_id}.gif",
        cuisines=tuple(cuisines),
        rating=Rating(star_rating=star_rating, count=100),
        address=Address(first_line="1 High Street", city="London", postal_code="N1 7RD"),
        delivery_estimate=DeliveryEstimate(*eta) if eta is not None else None,
    )


def make_result(restaurants, cuisines: tuple = ()) -> SearchResult:
    """Wrap restaurants in a SearchResult with optional cuisine facets."""
    return SearchResult(
        restaurants=tuple(restaurants),
        metadata=SearchMetadata(postal_code="N17RD", cuisine_details=tuple(cuisines)),
    )


class FakeDirectoryClient:
    """Directory client whose searches complete only when a test says so."""

    def __init__(self):
        self.calls: List[str] = []
        self._pending: Dict[str, List[asyncio.Future]] = {}

    async def search(self, postcode: str) -> SearchResult:
        self.calls.append(postcode)
        future = asyncio.get_running_loop().create_future()
        self._pending.setdefault(postcode, []).append(future)
        return await future

    def resolve(self, postcode: str, result: SearchResult) -> None:
        self._pending[postcode].pop(0).set_result(result)

    def reject(self, postcode: str, error: Exception) -> None:
        self._pending[postcode].pop(0).set_exception(error)


class ImmediateDirectoryClient:
    """Directory client that answers every search straight away."""

    def __init__(self, result: Optional[SearchResult] = None, error: Exception = None):
        self.result = result
        self.error = error
        self.calls: List[str] = []

    async def search(self, postcode: str) -> SearchResult:
        self.calls.append(postcode)
        if self.error is not None:
            raise self.error
        return self.result


# Test data fixtures
@pytest.fixture
def sample_restaurants():
    """Create a small list of restaurants covering every filter dimension."""
    return [
        make_restaurant("r0", star_rating=4.5, eta=(20, 35), cuisines=(PIZZA,)),
        make_restaurant("r1", star_rating=3.0, eta=(10, 25), cuisines=(CHINESE,)),
        make_restaurant("r2", star_rating=4.5, eta=(40, 55), cuisines=(INDIAN, PIZZA)),
        make_restaurant("r3", star_rating=2.0, eta=None, cuisines=(CHINESE, INDIAN)),
    ]


@pytest.fixture
def sample_payload():
    """Create a directory response body in snake_case."""
    return {
        "restaurants": [
            {
                "id": "12345",
                "name": "Pizza Palace",
                "logo_url": "https://example.com/logos/12345.gif",
                "cuisines": [
                    {"name": "Pizza", "unique_name": "pizza"},
                    {"name": "Italian", "unique_name": "italian"},
                ],
                "rating": {"star_rating": 4.5, "count": 210},
                "address": {
                    "first_line": "12 Upper Street",
                    "city": "London",
                    "postal_code": "N1 0PQ",
                },
                "delivery_eta_minutes": {"range_lower": 20, "range_upper": 35},
            },
            {
                "id": "67890",
                "name": "Golden Dragon",
                "logo_url": "https://example.com/logos/67890.gif",
                "cuisines": [{"name": "Chinese", "unique_name": "chinese"}],
                "rating": {"star_rating": 4, "count": 0},
                "address": {
                    "first_line": "3 Essex Road",
                    "city": "London",
                    "postal_code": "N1 2SE",
                },
            },
        ],
        "meta_data": {
            "canonical_name": "n17rd",
            "district": "N17",
            "postal_code": "N17RD",
            "area": "Tottenham",
            "cuisine_details": [
                {"name": "Pizza", "unique_name": "pizza", "count": 1},
                {"name": "Chinese", "unique_name": "chinese", "count": 1},
            ],
        },
    }


@pytest.fixture
def fake_client():
    """Create a directory client controlled by the test."""
    return FakeDirectoryClient()


@pytest.fixture(autouse=True)
def clear_error_tracker():
    """Start every test with an empty global error tracker."""
    get_error_tracker().clear()
    yield
    get_error_tracker().clear()


# Pytest configuration
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "slow: mark test as slow running")
    config.addinivalue_line("markers", "integration: mark test as integration test")
    config.addinivalue_line("markers", "unit: mark test as unit test")


def pytest_collection_modifyitems(config, items):
    """Add the unit marker to every test not marked otherwise."""
    for item in items:
        if not any(
            marker.name in ["integration", "slow"] for marker in item.iter_markers()
        ):
            item.add_marker(pytest.mark.unit)
