"""
Search state for the Restaurant Finder system.

SearchState owns the last fetched restaurants and the current filter
criteria, keeps the displayed restaurants derived from them, and tracks
the loading/error/empty status of the session.

All reads and writes happen on the thread running the asyncio event loop
that owns the state. Only the directory request leaves that thread; its
completion is resumed on the loop before any field is touched.
"""

import asyncio
import threading
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from ..errors import DirectoryError, InvalidInputError
from ..interfaces import IRestaurantDirectoryClient, ISearchObserver
from ..models.config import Configuration
from ..models.criteria import FilterCriteria, SortMode, toggled
from ..models.restaurant import Cuisine, Restaurant, SearchResult
from ..models.status import (
    NO_FILTER_MATCHES_MESSAGE,
    NO_RESTAURANTS_MESSAGE,
    ErrorKind,
    SearchStatus,
    message_for_error,
)
from ..utils.error_handling import ErrorCategory, ErrorSeverity, get_error_tracker
from ..services.config_manager import ConfigurationManager
from ..utils.logging import get_logger, setup_logging
from .directory_client import RestaurantDirectoryClient, clean_postcode
from .restaurant_filter import MAX_DISPLAY_COUNT, RestaurantFilter

DEFAULT_MAX_DELIVERY_MINUTES = 45

_ERROR_CATEGORIES = {
    ErrorKind.INVALID_INPUT: ErrorCategory.VALIDATION,
    ErrorKind.DECODING: ErrorCategory.DECODING,
}


def facets_from_restaurants(restaurants: Sequence[Restaurant]) -> Tuple[Cuisine, ...]:
    """Build cuisine facets with counts from a list of restaurants."""
    counts: Dict[str, List[Any]] = {}
    for restaurant in restaurants:
        for cuisine in restaurant.cuisines:
            entry = counts.setdefault(cuisine.unique_name, [cuisine.name, 0])
            entry[1] += 1

    return tuple(
        Cuisine(name=name, unique_name=unique_name, count=count)
        for unique_name, (name, count) in counts.items()
    )


class SearchState:
    """
    State container for one restaurant search session.

    Presentation code drives it through the command methods and re-renders
    from the observable properties whenever a subscribed observer is called.
    """

    def __init__(
        self,
        client: IRestaurantDirectoryClient,
        max_display_count: int = MAX_DISPLAY_COUNT,
        default_max_delivery_minutes: Optional[int] = DEFAULT_MAX_DELIVERY_MINUTES,
    ):
        """
        Initialize search state.

        Args:
            client: Directory client used for every search
            max_display_count: Maximum number of displayed restaurants
            default_max_delivery_minutes: Delivery time bound applied when
                filters are reset; None means unbounded
        """
        self.logger = get_logger("search.state")

        self._client = client
        self._filter = RestaurantFilter(max_display_count)
        self.default_max_delivery_minutes = default_max_delivery_minutes

        self._criteria = self._default_criteria()
        self._criteria.validate()

        self._raw_restaurants: Tuple[Restaurant, ...] = ()
        self._available_cuisines: Tuple[Cuisine, ...] = ()
        self._displayed_restaurants: Tuple[Restaurant, ...] = ()
        self._status = SearchStatus.IDLE
        self._error_kind: Optional[ErrorKind] = None

        # Incremented by every search command; only the latest may commit
        self._generation = 0
        self._observers: List[ISearchObserver] = []
        self._owner_thread = threading.get_ident()

    @classmethod
    def from_config(cls, config: Configuration) -> "SearchState":
        """
        Create a search state with a directory client built from config.

        Logging is set up from the config's log level and directory first.
        """
        config.validate()
        setup_logging(config.log_dir, config.log_level)

        return cls(
            RestaurantDirectoryClient.from_config(config),
            max_display_count=config.max_display_count,
            default_max_delivery_minutes=config.default_max_delivery_minutes,
        )

    @classmethod
    def from_config_file(cls, config_path: Optional[str] = None) -> "SearchState":
        """
        Create a search state from a configuration file.

        Args:
            config_path: Path to a YAML or JSON file. If None, the standard
                locations are searched and defaults are used when none exists.
        """
        return cls.from_config(ConfigurationManager(config_path).get_config())

    # Observable surface

    @property
    def status(self) -> SearchStatus:
        return self._status

    @property
    def error_kind(self) -> Optional[ErrorKind]:
        return self._error_kind

    @property
    def raw_restaurants(self) -> Tuple[Restaurant, ...]:
        return self._raw_restaurants

    @property
    def displayed_restaurants(self) -> Tuple[Restaurant, ...]:
        return self._displayed_restaurants

    @property
    def available_cuisines(self) -> Tuple[Cuisine, ...]:
        return self._available_cuisines

    @property
    def criteria(self) -> FilterCriteria:
        """Read-only copy of the current criteria."""
        return self._criteria.snapshot()

    @property
    def is_loading(self) -> bool:
        return self._status is SearchStatus.LOADING

    @property
    def is_empty(self) -> bool:
        """True when the last search found no restaurants at all."""
        return self._status is SearchStatus.EMPTY

    @property
    def is_filtered_empty(self) -> bool:
        """True when restaurants were found but none match the filters."""
        return (
            self._status is SearchStatus.LOADED
            and bool(self._raw_restaurants)
            and not self._displayed_restaurants
        )

    @property
    def message(self) -> Optional[str]:
        """User-facing message for the current state, if any."""
        if self._status is SearchStatus.FAILED and self._error_kind is not None:
            return message_for_error(self._error_kind)

        if self._status is SearchStatus.EMPTY:
            return NO_RESTAURANTS_MESSAGE

        if self.is_filtered_empty:
            return NO_FILTER_MATCHES_MESSAGE

        return None

    def subscribe(self, observer: ISearchObserver) -> Callable[[], None]:
        """
        Register an observer called after every state change.

        Returns:
            Callable that removes the observer again
        """
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    # Commands

    def search(self, postcode: str) -> Optional["asyncio.Task[None]"]:
        """
        Start a search for a postcode.

        The state moves to LOADING before this returns. The request runs as
        a task on the running event loop; the task is returned so callers
        can await completion. An empty postcode fails immediately with
        INVALID_INPUT and no request is made, in which case None is returned.
        Only an accepted search needs a running event loop.

        Any search still in flight is superseded: its result is discarded.
        """
        self._check_owner()

        self._generation += 1
        generation = self._generation

        cleaned = clean_postcode(postcode or "")
        if not cleaned:
            self._fail(
                ErrorKind.INVALID_INPUT,
                InvalidInputError("Postcode cannot be empty"),
                postcode=postcode,
            )
            return None

        loop = asyncio.get_running_loop()
        self._status = SearchStatus.LOADING
        self._error_kind = None
        self.logger.info(
            "Search started", extra={"postcode": cleaned, "generation": generation}
        )
        self._notify()

        return loop.create_task(self._run_search(generation, cleaned))

    def update_criteria(self, **changes: Any) -> None:
        """
        Change one or more criteria fields and re-derive the displayed list.

        Raises:
            ValueError: If the resulting criteria are invalid; the current
                criteria are left untouched
        """
        self._check_owner()

        candidate = self._criteria.with_changes(**changes)
        candidate.validate()

        if candidate == self._criteria:
            return

        self._criteria = candidate
        self.logger.debug(
            "Criteria updated", extra={"changes": sorted(changes.keys())}
        )
        self._recompute()
        self._notify()

    def set_sort_mode(self, mode: SortMode) -> None:
        self.update_criteria(sort_mode=mode)

    def set_min_rating(self, rating: int) -> None:
        self.update_criteria(min_rating=rating)

    def set_max_delivery_minutes(self, minutes: Optional[int]) -> None:
        self.update_criteria(max_delivery_minutes=minutes)

    def toggle_cuisine(self, unique_name: str) -> None:
        self.update_criteria(
            selected_cuisines=toggled(self._criteria.selected_cuisines, unique_name)
        )

    def reset_filters(self) -> None:
        defaults = self._default_criteria()
        self.update_criteria(
            sort_mode=defaults.sort_mode,
            min_rating=defaults.min_rating,
            max_delivery_minutes=defaults.max_delivery_minutes,
            selected_cuisines=defaults.selected_cuisines,
        )

    # Internals

    def _default_criteria(self) -> FilterCriteria:
        return FilterCriteria(max_delivery_minutes=self.default_max_delivery_minutes)

    def _check_owner(self) -> None:
        if threading.get_ident() != self._owner_thread:
            raise RuntimeError("SearchState must only be used from its owning thread")

    def _is_stale(self, generation: int) -> bool:
        return generation != self._generation

    async def _run_search(self, generation: int, postcode: str) -> None:
        try:
            result = await self._client.search(postcode)
        except DirectoryError as e:
            if self._is_stale(generation):
                self._discard(generation, postcode)
                return
            self._fail(e.kind, e, postcode=postcode)
            return
        except Exception as e:
            if self._is_stale(generation):
                self._discard(generation, postcode)
                return
            self._fail(ErrorKind.BAD_RESPONSE, e, postcode=postcode)
            return

        if self._is_stale(generation):
            self._discard(generation, postcode)
            return

        self._commit(result, postcode)

    def _discard(self, generation: int, postcode: str) -> None:
        self.logger.debug(
            "Discarding superseded search result",
            extra={
                "postcode": postcode,
                "generation": generation,
                "current_generation": self._generation,
            },
        )

    def _commit(self, result: SearchResult, postcode: str) -> None:
        self._raw_restaurants = tuple(result.restaurants)

        facets = result.metadata.cuisine_details if result.metadata else ()
        self._available_cuisines = tuple(facets) or facets_from_restaurants(
            self._raw_restaurants
        )

        self._status = (
            SearchStatus.EMPTY if result.is_empty else SearchStatus.LOADED
        )
        self._error_kind = None
        self._recompute()

        self.logger.info(
            "Search completed",
            extra={
                "postcode": postcode,
                "status": self._status.value,
                "restaurants": len(self._raw_restaurants),
                "displayed": len(self._displayed_restaurants),
            },
        )
        self._notify()

    def _fail(self, kind: ErrorKind, error: BaseException, postcode: str) -> None:
        self._raw_restaurants = ()
        self._available_cuisines = ()
        self._status = SearchStatus.FAILED
        self._error_kind = kind
        self._recompute()

        get_error_tracker().record_error(
            component="search.state",
            category=_ERROR_CATEGORIES.get(kind, ErrorCategory.NETWORK),
            severity=ErrorSeverity.LOW
            if kind is ErrorKind.INVALID_INPUT
            else ErrorSeverity.MEDIUM,
            message=f"Search failed ({kind.value}): {error}",
            exception=error,
            context={
                "postcode": postcode,
                "field_path": getattr(error, "field_path", None),
            },
        )
        self._notify()

    def _recompute(self) -> None:
        self._displayed_restaurants = self._filter.apply(
            self._raw_restaurants, self._criteria
        )

    def _notify(self) -> None:
        for observer in list(self._observers):
            observer(self)
