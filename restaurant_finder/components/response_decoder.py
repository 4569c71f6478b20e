"""Decoder turning directory JSON payloads into restaurant models."""

import logging
from typing import Any, Dict, List, Optional

from ..errors import DecodingError
from ..models.restaurant import (
    Address,
    Cuisine,
    DeliveryEstimate,
    Rating,
    Restaurant,
    SearchMetadata,
    SearchResult,
)

logger = logging.getLogger(__name__)

_MISSING = object()


def camel_case(key: str) -> str:
    """Convert a snake_case key to its camelCase spelling."""
    head, *rest = key.split("_")
    return head + "".join(part.capitalize() for part in rest)


class ResponseDecoder:
    """Decodes a directory response into a SearchResult.

    Keys are looked up in snake_case first and then in camelCase, so both
    the documented payload shape and the live directory's shape decode.
    Every failure names the offending field path.
    """

    def decode(self, payload: Any) -> SearchResult:
        """Decode a parsed JSON payload."""
        body = self._expect_dict(payload, "$")

        raw_restaurants = self._expect_list(
            self._field(body, "restaurants", "$"), "restaurants"
        )
        restaurants = tuple(
            self._decode_restaurant(item, f"restaurants[{index}]")
            for index, item in enumerate(raw_restaurants)
        )

        raw_metadata = self._field(body, "meta_data", "$", required=False)
        metadata = (
            self._decode_metadata(raw_metadata, "meta_data")
            if raw_metadata is not None
            else None
        )

        logger.debug(f"Decoded {len(restaurants)} restaurants from response")
        return SearchResult(restaurants=restaurants, metadata=metadata)

    def _decode_restaurant(self, data: Any, path: str) -> Restaurant:
        item = self._expect_dict(data, path)

        raw_cuisines = self._expect_list(
            self._field(item, "cuisines", path), f"{path}.cuisines"
        )
        raw_eta = self._field(item, "delivery_eta_minutes", path, required=False)

        restaurant = Restaurant(
            id=self._string(item, "id", path),
            name=self._string(item, "name", path),
            logo_url=self._string(item, "logo_url", path),
            cuisines=tuple(
                self._decode_cuisine(cuisine, f"{path}.cuisines[{index}]")
                for index, cuisine in enumerate(raw_cuisines)
            ),
            rating=self._decode_rating(
                self._field(item, "rating", path), f"{path}.rating"
            ),
            address=self._decode_address(
                self._field(item, "address", path), f"{path}.address"
            ),
            delivery_estimate=(
                self._decode_delivery_estimate(raw_eta, f"{path}.delivery_eta_minutes")
                if raw_eta is not None
                else None
            ),
        )

        try:
            restaurant.validate()
        except ValueError as e:
            raise DecodingError(str(e), path) from e

        return restaurant

    def _decode_cuisine(self, data: Any, path: str) -> Cuisine:
        item = self._expect_dict(data, path)
        return Cuisine(
            name=self._string(item, "name", path),
            unique_name=self._string(item, "unique_name", path),
            count=self._integer(item, "count", path, required=False),
        )

    def _decode_rating(self, data: Any, path: str) -> Rating:
        item = self._expect_dict(data, path)
        return Rating(
            star_rating=self._number(item, "star_rating", path),
            count=self._integer(item, "count", path),
        )

    def _decode_address(self, data: Any, path: str) -> Address:
        item = self._expect_dict(data, path)
        return Address(
            first_line=self._string(item, "first_line", path),
            city=self._string(item, "city", path),
            postal_code=self._string(item, "postal_code", path),
        )

    def _decode_delivery_estimate(self, data: Any, path: str) -> DeliveryEstimate:
        item = self._expect_dict(data, path)
        return DeliveryEstimate(
            range_lower=self._integer(item, "range_lower", path),
            range_upper=self._integer(item, "range_upper", path),
        )

    def _decode_metadata(self, data: Any, path: str) -> SearchMetadata:
        item = self._expect_dict(data, path)

        raw_cuisines = self._field(item, "cuisine_details", path, required=False)
        cuisines: List[Cuisine] = []
        if raw_cuisines is not None:
            for index, cuisine in enumerate(
                self._expect_list(raw_cuisines, f"{path}.cuisine_details")
            ):
                cuisines.append(
                    self._decode_cuisine(cuisine, f"{path}.cuisine_details[{index}]")
                )

        return SearchMetadata(
            canonical_name=self._string(item, "canonical_name", path, required=False),
            district=self._string(item, "district", path, required=False),
            postal_code=self._string(item, "postal_code", path, required=False),
            area=self._string(item, "area", path, required=False),
            cuisine_details=tuple(cuisines),
        )

    def _field(
        self, data: Dict[str, Any], key: str, path: str, required: bool = True
    ) -> Any:
        value = data.get(key, _MISSING)
        if value is _MISSING:
            value = data.get(camel_case(key), _MISSING)

        if value is _MISSING or (required and value is None):
            if required:
                raise DecodingError("Missing required field", f"{path}.{key}")
            return None

        return value

    def _string(
        self, data: Dict[str, Any], key: str, path: str, required: bool = True
    ) -> Optional[str]:
        value = self._field(data, key, path, required)
        if value is not None and not isinstance(value, str):
            raise DecodingError(
                f"Expected string, got {type(value).__name__}", f"{path}.{key}"
            )
        return value

    def _integer(
        self, data: Dict[str, Any], key: str, path: str, required: bool = True
    ) -> Optional[int]:
        value = self._field(data, key, path, required)
        if value is not None and (isinstance(value, bool) or not isinstance(value, int)):
            raise DecodingError(
                f"Expected integer, got {type(value).__name__}", f"{path}.{key}"
            )
        return value

    def _number(self, data: Dict[str, Any], key: str, path: str) -> float:
        value = self._field(data, key, path)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise DecodingError(
                f"Expected number, got {type(value).__name__}", f"{path}.{key}"
            )
        return float(value)

    def _expect_dict(self, value: Any, path: str) -> Dict[str, Any]:
        if not isinstance(value, dict):
            raise DecodingError(f"Expected object, got {type(value).__name__}", path)
        return value

    def _expect_list(self, value: Any, path: str) -> List[Any]:
        if not isinstance(value, list):
            raise DecodingError(f"Expected array, got {type(value).__name__}", path)
        return value
