"""
Configuration models for the system.
"""

from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlparse

DEFAULT_BASE_URL = (
    "https://uk.api.just-eat.io/discovery/uk/restaurants/enriched/bypostcode"
)

VALID_LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


@dataclass
class Configuration:
    """System configuration."""

    base_url: str = DEFAULT_BASE_URL
    request_timeout: float = 10.0
    max_display_count: int = 20
    default_max_delivery_minutes: Optional[int] = 45
    log_level: str = "INFO"
    log_dir: Optional[str] = None

    def validate(self) -> bool:
        """Validate system configuration."""
        if not isinstance(self.base_url, str) or not self.base_url.strip():
            raise ValueError("Base URL must be a non-empty string")

        parsed_url = urlparse(self.base_url)
        if not parsed_url.scheme or not parsed_url.netloc:
            raise ValueError(f"Invalid base URL format: {self.base_url}")

        if parsed_url.scheme not in ["http", "https"]:
            raise ValueError(f"Base URL must use HTTP or HTTPS: {self.base_url}")

        if (
            isinstance(self.request_timeout, bool)
            or not isinstance(self.request_timeout, (int, float))
            or self.request_timeout <= 0
        ):
            raise ValueError("Request timeout must be a positive number")

        if (
            isinstance(self.max_display_count, bool)
            or not isinstance(self.max_display_count, int)
            or self.max_display_count <= 0
        ):
            raise ValueError("Max display count must be a positive integer")

        if self.default_max_delivery_minutes is not None:
            if (
                isinstance(self.default_max_delivery_minutes, bool)
                or not isinstance(self.default_max_delivery_minutes, int)
                or self.default_max_delivery_minutes <= 0
            ):
                raise ValueError(
                    "Default max delivery minutes must be a positive integer"
                )

        if not isinstance(self.log_level, str) or (
            self.log_level.upper() not in VALID_LOG_LEVELS
        ):
            raise ValueError(f"Log level must be one of: {VALID_LOG_LEVELS}")

        return True
