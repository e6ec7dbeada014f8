"""Fallback image used when a product has no usable reference."""

from pcrex.assets.registry import EnvironmentConfig


class PlaceholderPolicy:
    def __init__(self, config: EnvironmentConfig):
        self._url = config.placeholder_url

    def placeholder_url(self) -> str:
        return self._url

    def is_placeholder(self, value) -> bool:
        """True when `value` is the configured fallback itself."""
        return isinstance(value, str) and value.strip() == self._url
