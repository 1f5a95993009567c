"""Configuration exceptions: config files, option values."""

from typing import Any

from .base import JsComplexityError


class ConfigurationError(JsComplexityError):
    """Base class for configuration-related errors."""

    pass


class InvalidConfigError(ConfigurationError):
    """Raised when configuration values are invalid."""

    def __init__(self, key: str, value: Any, reason: str):
        super().__init__(
            f"Invalid configuration for {key}: {value}",
            details={"key": key, "value": str(value), "reason": reason},
        )
        self.key = key
        self.value = value
        self.reason = reason
