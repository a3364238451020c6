"""Exceptions raised by the revision API."""

from typing import Any, Optional


class RevisionAPIError(Exception):
    """Base exception for all revision API errors."""
    pass


class ConfigError(RevisionAPIError):
    """Raised when controller or network configuration cannot be assembled."""
    def __init__(self, message: str, key: Optional[str] = None) -> None:
        super().__init__(message)
        self.message = message
        self.key = key


class InvalidIPRangeError(RevisionAPIError, ValueError):
    """Raised when an outbound IP range entry is not in CIDR notation."""
    def __init__(self, message: str, value: str) -> None:
        super().__init__(message)
        self.message = message
        self.value = value


class ContainerValidationError(RevisionAPIError):
    """Raised when a user container sets a field the platform owns."""
    def __init__(self, message: str, field: Optional[str] = None, value: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.field = field
        self.value = value
