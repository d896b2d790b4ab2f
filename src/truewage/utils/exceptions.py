"""Custom exceptions for truewage."""

from __future__ import annotations


class TruewageError(Exception):
    """Base exception for truewage."""


class ConfigError(TruewageError):
    """Invalid tax schedule configuration."""


class InvalidInputError(TruewageError, ValueError):
    """A caller-supplied value was rejected before any computation.

    Attributes:
        field: Name of the offending input field (dotted for nested values).
    """

    def __init__(self, field: str, message: str) -> None:
        super().__init__(f"{field}: {message}")
        self.field = field
        self.message = message


class DegenerateComputationError(TruewageError):
    """Derived state is unusable (e.g. zero working weeks or zero annual hours)."""
