"""
Custom exception classes for the cdcorder package.

The ordering predicate itself raises nothing of its own: failures coming from
document comparison or from a caller-supplied comparator propagate unchanged.
The classes below cover the pieces built around it (source-specific
comparators, registries and configuration loading).
"""

from typing import Any, Dict, Optional


class CdcOrderException(Exception):
    """Base exception class for all cdcorder exceptions."""

    pass


class InvalidPositionError(CdcOrderException, ValueError):
    """
    Raised by a source-specific comparator when a position lacks a required
    field or holds a value it cannot interpret.

    Example:
        >>> raise InvalidPositionError(
        ...     reason="Missing binlog field",
        ...     details={"field": "file", "position": {"pos": 4}}
        ... )
    """

    def __init__(self, reason: str, details: Optional[Dict[str, Any]] = None):
        self.reason = reason
        self.details = details or {}
        message = f"{reason}"
        if self.details:
            message += f" - {self.details}"
        super().__init__(message)


class ConfigurationError(CdcOrderException):
    """Raised when a comparison config file cannot be loaded or parsed."""

    pass
