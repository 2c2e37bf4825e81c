"""
Typed error classes for aecli.

Local validation failures (identifiers, TTLs, inputs) are raised before any
network activity; everything coming back from the SDK, the node or the
compiler is wrapped into `SdkError`. Callers can still catch the base
`AecliError`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

__all__ = [
    "AecliError",
    "InvalidIdentifier",
    "InvalidTtl",
    "InvalidInput",
    "SdkError",
    "SdkUnavailable",
    "PresentationError",
]


@dataclass
class AecliError(Exception):
    """Base class for all aecli errors."""

    message: str

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.message


@dataclass
class InvalidIdentifier(AecliError):
    """Raised when a tagged identifier fails prefix or checksum validation."""

    value: Optional[str] = None
    expected_prefix: Optional[str] = None


@dataclass
class InvalidTtl(AecliError):
    """Raised when a TTL field cannot be resolved to a chain TTL descriptor."""

    field: Optional[str] = None
    value: Optional[Any] = None


@dataclass
class InvalidInput(AecliError):
    """Raised for malformed command input other than identifiers and TTLs."""


@dataclass
class SdkError(AecliError):
    """
    Raised when the SDK, the node or the compiler rejects a call.

    Fields:
      - status: HTTP status if the failure came from an HTTP API
      - endpoint: method or path that failed
    """

    status: Optional[int] = None
    endpoint: Optional[str] = None

    def __str__(self) -> str:  # pragma: no cover - trivial
        return self.message


@dataclass
class SdkUnavailable(SdkError):
    """Raised when the optional signing backend is not installed."""


@dataclass
class PresentationError(AecliError):
    """Raised when a result cannot be rendered."""
