"""Custom exceptions for the napalm-sg108e HTTP client."""

from __future__ import annotations

from dataclasses import dataclass


class SG108EError(Exception):
    """Base exception for all napalm-sg108e errors."""


class SG108ESessionError(SG108EError):
    """Raised when a request is issued outside an authenticated session."""


class SG108ERequestError(SG108EError):
    """Raised when a network-level error occurs (connection refused, timeout, etc.)."""

    def __init__(self, url: str, cause: Exception) -> None:
        self.url = url
        self.cause = cause
        super().__init__(f"Request to {url!r} failed: {cause}")


class SG108ETimeoutError(SG108ERequestError):
    """Raised when a request does not complete within its timeout."""


class SG108EResponseError(SG108EError):
    """Raised when the switch returns a non-2xx HTTP status code."""

    def __init__(self, status_code: int, url: str) -> None:
        self.status_code = status_code
        self.url = url
        super().__init__(f"HTTP {status_code} for {url!r}")


class SG108EParseError(SG108EError):
    """Raised when a scraped page holds malformed (not merely missing) data."""


@dataclass
class SG108EValidationError(SG108EError):
    """Raised in strict mode when a caller-supplied parameter is rejected."""

    field: str
    value: object
    reason: str

    def __post_init__(self) -> None:
        super().__init__(f"Invalid {self.field}={self.value!r}: {self.reason}")


@dataclass
class SG108EVerificationError(SG108EError):
    """Raised when post-apply read-back finds the switch in another state.

    Attributes:
        mismatches: One human-readable line per field that did not take effect.
    """

    mismatches: list[str]

    def __post_init__(self) -> None:
        super().__init__(
            f"Post-apply verification failed: {len(self.mismatches)} mismatch(es): "
            + "; ".join(self.mismatches)
        )
