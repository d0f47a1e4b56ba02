"""Custom exceptions for wingstl.

Every failure the geometry compiler can report falls into one of four kinds:
malformed input, geometry that cannot be meshed, resources that could not be
obtained, and internal invariants that were broken.
"""

from typing import Any, Dict, Optional


class WingstlError(Exception):
    """Base exception for all wingstl errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message


class InputFormatError(WingstlError):
    """Raised when a command-line value, config value or .dat file is malformed."""
    pass


class GeometryValidationError(WingstlError):
    """Raised when well-formed input describes a wing that cannot be meshed."""
    pass


class ResourceError(WingstlError):
    """Raised when memory or a file cannot be obtained."""
    pass


class InternalInvariantError(WingstlError):
    """Raised when the mesh generator breaks one of its own invariants."""
    pass


def validate_positive(value: float, name: str, flag: Optional[str] = None) -> float:
    """Validate that a value is nonzero and positive."""
    if value <= 0:
        details: Dict[str, Any] = {"value": value, "parameter": name}
        if flag:
            details["flag"] = flag
        raise InputFormatError(f"{name} must be a nonzero positive number", details=details)
    return value


def validate_range(
    value: float,
    min_val: float,
    max_val: float,
    name: str,
    flag: Optional[str] = None,
) -> float:
    """Validate that a value is within a closed range."""
    if not (min_val <= value <= max_val):
        details: Dict[str, Any] = {"value": value, "min": min_val, "max": max_val, "parameter": name}
        if flag:
            details["flag"] = flag
        raise InputFormatError(f"{name} must be between {min_val} and {max_val}", details=details)
    return value
