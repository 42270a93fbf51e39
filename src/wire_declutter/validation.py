"""
Input validation utilities for the wire declutter engine.

Provides the exception hierarchy, the warning category used for
recoverable oddities in the wire snapshot, and validation functions for
wires and configuration values.
"""

from __future__ import annotations

from typing import Any, Mapping

from .types import Wire


class ValidationError(ValueError):
    """Base exception for declutter validation errors."""

    pass


class InvalidWireError(ValidationError):
    """Raised when a wire is malformed."""

    pass


class InvalidConfigError(ValidationError):
    """Raised when a configuration value is out of range."""

    pass


class InvalidOperationError(ValidationError):
    """Raised when the caller asks for a move that breaks a wire invariant."""

    pass


class NubMoveError(InvalidOperationError):
    """Raised when asked to move a nub or a segment index out of range."""

    pass


class BarrierMoveError(InvalidOperationError):
    """Raised when asked to move a line that has no backing wire segment."""

    pass


class WireStructureWarning(UserWarning):
    """Warning for wires that cannot take part in a declutter pass."""

    pass


def validate_wire(wire: Wire) -> Wire:
    """
    Validate the structure of a single wire.

    Args:
        wire: Wire to check

    Returns:
        The same wire

    Raises:
        InvalidWireError: If the wire has fewer than 2 segments, or a
            segment's index or wire id does not match its position
    """
    if len(wire.segments) < 2:
        raise InvalidWireError(
            f"Wire {wire.wire_id} must have at least 2 segments, got {len(wire.segments)}"
        )

    for i, seg in enumerate(wire.segments):
        if seg.index != i:
            raise InvalidWireError(
                f"Wire {wire.wire_id}: segment at position {i} has index {seg.index}"
            )
        if seg.wire_id != wire.wire_id:
            raise InvalidWireError(
                f"Wire {wire.wire_id}: segment {i} belongs to wire {seg.wire_id}"
            )

    return wire


def validate_wire_map(wires: Mapping[str, Wire]) -> Mapping[str, Wire]:
    """
    Validate every wire in a wire map and that keys match wire ids.

    Raises:
        InvalidWireError: On the first malformed wire
    """
    for key, wire in wires.items():
        if key != wire.wire_id:
            raise InvalidWireError(f"Wire map key {key} holds wire {wire.wire_id}")
        validate_wire(wire)
    return wires


def validate_positive(name: str, value: Any) -> float:
    """
    Validate a configuration value is a positive number.

    Args:
        name: Field name used in the error message
        value: Value to check

    Returns:
        Value as float

    Raises:
        InvalidConfigError: If value <= 0
    """
    value = float(value)
    if value <= 0:
        raise InvalidConfigError(f"{name} must be positive, got {value}")
    return value


__all__ = [
    "ValidationError",
    "InvalidWireError",
    "InvalidConfigError",
    "InvalidOperationError",
    "NubMoveError",
    "BarrierMoveError",
    "WireStructureWarning",
    "validate_wire",
    "validate_wire_map",
    "validate_positive",
]
