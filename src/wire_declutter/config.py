"""
Configuration constants for wire separation.

All distances are in canvas units. DEFAULT_CONFIG is used whenever a
function is called without an explicit config.
"""

from __future__ import annotations

from dataclasses import dataclass, fields

from .validation import validate_positive


@dataclass(frozen=True)
class DeclutterConfig:
    """Tunable distances for one declutter run."""

    # Segments shorter than this count as zero length; moves smaller than it are skipped
    small_offset: float = 0.0001
    # Target gap between adjacent spread segments
    max_segment_separation: float = 15.0
    # Lines within this distance of each other are considered to overlap
    overlap_tolerance: float = 2.0
    # Corners with a side longer than this are not removed
    max_corner_size: float = 100.0
    # Clearance kept between corner-removal extensions and symbols
    extension_tolerance: float = 3.0

    def __post_init__(self) -> None:
        for f in fields(self):
            validate_positive(f.name, getattr(self, f.name))


DEFAULT_CONFIG = DeclutterConfig()


__all__ = [
    "DeclutterConfig",
    "DEFAULT_CONFIG",
]
