"""
Wire mutation: applying new segment positions back onto wires.

A segment is moved perpendicular to itself by lengthening the segment
before it and shortening the one after it, so both wire endpoints stay
where they are. Wires are immutable; every function returns new values
and wire maps are copied before a single entry is replaced.
"""

from __future__ import annotations

import warnings
from dataclasses import replace
from typing import Iterable, Mapping

from .lines import Line
from .types import Orientation, Wire
from .validation import BarrierMoveError, NubMoveError, WireStructureWarning
from .wires import get_abs_segments


def move_segment(index: int, delta: float, wire: Wire) -> Wire:
    """
    Move an interior segment perpendicular to itself.

    Positive delta increases x (vertical segment) or y (horizontal segment).

    Args:
        index: Segment index, 1 <= index <= len(segments) - 2
        delta: Distance to move
        wire: Wire to change

    Returns:
        New wire with segments index - 1 and index + 1 resized

    Raises:
        NubMoveError: If index addresses a nub or is out of range
    """
    segs = list(wire.segments)
    if index < 1 or index > len(segs) - 2:
        raise NubMoveError(f"Cannot move segment {index} of a wire with {len(segs)} segments")

    segs[index - 1] = replace(segs[index - 1], length=segs[index - 1].length + delta)
    segs[index + 1] = replace(segs[index + 1], length=segs[index + 1].length - delta)
    return wire.with_segments(segs)


def segment_p(wire: Wire, index: int) -> float:
    """Current coordinate of a segment perpendicular to its own axis."""
    aseg = get_abs_segments(wire)[index]
    return aseg.p


def move_line(
    orientation: Orientation,
    new_p: float,
    line: Line,
    wires: Mapping[str, Wire],
) -> dict[str, Wire]:
    """
    Move the segment behind a line to a new perpendicular coordinate.

    Args:
        orientation: Orientation of the line (p is y for HORIZONTAL, x for VERTICAL)
        new_p: Target coordinate
        line: Line backed by a wire segment
        wires: Current wire map, not modified

    Returns:
        New wire map with only the owning wire replaced

    Raises:
        BarrierMoveError: If the line has no backing segment
        NubMoveError: If the backing segment is a nub
    """
    if line.seg is None:
        raise BarrierMoveError(
            f"Cannot move {line.l_type.name} line {line.lid} at p={line.p}: it is not a segment"
        )

    seg = line.seg.segment
    result = dict(wires)
    wire = wires.get(seg.wire_id)
    if wire is None:
        warnings.warn(
            f"Line {line.lid} refers to unknown wire {seg.wire_id}; not moved",
            WireStructureWarning,
            stacklevel=2,
        )
        return result

    start = get_abs_segments(wire)[seg.index].start
    old_p = start.y if orientation is Orientation.HORIZONTAL else start.x
    result[seg.wire_id] = move_segment(seg.index, new_p - old_p, wire)
    return result


def update_wires(wires: Mapping[str, Wire], wires_to_add: Iterable[Wire]) -> dict[str, Wire]:
    """Return a new wire map with the given wires added or replaced."""
    result = dict(wires)
    for wire in wires_to_add:
        result[wire.wire_id] = wire
    return result


__all__ = [
    "move_segment",
    "segment_p",
    "move_line",
    "update_wires",
]
