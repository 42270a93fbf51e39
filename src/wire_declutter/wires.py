"""
Absolute geometry of wires and queries over a wire map.

Wires store only a start position and signed segment lengths; these
helpers turn that into canvas coordinates and answer the questions the
declutter passes ask about a diagram snapshot.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from typing import Mapping

from .geometry import Bound, fix_bounding_box, overlap_2d
from .types import BoundingBox, Orientation, Segment, Symbol, SymbolEdge, Wire, XYPos


@dataclass(frozen=True)
class ASegment:
    """A wire segment with its absolute start and end on the canvas."""

    start: XYPos
    end: XYPos
    segment: Segment
    orientation: Orientation

    @property
    def p(self) -> float:
        """Coordinate perpendicular to the segment (y for horizontal, x for vertical)."""
        if self.orientation is Orientation.HORIZONTAL:
            return self.start.y
        return self.start.x

    @property
    def bound(self) -> Bound:
        """Extent of the segment along its own axis."""
        if self.orientation is Orientation.HORIZONTAL:
            return Bound.from_pair(self.start.x, self.end.x)
        return Bound.from_pair(self.start.y, self.end.y)

    def is_zero(self, tolerance: float = 0.0001) -> bool:
        return self.segment.is_zero(tolerance)


def segment_orientation(wire: Wire, index: int) -> Orientation:
    """Orientation of segment index of wire."""
    return wire.segment_orientation(index)


def get_abs_segments(wire: Wire) -> list[ASegment]:
    """Walk the wire from its start position and return absolute segments."""
    pos = wire.start_pos
    result: list[ASegment] = []
    for seg in wire.segments:
        ori = wire.segment_orientation(seg.index)
        if ori is Orientation.HORIZONTAL:
            end = XYPos(pos.x + seg.length, pos.y)
        else:
            end = XYPos(pos.x, pos.y + seg.length)
        result.append(ASegment(start=pos, end=end, segment=seg, orientation=ori))
        pos = end
    return result


def get_wire_vertices(wire: Wire) -> list[XYPos]:
    """All vertices of the wire, start position first."""
    return [wire.start_pos] + [aseg.end for aseg in get_abs_segments(wire)]


def get_start_and_end_wire_pos(wire: Wire) -> tuple[XYPos, XYPos]:
    """Get the start and end positions of a wire."""
    vertices = get_wire_vertices(wire)
    return vertices[0], vertices[-1]


def get_wire_length(wire: Wire) -> float:
    """Total drawn length of a wire."""
    return sum(abs(seg.length) for seg in wire.segments)


def total_length_of_wires(wires: Mapping[str, Wire]) -> float:
    """Total drawn length of a set of wires."""
    return sum(get_wire_length(wire) for wire in wires.values())


def group_wires_by_net(wires: Mapping[str, Wire]) -> list[list[Wire]]:
    """Group wires by the output port driving them, in first-seen order."""
    nets: dict[str, list[Wire]] = defaultdict(list)
    for wire in wires.values():
        nets[wire.output_port].append(wire)
    return list(nets.values())


def get_wires_in_box(
    box: BoundingBox,
    wires: Mapping[str, Wire],
    tolerance: float = 0.0001,
) -> list[tuple[Wire, int]]:
    """
    Find wires with a non-zero segment intersecting a box.

    Args:
        box: Region to test (negative extents allowed)
        wires: Wire map
        tolerance: Segments shorter than this are ignored

    Returns:
        (wire, index of the last intersecting segment) for each hit
    """
    box = fix_bounding_box(box)
    corners = (box.top_left, box.bottom_right)
    hits: list[tuple[Wire, int]] = []
    for wire in wires.values():
        hit_index = -1
        for aseg in get_abs_segments(wire):
            if aseg.is_zero(tolerance):
                continue
            if overlap_2d((aseg.start, aseg.end), corners):
                hit_index = aseg.segment.index
        if hit_index >= 0:
            hits.append((wire, hit_index))
    return hits


def wire_symbol_edge(wire: Wire, symbol: Symbol) -> SymbolEdge:
    """
    Edge of symbol that wire is connected to.

    Falls back to TOP when the wire connects to neither or both of the
    symbol's ports.
    """
    src_edge = symbol.port_orientation.get(wire.output_port)
    tgt_edge = symbol.port_orientation.get(wire.input_port)
    if src_edge is not None and tgt_edge is None:
        return src_edge
    if tgt_edge is not None and src_edge is None:
        return tgt_edge
    return SymbolEdge.TOP


__all__ = [
    "ASegment",
    "segment_orientation",
    "get_abs_segments",
    "get_wire_vertices",
    "get_start_and_end_wire_pos",
    "get_wire_length",
    "total_length_of_wires",
    "group_wires_by_net",
    "get_wires_in_box",
    "wire_symbol_edge",
]
