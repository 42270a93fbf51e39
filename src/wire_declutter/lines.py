"""
Line extraction for wire separation.

A Line is one axis-aligned entity that can take part in clustering: an
interior wire segment, or one edge of a symbol outline acting as a fixed
barrier. Separation runs in two phases, one per orientation, so lines
are collected into one sorted array per axis.

Segments are left out when they are nubs, zero length, or extensions of
a nub across a zero-length segment. The remaining segments are classified
by how they may move (see LType).
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping, Optional, Sequence, Union

from .config import DEFAULT_CONFIG, DeclutterConfig
from .geometry import Bound, bound_union, fix_bounding_box, has_overlap
from .types import Orientation, Symbol, Wire
from .validation import WireStructureWarning
from .wires import ASegment, get_abs_segments

LineId = int
SymbolsLike = Union[Mapping[str, Symbol], Sequence[Symbol]]


class LType(Enum):
    """How a line may move during separation."""

    FIXED = "fixed"  # Symbol boundary barrier, not a segment
    NORMSEG = "normseg"  # Movable segment
    FIXEDSEG = "fixedseg"  # Barrier during clustering, may be changed by later passes
    FIXEDMANUALSEG = "fixedmanualseg"  # Manually routed, never moves
    LINKEDSEG = "linkedseg"  # Follows a segment of the same net, not clustered itself

    @property
    def is_barrier(self) -> bool:
        """True for line types that stop cluster growth."""
        return self in (LType.FIXED, LType.FIXEDSEG, LType.FIXEDMANUALSEG)


@dataclass
class Line:
    """
    A wire segment or symbol edge seen along one axis.

    All lines in one array share the same orientation.
    """

    p: float  # Coordinate perpendicular to the line
    b: Bound  # Extent along the line
    orientation: Orientation
    seg: Optional[ASegment] = None  # Backing segment, None for barriers
    l_type: LType = LType.NORMSEG
    same_net_link: list[Line] = field(default_factory=list)
    wire_id: Optional[str] = None
    port_id: Optional[str] = None  # Output port of the owning net
    lid: LineId = -1  # Index of this line in its sorted array

    @property
    def is_segment(self) -> bool:
        return self.seg is not None

    @property
    def linked_bound(self) -> Bound:
        """Bound of this line together with its same-net passengers."""
        bound = self.b
        for linked in self.same_net_link:
            bound = bound_union(bound, linked.b)
        return bound


@dataclass
class LineInfo:
    """Everything one declutter pass needs, extracted from a diagram snapshot."""

    v_lines: list[Line]
    h_lines: list[Line]
    wire_map: Mapping[str, Wire]
    # (segment index, wire id) -> index into the array of the segment's orientation
    line_map: dict[tuple[int, str], LineId]

    def lines(self, orientation: Orientation) -> list[Line]:
        """Line array for one orientation."""
        if orientation is Orientation.HORIZONTAL:
            return self.h_lines
        return self.v_lines

    def line_of_segment(self, wire_id: str, seg_index: int) -> Optional[Line]:
        """Line backed by the given segment, or None if it was not extracted."""
        lid = self.line_map.get((seg_index, wire_id))
        if lid is None:
            return None
        ori = self.wire_map[wire_id].segment_orientation(seg_index)
        return self.lines(ori)[lid]


def get_visible_nub_length(
    at_end: bool,
    wire: Wire,
    config: DeclutterConfig = DEFAULT_CONFIG,
) -> float:
    """
    Length of the straight stub visible where a wire leaves its port.

    When the segment next to the nub has zero length the nub and the
    segment after it are drawn as one straight run.
    """
    lengths = wire.lengths
    if at_end:
        lengths = lengths[::-1]
    if len(lengths) >= 3 and abs(lengths[1]) < config.small_offset:
        return abs(lengths[0] + lengths[2])
    return abs(lengths[0])


def segment_is_nub_extension(
    wire: Wire,
    seg_index: int,
    config: DeclutterConfig = DEFAULT_CONFIG,
) -> bool:
    """True if the segment is a nub, or continues one across a zero-length segment."""
    segs = wire.segments
    last = len(segs) - 1
    if seg_index == 0 or seg_index == last:
        return True
    if seg_index == 2 and segs[1].is_zero(config.small_offset):
        return True
    if last - seg_index == 2 and segs[last - 1].is_zero(config.small_offset):
        return True
    return False


def _classify_segment(wire: Wire, seg_index: int) -> LType:
    seg = wire.segments[seg_index]
    if seg.is_manual:
        return LType.FIXEDMANUALSEG
    # Moving a segment next to a nub would change the nub length
    if seg_index == 1 or seg_index == len(wire.segments) - 2:
        return LType.FIXEDSEG
    return LType.NORMSEG


def _wire_lines(wire: Wire, config: DeclutterConfig) -> list[Line]:
    n_segs = len(wire.segments)
    lines: list[Line] = []
    for aseg in get_abs_segments(wire):
        index = aseg.segment.index
        if index == 0 or index == n_segs - 1:
            continue
        if aseg.is_zero(config.small_offset):
            continue
        if segment_is_nub_extension(wire, index, config):
            continue
        lines.append(
            Line(
                p=aseg.p,
                b=aseg.bound,
                orientation=aseg.orientation,
                seg=aseg,
                l_type=_classify_segment(wire, index),
                wire_id=wire.wire_id,
                port_id=wire.output_port,
            )
        )
    return lines


def symbol_lines(symbol: Symbol) -> list[Line]:
    """Four FIXED barrier lines for the outline of a symbol."""
    box = fix_bounding_box(symbol.bounding_box)
    x_bound = Bound(box.left, box.right)
    y_bound = Bound(box.top, box.bottom)
    return [
        Line(p=box.top, b=x_bound, orientation=Orientation.HORIZONTAL, l_type=LType.FIXED),
        Line(p=box.bottom, b=x_bound, orientation=Orientation.HORIZONTAL, l_type=LType.FIXED),
        Line(p=box.left, b=y_bound, orientation=Orientation.VERTICAL, l_type=LType.FIXED),
        Line(p=box.right, b=y_bound, orientation=Orientation.VERTICAL, l_type=LType.FIXED),
    ]


def link_same_net_lines(lines: list[Line], config: DeclutterConfig = DEFAULT_CONFIG) -> None:
    """
    Turn coincident segments of one net into passengers of the first of them.

    Lines must be sorted by p. A NORMSEG line of another wire on the same
    net, within overlap_tolerance in p and overlapping in extent, becomes
    LINKEDSEG and is appended to the leader's same_net_link.
    """
    for i, line in enumerate(lines):
        if line.l_type is not LType.NORMSEG or not line.port_id:
            continue
        for other in lines[i + 1 :]:
            if other.p - line.p > config.overlap_tolerance:
                break
            if (
                other.l_type is LType.NORMSEG
                and other.port_id == line.port_id
                and other.wire_id != line.wire_id
                and has_overlap(line.b, other.b)
            ):
                other.l_type = LType.LINKEDSEG
                line.same_net_link.append(other)


def as_symbol_list(symbols: Optional[SymbolsLike]) -> list[Symbol]:
    """Symbols as a list, from a symbol map or any sequence."""
    if symbols is None:
        return []
    if isinstance(symbols, Mapping):
        return list(symbols.values())
    return list(symbols)


def make_line_info(
    wires: Mapping[str, Wire],
    symbols: Optional[SymbolsLike] = None,
    config: DeclutterConfig = DEFAULT_CONFIG,
) -> LineInfo:
    """
    Extract the per-axis line arrays for a declutter pass.

    Args:
        wires: Wire map keyed by wire id
        symbols: Symbols whose outlines act as barriers
        config: Distances used for zero-length and linkage tests

    Returns:
        LineInfo with both arrays sorted by p and a segment -> line map
    """
    by_axis: dict[Orientation, list[Line]] = {
        Orientation.HORIZONTAL: [],
        Orientation.VERTICAL: [],
    }

    for wire in wires.values():
        if len(wire.segments) < 2:
            warnings.warn(
                f"Wire {wire.wire_id} has {len(wire.segments)} segment(s) and is skipped",
                WireStructureWarning,
                stacklevel=2,
            )
            continue
        for line in _wire_lines(wire, config):
            by_axis[line.orientation].append(line)

    for symbol in as_symbol_list(symbols):
        for line in symbol_lines(symbol):
            by_axis[line.orientation].append(line)

    line_map: dict[tuple[int, str], LineId] = {}
    for lines in by_axis.values():
        lines.sort(key=lambda line: (line.p, line.b.min_b))
        for lid, line in enumerate(lines):
            line.lid = lid
            if line.seg is not None and line.wire_id is not None:
                line_map[(line.seg.segment.index, line.wire_id)] = lid
        link_same_net_lines(lines, config)

    return LineInfo(
        v_lines=by_axis[Orientation.VERTICAL],
        h_lines=by_axis[Orientation.HORIZONTAL],
        wire_map=wires,
        line_map=line_map,
    )


__all__ = [
    "LineId",
    "LType",
    "Line",
    "LineInfo",
    "get_visible_nub_length",
    "segment_is_nub_extension",
    "symbol_lines",
    "link_same_net_lines",
    "as_symbol_list",
    "make_line_info",
]
