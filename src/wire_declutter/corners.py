"""
Corner removal for separated wires.

A corner is a run of four segments [s, s+1, s+2, s+3] where the two
interior segments form a right-angle detour. Lengthening segment s by
the length of s+2 and segment s+3 by the length of s+1 lets both
interior segments shrink to zero while the wire still ends in the same
place. This is a clean-up step after separation; only small corners
whose new path stays clear of symbols are removed.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Mapping, Optional

from .config import DEFAULT_CONFIG, DeclutterConfig
from .geometry import fix_bounding_box, overlap_2d
from .lines import SymbolsLike, as_symbol_list
from .types import Orientation, Symbol, Wire, XYPos
from .wires import get_abs_segments


@dataclass(frozen=True)
class WireCorner:
    """
    A removable corner on a wire.

    The removed segments are start_seg + 1 and start_seg + 2; start_seg
    and end_seg = start_seg + 3 have their lengths changed.
    """

    wire: Wire
    start_seg: int
    start_seg_change: float
    end_seg_change: float
    start_seg_orientation: Orientation  # end_seg has the opposite orientation

    @property
    def end_seg(self) -> int:
        return self.start_seg + 3


def _offset(pos: XYPos, orientation: Orientation, length: float) -> XYPos:
    if orientation is Orientation.HORIZONTAL:
        return XYPos(pos.x + length, pos.y)
    return XYPos(pos.x, pos.y + length)


def _hits_symbol(
    start: XYPos,
    end: XYPos,
    symbols: list[Symbol],
    tolerance: float,
) -> bool:
    for symbol in symbols:
        box = fix_bounding_box(symbol.bounding_box)
        corners = (
            XYPos(box.left - tolerance, box.top - tolerance),
            XYPos(box.right + tolerance, box.bottom + tolerance),
        )
        if overlap_2d((start, end), corners):
            return True
    return False


def find_wire_corners(
    wire: Wire,
    symbols: Optional[SymbolsLike] = None,
    config: DeclutterConfig = DEFAULT_CONFIG,
) -> list[WireCorner]:
    """
    List the removable corners of a wire.

    Nubs and manually routed segments are never changed, corners with a
    side longer than max_corner_size are kept, and the extended segments
    must stay extension_tolerance clear of every symbol.

    Args:
        wire: Wire to search
        symbols: Symbols the new path must avoid
        config: Corner size and clearance limits

    Returns:
        Candidate corners in increasing start_seg order (may overlap)
    """
    segs = wire.segments
    asegs = get_abs_segments(wire)
    symbol_list = as_symbol_list(symbols)
    corners: list[WireCorner] = []

    for s in range(1, len(segs) - 4):
        run = segs[s : s + 4]
        first, mid1, mid2, _last = run
        if mid1.is_zero(config.small_offset) or mid2.is_zero(config.small_offset):
            continue
        if any(seg.is_manual for seg in run):
            continue
        if max(abs(mid1.length), abs(mid2.length)) > config.max_corner_size:
            continue

        start_ori = wire.segment_orientation(s)
        start = asegs[s].start
        bend = _offset(start, start_ori, first.length + mid2.length)
        end = asegs[s + 3].end
        if _hits_symbol(start, bend, symbol_list, config.extension_tolerance):
            continue
        if _hits_symbol(bend, end, symbol_list, config.extension_tolerance):
            continue

        corners.append(
            WireCorner(
                wire=wire,
                start_seg=s,
                start_seg_change=mid2.length,
                end_seg_change=mid1.length,
                start_seg_orientation=start_ori,
            )
        )

    return corners


def remove_corner(corner: WireCorner) -> Wire:
    """Apply a corner removal, zeroing its two interior segments."""
    segs = list(corner.wire.segments)
    s, e = corner.start_seg, corner.end_seg
    segs[s] = replace(segs[s], length=segs[s].length + corner.start_seg_change)
    segs[s + 1] = replace(segs[s + 1], length=0.0)
    segs[s + 2] = replace(segs[s + 2], length=0.0)
    segs[e] = replace(segs[e], length=segs[e].length + corner.end_seg_change)
    return corner.wire.with_segments(segs)


def remove_wire_corners(
    wires: Mapping[str, Wire],
    symbols: Optional[SymbolsLike] = None,
    config: DeclutterConfig = DEFAULT_CONFIG,
) -> dict[str, Wire]:
    """
    Remove every non-overlapping corner found on each wire.

    Corners are taken in order along the wire; one touching a segment of
    an already removed corner is skipped.

    Returns:
        New wire map
    """
    result = dict(wires)
    for wire_id, wire in wires.items():
        next_free = 0
        updated = wire
        for corner in find_wire_corners(wire, symbols, config):
            if corner.start_seg < next_free:
                continue
            updated = remove_corner(replace(corner, wire=updated))
            next_free = corner.end_seg + 1
        result[wire_id] = updated
    return result


__all__ = [
    "WireCorner",
    "find_wire_corners",
    "remove_corner",
    "remove_wire_corners",
]
