"""
Type definitions for the wire declutter engine.

Provides the diagram snapshot consumed by a declutter pass:
- XYPos / BoundingBox: canvas geometry
- Orientation / SymbolEdge: axis and symbol side enums
- Segment / Wire: orthogonal wires as alternating signed-length segments
- Symbol: a placed symbol box with its port edge map
- EventType / Event: lifecycle events for WireSeparator callbacks
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum, IntEnum
from typing import Any, Callable, Optional, Sequence, TypedDict


class Orientation(Enum):
    """Axis of a wire segment or line."""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"

    def opposite(self) -> Orientation:
        """Get the perpendicular orientation."""
        if self is Orientation.HORIZONTAL:
            return Orientation.VERTICAL
        return Orientation.HORIZONTAL


class SymbolEdge(Enum):
    """Side of a symbol where a port sits."""

    TOP = "top"
    BOTTOM = "bottom"
    LEFT = "left"
    RIGHT = "right"

    def opposite(self) -> SymbolEdge:
        """Get the opposite edge."""
        opposites = {
            SymbolEdge.TOP: SymbolEdge.BOTTOM,
            SymbolEdge.BOTTOM: SymbolEdge.TOP,
            SymbolEdge.LEFT: SymbolEdge.RIGHT,
            SymbolEdge.RIGHT: SymbolEdge.LEFT,
        }
        return opposites[self]

    @property
    def orientation(self) -> Orientation:
        """Orientation of the edge line itself (top/bottom edges are horizontal)."""
        if self in (SymbolEdge.TOP, SymbolEdge.BOTTOM):
            return Orientation.HORIZONTAL
        return Orientation.VERTICAL


class RoutingMode(Enum):
    """How a segment got its position."""

    AUTO = "auto"
    MANUAL = "manual"  # dragged by the user, never moved by declutter


@dataclass(frozen=True)
class XYPos:
    """A point on the canvas (y grows downward)."""

    x: float = 0.0
    y: float = 0.0

    def __add__(self, other: XYPos) -> XYPos:
        return XYPos(self.x + other.x, self.y + other.y)

    def __sub__(self, other: XYPos) -> XYPos:
        return XYPos(self.x - other.x, self.y - other.y)


@dataclass(frozen=True)
class BoundingBox:
    """
    Axis-aligned box given by its top-left corner and extents.

    W and H may be negative for boxes built from dragged corners; use
    geometry.fix_bounding_box to normalize before reading the edges.
    """

    top_left: XYPos
    w: float
    h: float

    @property
    def left(self) -> float:
        """Left edge x coordinate."""
        return self.top_left.x

    @property
    def right(self) -> float:
        """Right edge x coordinate."""
        return self.top_left.x + self.w

    @property
    def top(self) -> float:
        """Top edge y coordinate."""
        return self.top_left.y

    @property
    def bottom(self) -> float:
        """Bottom edge y coordinate."""
        return self.top_left.y + self.h

    @property
    def bottom_right(self) -> XYPos:
        """Corner diagonally opposite top_left."""
        return XYPos(self.right, self.bottom)


@dataclass(frozen=True)
class Segment:
    """
    One element of a wire's segment sequence.

    The sign of length encodes direction along the segment's axis:
    positive is right (horizontal) or down (vertical).
    """

    index: int  # Position within the wire
    length: float
    wire_id: str
    mode: RoutingMode = RoutingMode.AUTO

    @property
    def is_manual(self) -> bool:
        """True if the segment was placed by hand."""
        return self.mode is RoutingMode.MANUAL

    def is_zero(self, tolerance: float = 0.0001) -> bool:
        """True if the segment has negligible length."""
        return abs(self.length) < tolerance


@dataclass(frozen=True)
class Wire:
    """
    An orthogonal wire: a start position plus alternating segments.

    Segment 0 has initial_orientation, segment 1 the perpendicular one and
    so on. The first and last segments are the nubs leaving the ports.
    """

    wire_id: str
    segments: tuple[Segment, ...]
    start_pos: XYPos
    initial_orientation: Orientation
    output_port: str = ""  # Net source; wires sharing it form a net
    input_port: str = ""

    def segment_orientation(self, index: int) -> Orientation:
        """Orientation of the segment at index."""
        if index % 2 == 0:
            return self.initial_orientation
        return self.initial_orientation.opposite()

    def with_segments(self, segments: Sequence[Segment]) -> Wire:
        """Copy of this wire with a replaced segment sequence."""
        return replace(self, segments=tuple(segments))

    @property
    def lengths(self) -> list[float]:
        """Signed segment lengths in order."""
        return [seg.length for seg in self.segments]


@dataclass(frozen=True)
class Symbol:
    """
    A placed symbol as seen by the declutter engine.

    Only its outline and the edge each port sits on are needed.
    """

    symbol_id: str
    bounding_box: BoundingBox
    port_orientation: dict[str, SymbolEdge] = field(default_factory=dict)


def make_wire(
    wire_id: str,
    lengths: Sequence[float],
    start: tuple[float, float] = (0.0, 0.0),
    initial_orientation: Orientation = Orientation.HORIZONTAL,
    output_port: str = "",
    input_port: str = "",
    manual: Optional[Sequence[int]] = None,
) -> Wire:
    """
    Build a wire from plain segment lengths.

    Args:
        wire_id: Unique wire identifier
        lengths: Signed segment lengths, nubs included
        start: (x, y) of the wire start
        initial_orientation: Orientation of segment 0
        output_port: Net source port id
        input_port: Target port id
        manual: Indices of manually routed segments

    Returns:
        New Wire
    """
    manual_set = set(manual or ())
    segments = tuple(
        Segment(
            index=i,
            length=float(length),
            wire_id=wire_id,
            mode=RoutingMode.MANUAL if i in manual_set else RoutingMode.AUTO,
        )
        for i, length in enumerate(lengths)
    )
    return Wire(
        wire_id=wire_id,
        segments=segments,
        start_pos=XYPos(float(start[0]), float(start[1])),
        initial_orientation=initial_orientation,
        output_port=output_port,
        input_port=input_port,
    )


class EventType(IntEnum):
    """
    Separator lifecycle events.

    - start: A declutter run has begun
    - tick: Fired once per axis pass
    - end: All passes are done
    """

    start = 0
    tick = 1
    end = 2


class Event(TypedDict, total=False):
    """Event payload passed to event listeners."""

    type: EventType
    orientation: Optional[Orientation]
    clusters: int
    moved: int
    listener: Optional[Callable[[], None]]
    data: Any


__all__ = [
    "Orientation",
    "SymbolEdge",
    "RoutingMode",
    "XYPos",
    "BoundingBox",
    "Segment",
    "Wire",
    "Symbol",
    "make_wire",
    "EventType",
    "Event",
]
