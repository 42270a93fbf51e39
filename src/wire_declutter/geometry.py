"""
Geometry primitives shared by line extraction, clustering and corner removal.

Intervals and boxes are compared inclusively: touching endpoints count as
overlap everywhere except has_near_overlap, which is strict after
inflation.
"""

from __future__ import annotations

from dataclasses import dataclass

from .types import BoundingBox, XYPos


@dataclass(frozen=True)
class Bound:
    """Extent of a line along its own axis, min_b <= max_b."""

    min_b: float
    max_b: float

    @classmethod
    def from_pair(cls, a: float, b: float) -> Bound:
        """Build a bound from two endpoints in either order."""
        return cls(min(a, b), max(a, b))

    @property
    def length(self) -> float:
        return self.max_b - self.min_b


def overlap_1d(a: tuple[float, float], b: tuple[float, float]) -> bool:
    """
    Check if two 1D intervals intersect, touching endpoints included.

    Endpoints may be given in either order.
    """
    a_min, a_max = min(a), max(a)
    b_min, b_max = min(b), max(b)
    return a_max >= b_min and b_max >= a_min


def overlap_2d(a: tuple[XYPos, XYPos], b: tuple[XYPos, XYPos]) -> bool:
    """Check if two boxes given as opposite-corner pairs intersect."""
    a1, a2 = a
    b1, b2 = b
    return overlap_1d((a1.x, a2.x), (b1.x, b2.x)) and overlap_1d((a1.y, a2.y), (b1.y, b2.y))


def fix_bounding_box(box: BoundingBox) -> BoundingBox:
    """Return an equivalent box with non-negative width and height."""
    x = min(box.top_left.x + box.w, box.top_left.x)
    y = min(box.top_left.y + box.h, box.top_left.y)
    return BoundingBox(top_left=XYPos(x, y), w=abs(box.w), h=abs(box.h))


def overlap_2d_box(bb1: BoundingBox, bb2: BoundingBox) -> bool:
    """Check if two bounding boxes intersect. Negative extents are allowed."""
    bb1 = fix_bounding_box(bb1)
    bb2 = fix_bounding_box(bb2)
    return overlap_2d((bb1.top_left, bb1.bottom_right), (bb2.top_left, bb2.bottom_right))


def has_overlap(b1: Bound, b2: Bound) -> bool:
    """True if bounds b1 and b2 overlap or are exactly adjacent."""
    return b1.min_b <= b2.max_b and b2.min_b <= b1.max_b


def has_near_overlap(tolerance: float, b1: Bound, b2: Bound) -> bool:
    """True if b1 and b2 would overlap once b1 is widened by tolerance on each side."""
    return b1.min_b - tolerance < b2.max_b and b2.min_b < b1.max_b + tolerance


def bound_union(b1: Bound, b2: Bound) -> Bound:
    """
    Smallest bound containing b1 and b2.

    If the bounds are disjoint the gap between them is included.
    """
    return Bound(min(b1.min_b, b2.min_b), max(b1.max_b, b2.max_b))


__all__ = [
    "Bound",
    "overlap_1d",
    "overlap_2d",
    "overlap_2d_box",
    "fix_bounding_box",
    "has_overlap",
    "has_near_overlap",
    "bound_union",
]
