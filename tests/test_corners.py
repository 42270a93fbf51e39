"""Tests for finding and removing wire corners."""

from __future__ import annotations

import pytest

from wire_declutter.config import DeclutterConfig
from wire_declutter.corners import find_wire_corners, remove_corner, remove_wire_corners
from wire_declutter.types import BoundingBox, Orientation, Symbol, XYPos, make_wire
from wire_declutter.wires import get_start_and_end_wire_pos


def _make_corner_wire(lengths=None, manual=None):
    # Path: (0,0) (10,0) (10,20) (40,20) (40,60) (90,60) (90,120) (100,120)
    return make_wire("c", lengths or [10, 20, 30, 40, 50, 60, 10], manual=manual)


def _blocking_symbol() -> Symbol:
    """Symbol sitting on the horizontal run that removing the first corner would create."""
    return Symbol("blocker", BoundingBox(XYPos(20, 55), 10, 10))


# ---------------------------------------------------------------------------
# find_wire_corners
# ---------------------------------------------------------------------------


class TestFindWireCorners:
    def test_candidates(self) -> None:
        corners = find_wire_corners(_make_corner_wire())
        assert [c.start_seg for c in corners] == [1, 2]
        assert [c.end_seg for c in corners] == [4, 5]

    def test_changes(self) -> None:
        corner = find_wire_corners(_make_corner_wire())[0]
        assert corner.start_seg_change == pytest.approx(40)
        assert corner.end_seg_change == pytest.approx(30)
        assert corner.start_seg_orientation is Orientation.VERTICAL

    def test_short_wire_has_no_corners(self) -> None:
        assert find_wire_corners(make_wire("w", [10, 20, 30, 40, 10])) == []

    def test_symbol_blocks_corner(self) -> None:
        corners = find_wire_corners(_make_corner_wire(), [_blocking_symbol()])
        assert [c.start_seg for c in corners] == [2]

    def test_symbol_map_accepted(self) -> None:
        corners = find_wire_corners(_make_corner_wire(), {"blocker": _blocking_symbol()})
        assert [c.start_seg for c in corners] == [2]

    def test_large_corner_kept(self) -> None:
        wire = _make_corner_wire([10, 20, 150, 40, 50, 60, 10])
        assert [c.start_seg for c in find_wire_corners(wire)] == [2]

    def test_corner_size_from_config(self) -> None:
        config = DeclutterConfig(max_corner_size=35)
        assert find_wire_corners(_make_corner_wire(), config=config) == []

    def test_manual_segment_blocks(self) -> None:
        assert find_wire_corners(_make_corner_wire(manual=[3])) == []

    def test_zero_interior_segment_skipped(self) -> None:
        wire = _make_corner_wire([10, 20, 0, 40, 50, 60, 10])
        assert [c.start_seg for c in find_wire_corners(wire)] == [2]


# ---------------------------------------------------------------------------
# remove_corner / remove_wire_corners
# ---------------------------------------------------------------------------


class TestRemoveCorner:
    def test_remove_first_corner(self) -> None:
        wire = _make_corner_wire()
        new_wire = remove_corner(find_wire_corners(wire)[0])
        assert new_wire.lengths == [10, 60, 0, 0, 80, 60, 10]

    def test_endpoints_preserved(self) -> None:
        wire = _make_corner_wire()
        for corner in find_wire_corners(wire):
            new_wire = remove_corner(corner)
            assert get_start_and_end_wire_pos(new_wire) == get_start_and_end_wire_pos(wire)

    def test_segment_count_unchanged(self) -> None:
        wire = _make_corner_wire()
        new_wire = remove_corner(find_wire_corners(wire)[1])
        assert len(new_wire.segments) == len(wire.segments)


class TestRemoveWireCorners:
    def test_overlapping_corners_removed_once(self) -> None:
        wires = {"c": _make_corner_wire()}
        result = remove_wire_corners(wires)
        assert result["c"].lengths == [10, 60, 0, 0, 80, 60, 10]

    def test_blocked_corner_left(self) -> None:
        wires = {"c": _make_corner_wire()}
        result = remove_wire_corners(wires, [_blocking_symbol()])
        assert result["c"].lengths == [10, 20, 80, 0, 0, 100, 10]
        assert get_start_and_end_wire_pos(result["c"])[1] == XYPos(100, 120)

    def test_input_not_modified(self) -> None:
        wires = {"c": _make_corner_wire()}
        result = remove_wire_corners(wires)
        assert result is not wires
        assert wires["c"].lengths == [10, 20, 30, 40, 50, 60, 10]

    def test_wire_without_corners_kept(self) -> None:
        plain = make_wire("p", [10, 20, 30, 40, 10])
        result = remove_wire_corners({"p": plain})
        assert result["p"] is plain
