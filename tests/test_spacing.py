"""Tests for cluster span bounds and member spreading."""

from __future__ import annotations

import pytest

from wire_declutter.clustering import Cluster, expand_cluster, find_clusters
from wire_declutter.config import DeclutterConfig
from wire_declutter.geometry import Bound
from wire_declutter.lines import Line, LType
from wire_declutter.spacing import (
    lower_b,
    lower_s,
    settle_clusters,
    spread_positions,
    upper_b,
    upper_s,
    width_s,
)
from wire_declutter.types import Orientation


def _make_line(p: float, l_type: LType = LType.NORMSEG) -> Line:
    return Line(p=p, b=Bound(0, 50), orientation=Orientation.HORIZONTAL, l_type=l_type)


def _make_lines(*ps: float) -> list[Line]:
    lines = [_make_line(p) for p in ps]
    for lid, line in enumerate(lines):
        line.lid = lid
    return lines


def _cluster(lines: list[Line], upper_fix=None, lower_fix=None) -> Cluster:
    return Cluster(
        segments=tuple(range(len(lines))),
        bound=Bound(0, 50),
        upper_fix=upper_fix,
        lower_fix=lower_fix,
    )


def _spread(lines: list[Line], cluster: Cluster, config=None) -> list[float]:
    positions = spread_positions(lines, cluster, config or DeclutterConfig())
    return [positions[i] for i in cluster.segments]


# ---------------------------------------------------------------------------
# Ideal span
# ---------------------------------------------------------------------------


class TestIdealSpan:
    def test_width(self) -> None:
        lines = _make_lines(100, 102, 104)
        assert width_s(_cluster(lines)) == pytest.approx(45)

    def test_upper_and_lower(self) -> None:
        pts = [100, 102, 104]
        assert upper_s(pts) == pytest.approx(124.5)
        assert lower_s(pts) == pytest.approx(79.5)

    def test_span_is_width(self) -> None:
        pts = [3.0, 17.5, 40.0, 41.0]
        lines = _make_lines(*pts)
        assert upper_s(pts) - lower_s(pts) == pytest.approx(width_s(_cluster(lines)))

    def test_centred_on_mean(self) -> None:
        pts = [3.0, 17.5, 40.0, 41.0]
        assert (upper_s(pts) + lower_s(pts)) / 2 == pytest.approx(sum(pts) / len(pts))

    def test_separation_from_config(self) -> None:
        config = DeclutterConfig(max_segment_separation=10)
        assert upper_s([100, 102, 104], config) == pytest.approx(117)
        assert lower_s([100, 102, 104], config) == pytest.approx(87)


# ---------------------------------------------------------------------------
# Barrier-constrained bounds
# ---------------------------------------------------------------------------


class TestBounds:
    def test_free_cluster(self) -> None:
        lines = _make_lines(100, 102, 104)
        cluster = _cluster(lines)
        assert upper_b(lines, cluster) == pytest.approx(124.5)
        assert lower_b(lines, cluster) == pytest.approx(79.5)

    def test_upper_fix_pins_upper(self) -> None:
        lines = _make_lines(100, 102, 104)
        cluster = _cluster(lines, upper_fix=105)
        assert upper_b(lines, cluster) == pytest.approx(105)
        assert lower_b(lines, cluster) == pytest.approx(60)

    def test_upper_fix_out_of_reach(self) -> None:
        lines = _make_lines(100, 102, 104)
        cluster = _cluster(lines, upper_fix=200)
        assert upper_b(lines, cluster) == pytest.approx(200)
        assert lower_b(lines, cluster) == pytest.approx(79.5)

    def test_lower_fix_pushes_upper(self) -> None:
        lines = _make_lines(100, 102, 104)
        cluster = _cluster(lines, lower_fix=95)
        assert lower_b(lines, cluster) == pytest.approx(95)
        assert upper_b(lines, cluster) == pytest.approx(140)

    def test_both_fixed(self) -> None:
        lines = _make_lines(100, 102, 104)
        cluster = _cluster(lines, upper_fix=110, lower_fix=95)
        assert lower_b(lines, cluster) == pytest.approx(95)
        assert upper_b(lines, cluster) == pytest.approx(110)


# ---------------------------------------------------------------------------
# spread_positions
# ---------------------------------------------------------------------------


class TestSpreadPositions:
    def test_free_cluster(self) -> None:
        lines = _make_lines(100, 102, 104)
        assert _spread(lines, _cluster(lines)) == pytest.approx([87, 102, 117])

    def test_free_cluster_keeps_mean(self) -> None:
        lines = _make_lines(3.0, 17.5, 40.0, 41.0)
        positions = _spread(lines, _cluster(lines))
        assert sum(positions) / 4 == pytest.approx(sum(line.p for line in lines) / 4)

    def test_free_cluster_gaps(self) -> None:
        lines = _make_lines(3.0, 17.5, 40.0, 41.0)
        positions = _spread(lines, _cluster(lines))
        gaps = [b - a for a, b in zip(positions, positions[1:])]
        assert gaps == pytest.approx([15, 15, 15])

    def test_upper_fix(self) -> None:
        lines = _make_lines(100, 102, 104)
        positions = _spread(lines, _cluster(lines, upper_fix=105))
        assert positions == pytest.approx([67.5, 82.5, 97.5])
        assert max(positions) < 105

    def test_lower_fix(self) -> None:
        lines = _make_lines(100, 102, 104)
        positions = _spread(lines, _cluster(lines, lower_fix=95))
        assert positions == pytest.approx([102.5, 117.5, 132.5])
        assert min(positions) > 95

    def test_compressed_between_fixes(self) -> None:
        lines = _make_lines(100, 102, 104)
        positions = _spread(lines, _cluster(lines, upper_fix=110, lower_fix=95))
        assert positions == pytest.approx([97.5, 102.5, 107.5])

    def test_single_member_stays(self) -> None:
        lines = _make_lines(42.0)
        assert _spread(lines, _cluster(lines)) == pytest.approx([42.0])

    def test_order_preserved(self) -> None:
        lines = _make_lines(100, 101, 104, 104.5)
        positions = _spread(lines, _cluster(lines))
        assert positions == sorted(positions)

    def test_positions_stay_inside_bounds(self) -> None:
        lines = _make_lines(100, 102, 104)
        cluster = _cluster(lines, upper_fix=105)
        positions = _spread(lines, cluster)
        lo, hi = lower_b(lines, cluster), upper_b(lines, cluster)
        assert all(lo <= p <= hi for p in positions)

    def test_found_cluster_against_barrier(self) -> None:
        lines = _make_lines(100, 102, 104)
        lines.append(_make_line(105, LType.FIXED))
        lines[-1].lid = 3
        cluster = expand_cluster(lines, 0)
        assert cluster.upper_fix == pytest.approx(105)
        assert _spread(lines, cluster) == pytest.approx([67.5, 82.5, 97.5])

    def test_unreached_fix_leaves_member(self) -> None:
        lines = _make_lines(100)
        assert _spread(lines, _cluster(lines, upper_fix=110)) == pytest.approx([100])

    def test_wide_gap_between_fixes(self) -> None:
        lines = _make_lines(100, 102, 104)
        positions = _spread(lines, _cluster(lines, upper_fix=200, lower_fix=95))
        assert positions == pytest.approx([102.5, 117.5, 132.5])


# ---------------------------------------------------------------------------
# settle_clusters
# ---------------------------------------------------------------------------


def _settle(lines: list[Line]) -> list[Cluster]:
    return settle_clusters(lines, find_clusters(lines))


class TestSettleClusters:
    def test_merges_clusters_that_meet(self) -> None:
        lines = _make_lines(100, 101, 120)
        assert len(find_clusters(lines)) == 2
        settled = _settle(lines)
        assert [c.segments for c in settled] == [(0, 1, 2)]
        assert _spread(lines, settled[0]) == pytest.approx([92, 107, 122])

    def test_merged_members_keep_order(self) -> None:
        lines = _make_lines(100, 101, 102, 103, 119)
        settled = _settle(lines)
        assert len(settled) == 1
        assert _spread(lines, settled[0]) == pytest.approx([75, 90, 105, 120, 135])

    def test_reached_barrier_becomes_fix(self) -> None:
        lines = _make_lines(100, 101, 102, 103)
        lines.append(_make_line(119, LType.FIXED))
        lines[-1].lid = 4
        assert find_clusters(lines)[0].upper_fix is None
        settled = _settle(lines)
        assert settled[0].upper_fix == pytest.approx(119)
        positions = _spread(lines, settled[0])
        assert positions == pytest.approx([66.5, 81.5, 96.5, 111.5])
        assert max(positions) < 119

    def test_barrier_between_blocks_merge(self) -> None:
        lines = _make_lines(100, 102, 104)
        lines[1].l_type = LType.FIXED
        settled = _settle(lines)
        assert [c.segments for c in settled] == [(0,), (2,)]

    def test_disjoint_extents_not_merged(self) -> None:
        lines = _make_lines(100, 101, 120)
        lines[2].b = Bound(200, 300)
        assert [c.segments for c in _settle(lines)] == [(0, 1), (2,)]

    def test_spread_clusters_unchanged(self) -> None:
        lines = _make_lines(87, 102, 117)
        clusters = find_clusters(lines)
        assert settle_clusters(lines, clusters) == clusters

    def test_settled_positions_regroup_identically(self) -> None:
        def spread_all(lines: list[Line]) -> list[float]:
            return sorted(
                p for cluster in _settle(lines) for p in spread_positions(lines, cluster).values()
            )

        first = spread_all(_make_lines(100, 101, 102, 103, 119, 140))
        second = spread_all(_make_lines(*first))
        assert second == pytest.approx(first)
        gaps = [b - a for a, b in zip(first, first[1:])]
        assert gaps == pytest.approx([15] * 5)
