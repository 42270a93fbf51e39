"""
Cluster builder for wire separation.

Groups overlapping and adjacent movable lines of one orientation into
clusters that are then spread apart. A cluster grows outward from a seed
line through the p-sorted line array, first upward (increasing index)
then downward, and records the barrier that stopped each direction.

The search in one direction:
- gives up once a line lies more than max_segment_separation (plus
  small_offset) beyond the last line absorbed
- skips LINKEDSEG passengers and lines whose extent misses the cluster
- stops at a barrier, recording its p as upper_fix / lower_fix
- stops at a line already placed by an earlier cluster
- otherwise absorbs the line and widens the cluster bound
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import AbstractSet, Optional

from .config import DEFAULT_CONFIG, DeclutterConfig
from .geometry import Bound, bound_union, has_overlap
from .lines import Line, LType


@dataclass(frozen=True)
class Cluster:
    """
    Overlapping movable lines to be spread out together.

    upper_fix, when set, is >= every member p; lower_fix is <= every member p.
    """

    segments: tuple[int, ...]  # Indices of member lines, never empty
    bound: Bound  # Union of member bounds
    upper_fix: Optional[float] = None  # p of the barrier that stopped the upward search
    lower_fix: Optional[float] = None  # p of the barrier that stopped the downward search


class SearchDirection(Enum):
    """Direction of cluster growth through the line array."""

    UPWARDS = 1
    DOWNWARDS = -1


@dataclass
class _Cursor:
    index: int
    last_p: float
    absorbed: list[int] = field(default_factory=list)


def _search(
    lines: list[Line],
    cluster: Cluster,
    seed: int,
    direction: SearchDirection,
    config: DeclutterConfig,
    excluded: AbstractSet[int],
) -> Cluster:
    step = direction.value
    cursor = _Cursor(index=seed + step, last_p=lines[seed].p)
    bound = cluster.bound
    fix: Optional[float] = None

    while 0 <= cursor.index < len(lines):
        line = lines[cursor.index]
        if abs(line.p - cursor.last_p) > config.max_segment_separation + config.small_offset:
            break
        if line.l_type is LType.LINKEDSEG or not has_overlap(bound, line.b):
            cursor.index += step
            continue
        if line.l_type.is_barrier:
            fix = line.p
            break
        if cursor.index in excluded:
            break
        cursor.absorbed.append(cursor.index)
        cursor.last_p = line.p
        bound = bound_union(bound, line.linked_bound)
        cursor.index += step

    if direction is SearchDirection.UPWARDS:
        return replace(
            cluster,
            segments=cluster.segments + tuple(cursor.absorbed),
            bound=bound,
            upper_fix=fix,
        )
    return replace(
        cluster,
        segments=tuple(reversed(cursor.absorbed)) + cluster.segments,
        bound=bound,
        lower_fix=fix,
    )


def expand_cluster(
    lines: list[Line],
    seed: int,
    config: DeclutterConfig = DEFAULT_CONFIG,
    excluded: AbstractSet[int] = frozenset(),
) -> Cluster:
    """
    Grow a cluster from a seed line.

    Args:
        lines: Lines of one orientation, sorted by p
        seed: Index of a NORMSEG line to start from
        config: Separation distances
        excluded: Indices already placed in other clusters

    Returns:
        Cluster with member indices in increasing index order
    """
    seed_line = lines[seed]
    cluster = Cluster(segments=(seed,), bound=seed_line.linked_bound)
    cluster = _search(lines, cluster, seed, SearchDirection.UPWARDS, config, excluded)
    return _search(lines, cluster, seed, SearchDirection.DOWNWARDS, config, excluded)


def find_clusters(lines: list[Line], config: DeclutterConfig = DEFAULT_CONFIG) -> list[Cluster]:
    """
    Partition all NORMSEG lines of one orientation into clusters.

    Seeds are taken in index order; every movable line ends up in
    exactly one cluster.
    """
    placed: set[int] = set()
    clusters: list[Cluster] = []
    for index, line in enumerate(lines):
        if line.l_type is not LType.NORMSEG or index in placed:
            continue
        cluster = expand_cluster(lines, index, config, placed)
        placed.update(cluster.segments)
        clusters.append(cluster)
    return clusters


def cluster_points(lines: list[Line], cluster: Cluster) -> list[float]:
    """p values of the members of a cluster."""
    return [lines[n].p for n in cluster.segments]


__all__ = [
    "Cluster",
    "SearchDirection",
    "expand_cluster",
    "find_clusters",
    "cluster_points",
]
