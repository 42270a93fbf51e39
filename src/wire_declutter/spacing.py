"""
Spacing assignment for clusters of parallel segments.

A cluster of n members ideally occupies n * max_segment_separation
centred on the mean of its current positions. A barrier on one side
either pins that side of the span exactly, or pushes the whole span to
the free side when the ideal span would cross it. With barriers on both
sides the span is exactly the gap between them and members are
compressed to fit.

Members are placed in their current order in a block of n equal slots,
each max_segment_separation wide or narrower when the span is too small.
The block sits inside the span as close to centred on the mean as the
span allows.

Clusters are found with a search window of one separation, so a spread
block can reach lines the search never saw. settle_clusters merges
clusters whose blocks would meet and records barriers a block reaches,
until the spread positions no longer regroup.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Optional, Sequence

import numpy as np

from .clustering import Cluster, cluster_points
from .config import DEFAULT_CONFIG, DeclutterConfig
from .geometry import bound_union, has_overlap
from .lines import Line


def width_s(cluster: Cluster, config: DeclutterConfig = DEFAULT_CONFIG) -> float:
    """Ideal width of the span occupied by a cluster."""
    return len(cluster.segments) * config.max_segment_separation


def upper_s(pts: Sequence[float], config: DeclutterConfig = DEFAULT_CONFIG) -> float:
    """Ideal upper bound of a span for members at pts, ignoring barriers."""
    return float(np.mean(pts)) + len(pts) * config.max_segment_separation / 2.0


def lower_s(pts: Sequence[float], config: DeclutterConfig = DEFAULT_CONFIG) -> float:
    """Ideal lower bound of a span for members at pts, ignoring barriers."""
    return float(np.mean(pts)) - len(pts) * config.max_segment_separation / 2.0


def upper_b(
    lines: list[Line],
    cluster: Cluster,
    config: DeclutterConfig = DEFAULT_CONFIG,
) -> float:
    """Upper bound of the span of a cluster, including barrier constraints."""
    pts = cluster_points(lines, cluster)
    if cluster.upper_fix is not None:
        return cluster.upper_fix
    if cluster.lower_fix is not None and lower_s(pts, config) < cluster.lower_fix:
        return cluster.lower_fix + width_s(cluster, config)
    return upper_s(pts, config)


def lower_b(
    lines: list[Line],
    cluster: Cluster,
    config: DeclutterConfig = DEFAULT_CONFIG,
) -> float:
    """Lower bound of the span of a cluster, including barrier constraints."""
    pts = cluster_points(lines, cluster)
    if cluster.lower_fix is not None:
        return cluster.lower_fix
    if cluster.upper_fix is not None and upper_s(pts, config) > cluster.upper_fix:
        return cluster.upper_fix - width_s(cluster, config)
    return lower_s(pts, config)


def spread_positions(
    lines: list[Line],
    cluster: Cluster,
    config: DeclutterConfig = DEFAULT_CONFIG,
) -> dict[int, float]:
    """
    Target p for every member of a cluster.

    Args:
        lines: Line array the cluster indexes into
        cluster: Cluster to spread
        config: Separation distances

    Returns:
        Mapping line index -> new p
    """
    lower = lower_b(lines, cluster, config)
    upper = upper_b(lines, cluster, config)
    n = len(cluster.segments)

    slot = min(config.max_segment_separation, (upper - lower) / n)
    mean = float(np.mean(cluster_points(lines, cluster)))
    start = min(max(mean - n * slot / 2.0, lower), upper - n * slot)

    # Stable sort keeps index order for members at equal p
    order = sorted(cluster.segments, key=lambda i: lines[i].p)
    slots = start + (np.arange(n) + 0.5) * slot
    return {index: float(p) for index, p in zip(order, slots)}


def _reach_barriers(
    lines: list[Line],
    cluster: Cluster,
    barriers: list[int],
    config: DeclutterConfig,
) -> Cluster:
    positions = spread_positions(lines, cluster, config).values()
    top, bottom = max(positions), min(positions)
    pts = cluster_points(lines, cluster)
    reach = config.max_segment_separation + config.small_offset

    upper_fix, lower_fix = cluster.upper_fix, cluster.lower_fix
    for index in barriers:
        line = lines[index]
        if not has_overlap(cluster.bound, line.b):
            continue
        if line.p > max(pts) and line.p - top <= reach:
            if upper_fix is None or line.p < upper_fix:
                upper_fix = line.p
        elif line.p < min(pts) and bottom - line.p <= reach:
            if lower_fix is None or line.p > lower_fix:
                lower_fix = line.p

    if upper_fix == cluster.upper_fix and lower_fix == cluster.lower_fix:
        return cluster
    return replace(cluster, upper_fix=upper_fix, lower_fix=lower_fix)


def _merge(lines: list[Line], a: Cluster, b: Cluster) -> Optional[Cluster]:
    """Union of two clusters, or None if one of their barriers lies between them."""
    segments = tuple(sorted(set(a.segments) | set(b.segments)))
    pts = [lines[i].p for i in segments]
    uppers = [f for f in (a.upper_fix, b.upper_fix) if f is not None]
    lowers = [f for f in (a.lower_fix, b.lower_fix) if f is not None]
    upper_fix = min(uppers) if uppers else None
    lower_fix = max(lowers) if lowers else None
    if upper_fix is not None and upper_fix < max(pts):
        return None
    if lower_fix is not None and lower_fix > min(pts):
        return None
    return Cluster(
        segments=segments,
        bound=bound_union(a.bound, b.bound),
        upper_fix=upper_fix,
        lower_fix=lower_fix,
    )


def _merge_meeting_pair(
    lines: list[Line],
    clusters: list[Cluster],
    config: DeclutterConfig,
) -> Optional[list[Cluster]]:
    reach = config.max_segment_separation + config.small_offset
    positions = [sorted(spread_positions(lines, c, config).values()) for c in clusters]
    for i, a in enumerate(clusters):
        for j in range(i + 1, len(clusters)):
            b = clusters[j]
            if not has_overlap(a.bound, b.bound):
                continue
            pa, pb = positions[i], positions[j]
            if pb[0] > pa[-1] + reach or pa[0] > pb[-1] + reach:
                continue
            merged = _merge(lines, a, b)
            if merged is not None:
                return clusters[:i] + [merged] + clusters[i + 1 : j] + clusters[j + 1 :]
    return None


def settle_clusters(
    lines: list[Line],
    clusters: Sequence[Cluster],
    config: DeclutterConfig = DEFAULT_CONFIG,
) -> list[Cluster]:
    """
    Grow clusters until their spread positions are stable.

    Two clusters whose extents overlap are merged when their spread
    members would come within max_segment_separation of each other,
    unless a barrier of either lies between them. A barrier within one
    separation of a spread block becomes that side's fix. Both steps
    repeat until nothing changes. Every step merges two clusters or
    moves a fix strictly closer to its cluster, so the loop ends.

    Args:
        lines: Line array the clusters index into
        clusters: Clusters from find_clusters
        config: Separation distances

    Returns:
        Settled clusters, members still in increasing index order
    """
    barriers = [i for i, line in enumerate(lines) if line.l_type.is_barrier]
    settled = list(clusters)
    changed = True
    while changed:
        changed = False
        for k, cluster in enumerate(settled):
            fixed = _reach_barriers(lines, cluster, barriers, config)
            if fixed is not cluster:
                settled[k] = fixed
                changed = True
        merged = _merge_meeting_pair(lines, settled, config)
        if merged is not None:
            settled = merged
            changed = True
    return settled


__all__ = [
    "width_s",
    "upper_s",
    "lower_s",
    "upper_b",
    "lower_b",
    "spread_positions",
    "settle_clusters",
]
