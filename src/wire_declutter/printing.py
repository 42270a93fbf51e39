"""Compact text dumps of wires, lines and clusters for debugging."""

from __future__ import annotations

from typing import Any, Optional

from .clustering import Cluster
from .lines import Line
from .types import Orientation, Wire
from .wires import get_abs_segments


def p_wire(wire: Wire) -> str:
    """One-line summary of a wire, e.g. 'W5:horizontal->Rt10-Dn20-S0-Up5-Rt10'."""
    parts: list[str] = []
    for aseg in get_abs_segments(wire):
        if aseg.is_zero():
            parts.append("S0")
            continue
        if aseg.orientation is Orientation.VERTICAL:
            direction = "Dn" if aseg.segment.length > 0 else "Up"
        else:
            direction = "Rt" if aseg.segment.length > 0 else "Lt"
        parts.append(f"{direction}{abs(aseg.segment.length):.0f}")
    return f"W{len(wire.segments)}:{wire.initial_orientation.value}->{'-'.join(parts)}"


def p_opt(x: Optional[Any]) -> str:
    return "None" if x is None else f"^{x}^"


def p_line(line: Line) -> str:
    ori = "H" if line.orientation is Orientation.HORIZONTAL else "V"
    return (
        f"|{ori}L{line.lid}.P={line.p:.0f}.{line.l_type.name}"
        f":B={line.b.min_b:.0f}-{line.b.max_b:.0f}|"
    )


def p_lines(lines: list[Line]) -> str:
    return "\n".join(p_line(line) for line in lines)


def p_cluster(cluster: Cluster) -> str:
    return f"Cluster:<{p_opt(cluster.lower_fix)}-{list(cluster.segments)}-{p_opt(cluster.upper_fix)}>"


def p_all_cluster(lines: list[Line], cluster: Cluster) -> str:
    """Cluster with each member line written out."""
    oris = "Horiz" if lines[0].orientation is Orientation.HORIZONTAL else "Vert"
    members = ",".join(p_line(lines[n]) for n in cluster.segments)
    return f"Cluster-{oris}:<L={p_opt(cluster.lower_fix)}-{members}-U={p_opt(cluster.upper_fix)}>"


__all__ = [
    "p_wire",
    "p_opt",
    "p_line",
    "p_lines",
    "p_cluster",
    "p_all_cluster",
]
