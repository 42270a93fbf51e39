"""
wire-declutter: separation of overlapping orthogonal wire segments.

Given the wires of a schematic and the outlines of its symbols, groups
parallel wire segments that run on top of or close to each other into
clusters and spreads each cluster out evenly, bounded by symbol edges
and segments that must not move.

Main entry points:
- separate_wires: horizontal then vertical pass over a wire map
- separate_axis: a single pass for one orientation
- WireSeparator: the same pipeline with configuration and events
"""

__version__ = "0.1.0"

from .clustering import Cluster, SearchDirection, expand_cluster, find_clusters
from .config import DEFAULT_CONFIG, DeclutterConfig
from .corners import WireCorner, find_wire_corners, remove_corner, remove_wire_corners
from .geometry import (
    Bound,
    bound_union,
    fix_bounding_box,
    has_near_overlap,
    has_overlap,
    overlap_1d,
    overlap_2d,
    overlap_2d_box,
)
from .lines import (
    Line,
    LineInfo,
    LType,
    get_visible_nub_length,
    make_line_info,
    segment_is_nub_extension,
)
from .mutation import move_line, move_segment, update_wires
from .separate import WireSeparator, separate_axis, separate_wires
from .spacing import (
    lower_b,
    lower_s,
    settle_clusters,
    spread_positions,
    upper_b,
    upper_s,
    width_s,
)
from .types import (
    BoundingBox,
    Event,
    EventType,
    Orientation,
    RoutingMode,
    Segment,
    Symbol,
    SymbolEdge,
    Wire,
    XYPos,
    make_wire,
)
from .validation import (
    BarrierMoveError,
    InvalidConfigError,
    InvalidOperationError,
    InvalidWireError,
    NubMoveError,
    ValidationError,
    WireStructureWarning,
)

__all__ = [
    # Version
    "__version__",
    # Pipeline
    "WireSeparator",
    "separate_axis",
    "separate_wires",
    # Configuration
    "DeclutterConfig",
    "DEFAULT_CONFIG",
    # Types
    "BoundingBox",
    "Event",
    "EventType",
    "Orientation",
    "RoutingMode",
    "Segment",
    "Symbol",
    "SymbolEdge",
    "Wire",
    "XYPos",
    "make_wire",
    # Geometry
    "Bound",
    "bound_union",
    "fix_bounding_box",
    "has_near_overlap",
    "has_overlap",
    "overlap_1d",
    "overlap_2d",
    "overlap_2d_box",
    # Lines
    "Line",
    "LineInfo",
    "LType",
    "get_visible_nub_length",
    "make_line_info",
    "segment_is_nub_extension",
    # Clustering and spacing
    "Cluster",
    "SearchDirection",
    "expand_cluster",
    "find_clusters",
    "lower_b",
    "lower_s",
    "settle_clusters",
    "spread_positions",
    "upper_b",
    "upper_s",
    "width_s",
    # Mutation
    "move_line",
    "move_segment",
    "update_wires",
    # Corners
    "WireCorner",
    "find_wire_corners",
    "remove_corner",
    "remove_wire_corners",
    # Errors
    "BarrierMoveError",
    "InvalidConfigError",
    "InvalidOperationError",
    "InvalidWireError",
    "NubMoveError",
    "ValidationError",
    "WireStructureWarning",
]
