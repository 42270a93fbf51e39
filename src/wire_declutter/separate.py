"""
Declutter passes over a diagram snapshot.

One pass handles one orientation:

1. Extract the line arrays from the wires and symbols
2. Group the movable lines into clusters and settle them
3. Compute evenly spaced target positions per cluster
4. Move each member (and its same-net passengers) onto its target

separate_wires runs the horizontal pass and then the vertical pass on
the updated wires. WireSeparator wraps the same pipeline with the
configuration properties and start/tick/end events used by the layout
classes.
"""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING, Callable, Mapping, Optional

if TYPE_CHECKING:
    from typing_extensions import Self

from .clustering import Cluster, find_clusters
from .config import DEFAULT_CONFIG, DeclutterConfig
from .corners import remove_wire_corners
from .lines import SymbolsLike, as_symbol_list, make_line_info
from .mutation import move_line
from .spacing import settle_clusters, spread_positions
from .types import Event, EventType, Orientation, Symbol, Wire
from .validation import validate_wire_map


def _run_axis(
    wires: Mapping[str, Wire],
    symbols: Optional[SymbolsLike],
    orientation: Orientation,
    config: DeclutterConfig,
) -> tuple[dict[str, Wire], list[Cluster], int]:
    info = make_line_info(wires, symbols, config)
    lines = info.lines(orientation)
    clusters = settle_clusters(lines, find_clusters(lines, config), config)

    result = dict(wires)
    moved = 0
    for cluster in clusters:
        for index, new_p in spread_positions(lines, cluster, config).items():
            leader = lines[index]
            for line in [leader, *leader.same_net_link]:
                if abs(new_p - line.p) < config.small_offset:
                    continue
                result = move_line(orientation, new_p, line, result)
                moved += 1

    return result, clusters, moved


def separate_axis(
    wires: Mapping[str, Wire],
    symbols: Optional[SymbolsLike],
    orientation: Orientation,
    config: DeclutterConfig = DEFAULT_CONFIG,
) -> dict[str, Wire]:
    """
    Run one declutter pass for the segments of one orientation.

    Args:
        wires: Wire map, not modified
        symbols: Symbols whose outlines bound the clusters
        orientation: Which segments to separate
        config: Separation distances

    Returns:
        New wire map with the same keys
    """
    result, _clusters, _moved = _run_axis(wires, symbols, orientation, config)
    return result


def separate_wires(
    wires: Mapping[str, Wire],
    symbols: Optional[SymbolsLike] = None,
    config: DeclutterConfig = DEFAULT_CONFIG,
    remove_corners: bool = False,
) -> dict[str, Wire]:
    """
    Separate horizontal and then vertical segments of all wires.

    Args:
        wires: Wire map, not modified
        symbols: Symbols whose outlines bound the clusters
        config: Separation distances
        remove_corners: Also collapse small corners afterwards

    Returns:
        New wire map with the same keys
    """
    result = separate_axis(wires, symbols, Orientation.HORIZONTAL, config)
    result = separate_axis(result, symbols, Orientation.VERTICAL, config)
    if remove_corners:
        result = remove_wire_corners(result, symbols, config)
    return result


class WireSeparator:
    """
    Separates overlapping parallel wire segments of a diagram.

    Example:
        separator = WireSeparator(
            wires=wire_map,
            symbols=symbols,
            max_segment_separation=15,
        )
        separator.run()

        new_wires = separator.wires
    """

    def __init__(
        self,
        *,
        wires: Optional[Mapping[str, Wire]] = None,
        symbols: Optional[SymbolsLike] = None,
        config: Optional[DeclutterConfig] = None,
        max_segment_separation: Optional[float] = None,
        remove_corners: bool = False,
        on_start: Optional[Callable[[Optional[Event]], None]] = None,
        on_tick: Optional[Callable[[Optional[Event]], None]] = None,
        on_end: Optional[Callable[[Optional[Event]], None]] = None,
    ) -> None:
        """
        Initialize separator with configuration.

        Args:
            wires: Wire map keyed by wire id
            symbols: Symbol map or sequence of symbols
            config: Separation distances (DEFAULT_CONFIG if omitted)
            max_segment_separation: Override for config.max_segment_separation
            remove_corners: Collapse small corners after separation
            on_start: Callback for start event
            on_tick: Callback fired after each axis pass
            on_end: Callback for end event
        """
        self._wires: dict[str, Wire] = {}
        self._symbols: list[Symbol] = []
        self._config: DeclutterConfig = config or DEFAULT_CONFIG
        self._remove_corners = bool(remove_corners)
        self._clusters: dict[Orientation, list[Cluster]] = {}
        self._events: dict[EventType, Callable[[Optional[Event]], None]] = {}

        if wires is not None:
            self.wires = wires
        if symbols is not None:
            self.symbols = symbols
        if max_segment_separation is not None:
            self._config = replace(
                self._config, max_segment_separation=float(max_segment_separation)
            )

        if on_start:
            self._events[EventType.start] = on_start
        if on_tick:
            self._events[EventType.tick] = on_tick
        if on_end:
            self._events[EventType.end] = on_end

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def wires(self) -> dict[str, Wire]:
        """Get the current wire map."""
        return self._wires

    @wires.setter
    def wires(self, value: Mapping[str, Wire]) -> None:
        """Set wires from a wire map (validated, then copied)."""
        self._wires = dict(validate_wire_map(value))

    @property
    def symbols(self) -> list[Symbol]:
        """Get the barrier symbols."""
        return self._symbols

    @symbols.setter
    def symbols(self, value: SymbolsLike) -> None:
        """Set symbols from a symbol map or sequence."""
        self._symbols = as_symbol_list(value)

    @property
    def config(self) -> DeclutterConfig:
        """Get the separation distances."""
        return self._config

    @config.setter
    def config(self, value: DeclutterConfig) -> None:
        self._config = value

    @property
    def clusters(self) -> dict[Orientation, list[Cluster]]:
        """Clusters found by the last run, per orientation."""
        return self._clusters

    # -------------------------------------------------------------------------
    # Event System
    # -------------------------------------------------------------------------

    def on(self, event: EventType | str, callback: Callable[[Optional[Event]], None]) -> Self:
        """
        Subscribe to a separator event.

        Args:
            event: Event type (EventType enum or string name)
            callback: Function to call when event fires

        Returns:
            self (for chaining)
        """
        if isinstance(event, str):
            event = EventType[event]
        self._events[event] = callback
        return self

    def trigger(self, event: Event) -> None:
        """Trigger an event, calling the registered callback."""
        event_type = event.get("type")
        if event_type is not None and event_type in self._events:
            self._events[event_type](event)

    # -------------------------------------------------------------------------
    # Run
    # -------------------------------------------------------------------------

    def run(self) -> Self:
        """
        Separate horizontal segments, then vertical segments.

        Returns:
            self (for chaining)
        """
        self.trigger({"type": EventType.start})

        self._clusters = {}
        wires: dict[str, Wire] = self._wires
        for orientation in (Orientation.HORIZONTAL, Orientation.VERTICAL):
            wires, clusters, moved = _run_axis(wires, self._symbols, orientation, self._config)
            self._clusters[orientation] = clusters
            self.trigger(
                {
                    "type": EventType.tick,
                    "orientation": orientation,
                    "clusters": len(clusters),
                    "moved": moved,
                }
            )

        if self._remove_corners:
            wires = remove_wire_corners(wires, self._symbols, self._config)

        self._wires = wires
        self.trigger({"type": EventType.end})
        return self


__all__ = [
    "separate_axis",
    "separate_wires",
    "WireSeparator",
]
