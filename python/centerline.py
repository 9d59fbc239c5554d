"""
Centerline route finding around a closed-loop track grid.
Locate the start gate -> drive straight -> turn at each wall until the finish gate.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from track_parser import parse_track
from track_types import (
    CellKind,
    Coordinate,
    Direction,
    GateOrientationNotFound,
    Hit,
    NoPath,
    NotFound,
    OutOfBounds,
    PositionState,
    RouteSettings,
    TerminationReason,
    TraceResult,
    Track,
    TrackError,
)
from vectors import CARDINALS, forward_diagonals, opposite, perpendicular_pair, step

__all__ = [
    "CellKind",
    "Coordinate",
    "Direction",
    "GateOrientationNotFound",
    "Hit",
    "NavigationResult",
    "NoPath",
    "NotFound",
    "OutOfBounds",
    "PositionState",
    "Route",
    "RouteSettings",
    "TerminationReason",
    "TraceResult",
    "Track",
    "TrackError",
    "advance",
    "advance_path",
    "cast_ray",
    "compute_route",
    "compute_route_with",
    "correct_path",
    "correct_position",
    "find_finish_line",
    "find_gate_line",
    "find_start_line",
    "gate_orientation",
    "locate_gate_forward",
    "measure_clearance",
    "navigate",
    "parse_track",
    "route_clearance",
]

logger = logging.getLogger(__name__)


# =============================================================================
# Gate Location
# =============================================================================


def gate_orientation(
    opposite_gate_kind: CellKind, coordinate: Coordinate, track: Track
) -> Direction | None:
    """
    Heading of a gate cell: away from its orthogonal neighbour of the opposite gate kind.

    Neighbours are checked N, E, S, W; the first match wins. Neighbours outside
    the grid never match.

    Returns:
        The forward direction, or None if no neighbour matches
    """
    for direction in CARDINALS:
        if track.matches(opposite_gate_kind, step(direction, coordinate)):
            return opposite(direction)
    return None


def locate_gate_forward(
    gate_kind: CellKind, opposite_gate_kind: CellKind, track: Track
) -> PositionState:
    """
    Find the first cell of `gate_kind` and the direction it faces.

    Raises:
        NotFound: If the track has no `gate_kind` cell
        GateOrientationNotFound: If that cell has no `opposite_gate_kind` neighbour
    """
    coordinate = track.find_first(gate_kind)
    heading = gate_orientation(opposite_gate_kind, coordinate, track)
    if heading is None:
        raise GateOrientationNotFound(
            f"{gate_kind.name} cell at ({coordinate.x}, {coordinate.y}) "
            f"has no adjacent {opposite_gate_kind.name} cell"
        )
    return PositionState(coordinate, heading, track.cell_at(coordinate))


def find_gate_line(
    gate_kind: CellKind, opposite_gate_kind: CellKind, track: Track
) -> tuple[PositionState, ...]:
    """
    Enumerate every drivable cell of a gate line.

    Scans outward from the first gate cell along the axis perpendicular to its
    heading. Gate cells facing another way are skipped; the scan on each side
    stops at the first cell that is not `gate_kind`.

    Returns:
        Gate positions ordered west to east (or north to south)
    """
    origin = locate_gate_forward(gate_kind, opposite_gate_kind, track)
    line = [origin]

    for side in perpendicular_pair(origin.heading):
        distance = 1
        while True:
            coordinate = step(side, origin.coordinate, distance)
            distance += 1
            if not track.matches(gate_kind, coordinate):
                break
            if gate_orientation(opposite_gate_kind, coordinate, track) != origin.heading:
                continue
            line.append(origin.moved(coordinate, gate_kind))

    return tuple(sorted(line, key=lambda p: (p.coordinate.y, p.coordinate.x)))


def find_start_line(track: Track) -> tuple[PositionState, ...]:
    return find_gate_line(CellKind.START_GATE, CellKind.FINISH_GATE, track)


def find_finish_line(track: Track) -> tuple[PositionState, ...]:
    return find_gate_line(CellKind.FINISH_GATE, CellKind.START_GATE, track)


# =============================================================================
# Ray Tracing
# =============================================================================


def cast_ray(target_kind: CellKind, origin: PositionState, track: Track) -> TraceResult:
    """
    Step from `origin` along its heading until a cell is not `target_kind`.

    The origin cell itself is not classified. Every matching cell is recorded
    with the origin's heading; an empty path means the first stepped cell
    already failed. Every step moves at least one axis, so a ray leaves the
    grid within max(width, height) steps and `Track.cell_at` ends it there.

    Raises:
        OutOfBounds: If the ray leaves the grid before a hit
    """
    path: list[PositionState] = []
    distance = 1

    while True:
        coordinate = step(origin.heading, origin.coordinate, distance)
        kind = track.cell_at(coordinate)
        if kind != target_kind:
            return TraceResult(tuple(path), Hit(coordinate, kind))
        path.append(origin.moved(coordinate, kind))
        distance += 1


# =============================================================================
# Padding Correction
# =============================================================================


def correct_position(min_padding: int, position: PositionState, track: Track) -> PositionState:
    """
    Shift a position sideways so both sides keep `min_padding` open cells.

    Sides are checked in perpendicular_pair order; the second check starts from
    the outcome of the first. A shift is only taken when it lands on a
    traversable cell, so narrow sections keep whatever padding they can.
    """
    coordinate = position.coordinate

    for side in perpendicular_pair(position.heading):
        trace = cast_ray(CellKind.TRAVERSABLE, PositionState(coordinate, side, position.kind), track)
        clearance = len(trace.path)
        if clearance >= min_padding:
            continue

        shifted = step(opposite(side), coordinate, min_padding - clearance)
        if not track.matches(CellKind.TRAVERSABLE, shifted):
            continue
        coordinate = shifted

    if coordinate == position.coordinate:
        return position
    return position.moved(coordinate, track.cell_at(coordinate))


def correct_path(
    min_padding: int, trace: TraceResult, track: Track, trim_end: bool = True
) -> tuple[PositionState, ...]:
    """
    Correct every position of a ray's path.

    With `trim_end`, the last `min_padding` positions (too close to the wall
    ahead) are dropped before correcting.
    """
    path = trace.path
    if trim_end:
        path = path[: max(len(path) - min_padding, 0)]
    return tuple(correct_position(min_padding, position, track) for position in path)


# =============================================================================
# Traversal
# =============================================================================


@dataclass(frozen=True)
class NavigationResult:
    """Where navigation ended, the positions it drove through, and why it stopped."""

    position: PositionState
    path: tuple[PositionState, ...]
    reason: TerminationReason

    @property
    def stalled(self) -> bool:
        return self.reason == TerminationReason.STALLED


@dataclass(frozen=True)
class Route:
    """
    Ordered positions from the start gate, plus the navigation outcome.

    A route that did not reach the finish is still returned so its partial
    positions can be inspected.
    """

    positions: tuple[PositionState, ...]
    reason: TerminationReason

    @property
    def final(self) -> PositionState:
        return self.positions[-1]

    @property
    def finished(self) -> bool:
        return self.reason == TerminationReason.FINISH_REACHED

    @property
    def stalled(self) -> bool:
        return self.reason == TerminationReason.STALLED

    @property
    def turns(self) -> int:
        """Number of heading changes along the route."""
        return sum(
            1
            for previous, current in zip(self.positions, self.positions[1:])
            if previous.heading != current.heading
        )


def advance_path(
    position: PositionState, min_padding: int, track: Track, trim_end: bool = True
) -> tuple[PositionState, ...]:
    """
    Drive straight along `position.heading` and return every corrected position.

    If the ray stops at the finish gate, the last position is the finish cell
    straight ahead of the last corrected position (or the hit cell itself when
    that one is not a finish cell).

    Raises:
        NoPath: If there is nothing to drive through
    """
    trace = cast_ray(CellKind.TRAVERSABLE, position, track)
    corrected = list(correct_path(min_padding, trace, track, trim_end))

    if trace.boundary.kind == CellKind.FINISH_GATE:
        last = corrected[-1].coordinate if corrected else position.coordinate
        ahead = step(position.heading, last)
        arrival = ahead if track.matches(CellKind.FINISH_GATE, ahead) else trace.boundary.coordinate
        corrected.append(PositionState(arrival, position.heading, CellKind.FINISH_GATE))

    if not corrected:
        raise NoPath(
            f"Blocked at ({position.coordinate.x}, {position.coordinate.y}) "
            f"heading {position.heading.value}"
        )
    return tuple(corrected)


def advance(
    position: PositionState, min_padding: int, track: Track, trim_end: bool = True
) -> PositionState:
    """Drive straight and return the final corrected position. Raises NoPath when blocked."""
    return advance_path(position, min_padding, track, trim_end)[-1]


def _take_turn(
    position: PositionState, min_padding: int, track: Track
) -> tuple[PositionState, ...] | None:
    """First perpendicular candidate that can advance, untrimmed. None if neither can."""
    for candidate in perpendicular_pair(position.heading):
        try:
            return advance_path(position.turned(candidate), min_padding, track, trim_end=False)
        except NoPath:
            continue
    return None


def navigate(
    position: PositionState,
    min_padding: int,
    track: Track,
    max_turns: int = 10_000,
    detect_cycles: bool = True,
) -> NavigationResult:
    """
    Turn and drive until the finish gate is reached or no turn is possible.

    Each round tries the two perpendicular headings in perpendicular_pair order
    and commits to the first one that advances. There is no backtracking: a
    committed turn that later dead-ends stalls the whole navigation.

    Args:
        position: Pose to turn from (usually at a wall)
        min_padding: Clearance to keep from the track sides
        track: The track
        max_turns: Maximum number of turns before giving up
        detect_cycles: Stop when a turn ends at an already visited pose

    Returns:
        NavigationResult with the final pose, every position driven through,
        and the termination reason. A stall leaves `position` unchanged.
    """
    current = position
    path: list[PositionState] = []
    visited: set[tuple[Coordinate, Direction]] = {(position.coordinate, position.heading)}

    for _ in range(max_turns):
        leg = _take_turn(current, min_padding, track)
        if leg is None:
            return NavigationResult(current, tuple(path), TerminationReason.STALLED)

        path.extend(leg)
        current = leg[-1]

        if current.kind == CellKind.FINISH_GATE:
            return NavigationResult(current, tuple(path), TerminationReason.FINISH_REACHED)

        key = (current.coordinate, current.heading)
        if detect_cycles and key in visited:
            return NavigationResult(current, tuple(path), TerminationReason.CYCLE_DETECTED)
        visited.add(key)

    return NavigationResult(current, tuple(path), TerminationReason.MAX_TURNS_REACHED)


def compute_route(
    min_padding: int,
    track: Track,
    gate_index: int | None = None,
    max_turns: int = 10_000,
    detect_cycles: bool = True,
) -> Route:
    """
    Compute the padded route from the start line to the finish line.

    Picks a start line cell (`gate_index` into the ordered start line, the
    middle cell by default), drives straight away from the finish line, then
    navigates turn by turn.

    Raises:
        NotFound: If the track has no start or finish cells
        GateOrientationNotFound: If the start line does not touch the finish line
        OutOfBounds: If the track is not enclosed by boundary cells
        ValueError: If `gate_index` is outside the start line
    """
    start_line = find_start_line(track)
    index = len(start_line) // 2 if gate_index is None else gate_index
    if not 0 <= index < len(start_line):
        raise ValueError(
            f"Gate index {index} outside start line of {len(start_line)} cells"
        )

    gate = start_line[index]
    logger.debug(
        "start pose (%d, %d) heading %s, line of %d cells",
        gate.coordinate.x,
        gate.coordinate.y,
        gate.heading.value,
        len(start_line),
    )

    positions: list[PositionState] = [gate]
    try:
        positions.extend(advance_path(gate, min_padding, track))
    except NoPath:
        logger.debug("start pose blocked ahead, turning from the gate")

    if positions[-1].kind == CellKind.FINISH_GATE:
        route = Route(tuple(positions), TerminationReason.FINISH_REACHED)
    else:
        result = navigate(positions[-1], min_padding, track, max_turns, detect_cycles)
        positions.extend(result.path)
        route = Route(tuple(positions), result.reason)

    for previous, current in zip(route.positions, route.positions[1:]):
        if previous.heading != current.heading:
            logger.debug(
                "turn %s -> %s at (%d, %d)",
                previous.heading.value,
                current.heading.value,
                current.coordinate.x,
                current.coordinate.y,
            )

    final = route.final
    if route.finished:
        logger.info(
            "route finished at (%d, %d): %d positions, %d turns",
            final.coordinate.x,
            final.coordinate.y,
            len(route.positions),
            route.turns,
        )
    else:
        logger.warning(
            "route ended (%s) at (%d, %d) heading %s after %d positions",
            route.reason.value,
            final.coordinate.x,
            final.coordinate.y,
            final.heading.value,
            len(route.positions),
        )
    return route


def compute_route_with(settings: RouteSettings, track: Track) -> Route:
    return compute_route(
        settings.min_padding,
        track,
        gate_index=settings.gate_index,
        max_turns=settings.max_turns,
        detect_cycles=settings.detect_cycles,
    )


# =============================================================================
# Clearance
# =============================================================================


def measure_clearance(position: PositionState, track: Track) -> dict[Direction, int]:
    """Open cells in each of the 8 directions before the first non-traversable cell."""
    return {
        direction: len(cast_ray(CellKind.TRAVERSABLE, position.turned(direction), track).path)
        for direction in Direction
    }


def route_clearance(route: Route, track: Track) -> int | None:
    """
    Smallest side or forward-corner clearance over the route's open positions.

    Gate positions are not measured. Returns None if there is nothing to measure.
    """
    smallest: int | None = None
    for position in route.positions:
        if position.kind != CellKind.TRAVERSABLE:
            continue
        clearance = measure_clearance(position, track)
        sides = perpendicular_pair(position.heading) + forward_diagonals(position.heading)
        value = min(clearance[direction] for direction in sides)
        smallest = value if smallest is None else min(smallest, value)
    return smallest
