"""
Shared type definitions for the centerline system.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Direction(Enum):
    """Compass direction for stepping. Diagonals are only used for clearance rays."""

    N = "N"  # Up (decreasing y)
    E = "E"  # Right (increasing x)
    S = "S"  # Down (increasing y)
    W = "W"  # Left (decreasing x)
    NE = "NE"
    SE = "SE"
    SW = "SW"
    NW = "NW"


class CellKind(Enum):
    """Classification of a track cell. Values are the map alphabet characters."""

    BOUNDARY = "0"
    TRAVERSABLE = "1"
    START_GATE = "2"
    FINISH_GATE = "3"


class TerminationReason(Enum):
    """Reason why navigation terminated."""

    FINISH_REACHED = "finish_reached"  # Stepped onto the finish gate
    STALLED = "stalled"  # Neither turn candidate could advance
    CYCLE_DETECTED = "cycle_detected"  # Revisited a turn pose
    MAX_TURNS_REACHED = "max_turns_reached"  # Hit max_turns limit


# =============================================================================
# Errors
# =============================================================================


class TrackError(Exception):
    """Base class for track analysis errors."""


class OutOfBounds(TrackError, IndexError):
    """A coordinate lookup or ray left the grid."""


class NotFound(TrackError, LookupError):
    """The requested cell kind does not occur in the grid."""


class GateOrientationNotFound(TrackError):
    """A gate cell has no orthogonal neighbour of the opposite gate kind."""


class NoPath(TrackError):
    """An advance was blocked immediately. Handled inside navigation."""


# =============================================================================
# Geometry Values
# =============================================================================


@dataclass(frozen=True)
class Coordinate:
    """A position in grid space (x = column, y = row)."""

    x: int
    y: int


@dataclass(frozen=True)
class PositionState:
    """Standing at `coordinate`, facing `heading`, on a cell classified `kind`."""

    coordinate: Coordinate
    heading: Direction
    kind: CellKind

    def turned(self, heading: Direction) -> PositionState:
        return PositionState(self.coordinate, heading, self.kind)

    def moved(self, coordinate: Coordinate, kind: CellKind) -> PositionState:
        return PositionState(coordinate, self.heading, kind)


@dataclass(frozen=True)
class Hit:
    """The first cell that failed a ray's type test."""

    coordinate: Coordinate
    kind: CellKind


@dataclass(frozen=True)
class TraceResult:
    """Outcome of one ray cast: matching cells in order plus the cell that stopped it."""

    path: tuple[PositionState, ...]
    boundary: Hit


# =============================================================================
# Track Definition
# =============================================================================


@dataclass(frozen=True)
class Track:
    """A rectangular grid of cell kinds."""

    cells: tuple[tuple[CellKind, ...], ...]

    def __post_init__(self) -> None:
        if any(len(row) != len(self.cells[0]) for row in self.cells):
            raise ValueError("All track rows must have the same number of cells")

    @property
    def height(self) -> int:
        return len(self.cells)

    @property
    def width(self) -> int:
        return len(self.cells[0]) if self.cells else 0

    @property
    def stride(self) -> int:
        return self.width

    @property
    def flat(self) -> tuple[CellKind, ...]:
        """Row-major serialised form of the grid."""
        return tuple(kind for row in self.cells for kind in row)

    def contains(self, coordinate: Coordinate) -> bool:
        return 0 <= coordinate.x < self.width and 0 <= coordinate.y < self.height

    def cell_at(self, coordinate: Coordinate) -> CellKind:
        if not self.contains(coordinate):
            raise OutOfBounds(
                f"Coordinate ({coordinate.x}, {coordinate.y}) outside "
                f"{self.width}x{self.height} track"
            )
        return self.cells[coordinate.y][coordinate.x]

    def matches(self, kind: CellKind, coordinate: Coordinate) -> bool:
        """True if the cell is in the grid and of the given kind."""
        return self.contains(coordinate) and self.cells[coordinate.y][coordinate.x] == kind

    def index_of(self, coordinate: Coordinate) -> int:
        return coordinate.y * self.stride + coordinate.x

    def coordinate_at(self, index: int) -> Coordinate:
        return Coordinate(index % self.stride, index // self.stride)

    def find_first(self, kind: CellKind, start_index: int = 0) -> Coordinate:
        """
        Scan the flattened grid in row-major order for the first cell of `kind`.

        Args:
            kind: Cell kind to look for
            start_index: Flat index to start scanning from

        Returns:
            Coordinate of the first match

        Raises:
            NotFound: If no cell of `kind` occurs at or after `start_index`
        """
        flat = self.flat
        for index in range(max(start_index, 0), len(flat)):
            if flat[index] == kind:
                return self.coordinate_at(index)
        raise NotFound(f"No {kind.name} cell at or after index {start_index}")


@dataclass(frozen=True)
class RouteSettings:
    """Parameters governing route computation."""

    min_padding: int = 2
    gate_index: int | None = None  # None = middle of the start line
    max_turns: int = 10_000
    detect_cycles: bool = True
