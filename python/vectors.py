"""
Direction arithmetic on grid coordinates.

North decreases y, east increases x. Diagonals move both axes by the same amount.
"""

from __future__ import annotations

from track_types import Coordinate, Direction

__all__ = [
    "CARDINALS",
    "DIAGONALS",
    "delta",
    "step",
    "opposite",
    "perpendicular_pair",
    "forward_diagonals",
]

# Neighbour lookup order for gate orientation
CARDINALS: tuple[Direction, ...] = (Direction.N, Direction.E, Direction.S, Direction.W)
DIAGONALS: tuple[Direction, ...] = (Direction.NE, Direction.SE, Direction.SW, Direction.NW)


def delta(direction: Direction) -> tuple[int, int]:
    """Unit (dx, dy) for a direction."""
    match direction:
        case Direction.N:
            return (0, -1)
        case Direction.E:
            return (1, 0)
        case Direction.S:
            return (0, 1)
        case Direction.W:
            return (-1, 0)
        case Direction.NE:
            return (1, -1)
        case Direction.SE:
            return (1, 1)
        case Direction.SW:
            return (-1, 1)
        case Direction.NW:
            return (-1, -1)
    raise ValueError(f"Unknown direction: {direction}")


def step(direction: Direction, coordinate: Coordinate, magnitude: int = 1) -> Coordinate:
    """Move `magnitude` cells in `direction`. Never bounds-checks."""
    dx, dy = delta(direction)
    return Coordinate(coordinate.x + dx * magnitude, coordinate.y + dy * magnitude)


def opposite(direction: Direction) -> Direction:
    match direction:
        case Direction.N:
            return Direction.S
        case Direction.E:
            return Direction.W
        case Direction.S:
            return Direction.N
        case Direction.W:
            return Direction.E
        case Direction.NE:
            return Direction.SW
        case Direction.SE:
            return Direction.NW
        case Direction.SW:
            return Direction.NE
        case Direction.NW:
            return Direction.SE
    raise ValueError(f"Unknown direction: {direction}")


def perpendicular_pair(direction: Direction) -> tuple[Direction, Direction]:
    """
    The two directions orthogonal to `direction`, clockwise first.

    The order is the turn preference of navigation and the order in which
    padding corrections are applied.
    """
    match direction:
        case Direction.N:
            return (Direction.E, Direction.W)
        case Direction.E:
            return (Direction.S, Direction.N)
        case Direction.S:
            return (Direction.W, Direction.E)
        case Direction.W:
            return (Direction.N, Direction.S)
        case Direction.NE:
            return (Direction.SE, Direction.NW)
        case Direction.SE:
            return (Direction.SW, Direction.NE)
        case Direction.SW:
            return (Direction.NW, Direction.SE)
        case Direction.NW:
            return (Direction.NE, Direction.SW)
    raise ValueError(f"Unknown direction: {direction}")


def forward_diagonals(direction: Direction) -> tuple[Direction, Direction]:
    """Diagonals leaning forward to either side of a cardinal heading."""
    match direction:
        case Direction.N:
            return (Direction.NE, Direction.NW)
        case Direction.E:
            return (Direction.SE, Direction.NE)
        case Direction.S:
            return (Direction.SW, Direction.SE)
        case Direction.W:
            return (Direction.NW, Direction.SW)
    raise ValueError(f"No forward diagonals for {direction}")
