"""
ASCII rendering for Centerline tracks and routes.

Draws the track as a character buffer, overlays the route with heading arrows,
and colours everything with simple_chalk.
"""

from __future__ import annotations

import logging
from typing import Callable

from simple_chalk import chalk  # type: ignore[import-untyped]

from centerline import Route
from track_types import CellKind, Coordinate, Direction, PositionState, Track

__all__ = ["CELL_CHARS", "HEADING_CHARS", "render_track"]

logger = logging.getLogger(__name__)

CELL_CHARS: dict[CellKind, str] = {
    CellKind.BOUNDARY: "#",
    CellKind.TRAVERSABLE: " ",
    CellKind.START_GATE: "S",
    CellKind.FINISH_GATE: "F",
}

HEADING_CHARS: dict[Direction, str] = {
    Direction.N: "^",
    Direction.E: ">",
    Direction.S: "v",
    Direction.W: "<",
    Direction.NE: "/",
    Direction.SW: "/",
    Direction.NW: "\\",
    Direction.SE: "\\",
}


def _plain(s: str) -> str:
    return s


def render_track(
    track: Track,
    route: Route | None = None,
    highlight: PositionState | None = None,
    colorize: bool = True,
) -> str:
    """
    Render a track (and optionally a route) to a string.

    Args:
        track: The track to draw
        route: Optional route; each position is drawn as an arrow for its heading,
               later positions overwriting earlier ones on the same cell
        highlight: Optional position to draw in white (e.g. the current step)
        colorize: Add ANSI colours; False gives plain text

    Returns:
        One line per track row
    """
    cell_colors: dict[CellKind, Callable[[str], str]] = {
        CellKind.BOUNDARY: chalk.blue,
        CellKind.TRAVERSABLE: _plain,
        CellKind.START_GATE: chalk.green,
        CellKind.FINISH_GATE: chalk.red,
    }

    def color(kind: CellKind) -> Callable[[str], str]:
        return cell_colors[kind] if colorize else _plain

    # Create buffer
    buffer: list[list[str]] = [
        [color(kind)(CELL_CHARS[kind]) for kind in row] for row in track.cells
    ]

    def draw(coordinate: Coordinate, char: str) -> None:
        if not track.contains(coordinate):
            logger.warning("skipping off-track position (%d, %d)", coordinate.x, coordinate.y)
            return
        buffer[coordinate.y][coordinate.x] = char

    if route is not None:
        route_color = chalk.yellow if colorize else _plain
        for position in route.positions:
            draw(position.coordinate, route_color(HEADING_CHARS[position.heading]))

    if highlight is not None:
        highlight_color = chalk.white if colorize else _plain
        draw(highlight.coordinate, highlight_color("@"))

    # Convert to string
    return "\n".join("".join(row) for row in buffer)
