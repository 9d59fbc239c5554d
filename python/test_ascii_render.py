"""Tests for ascii_render module."""

import re

from ascii_render import HEADING_CHARS, render_track
from centerline import (
    CellKind,
    Coordinate,
    Direction,
    PositionState,
    Route,
    TerminationReason,
    compute_route,
    parse_track,
)

DEAD_END = parse_track("""
    00000
    00100
    00100
    02220
    03330
    00000
""")


class TestRenderTrack:
    """Tests for plain and coloured rendering."""

    def test_plain_track(self) -> None:
        """Cells are drawn with one character each."""
        output = render_track(DEAD_END, colorize=False)
        assert output.split("\n") == [
            "#####",
            "## ##",
            "## ##",
            "#SSS#",
            "#FFF#",
            "#####",
        ]

    def test_route_arrows(self) -> None:
        """Route positions are drawn as heading arrows."""
        route = compute_route(1, DEAD_END)
        lines = render_track(DEAD_END, route, colorize=False).split("\n")
        assert lines[2] == "##^##"
        assert lines[3] == "#S^S#"

    def test_highlight(self) -> None:
        """The highlighted position is drawn over the route."""
        route = compute_route(1, DEAD_END)
        lines = render_track(DEAD_END, route, highlight=route.final, colorize=False).split("\n")
        assert lines[2] == "##@##"

    def test_every_heading_has_a_char(self) -> None:
        """All 8 headings can be drawn."""
        assert set(HEADING_CHARS) == set(Direction)

    def test_off_track_positions_skipped(self) -> None:
        """Positions outside the grid are ignored."""
        route = Route(
            (PositionState(Coordinate(10, 10), Direction.N, CellKind.TRAVERSABLE),),
            TerminationReason.STALLED,
        )
        assert render_track(DEAD_END, route, colorize=False) == render_track(DEAD_END, colorize=False)

    def test_colorized_keeps_layout(self) -> None:
        """Colouring does not change the visible characters."""
        colored = render_track(DEAD_END)
        stripped = re.sub(r"\x1b\[[0-9;]*m", "", colored)
        assert stripped == render_track(DEAD_END, colorize=False)
