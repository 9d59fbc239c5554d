"""
Interactive viewer for Centerline routes.
Compute a route on a sample track and step through it with keyboard commands.
"""

import logging
import sys

import readchar
from rich.console import Console
from rich.live import Live
from rich.panel import Panel
from rich.text import Text

from ascii_render import render_track
from centerline import (
    Route,
    RouteSettings,
    Track,
    TrackError,
    compute_route_with,
    parse_track,
    route_clearance,
)


class RouteViewer:
    """Step through a computed route one position at a time."""

    def __init__(self, track: Track, settings: RouteSettings) -> None:
        self.track = track
        self.settings = settings
        self.console = Console()
        self.route: Route = compute_route_with(settings, track)
        self.step = 0
        self.status_message = "Ready"

    def generate_display(self) -> Panel:
        """Generate the current display with track, route so far and status."""
        shown = Route(self.route.positions[: self.step + 1], self.route.reason)
        current = self.route.positions[self.step]
        grid_text = render_track(self.track, shown, highlight=current)

        status = Text()
        status.append("Step: ", style="bold")
        status.append(f"{self.step + 1}/{len(self.route.positions)}\n")
        status.append("Position: ", style="bold")
        status.append(
            f"({current.coordinate.x}, {current.coordinate.y}) "
            f"heading {current.heading.value} on {current.kind.name}\n"
        )
        status.append("Outcome: ", style="bold")
        outcome_style = "green" if self.route.finished else "red"
        status.append(f"{self.route.reason.value}", style=outcome_style)
        status.append(f" after {self.route.turns} turns\n\n")

        status.append(Text.from_ansi(grid_text))
        status.append("\n\n")
        status.append("Keys:\n", style="bold cyan")
        status.append("  D - Next position\n")
        status.append("  A - Previous position\n")
        status.append("  E - Jump to end\n")
        status.append("  R - Back to start\n")
        status.append("  Q - Quit\n\n")

        status.append("─" * 40 + "\n", style="dim")
        status.append("Status: ", style="bold")
        status.append(self.status_message)

        border_style = "green" if self.route.finished else "yellow"
        return Panel(
            status,
            title=f"Centerline (padding {self.settings.min_padding})",
            border_style=border_style,
            width=max(self.track.width + 4, 60),
        )

    def move(self, offset: int) -> None:
        last = len(self.route.positions) - 1
        target = min(max(self.step + offset, 0), last)
        if target == self.step:
            self.status_message = "At the end of the route" if offset > 0 else "At the start"
            return
        self.step = target
        self.status_message = f"Moved to step {self.step + 1}"

    def run(self) -> None:
        """Run the viewer until the user quits."""
        with Live(self.generate_display(), console=self.console, refresh_per_second=4) as live:
            try:
                while True:
                    live.update(self.generate_display())

                    key = readchar.readkey()

                    if key.lower() == "q":
                        self.status_message = "Quitting..."
                        live.update(self.generate_display())
                        break
                    elif key.lower() == "r":
                        self.step = 0
                        self.status_message = "Back at the start line"
                    elif key.lower() == "e":
                        self.step = len(self.route.positions) - 1
                        self.status_message = "Jumped to the end"
                    elif key.lower() == "d" or key == readchar.key.RIGHT:
                        self.move(1)
                    elif key.lower() == "a" or key == readchar.key.LEFT:
                        self.move(-1)
                    else:
                        self.status_message = f"Unknown key: {repr(key)}"

            except KeyboardInterrupt:
                self.status_message = "Interrupted by user"
                live.update(self.generate_display())


LAYOUTS = dict(
    loop="""
        00000000000
        01111111110
        01111111110
        01111111110
        01110001110
        02220001110
        03330001110
        01111111110
        01111111110
        01111111110
        00000000000
    """,
    circuit="""
        00000000000000000
        01111111111111110
        01111111111111110
        01111111111111110
        01111111111111110
        01111111111111110
        01111100000111110
        02222200000111110
        03333300000111110
        01111111111111110
        01111111111111110
        01111111111111110
        01111111111111110
        01111111111111110
        00000000000000000
    """,
    dead_end="""
        00000
        00100
        00100
        02220
        03330
        00000
    """,
)

DEFAULT_PADDING = {"loop": 1, "circuit": 2, "dead_end": 1}


def print_static(layout: str, padding: int) -> None:
    """Compute and print a route once, with logging enabled."""
    track = parse_track(LAYOUTS[layout])
    route = compute_route_with(RouteSettings(min_padding=padding), track)
    print(render_track(track, route))
    print()
    print(f"{route.reason.value}: {len(route.positions)} positions, {route.turns} turns")
    print(f"smallest clearance: {route_clearance(route, track)}")


def main(layout: str, padding: int) -> None:
    """Run the interactive viewer on a sample track."""
    viewer = RouteViewer(parse_track(LAYOUTS[layout]), RouteSettings(min_padding=padding))
    viewer.run()


if __name__ == "__main__":
    args = sys.argv[1:]
    static = bool(args) and args[0] == "static"
    if static:
        args = args[1:]

    layout = args[0] if args else "circuit"
    padding = int(args[1]) if len(args) > 1 else DEFAULT_PADDING.get(layout, 2)

    try:
        if static:
            logging.basicConfig(level=logging.DEBUG, format="%(levelname)s: %(message)s")
            print_static(layout, padding)
        else:
            main(layout, padding)
    except TrackError as e:
        print(f"ERROR: {e}")
        sys.exit(1)
