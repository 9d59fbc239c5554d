"""Tests for track_parser module."""

from pathlib import Path

import pytest

from track_parser import DEFAULT_ALPHABET, load_track, parse_track
from track_types import CellKind, Coordinate, Track


class TestParseTrack:
    """Tests for the character map parser."""

    def test_simple_track(self) -> None:
        """Parse a small map with every cell kind."""
        track = parse_track("""
            0000
            0120
            0130
            0000
        """)

        assert track.width == 4
        assert track.height == 4
        assert track.cell_at(Coordinate(0, 0)) == CellKind.BOUNDARY
        assert track.cell_at(Coordinate(1, 1)) == CellKind.TRAVERSABLE
        assert track.cell_at(Coordinate(2, 1)) == CellKind.START_GATE
        assert track.cell_at(Coordinate(2, 2)) == CellKind.FINISH_GATE

    def test_pipe_separated_rows(self) -> None:
        """Rows can be separated with | on a single line."""
        track = parse_track("000|010|000")

        assert track.height == 3
        assert track.width == 3
        assert track.cell_at(Coordinate(1, 1)) == CellKind.TRAVERSABLE

    def test_same_track_both_formats(self) -> None:
        """Multi-line and | separated maps give equal tracks."""
        multi_line = parse_track("""
            0220
            0330
        """)
        assert multi_line == parse_track("0220|0330")

    def test_default_alphabet(self) -> None:
        """The default alphabet maps the digits 0-3."""
        assert DEFAULT_ALPHABET == {
            "0": CellKind.BOUNDARY,
            "1": CellKind.TRAVERSABLE,
            "2": CellKind.START_GATE,
            "3": CellKind.FINISH_GATE,
        }

    def test_custom_alphabet(self) -> None:
        """A custom alphabet replaces the default one."""
        alphabet = {
            "#": CellKind.BOUNDARY,
            ".": CellKind.TRAVERSABLE,
            "S": CellKind.START_GATE,
            "F": CellKind.FINISH_GATE,
        }
        track = parse_track("#S#|#F#|#.#", alphabet)

        assert track.cell_at(Coordinate(1, 0)) == CellKind.START_GATE
        assert track.cell_at(Coordinate(1, 1)) == CellKind.FINISH_GATE
        assert track.cell_at(Coordinate(1, 2)) == CellKind.TRAVERSABLE

    def test_custom_alphabet_rejects_digits(self) -> None:
        """Characters outside a custom alphabet are invalid."""
        with pytest.raises(ValueError, match="Invalid character '0'"):
            parse_track("#0#", {"#": CellKind.BOUNDARY})

    def test_invalid_character(self) -> None:
        """Unknown characters report their row and column."""
        with pytest.raises(ValueError) as exc_info:
            parse_track("""
                000
                0x0
                000
            """)

        message = str(exc_info.value)
        assert "Invalid character 'x'" in message
        assert "Row 1" in message
        assert "column 1" in message

    def test_ragged_rows(self) -> None:
        """Rows of different lengths are rejected."""
        with pytest.raises(ValueError) as exc_info:
            parse_track("000|01|000")

        message = str(exc_info.value)
        assert "Inconsistent row lengths" in message
        assert "Row 1: 2 columns" in message

    def test_empty_definition(self) -> None:
        """A map without rows is rejected."""
        with pytest.raises(ValueError, match="Empty track"):
            parse_track("   \n  \n")

    def test_parsed_track_is_immutable(self) -> None:
        """Rows are stored as tuples."""
        track = parse_track("01|10")
        assert isinstance(track.cells, tuple)
        assert all(isinstance(row, tuple) for row in track.cells)

    def test_track_rejects_ragged_rows(self) -> None:
        """Tracks built directly must also be rectangular."""
        with pytest.raises(ValueError, match="same number of cells"):
            Track(((CellKind.BOUNDARY, CellKind.BOUNDARY), (CellKind.BOUNDARY,)))


class TestLoadTrack:
    """Tests for reading maps from files."""

    def test_load_from_file(self, tmp_path: Path) -> None:
        """A map file is read and parsed."""
        path = tmp_path / "track.txt"
        path.write_text("000\n020\n030\n000\n", encoding="utf-8")

        track = load_track(path)

        assert track.height == 4
        assert track.find_first(CellKind.START_GATE) == Coordinate(1, 1)

    def test_load_accepts_str_path(self, tmp_path: Path) -> None:
        """Paths may be given as strings."""
        path = tmp_path / "track.txt"
        path.write_text("010", encoding="utf-8")

        assert load_track(str(path)).width == 3

    def test_missing_file(self, tmp_path: Path) -> None:
        """Missing files propagate the OS error."""
        with pytest.raises(FileNotFoundError):
            load_track(tmp_path / "missing.txt")
