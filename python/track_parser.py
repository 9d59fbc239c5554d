"""
Track map parsing for Centerline.

A map is a block of single-character rows, one character per cell. Rows are
separated by newlines or by |. The default alphabet is:
  * '0': Boundary
  * '1': Traversable
  * '2': Start gate
  * '3': Finish gate
"""

from __future__ import annotations

from pathlib import Path

from track_types import CellKind, Track

__all__ = ["DEFAULT_ALPHABET", "parse_track", "load_track"]

DEFAULT_ALPHABET: dict[str, CellKind] = {kind.value: kind for kind in CellKind}


def parse_track(definition: str, alphabet: dict[str, CellKind] | None = None) -> Track:
    """
    Parse a track from its character map.

    Leading/trailing blank lines and per-line indentation are ignored, so maps
    can be written as indented triple-quoted strings.

    Example:
        \"\"\"
        00000
        03330
        02220
        01110
        00000
        \"\"\"

    Args:
        definition: The character map
        alphabet: Character -> CellKind mapping (defaults to DEFAULT_ALPHABET)

    Returns:
        The parsed Track

    Raises:
        ValueError: On unknown characters, ragged rows or an empty map
    """
    if alphabet is None:
        alphabet = DEFAULT_ALPHABET

    row_strings = [
        line.strip()
        for line in definition.replace("|", "\n").split("\n")
        if line.strip()
    ]
    if not row_strings:
        raise ValueError("Empty track definition")

    rows: list[tuple[CellKind, ...]] = []
    for row_idx, row_str in enumerate(row_strings):
        cells: list[CellKind] = []
        for col_idx, char in enumerate(row_str):
            if char not in alphabet:
                raise ValueError(
                    f"Invalid character '{char}' in track\n"
                    f"  Row {row_idx}: \"{row_str}\"\n"
                    f"  Position: column {col_idx}\n"
                    f"  Valid characters: {', '.join(repr(c) for c in sorted(alphabet))}"
                )
            cells.append(alphabet[char])
        rows.append(tuple(cells))

    # Validate all rows have same length
    cols = len(rows[0])
    mismatched = [(i, len(row)) for i, row in enumerate(rows) if len(row) != cols]
    if mismatched:
        error_msg = (
            f"Inconsistent row lengths in track\n"
            f"  Expected: {cols} columns (from row 0)\n"
            f"  Mismatched rows:\n"
        )
        for row_idx, actual_cols in mismatched:
            error_msg += f"    Row {row_idx}: {actual_cols} columns - \"{row_strings[row_idx]}\"\n"
        error_msg += "  All rows must have the same number of cells"
        raise ValueError(error_msg)

    return Track(tuple(rows))


def load_track(path: str | Path, alphabet: dict[str, CellKind] | None = None) -> Track:
    """Read and parse a track map file."""
    return parse_track(Path(path).read_text(encoding="utf-8"), alphabet)
