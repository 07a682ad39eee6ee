"""
Three-in-a-row detection on a 3x3 grid.

Used at both scales of the game: the 9 tiles of an inner board and the
9 results of the outer board. Cells are indexed row * 3 + col.
"""

from enum import Enum
from typing import Sequence, TypeVar

T = TypeVar("T")

DIM = 3
DD = DIM * DIM

# Winning lines for a 3x3 board (indices 0..8)
LINES_3 = [
    (0, 1, 2), (3, 4, 5), (6, 7, 8),  # rows
    (0, 3, 6), (1, 4, 7), (2, 5, 8),  # cols
    (0, 4, 8), (2, 4, 6),              # diags
]


class LineOutcome(Enum):
    WIN = "win"
    DRAW = "draw"
    OPEN = "open"


def has_line(cells: Sequence[T], mark: T) -> bool:
    """True if some row, column or diagonal is entirely `mark`."""
    return any(cells[a] == mark and cells[b] == mark and cells[c] == mark for a, b, c in LINES_3)


def winning_line(cells: Sequence[T], mark: T) -> tuple[int, int, int] | None:
    for line in LINES_3:
        if all(cells[i] == mark for i in line):
            return line
    return None


def line_result(cells: Sequence[T], mark: T, empty: T) -> LineOutcome:
    """
    Outcome of a 3x3 grid for the side owning `mark`.
    A completed line wins even when it also fills the last empty cell.
    """
    if len(cells) != DD:
        raise ValueError(f"expected {DD} cells, got {len(cells)}")
    if has_line(cells, mark):
        return LineOutcome.WIN
    if all(cell != empty for cell in cells):
        return LineOutcome.DRAW
    return LineOutcome.OPEN
