"""
Mine field module.

Holds the ground-truth mine layout of a game and answers adjacency
queries. The field owns no visibility state; see overlay.VisibleField
for what the player can see.
"""
import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

import numpy as np

from .errors import InvalidFieldError, OutOfRangeError


logger = logging.getLogger(__name__)


# ============================================================================
# Configuration
# ============================================================================

def mine_density_ok(rows: int, cols: int, num_mines: int) -> bool:
    """Check that num_mines stays below a third of the squares."""
    return 0 <= num_mines and 3 * num_mines < rows * cols


@dataclass(frozen=True)
class FieldConfig:
    """
    Configuration for a randomly populated mine field.

    Attributes:
        rows: Number of rows.
        cols: Number of columns.
        num_mines: Mines placed on each populate.
    """

    rows: int = 9
    cols: int = 9
    num_mines: int = 10

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.rows < 1 or self.cols < 1:
            raise InvalidFieldError("Field dimensions must be positive")
        if self.num_mines < 0:
            raise InvalidFieldError("Number of mines cannot be negative")
        if not mine_density_ok(self.rows, self.cols, self.num_mines):
            raise InvalidFieldError(
                f"Too many mines: {self.num_mines} must be less than a third "
                f"of {self.rows * self.cols} squares"
            )


# Preset difficulty levels
BEGINNER = FieldConfig(9, 9, 10)
INTERMEDIATE = FieldConfig(16, 16, 40)
EXPERT = FieldConfig(16, 30, 99)


# ============================================================================
# Mine Field
# ============================================================================

class MineField:
    """
    Rectangular grid of squares, some of which hide mines.

    A field built from an explicit grid is correct from the start: its
    mine count is the number of mines in the grid. A field built from
    dimensions is nominal: its mine count is a promise that only holds
    after populate() has run.
    """

    def __init__(
        self,
        rows: int,
        cols: int,
        mine_count: int,
        rng: Optional[np.random.Generator] = None,
    ) -> None:
        """
        Create an empty field that will hold mine_count mines once populated.

        Args:
            rows: Number of rows, must be positive.
            cols: Number of columns, must be positive.
            mine_count: Mines to place on populate; must be less than a
                third of rows * cols.
            rng: Random source used for mine placement.

        Raises:
            InvalidFieldError: If any precondition is violated.
        """
        if rows < 1 or cols < 1:
            raise InvalidFieldError("Field dimensions must be positive")
        if not mine_density_ok(rows, cols, mine_count):
            raise InvalidFieldError(
                f"Mine count {mine_count} must be in [0, {rows * cols}/3)"
            )
        self._grid = np.zeros((rows, cols), dtype=bool)
        self._mine_count = mine_count
        self._rng = rng if rng is not None else np.random.default_rng()

    @classmethod
    def from_grid(
        cls,
        grid: Sequence[Sequence[bool]],
        rng: Optional[np.random.Generator] = None,
    ) -> "MineField":
        """
        Create a field holding exactly the mines of the given grid.

        Args:
            grid: Non-empty rectangular grid; truthy entries are mines.
            rng: Random source, only used if the field is repopulated.

        Raises:
            InvalidFieldError: If the grid is empty or not rectangular.
        """
        rows = [list(row) for row in grid]
        if not rows or not rows[0]:
            raise InvalidFieldError("Mine grid must have at least one square")
        width = len(rows[0])
        if any(len(row) != width for row in rows):
            raise InvalidFieldError("Mine grid must be rectangular")

        try:
            cells = np.array(rows, dtype=bool)
        except ValueError as error:
            raise InvalidFieldError(f"Malformed mine grid: {error}") from error
        if cells.ndim != 2:
            raise InvalidFieldError(
                f"Mine grid must be two-dimensional, got {cells.ndim} dimensions"
            )

        field = cls.__new__(cls)
        field._grid = cells
        field._mine_count = int(field._grid.sum())
        field._rng = rng if rng is not None else np.random.default_rng()
        return field

    @classmethod
    def from_config(
        cls,
        config: FieldConfig,
        rng: Optional[np.random.Generator] = None,
    ) -> "MineField":
        """Create a nominal field from a configuration."""
        return cls(config.rows, config.cols, config.num_mines, rng=rng)

    # ========================================================================
    # Mutators
    # ========================================================================

    def populate(self, safe_row: int, safe_col: int) -> None:
        """
        Place mine_count mines at random, keeping one square mine-free.

        Existing mines are removed first. Locations are drawn uniformly and
        redrawn when they collide with a mine or the safe square.

        Args:
            safe_row: Row of the square that must stay mine-free.
            safe_col: Column of the square that must stay mine-free.
        """
        self._check_position(safe_row, safe_col)
        if not mine_density_ok(self.rows, self.cols, self._mine_count):
            raise InvalidFieldError(
                f"Cannot randomly place {self._mine_count} mines on a "
                f"{self.rows}x{self.cols} field"
            )

        self.reset_empty()
        placed = 0
        draws = 0
        while placed < self._mine_count:
            row = int(self._rng.integers(self.rows))
            col = int(self._rng.integers(self.cols))
            draws += 1
            if (row, col) == (safe_row, safe_col) or self._grid[row, col]:
                continue
            self._grid[row, col] = True
            placed += 1

        logger.debug(
            "Placed %d mines in %d draws, avoiding (%d, %d)",
            placed, draws, safe_row, safe_col,
        )

    def reset_empty(self) -> None:
        """Remove every mine. Dimensions and mine_count are unchanged."""
        self._grid[:, :] = False

    # ========================================================================
    # Queries
    # ========================================================================

    @property
    def rows(self) -> int:
        """Number of rows in the field."""
        return self._grid.shape[0]

    @property
    def cols(self) -> int:
        """Number of columns in the field."""
        return self._grid.shape[1]

    @property
    def mine_count(self) -> int:
        """Number of mines the field holds once populated."""
        return self._mine_count

    @property
    def is_nominal(self) -> bool:
        """Check if the grid does not (yet) hold mine_count mines."""
        return self.mines_placed() != self._mine_count

    def mines_placed(self) -> int:
        """Count the mines currently on the grid."""
        return int(self._grid.sum())

    def in_range(self, row: int, col: int) -> bool:
        """Check if (row, col) is a square of this field."""
        return 0 <= row < self.rows and 0 <= col < self.cols

    def has_mine(self, row: int, col: int) -> bool:
        """Check if the square at (row, col) holds a mine."""
        self._check_position(row, col)
        return bool(self._grid[row, col])

    def adjacent_mine_count(self, row: int, col: int) -> int:
        """
        Count mines in the 8 squares around (row, col).

        The square itself is not counted; neighbors off the field are
        ignored.

        Returns:
            Mine count in the range [0, 8].
        """
        self._check_position(row, col)
        window = self._grid[max(row - 1, 0):row + 2, max(col - 1, 0):col + 2]
        return int(window.sum()) - int(self._grid[row, col])

    def adjacent_counts(self) -> np.ndarray:
        """
        Get adjacent mine counts for every square at once.

        Returns:
            int8 array of shape (rows, cols).
        """
        padded = np.pad(self._grid, 1).astype(np.int8)
        counts = np.zeros((self.rows, self.cols), dtype=np.int8)
        for delta_row in (-1, 0, 1):
            for delta_col in (-1, 0, 1):
                if delta_row == 0 and delta_col == 0:
                    continue
                counts += padded[
                    1 + delta_row:1 + delta_row + self.rows,
                    1 + delta_col:1 + delta_col + self.cols,
                ]
        return counts

    def neighbors(self, row: int, col: int) -> List[Tuple[int, int]]:
        """
        Get the in-range squares around (row, col).

        Returns:
            List of (row, col) tuples, diagonals included.
        """
        self._check_position(row, col)
        neighbors = []
        for delta_row in (-1, 0, 1):
            for delta_col in (-1, 0, 1):
                if delta_row == 0 and delta_col == 0:
                    continue
                new_row = row + delta_row
                new_col = col + delta_col
                if self.in_range(new_row, new_col):
                    neighbors.append((new_row, new_col))
        return neighbors

    def to_array(self) -> np.ndarray:
        """Get a copy of the mine grid as a boolean array."""
        return self._grid.copy()

    def _check_position(self, row: int, col: int) -> None:
        if not self.in_range(row, col):
            raise OutOfRangeError(row, col, self.rows, self.cols)

    def __repr__(self) -> str:
        return (
            f"MineField(rows={self.rows}, cols={self.cols}, "
            f"mine_count={self._mine_count})"
        )
