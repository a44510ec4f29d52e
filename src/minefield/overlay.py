"""
Visible field module.

Tracks what the player can see of a mine field: guesses, uncovered
squares, and the end-of-game display. Implements uncovering with
flood fill and win/loss detection.
"""
import logging
from enum import Enum, auto
from typing import List, Set, Tuple

import numpy as np

from .errors import OutOfRangeError
from .field import MineField
from .status import (
    COVERED,
    EXPLODED_MINE,
    INCORRECT_GUESS,
    MINE_GUESS,
    MINE_REVEALED,
    NEXT_GUESS,
    QUESTION,
    SquareStatus,
    uncovered,
)


logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

class GameState(Enum):
    """Possible states of the game."""

    PLAYING = auto()
    WON = auto()
    LOST = auto()


# ============================================================================
# Visible Field Class
# ============================================================================

class VisibleField:
    """
    Player-visible state of one mine field.

    The visible field reads the mine field it covers but never changes its
    mine layout. Every square starts COVERED.
    """

    def __init__(self, field: MineField) -> None:
        """
        Create a visible field over the given mine field.

        Args:
            field: The mine field to display. Not owned; the caller keeps it.
        """
        self._field = field
        self._status: List[List[SquareStatus]] = []
        self._mines_left_base = 0
        self.reset_display()

    # ========================================================================
    # Accessors
    # ========================================================================

    @property
    def field(self) -> MineField:
        """The mine field this visible field covers."""
        return self._field

    def status(self, row: int, col: int) -> SquareStatus:
        """Get the visible status of the square at (row, col)."""
        self._check_position(row, col)
        return self._status[row][col]

    def is_uncovered(self, row: int, col: int) -> bool:
        """Check if the square at (row, col) is in any uncovered state."""
        return self.status(row, col).is_uncovered

    def mines_left(self) -> int:
        """
        Get the number of mines left to guess.

        This only counts MINE_GUESS squares, right or wrong, so the value
        goes negative once more squares are guessed than there are mines.
        """
        guessed = sum(
            1 for row in self._status for status in row if status == MINE_GUESS
        )
        return self._mines_left_base - guessed

    def covered_squares(self) -> List[Tuple[int, int]]:
        """
        Get squares that uncover() would open.

        Returns:
            List of (row, col) positions that are COVERED or QUESTION.
        """
        return [
            (row, col)
            for row in range(self._field.rows)
            for col in range(self._field.cols)
            if self._status[row][col] in (COVERED, QUESTION)
        ]

    def get_observation(self) -> np.ndarray:
        """
        Get the visible state as a numeric array.

        Returns:
            int8 array of shape (rows, cols) holding
            SquareStatus.to_observation() codes.
        """
        return np.array(
            [[status.to_observation() for status in row] for row in self._status],
            dtype=np.int8,
        )

    def render(self) -> str:
        """Render the visible state as one text line per row."""
        return "\n".join(
            " ".join(status.symbol for status in row) for row in self._status
        )

    # ========================================================================
    # Player Actions
    # ========================================================================

    def reset_display(self) -> None:
        """Cover every square and re-read the field's mine count."""
        self._status = [
            [COVERED for _ in range(self._field.cols)]
            for _ in range(self._field.rows)
        ]
        self._mines_left_base = self._field.mine_count

    def guess_cycle(self, row: int, col: int) -> None:
        """
        Cycle a covered square COVERED -> MINE_GUESS -> QUESTION -> COVERED.

        Has no effect on uncovered squares.
        """
        current = self.status(row, col)
        following = NEXT_GUESS.get(current)
        if following is not None:
            self._status[row][col] = following

    def uncover(self, row: int, col: int) -> bool:
        """
        Uncover the square at (row, col).

        A square with no adjacent mines also opens the surrounding region
        of mine-free squares, fringed by the numbered squares around it.
        MINE_GUESS squares are neither uncovered nor searched through.
        Calling this on a MINE_GUESS square or on an already uncovered
        square changes nothing.

        Returns:
            False iff the square holds a mine, True otherwise.
        """
        current = self.status(row, col)
        if current not in (COVERED, QUESTION):
            return True

        if self._field.has_mine(row, col):
            self._status[row][col] = EXPLODED_MINE
            logger.debug("Mine exploded at (%d, %d)", row, col)
            return False

        count = self._field.adjacent_mine_count(row, col)
        if count > 0:
            self._status[row][col] = uncovered(count)
        else:
            self._flood_fill(row, col)
        return True

    # ========================================================================
    # Game Over Detection
    # ========================================================================

    def is_game_over(self) -> bool:
        """
        Check if the game has been lost or won.

        Recomputed from the whole grid on every call. When the game is
        over, the end-of-game display is applied to the squares.
        """
        return self.outcome() is not GameState.PLAYING

    def outcome(self) -> GameState:
        """
        Work out the game state from the visible squares.

        Lost if any mine exploded; won if the only squares still covered
        are as many as the field's mines. Applies the matching
        end-of-game display.
        """
        exploded = False
        still_covered = 0
        for row in self._status:
            for status in row:
                if status == EXPLODED_MINE:
                    exploded = True
                elif status.is_covered:
                    still_covered += 1

        if exploded:
            self._show_loss()
            return GameState.LOST
        if still_covered == self._field.mine_count:
            self._show_win()
            return GameState.WON
        return GameState.PLAYING

    # ========================================================================
    # Internals
    # ========================================================================

    def _flood_fill(self, row: int, col: int) -> None:
        """
        Uncover the zero-count region containing (row, col).

        Expands through squares with no adjacent mines. Numbered neighbors
        are uncovered but not expanded. MINE_GUESS squares, already
        uncovered squares and the field edge bound the region.
        """
        counts = self._field.adjacent_counts()
        visited: Set[Tuple[int, int]] = {(row, col)}
        pending = [(row, col)]
        opened = 0

        while pending:
            current_row, current_col = pending.pop()
            for neighbor in self._field.neighbors(current_row, current_col):
                if neighbor in visited:
                    continue
                neighbor_row, neighbor_col = neighbor
                status = self._status[neighbor_row][neighbor_col]
                if status == MINE_GUESS or status.is_uncovered:
                    continue
                visited.add(neighbor)
                count = int(counts[neighbor_row, neighbor_col])
                if count > 0:
                    self._status[neighbor_row][neighbor_col] = uncovered(count)
                    opened += 1
                else:
                    pending.append(neighbor)
            self._status[current_row][current_col] = uncovered(0)
            opened += 1

        logger.debug("Flood fill from (%d, %d) opened %d squares", row, col, opened)

    def _show_loss(self) -> None:
        """Reveal missed mines and mark wrong guesses."""
        for row in range(self._field.rows):
            for col in range(self._field.cols):
                status = self._status[row][col]
                has_mine = self._field.has_mine(row, col)
                if status in (COVERED, QUESTION) and has_mine:
                    self._status[row][col] = MINE_REVEALED
                elif status == MINE_GUESS and not has_mine:
                    self._status[row][col] = INCORRECT_GUESS

    def _show_win(self) -> None:
        """Flag every mine."""
        for row in range(self._field.rows):
            for col in range(self._field.cols):
                if self._field.has_mine(row, col):
                    self._status[row][col] = MINE_GUESS

    def _check_position(self, row: int, col: int) -> None:
        if not self._field.in_range(row, col):
            raise OutOfRangeError(row, col, self._field.rows, self._field.cols)
