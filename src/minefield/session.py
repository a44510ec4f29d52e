"""
Game session module.

Owns a mine field and the visible field over it, and drives one game at a
time: first-uncover mine placement, player actions, and new games with the
same settings.
"""
import logging
import threading
from typing import Optional, Sequence

import numpy as np

from .field import FieldConfig, MineField
from .overlay import GameState, VisibleField
from .status import SquareStatus


logger = logging.getLogger(__name__)


class GameSession:
    """
    One player's game.

    A session built from a FieldConfig places its mines on the first
    uncover, so that square is always safe, and re-randomizes them on
    every new game. A session built from a fixed grid keeps its layout.
    """

    def __init__(
        self,
        config: Optional[FieldConfig] = None,
        rng: Optional[np.random.Generator] = None,
        field: Optional[MineField] = None,
    ) -> None:
        """
        Initialize a session.

        Args:
            config: Field configuration for a random layout
                (default: 9x9 with 10 mines). Ignored when field is given.
            rng: Random source for mine placement.
            field: Fixed mine field to play on; never repopulated.
        """
        if field is None:
            self.config = config or FieldConfig()
            self._field = MineField.from_config(self.config, rng=rng)
        else:
            self.config = None
            self._field = field
        self._visible = VisibleField(self._field)
        self._random_layout = field is None
        self._needs_mines = field is None
        self._game_state = GameState.PLAYING
        self._lock = threading.Lock()

    @classmethod
    def from_grid(cls, grid: Sequence[Sequence[bool]]) -> "GameSession":
        """Create a session over a fixed mine layout."""
        return cls(field=MineField.from_grid(grid))

    # ========================================================================
    # Accessors
    # ========================================================================

    @property
    def field(self) -> MineField:
        """The session's mine field."""
        return self._field

    @property
    def visible(self) -> VisibleField:
        """The session's visible field."""
        return self._visible

    @property
    def rows(self) -> int:
        """Number of rows in the field."""
        return self._field.rows

    @property
    def cols(self) -> int:
        """Number of columns in the field."""
        return self._field.cols

    @property
    def game_state(self) -> GameState:
        """Game state as of the last player action."""
        return self._game_state

    @property
    def is_playing(self) -> bool:
        """Check if game is still in progress."""
        return self._game_state is GameState.PLAYING

    def status(self, row: int, col: int) -> SquareStatus:
        """Get the visible status of the square at (row, col)."""
        with self._lock:
            return self._visible.status(row, col)

    def mines_left(self) -> int:
        """Get the number of mines left to guess; may be negative."""
        with self._lock:
            return self._visible.mines_left()

    def is_game_over(self) -> bool:
        """Check if the game has ended, updating the display if so."""
        with self._lock:
            return self._refresh_state() is not GameState.PLAYING

    # ========================================================================
    # Player Actions
    # ========================================================================

    def uncover(self, row: int, col: int) -> bool:
        """
        Uncover a square.

        Ignored once the game is over; an ignored call opens nothing and
        returns True. On the first uncover of a random layout, mines are
        placed around this square.

        Returns:
            False iff this call uncovered a mine, True otherwise.
        """
        with self._lock:
            if self._game_state is not GameState.PLAYING:
                return True
            if self._needs_mines:
                self._place_mines(row, col)
            safe = self._visible.uncover(row, col)
            self._refresh_state()
            return safe

    def guess_cycle(self, row: int, col: int) -> None:
        """Cycle the guess on a covered square. Ignored once the game is over."""
        with self._lock:
            if self._game_state is not GameState.PLAYING:
                return
            self._visible.guess_cycle(row, col)

    def new_game(self) -> None:
        """Start over with the same settings."""
        with self._lock:
            if self._random_layout:
                self._field.reset_empty()
                self._needs_mines = True
            self._visible.reset_display()
            self._game_state = GameState.PLAYING
        logger.debug("New game on %r", self._field)

    # ========================================================================
    # Internals
    # ========================================================================

    def _place_mines(self, row: int, col: int) -> None:
        """Populate the field, keeping (row, col) mine-free."""
        self._field.populate(row, col)
        self._needs_mines = False

    def _refresh_state(self) -> GameState:
        """Recompute the game state from the visible field."""
        if self._needs_mines:
            return self._game_state
        state = self._visible.outcome()
        if state is not self._game_state:
            logger.info(
                "Game %s with %d mines left to guess",
                state.name.lower(), self._visible.mines_left(),
            )
        self._game_state = state
        return state
