"""
Square status vocabulary for the visible field.

Each square of the visible field is in exactly one of these states.
Renderers map them to visuals; agents consume the numeric observation codes.
"""
from dataclasses import dataclass
from enum import Enum, auto


# ============================================================================
# Constants
# ============================================================================

MAX_ADJACENT = 8


class StatusKind(Enum):
    """Possible visible states of a square."""

    COVERED = auto()
    MINE_GUESS = auto()
    QUESTION = auto()
    UNCOVERED = auto()
    MINE_REVEALED = auto()
    INCORRECT_GUESS = auto()
    EXPLODED_MINE = auto()


_COVERED_KINDS = frozenset(
    {StatusKind.COVERED, StatusKind.MINE_GUESS, StatusKind.QUESTION}
)

_OBSERVATION_CODES = {
    StatusKind.COVERED: -1,
    StatusKind.MINE_GUESS: -2,
    StatusKind.QUESTION: -3,
    StatusKind.MINE_REVEALED: 9,
    StatusKind.INCORRECT_GUESS: 10,
    StatusKind.EXPLODED_MINE: 11,
}

_SYMBOLS = {
    StatusKind.COVERED: ".",
    StatusKind.MINE_GUESS: "F",
    StatusKind.QUESTION: "?",
    StatusKind.MINE_REVEALED: "*",
    StatusKind.INCORRECT_GUESS: "X",
    StatusKind.EXPLODED_MINE: "#",
}


# ============================================================================
# Status Value
# ============================================================================

@dataclass(frozen=True)
class SquareStatus:
    """
    Visible status of a single square.

    Attributes:
        kind: Which state the square is in.
        adjacent: Adjacent mine count (0-8); only set for UNCOVERED.
    """

    kind: StatusKind
    adjacent: int = 0

    def __post_init__(self) -> None:
        """Validate the adjacent count against the kind."""
        if self.kind is StatusKind.UNCOVERED:
            if not 0 <= self.adjacent <= MAX_ADJACENT:
                raise ValueError(
                    f"Adjacent count must be in [0, {MAX_ADJACENT}], "
                    f"got {self.adjacent}"
                )
        elif self.adjacent != 0:
            raise ValueError(f"{self.kind.name} carries no adjacent count")

    @property
    def is_uncovered(self) -> bool:
        """Check if square is in any of the uncovered states."""
        return self.kind not in _COVERED_KINDS

    @property
    def is_covered(self) -> bool:
        """Check if square is in any of the covered states."""
        return self.kind in _COVERED_KINDS

    def to_observation(self) -> int:
        """
        Convert status to an integer code for numeric consumers.

        Returns:
            -1: Covered
            -2: Mine guess
            -3: Question
            0-8: Uncovered with adjacent mine count
            9: Mine revealed at loss
            10: Incorrect guess revealed at loss
            11: Exploded mine
        """
        if self.kind is StatusKind.UNCOVERED:
            return self.adjacent
        return _OBSERVATION_CODES[self.kind]

    @property
    def symbol(self) -> str:
        """Single character used by text renderers."""
        if self.kind is StatusKind.UNCOVERED:
            return " " if self.adjacent == 0 else str(self.adjacent)
        return _SYMBOLS[self.kind]

    def __str__(self) -> str:
        if self.kind is StatusKind.UNCOVERED:
            return f"UNCOVERED({self.adjacent})"
        return self.kind.name


COVERED = SquareStatus(StatusKind.COVERED)
MINE_GUESS = SquareStatus(StatusKind.MINE_GUESS)
QUESTION = SquareStatus(StatusKind.QUESTION)
MINE_REVEALED = SquareStatus(StatusKind.MINE_REVEALED)
INCORRECT_GUESS = SquareStatus(StatusKind.INCORRECT_GUESS)
EXPLODED_MINE = SquareStatus(StatusKind.EXPLODED_MINE)

_UNCOVERED = tuple(
    SquareStatus(StatusKind.UNCOVERED, count)
    for count in range(MAX_ADJACENT + 1)
)

# guess-cycle transitions; uncovered states are absent (terminal)
NEXT_GUESS = {
    COVERED: MINE_GUESS,
    MINE_GUESS: QUESTION,
    QUESTION: COVERED,
}


def uncovered(adjacent: int) -> SquareStatus:
    """Get the UNCOVERED status showing the given adjacent mine count."""
    if not 0 <= adjacent <= MAX_ADJACENT:
        raise ValueError(
            f"Adjacent count must be in [0, {MAX_ADJACENT}], got {adjacent}"
        )
    return _UNCOVERED[adjacent]
