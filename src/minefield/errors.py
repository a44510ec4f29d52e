"""
Exceptions raised by the minefield engine.

Only caller bugs (precondition violations) are reported through exceptions.
Losing a game is a normal outcome and is reported through return values
and square statuses instead.
"""


class MinefieldError(Exception):
    """Base class for all minefield errors."""


class InvalidFieldError(MinefieldError, ValueError):
    """Field construction or configuration violates its preconditions."""


class OutOfRangeError(MinefieldError, IndexError):
    """Coordinates fall outside the field."""

    def __init__(self, row: int, col: int, rows: int, cols: int) -> None:
        super().__init__(
            f"Square ({row}, {col}) is outside the {rows}x{cols} field"
        )
        self.row = row
        self.col = col
