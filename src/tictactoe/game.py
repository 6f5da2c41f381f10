"""Core rules for a two-player game of tic-tac-toe on a fixed 3x3 grid."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

BOARD_SIZE = 3

Coord = Tuple[int, int]  # (row, col)
Line = Tuple[Coord, Coord, Coord]

WINNING_LINES: Tuple[Line, ...] = (
    # rows
    ((0, 0), (0, 1), (0, 2)),
    ((1, 0), (1, 1), (1, 2)),
    ((2, 0), (2, 1), (2, 2)),
    # columns
    ((0, 0), (1, 0), (2, 0)),
    ((0, 1), (1, 1), (2, 1)),
    ((0, 2), (1, 2), (2, 2)),
    # diagonals
    ((0, 0), (1, 1), (2, 2)),
    ((0, 2), (1, 1), (2, 0)),
)


class Marker(str, Enum):
    X = "X"
    O = "O"

    def other(self) -> "Marker":
        return Marker.O if self is Marker.X else Marker.X


Cell = Optional[Marker]  # None is an empty cell


class GameStatus(str, Enum):
    IN_PROGRESS = "in_progress"
    FINISHED = "finished"


class Rejection(str, Enum):
    """Why a move was not applied."""

    STATUS_NOT_IN_PROGRESS = "status_not_in_progress"
    CELL_OUT_OF_RANGE = "cell_out_of_range"
    CELL_OCCUPIED = "cell_occupied"


@dataclass(frozen=True)
class MoveResult:
    accepted: bool
    won: bool = False
    winner: Optional[Marker] = None
    rejection: Optional[Rejection] = None

    @classmethod
    def rejected(cls, reason: Rejection) -> "MoveResult":
        return cls(accepted=False, rejection=reason)


@dataclass
class Board:
    """A single game: the grid, whose turn it is, and whether play is over.

    The board is only mutated through :meth:`attempt_move`. Once a move
    completes a line the status flips to ``FINISHED`` and stays there; start
    a new game by constructing a new ``Board``.
    """

    cells: List[List[Cell]] = field(
        default_factory=lambda: [[None] * BOARD_SIZE for _ in range(BOARD_SIZE)]
    )
    current_player: Marker = Marker.X
    status: GameStatus = GameStatus.IN_PROGRESS

    # ---- API used by the UI ----

    def attempt_move(self, row: int, col: int) -> MoveResult:
        """Place the current player's marker at ``(row, col)`` if legal.

        Illegal moves are reported through ``MoveResult.rejection`` and leave
        the board untouched.
        """
        if self.status is not GameStatus.IN_PROGRESS:
            return MoveResult.rejected(Rejection.STATUS_NOT_IN_PROGRESS)
        if not (_in_range(row) and _in_range(col)):
            return MoveResult.rejected(Rejection.CELL_OUT_OF_RANGE)
        if self.cells[row][col] is not None:
            return MoveResult.rejected(Rejection.CELL_OCCUPIED)

        player = self.current_player
        self.cells[row][col] = player

        if self.has_won():
            self.status = GameStatus.FINISHED
            return MoveResult(accepted=True, won=True, winner=player)

        self.current_player = player.other()
        return MoveResult(accepted=True)

    def cell_at(self, row: int, col: int) -> Cell:
        if not (_in_range(row) and _in_range(col)):
            raise IndexError(f"Cell ({row}, {col}) is outside the board")
        return self.cells[row][col]

    def rows(self) -> List[List[Cell]]:
        return [list(row) for row in self.cells]

    def winning_line(self) -> Optional[Line]:
        for line in WINNING_LINES:
            (ar, ac), (br, bc), (cr, cc) = line
            v = self.cells[ar][ac]
            if v is not None and v == self.cells[br][bc] == self.cells[cr][cc]:
                return line
        return None

    def has_won(self) -> bool:
        return self.winning_line() is not None

    @property
    def winner(self) -> Optional[Marker]:
        line = self.winning_line()
        if line is None:
            return None
        row, col = line[0]
        return self.cells[row][col]


def _in_range(index: int) -> bool:
    return 0 <= index < BOARD_SIZE
