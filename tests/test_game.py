"""Unit tests for the tic-tac-toe board engine."""

from itertools import combinations

import pytest

from tictactoe.game import (
    WINNING_LINES,
    Board,
    GameStatus,
    Marker,
    Rejection,
)


def play(board, *moves):
    return [board.attempt_move(row, col) for row, col in moves]


def test_new_board_is_empty_and_x_starts():
    board = Board()
    assert board.status is GameStatus.IN_PROGRESS
    assert board.current_player is Marker.X
    assert all(board.cell_at(r, c) is None for r in range(3) for c in range(3))


def test_top_row_wins_for_x():
    board = Board()
    results = play(board, (0, 0), (1, 0), (0, 1), (1, 1), (0, 2))

    assert all(r.accepted for r in results)
    assert not any(r.won for r in results[:-1])
    final = results[-1]
    assert final.won is True
    assert final.winner is Marker.X
    assert board.status is GameStatus.FINISHED
    assert board.winning_line() == ((0, 0), (0, 1), (0, 2))


def test_player_alternates_only_on_accepted_moves():
    board = Board()
    assert board.attempt_move(1, 1).accepted
    assert board.current_player is Marker.O

    rejected = board.attempt_move(1, 1)
    assert rejected.accepted is False
    assert board.current_player is Marker.O

    assert board.attempt_move(0, 0).accepted
    assert board.current_player is Marker.X


def test_occupied_cell_is_rejected_without_mutation():
    board = Board()
    board.attempt_move(2, 2)
    before = board.rows()

    result = board.attempt_move(2, 2)

    assert result.accepted is False
    assert result.rejection is Rejection.CELL_OCCUPIED
    assert board.rows() == before
    assert board.cell_at(2, 2) is Marker.X


@pytest.mark.parametrize("row, col", [(-1, 0), (0, 3), (3, 3), (0, -1)])
def test_out_of_range_is_rejected_not_raised(row, col):
    board = Board()
    result = board.attempt_move(row, col)
    assert result.rejection is Rejection.CELL_OUT_OF_RANGE
    assert board.current_player is Marker.X


def test_cell_at_outside_board_raises():
    with pytest.raises(IndexError):
        Board().cell_at(3, 0)


def test_moves_after_finish_are_rejected():
    board = Board()
    play(board, (0, 0), (1, 0), (0, 1), (1, 1), (0, 2))

    result = board.attempt_move(2, 2)

    assert result.rejection is Rejection.STATUS_NOT_IN_PROGRESS
    assert board.cell_at(2, 2) is None
    assert board.current_player is Marker.X
    assert board.status is GameStatus.FINISHED


def test_o_wins_on_anti_diagonal():
    board = Board()
    results = play(board, (0, 0), (0, 2), (0, 1), (1, 1), (2, 2), (2, 0))
    assert results[-1].won
    assert results[-1].winner is Marker.O
    assert board.winner is Marker.O


def test_full_board_without_line_stays_in_progress():
    # No draw detection: a full board simply refuses every further move.
    board = Board()
    results = play(
        board,
        (0, 0), (0, 1), (0, 2),
        (1, 1), (1, 0), (1, 2),
        (2, 1), (2, 0), (2, 2),
    )
    assert all(r.accepted and not r.won for r in results)
    assert board.status is GameStatus.IN_PROGRESS

    for row in range(3):
        for col in range(3):
            assert board.attempt_move(row, col).rejection is Rejection.CELL_OCCUPIED


def test_cells_never_change_once_set():
    board = Board()
    moves = [(1, 1), (1, 1), (0, 0), (1, 1), (0, 0), (2, 2)]
    seen = {}
    for row, col in moves:
        board.attempt_move(row, col)
        for (r, c), marker in seen.items():
            assert board.cell_at(r, c) is marker
        for r in range(3):
            for c in range(3):
                if board.cell_at(r, c) is not None:
                    seen.setdefault((r, c), board.cell_at(r, c))


def test_exactly_eight_lines():
    assert len(WINNING_LINES) == 8
    assert len(set(WINNING_LINES)) == 8


def test_only_fixed_lines_trigger_a_win():
    cells = [(r, c) for r in range(3) for c in range(3)]
    lines = {frozenset(line) for line in WINNING_LINES}
    for triple in combinations(cells, 3):
        board = Board()
        for row, col in triple:
            board.cells[row][col] = Marker.X
        assert board.has_won() == (frozenset(triple) in lines)
