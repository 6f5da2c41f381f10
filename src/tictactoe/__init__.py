"""Tic-tac-toe package exposing the board engine and the web application."""

from .game import Board, GameStatus, Marker, MoveResult, Rejection
from .ui import app

__all__ = ["Board", "GameStatus", "Marker", "MoveResult", "Rejection", "app"]
