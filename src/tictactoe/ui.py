"""FastAPI-powered web UI for playing tic-tac-toe in the browser."""

from __future__ import annotations

import logging
import threading
import uuid
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from fastapi import FastAPI, HTTPException
from fastapi.responses import HTMLResponse
from pydantic import BaseModel, Field

from .game import BOARD_SIZE, Board, GameStatus, Marker, MoveResult

logger = logging.getLogger(__name__)


@dataclass
class GameSession:
    """Container for one board owned by a browser tab."""

    board: Board = field(default_factory=Board)
    lock: threading.Lock = field(default_factory=threading.Lock, repr=False)


SESSIONS: Dict[str, GameSession] = {}
app = FastAPI(title="Tic-tac-toe", description="Two-player tic-tac-toe in the browser")


VICTORY_PHRASES: Dict[Marker, str] = {
    Marker.X: "Crosses win!",
    Marker.O: "Noughts win!",
}


def victory_phrase(marker: Marker) -> str:
    return VICTORY_PHRASES[marker]


class MoveRequest(BaseModel):
    """Request payload for a click on one grid cell."""

    row: int = Field(ge=0, le=BOARD_SIZE - 1)
    col: int = Field(ge=0, le=BOARD_SIZE - 1)


def _create_session() -> Tuple[str, GameSession]:
    """Create a new game session and register it for later access."""

    session = GameSession()
    session_id = uuid.uuid4().hex
    SESSIONS[session_id] = session
    logger.info("Started game %s", session_id)
    return session_id, session


def _get_session(game_id: str) -> GameSession:
    try:
        return SESSIONS[game_id]
    except KeyError as exc:
        raise HTTPException(status_code=404, detail="Game not found") from exc


def _serialize_result(result: MoveResult) -> Dict[str, object]:
    return {
        "accepted": result.accepted,
        "won": result.won,
        "winner": result.winner.value if result.winner else None,
        "rejection": result.rejection.value if result.rejection else None,
    }


def _serialize_board(game_id: str, board: Board) -> Dict[str, object]:
    cells: List[List[str]] = [
        [cell.value if cell else "" for cell in row] for row in board.rows()
    ]
    winner: Optional[Marker] = None
    winning_line = None
    if board.status is GameStatus.FINISHED:
        winner = board.winner
        line = board.winning_line()
        winning_line = [list(coord) for coord in line] if line else None
    return {
        "id": game_id,
        "cells": cells,
        "currentPlayer": board.current_player.value,
        "status": board.status.value,
        "winner": winner.value if winner else None,
        "winningLine": winning_line,
        "announcement": victory_phrase(winner) if winner else None,
    }


def _serialize_session(game_id: str, session: GameSession) -> Dict[str, object]:
    with session.lock:
        return _serialize_board(game_id, session.board)


def _apply_move(game_id: str, session: GameSession, row: int, col: int) -> Dict[str, object]:
    with session.lock:
        player = session.board.current_player
        result = session.board.attempt_move(row, col)
        if not result.accepted:
            logger.debug(
                "Rejected move (%d, %d) in game %s: %s",
                row,
                col,
                game_id,
                result.rejection.value,
            )
        elif result.won:
            logger.info("Game %s won by %s", game_id, player.value)
        state = _serialize_board(game_id, session.board)
    state["result"] = _serialize_result(result)
    return state


@app.post("/api/game")
def create_game() -> Dict[str, object]:
    game_id, session = _create_session()
    return _serialize_session(game_id, session)


@app.get("/api/game/{game_id}")
def get_game(game_id: str) -> Dict[str, object]:
    session = _get_session(game_id)
    return _serialize_session(game_id, session)


@app.post("/api/game/{game_id}/move")
def make_move(game_id: str, request: MoveRequest) -> Dict[str, object]:
    session = _get_session(game_id)
    return _apply_move(game_id, session, request.row, request.col)


@app.get("/", response_class=HTMLResponse)
def index() -> str:
    return HTML_PAGE


HTML_PAGE = """<!DOCTYPE html>
<html lang=\"en\">
  <head>
    <meta charset=\"utf-8\" />
    <meta name=\"viewport\" content=\"width=device-width, initial-scale=1\" />
    <title>Tic-tac-toe</title>
    <style>
      :root {
        color-scheme: light;
        font-family: system-ui, -apple-system, BlinkMacSystemFont, \"Segoe UI\", sans-serif;
      }
      body {
        margin: 0;
        min-height: 100vh;
        display: flex;
        justify-content: center;
        align-items: center;
        background: radial-gradient(circle at top, #f2f5ff, #dbe0ff 40%, #cfd8ff 70%);
        color: #13203a;
      }
      main {
        background: rgba(255, 255, 255, 0.92);
        border-radius: 18px;
        box-shadow: 0 20px 40px rgba(34, 47, 79, 0.16);
        padding: 2rem;
        text-align: center;
      }
      h1 {
        margin: 0 0 1rem;
        letter-spacing: 0.06em;
      }
      #game {
        border-collapse: collapse;
        margin: 0 auto 1rem;
      }
      #game td {
        width: 96px;
        height: 96px;
        border: 2px solid #3a66ff;
        font-size: 3rem;
        font-weight: 700;
        text-align: center;
        vertical-align: middle;
        cursor: pointer;
        user-select: none;
      }
      #game td.winning {
        background: rgba(58, 102, 255, 0.15);
      }
      #status {
        min-height: 1.5rem;
        font-weight: 500;
      }
    </style>
  </head>
  <body>
    <main>
      <h1>Tic-tac-toe</h1>
      <table id=\"game\"></table>
      <p id=\"status\">Setting up your game…</p>
    </main>
    <script>
      'use strict';

      const tableEl = document.getElementById('game');
      const statusEl = document.getElementById('status');
      let gameId = null;
      let isRequestPending = false;

      function renderMap() {
        for (let row = 0; row < 3; row++) {
          const tr = document.createElement('tr');
          tableEl.appendChild(tr);
          for (let col = 0; col < 3; col++) {
            const td = document.createElement('td');
            td.dataset.row = row.toString();
            td.dataset.col = col.toString();
            tr.appendChild(td);
          }
        }
      }

      function cellElement(row, col) {
        return tableEl.querySelector(`td[data-row=\"${row}\"][data-col=\"${col}\"]`);
      }

      function applyState(state) {
        gameId = state.id;
        state.cells.forEach((cells, row) => {
          cells.forEach((value, col) => {
            cellElement(row, col).textContent = value;
          });
        });
        (state.winningLine || []).forEach(([row, col]) => {
          cellElement(row, col).classList.add('winning');
        });
        if (state.status === 'finished') {
          statusEl.textContent = state.announcement;
        } else {
          statusEl.textContent = `${state.currentPlayer} to move`;
        }
      }

      async function startGame() {
        try {
          const response = await fetch('/api/game', { method: 'POST' });
          if (!response.ok) {
            throw new Error('Unable to start game');
          }
          applyState(await response.json());
        } catch (error) {
          statusEl.textContent = error.message || 'Network error. Please try again.';
        }
      }

      async function sendMove(row, col) {
        if (!gameId || isRequestPending) return;
        isRequestPending = true;
        try {
          const response = await fetch(`/api/game/${gameId}/move`, {
            method: 'POST',
            headers: { 'Content-Type': 'application/json' },
            body: JSON.stringify({ row, col }),
          });
          if (!response.ok) {
            return;
          }
          const state = await response.json();
          applyState(state);
          if (state.result.won) {
            // let the last mark paint before the blocking alert
            setTimeout(() => alert(state.announcement), 10);
          }
        } catch (error) {
          statusEl.textContent = 'Network error. Please try again.';
        } finally {
          isRequestPending = false;
        }
      }

      function cellClickHandler(event) {
        const target = event.target;
        if (target.tagName !== 'TD') {
          return;
        }
        const row = Number.parseInt(target.dataset.row, 10);
        const col = Number.parseInt(target.dataset.col, 10);
        sendMove(row, col);
      }

      window.addEventListener('load', () => {
        renderMap();
        tableEl.addEventListener('click', cellClickHandler);
        startGame();
      });
    </script>
  </body>
</html>
"""
