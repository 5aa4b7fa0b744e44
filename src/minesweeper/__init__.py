"""
Minesweeper game module.

Provides the board engine (deferred mine placement, flood-fill reveal,
flagging, win/loss detection), game sessions, and the console and
mock-login collaborators around it.
"""
from .cell import Cell, CellState
from .board import Board, BoardConfig, Difficulty, GameState, PRESETS
from .session import ActionResult, GameSession, SessionSnapshot, initialize
from .engine import GameEngine
from .auth import AuthError, CookieJar, MockSession, resolve_route

__all__ = [
    "Cell",
    "CellState",
    "Board",
    "BoardConfig",
    "Difficulty",
    "GameState",
    "PRESETS",
    "ActionResult",
    "GameSession",
    "SessionSnapshot",
    "initialize",
    "GameEngine",
    "AuthError",
    "CookieJar",
    "MockSession",
    "resolve_route",
]
