"""
Game session module.

A session is one board plus its in-progress state: difficulty,
whether the first move has been made, and the elapsed-time counter.
Sessions are never reused; reset produces a fresh one.
"""
import logging
import random
from dataclasses import dataclass
from typing import Optional

import numpy as np

from .board import Board, Difficulty, GameState


logger = logging.getLogger(__name__)


# ============================================================================
# Outputs
# ============================================================================

@dataclass(frozen=True)
class ActionResult:
    """
    Outcome of a single player action.

    Attributes:
        changed: Whether the action altered the session at all.
        timer_started: True on the first reveal of the session.
        game_over: True on the action that ended the game.
    """

    changed: bool = False
    timer_started: bool = False
    game_over: bool = False


@dataclass(frozen=True)
class SessionSnapshot:
    """Read-only view of a session for the presentation layer."""

    observation: np.ndarray
    status: GameState
    difficulty: Optional[Difficulty]
    mines_remaining: int
    mine_shortfall: int
    elapsed_seconds: int

    @property
    def height(self) -> int:
        return self.observation.shape[0]

    @property
    def width(self) -> int:
        return self.observation.shape[1]


# ============================================================================
# Game Session
# ============================================================================

@dataclass
class GameSession:
    """
    Board engine state for one game.

    Attributes:
        difficulty: Preset the board was built from, or None for a
            custom board passed in directly.
        board: The grid; mines appear on the first reveal.
        first_move_made: Whether a reveal has happened yet.
        elapsed_seconds: Ticks counted while the game is running.
    """

    difficulty: Optional[Difficulty] = None
    board: Optional[Board] = None
    first_move_made: bool = False
    elapsed_seconds: int = 0

    def __post_init__(self) -> None:
        if self.board is None:
            self.difficulty = self.difficulty or Difficulty.EASY
            self.board = Board(self.difficulty.config)

    @property
    def status(self) -> GameState:
        return self.board.game_state

    @property
    def timer_running(self) -> bool:
        return self.first_move_made and self.board.is_playing

    def reveal(self, row: int, col: int) -> ActionResult:
        """
        Reveal a cell, placing mines first if this is the opening move.

        Raises:
            IndexError: If the position is off the board.
        """
        first_move = not self.first_move_made
        if not self.board.reveal(row, col):
            return ActionResult()

        if first_move:
            self.first_move_made = True
            logger.debug("First move at (%d, %d), timer started", row, col)
        return ActionResult(
            changed=True,
            timer_started=first_move,
            game_over=self.status.is_terminal,
        )

    def toggle_flag(self, row: int, col: int) -> ActionResult:
        """
        Flag or unflag a hidden cell.

        Raises:
            IndexError: If the position is off the board.
        """
        return ActionResult(changed=self.board.toggle_flag(row, col))

    def tick(self) -> bool:
        """Advance the timer by one second if the game is running."""
        if not self.timer_running:
            return False
        self.elapsed_seconds += 1
        return True

    def reset(self, difficulty: Optional[Difficulty] = None) -> "GameSession":
        """
        Start over with the same or a new difficulty.

        A custom board without a preset is replaced by a blank board of
        the same size and mine count.
        """
        difficulty = difficulty or self.difficulty
        if difficulty is None:
            return GameSession(board=Board(self.board.config, self.board.rng))
        return initialize(difficulty, self.board.rng)

    def snapshot(self) -> SessionSnapshot:
        """Capture the current state for rendering."""
        return SessionSnapshot(
            observation=self.board.get_observation(),
            status=self.status,
            difficulty=self.difficulty,
            mines_remaining=self.board.mines_remaining,
            mine_shortfall=self.board.mine_shortfall,
            elapsed_seconds=self.elapsed_seconds,
        )


def initialize(
    difficulty: Difficulty = Difficulty.EASY,
    rng: Optional[random.Random] = None,
) -> GameSession:
    """
    Create a fresh session with no mines placed.

    Args:
        difficulty: Preset to build the board from.
        rng: Random source for mine placement.

    Returns:
        New session in the PLAYING state.
    """
    board = Board(difficulty.config, rng or random.Random())
    return GameSession(difficulty=difficulty, board=board)
