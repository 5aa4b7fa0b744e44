"""
Game engine module.

Single-threaded action dispatcher that owns the current session and
notifies the presentation layer after each change.
"""
import logging
import random
from typing import Callable, Optional

from .board import Difficulty, GameState
from .session import ActionResult, GameSession, SessionSnapshot, initialize


logger = logging.getLogger(__name__)

DisplayCallback = Callable[[int, int], None]
GameOverCallback = Callable[[GameState], None]


# ============================================================================
# Game Engine
# ============================================================================

class GameEngine:
    """
    Processes player actions one at a time against a GameSession.

    Args:
        difficulty: Starting preset.
        on_display: Called with (elapsed_seconds, mines_remaining)
            after every state change, tick and reset.
        on_game_over: Called with the final state when a game ends.
        rng: Random source shared by every session this engine creates.
    """

    def __init__(
        self,
        difficulty: Difficulty = Difficulty.EASY,
        on_display: Optional[DisplayCallback] = None,
        on_game_over: Optional[GameOverCallback] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.on_display = on_display
        self.on_game_over = on_game_over
        self.session = initialize(difficulty, rng or random.Random())
        self._notify_display()

    @property
    def difficulty(self) -> Optional[Difficulty]:
        return self.session.difficulty

    @property
    def status(self) -> GameState:
        return self.session.status

    # ========================================================================
    # Actions
    # ========================================================================

    def reveal(self, row: int, col: int) -> ActionResult:
        """Reveal a cell; see GameSession.reveal."""
        return self._dispatch(self.session.reveal(row, col))

    def toggle_flag(self, row: int, col: int) -> ActionResult:
        """Flag or unflag a cell; see GameSession.toggle_flag."""
        return self._dispatch(self.session.toggle_flag(row, col))

    def tick(self) -> bool:
        """Feed one second of wall-clock time to the timer."""
        advanced = self.session.tick()
        if advanced:
            self._notify_display()
        return advanced

    def reset(self, difficulty: Optional[Difficulty] = None) -> GameSession:
        """Discard the current game and start a new one."""
        self.session = self.session.reset(difficulty)
        config = self.session.board.config
        logger.debug(
            "New %dx%d game with %d mines",
            config.height,
            config.width,
            config.num_mines,
        )
        self._notify_display()
        return self.session

    def change_difficulty(self, difficulty: Difficulty) -> GameSession:
        return self.reset(difficulty)

    def snapshot(self) -> SessionSnapshot:
        return self.session.snapshot()

    # ========================================================================
    # Notifications
    # ========================================================================

    def _dispatch(self, result: ActionResult) -> ActionResult:
        if result.changed:
            self._notify_display()
        if result.game_over and self.on_game_over is not None:
            self.on_game_over(self.session.status)
        return result

    def _notify_display(self) -> None:
        if self.on_display is not None:
            self.on_display(
                self.session.elapsed_seconds,
                self.session.board.mines_remaining,
            )
