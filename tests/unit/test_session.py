"""
Unit tests for GameSession.

Tests session lifecycle, the first-move timer signal, ticking,
snapshots and reset.
"""
import random

import numpy as np
import pytest
from minesweeper import (
    Board,
    BoardConfig,
    Difficulty,
    GameSession,
    GameState,
    initialize,
)


# ============================================================================
# Initialization Tests
# ============================================================================

class TestInitialize:
    """Test fresh sessions."""

    @pytest.mark.parametrize("difficulty", list(Difficulty))
    def test_initialize_builds_blank_board(self, difficulty: Difficulty) -> None:
        session = initialize(difficulty)
        assert session.difficulty is difficulty
        assert session.status == GameState.PLAYING
        assert session.first_move_made is False
        assert session.elapsed_seconds == 0
        assert session.board.config == difficulty.config
        assert session.board.mines_placed is False

    def test_default_session_is_easy(self) -> None:
        session = GameSession()
        assert session.difficulty is Difficulty.EASY
        assert session.board.config == Difficulty.EASY.config


# ============================================================================
# Action Tests
# ============================================================================

class TestActions:
    """Test reveal and flag results."""

    def test_first_reveal_starts_timer(self, easy_session: GameSession) -> None:
        result = easy_session.reveal(4, 4)
        assert result.changed is True
        assert result.timer_started is True
        assert easy_session.first_move_made is True
        assert easy_session.board.mines_placed is True

    def test_later_reveals_do_not_restart_timer(
        self, wall_session: GameSession
    ) -> None:
        wall_session.reveal(0, 1)
        result = wall_session.reveal(0, 3)
        assert result.changed is True
        assert result.timer_started is False

    def test_noop_reveal_reports_unchanged(self, wall_session: GameSession) -> None:
        wall_session.reveal(0, 1)
        result = wall_session.reveal(0, 1)
        assert result.changed is False
        assert result.game_over is False

    def test_flagged_first_reveal_does_not_start_timer(
        self, easy_session: GameSession
    ) -> None:
        easy_session.toggle_flag(0, 0)
        result = easy_session.reveal(0, 0)
        assert result.changed is False
        assert easy_session.first_move_made is False

    def test_game_over_signalled_once_on_loss(
        self, wall_session: GameSession
    ) -> None:
        result = wall_session.reveal(1, 2)
        assert result.game_over is True
        assert wall_session.status == GameState.LOST
        assert wall_session.reveal(0, 0).game_over is False

    def test_game_over_signalled_on_win(self, wall_session: GameSession) -> None:
        assert wall_session.reveal(1, 0).game_over is False
        assert wall_session.reveal(1, 4).game_over is True
        assert wall_session.status == GameState.WON

    def test_toggle_flag_result(self, wall_session: GameSession) -> None:
        assert wall_session.toggle_flag(0, 0).changed is True
        assert wall_session.toggle_flag(0, 0).changed is True
        wall_session.reveal(0, 0)
        assert wall_session.toggle_flag(0, 0).changed is False

    def test_off_board_action_raises_error(
        self, easy_session: GameSession
    ) -> None:
        with pytest.raises(IndexError):
            easy_session.reveal(20, 20)


# ============================================================================
# Timer Tests
# ============================================================================

class TestTick:
    """Test the external timer tick."""

    def test_tick_before_first_move_is_ignored(
        self, easy_session: GameSession
    ) -> None:
        assert easy_session.tick() is False
        assert easy_session.elapsed_seconds == 0

    def test_tick_counts_while_playing(self, wall_session: GameSession) -> None:
        wall_session.reveal(0, 1)
        for _ in range(3):
            assert wall_session.tick() is True
        assert wall_session.elapsed_seconds == 3

    def test_tick_stops_after_game_over(self, wall_session: GameSession) -> None:
        wall_session.reveal(1, 0)
        wall_session.tick()
        wall_session.reveal(1, 2)
        assert wall_session.tick() is False
        assert wall_session.elapsed_seconds == 1


# ============================================================================
# Snapshot Tests
# ============================================================================

class TestSnapshot:
    """Test read-only snapshots."""

    def test_snapshot_of_new_session(self, easy_session: GameSession) -> None:
        snapshot = easy_session.snapshot()
        assert snapshot.status == GameState.PLAYING
        assert snapshot.difficulty is Difficulty.EASY
        assert snapshot.mines_remaining == 10
        assert snapshot.mine_shortfall == 0
        assert snapshot.elapsed_seconds == 0
        assert (snapshot.height, snapshot.width) == (9, 9)
        assert np.all(snapshot.observation == -1)

    def test_snapshot_is_detached(self, wall_session: GameSession) -> None:
        snapshot = wall_session.snapshot()
        wall_session.reveal(1, 0)
        assert np.all(snapshot.observation == -1)

    def test_snapshot_tracks_flags(self, wall_session: GameSession) -> None:
        wall_session.toggle_flag(0, 2)
        assert wall_session.snapshot().mines_remaining == 2

    def test_snapshot_reports_shortfall(self) -> None:
        session = GameSession(board=Board(BoardConfig(2, 2, 4)))
        session.reveal(0, 0)
        snapshot = session.snapshot()
        assert snapshot.mine_shortfall == 1
        assert snapshot.mines_remaining == 3


# ============================================================================
# Reset Tests
# ============================================================================

class TestReset:
    """Test session replacement."""

    def test_reset_returns_fresh_session(self, wall_session: GameSession) -> None:
        wall_session.reveal(1, 2)
        fresh = wall_session.reset(Difficulty.EASY)
        assert fresh is not wall_session
        assert fresh.status == GameState.PLAYING
        assert fresh.first_move_made is False
        assert fresh.board.mines_placed is False
        assert wall_session.status == GameState.LOST

    def test_reset_keeps_difficulty(self) -> None:
        session = initialize(Difficulty.MEDIUM, random.Random(3))
        session.reveal(0, 0)
        session.tick()
        fresh = session.reset()
        assert fresh.difficulty is Difficulty.MEDIUM
        assert fresh.elapsed_seconds == 0

    def test_reset_changes_difficulty(self, easy_session: GameSession) -> None:
        fresh = easy_session.reset(Difficulty.HARD)
        assert fresh.difficulty is Difficulty.HARD
        assert fresh.board.config.width == 16

    def test_custom_board_has_no_difficulty(
        self, wall_session: GameSession
    ) -> None:
        assert wall_session.difficulty is None
        assert wall_session.snapshot().difficulty is None

    def test_reset_keeps_custom_board_size(
        self, wall_session: GameSession
    ) -> None:
        wall_session.reveal(1, 2)
        fresh = wall_session.reset()
        assert fresh.difficulty is None
        assert fresh.board.config == BoardConfig(5, 3, 3)
        assert fresh.board.mines_placed is False
        assert fresh.status == GameState.PLAYING

    def test_reset_custom_board_to_preset(
        self, wall_session: GameSession
    ) -> None:
        fresh = wall_session.reset(Difficulty.MEDIUM)
        assert fresh.difficulty is Difficulty.MEDIUM
        assert fresh.board.config == Difficulty.MEDIUM.config
