"""
Pytest configuration and shared fixtures.
"""
import random
import sys
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from minesweeper import (
    Board,
    BoardConfig,
    Cell,
    CookieJar,
    Difficulty,
    GameSession,
    MockSession,
    initialize,
)


# Three rows with a wall of mines down the middle column:
#
#   col:  0 1 2 3 4
#         . 2 * 2 .
#         . 3 * 3 .
#         . 2 * 2 .
WALL_LAYOUT = ["..*..", "..*..", "..*.."]


# ============================================================================
# Board Fixtures
# ============================================================================

@pytest.fixture
def rng() -> random.Random:
    """Seeded random source for reproducible mine placement."""
    return random.Random(1234)


@pytest.fixture
def default_board(rng: random.Random) -> Board:
    """Create a default 9x9 board with 10 mines."""
    return Board(BoardConfig(), rng)


@pytest.fixture
def small_board(rng: random.Random) -> Board:
    """Create a small 3x3 board with 1 mine for testing."""
    return Board(BoardConfig(3, 3, 1), rng)


@pytest.fixture
def empty_board() -> Board:
    """Create a board with no mines for cascade testing."""
    return Board(BoardConfig(5, 5, 0))


@pytest.fixture
def wall_board() -> Board:
    """Board split in two halves by a column of mines."""
    return Board.from_layout(WALL_LAYOUT)


# ============================================================================
# Cell Fixtures
# ============================================================================

@pytest.fixture
def hidden_cell() -> Cell:
    """Create a hidden cell."""
    return Cell()


@pytest.fixture
def mine_cell() -> Cell:
    """Create a cell containing a mine."""
    return Cell(is_mine=True)


# ============================================================================
# Session Fixtures
# ============================================================================

@pytest.fixture
def easy_session(rng: random.Random) -> GameSession:
    """Fresh easy session with seeded mine placement."""
    return initialize(Difficulty.EASY, rng)


@pytest.fixture
def wall_session(wall_board: Board) -> GameSession:
    """Session playing the wall layout."""
    return GameSession(board=wall_board)


# ============================================================================
# Login Fixtures
# ============================================================================

@pytest.fixture
def cookie_jar(tmp_path: Path) -> CookieJar:
    """Cookie jar backed by a temporary file."""
    return CookieJar(tmp_path / "cookies.json")


@pytest.fixture
def mock_session(cookie_jar: CookieJar) -> MockSession:
    """Logged-out mock session."""
    return MockSession(cookie_jar)
