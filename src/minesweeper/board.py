"""
Board module for Minesweeper game.

Implements the game board with deferred mine placement, flood-fill
revealing, flagging and win/lose detection.
"""
import logging
import random
from collections import deque
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Iterator, List, Optional, Sequence, Tuple

import numpy as np

from .cell import Cell


logger = logging.getLogger(__name__)

MINE_MARK = "*"


# ============================================================================
# Constants
# ============================================================================

class GameState(Enum):
    """Possible states of the game."""

    PLAYING = auto()
    WON = auto()
    LOST = auto()

    @property
    def is_terminal(self) -> bool:
        """WON and LOST accept no further actions."""
        return self is not GameState.PLAYING


@dataclass(frozen=True)
class BoardConfig:
    """
    Configuration for a Minesweeper board.

    The mine count is not checked against the board size: placement
    caps it at the number of eligible cells instead.

    Attributes:
        width: Number of columns.
        height: Number of rows.
        num_mines: Total mines requested.
    """

    width: int = 9
    height: int = 9
    num_mines: int = 10

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        self._validate()

    def _validate(self) -> None:
        """Ensure configuration values are valid."""
        if self.width < 1 or self.height < 1:
            raise ValueError("Board dimensions must be positive")
        if self.num_mines < 0:
            raise ValueError("Number of mines cannot be negative")

    @property
    def total_cells(self) -> int:
        return self.width * self.height


class Difficulty(Enum):
    """Fixed difficulty presets, looked up by lowercase name."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"

    @property
    def config(self) -> BoardConfig:
        """Board configuration for this preset."""
        return PRESETS[self]


PRESETS = {
    Difficulty.EASY: BoardConfig(width=9, height=9, num_mines=10),
    Difficulty.MEDIUM: BoardConfig(width=12, height=12, num_mines=30),
    Difficulty.HARD: BoardConfig(width=16, height=16, num_mines=60),
}


# ============================================================================
# Board Class
# ============================================================================

@dataclass
class Board:
    """
    Minesweeper game board.

    Mines are placed on the first reveal, never on the revealed cell
    itself. The game is won once every non-mine cell is revealed.
    """

    config: BoardConfig = field(default_factory=BoardConfig)
    rng: random.Random = field(default_factory=random.Random, repr=False)
    _grid: List[List[Cell]] = field(default_factory=list, repr=False)
    _game_state: GameState = GameState.PLAYING
    _mines_placed: bool = False
    _mine_count: int = 0
    _safe_revealed: int = 0

    def __post_init__(self) -> None:
        """Initialize the grid after dataclass creation."""
        self._init_grid()

    @classmethod
    def from_layout(
        cls, layout: Sequence[str], rng: Optional[random.Random] = None
    ) -> "Board":
        """
        Build a board with mines already placed.

        Args:
            layout: One string per row, ``*`` marking a mine and any
                other character a safe cell. All rows must be the
                same length.
            rng: Random source (unused once mines are placed).

        Returns:
            Board ready for play; the first reveal places nothing.
        """
        if not layout or len({len(line) for line in layout}) != 1:
            raise ValueError("Layout rows must be non-empty and equal length")
        mines = [
            (row, col)
            for row, line in enumerate(layout)
            for col, mark in enumerate(line)
            if mark == MINE_MARK
        ]
        config = BoardConfig(
            width=len(layout[0]), height=len(layout), num_mines=len(mines)
        )
        board = cls(config, rng or random.Random())
        board._set_mines(mines)
        return board

    # ========================================================================
    # Grid Initialization (Low-level)
    # ========================================================================

    def _init_grid(self) -> None:
        """Create empty grid of cells."""
        self._grid = [
            [Cell() for _ in range(self.config.width)]
            for _ in range(self.config.height)
        ]

    def place_mines(self, first_row: int, first_col: int) -> int:
        """
        Place mines randomly, keeping the first-revealed cell safe.

        Args:
            first_row: Row of the player's first reveal.
            first_col: Column of the player's first reveal.

        Returns:
            Number of mines actually placed, which is less than
            requested when the board has too few eligible cells.
        """
        self._require_position(first_row, first_col)
        if self._mines_placed:
            raise RuntimeError("Mines have already been placed")

        positions = self._get_valid_mine_positions((first_row, first_col))
        count = min(self.config.num_mines, len(positions))
        self._set_mines(self.rng.sample(positions, count))

        if self.mine_shortfall:
            logger.warning(
                "Requested %d mines but only %d cells are eligible",
                self.config.num_mines,
                count,
            )
        logger.debug(
            "Placed %d mines avoiding (%d, %d)", count, first_row, first_col
        )
        return count

    def _set_mines(self, positions: Sequence[Tuple[int, int]]) -> None:
        """Mark mine cells and compute neighbor counts."""
        for row, col in positions:
            self._grid[row][col].is_mine = True
        self._mine_count = len(positions)
        self._mines_placed = True
        self._calculate_adjacent_mines()

    def _get_valid_mine_positions(
        self, exclude: Tuple[int, int]
    ) -> List[Tuple[int, int]]:
        """Get all valid positions for mine placement."""
        positions = []
        for row in range(self.config.height):
            for col in range(self.config.width):
                if (row, col) != exclude:
                    positions.append((row, col))
        return positions

    def _calculate_adjacent_mines(self) -> None:
        """Calculate adjacent mine counts for all cells."""
        for row, col, cell in self.cells():
            if not cell.is_mine:
                cell.adjacent_mines = self._count_adjacent_mines(row, col)

    def _count_adjacent_mines(self, row: int, col: int) -> int:
        """Count mines adjacent to a specific cell."""
        count = 0
        for neighbor_row, neighbor_col in self._get_neighbors(row, col):
            if self._grid[neighbor_row][neighbor_col].is_mine:
                count += 1
        return count

    # ========================================================================
    # Neighbor Utilities (Low-level)
    # ========================================================================

    def _get_neighbors(
        self, row: int, col: int
    ) -> List[Tuple[int, int]]:
        """
        Get valid neighboring cell positions.

        Args:
            row: Row index of center cell.
            col: Column index of center cell.

        Returns:
            List of (row, col) tuples for valid neighbors.
        """
        neighbors = []
        for delta_row in (-1, 0, 1):
            for delta_col in (-1, 0, 1):
                if delta_row == 0 and delta_col == 0:
                    continue
                new_row = row + delta_row
                new_col = col + delta_col
                if self.contains(new_row, new_col):
                    neighbors.append((new_row, new_col))
        return neighbors

    def contains(self, row: int, col: int) -> bool:
        """Check if position is within board bounds."""
        return 0 <= row < self.config.height and 0 <= col < self.config.width

    def _require_position(self, row: int, col: int) -> None:
        """Raise IndexError if position is outside board bounds."""
        if not self.contains(row, col):
            raise IndexError(
                f"Position ({row}, {col}) is outside the "
                f"{self.config.height}x{self.config.width} board"
            )

    # ========================================================================
    # Game Actions (Mid-level)
    # ========================================================================

    def reveal(self, row: int, col: int) -> bool:
        """
        Reveal a cell at the given position.

        On the first reveal, places mines avoiding this cell. An empty
        cell (0 adjacent mines) opens its whole zero region plus the
        numbered cells bordering it. A mine loses the game.

        Args:
            row: Row index to reveal.
            col: Column index to reveal.

        Returns:
            True if the board changed, False if the action was a no-op.

        Raises:
            IndexError: If the position is off the board.
        """
        self._require_position(row, col)
        if not self._can_reveal(row, col):
            return False

        if not self._mines_placed:
            self.place_mines(row, col)

        if self._grid[row][col].is_mine:
            self._lose()
            return True

        self._flood_reveal(row, col)
        self.check_win()
        return True

    def _can_reveal(self, row: int, col: int) -> bool:
        """Check if a cell can be revealed."""
        if self._game_state != GameState.PLAYING:
            return False
        cell = self._grid[row][col]
        return not (cell.is_revealed or cell.is_flagged)

    def _flood_reveal(self, row: int, col: int) -> None:
        """Reveal from a safe cell outward through zero-count cells."""
        queue = deque([(row, col)])
        visited = {(row, col)}

        while queue:
            current_row, current_col = queue.popleft()
            cell = self._grid[current_row][current_col]
            if cell.is_mine or not cell.reveal():
                continue
            self._safe_revealed += 1

            if cell.adjacent_mines > 0:
                continue
            for neighbor in self._get_neighbors(current_row, current_col):
                if neighbor not in visited:
                    visited.add(neighbor)
                    queue.append(neighbor)

    def _lose(self) -> None:
        """End the game and uncover every mine, flagged or not."""
        self._game_state = GameState.LOST
        for _, _, cell in self.cells():
            if cell.is_mine:
                cell.is_revealed = True
        logger.info("Mine hit, game lost")

    def check_win(self) -> bool:
        """
        Check if all non-mine cells are revealed.

        On a win, unflagged mines are uncovered; flagged ones keep
        their flags.

        Returns:
            True if this call ended the game as won.
        """
        if self._game_state != GameState.PLAYING or not self._mines_placed:
            return False
        if self._safe_revealed < self.config.total_cells - self._mine_count:
            return False

        self._game_state = GameState.WON
        for _, _, cell in self.cells():
            if cell.is_mine and not cell.is_flagged:
                cell.is_revealed = True
        logger.info("All safe cells revealed, game won")
        return True

    def toggle_flag(self, row: int, col: int) -> bool:
        """
        Toggle flag on a cell.

        Args:
            row: Row index.
            col: Column index.

        Returns:
            True if flag was toggled, False otherwise.

        Raises:
            IndexError: If the position is off the board.
        """
        self._require_position(row, col)
        if self._game_state != GameState.PLAYING:
            return False
        return self._grid[row][col].toggle_flag()

    # ========================================================================
    # State Accessors (High-level)
    # ========================================================================

    @property
    def game_state(self) -> GameState:
        """Get current game state."""
        return self._game_state

    @property
    def is_playing(self) -> bool:
        """Check if game is still in progress."""
        return self._game_state == GameState.PLAYING

    @property
    def is_won(self) -> bool:
        """Check if game was won."""
        return self._game_state == GameState.WON

    @property
    def is_lost(self) -> bool:
        """Check if game was lost."""
        return self._game_state == GameState.LOST

    @property
    def mines_placed(self) -> bool:
        """Whether the first reveal has materialized the mines."""
        return self._mines_placed

    @property
    def total_mines(self) -> int:
        """Mines on the board, or the requested count before placement."""
        if self._mines_placed:
            return self._mine_count
        return self.config.num_mines

    @property
    def mine_shortfall(self) -> int:
        """Requested mines that did not fit on the board."""
        if not self._mines_placed:
            return 0
        return max(self.config.num_mines - self._mine_count, 0)

    @property
    def flag_count(self) -> int:
        return sum(1 for _, _, cell in self.cells() if cell.is_flagged)

    @property
    def mines_remaining(self) -> int:
        """Mines minus flags; negative when over-flagged."""
        return self.total_mines - self.flag_count

    def get_cell(self, row: int, col: int) -> Cell:
        """Get cell at position."""
        self._require_position(row, col)
        return self._grid[row][col]

    def cells(self) -> Iterator[Tuple[int, int, Cell]]:
        """Iterate over (row, col, cell) in row-major order."""
        for row, line in enumerate(self._grid):
            for col, cell in enumerate(line):
                yield row, col, cell

    def get_observation(self) -> np.ndarray:
        """
        Get board state as a numpy array for rendering.

        Returns:
            2D numpy array where:
                -1 = hidden
                -2 = flagged
                0-8 = revealed with adjacent count
                9 = revealed mine
        """
        obs = np.zeros((self.config.height, self.config.width), dtype=np.int8)
        for row, col, cell in self.cells():
            obs[row, col] = cell.to_observation()
        return obs
