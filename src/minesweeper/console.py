"""
Terminal presentation for the Minesweeper engine.

Renders session snapshots as text, parses typed commands, and turns
wall-clock time into the engine's once-per-second ticks.
"""
import time
from dataclasses import dataclass
from typing import Callable, Optional

from .board import Difficulty, GameState
from .cell import FLAGGED_CODE, HIDDEN_CODE, MINE_CODE
from .engine import GameEngine
from .session import SessionSnapshot


HELP_TEXT = """Commands:
  r ROW COL       reveal a cell
  f ROW COL       flag or unflag a cell
  n [DIFFICULTY]  new game (easy, medium, hard)
  h               show this help
  q               quit"""

ACTION_ALIASES = {
    "r": "reveal",
    "reveal": "reveal",
    "f": "flag",
    "flag": "flag",
    "n": "new",
    "new": "new",
    "h": "help",
    "help": "help",
    "q": "quit",
    "quit": "quit",
}


# ============================================================================
# Formatting
# ============================================================================

def format_time(seconds: int) -> str:
    """Format elapsed seconds as MM:SS."""
    minutes, secs = divmod(seconds, 60)
    return f"{minutes:02d}:{secs:02d}"


def _cell_symbol(code: int, status: GameState) -> str:
    if code == HIDDEN_CODE:
        return "."
    if code == FLAGGED_CODE:
        return "F"
    if code == MINE_CODE:
        return "+" if status == GameState.WON else "*"
    if code == 0:
        return " "
    return str(code)


def render_board(snapshot: SessionSnapshot) -> str:
    """
    Render a snapshot as text.

    The first line shows difficulty (Custom for a board built outside
    the presets), mines remaining and elapsed time. A column index
    header and one line per row follow.
    """
    label = "Custom" if snapshot.difficulty is None else snapshot.difficulty.value
    lines = [
        f"{label.capitalize()} | "
        f"Mines: {snapshot.mines_remaining} | "
        f"Time: {format_time(snapshot.elapsed_seconds)}"
    ]
    lines.append("   " + "".join(f"{col:>3}" for col in range(snapshot.width)))
    for row in range(snapshot.height):
        symbols = "".join(
            f"{_cell_symbol(int(code), snapshot.status):>3}"
            for code in snapshot.observation[row]
        )
        lines.append(f"{row:>2} {symbols}")
    return "\n".join(lines)


# ============================================================================
# Input
# ============================================================================

@dataclass(frozen=True)
class Command:
    """A parsed console command."""

    action: str
    row: Optional[int] = None
    col: Optional[int] = None
    difficulty: Optional[Difficulty] = None


def parse_command(line: str) -> Command:
    """
    Parse one line of player input.

    Raises:
        ValueError: If the line is not a recognised command.
    """
    parts = line.split()
    if not parts:
        raise ValueError("Empty command (type h for help)")
    action = ACTION_ALIASES.get(parts[0].lower())
    if action is None:
        raise ValueError(f"Unknown command: {parts[0]}")
    args = parts[1:]

    if action in ("reveal", "flag"):
        if len(args) != 2:
            raise ValueError(f"Usage: {parts[0]} ROW COL")
        try:
            row, col = int(args[0]), int(args[1])
        except ValueError:
            raise ValueError("ROW and COL must be integers") from None
        return Command(action, row=row, col=col)

    if action == "new":
        if len(args) > 1:
            raise ValueError("Usage: n [easy|medium|hard]")
        if not args:
            return Command(action)
        try:
            return Command(action, difficulty=Difficulty(args[0].lower()))
        except ValueError:
            raise ValueError(f"Unknown difficulty: {args[0]}") from None

    if args:
        raise ValueError(f"{parts[0]} takes no arguments")
    return Command(action)


class Ticker:
    """
    Converts a monotonic clock into whole-second ticks.

    Fractions of a second carry over between calls to ``pending``.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self.clock = clock
        self._last = clock()

    def restart(self) -> None:
        self._last = self.clock()

    def pending(self) -> int:
        """Number of whole seconds since the last tick was handed out."""
        ticks = int(self.clock() - self._last)
        if ticks > 0:
            self._last += ticks
        return ticks


# ============================================================================
# Game Loop
# ============================================================================

def play(
    engine: GameEngine,
    read: Callable[[str], str] = input,
    write: Callable[[str], None] = print,
    clock: Callable[[], float] = time.monotonic,
) -> None:
    """
    Run an interactive game until the player quits or input ends.

    Args:
        engine: Engine to drive.
        read: Prompt-and-read function.
        write: Output function.
        clock: Monotonic clock used for the timer.
    """
    ticker = Ticker(clock)
    write(render_board(engine.snapshot()))

    while True:
        try:
            line = read("> ")
        except EOFError:
            break

        for _ in range(ticker.pending()):
            engine.tick()

        try:
            command = parse_command(line)
        except ValueError as error:
            write(str(error))
            continue

        if command.action == "quit":
            break
        if command.action == "help":
            write(HELP_TEXT)
            continue
        if command.action == "new":
            engine.reset(command.difficulty)
            ticker.restart()
            write(render_board(engine.snapshot()))
            continue

        if not engine.session.board.contains(command.row, command.col):
            write(f"({command.row}, {command.col}) is off the board")
            continue

        if command.action == "reveal":
            result = engine.reveal(command.row, command.col)
        else:
            result = engine.toggle_flag(command.row, command.col)

        if result.timer_started:
            ticker.restart()
        if not result.changed:
            write("Nothing to do there")
            continue

        write(render_board(engine.snapshot()))
        if result.game_over:
            if engine.status == GameState.WON:
                write(f"You won in {format_time(engine.session.elapsed_seconds)}!")
            else:
                write("Boom! You hit a mine.")
            write("Type n to play again or q to quit.")
