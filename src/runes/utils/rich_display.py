"""
Rich-based terminal display for matches.

Provides:
- Board rendering as a table with 1-based coordinates
- Coloured status messages
- Benchmark summary tables
- Logging that shares the console with the board
"""

import logging
from typing import Dict, Optional, Sequence

from rich.console import Console
from rich.table import Table
from rich.text import Text

from ..core import PLAYER_SYMBOLS, Field, Game, Move, Position

console = Console()

FIELD_STYLES = {
    Field.EMPTY: "",
    Field.BIRTH: "green",
    Field.GIFT: "yellow",
    Field.WEALTH: "bold red",
    Field.KNOWLEDGE: "bold blue",
    Field.JOY: "bold magenta",
}


class MatchDisplay:
    """
    Rich-based display for a match.

    Shows the board after each move, highlighting the last placed symbol,
    and the final result.
    """

    def __init__(self, output: Optional[Console] = None):
        """
        Initialize match display.

        Args:
            output: Console to draw on (default: the shared module console)
        """
        self.console = output or console

    def log_info(self, message: str):
        self.console.print(f"[blue]ℹ[/blue] {message}")

    def log_success(self, message: str):
        self.console.print(f"[green]✓[/green] {message}")

    def log_warning(self, message: str):
        self.console.print(f"[yellow]⚠[/yellow]  {message}")

    def log_error(self, message: str):
        self.console.print(f"[red]✗[/red] {message}")

    def show_header(self, title: str, size: int, player_names: Sequence[str]):
        """Show match header."""
        self.console.rule(f"[bold blue]{title}[/bold blue]")
        self.console.print(f"Board: {size}x{size}")
        for number, name in enumerate(player_names):
            symbol = PLAYER_SYMBOLS[number]
            style = FIELD_STYLES[symbol]
            self.console.print(f"Player {number + 1}: {name} [{style}]{symbol.glyph}[/{style}]")
        self.console.print()

    def board_table(self, game: Game) -> Table:
        """Create board table; coordinates are shown 1-based."""
        last = game.last_move.position if game.last_move else None

        table = Table(show_header=True, box=None, padding=(0, 1))
        table.add_column("", style="dim", justify="right")
        for col in range(game.size):
            table.add_column(str(col + 1), style="dim", justify="center")

        for row in range(game.size):
            cells = [str(row + 1)]
            for col in range(game.size):
                pos = Position(row, col)
                field = game.board.field_at(pos)
                glyph = field.glyph if field != Field.EMPTY else "·"
                style = FIELD_STYLES[field]
                if pos == last:
                    style = f"{style} reverse".strip()
                cells.append(Text(glyph, style=style))
            table.add_row(*cells)

        return table

    def show_board(self, game: Game, move: Optional[Move] = None, player_name: str = ""):
        """Show the board, optionally announcing the move just played."""
        if move is not None:
            who = f"{player_name} " if player_name else ""
            self.log_info(f"{who}played {move.symbol.name} at ({move.position.row + 1}, {move.position.col + 1})")
        self.console.print(self.board_table(game))
        self.console.print()

    def show_result(self, game: Game, player_names: Sequence[str]):
        """Show the final result."""
        winner = game.winner()
        if winner is None:
            self.log_warning("Draw: the board is full")
        else:
            self.log_success(f"Player {winner + 1} ({player_names[winner]}) wins!")

    def show_bench_summary(
        self,
        player_names: Sequence[str],
        wins: Dict[int, int],
        draws: int,
        games: int,
        average_turns: float,
    ):
        """Show benchmark results table."""
        table = Table(title=f"Results over {games} games")
        table.add_column("Player", style="cyan")
        table.add_column("Strategy", style="white")
        table.add_column("Wins", justify="right")
        table.add_column("Win rate", justify="right")

        for number, name in enumerate(player_names):
            count = wins.get(number, 0)
            rate = count / games if games else 0.0
            table.add_row(f"Player {number + 1}", name, f"{count:,}", f"{rate:.1%}")
        table.add_row("", "[dim]Draws[/dim]", f"{draws:,}", f"{draws / games if games else 0.0:.1%}")

        self.console.print(table)
        self.console.print(f"Average game length: {average_turns:.1f} moves")


def setup_rich_logging(level: str = "INFO"):
    """Configure logging to work nicely with rich console."""
    from rich.logging import RichHandler

    # Remove existing handlers
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    rich_handler = RichHandler(
        console=console,
        show_time=True,
        show_path=False,
        rich_tracebacks=True,
    )
    rich_handler.setFormatter(logging.Formatter("%(message)s"))

    logging.basicConfig(
        level=getattr(logging, level.upper()),
        handlers=[rich_handler],
        format="%(message)s",
    )
