"""
Main CLI for runes.
"""

import argparse
import logging
import sys
from typing import Callable, List, Optional, Sequence, Tuple

from tqdm import tqdm

from ..ai import STRATEGY_KINDS, Level, create_strategy
from ..core import DEFAULT_BOARD_SIZE, Game, InvalidMoveError, Move
from ..players import AiPlayer, HumanPlayer, Player
from ..session import Match
from ..utils.rich_display import MatchDisplay, setup_rich_logging

# (kind, level); kind "human" has no level
PlayerSpec = Tuple[str, Optional[Level]]

# Depth-4 negamax takes tens of seconds per move on the default board
VERY_HARD_BOARD_SIZE = 7


def setup_logging(level: str = "INFO") -> None:
    """Configure logging."""
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def parse_player_spec(text: str) -> PlayerSpec:
    """Parse 'human', 'random' or 'kind:level' such as 'negamax:hard'."""
    kind, _, level_text = text.strip().lower().partition(":")
    if kind == "human":
        if level_text:
            raise argparse.ArgumentTypeError("human players have no level")
        return kind, None
    if kind not in STRATEGY_KINDS:
        raise argparse.ArgumentTypeError(
            f"unknown player {kind!r} (choose from human, {', '.join(STRATEGY_KINDS)})"
        )
    try:
        level = Level.parse(level_text) if level_text else Level.MEDIUM
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e))
    return kind, level


def default_board_size(specs: Sequence[PlayerSpec]) -> int:
    """Board size to use when --size is not given."""
    if any(spec == ("negamax", Level.VERY_HARD) for spec in specs):
        return VERY_HARD_BOARD_SIZE
    return DEFAULT_BOARD_SIZE


def console_reader(display: MatchDisplay) -> Callable[[HumanPlayer, Game], Tuple[int, int]]:
    """Coordinate reader prompting on the rich console."""

    def read(player: HumanPlayer, game: Game) -> Tuple[int, int]:
        text = display.console.input(f"{player.name} [{player.symbol.glyph}] row col: ")
        parts = text.replace(",", " ").split()
        if len(parts) != 2:
            raise ValueError(f"Expected 'row col', got {text!r}")
        return int(parts[0]), int(parts[1])

    return read


def build_player(
    spec: PlayerSpec,
    number: int,
    workers: int = 1,
    seed: Optional[int] = None,
    display: Optional[MatchDisplay] = None,
) -> Player:
    """Create the player described by spec for seat number (0-based)."""
    kind, level = spec
    if kind == "human":
        if display is None:
            raise ValueError("Human players need a display to read moves from")
        return HumanPlayer(f"Player {number + 1}", console_reader(display))

    kwargs = {}
    if kind in ("random", "mcts"):
        kwargs["seed"] = seed
    if kind == "mcts":
        kwargs["num_workers"] = workers
    strategy = create_strategy(kind, level, **kwargs)
    label = kind if kind == "random" else f"{kind}:{level.name.lower()}"
    return AiPlayer(strategy, name=label)


def play_command(args):
    """Play one match on the terminal."""
    setup_rich_logging(args.log_level)
    display = MatchDisplay()

    players = [
        build_player(spec, number, workers=args.workers, seed=args.seed, display=display)
        for number, spec in enumerate((args.player1, args.player2))
    ]
    names = [p.name for p in players]
    match = Match(players, size=args.size)

    display.show_header(f"Runes - {names[0]} vs {names[1]}", args.size, names)
    display.show_board(match.game)

    def on_move(game: Game, move: Move):
        # The mover's turn has already passed to the opponent
        display.show_board(game, move, player_name=names[1 - game.next_player])

    try:
        match.play(on_move=on_move)
    except InvalidMoveError as e:
        display.log_error(f"Aborting match: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        display.log_warning("Match interrupted")
        sys.exit(130)

    display.show_result(match.game, names)


def bench_command(args):
    """Play a series of AI matches and summarise the results."""
    setup_logging(args.log_level)
    logger = logging.getLogger(__name__)

    specs = (args.player1, args.player2)
    if any(kind == "human" for kind, _ in specs):
        logger.error("bench only runs AI players")
        sys.exit(2)

    display = MatchDisplay()
    wins = {0: 0, 1: 0}
    draws = 0
    turns: List[int] = []
    names: List[str] = []

    for game_number in tqdm(range(args.games), desc="Games", unit=" game"):
        seeds = [None, None]
        if args.seed is not None:
            seeds = [args.seed + 2 * game_number, args.seed + 2 * game_number + 1]

        players = [
            build_player(spec, number, workers=args.workers, seed=seed)
            for number, (spec, seed) in enumerate(zip(specs, seeds))
        ]
        names = [p.name for p in players]

        result = Match(players, size=args.size).play()
        turns.append(result.turns)
        if result.is_draw:
            draws += 1
        else:
            wins[result.winner] += 1

    average = sum(turns) / len(turns) if turns else 0.0
    logger.info(f"Finished {args.games} games on a {args.size}x{args.size} board")
    display.show_bench_summary(names, wins, draws, args.games, average)


def add_match_arguments(parser: argparse.ArgumentParser, default_p1: str, default_p2: str):
    parser.add_argument(
        "--size",
        type=int,
        default=None,
        help=(
            f"Board width and height (default: {DEFAULT_BOARD_SIZE}, or "
            f"{VERY_HARD_BOARD_SIZE} with a negamax:very_hard player)"
        ),
    )
    parser.add_argument(
        "--player1",
        type=parse_player_spec,
        default=parse_player_spec(default_p1),
        help=f"First player: human or kind[:level], kind in {', '.join(STRATEGY_KINDS)} (default: {default_p1})",
    )
    parser.add_argument(
        "--player2",
        type=parse_player_spec,
        default=parse_player_spec(default_p2),
        help=f"Second player (default: {default_p2})",
    )
    parser.add_argument(
        "--workers", type=int, default=1, help="Worker processes for mcts players"
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed for AI players")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Runes board game")
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play a match on the terminal")
    add_match_arguments(play_parser, "human", "negamax:medium")
    play_parser.set_defaults(func=play_command)

    # Bench command
    bench_parser = subparsers.add_parser("bench", help="Pit two AI players against each other")
    add_match_arguments(bench_parser, "negamax:easy", "mcts:easy")
    bench_parser.add_argument("--games", type=int, default=10, help="Number of games")
    bench_parser.set_defaults(func=bench_command)

    return parser


def main(argv: Optional[List[str]] = None):
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.size is None:
        args.size = default_board_size((args.player1, args.player2))
    if args.size < 2:
        parser.error("--size must be at least 2")
    if args.workers < 1:
        parser.error("--workers must be at least 1")

    args.func(args)


if __name__ == "__main__":
    main()
