"""Tests for the match loop and background move computation."""

import threading

import pytest
from runes.ai import RandomStrategy
from runes.core import PLAYER_SYMBOLS, Field, Game, InvalidMoveError, Move, Position
from runes.players import AiPlayer, Player
from runes.session import Match, MatchResult, PendingMove


class ScriptedPlayer(Player):
    """Plays a fixed list of moves."""

    def __init__(self, moves, name="Scripted"):
        super().__init__()
        self.moves = list(moves)
        self._name = name
        self.seen = []

    @property
    def name(self) -> str:
        return self._name

    def make_move(self, game: Game) -> Move:
        self.seen.append(game)
        return self.moves.pop(0)


class VandalPlayer(ScriptedPlayer):
    """Scribbles on its snapshot before moving."""

    def make_move(self, game: Game) -> Move:
        for pos in game.board.empty_positions():
            game.board.change(pos, Field.JOY)
        game.next_player = 1 - game.next_player
        return super().make_move(game)


class BlockingPlayer(Player):
    """Waits for an event before answering."""

    def __init__(self, move=None, error=None):
        super().__init__()
        self.release = threading.Event()
        self.move = move
        self.error = error

    @property
    def name(self) -> str:
        return "Blocking"

    def make_move(self, game: Game) -> Move:
        self.release.wait(5)
        if self.error is not None:
            raise self.error
        return self.move


def random_players(seed: int = 0):
    return [
        AiPlayer(RandomStrategy(seed=seed), name="One"),
        AiPlayer(RandomStrategy(seed=seed + 1), name="Two"),
    ]


def test_symbols_assigned():
    """Test players get their claim symbols in seat order."""
    players = random_players()
    Match(players, size=5)

    assert [p.symbol for p in players] == list(PLAYER_SYMBOLS)


def test_needs_two_players():
    """Test match size validation."""
    with pytest.raises(ValueError):
        Match(random_players()[:1], size=5)


def test_random_match_finishes():
    """Test a full game between random players."""
    match = Match(random_players(seed=4), size=5)

    result = match.play()

    assert isinstance(result, MatchResult)
    assert match.game.game_over
    assert result.turns == len(result.moves) == len(match.moves)
    assert result.winner == match.game.winner()
    assert result.is_draw == (result.winner is None)


def test_on_move_called_per_move():
    """Test the callback sees every applied move."""
    match = Match(random_players(seed=9), size=4)
    seen = []

    result = match.play(on_move=lambda game, move: seen.append(move))

    assert seen == result.moves


def test_players_get_snapshots():
    """Test players cannot touch the real game."""
    first = VandalPlayer([Move(Position(0, 0), Field.BIRTH)])
    second = ScriptedPlayer([Move(Position(4, 4), Field.BIRTH)])
    match = Match([first, second], size=5)

    assert match.play_turn() == Move(Position(0, 0), Field.BIRTH)

    assert first.seen[0] is not match.game
    assert match.game.next_player == 1
    assert len(match.game.board.empty_positions()) == 23
    assert match.current_player is second


def test_invalid_move_rejected():
    """Test a rejected move leaves the turn with the same player."""
    occupied = Move(Position(2, 2), Field.GIFT)
    first = ScriptedPlayer([occupied, Move(Position(0, 0), Field.BIRTH)])
    second = ScriptedPlayer([])
    match = Match([first, second], size=5)

    assert match.play_turn() is None
    assert match.current_player is first
    assert match.moves == []

    assert match.play_turn() == Move(Position(0, 0), Field.BIRTH)
    assert match.current_player is second


def test_invalid_move_streak_raises():
    """Test too many rejections in a row abort the match."""
    occupied = Move(Position(2, 2), Field.GIFT)
    first = ScriptedPlayer([occupied] * 3)
    match = Match([first, ScriptedPlayer([])], size=5, max_invalid_moves=3)

    assert match.play_turn() is None
    assert match.play_turn() is None
    with pytest.raises(InvalidMoveError):
        match.play_turn()


def test_reset():
    """Test reset starts a fresh game."""
    match = Match(random_players(seed=2), size=5)
    match.play()

    match.reset()

    assert not match.game.game_over
    assert match.moves == []
    assert match.game.next_player == 0


def test_pending_move_delivered_once():
    """Test a computed move is handed out exactly once."""
    move = Move(Position(0, 0), Field.BIRTH)
    player = BlockingPlayer(move=move)
    pending = PendingMove()

    pending.start(player, Match([player, player], size=5).game)
    assert pending.busy
    assert pending.poll() is None

    player.release.set()
    assert pending.wait(5) == move
    assert not pending.busy
    assert pending.poll() is None


def test_pending_move_single_slot():
    """Test a second computation cannot start while one is pending."""
    player = BlockingPlayer(move=Move(Position(0, 0), Field.BIRTH))
    game = Match([player, player], size=5).game
    pending = PendingMove()

    pending.start(player, game)
    with pytest.raises(RuntimeError):
        pending.start(player, game)

    player.release.set()
    pending.wait(5)
    pending.start(player, game)
    assert pending.wait(5) is not None


def test_pending_move_reraises():
    """Test errors from the computation surface on collection."""
    player = BlockingPlayer(error=InvalidMoveError("no move"))
    player.release.set()
    pending = PendingMove()

    pending.start(player, Match([player, player], size=5).game)

    with pytest.raises(InvalidMoveError):
        pending.wait(5)
    assert not pending.busy
