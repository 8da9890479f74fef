"""Exceptions raised by the rules engine and the search strategies."""


class InvalidMoveError(ValueError):
    """
    A move was rejected by the rules.

    Raised for out-of-bounds or occupied targets, symbols that are not legal
    at the target cell, and moves made after the game has ended. The game
    state is left untouched.
    """

    def __init__(self, message: str, move=None):
        super().__init__(message)
        self.move = move


class SearchExhaustedError(RuntimeError):
    """A strategy found no candidate moves in a game that is not over."""
