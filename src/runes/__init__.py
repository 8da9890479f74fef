"""Runes: a neighbourhood-driven territory game and the AIs that play it."""

__version__ = "0.1.0"
