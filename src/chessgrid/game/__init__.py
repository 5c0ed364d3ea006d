"""Game management layer — the caller-side owner of the current board.

Quick start::

    from chessgrid.core import parse_square
    from chessgrid.game import GameSession

    session = GameSession()
    session.select(parse_square("e2"))
    session.submit(parse_square("e4"))
"""

from chessgrid.game.session import GameSession, SessionEvents

__all__ = [
    "GameSession",
    "SessionEvents",
]
