"""Game management layer — turn tracking, history and engine hand-off.

Quick start::

    from chesscore.core import parse_square
    from chesscore.game import GameSession

    session = GameSession()
    for move in session.legal_destinations(parse_square("e2")):
        print(move)
"""

from chesscore.game.session import GameSession, MoveCallback, MoveRecord

__all__ = [
    "GameSession",
    "MoveCallback",
    "MoveRecord",
]
