"""Core domain layer — pure chess rules with zero external dependencies.

Quick start::

    from chessgrid.core import Board, parse_square

    board = Board.empty_board()
    pawn = board.query(parse_square("e2"))
    targets = pawn.possible_actions(board)
    board = board.move(pawn.square, targets[-1])
"""

from chessgrid.core.board import Board, NoPieceAtSource
from chessgrid.core.enums import Color, PieceType
from chessgrid.core.movement import get_possible_actions, is_checked, king_actions
from chessgrid.core.piece import Piece
from chessgrid.core.rules import Rules
from chessgrid.core.types import Coordinate, on_board, parse_square, square_name

__all__ = [
    # Enums
    "Color",
    "PieceType",
    # Types / helpers
    "Coordinate",
    "on_board",
    "parse_square",
    "square_name",
    # Domain objects
    "Board",
    "NoPieceAtSource",
    "Piece",
    "Rules",
    # Movement
    "get_possible_actions",
    "is_checked",
    "king_actions",
]
