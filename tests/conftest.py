"""Shared pytest fixtures used across the test suite."""

from __future__ import annotations

from collections.abc import Callable, Iterable

import pytest

from chessgrid.core.board import Board
from chessgrid.core.enums import Color, PieceType
from chessgrid.core.piece import Piece
from chessgrid.core.types import parse_square

_KINDS: dict[str, PieceType] = {
    "P": PieceType.PAWN,
    "N": PieceType.KNIGHT,
    "B": PieceType.BISHOP,
    "R": PieceType.ROOK,
    "Q": PieceType.QUEEN,
    "K": PieceType.KING,
}


def board_from(
    layout: dict[str, str],
    side_to_move: Color = Color.WHITE,
    moved: Iterable[str] = (),
) -> Board:
    """Build a board from ``{"e1": "K", "e8": "k"}`` (lowercase = black)."""
    moved_squares = set(moved)
    pieces = [
        Piece(
            _KINDS[char.upper()],
            Color.WHITE if char.isupper() else Color.BLACK,
            parse_square(name),
            name in moved_squares,
        )
        for name, char in layout.items()
    ]
    return Board.from_pieces(pieces, side_to_move)


@pytest.fixture
def make_board() -> Callable[..., Board]:
    """Factory fixture wrapping :func:`board_from`."""
    return board_from


@pytest.fixture
def initial() -> Board:
    return Board.empty_board()
