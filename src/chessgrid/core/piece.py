"""Piece instance value object."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING

from chessgrid.core.enums import Color, PieceType
from chessgrid.core.movement import get_possible_actions
from chessgrid.core.types import Coordinate

if TYPE_CHECKING:
    from chessgrid.core.board import Board

_LETTERS: dict[PieceType, str] = {
    PieceType.PAWN: "P",
    PieceType.KNIGHT: "N",
    PieceType.BISHOP: "B",
    PieceType.ROOK: "R",
    PieceType.QUEEN: "Q",
    PieceType.KING: "K",
}

_UNICODE: dict[tuple[Color, PieceType], str] = {
    (Color.WHITE, PieceType.PAWN): "♙",
    (Color.WHITE, PieceType.KNIGHT): "♘",
    (Color.WHITE, PieceType.BISHOP): "♗",
    (Color.WHITE, PieceType.ROOK): "♖",
    (Color.WHITE, PieceType.QUEEN): "♕",
    (Color.WHITE, PieceType.KING): "♔",
    (Color.BLACK, PieceType.PAWN): "♟",
    (Color.BLACK, PieceType.KNIGHT): "♞",
    (Color.BLACK, PieceType.BISHOP): "♝",
    (Color.BLACK, PieceType.ROOK): "♜",
    (Color.BLACK, PieceType.QUEEN): "♛",
    (Color.BLACK, PieceType.KING): "♚",
}


@dataclass(frozen=True, slots=True)
class Piece:
    """Immutable piece placed on a board.

    ``has_moved`` starts ``False`` and is set by :meth:`moved_to`; nothing
    ever resets it.
    """

    kind: PieceType
    color: Color
    square: Coordinate
    has_moved: bool = False

    def moved_to(self, square: Coordinate) -> Piece:
        """Copy of this piece relocated to *square* and marked as moved."""
        return replace(self, square=square, has_moved=True)

    def possible_actions(self, board: Board) -> list[Coordinate]:
        """Candidate destination squares for this piece on *board*."""
        return get_possible_actions(
            self.kind, self.square, self.color, board, self.has_moved
        )

    # ── Display ──────────────────────────────────────────────────────────

    def __str__(self) -> str:
        """FEN-style letter (uppercase = white, lowercase = black)."""
        letter = _LETTERS[self.kind]
        return letter if self.color == Color.WHITE else letter.lower()

    @property
    def symbol(self) -> str:
        """Unicode chess symbol, e.g. ♞."""
        return _UNICODE[(self.color, self.kind)]
