"""High-level rule checks: check and checkmate."""

from __future__ import annotations

from typing import TYPE_CHECKING

from chessgrid.core.enums import Color
from chessgrid.core.movement import is_checked

if TYPE_CHECKING:
    from chessgrid.core.board import Board
    from chessgrid.core.types import Coordinate


class Rules:
    """Static rule-checker that operates on a :class:`Board`."""

    @staticmethod
    def is_checked(square: Coordinate, color: Color, board: Board) -> bool:
        """Whether *color*'s opponent lists *square* among its candidates."""
        return is_checked(square, color, board)

    @staticmethod
    def is_in_check(board: Board, color: Color) -> bool:
        return board.is_in_check(color)

    @staticmethod
    def checkmated_color(board: Board) -> Color | None:
        """Mated color for the side that is *not* to move, else ``None``.

        Positions where the side to move is mated report ``None``; that is
        the selection rule of :meth:`Board.is_checkmate`, kept as is.
        """
        return board.is_checkmate()

    @staticmethod
    def checked_kings(board: Board) -> list[Coordinate]:
        """Squares of every king currently in check."""
        return [
            king.square
            for color in (Color.WHITE, Color.BLACK)
            if (king := board.king(color)) is not None
            and is_checked(king.square, color, board)
        ]
