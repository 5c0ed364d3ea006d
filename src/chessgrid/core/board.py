"""Board - immutable snapshot of piece placement, turn and captures."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from chessgrid.core.enums import Color, PieceType
from chessgrid.core.movement import is_checked, king_actions
from chessgrid.core.piece import Piece
from chessgrid.core.types import BOARD_SIZE, Coordinate

_LOGGER = logging.getLogger(__name__)

_BACK_RANK: tuple[PieceType, ...] = (
    PieceType.ROOK,
    PieceType.KNIGHT,
    PieceType.BISHOP,
    PieceType.QUEEN,
    PieceType.KING,
    PieceType.BISHOP,
    PieceType.KNIGHT,
    PieceType.ROOK,
)


@dataclass(frozen=True, slots=True)
class NoPieceAtSource:
    """Failure value returned by :meth:`Board.move` for an empty source."""

    square: Coordinate


@dataclass(frozen=True, slots=True)
class Board:
    """Immutable board value.

    Pieces keep a stable order: a moved piece stays in its slot and a
    captured one is dropped from the tuple and appended to ``captured``.
    """

    pieces: tuple[Piece, ...]
    side_to_move: Color = Color.WHITE
    captured: tuple[Piece, ...] = ()
    _index: dict[Coordinate, Piece] = field(
        init=False, repr=False, compare=False, hash=False
    )

    def __post_init__(self) -> None:
        index: dict[Coordinate, Piece] = {}
        for piece in self.pieces:
            if piece.square in index:
                raise ValueError(f"Two pieces on {piece.square}")
            index[piece.square] = piece
        object.__setattr__(self, "_index", index)

    # -- Factory ------------------------------------------------------------

    @classmethod
    def from_pieces(
        cls,
        pieces: Iterable[Piece],
        side_to_move: Color = Color.WHITE,
        captured: Iterable[Piece] = (),
    ) -> Board:
        """Board with an arbitrary layout."""
        return cls(tuple(pieces), side_to_move, tuple(captured))

    @classmethod
    def empty_board(cls) -> Board:
        """Standard 32-piece starting layout, White to move, no captures."""
        pieces: list[Piece] = []
        for x in range(BOARD_SIZE):
            pieces.append(Piece(PieceType.PAWN, Color.WHITE, Coordinate(x, 1)))
        for x, kind in enumerate(_BACK_RANK):
            pieces.append(Piece(kind, Color.WHITE, Coordinate(x, 0)))
        for x in range(BOARD_SIZE):
            pieces.append(Piece(PieceType.PAWN, Color.BLACK, Coordinate(x, 6)))
        for x, kind in enumerate(_BACK_RANK):
            pieces.append(Piece(kind, Color.BLACK, Coordinate(x, 7)))
        return cls(tuple(pieces))

    # -- Query helpers ------------------------------------------------------

    def query(self, square: Coordinate) -> Piece | None:
        return self._index.get(square)

    def pieces_of(self, color: Color) -> list[Piece]:
        """All of *color*'s pieces, in board order."""
        return [p for p in self.pieces if p.color == color]

    def king(self, color: Color) -> Piece | None:
        """First king of *color*, or ``None`` if the layout has none."""
        for piece in self.pieces:
            if piece.color == color and piece.kind == PieceType.KING:
                return piece
        return None

    def is_in_check(self, color: Color) -> bool:
        king = self.king(color)
        return king is not None and is_checked(king.square, color, self)

    def is_checkmate(self) -> Color | None:
        """Color of a mated king, evaluated for the side *not* to move.

        Only king moves are considered: the king must have no candidate
        square and stand attacked. Stalemate yields ``None`` like any other
        non-mate position.
        """
        king = self.king(self.side_to_move.opposite)
        if king is None:
            return None
        escapes = king_actions(king.square, king.color, self, king.has_moved, True)
        if not escapes and is_checked(king.square, king.color, self):
            return king.color
        return None

    # -- Move application ---------------------------------------------------

    def move(self, from_sq: Coordinate, to_sq: Coordinate) -> Board | NoPieceAtSource:
        """Relocate the piece on *from_sq* to *to_sq* and pass the turn.

        The destination is not validated: callers must pick *to_sq* from the
        piece's candidate squares. Whatever stands on *to_sq* is captured. A
        king moving more than one file also brings the same-colored rook from
        that corner to the square it passed over, provided that square is
        empty; otherwise only the king moves.
        """
        piece = self.query(from_sq)
        if piece is None:
            _LOGGER.debug("No piece to move on %s", from_sq)
            return NoPieceAtSource(from_sq)

        captured = self.captured
        target = self.query(to_sq) if to_sq != from_sq else None
        if target is not None:
            captured = captured + (target,)

        replacements: dict[Coordinate, Piece] = {from_sq: piece.moved_to(to_sq)}

        if piece.kind == PieceType.KING and abs(to_sq.x - from_sq.x) > 1:
            toward = 1 if to_sq.x > from_sq.x else -1
            rook_sq = Coordinate(7 if toward > 0 else 0, from_sq.y)
            rook = self.query(rook_sq)
            rook_to = Coordinate(from_sq.x + toward, from_sq.y)
            if (
                rook is not None
                and rook_sq != to_sq
                and rook.kind == PieceType.ROOK
                and rook.color == piece.color
                and self.query(rook_to) is None
            ):
                replacements[rook_sq] = rook.moved_to(rook_to)
                _LOGGER.debug("Castling rook %s -> %s", rook_sq, rook_to)

        pieces = tuple(
            replacements.get(p.square, p)
            for p in self.pieces
            if p is not target
        )
        _LOGGER.debug("Moved %s %s -> %s", piece.kind.name, from_sq, to_sq)
        return Board(pieces, self.side_to_move.opposite, captured)

    # -- Dunder helpers -----------------------------------------------------

    def __repr__(self) -> str:
        cells = [["."] * BOARD_SIZE for _ in range(BOARD_SIZE)]
        for p in self.pieces:
            cells[p.square.y][p.square.x] = str(p)
        rows: list[str] = []
        for y in range(BOARD_SIZE - 1, -1, -1):
            row = cells[y]
            rows.append(f"{y + 1} {' '.join(row)}")
        rows.append("  a b c d e f g h")
        rows.append(f"{self.side_to_move} to move")
        return "\n".join(rows)
