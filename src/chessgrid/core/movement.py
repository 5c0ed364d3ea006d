"""Per-piece movement rules and attack detection.

Every rule is a pure function of ``(square, color, board, has_moved)`` and
returns the candidate destination squares in a stable order. Rules consult
the board only through ``query`` and ``pieces_of``.

Candidates are not fully legal moves: only the King filters out squares the
opponent attacks, and "attacked" means "appears among the opponent's
candidate squares" (see :func:`is_checked`).
"""

from __future__ import annotations

from collections.abc import Callable
from typing import TYPE_CHECKING, TypeAlias

from chessgrid.core.enums import Color, PieceType
from chessgrid.core.types import BOARD_SIZE, Coordinate, on_board

if TYPE_CHECKING:
    from chessgrid.core.board import Board

    MoveRule: TypeAlias = Callable[[Coordinate, Color, Board, bool], list[Coordinate]]

KNIGHT_OFFSETS: tuple[tuple[int, int], ...] = (
    (1, 2),
    (-1, 2),
    (1, -2),
    (-1, -2),
    (2, 1),
    (2, -1),
    (-2, 1),
    (-2, -1),
)

KING_OFFSETS: tuple[tuple[int, int], ...] = (
    (1, 0),
    (-1, 0),
    (1, 1),
    (-1, -1),
    (0, 1),
    (0, -1),
    (1, -1),
    (-1, 1),
)

ROOK_DIRS: tuple[tuple[int, int], ...] = ((1, 0), (-1, 0), (0, 1), (0, -1))
BISHOP_DIRS: tuple[tuple[int, int], ...] = ((1, 1), (1, -1), (-1, 1), (-1, -1))

# Castling geometry, by file index on the king's rank.
KING_HOME_FILE = 4
KINGSIDE_ROOK_FILE = 7
QUEENSIDE_ROOK_FILE = 0
_KINGSIDE_EMPTY = (5, 6)
_KINGSIDE_SAFE = (5, 6)
_QUEENSIDE_EMPTY = (1, 2, 3)
# b-file is only required empty; the king never crosses it.
_QUEENSIDE_SAFE = (2, 3)


# -- Precomputed lookup tables ---------------------------------------------


def _all_squares() -> list[Coordinate]:
    return [Coordinate(x, y) for y in range(BOARD_SIZE) for x in range(BOARD_SIZE)]


def _build_targets(
    offsets: tuple[tuple[int, int], ...],
) -> dict[Coordinate, tuple[Coordinate, ...]]:
    targets: dict[Coordinate, tuple[Coordinate, ...]] = {}
    for sq in _all_squares():
        targets[sq] = tuple(
            Coordinate(sq.x + dx, sq.y + dy)
            for dx, dy in offsets
            if on_board(sq.x + dx, sq.y + dy)
        )
    return targets


def _build_rays(
    directions: tuple[tuple[int, int], ...],
) -> dict[Coordinate, tuple[tuple[Coordinate, ...], ...]]:
    rays_per_square: dict[Coordinate, tuple[tuple[Coordinate, ...], ...]] = {}
    for sq in _all_squares():
        square_rays: list[tuple[Coordinate, ...]] = []
        for dx, dy in directions:
            x = sq.x + dx
            y = sq.y + dy
            ray: list[Coordinate] = []
            while on_board(x, y):
                ray.append(Coordinate(x, y))
                x += dx
                y += dy
            square_rays.append(tuple(ray))
        rays_per_square[sq] = tuple(square_rays)
    return rays_per_square


_KNIGHT_TARGETS = _build_targets(KNIGHT_OFFSETS)
_KING_TARGETS = _build_targets(KING_OFFSETS)
_ROOK_RAYS = _build_rays(ROOK_DIRS)
_BISHOP_RAYS = _build_rays(BISHOP_DIRS)


# -- Sliding pieces ---------------------------------------------------------


def _cast_rays(
    color: Color,
    board: Board,
    rays: tuple[tuple[Coordinate, ...], ...],
) -> list[Coordinate]:
    actions: list[Coordinate] = []
    for ray in rays:
        for to_sq in ray:
            target = board.query(to_sq)
            if target is None:
                actions.append(to_sq)
                continue
            if target.color != color:
                actions.append(to_sq)
            break
    return actions


def rook_actions(
    square: Coordinate, color: Color, board: Board, has_moved: bool
) -> list[Coordinate]:
    return _cast_rays(color, board, _ROOK_RAYS[square])


def bishop_actions(
    square: Coordinate, color: Color, board: Board, has_moved: bool
) -> list[Coordinate]:
    return _cast_rays(color, board, _BISHOP_RAYS[square])


def queen_actions(
    square: Coordinate, color: Color, board: Board, has_moved: bool
) -> list[Coordinate]:
    """Union of a rook and a bishop standing on *square*."""
    return rook_actions(square, color, board, has_moved) + bishop_actions(
        square, color, board, has_moved
    )


# -- Short-range pieces -----------------------------------------------------


def knight_actions(
    square: Coordinate, color: Color, board: Board, has_moved: bool
) -> list[Coordinate]:
    actions: list[Coordinate] = []
    for to_sq in _KNIGHT_TARGETS[square]:
        target = board.query(to_sq)
        if target is None or target.color != color:
            actions.append(to_sq)
    return actions


def pawn_actions(
    square: Coordinate, color: Color, board: Board, has_moved: bool
) -> list[Coordinate]:
    """Forward steps plus diagonal captures.

    A diagonal is offered only when an opposing piece stands on it; there is
    no en passant and no promotion.
    """
    actions: list[Coordinate] = []
    forward = color.forward

    max_steps = 1 if has_moved else 2
    for step in range(1, max_steps + 1):
        y = square.y + forward * step
        if not on_board(square.x, y):
            break
        to_sq = Coordinate(square.x, y)
        if board.query(to_sq) is not None:
            break
        actions.append(to_sq)

    side_steps = (1, -1) if color == Color.WHITE else (-1, 1)
    for dx in side_steps:
        x = square.x + dx
        y = square.y + forward
        if not on_board(x, y):
            continue
        to_sq = Coordinate(x, y)
        target = board.query(to_sq)
        if target is not None and target.color != color:
            actions.append(to_sq)
    return actions


# -- King and check detection -----------------------------------------------


def king_actions(
    square: Coordinate,
    color: Color,
    board: Board,
    has_moved: bool,
    check_filtering: bool,
) -> list[Coordinate]:
    """Neighbouring squares plus castling targets.

    With *check_filtering* off (attacks-only mode) attacked squares are kept
    and castling is never offered. :func:`is_checked` always asks an opposing
    King in that mode, so the two kings' safety checks recurse at most one
    level deep.
    """
    actions: list[Coordinate] = []
    for to_sq in _KING_TARGETS[square]:
        target = board.query(to_sq)
        if target is not None and target.color == color:
            continue
        if check_filtering and is_checked(to_sq, color, board):
            continue
        actions.append(to_sq)

    if not has_moved and check_filtering:
        actions.extend(_castling_actions(square, color, board))
    return actions


def _castling_actions(
    square: Coordinate, color: Color, board: Board
) -> list[Coordinate]:
    if square.x != KING_HOME_FILE:
        return []

    rank = square.y
    actions: list[Coordinate] = []
    for rook in board.pieces_of(color):
        if rook.kind != PieceType.ROOK or rook.has_moved or rook.square.y != rank:
            continue
        if rook.square.x == KINGSIDE_ROOK_FILE:
            empty_files, safe_files, step = _KINGSIDE_EMPTY, _KINGSIDE_SAFE, 2
        elif rook.square.x == QUEENSIDE_ROOK_FILE:
            empty_files, safe_files, step = _QUEENSIDE_EMPTY, _QUEENSIDE_SAFE, -2
        else:
            continue
        if any(board.query(Coordinate(x, rank)) is not None for x in empty_files):
            continue
        if any(is_checked(Coordinate(x, rank), color, board) for x in safe_files):
            continue
        actions.append(Coordinate(square.x + step, rank))
    return actions


def is_checked(square: Coordinate, color: Color, board: Board) -> bool:
    """Whether any piece opposing *color* lists *square* as a candidate.

    Opposing kings are asked with check filtering disabled.
    """
    for piece in board.pieces_of(color.opposite):
        if piece.kind == PieceType.KING:
            targets = king_actions(
                piece.square, piece.color, board, piece.has_moved, False
            )
        else:
            targets = get_possible_actions(
                piece.kind, piece.square, piece.color, board, piece.has_moved
            )
        if square in targets:
            return True
    return False


def _checked_king_actions(
    square: Coordinate, color: Color, board: Board, has_moved: bool
) -> list[Coordinate]:
    return king_actions(square, color, board, has_moved, True)


# -- Dispatch ---------------------------------------------------------------

MOVE_RULES: dict[PieceType, MoveRule] = {
    PieceType.PAWN: pawn_actions,
    PieceType.KNIGHT: knight_actions,
    PieceType.BISHOP: bishop_actions,
    PieceType.ROOK: rook_actions,
    PieceType.QUEEN: queen_actions,
    PieceType.KING: _checked_king_actions,
}


def get_possible_actions(
    kind: PieceType,
    square: Coordinate,
    color: Color,
    board: Board,
    has_moved: bool,
) -> list[Coordinate]:
    """Candidate destinations for a *kind* piece of *color* on *square*.

    Kings are check-filtered here; use :func:`king_actions` directly for
    attacks-only mode.
    """
    return MOVE_RULES[kind](square, color, board, has_moved)
