"""GameSession — single owner of the current board for a two-player game.

Drives the select-then-move flow of a board UI: select a piece of the side
to move, read its highlighted targets, submit one of them. Boards are
immutable values; the session only swaps its reference to the current one
and keeps the previous values for undo.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from chessgrid.core.board import Board, NoPieceAtSource
from chessgrid.core.enums import Color
from chessgrid.core.piece import Piece
from chessgrid.core.rules import Rules
from chessgrid.core.types import Coordinate

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[Coordinate, Coordinate, Board], None]  # from, to, board
SelectCallback = Callable[[Coordinate | None, list[Coordinate]], None]
CheckmateCallback = Callable[[Color], None]


@dataclass
class SessionEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_select: list[SelectCallback] = field(default_factory=list)
    on_checkmate: list[CheckmateCallback] = field(default_factory=list)


# ── Session ──────────────────────────────────────────────────────────────────


class GameSession:
    """Owns the "current" board and serialises move application.

    Thread-safety: meant to be driven from a single thread. Boards handed
    out by :attr:`board` may be shared freely.
    """

    __slots__ = ("_board", "_history", "_selected", "_targets", "events")

    def __init__(self, board: Board | None = None) -> None:
        self._board = board if board is not None else Board.empty_board()
        self._history: list[Board] = []
        self._selected: Coordinate | None = None
        self._targets: list[Coordinate] = []
        self.events = SessionEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def board(self) -> Board:
        return self._board

    @property
    def history(self) -> tuple[Board, ...]:
        """Earlier boards, oldest first."""
        return tuple(self._history)

    @property
    def side_to_move(self) -> Color:
        return self._board.side_to_move

    @property
    def selected(self) -> Coordinate | None:
        return self._selected

    @property
    def highlights(self) -> list[Coordinate]:
        return list(self._targets)

    @property
    def checkmated(self) -> Color | None:
        return Rules.checkmated_color(self._board)

    # ── Lifecycle ────────────────────────────────────────────────────────

    def new_game(self, board: Board | None = None) -> None:
        """Reset to *board* (default: standard layout) and drop history."""
        self._board = board if board is not None else Board.empty_board()
        self._history.clear()
        self._clear_selection()

    # ── Interaction ──────────────────────────────────────────────────────

    def select(self, square: Coordinate) -> list[Coordinate]:
        """Select the piece on *square* and return its targets.

        Only a piece of the side to move can be selected. Selecting the
        current selection again, an empty square or an opposing piece
        clears the selection.
        """
        piece = self._board.query(square)
        if (
            piece is None
            or piece.color != self._board.side_to_move
            or square == self._selected
        ):
            self._clear_selection()
            return []

        self._selected = square
        self._targets = piece.possible_actions(self._board)
        self._emit_select()
        return list(self._targets)

    def submit(self, target: Coordinate) -> bool:
        """Move the selected piece to *target* if it is highlighted."""
        if self._selected is None or target not in self._targets:
            _LOGGER.debug("Rejected move to %s (selected=%s)", target, self._selected)
            return False

        origin = self._selected
        result = self._board.move(origin, target)
        if isinstance(result, NoPieceAtSource):
            _LOGGER.debug("Rejected move: no piece on %s", result.square)
            self._clear_selection()
            return False

        self._history.append(self._board)
        self._board = result
        self._clear_selection()
        self._emit_move(origin, target)

        mated = self.checkmated
        if mated is not None:
            _LOGGER.info("Checkmate: %s king has no escape", mated)
            self._emit_checkmate(mated)
        return True

    def undo(self) -> bool:
        """Restore the previous board. Returns ``False`` if there is none."""
        if not self._history:
            return False
        self._board = self._history.pop()
        self._clear_selection()
        return True

    # ── Query helpers ────────────────────────────────────────────────────

    def captures_by(self, color: Color) -> list[Piece]:
        """Pieces *color* has taken, in capture order."""
        return [p for p in self._board.captured if p.color != color]

    def checked_squares(self) -> list[Coordinate]:
        """Squares of kings currently in check."""
        return Rules.checked_kings(self._board)

    # ── Internal helpers ─────────────────────────────────────────────────

    def _clear_selection(self) -> None:
        had_selection = self._selected is not None
        self._selected = None
        self._targets = []
        if had_selection:
            self._emit_select()

    def _emit_select(self) -> None:
        for cb in self.events.on_select:
            cb(self._selected, list(self._targets))

    def _emit_move(self, origin: Coordinate, target: Coordinate) -> None:
        for cb in self.events.on_move:
            cb(origin, target, self._board)

    def _emit_checkmate(self, color: Color) -> None:
        for cb in self.events.on_checkmate:
            cb(color)
