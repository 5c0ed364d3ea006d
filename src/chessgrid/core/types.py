"""Board coordinates and naming helpers.

Board layout:
    x is the file (0-7, a-h), y is the rank (0-7, 1-8).
    White starts on ranks y=0 and y=1, Black on y=6 and y=7.
"""

from __future__ import annotations

from dataclasses import dataclass

BOARD_SIZE = 8


def on_board(x: int, y: int) -> bool:
    """Whether raw ``(x, y)`` lies on the 8x8 board."""
    return 0 <= x < BOARD_SIZE and 0 <= y < BOARD_SIZE


@dataclass(frozen=True, slots=True)
class Coordinate:
    """A single square. Equality is componentwise."""

    x: int
    y: int

    def __post_init__(self) -> None:
        if not on_board(self.x, self.y):
            raise ValueError(f"Coordinate off board: ({self.x}, {self.y})")

    def __str__(self) -> str:
        return square_name(self)


def square_name(sq: Coordinate) -> str:
    """Human-readable name, e.g. (0, 0) -> 'a1', (7, 7) -> 'h8'."""
    return chr(ord("a") + sq.x) + str(sq.y + 1)


def parse_square(name: str) -> Coordinate:
    """Parse square name, e.g. 'e4' -> Coordinate(4, 3)."""
    if len(name) != 2 or name[0] not in "abcdefgh" or name[1] not in "12345678":
        raise ValueError(f"Invalid square name: {name!r}")
    return Coordinate(ord(name[0]) - ord("a"), int(name[1]) - 1)


# ── Named square constants ──────────────────────────────────────────────────

A1, B1, C1, D1, E1, F1, G1, H1 = (Coordinate(x, 0) for x in range(8))
A2, B2, C2, D2, E2, F2, G2, H2 = (Coordinate(x, 1) for x in range(8))
A3, B3, C3, D3, E3, F3, G3, H3 = (Coordinate(x, 2) for x in range(8))
A4, B4, C4, D4, E4, F4, G4, H4 = (Coordinate(x, 3) for x in range(8))
A5, B5, C5, D5, E5, F5, G5, H5 = (Coordinate(x, 4) for x in range(8))
A6, B6, C6, D6, E6, F6, G6, H6 = (Coordinate(x, 5) for x in range(8))
A7, B7, C7, D7, E7, F7, G7, H7 = (Coordinate(x, 6) for x in range(8))
A8, B8, C8, D8, E8, F8, G8, H8 = (Coordinate(x, 7) for x in range(8))
