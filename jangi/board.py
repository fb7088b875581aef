"""Janggi board representation."""

from enum import Enum
from typing import Dict, Iterator, List, Optional, Tuple
from dataclasses import dataclass

import numpy as np


FILES = "abcdefghi"


class Side(Enum):
    """Player sides.

    The value doubles as the sign of a piece code on the board grid.
    """

    RED = 1  # Bottom side (rows 7-9), moves first
    BLUE = -1  # Top side (rows 0-2), moves second

    @property
    def opponent(self) -> "Side":
        return Side(-self.value)


class PieceType(Enum):
    """Piece types."""

    KING = 1
    CHARIOT = 2
    HORSE = 3
    ELEPHANT = 4
    GUARD = 5
    CANNON = 6
    SOLDIER = 7


PIECE_CODES: Dict[PieceType, str] = {
    PieceType.KING: "K",
    PieceType.CHARIOT: "R",
    PieceType.HORSE: "H",
    PieceType.ELEPHANT: "E",
    PieceType.GUARD: "G",
    PieceType.CANNON: "C",
    PieceType.SOLDIER: "S",
}

KOREAN_NAMES: Dict[PieceType, str] = {
    PieceType.KING: "왕",
    PieceType.CHARIOT: "차",
    PieceType.HORSE: "마",
    PieceType.ELEPHANT: "상",
    PieceType.GUARD: "사",
    PieceType.CANNON: "포",
    PieceType.SOLDIER: "졸",
}

SIDE_CODES: Dict[Side, str] = {Side.RED: "r", Side.BLUE: "b"}


@dataclass(frozen=True)
class Position:
    """An intersection on the board."""

    row: int  # 0-9, row 0 is BLUE's back rank
    col: int  # 0-8 (a-i)

    def is_valid(self) -> bool:
        return 0 <= self.row < Board.ROWS and 0 <= self.col < Board.COLS

    def offset(self, d_row: int, d_col: int) -> "Position":
        return Position(self.row + d_row, self.col + d_col)

    @property
    def square(self) -> str:
        """Square notation, e.g. (0, 4) -> "e1"."""
        return f"{FILES[self.col]}{self.row + 1}"

    @classmethod
    def from_square(cls, square: str) -> "Position":
        """Parse square notation. Raises ValueError on bad input."""
        if len(square) < 2 or square[0] not in FILES:
            raise ValueError(f"invalid square: {square!r}")
        pos = cls(int(square[1:]) - 1, FILES.index(square[0]))
        if not pos.is_valid():
            raise ValueError(f"square out of range: {square!r}")
        return pos

    def __str__(self) -> str:
        return self.square


@dataclass(frozen=True)
class Piece:
    """Represents a piece on the board."""

    side: Side
    piece_type: PieceType

    @property
    def code(self) -> int:
        """Signed grid code of this piece."""
        return self.piece_type.value * self.side.value

    @classmethod
    def from_code(cls, code: int) -> "Piece":
        return cls(Side(1 if code > 0 else -1), PieceType(abs(code)))

    @property
    def korean_name(self) -> str:
        return KOREAN_NAMES[self.piece_type]

    def __str__(self) -> str:
        return f"{self.side.name}_{self.piece_type.name}"


@dataclass(frozen=True)
class Move:
    """Represents a move. Captures are implicit."""

    from_pos: Position
    to_pos: Position

    def __str__(self) -> str:
        return self.to_uci()

    def to_uci(self) -> str:
        """Convert to UCI-like notation."""
        return f"{self.from_pos.square}{self.to_pos.square}"

    @classmethod
    def from_uci(cls, uci: str) -> "Move":
        """Parse UCI-like notation such as "a7a6" or "e10e9"."""
        # The second square starts at the second file letter.
        for i in range(2, len(uci)):
            if uci[i] in FILES:
                return cls(Position.from_square(uci[:i]), Position.from_square(uci[i:]))
        raise ValueError(f"invalid move: {uci!r}")


# Back rank, columns 0-8.
BACK_RANK = (
    PieceType.CHARIOT,
    PieceType.HORSE,
    PieceType.ELEPHANT,
    PieceType.GUARD,
    PieceType.KING,
    PieceType.GUARD,
    PieceType.ELEPHANT,
    PieceType.HORSE,
    PieceType.CHARIOT,
)
CANNON_COLS = (1, 7)
SOLDIER_COLS = (0, 2, 4, 6, 8)


class Board:
    """10x9 grid of optional pieces.

    Cells hold signed ``int8`` piece codes: 0 for empty, ``PieceType.value``
    times ``Side.value`` otherwise. Copies never share the underlying array.
    """

    ROWS = 10
    COLS = 9

    def __init__(self, grid: Optional[np.ndarray] = None):
        if grid is None:
            grid = np.zeros((self.ROWS, self.COLS), dtype=np.int8)
        self.grid = grid

    @classmethod
    def starting_position(cls) -> "Board":
        """Set up the canonical starting position."""
        board = cls()
        for side, back, cannons, soldiers in (
            (Side.BLUE, 0, 2, 3),
            (Side.RED, 9, 7, 6),
        ):
            for col, piece_type in enumerate(BACK_RANK):
                board.set(Position(back, col), Piece(side, piece_type))
            for col in CANNON_COLS:
                board.set(Position(cannons, col), Piece(side, PieceType.CANNON))
            for col in SOLDIER_COLS:
                board.set(Position(soldiers, col), Piece(side, PieceType.SOLDIER))
        return board

    @classmethod
    def from_setup(cls, setup: Dict[str, str]) -> "Board":
        """Build a board from square notation to piece code, e.g. {"e1": "bK"}.

        Raises:
            ValueError: on an unknown square or piece code, or more than one
                King for a side.
        """
        sides = {code: side for side, code in SIDE_CODES.items()}
        kinds = {code: kind for kind, code in PIECE_CODES.items()}
        board = cls()
        for square, piece_code in setup.items():
            pos = Position.from_square(square)
            if len(piece_code) != 2 or piece_code[0] not in sides or piece_code[1] not in kinds:
                raise ValueError(f"invalid piece code {piece_code!r} at {square}")
            board.set(pos, Piece(sides[piece_code[0]], kinds[piece_code[1]]))
        for side in Side:
            kings = int(np.count_nonzero(board.grid == PieceType.KING.value * side.value))
            if kings > 1:
                raise ValueError(f"{side.name} has {kings} kings")
        return board

    def get(self, pos: Position) -> Optional[Piece]:
        """Get piece at the given position."""
        assert pos.is_valid(), f"position out of range: {pos!r}"
        code = int(self.grid[pos.row, pos.col])
        if code == 0:
            return None
        return Piece.from_code(code)

    def is_empty(self, pos: Position) -> bool:
        assert pos.is_valid(), f"position out of range: {pos!r}"
        return bool(self.grid[pos.row, pos.col] == 0)

    def set(self, pos: Position, piece: Optional[Piece]) -> None:
        assert pos.is_valid(), f"position out of range: {pos!r}"
        self.grid[pos.row, pos.col] = 0 if piece is None else piece.code

    def move(self, from_pos: Position, to_pos: Position) -> None:
        """Move whatever stands on from_pos, overwriting to_pos. No rule checks."""
        assert from_pos.is_valid() and to_pos.is_valid()
        self.grid[to_pos.row, to_pos.col] = self.grid[from_pos.row, from_pos.col]
        self.grid[from_pos.row, from_pos.col] = 0

    def copy(self) -> "Board":
        return Board(self.grid.copy())

    def pieces(self, side: Optional[Side] = None) -> Iterator[Tuple[Position, Piece]]:
        """Yield (position, piece) in row-major order, optionally for one side."""
        if side is None:
            cells = np.argwhere(self.grid != 0)
        else:
            cells = np.argwhere(self.grid * side.value > 0)
        for row, col in cells:
            yield Position(int(row), int(col)), Piece.from_code(int(self.grid[row, col]))

    def find_king(self, side: Side) -> Optional[Position]:
        """Get king position for given side."""
        cells = np.argwhere(self.grid == PieceType.KING.value * side.value)
        if len(cells) == 0:
            return None
        row, col = cells[0]
        return Position(int(row), int(col))

    def to_fen(self) -> str:
        """Convert board to a FEN-like string, row 0 first."""
        rows: List[str] = []
        for row in range(self.ROWS):
            row_str = ""
            empty_count = 0
            for col in range(self.COLS):
                piece = self.get(Position(row, col))
                if piece is None:
                    empty_count += 1
                    continue
                if empty_count > 0:
                    row_str += str(empty_count)
                    empty_count = 0
                row_str += SIDE_CODES[piece.side] + PIECE_CODES[piece.piece_type]
            if empty_count > 0:
                row_str += str(empty_count)
            rows.append(row_str)
        return "/".join(rows)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return bool(np.array_equal(self.grid, other.grid))

    def __repr__(self) -> str:
        return f"Board({self.to_fen()!r})"
