"""Pseudo-legal move generation per piece type.

Generators see only the board and never filter friendly destinations or
self-check; ``GameState.legal_moves`` does that.
"""

from typing import Callable, Dict, List, Tuple

from .board import Board, Piece, PieceType, Position, Side


Generator = Callable[[Board, Position, Side], List[Position]]

ORTHOGONAL = [(-1, 0), (1, 0), (0, -1), (0, 1)]
DIAGONAL = [(-1, -1), (-1, 1), (1, -1), (1, 1)]

PALACE_COLS = range(3, 6)
PALACE_ROWS = {
    Side.RED: range(7, 10),
    Side.BLUE: range(0, 3),
}

# (target offset, leg offset); each leg serves two targets.
HORSE_JUMPS = [
    ((-2, -1), (-1, 0)),
    ((-2, 1), (-1, 0)),
    ((2, -1), (1, 0)),
    ((2, 1), (1, 0)),
    ((-1, -2), (0, -1)),
    ((-1, 2), (0, 1)),
    ((1, -2), (0, -1)),
    ((1, 2), (0, 1)),
]
ELEPHANT_JUMPS = [
    ((-3, -2), (-1, -1)),
    ((-3, 2), (-1, 1)),
    ((3, -2), (1, -1)),
    ((3, 2), (1, 1)),
    ((-2, -3), (-1, -1)),
    ((-2, 3), (-1, 1)),
    ((2, -3), (1, -1)),
    ((2, 3), (1, 1)),
]


def in_palace(pos: Position, side: Side) -> bool:
    """Check if a position is in the palace of the given side."""
    return pos.row in PALACE_ROWS[side] and pos.col in PALACE_COLS


def _palace_steps(pos: Position, side: Side, directions: List[Tuple[int, int]]) -> List[Position]:
    return [
        pos.offset(dr, dc)
        for dr, dc in directions
        if in_palace(pos.offset(dr, dc), side)
    ]


def king_moves(board: Board, pos: Position, side: Side) -> List[Position]:
    """One step in any of 8 directions inside the own palace."""
    return _palace_steps(pos, side, ORTHOGONAL + DIAGONAL)


def guard_moves(board: Board, pos: Position, side: Side) -> List[Position]:
    """One diagonal step inside the own palace."""
    return _palace_steps(pos, side, DIAGONAL)


def chariot_moves(board: Board, pos: Position, side: Side) -> List[Position]:
    """Orthogonal slide up to and including the first occupied cell."""
    moves = []
    for dr, dc in ORTHOGONAL:
        to_pos = pos.offset(dr, dc)
        while to_pos.is_valid():
            moves.append(to_pos)
            if not board.is_empty(to_pos):
                break
            to_pos = to_pos.offset(dr, dc)
    return moves


def cannon_moves(board: Board, pos: Position, side: Side) -> List[Position]:
    """Orthogonal jump over exactly one screen onto the next occupied cell.

    The cannon only lands on occupied cells, and any piece (including
    another cannon) can act as the screen or be the target.
    """
    moves = []
    for dr, dc in ORTHOGONAL:
        to_pos = pos.offset(dr, dc)
        seen = 0
        while to_pos.is_valid():
            if not board.is_empty(to_pos):
                seen += 1
                if seen == 2:
                    moves.append(to_pos)
                    break
            to_pos = to_pos.offset(dr, dc)
    return moves


def _leg_jumps(
    board: Board, pos: Position, jumps: List[Tuple[Tuple[int, int], Tuple[int, int]]]
) -> List[Position]:
    moves = []
    for (dr, dc), (leg_dr, leg_dc) in jumps:
        leg = pos.offset(leg_dr, leg_dc)
        if not leg.is_valid() or not board.is_empty(leg):
            continue
        to_pos = pos.offset(dr, dc)
        if to_pos.is_valid():
            moves.append(to_pos)
    return moves


def horse_moves(board: Board, pos: Position, side: Side) -> List[Position]:
    """L-shaped jump, blocked by a piece on the orthogonal leg."""
    return _leg_jumps(board, pos, HORSE_JUMPS)


def elephant_moves(board: Board, pos: Position, side: Side) -> List[Position]:
    """(3, 2) jump, blocked by a piece on the diagonal leg."""
    return _leg_jumps(board, pos, ELEPHANT_JUMPS)


def soldier_moves(board: Board, pos: Position, side: Side) -> List[Position]:
    """Forward step; sideways steps too while inside the own palace."""
    forward = -1 if side == Side.RED else 1
    moves = [pos.offset(forward, 0)]
    if in_palace(pos, side):
        moves.append(pos.offset(0, -1))
        moves.append(pos.offset(0, 1))
    return [to_pos for to_pos in moves if to_pos.is_valid()]


MOVE_GENERATORS: Dict[PieceType, Generator] = {
    PieceType.KING: king_moves,
    PieceType.CHARIOT: chariot_moves,
    PieceType.HORSE: horse_moves,
    PieceType.ELEPHANT: elephant_moves,
    PieceType.GUARD: guard_moves,
    PieceType.CANNON: cannon_moves,
    PieceType.SOLDIER: soldier_moves,
}
assert set(MOVE_GENERATORS) == set(PieceType), "move generator missing for a piece type"


def pseudo_legal_moves(board: Board, pos: Position, piece: Piece) -> List[Position]:
    """Generate candidate destinations for the piece standing on pos."""
    return MOVE_GENERATORS[piece.piece_type](board, pos, piece.side)


def is_square_attacked(board: Board, pos: Position, attacker: Side) -> bool:
    """Check if any piece of ``attacker`` has ``pos`` among its pseudo-legal moves."""
    for from_pos, piece in board.pieces(attacker):
        if pos in pseudo_legal_moves(board, from_pos, piece):
            return True
    return False
