"""Static position evaluation."""

from typing import Dict

import numpy as np

from .board import PieceType, Side
from .state import GameState


WIN_SCORE = 10000

PIECE_VALUES: Dict[PieceType, int] = {
    PieceType.KING: 1000,
    PieceType.CHARIOT: 13,
    PieceType.HORSE: 5,
    PieceType.ELEPHANT: 3,
    PieceType.GUARD: 3,
    PieceType.CANNON: 7,
    PieceType.SOLDIER: 2,
}

# Indexed by abs(piece code); index 0 is the empty cell.
VALUE_TABLE = np.array(
    [0] + [PIECE_VALUES[PieceType(code)] for code in range(1, len(PieceType) + 1)],
    dtype=np.int32,
)


class SimpleEvaluator:
    """Material-based evaluator scored from one fixed side's point of view."""

    def __init__(self, side: Side = Side.BLUE):
        self.side = side

    def evaluate(self, state: GameState) -> int:
        """Score ``state`` for ``self.side``: win/loss constant or material balance."""
        if state.is_terminal():
            return WIN_SCORE if state.winner == self.side else -WIN_SCORE
        return self.material(state)

    def material(self, state: GameState) -> int:
        grid = state.board.grid.astype(np.int32)
        values = VALUE_TABLE[np.abs(grid)] * np.sign(grid)
        return int(values.sum()) * self.side.value
