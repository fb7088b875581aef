"""Janggi AI engine with minimax search."""

import logging
import random
from typing import List, Optional

from .board import Move, Side
from .evaluator import SimpleEvaluator
from .state import GameState

logger = logging.getLogger(__name__)


def list_moves(state: GameState) -> List[Move]:
    """All legal moves of the side to move, row-major then generation order."""
    moves = []
    for from_pos, _ in state.board.pieces(state.side_to_move):
        for to_pos in state.legal_moves(from_pos):
            moves.append(Move(from_pos, to_pos))
    return moves


class Engine:
    """Janggi AI engine playing for one fixed side."""

    def __init__(
        self,
        depth: int = 3,
        side: Side = Side.BLUE,
        rng: Optional[random.Random] = None,
    ):
        """Initialize engine.

        Args:
            depth: Search depth in plies for minimax
            side: Side the engine maximizes for, whoever is to move
            rng: Random source for the fallback move (seed it for reproducible play)
        """
        self.depth = depth
        self.side = side
        self.rng = rng if rng is not None else random.Random()
        self.evaluator = SimpleEvaluator(side)
        self.nodes_searched = 0
        self.last_tier: Optional[str] = None  # "win", "block", "minimax" or "random"

    def select_move(
        self,
        state: GameState,
        depth: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ) -> Optional[Move]:
        """Choose a move for the side to move. Never mutates ``state``.

        Tries, in order: a move that captures the enemy King, a capture of a
        piece that threatens to capture ours next turn, then the best move by
        alpha-beta minimax. Returns None if there is nothing to play.
        """
        depth = self.depth if depth is None else depth
        rng = self.rng if rng is None else rng
        self.nodes_searched = 0
        self.last_tier = None

        if state.is_terminal():
            return None
        moves = list_moves(state)
        if not moves:
            return None

        move = self._winning_move(state, moves)
        if move is not None:
            return self._chosen(move, "win")

        move = self._blocking_move(state, moves)
        if move is not None:
            return self._chosen(move, "block")

        best_move = None
        best_value = float("-inf")
        for move in moves:
            child = state.clone()
            child.apply_move(move.from_pos, move.to_pos)
            value = self._minimax(child, depth - 1, float("-inf"), float("inf"), False)
            if value > best_value:
                best_value = value
                best_move = move

        if best_move is None:
            return self._chosen(rng.choice(moves), "random")
        return self._chosen(best_move, "minimax")

    def _chosen(self, move: Move, tier: str) -> Move:
        self.last_tier = tier
        logger.debug("%s plays %s (%s, %d nodes)", self.side.name, move, tier, self.nodes_searched)
        return move

    def _winning_move(self, state: GameState, moves: List[Move]) -> Optional[Move]:
        mover = state.side_to_move
        for move in moves:
            child = state.clone()
            child.apply_move(move.from_pos, move.to_pos)
            if child.is_terminal() and child.winner == mover:
                return move
        return None

    def _blocking_move(self, state: GameState, moves: List[Move]) -> Optional[Move]:
        """Capture the launch square of an opponent move that would win next turn."""
        opponent = state.side_to_move.opponent
        swapped = state.clone()
        swapped.side_to_move = opponent
        for threat in list_moves(swapped):
            child = swapped.clone()
            child.apply_move(threat.from_pos, threat.to_pos)
            if not (child.is_terminal() and child.winner == opponent):
                continue
            for move in moves:
                if move.to_pos == threat.from_pos:
                    return move
        return None

    def _cutoff(self, alpha: float, beta: float) -> bool:
        return alpha >= beta

    def _minimax(
        self,
        state: GameState,
        depth: int,
        alpha: float,
        beta: float,
        maximizing: bool,
    ) -> float:
        """Minimax algorithm with alpha-beta pruning."""
        self.nodes_searched += 1

        if depth <= 0 or state.is_terminal():
            return self.evaluator.evaluate(state)

        moves = list_moves(state)
        if not moves:
            return self.evaluator.evaluate(state)

        if maximizing:
            max_eval = float("-inf")
            for move in moves:
                child = state.clone()
                child.apply_move(move.from_pos, move.to_pos)
                eval_score = self._minimax(child, depth - 1, alpha, beta, False)
                max_eval = max(max_eval, eval_score)
                alpha = max(alpha, eval_score)
                if self._cutoff(alpha, beta):
                    break
            return max_eval
        else:
            min_eval = float("inf")
            for move in moves:
                child = state.clone()
                child.apply_move(move.from_pos, move.to_pos)
                eval_score = self._minimax(child, depth - 1, alpha, beta, True)
                min_eval = min(min_eval, eval_score)
                beta = min(beta, eval_score)
                if self._cutoff(alpha, beta):
                    break
            return min_eval
