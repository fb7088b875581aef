"""Janggi game state: legality, move application and terminal detection."""

import logging
from typing import Dict, List, Optional

from .board import Board, Piece, Position, Side, SIDE_CODES
from .moves import is_square_attacked, pseudo_legal_moves

logger = logging.getLogger(__name__)


class GameState:
    """Board plus side to move and winner.

    The state only changes through ``apply_move``. A game is over once one
    side's King has been captured.
    """

    def __init__(
        self,
        board: Optional[Board] = None,
        side_to_move: Side = Side.RED,
        custom_setup: Optional[Dict[str, str]] = None,
    ):
        """Initialize a game.

        Args:
            board: Board to play on (starting position if omitted)
            side_to_move: Side that moves next
            custom_setup: Optional mapping of squares (e.g., "e1") to piece codes
                (e.g., "bK" for BLUE King); takes precedence over ``board``
        """
        if custom_setup is not None:
            board = Board.from_setup(custom_setup)
        elif board is None:
            board = Board.starting_position()
        self.board = board
        self.side_to_move = side_to_move
        self.winner: Optional[Side] = self._compute_winner()

    def piece_at(self, pos: Position) -> Optional[Piece]:
        """Get piece at the given position. ``pos`` must be on the board."""
        return self.board.get(pos)

    def legal_moves(self, from_pos: Position) -> List[Position]:
        """Destinations the piece on ``from_pos`` may legally move to.

        Empty if the square is empty or holds a piece of the side not to move.
        Destinations holding a friendly piece and destinations that would
        leave the mover's King attacked are filtered out.
        """
        piece = self.piece_at(from_pos)
        if piece is None or piece.side != self.side_to_move:
            return []

        legal = []
        for to_pos in pseudo_legal_moves(self.board, from_pos, piece):
            target = self.board.get(to_pos)
            if target is not None and target.side == piece.side:
                continue
            if self._leaves_king_attacked(from_pos, to_pos, piece.side):
                continue
            legal.append(to_pos)
        return legal

    def _leaves_king_attacked(self, from_pos: Position, to_pos: Position, side: Side) -> bool:
        """Simulate the move on a scratch board and test the mover's King."""
        scratch = self.board.copy()
        scratch.move(from_pos, to_pos)
        king = scratch.find_king(side)
        return king is not None and is_square_attacked(scratch, king, side.opponent)

    def is_position_under_attack(self, pos: Position, attacker: Side) -> bool:
        """Check if ``attacker`` can reach ``pos``, ignoring self-check."""
        return is_square_attacked(self.board, pos, attacker)

    def apply_move(self, from_pos: Position, to_pos: Position) -> bool:
        """Make a move. Returns True if legal, False otherwise (state unchanged)."""
        if self.is_terminal():
            return False
        piece = self.piece_at(from_pos)
        if piece is None or piece.side != self.side_to_move:
            return False
        if to_pos not in self.legal_moves(from_pos):
            return False

        captured = self.board.get(to_pos)
        self.board.move(from_pos, to_pos)
        logger.debug(
            "%s %s %s->%s%s",
            piece.side.name, piece.piece_type.name, from_pos, to_pos,
            f" captures {captured.piece_type.name}" if captured else "",
        )

        self.winner = self._compute_winner()
        if self.winner is not None:
            logger.info("Game over: %s wins", self.winner.name)
        else:
            self.side_to_move = self.side_to_move.opponent
        return True

    def _compute_winner(self) -> Optional[Side]:
        red_alive = self.board.find_king(Side.RED) is not None
        blue_alive = self.board.find_king(Side.BLUE) is not None
        if red_alive and not blue_alive:
            return Side.RED
        if blue_alive and not red_alive:
            return Side.BLUE
        if not red_alive and not blue_alive:
            logger.warning("Both kings are missing; no winner assigned")
        return None

    def is_terminal(self) -> bool:
        return self.winner is not None

    def clone(self) -> "GameState":
        """Deep copy; the clone shares no mutable structure with this state."""
        state = GameState.__new__(GameState)
        state.board = self.board.copy()
        state.side_to_move = self.side_to_move
        state.winner = self.winner
        return state

    def to_fen(self) -> str:
        """Board FEN followed by the side to move."""
        return f"{self.board.to_fen()} {SIDE_CODES[self.side_to_move]}"

    def __repr__(self) -> str:
        return f"GameState({self.to_fen()!r}, winner={self.winner})"
