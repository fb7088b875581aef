"""A single game being played, either against the engine or hot-seat."""

import logging
import random
from enum import Enum
from typing import Dict, List, Optional

from .board import Move, Position, Side
from .config import Settings
from .engine import Engine
from .state import GameState

logger = logging.getLogger(__name__)


class GameMode(Enum):
    """Who plays the second side."""

    ALONE = "alone"  # Human plays RED against the engine
    TOGETHER = "together"  # Two humans share the board


class GameSession:
    """Holds the live game state and runs the engine's turns.

    The live state is only changed through ``GameState.apply_move``; the
    engine searches on a clone.
    """

    def __init__(
        self,
        mode: GameMode = GameMode.ALONE,
        settings: Optional[Settings] = None,
        engine: Optional[Engine] = None,
        custom_setup: Optional[Dict[str, str]] = None,
        side_to_move: Side = Side.RED,
    ):
        self.mode = mode
        self.settings = settings if settings is not None else Settings()
        if engine is None:
            engine = Engine(
                depth=self.settings.depth,
                side=self.settings.ai_side,
                rng=random.Random(self.settings.seed),
            )
        self.engine = engine
        self._custom_setup = custom_setup
        self._first_side = side_to_move
        self.state = self._new_state()

    def _new_state(self) -> GameState:
        return GameState(side_to_move=self._first_side, custom_setup=self._custom_setup)

    @property
    def side_to_move(self) -> Side:
        return self.state.side_to_move

    @property
    def winner(self) -> Optional[Side]:
        return self.state.winner

    def is_terminal(self) -> bool:
        return self.state.is_terminal()

    def legal_moves(self, pos: Position) -> List[Position]:
        """Destinations to highlight after ``pos`` is selected."""
        if self.awaiting_ai():
            return []
        return self.state.legal_moves(pos)

    def awaiting_ai(self) -> bool:
        """True when the engine is to move in a game against the engine."""
        return (
            self.mode == GameMode.ALONE
            and not self.state.is_terminal()
            and self.state.side_to_move == self.engine.side
        )

    def play(self, from_pos: Position, to_pos: Position) -> bool:
        """Apply a human move. Returns False if it was refused."""
        if self.state.is_terminal() or self.awaiting_ai():
            return False
        return self.state.apply_move(from_pos, to_pos)

    def search(self) -> Optional[Move]:
        """Pick the engine's move on a clone of the live state."""
        return self.engine.select_move(self.state.clone(), self.settings.depth)

    def play_ai_move(self) -> Optional[Move]:
        """Let the engine move. Returns the applied move, or None if it had none."""
        if not self.awaiting_ai():
            return None
        return self.apply_ai_move(self.search())

    def apply_ai_move(self, move: Optional[Move]) -> Optional[Move]:
        """Apply a move picked by ``search``. Raises RuntimeError if it is illegal."""
        if move is None:
            logger.info("%s has no legal moves", self.engine.side.name)
            return None
        if not self.state.apply_move(move.from_pos, move.to_pos):
            raise RuntimeError(f"engine produced an illegal move: {move}")
        logger.info("%s played %s (%s)", self.engine.side.name, move, self.engine.last_tier)
        return move

    def reset(self) -> None:
        """Start over from the initial position."""
        self.state = self._new_state()
        logger.info("Game reset (%s mode)", self.mode.value)
