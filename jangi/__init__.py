"""Korean Janggi rule engine and AI opponent."""

from .board import Board, Move, Piece, PieceType, Position, Side
from .state import GameState
from .moves import MOVE_GENERATORS, in_palace, is_square_attacked, pseudo_legal_moves
from .evaluator import SimpleEvaluator, PIECE_VALUES, WIN_SCORE
from .engine import Engine, list_moves
from .config import Settings
from .session import GameMode, GameSession

__all__ = [
    # Board and game
    'Board', 'Move', 'Piece', 'PieceType', 'Position', 'Side',
    'GameState',
    # Move generation
    'MOVE_GENERATORS', 'in_palace', 'is_square_attacked', 'pseudo_legal_moves',
    # Search
    'Engine', 'list_moves',
    'SimpleEvaluator', 'PIECE_VALUES', 'WIN_SCORE',
    # Sessions
    'Settings', 'GameMode', 'GameSession',
]
