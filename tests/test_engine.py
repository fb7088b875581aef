"""Unit tests for Engine class."""

import random
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from jangi import Engine, GameState, Move, Position, Side, list_moves


def move(uci):
    return Move.from_uci(uci)


class TestEngineInitialization:
    """Test engine initialization."""

    def test_default_initialization(self):
        engine = Engine()

        assert engine.depth == 3
        assert engine.side == Side.BLUE
        assert engine.nodes_searched == 0
        assert engine.last_tier is None

    def test_custom_depth_and_side(self):
        engine = Engine(depth=5, side=Side.RED)

        assert engine.depth == 5
        assert engine.evaluator.side == Side.RED


class TestListMoves:
    """Test move enumeration."""

    def test_moves_belong_to_side_to_move(self):
        state = GameState()
        moves = list_moves(state)

        assert moves
        assert all(state.piece_at(m.from_pos).side == Side.RED for m in moves)

    def test_row_major_order(self):
        state = GameState()
        origins = [(m.from_pos.row, m.from_pos.col) for m in list_moves(state)]

        assert origins == sorted(origins)

    def test_matches_legal_moves(self):
        state = GameState()
        moves = set(list_moves(state))

        assert Move(Position(6, 0), Position(5, 0)) in moves
        assert len(moves) == len(list_moves(state))


class TestTiers:
    """Test the three selection tiers."""

    def test_immediate_king_capture(self):
        state = GameState(
            custom_setup={"e5": "bR", "e10": "rK", "d1": "bK", "a10": "rR"},
            side_to_move=Side.BLUE,
        )
        engine = Engine(depth=1)

        assert engine.select_move(state) == move("e5e10")
        assert engine.last_tier == "win"

    def test_blocks_threat_by_capturing_attacker(self):
        # RED chariot on e6 threatens the BLUE king on e1; BLUE chariot on a6 can take it.
        state = GameState(
            custom_setup={"e1": "bK", "e6": "rR", "a6": "bR", "d10": "rK"},
            side_to_move=Side.BLUE,
        )
        engine = Engine(depth=1)

        assert engine.select_move(state) == move("a6e6")
        assert engine.last_tier == "block"

    def test_minimax_takes_free_piece(self):
        state = GameState(
            custom_setup={"e1": "bK", "a5": "bR", "i5": "rH", "d10": "rK"},
            side_to_move=Side.BLUE,
        )

        for depth in (1, 2):
            engine = Engine(depth=depth)
            assert engine.select_move(state) == move("a5i5")
            assert engine.last_tier == "minimax"
            assert engine.nodes_searched > 0

    def test_ties_keep_first_move(self):
        state = GameState(custom_setup={"e1": "bK", "d10": "rK"}, side_to_move=Side.BLUE)
        engine = Engine(depth=1)

        assert engine.select_move(state) == list_moves(state)[0]
        assert engine.last_tier == "minimax"

    def test_random_fallback_is_reproducible(self):
        state = GameState(custom_setup={"e2": "bK", "d10": "rK"}, side_to_move=Side.BLUE)
        chosen = []
        for _ in range(2):
            engine = Engine(depth=1, rng=random.Random(42))
            engine.evaluator.evaluate = lambda s: float("-inf")
            chosen.append(engine.select_move(state))
            assert engine.last_tier == "random"

        assert chosen[0] == chosen[1]
        assert chosen[0] in list_moves(state)

    def test_injected_rng_overrides_engine_rng(self):
        state = GameState(custom_setup={"e2": "bK", "d10": "rK"}, side_to_move=Side.BLUE)
        engine = Engine(depth=1, rng=random.Random(1))
        engine.evaluator.evaluate = lambda s: float("-inf")

        first = engine.select_move(state, rng=random.Random(3))
        second = engine.select_move(state, rng=random.Random(3))

        assert first == second


class TestSearch:
    """Test search behavior."""

    def test_search_does_not_mutate_state(self):
        state = GameState()
        state.apply_move(Position(6, 0), Position(5, 0))
        fen = state.to_fen()

        result = Engine(depth=1).select_move(state)

        assert result is not None
        assert state.to_fen() == fen
        assert result.to_pos in state.legal_moves(result.from_pos)

    def test_depth_zero_uses_static_evaluation(self):
        state = GameState(
            custom_setup={"e1": "bK", "a5": "bR", "i5": "rH", "d10": "rK"},
            side_to_move=Side.BLUE,
        )

        assert Engine().select_move(state, depth=0) == move("a5i5")

    def test_terminal_state_has_no_move(self):
        state = GameState(custom_setup={"e1": "bK", "a10": "rR"}, side_to_move=Side.BLUE)
        engine = Engine(depth=1)

        assert engine.select_move(state) is None
        assert engine.last_tier is None

    def test_no_legal_moves_returns_none(self):
        # Every square next to the BLUE king is covered by a RED chariot.
        state = GameState(
            custom_setup={"d1": "bK", "e6": "rR", "i2": "rR", "f10": "rK"},
            side_to_move=Side.BLUE,
        )

        assert list_moves(state) == []
        assert Engine(depth=1).select_move(state) is None

    def test_pruning_keeps_minimax_result(self):
        """Alpha-beta must agree with a full-width search and visit fewer nodes."""

        class FullWidthEngine(Engine):
            def _cutoff(self, alpha, beta):
                return False

        state = GameState(
            custom_setup={"e2": "bK", "b1": "bH", "e9": "rK", "h10": "rH"},
            side_to_move=Side.BLUE,
        )
        pruned = Engine(depth=3)
        full = FullWidthEngine(depth=3)

        pruned_value = pruned._minimax(state.clone(), 3, float("-inf"), float("inf"), True)
        full_value = full._minimax(state.clone(), 3, float("-inf"), float("inf"), True)

        assert pruned_value == full_value
        assert pruned.nodes_searched < full.nodes_searched

        pruned_move = pruned.select_move(state.clone())
        full_move = full.select_move(state.clone())

        assert pruned_move == full_move
        assert pruned.last_tier == full.last_tier

    def test_plays_for_red_too(self):
        state = GameState(custom_setup={"e6": "rR", "e1": "bK", "d10": "rK"})
        engine = Engine(depth=1, side=Side.RED)

        assert engine.select_move(state) == move("e6e1")
        assert engine.last_tier == "win"
