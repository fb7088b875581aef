"""Unit tests for GameSession."""

import pytest
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from jangi import Engine, GameMode, GameSession, Move, Position, Settings, Side


@pytest.fixture
def settings():
    return Settings(depth=1, ai_delay=0, seed=7)


class TestAloneMode:
    """Test play against the engine."""

    def test_human_moves_first(self, settings):
        session = GameSession(GameMode.ALONE, settings)

        assert session.side_to_move == Side.RED
        assert not session.awaiting_ai()
        assert session.legal_moves(Position(6, 0)) == [Position(5, 0)]

    def test_engine_turn_after_human_move(self, settings):
        session = GameSession(GameMode.ALONE, settings)

        assert session.play(Position(6, 0), Position(5, 0))
        assert session.awaiting_ai()
        # The human cannot move for the engine
        assert session.legal_moves(Position(3, 0)) == []
        assert not session.play(Position(3, 0), Position(4, 0))

    def test_play_ai_move(self, settings):
        session = GameSession(GameMode.ALONE, settings)
        session.play(Position(6, 0), Position(5, 0))

        move = session.play_ai_move()

        assert move is not None
        assert session.state.piece_at(move.to_pos).side == Side.BLUE
        assert session.side_to_move == Side.RED
        assert not session.awaiting_ai()

    def test_apply_searched_move(self, settings):
        session = GameSession(GameMode.ALONE, settings)
        session.play(Position(6, 0), Position(5, 0))

        move = session.search()

        assert session.apply_ai_move(move) == move
        assert session.side_to_move == Side.RED

    def test_apply_illegal_ai_move(self, settings):
        session = GameSession(GameMode.ALONE, settings)
        session.play(Position(6, 0), Position(5, 0))
        fen = session.state.to_fen()

        with pytest.raises(RuntimeError):
            session.apply_ai_move(Move(Position(3, 0), Position(5, 0)))
        assert session.state.to_fen() == fen
        assert session.apply_ai_move(None) is None

    def test_play_ai_move_out_of_turn(self, settings):
        session = GameSession(GameMode.ALONE, settings)

        assert session.play_ai_move() is None
        assert session.side_to_move == Side.RED

    def test_engine_side_moves_first(self):
        session = GameSession(GameMode.ALONE, Settings(depth=1, ai_side=Side.RED))

        assert session.awaiting_ai()
        assert session.play_ai_move() is not None
        assert session.side_to_move == Side.BLUE

    def test_illegal_human_move(self, settings):
        session = GameSession(GameMode.ALONE, settings)

        assert not session.play(Position(6, 0), Position(4, 0))
        assert session.side_to_move == Side.RED

    def test_custom_engine(self, settings):
        engine = Engine(depth=1)
        session = GameSession(GameMode.ALONE, settings, engine=engine)

        assert session.engine is engine


class TestTogetherMode:
    """Test hot-seat play."""

    def test_both_sides_are_human(self, settings):
        session = GameSession(GameMode.TOGETHER, settings)

        assert session.play(Position(6, 0), Position(5, 0))
        assert not session.awaiting_ai()
        assert session.play(Position(3, 0), Position(4, 0))
        assert session.side_to_move == Side.RED
        assert session.play_ai_move() is None


class TestGameOver:
    """Test end of game and reset."""

    def test_no_moves_once_game_is_over(self, settings):
        session = GameSession(
            GameMode.TOGETHER, settings,
            custom_setup={"e6": "rR", "e1": "bK", "d10": "rK"},
        )

        assert session.play(Position(5, 4), Position(0, 4))
        assert session.is_terminal()
        assert session.winner == Side.RED
        assert not session.play(Position(8, 3), Position(8, 4))

    def test_reset(self, settings):
        session = GameSession(GameMode.ALONE, settings)
        fen = session.state.to_fen()
        session.play(Position(6, 0), Position(5, 0))
        session.play_ai_move()

        session.reset()

        assert session.state.to_fen() == fen
        assert session.winner is None

    def test_reset_keeps_custom_setup(self, settings):
        setup = {"e6": "rR", "e1": "bK", "d10": "rK"}
        session = GameSession(GameMode.TOGETHER, settings, custom_setup=setup)
        fen = session.state.to_fen()
        session.play(Position(5, 4), Position(0, 4))

        session.reset()

        assert session.state.to_fen() == fen
        assert not session.is_terminal()
