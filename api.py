"""FastAPI backend for Janggi game."""

import asyncio
import logging
import uuid
from concurrent.futures import ThreadPoolExecutor
from contextlib import asynccontextmanager
from dataclasses import replace
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel
from typing import Optional, List, Dict
from time import time

from jangi.board import Board, Move, Piece, Position, Side, PIECE_CODES, SIDE_CODES
from jangi.config import Settings
from jangi.engine import list_moves
from jangi.session import GameMode, GameSession

logger = logging.getLogger(__name__)


# Thread pool for CPU-intensive AI operations
executor = ThreadPoolExecutor(max_workers=4)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    yield
    # Cleanup: shutdown thread pool on app shutdown
    executor.shutdown(wait=True)


app = FastAPI(title="Jangi", lifespan=lifespan)

settings = Settings.from_env()


class GameEntry:
    """Session plus the bookkeeping needed to serve it concurrently."""

    def __init__(self, session: GameSession, ai_delay: float):
        self.session = session
        self.ai_delay = ai_delay
        self.lock = asyncio.Lock()
        self.last_access = time()
        self.is_processing = False  # AI is thinking


games: Dict[str, GameEntry] = {}
games_lock = asyncio.Lock()


async def get_game(game_id: str) -> GameEntry:
    """Look up a game, refreshing its last access time."""
    async with games_lock:
        if game_id not in games:
            raise HTTPException(status_code=404, detail="Game not found")
        entry = games[game_id]
        entry.last_access = time()
        return entry


async def cleanup_old_games():
    """Drop games that haven't been accessed for ``session_ttl`` seconds."""
    current_time = time()

    async with games_lock:
        to_remove = [
            game_id
            for game_id, entry in games.items()
            if current_time - entry.last_access > settings.session_ttl
        ]
        for game_id in to_remove:
            del games[game_id]
    if to_remove:
        logger.info("Dropped %d idle games", len(to_remove))


class NewGameRequest(BaseModel):
    """Request model for creating a new game."""

    game_id: Optional[str] = None  # generated if omitted
    mode: GameMode = GameMode.ALONE
    depth: Optional[int] = None
    seed: Optional[int] = None
    ai_delay: Optional[float] = None
    custom_setup: Optional[Dict[str, str]] = None  # e.g., {"e2": "bK", "e9": "rK"}
    side_to_move: str = "RED"  # "RED" or "BLUE"


class MoveRequest(BaseModel):
    """Request model for making a move."""

    game_id: str
    from_square: str  # e.g., "a7"
    to_square: str  # e.g., "a6"


class BoardResponse(BaseModel):
    """Response model for board state."""

    board: List[List[Optional[str]]]  # row 0 first
    board_korean: List[List[Optional[Dict[str, str]]]]
    side_to_move: str
    game_over: bool
    winner: Optional[str]
    awaiting_ai: bool
    legal_moves: List[Dict[str, str]]
    fen: str


def parse_square(square: str) -> Position:
    """Parse square notation or answer 400."""
    try:
        return Position.from_square(square)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"Invalid square notation: {e}")


def piece_to_string(piece: Optional[Piece]) -> Optional[str]:
    """Convert piece to string representation, e.g. "rK"."""
    if piece is None:
        return None
    return f"{SIDE_CODES[piece.side]}{PIECE_CODES[piece.piece_type]}"


def piece_to_korean_dict(piece: Optional[Piece]) -> Optional[Dict[str, str]]:
    """Convert piece to Korean name and color info."""
    if piece is None:
        return None

    side_name = "한" if piece.side == Side.RED else "초"
    return {
        "name": piece.korean_name,
        "side": side_name,
        "color": piece.side.name.lower(),
        "full_name": f"{side_name}{piece.korean_name}",
    }


def move_to_dict(move: Move) -> Dict[str, str]:
    return {"from": move.from_pos.square, "to": move.to_pos.square}


def board_response(session: GameSession) -> BoardResponse:
    state = session.state
    board_array = []
    board_korean = []
    for row in range(Board.ROWS):
        pieces = [state.piece_at(Position(row, col)) for col in range(Board.COLS)]
        board_array.append([piece_to_string(piece) for piece in pieces])
        board_korean.append([piece_to_korean_dict(piece) for piece in pieces])

    legal_moves = [] if state.is_terminal() else [move_to_dict(m) for m in list_moves(state)]

    return BoardResponse(
        board=board_array,
        board_korean=board_korean,
        side_to_move=state.side_to_move.name,
        game_over=state.is_terminal(),
        winner=state.winner.name if state.winner else None,
        awaiting_ai=session.awaiting_ai(),
        legal_moves=legal_moves,
        fen=state.to_fen(),
    )


@app.post("/api/new-game")
async def new_game(request: NewGameRequest):
    """Create a new game."""
    game_settings = settings
    if request.depth is not None:
        if request.depth < 1:
            raise HTTPException(status_code=400, detail="depth must be at least 1")
        game_settings = replace(game_settings, depth=request.depth)
    if request.seed is not None:
        game_settings = replace(game_settings, seed=request.seed)
    try:
        side_to_move = Side[request.side_to_move.upper()]
    except KeyError:
        raise HTTPException(status_code=400, detail="side_to_move must be RED or BLUE")

    try:
        session = GameSession(
            mode=request.mode,
            settings=game_settings,
            custom_setup=request.custom_setup,
            side_to_move=side_to_move,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=f"Invalid setup: {e}")

    game_id = request.game_id or uuid.uuid4().hex
    ai_delay = settings.ai_delay if request.ai_delay is None else request.ai_delay

    async with games_lock:
        games[game_id] = GameEntry(session, ai_delay)
    logger.info("New %s game %s (depth %d)", request.mode.value, game_id, game_settings.depth)

    # 오래된 게임 정리 (비동기로 백그라운드에서 실행)
    asyncio.create_task(cleanup_old_games())

    return {"status": "ok", "game_id": game_id}


@app.get("/api/board/{game_id}")
async def get_board(game_id: str):
    """Get current board state."""
    entry = await get_game(game_id)
    try:
        async with entry.lock:
            return board_response(entry.session)
    except Exception:
        logger.exception("Error in get_board for %s", game_id)
        raise HTTPException(status_code=500, detail="Internal server error")


@app.get("/api/legal-moves/{game_id}/{square}")
async def get_legal_moves(game_id: str, square: str):
    """Destinations reachable from one square."""
    pos = parse_square(square)
    entry = await get_game(game_id)
    async with entry.lock:
        destinations = entry.session.legal_moves(pos)
    return {"from": square, "to": [to_pos.square for to_pos in destinations]}


@app.post("/api/move")
async def make_move(request: MoveRequest):
    """Make a move."""
    from_pos = parse_square(request.from_square)
    to_pos = parse_square(request.to_square)
    entry = await get_game(request.game_id)

    async with entry.lock:
        if not entry.session.play(from_pos, to_pos):
            raise HTTPException(status_code=400, detail="Illegal move")
        state = entry.session.state
        result = {
            "status": "ok",
            "move": Move(from_pos, to_pos).to_uci(),
            "awaiting_ai": entry.session.awaiting_ai(),
        }
        if state.is_terminal():
            result["game_over"] = True
            result["winner"] = state.winner.name
    return result


def _run_ai_search(session: GameSession) -> Optional[Move]:
    """CPU 집약적인 AI 검색을 별도 스레드에서 실행."""
    return session.search()


@app.post("/api/ai-move/{game_id}")
async def ai_move(game_id: str):
    """Get AI move."""
    entry = await get_game(game_id)

    async with entry.lock:
        if entry.is_processing:
            raise HTTPException(
                status_code=409, detail="AI is already processing a move. Please wait."
            )
        if not entry.session.awaiting_ai():
            raise HTTPException(status_code=400, detail="Not the AI's turn")
        entry.is_processing = True

    try:
        # Short pause so the reply does not feel instant
        if entry.ai_delay > 0:
            await asyncio.sleep(entry.ai_delay)

        loop = asyncio.get_running_loop()
        best_move = await loop.run_in_executor(executor, _run_ai_search, entry.session)

        if best_move is None:
            raise HTTPException(status_code=400, detail="No legal moves available")

        async with entry.lock:
            session = entry.session
            try:
                session.apply_ai_move(best_move)
            except RuntimeError:
                logger.exception("Game %s: AI generated illegal move", game_id)
                raise HTTPException(status_code=500, detail="AI generated illegal move")

            result = {
                "status": "ok",
                "move": move_to_dict(best_move),
                "tier": session.engine.last_tier,
                "nodes_searched": session.engine.nodes_searched,
            }
            if session.state.is_terminal():
                result["game_over"] = True
                result["winner"] = session.state.winner.name
        return result
    finally:
        async with entry.lock:
            entry.is_processing = False


@app.post("/api/reset/{game_id}")
async def reset_game(game_id: str):
    """Start the game over."""
    entry = await get_game(game_id)
    async with entry.lock:
        if entry.is_processing:
            raise HTTPException(status_code=409, detail="AI is thinking. Please wait.")
        entry.session.reset()
    return {"status": "ok"}
