from fastapi import APIRouter, Request, HTTPException
from pydantic import BaseModel
from slowapi import Limiter
from slowapi.util import get_remote_address

from slot_machine.config import settings
from slot_machine.core.exceptions import InvalidBet, SessionNotFound
from slot_machine.core.logger import get_logger
from slot_machine.core.payout import payout_engine
from slot_machine.core.reels import DEFAULT_WEIGHTS
from slot_machine.core.session import GameSession, SessionManager

limiter = Limiter(key_func=get_remote_address)

logger = get_logger("api")

router = APIRouter()

sessions = SessionManager(
    starting_credits=settings.game.starting_credits,
    rng_seed=settings.game.rng_seed,
    ttl_seconds=settings.game.session_ttl_seconds,
)

# ==================== Request Models ====================

class NewSessionRequest(BaseModel):
    name: str = "Player"

class SpinRequest(BaseModel):
    bet: int


# ==================== Helpers ====================

def get_session(session_id: str) -> GameSession:
    """Look up a session or answer 404."""
    try:
        return sessions.get(session_id)
    except SessionNotFound:
        raise HTTPException(status_code=404, detail="Session not found")

def get_rate_limit():
    """Get spin rate limit string from config."""
    return settings.rate_limit.spin_requests if settings.rate_limit.enabled else "1000/minute"

def get_session_rate_limit():
    """Get session creation rate limit string from config."""
    return settings.rate_limit.session_requests if settings.rate_limit.enabled else "1000/minute"


# ==================== Paytable ====================

@router.get("/paytable")
async def get_paytable():
    table = payout_engine.paytable()
    weights = {symbol.name: weight for symbol, weight in DEFAULT_WEIGHTS.items()}
    total = sum(weights.values())
    for entry in table["symbols"]:
        weight = weights.get(entry["symbol"], 0)
        entry["weight"] = weight
        entry["probability"] = round(weight / total, 4)
    return table


# ==================== Sessions ====================

@router.post("/sessions")
@limiter.limit(get_session_rate_limit)
async def create_session(request: Request, data: NewSessionRequest):
    name = data.name.strip() or "Player"
    session_id = sessions.create(name)
    session = sessions.get(session_id)
    return {"session_id": session_id, **session.account.to_dict()}

@router.get("/sessions/{session_id}")
async def session_status(session_id: str):
    session = get_session(session_id)
    return {
        "session_id": session_id,
        "account": session.account.to_dict(),
        "summary": session.summary(),
        "game_over": session.is_over,
    }

@router.post("/sessions/{session_id}/spin")
@limiter.limit(get_rate_limit)
async def spin(request: Request, session_id: str, data: SpinRequest):
    session = get_session(session_id)

    try:
        result = session.play_round(data.bet)
    except InvalidBet as e:
        raise HTTPException(status_code=400, detail=str(e))

    response = {**result.to_dict(), "game_over": session.is_over}

    # A broke player cannot bet again; report the final summary and free the session
    if session.is_over:
        response["summary"] = sessions.close(session_id)

    return response

@router.delete("/sessions/{session_id}")
async def end_session(session_id: str):
    get_session(session_id)
    return sessions.close(session_id)
