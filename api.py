import os
from typing import Any, Callable, Dict, Optional

from fastapi import Depends, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field, validator

from exceptions import CatalogEmptyError, RoundStateError, SessionNotFoundError
from game_service import GameService
from logger_config import setup_logging
from main_config import get_server_config, load_config

# Setup logging
loggers = setup_logging(diagnostic=os.environ.get("WIKIGUESS_DIAGNOSTIC", "false").lower() == "true")
logger = loggers["api"]

class SessionRequest(BaseModel):
    session_id: int = Field(..., alias="sessionId")

class GuessRequest(BaseModel):
    session_id: int = Field(..., alias="sessionId")
    guess: str = Field(..., min_length=1)

    @validator('guess')
    def guess_not_blank(cls, v):
        if not v.strip():
            raise ValueError("guess must not be blank")
        return v.strip()

app = FastAPI(
    title="WikiGuess API",
    description="Guess the famous person from their Wikipedia section headings, with progressive hints",
    version="1.0.0"
)

# Global instance, created on startup or on first use
game_service: Optional[GameService] = None

def initialize_services(config: Optional[Dict[str, Any]] = None) -> GameService:
    """Create the game service from the configuration file."""
    global game_service
    game_service = GameService(config=config if config is not None else load_config())
    logger.info("Initialized GameService")
    return game_service

def get_game_service() -> GameService:
    if game_service is None:
        return initialize_services()
    return game_service

@app.on_event("startup")
async def startup_event():
    """Initialize API services on startup."""
    if game_service is None:
        initialize_services()

@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.warning(f"Invalid request data for {request.url.path}: {exc.errors()}")
    return JSONResponse(status_code=400, content={"detail": "Invalid request data"})

def run_game_operation(operation: Callable[..., Dict[str, Any]], *args) -> Dict[str, Any]:
    """Call a GameService operation, mapping domain errors to HTTP errors."""
    try:
        return operation(*args)
    except SessionNotFoundError as e:
        raise HTTPException(status_code=404, detail=e.message)
    except RoundStateError as e:
        raise HTTPException(status_code=409, detail=e.message)
    except CatalogEmptyError as e:
        logger.error(f"Cannot serve a person: {e.message}")
        raise HTTPException(status_code=503, detail=e.message)

# Game endpoints
@app.post("/api/game/session", response_model=Dict[str, Any])
def create_session(service: GameService = Depends(get_game_service)):
    """Start a new game session."""
    return service.create_session()

@app.get("/api/game/session/{session_id}", response_model=Dict[str, Any])
def get_session(session_id: int, service: GameService = Depends(get_game_service)):
    return run_game_operation(service.get_session, session_id)

@app.get("/api/game/person", response_model=Dict[str, Any])
def get_person(sessionId: Optional[str] = None, service: GameService = Depends(get_game_service)):
    """
    Serve the person for the current round: section headings and the clue, never the name.
    A round that has not been guessed yet keeps serving the same person.
    """
    try:
        session_id = int(sessionId) if sessionId else 0
    except ValueError:
        session_id = 0
    if not session_id:
        raise HTTPException(status_code=400, detail="Session ID is required")
    return run_game_operation(service.serve_person, session_id)

@app.post("/api/game/guess", response_model=Dict[str, Any])
def submit_guess(request: GuessRequest, service: GameService = Depends(get_game_service)):
    """Check a guess against the server-held person and score it."""
    return run_game_operation(service.submit_guess, request.session_id, request.guess)

@app.post("/api/game/hint", response_model=Dict[str, Any])
def get_hint(request: SessionRequest, service: GameService = Depends(get_game_service)):
    """Reveal the next progressive hint; each one lowers the points for this round."""
    return run_game_operation(service.reveal_hint, request.session_id)

@app.post("/api/game/initials", response_model=Dict[str, Any])
def get_initials(request: SessionRequest, service: GameService = Depends(get_game_service)):
    return run_game_operation(service.reveal_initials, request.session_id)

@app.post("/api/game/session/{session_id}/next-round", response_model=Dict[str, Any])
def next_round(session_id: int, service: GameService = Depends(get_game_service)):
    return run_game_operation(service.next_round, session_id)

@app.get("/health")
def health_check(service: GameService = Depends(get_game_service)):
    """Service status with session and catalog counts."""
    return service.health()

if __name__ == "__main__":
    import uvicorn
    server_config = get_server_config(load_config())
    uvicorn.run(app, host=server_config["host"], port=int(server_config["port"]), log_level="info")
