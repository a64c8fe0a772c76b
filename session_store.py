# session_store.py
"""
In-memory storage for game sessions.

Sessions live only as long as the process; a restart starts over from id 1.
Every public method takes the store lock and returns a copy of the session, so
callers never hold a reference into shared state.
"""

import copy
import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Tuple

from exceptions import SessionNotFoundError, RoundStateError
from scoring import GuessOutcome

logger = logging.getLogger("session_store")

@dataclass
class GameSession:
    id: int
    score: int = 0
    streak: int = 0
    round: int = 1
    total_guesses: int = 0
    correct_guesses: int = 0
    best_streak: int = 0
    used_people: List[str] = field(default_factory=list)
    created_at: datetime = field(default_factory=datetime.utcnow)
    # Current round
    current_person: Optional[str] = None
    hints_used: int = 0
    initials_used: bool = False
    round_resolved: bool = False
    last_guess_correct: Optional[bool] = None

    @property
    def has_active_round(self) -> bool:
        return self.current_person is not None and not self.round_resolved

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "score": self.score,
            "streak": self.streak,
            "round": self.round,
            "totalGuesses": self.total_guesses,
            "correctGuesses": self.correct_guesses,
            "bestStreak": self.best_streak,
            "usedPeople": list(self.used_people),
            "createdAt": self.created_at.isoformat(),
            "hintsUsed": self.hints_used,
            "initialsUsed": self.initials_used,
            "roundResolved": self.round_resolved,
            "lastGuessCorrect": self.last_guess_correct
        }


class SessionStore:
    """
    Thread-safe, non-persistent store of GameSession objects.

    Attributes:
        max_hints (int): Number of hints a round allows.
    """

    def __init__(self, max_hints: int = 3):
        self.max_hints = max_hints
        self._sessions: Dict[int, GameSession] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def _require(self, session_id: int) -> GameSession:
        session = self._sessions.get(session_id)
        if session is None:
            logger.warning(f"Session {session_id} not found")
            raise SessionNotFoundError(f"Session {session_id} not found")
        return session

    def _require_active_round(self, session_id: int) -> GameSession:
        session = self._require(session_id)
        if not session.has_active_round:
            raise RoundStateError(f"Session {session_id} has no round in progress")
        return session

    def create_session(self) -> GameSession:
        with self._lock:
            session = GameSession(id=self._next_id)
            self._sessions[session.id] = session
            self._next_id += 1
            logger.info(f"Created game session {session.id}")
            return copy.deepcopy(session)

    def get_session(self, session_id: int) -> GameSession:
        with self._lock:
            return copy.deepcopy(self._require(session_id))

    def update_session(self, session_id: int, **changes) -> GameSession:
        """Apply field changes to a session; unknown field names raise AttributeError."""
        with self._lock:
            session = self._require(session_id)
            for key, value in changes.items():
                if not hasattr(session, key):
                    raise AttributeError(f"GameSession has no field '{key}'")
                setattr(session, key, value)
            return copy.deepcopy(session)

    def start_round(self, session_id: int, person_name: str) -> GameSession:
        """Serve a new person for the current round and reset per-round state."""
        with self._lock:
            session = self._require(session_id)
            if session.has_active_round:
                raise RoundStateError(f"Session {session_id} already has a round in progress")
            session.current_person = person_name
            session.used_people.append(person_name)
            session.hints_used = 0
            session.initials_used = False
            session.round_resolved = False
            session.last_guess_correct = None
            logger.info(f"Session {session_id} round {session.round} started")
            return copy.deepcopy(session)

    def record_hint(self, session_id: int) -> GameSession:
        with self._lock:
            session = self._require_active_round(session_id)
            if session.hints_used >= self.max_hints:
                raise RoundStateError("All hints have been used for this round")
            session.hints_used += 1
            return copy.deepcopy(session)

    def record_initials(self, session_id: int) -> GameSession:
        with self._lock:
            session = self._require_active_round(session_id)
            session.initials_used = True
            return copy.deepcopy(session)

    def resolve_round(self, session_id: int,
                      score: Callable[[GameSession], GuessOutcome]) -> Tuple[GameSession, GuessOutcome]:
        """
        Close the current round with the result of the player's guess.

        score is called with the live session while the lock is held, so hints
        or initials revealed by a concurrent request are always charged. It
        must not call back into the store.

        Returns:
            The updated session copy and the outcome that was applied.
        """
        with self._lock:
            session = self._require_active_round(session_id)
            outcome = score(copy.deepcopy(session))
            session.score += outcome.points_earned
            session.streak = outcome.new_streak
            session.best_streak = max(session.best_streak, outcome.new_streak)
            session.total_guesses += 1
            if outcome.correct:
                session.correct_guesses += 1
            session.round_resolved = True
            session.last_guess_correct = outcome.correct
            logger.info(f"Session {session_id} round {session.round} resolved: "
                        f"correct={outcome.correct}, points={outcome.points_earned}")
            return copy.deepcopy(session), outcome

    def next_round(self, session_id: int) -> GameSession:
        """Advance to the next round; a served person must be guessed first."""
        with self._lock:
            session = self._require(session_id)
            if session.has_active_round:
                raise RoundStateError(f"Session {session_id} must guess the current person before the next round")
            session.round += 1
            session.current_person = None
            session.hints_used = 0
            session.initials_used = False
            session.round_resolved = False
            session.last_guess_correct = None
            return copy.deepcopy(session)

    def count(self) -> int:
        with self._lock:
            return len(self._sessions)

    def clear(self):
        with self._lock:
            self._sessions.clear()
            self._next_id = 1
