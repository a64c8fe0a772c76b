"""
game_service.py

Facade over the session store, people catalog, name matcher and scoring rules.
The HTTP layer calls one method per endpoint and gets back a JSON-ready dict.

The person being guessed is held by the server for the whole round and is only
revealed once the round is resolved by a guess.
"""

import logging
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from agents.wikipedia_agent import configure_agent, fetch_page_sections, fetch_page_summary
from common_types import HintSource
from exceptions import RateLimitExceeded, RoundStateError
from hint_generator import NO_EXTRACT_HINT, derive_additional_hint, filter_section_titles, generate_hint
from initials_generator import generate_initials
from main_config import get_catalog_config, get_scoring_config, get_wikipedia_config, load_config
from name_matcher import is_correct_guess
from people_catalog import FamousPerson, PeopleCatalog
from scoring import GuessOutcome, potential_points, score_guess
from session_store import GameSession, SessionStore

logger = logging.getLogger("game_service")

class GameService:
    """
    Runs WikiGuess rounds for many concurrent sessions.

    Attributes:
        store (SessionStore): In-memory game sessions.
        catalog (PeopleCatalog): People that can be served.
        scoring_config (dict): Scoring rules (see main_config.DEFAULT_CONFIG).
        wikipedia_enabled (bool): Whether missing sections/hints may be fetched from Wikipedia.
    """

    def __init__(self, store: Optional[SessionStore] = None, catalog: Optional[PeopleCatalog] = None,
                 config: Optional[Dict[str, Any]] = None):
        config = config if config is not None else load_config()
        self.scoring_config = get_scoring_config(config)
        wikipedia_config = get_wikipedia_config(config)
        self.wikipedia_enabled = bool(wikipedia_config.get("enabled", True))
        configure_agent(wikipedia_config)

        self.store = store or SessionStore(max_hints=self.scoring_config["max_hints"])
        if catalog is None:
            catalog = PeopleCatalog.from_file(get_catalog_config(config)["path"])
        self.catalog = catalog
        logger.info(f"Game service ready with {len(self.catalog)} people")

    # Helpers

    def _potential_points(self, session: GameSession) -> int:
        return potential_points(session.hints_used, session.initials_used, self.scoring_config)

    def _hints_remaining(self, session: GameSession) -> int:
        return max(0, self.scoring_config["max_hints"] - session.hints_used)

    def _person_for(self, name: str) -> FamousPerson:
        person = self.catalog.get(name)
        if person is None:
            logger.warning(f"'{name}' is no longer in the catalog")
            person = FamousPerson(name=name)
        return person

    def _fetch_summary(self, person: FamousPerson) -> Optional[Dict[str, Any]]:
        if not self.wikipedia_enabled:
            return None
        try:
            return fetch_page_summary(person.page_title)
        except RateLimitExceeded as e:
            logger.warning(f"Skipping Wikipedia summary for '{person.name}': {e.message}")
            return None

    def _sections_for(self, person: FamousPerson) -> List[str]:
        if person.sections:
            return list(person.sections)
        if not self.wikipedia_enabled:
            return []
        try:
            raw_sections = fetch_page_sections(person.page_title)
        except RateLimitExceeded as e:
            logger.warning(f"Skipping Wikipedia sections for '{person.name}': {e.message}")
            return []
        return filter_section_titles(raw_sections or [])

    def _clue_for(self, person: FamousPerson) -> str:
        if person.hint:
            return person.hint
        summary = self._fetch_summary(person)
        return generate_hint(summary.get("extract") if summary else None)

    def _hint_text(self, person: FamousPerson, number: int) -> Tuple[str, str]:
        hint = person.get_ai_hint(number)
        if hint:
            return hint, HintSource.CATALOG.value

        summary = self._fetch_summary(person)
        extract = summary.get("extract") if summary else None
        if extract:
            return derive_additional_hint(extract), HintSource.WIKIPEDIA.value
        return NO_EXTRACT_HINT, HintSource.FALLBACK.value

    # Operations

    def create_session(self) -> Dict[str, Any]:
        return self.store.create_session().to_dict()

    def get_session(self, session_id: int) -> Dict[str, Any]:
        return self.store.get_session(session_id).to_dict()

    def serve_person(self, session_id: int) -> Dict[str, Any]:
        """
        Person for the session's current round.

        Repeated calls during an unresolved round return the same person, so a
        client retrying the request does not burn through the catalog.
        """
        session = self.store.get_session(session_id)
        if session.has_active_round:
            person = self._person_for(session.current_person)
        else:
            person = self.catalog.random_person(exclude=session.used_people)
            try:
                session = self.store.start_round(session_id, person.name)
            except RoundStateError:
                # A concurrent request started the round first
                session = self.store.get_session(session_id)
                person = self._person_for(session.current_person)

        return {
            "sections": self._sections_for(person),
            "hint": self._clue_for(person),
            "round": session.round,
            "potentialPoints": self._potential_points(session),
            "hintsAvailable": self._hints_remaining(session),
        }

    def submit_guess(self, session_id: int, guess: str) -> Dict[str, Any]:
        """Check a guess against the session's current person and close the round."""
        def score(live: GameSession) -> GuessOutcome:
            correct = is_correct_guess(guess, live.current_person)
            return score_guess(correct, live.streak, live.hints_used,
                               live.initials_used, self.scoring_config)

        session, outcome = self.store.resolve_round(session_id, score)
        person = self._person_for(session.current_person)
        logger.info(f"Session {session_id} guessed '{guess}' for '{person.name}': correct={outcome.correct}")

        return {
            "correct": outcome.correct,
            "pointsEarned": outcome.points_earned,
            "streakBonus": outcome.streak_bonus,
            "personName": person.name,
            "url": person.url,
            "session": session.to_dict(),
        }

    def reveal_hint(self, session_id: int) -> Dict[str, Any]:
        session = self.store.record_hint(session_id)
        person = self._person_for(session.current_person)
        hint, source = self._hint_text(person, session.hints_used)
        return {
            "hint": hint,
            "hintNumber": session.hints_used,
            "hintsRemaining": self._hints_remaining(session),
            "source": source,
            "potentialPoints": self._potential_points(session),
            "session": session.to_dict(),
        }

    def reveal_initials(self, session_id: int) -> Dict[str, Any]:
        session = self.store.get_session(session_id)
        if not session.has_active_round:
            raise RoundStateError("No person to reveal initials for")
        if not session.initials_used:
            session = self.store.record_initials(session_id)
        return {
            "initials": generate_initials(session.current_person),
            "potentialPoints": self._potential_points(session),
            "session": session.to_dict(),
        }

    def next_round(self, session_id: int) -> Dict[str, Any]:
        return self.store.next_round(session_id).to_dict()

    def health(self) -> Dict[str, Any]:
        return {
            "status": "healthy" if len(self.catalog) else "degraded",
            "timestamp": datetime.utcnow().isoformat(),
            "components": {
                "sessions": self.store.count(),
                "catalog_size": len(self.catalog),
                "wikipedia_enabled": self.wikipedia_enabled,
            }
        }
