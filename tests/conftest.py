"""
Pytest fixtures shared by the WikiGuess tests.
"""

import os
import sys

import pytest

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from game_service import GameService
from people_catalog import FamousPerson, PeopleCatalog
from session_store import SessionStore

OFFLINE_CONFIG = {"wikipedia": {"enabled": False, "rate_limit_delay": 0}}

@pytest.fixture
def beethoven():
    return FamousPerson(
        name="Ludwig van Beethoven",
        sections=["Life and career", "Music", "Personal life", "Legacy"],
        hint="German • Classical • Composer",
        ai_hints=["Born in Bonn.", "Went deaf.", "Wrote the Ode to Joy symphony."],
        url="https://en.wikipedia.org/wiki/Ludwig_van_Beethoven",
    )

@pytest.fixture
def single_person_catalog(beethoven):
    return PeopleCatalog([beethoven])

@pytest.fixture
def game_service(single_person_catalog):
    """GameService over a one-person catalog with Wikipedia lookups disabled."""
    return GameService(store=SessionStore(max_hints=3), catalog=single_person_catalog, config=OFFLINE_CONFIG)

@pytest.fixture
def client(game_service):
    from fastapi.testclient import TestClient
    import api

    api.app.dependency_overrides[api.get_game_service] = lambda: game_service
    yield TestClient(api.app)
    api.app.dependency_overrides.clear()
