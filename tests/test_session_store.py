"""
Tests for the in-memory SessionStore.
"""

import threading

import pytest

from exceptions import RoundStateError, SessionNotFoundError
from scoring import GuessOutcome
from session_store import SessionStore

@pytest.fixture
def store():
    return SessionStore(max_hints=3)

def _fixed(correct, points, streak):
    return lambda live: GuessOutcome(correct=correct, points_earned=points, streak_bonus=0, new_streak=streak)

def test_create_session_assigns_sequential_ids(store):
    first = store.create_session()
    second = store.create_session()
    assert (first.id, second.id) == (1, 2)
    assert first.score == 0 and first.round == 1 and first.used_people == []

def test_get_unknown_session_raises(store):
    with pytest.raises(SessionNotFoundError):
        store.get_session(99)

def test_returned_sessions_are_copies(store):
    session = store.create_session()
    session.score = 1000
    session.used_people.append("Someone")
    stored = store.get_session(session.id)
    assert stored.score == 0
    assert stored.used_people == []

def test_update_session(store):
    session = store.create_session()
    updated = store.update_session(session.id, score=12, streak=2)
    assert (updated.score, updated.streak) == (12, 2)

def test_update_session_rejects_unknown_field(store):
    session = store.create_session()
    with pytest.raises(AttributeError):
        store.update_session(session.id, nickname="x")

def test_start_round_tracks_used_people(store):
    session = store.create_session()
    started = store.start_round(session.id, "Joan of Arc")
    assert started.current_person == "Joan of Arc"
    assert started.used_people == ["Joan of Arc"]
    assert started.has_active_round

def test_cannot_start_second_round_while_active(store):
    session = store.create_session()
    store.start_round(session.id, "Joan of Arc")
    with pytest.raises(RoundStateError):
        store.start_round(session.id, "Marie Curie")

def test_hints_limited(store):
    session = store.create_session()
    store.start_round(session.id, "Joan of Arc")
    for expected in (1, 2, 3):
        assert store.record_hint(session.id).hints_used == expected
    with pytest.raises(RoundStateError):
        store.record_hint(session.id)

def test_hint_requires_active_round(store):
    session = store.create_session()
    with pytest.raises(RoundStateError):
        store.record_hint(session.id)

def test_resolve_round_updates_counters(store):
    session = store.create_session()
    store.start_round(session.id, "Joan of Arc")
    resolved, _ = store.resolve_round(session.id, _fixed(True, 7, 1))
    assert resolved.score == 7
    assert resolved.streak == 1 and resolved.best_streak == 1
    assert resolved.total_guesses == 1 and resolved.correct_guesses == 1
    assert resolved.round_resolved and not resolved.has_active_round

    with pytest.raises(RoundStateError):
        store.resolve_round(session.id, _fixed(True, 7, 2))

def test_best_streak_survives_miss(store):
    session = store.create_session()
    store.update_session(session.id, streak=3, best_streak=3)
    store.start_round(session.id, "Joan of Arc")
    resolved, _ = store.resolve_round(session.id, _fixed(False, 0, 0))
    assert resolved.streak == 0
    assert resolved.best_streak == 3
    assert resolved.correct_guesses == 0

def test_next_round_clears_round_state(store):
    session = store.create_session()
    store.start_round(session.id, "Joan of Arc")
    store.record_hint(session.id)
    store.record_initials(session.id)
    store.resolve_round(session.id, _fixed(False, 0, 0))
    advanced = store.next_round(session.id)
    assert advanced.round == 2
    assert advanced.current_person is None
    assert advanced.hints_used == 0 and not advanced.initials_used
    assert advanced.used_people == ["Joan of Arc"]

def test_next_round_requires_guess_for_served_person(store):
    session = store.create_session()
    store.start_round(session.id, "Joan of Arc")
    with pytest.raises(RoundStateError):
        store.next_round(session.id)
    assert store.get_session(session.id).round == 1

def test_next_round_without_served_person(store):
    session = store.create_session()
    assert store.next_round(session.id).round == 2

def test_resolve_round_scores_live_state(store):
    session = store.create_session()
    store.start_round(session.id, "Joan of Arc")
    store.update_session(session.id, streak=4)
    store.record_hint(session.id)
    store.record_initials(session.id)
    seen = []

    def score(live):
        seen.append((live.current_person, live.streak, live.hints_used, live.initials_used))
        return GuessOutcome(correct=True, points_earned=4, streak_bonus=0, new_streak=live.streak + 1)

    resolved, outcome = store.resolve_round(session.id, score)

    assert seen == [("Joan of Arc", 4, 1, True)]
    assert outcome.points_earned == 4
    assert resolved.streak == 5 and resolved.score == 4
    assert resolved.last_guess_correct is True
    assert resolved.to_dict()["lastGuessCorrect"] is True

def test_to_dict_shape(store):
    data = store.create_session().to_dict()
    assert set(data) == {"id", "score", "streak", "round", "totalGuesses", "correctGuesses",
                         "bestStreak", "usedPeople", "createdAt", "hintsUsed", "initialsUsed",
                         "roundResolved", "lastGuessCorrect"}

def test_concurrent_creates_get_unique_ids(store):
    ids = []
    lock = threading.Lock()

    def worker():
        for _ in range(50):
            session = store.create_session()
            with lock:
                ids.append(session.id)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(ids) == 400
    assert len(set(ids)) == 400
    assert store.count() == 400

def test_clear(store):
    store.create_session()
    store.clear()
    assert store.count() == 0
    assert store.create_session().id == 1
