"""
scoring.py

Points for a guess: a round starts at base_points, every revealed hint and the
initials reveal lower what a correct guess earns, and every streak_milestone-th
consecutive correct guess adds a bonus equal to the streak.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Any, Optional

from main_config import DEFAULT_CONFIG

logger = logging.getLogger("scoring")

@dataclass
class GuessOutcome:
    correct: bool
    points_earned: int
    streak_bonus: int
    new_streak: int

def _rules(scoring_config: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    rules = dict(DEFAULT_CONFIG["scoring"])
    if scoring_config:
        rules.update(scoring_config)
    return rules

def potential_points(hints_used: int, initials_used: bool,
                     scoring_config: Optional[Dict[str, Any]] = None) -> int:
    """Points a correct guess would earn right now, never below zero."""
    rules = _rules(scoring_config)
    points = rules["base_points"] - hints_used * rules["hint_penalty"]
    if initials_used:
        points -= rules["initials_penalty"]
    return max(0, points)

def streak_bonus_for(streak: int, scoring_config: Optional[Dict[str, Any]] = None) -> int:
    milestone = _rules(scoring_config)["streak_milestone"]
    if milestone and streak > 0 and streak % milestone == 0:
        return streak
    return 0

def score_guess(correct: bool, streak: int, hints_used: int, initials_used: bool,
                scoring_config: Optional[Dict[str, Any]] = None) -> GuessOutcome:
    """
    Score a resolved guess.

    Args:
        correct: Whether the guess matched the person.
        streak: Consecutive correct guesses before this one.
        hints_used: Hints revealed this round.
        initials_used: Whether the initials were revealed this round.
        scoring_config: Optional scoring section overriding the defaults.

    Returns:
        GuessOutcome with the points earned (bonus included) and the new streak.
    """
    if not correct:
        logger.debug(f"Incorrect guess, streak {streak} reset")
        return GuessOutcome(correct=False, points_earned=0, streak_bonus=0, new_streak=0)

    new_streak = streak + 1
    bonus = streak_bonus_for(new_streak, scoring_config)
    earned = potential_points(hints_used, initials_used, scoring_config) + bonus
    logger.debug(f"Correct guess: earned={earned}, bonus={bonus}, streak={new_streak}")
    return GuessOutcome(correct=True, points_earned=earned, streak_bonus=bonus, new_streak=new_streak)
