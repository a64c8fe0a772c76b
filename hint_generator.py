"""
hint_generator.py

Keyword heuristics that turn a Wikipedia summary extract into short clues,
plus the filter applied to a page's section listing before the headings are
shown to a player.
"""

import logging
import re
from typing import Any, Dict, List, Optional

logger = logging.getLogger("hint_generator")

HINT_SEPARATOR = " • "
MAX_HINT_PARTS = 3
MAX_SECTIONS = 8

NO_EXTRACT_HINT = "This person is notable enough to have extensive biographical information."
NO_MATCH_HINT = "This person has made lasting contributions that earned them a detailed Wikipedia page."

EXCLUDED_SECTION_WORDS = ('reference', 'external', 'see also')

# (any of these substrings, hint)
FIELD_RULES = [
    (('Nobel Prize',), "Nobel Prize winner"),
    (('President', 'Prime Minister'), "Held high political office"),
    (('actor', 'actress'), "Known for acting"),
    (('director',), "Film or theater director"),
    (('scientist',), "Made scientific discoveries"),
    (('physicist',), "Worked in physics"),
    (('mathematician',), "Known for mathematics"),
    (('painter', 'artist'), "Visual artist"),
    (('composer', 'musician'), "Musical composer or performer"),
    (('writer', 'author', 'poet'), "Literary figure"),
    (('inventor',), "Known for inventions"),
    (('philosopher',), "Philosophical thinker"),
]

ACHIEVEMENT_RULES = [
    (('theory of relativity',), "Associated with revolutionary physics theories"),
    (('Mona Lisa', 'Last Supper'), "Created world-famous artworks"),
    (('plays', 'Romeo', 'Hamlet'), "Wrote famous plays"),
    (('civil rights',), "Civil rights leader"),
    (('World War',), "Played a role in a World War"),
]

ORIGIN_RULES = [
    (('English', 'England', 'British'), "From England/Britain"),
    (('French', 'France'), "From France"),
    (('German', 'Germany'), "From Germany"),
    (('Italian', 'Italy'), "From Italy"),
    (('American', 'United States'), "From the United States"),
]

CLUE_RULES = [
    (('American',), "American"),
    (('British',), "British"),
    (('actor', 'actress'), "Actor/Actress"),
    (('singer', 'musician'), "Musician"),
    (('writer', 'author'), "Writer"),
    (('scientist',), "Scientist"),
    (('politician',), "Politician"),
]

_YEAR_RE = re.compile(r'\b(1[0-9]{3}|20[0-9]{2})\b')
_BIRTH_YEAR_RE = re.compile(r'born.*?(\d{4})')
_TAG_RE = re.compile(r'<[^>]+>')


def _apply_rules(text: str, rules) -> List[str]:
    return [hint for needles, hint in rules if any(needle in text for needle in needles)]


def era_from_year(year: int) -> str:
    if year < 1800:
        return "Lived before the 19th century"
    if year < 1900:
        return "Lived in the 19th century"
    if year < 1950:
        return "Born in the early 20th century"
    if year < 2000:
        return "Born in the mid-to-late 20th century"
    return "Born in the 21st century"


def generate_hint(extract: Optional[str]) -> str:
    """Always-visible clue built from a summary extract, e.g. "Born before 1900 • British • Writer"."""
    extract = extract or ""
    hints = []

    if 'born' in extract:
        birth_match = _BIRTH_YEAR_RE.search(extract)
        if birth_match:
            year = int(birth_match.group(1))
            hints.append("Born in the 20th century or later" if year >= 1900 else "Born before 1900")

    hints.extend(_apply_rules(extract, CLUE_RULES))

    if not hints:
        hints.append("Famous person")

    return HINT_SEPARATOR.join(hints[:MAX_HINT_PARTS])


def derive_additional_hint(extract: Optional[str]) -> str:
    """
    Extra hint built from a summary extract: era, field, achievements, origin.

    Returns at most three parts; a generic sentence when nothing is recognized.
    """
    if not extract:
        return NO_EXTRACT_HINT

    hints = []
    year_match = _YEAR_RE.search(extract)
    if year_match:
        hints.append(era_from_year(int(year_match.group(1))))

    hints.extend(_apply_rules(extract, FIELD_RULES))
    hints.extend(_apply_rules(extract, ACHIEVEMENT_RULES))
    hints.extend(_apply_rules(extract, ORIGIN_RULES))

    if not hints:
        logger.debug("No hint keywords found in extract")
        return NO_MATCH_HINT

    return HINT_SEPARATOR.join(hints[:MAX_HINT_PARTS])


def clean_section_title(title: str) -> str:
    return " ".join(_TAG_RE.sub('', title).split())


def filter_section_titles(sections: List[Dict[str, Any]], limit: int = MAX_SECTIONS) -> List[str]:
    """
    Top-level section headings suitable for display.

    Args:
        sections: Section dicts as returned by the Wikipedia API ("toclevel", "line").
        limit: Maximum number of headings returned.
    """
    titles = []
    for section in sections or []:
        if str(section.get("toclevel")) != "1" or not section.get("line"):
            continue
        title = clean_section_title(section["line"])
        lowered = title.lower()
        if not title or any(word in lowered for word in EXCLUDED_SECTION_WORDS):
            continue
        titles.append(title)
        if len(titles) >= limit:
            break
    return titles
