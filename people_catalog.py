"""
people_catalog.py

Read-only catalog of famous people served to players. Entries are loaded from
famous_people.json, which uses the camelCase field names of the game
database table (aiHint1, birthYear, filteredOut, ...).
"""

import json
import logging
import random
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from common_types import AI_ERROR_MARKER, WIKI_ERROR_MARKER
from exceptions import CatalogEmptyError

logger = logging.getLogger("people_catalog")

@dataclass
class FamousPerson:
    name: str
    sections: List[str] = field(default_factory=list)
    hint: str = ""
    ai_hints: List[Optional[str]] = field(default_factory=list)
    url: str = ""
    category: Optional[str] = None
    timeperiod: Optional[str] = None
    nationality: Optional[str] = None
    occupation: Optional[str] = None
    birth_year: Optional[int] = None
    death_year: Optional[int] = None
    wikipedia_title: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FamousPerson":
        sections = data.get("sections") or []
        if sections == [WIKI_ERROR_MARKER]:
            sections = []
        return cls(
            name=data["name"].strip(),
            sections=list(sections),
            hint=data.get("hint") or "",
            ai_hints=[data.get(f"aiHint{i}") for i in range(1, 4)],
            url=data.get("url") or "",
            category=data.get("category"),
            timeperiod=data.get("timeperiod"),
            nationality=data.get("nationality"),
            occupation=data.get("occupation"),
            birth_year=data.get("birthYear"),
            death_year=data.get("deathYear"),
            wikipedia_title=data.get("wikipediaTitle"),
        )

    @property
    def page_title(self) -> str:
        return self.wikipedia_title or self.name

    def get_ai_hint(self, number: int) -> Optional[str]:
        """Hint 1-3, or None when missing or marked as a failed generation."""
        if number < 1 or number > len(self.ai_hints):
            return None
        hint = self.ai_hints[number - 1]
        if not hint or hint == AI_ERROR_MARKER:
            return None
        return hint


class PeopleCatalog:
    """Famous people available to the game, keyed by exact name."""

    def __init__(self, people: Iterable[FamousPerson] = ()):
        self._people: Dict[str, FamousPerson] = {}
        for person in people:
            if person.name in self._people:
                logger.warning(f"Duplicate catalog entry ignored: {person.name}")
                continue
            self._people[person.name] = person

    @classmethod
    def from_file(cls, path: str) -> "PeopleCatalog":
        try:
            with open(path, "r", encoding="utf-8") as json_file:
                raw_people = json.load(json_file)
        except FileNotFoundError:
            logger.error(f"People catalog not found at {path}")
            return cls()
        except json.JSONDecodeError as e:
            logger.error(f"Failed to parse people catalog at {path}: {e}")
            return cls()

        if not isinstance(raw_people, list):
            logger.error(f"People catalog at {path} must be a JSON list, got {type(raw_people).__name__}")
            return cls()

        people = []
        for entry in raw_people:
            if not isinstance(entry, dict):
                logger.warning(f"Skipping catalog entry that is not an object: {entry!r}")
                continue
            if entry.get("filteredOut"):
                continue
            name = entry.get("name")
            if not isinstance(name, str) or not name.strip():
                logger.warning(f"Skipping catalog entry without a name: {entry}")
                continue
            people.append(FamousPerson.from_dict(entry))

        logger.info(f"Loaded {len(people)} people from {path}")
        return cls(people)

    def __len__(self) -> int:
        return len(self._people)

    def __contains__(self, name: str) -> bool:
        return name in self._people

    def names(self) -> List[str]:
        return list(self._people)

    def get(self, name: str) -> Optional[FamousPerson]:
        return self._people.get(name)

    def random_person(self, exclude: Iterable[str] = (), rng: Optional[random.Random] = None) -> FamousPerson:
        """
        Pick a random person whose name is not in exclude.

        When everyone has been served the whole catalog is eligible again.

        Raises:
            CatalogEmptyError: If the catalog has no entries.
        """
        if not self._people:
            raise CatalogEmptyError()

        chooser = rng or random
        excluded = set(exclude)
        available = [p for name, p in self._people.items() if name not in excluded]
        if not available:
            logger.warning("Every catalog person has been used; reusing the full catalog")
            available = list(self._people.values())
        return chooser.choice(available)
