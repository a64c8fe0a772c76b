"""
name_matcher.py

This module decides whether a player's free-text guess identifies the famous
person whose biography is being shown.

The module includes functions for:
  - Normalizing guesses and names (case, whitespace, punctuation)
  - Folding accented Latin characters for royal/historical "of" names
  - Matching "X of Y" names ("Catherine of Aragon", "Diana, Princess of Wales")
  - Matching surnames, including connector compounds ("van Beethoven"), while
    skipping generational suffixes ("Jr.", "VIII")
  - Rejecting first names, bare connectors and first-name+connector fragments

All functions are pure and total: any input that cannot be classified as a
match returns False rather than raising.
"""

import logging
import re
from typing import List, Optional, Tuple

from initials_generator import ROMAN_TO_ARABIC

logger = logging.getLogger("name_matcher")

# Particles that link a given name to a surname
CONNECTORS = frozenset([
    'van', 'von', 'de', 'del', 'della', 'di', 'da', 'du', 'le', 'la',
    'el', 'al', 'ibn', 'bin', 'mac', 'mc', 'o', 'fitz'
])

# Kept in names but never identifying on their own
NON_IDENTIFYING_WORDS = frozenset(['of', 'the'])

PARTICLES = CONNECTORS | NON_IDENTIFYING_WORDS

# Trailing name suffixes besides Roman numerals ("Martin Luther King Jr.")
GENERATIONAL_SUFFIXES = frozenset(['jr', 'sr'])

_PUNCTUATION_RE = re.compile(r'[^\w\s]')

_DIACRITIC_GROUPS = {
    'a': 'àáâãäå',
    'c': 'çč',
    'e': 'èéêë',
    'i': 'ìíîï',
    'n': 'ñ',
    'o': 'òóôõöø',
    'u': 'ùúûü',
    'y': 'ýÿ',
    's': 'ß',
}
_DIACRITIC_TABLE = str.maketrans({
    accented: base
    for base, group in _DIACRITIC_GROUPS.items()
    for accented in group
})


def _collapse_whitespace(text: str) -> str:
    return " ".join(text.split())


def normalize_guess(text: str) -> str:
    """
    Lowercase, trim, drop punctuation and collapse whitespace.

    Normalizing an already-normalized string returns it unchanged.
    """
    if not isinstance(text, str):
        return ""
    return _collapse_whitespace(_PUNCTUATION_RE.sub('', text.lower().strip()))


def fold_diacritics(text: str) -> str:
    """Replace accented Latin letters with their base letter (á→a, ç→c, ñ→n, ß→s)."""
    return text.translate(_DIACRITIC_TABLE)


def _prepare_of_text(text: str) -> str:
    # Punctuation is kept so the comma in "Diana, Princess of Wales" can be located
    return _collapse_whitespace(fold_diacritics(text.lower().strip()))


def has_of_pattern(full_name: str) -> bool:
    """True when the name carries an "X of Y" territorial or epithet clause."""
    if not isinstance(full_name, str):
        return False
    return " of " in _collapse_whitespace(full_name.lower())


def is_of_name_match(guess: str, full_name: str) -> bool:
    """
    Match a guess against an "of"-pattern name.

    "Diana, Princess of Wales" accepts "Diana", "Princess Diana" or the whole
    name. "Catherine of Aragon" and "Emperor Zhao of Han" accept only the
    clause before "of" or the whole name. Nothing from after "of" is accepted.
    """
    if not isinstance(guess, str) or not isinstance(full_name, str):
        return False

    name = _prepare_of_text(full_name)
    normalized_guess = normalize_guess(fold_diacritics(guess.lower()))
    if not normalized_guess:
        return False

    if normalized_guess == normalize_guess(name):
        logger.debug(f"Whole-name match for '{full_name}'")
        return True

    of_index = name.find(" of ")
    comma_index = name.find(", ")

    if comma_index != -1 and of_index != -1 and comma_index < of_index:
        personal_name = normalize_guess(name[:comma_index])
        title = normalize_guess(name[comma_index + 2:of_index])
        accepted = {personal_name}
        if title:
            accepted.add(f"{title} {personal_name}")
        is_match = normalized_guess in accepted
        logger.debug(f"Titled 'of' name '{full_name}': personal={personal_name}, title={title}, match={is_match}")
        return is_match

    if of_index > 0:
        before_of = normalize_guess(name[:of_index])
        is_match = bool(before_of) and normalized_guess == before_of
        logger.debug(f"'Of' name '{full_name}': before_of={before_of}, match={is_match}")
        return is_match

    return False


def _is_generational_suffix(token: str) -> bool:
    # Roman numerals only count in upper case; "Xi" is a name
    return token.lower() in GENERATIONAL_SUFFIXES or (token.isupper() and token in ROMAN_TO_ARABIC)


def split_generational_suffix(full_name: str) -> Tuple[List[str], List[str]]:
    """
    Split a name into normalized core tokens and trailing suffix tokens.

    "Martin Luther King Jr." -> (["martin", "luther", "king"], ["jr"])
    "Henry VIII" -> (["henry"], ["viii"])
    """
    if not isinstance(full_name, str):
        return [], []
    tokens = _collapse_whitespace(_PUNCTUATION_RE.sub('', full_name.strip())).split()
    end = len(tokens)
    while end > 1 and _is_generational_suffix(tokens[end - 1]):
        end -= 1
    lowered = [token.lower() for token in tokens]
    return lowered[:end], lowered[end:]


def find_first_name_end(name_parts: List[str]) -> int:
    """
    Index where the first-name span ends.

    The span ends at the first connector or particle; without one, the last
    token (two-token names) or the last two tokens (longer names) are treated
    as the surname region.
    """
    for i, part in enumerate(name_parts):
        if part in PARTICLES:
            return i

    if len(name_parts) >= 3:
        return 2
    if len(name_parts) == 2:
        return 1
    return 0


def find_contiguous_match(guess_parts: List[str], name_parts: List[str]) -> Optional[int]:
    """Start index of the first run of name_parts equal to guess_parts, or None."""
    width = len(guess_parts)
    if width == 0:
        return None
    for start in range(len(name_parts) - width + 1):
        if name_parts[start:start + width] == guess_parts:
            return start
    return None


def is_surname_match(guess: str, name_parts: List[str]) -> bool:
    """Single-token guess against the tokens of a full name."""
    if guess in PARTICLES:
        logger.debug(f"Rejected bare connector '{guess}'")
        return False

    if len(name_parts) == 1:
        return guess == name_parts[0]

    if guess == name_parts[-1]:
        logger.debug(f"Final surname match: {guess}")
        return True

    # Connector compounds expose their surname ("da Vinci" -> "Vinci")
    for i in range(1, len(name_parts) - 1):
        if name_parts[i] in CONNECTORS and guess == name_parts[i + 1]:
            logger.debug(f"Compound surname match after '{name_parts[i]}': {guess}")
            return True

    first_name_end = find_first_name_end(name_parts)
    if guess in name_parts[:first_name_end]:
        logger.debug(f"Rejected first name '{guess}'")

    return False


def is_valid_surname_combo(guess_parts: List[str], name_parts: List[str]) -> bool:
    """Multi-token guess: must be a contiguous run that reaches the surname region."""
    if all(part in PARTICLES for part in guess_parts):
        return False

    match_start = find_contiguous_match(guess_parts, name_parts)
    if match_start is None:
        return False

    first_name_end = find_first_name_end(name_parts)
    match_end = match_start + len(guess_parts) - 1

    if match_end < first_name_end:
        logger.debug(f"Rejected first-name-only run {guess_parts}")
        return False

    # "Ludwig van", "Leonardo da"
    if (match_start < first_name_end
            and match_end == first_name_end
            and name_parts[match_end] in PARTICLES):
        logger.debug(f"Rejected first name + connector run {guess_parts}")
        return False

    return True


def is_correct_guess(guess: str, full_name: str) -> bool:
    """
    Decide whether guess correctly identifies full_name.

    Args:
        guess: Untrusted free-text player input.
        full_name: Canonical name of the person, e.g. "Ludwig van Beethoven".

    Returns:
        True if the guess is the whole name, the final surname (ignoring a
        trailing "Jr.", "Sr." or upper-case Roman numeral), a
        connector+surname compound, a run reaching the surname, or for
        "of"-pattern names the personal-name clause. False otherwise,
        including for empty or non-string input.
    """
    normalized_guess = normalize_guess(guess)
    normalized_name = normalize_guess(full_name)

    if not normalized_guess or not normalized_name:
        return False

    if normalized_guess == normalized_name:
        return True

    if has_of_pattern(full_name):
        return is_of_name_match(guess, full_name)

    name_parts, suffix_parts = split_generational_suffix(full_name)
    guess_parts = normalized_guess.split()

    # Regnal names ("Henry VIII", "Louis XIV") are only identified whole
    if len(name_parts) == 1 and suffix_parts:
        logger.debug(f"Rejected partial guess for regnal name '{full_name}'")
        return False

    # "Luther King Jr." is matched as "Luther King"
    width = len(suffix_parts)
    if width and len(guess_parts) > width and guess_parts[-width:] == suffix_parts:
        guess_parts = guess_parts[:-width]

    if len(guess_parts) == 1:
        return is_surname_match(guess_parts[0], name_parts)

    return is_valid_surname_combo(guess_parts, name_parts)
