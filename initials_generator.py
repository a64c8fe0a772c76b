"""
initials_generator.py

Builds the initials shown when a player pays to reveal them, e.g.
"Rogier van der Weyden" -> "R. v. d. W." and "Henry VIII" -> "H. 8".
"""

import logging

logger = logging.getLogger("initials_generator")

ROMAN_TO_ARABIC = {
    'I': '1', 'II': '2', 'III': '3', 'IV': '4', 'V': '5',
    'VI': '6', 'VII': '7', 'VIII': '8', 'IX': '9', 'X': '10',
    'XI': '11', 'XII': '12', 'XIII': '13', 'XIV': '14', 'XV': '15',
    'XVI': '16', 'XVII': '17', 'XVIII': '18', 'XIX': '19', 'XX': '20'
}

# Name particles that keep a lowercase initial
LOWERCASE_COMPONENTS = frozenset([
    'of', 'the', 'van', 'der', 'von', 'ibn', 'bin', 'al', 'el', 'la', 'le',
    'de', 'da', 'di', 'du', 'des', 'del', 'della', 'dello'
])

def generate_initials(full_name: str) -> str:
    """
    Generate display initials for a full name.

    Rules:
      - single word: first letter ("Plato" -> "P.")
      - "Jr"/"Jr." is preserved as "Jr."
      - upper-case Roman numerals I-XX become Arabic numerals ("Xi" is a name)
      - particles keep a lowercase initial ("Musa ibn Nusayr" -> "M. i. N.")
      - every other part gives its uppercase first letter
    """
    if not isinstance(full_name, str):
        return ''

    parts = full_name.split()
    if not parts:
        return ''

    if len(parts) == 1:
        return parts[0][0].upper() + '.'

    result = []
    for part in parts:
        lowered = part.lower()

        if lowered in ('jr', 'jr.'):
            result.append('Jr.')
        elif part.isupper() and part in ROMAN_TO_ARABIC:
            result.append(ROMAN_TO_ARABIC[part])
        elif lowered in LOWERCASE_COMPONENTS:
            result.append(part[0].lower() + '.')
        else:
            result.append(part[0].upper() + '.')

    initials = ' '.join(result)
    logger.debug(f"Initials for '{full_name}': {initials}")
    return initials
