"""
common_types.py

This module contains common types, enums, and constants used across the codebase.
"""

from enum import Enum

# Markers stored in the catalog when generating a field failed
AI_ERROR_MARKER = "AI_ERROR"
WIKI_ERROR_MARKER = "WIKI_ERROR"

class HintSource(Enum):
    """
    Where a hint shown to the player came from.
    """
    CATALOG = "catalog"
    WIKIPEDIA = "wikipedia"
    FALLBACK = "fallback"
