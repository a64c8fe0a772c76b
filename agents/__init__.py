from .wikipedia_agent import (
    configure_agent,
    fetch_page_summary,
    fetch_page_sections,
)

__all__ = [
    'configure_agent',
    'fetch_page_summary',
    'fetch_page_sections',
]
