"""
Utilities package for the rental console UI.
"""

from UI.utils.text_utils import (
    contains_term,
    filter_entities,
    format_currency,
    format_date,
    normalize_search_term,
    truncate_text,
)

__all__ = [
    'contains_term',
    'filter_entities',
    'format_currency',
    'format_date',
    'normalize_search_term',
    'truncate_text',
]
