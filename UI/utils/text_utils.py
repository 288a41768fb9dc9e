"""
Search and display helpers shared by the entity controller and table view.
"""

from typing import Any, Callable, List, Mapping, Sequence

Entity = Mapping[str, Any]

ELLIPSIS = "..."


def normalize_search_term(term: Any) -> str:
    """Trim and lowercase a free-text search term. None becomes ''."""
    if term is None:
        return ""
    return str(term).strip().lower()


def filter_entities(entities: Sequence[Entity], term: Any,
                    predicate: Callable[[Entity, str], bool]) -> List[Entity]:
    """
    Apply a resource filter predicate to a collection.

    The result keeps the collection's order. A blank term returns every entity
    without calling the predicate.

    Args:
        entities: collection as last fetched
        term: raw search text as typed by the user
        predicate: ``(entity, normalized_term) -> bool``

    Returns:
        List of matching entities
    """
    normalized = normalize_search_term(term)
    if not normalized:
        return list(entities)
    return [entity for entity in entities if predicate(entity, normalized)]


def contains_term(term: str, *values: Any) -> bool:
    """True if any of the given values contains ``term`` (case-insensitive)."""
    for value in values:
        if value is None:
            continue
        if term in str(value).lower():
            return True
    return False


def truncate_text(text: Any, max_length: int = 30, marker: str = ELLIPSIS) -> str:
    text = "" if text is None else str(text)
    if len(text) <= max_length:
        return text
    return text[:max_length] + marker


def format_currency(amount: Any) -> str:
    """Whole-dollar display, e.g. 1200.5 -> '$1,200'."""
    try:
        value = float(amount)
    except (TypeError, ValueError):
        value = 0.0
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.0f}"


def format_date(value: Any) -> str:
    """Date part of an ISO timestamp ('2026-03-01T10:00:00' -> '2026-03-01')."""
    if not value:
        return ""
    return str(value)[:10]
