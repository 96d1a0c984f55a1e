"""
Spa sorting - listing sort modes

Every mode uses ``sorted`` (stable), so spas with equal keys keep their
filtered order and repeated queries page identically.
"""

import unicodedata
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

from ..models import Spa

SORT_MODES = (
    'rating_desc',
    'rating_asc',
    'budget_desc',
    'budget_asc',
    'title_asc',
    'title_desc',
)


def _rating_key(spa: Spa) -> float:
    return spa.rating or 0


def _budget_key(spa: Spa) -> float:
    return spa.budget or 0


def _char_rank(ch: str) -> int:
    category = unicodedata.category(ch)
    if category[0] in 'ZC':
        return 0
    if category[0] in 'PS':
        return 1
    if category.startswith('N'):
        return 2
    return 3


def title_collation_key(title: str) -> Tuple[Tuple[Tuple[int, str], ...], str, str]:
    """Locale-style ordering for titles.

    Primary: spaces, then punctuation and symbols, then digits, then letters,
    with accents and case ignored. Then accents. Lowercase sorts before
    uppercase when the rest is equal.
    """
    decomposed = unicodedata.normalize('NFKD', title)
    base = ''.join(ch for ch in decomposed if not unicodedata.combining(ch)).casefold()
    primary = tuple((_char_rank(ch), ch) for ch in base)
    return primary, title.casefold(), title.swapcase()


def _title_key(spa: Spa) -> Tuple[Tuple[Tuple[int, str], ...], str, str]:
    return title_collation_key(spa.title)


# mode -> (key, reverse)
_SORTERS: Dict[str, Tuple[Callable[[Spa], Any], bool]] = {
    'rating_desc': (_rating_key, True),
    'rating_asc': (_rating_key, False),
    'budget_desc': (_budget_key, True),
    'budget_asc': (_budget_key, False),
    'title_asc': (_title_key, False),
    'title_desc': (_title_key, True),
}


def resolve_sort(sort_by: Optional[str]) -> Optional[str]:
    """Return the sort mode, or None for unknown/absent values."""
    if isinstance(sort_by, str) and sort_by in _SORTERS:
        return sort_by
    return None


def sort_spas(spas: Sequence[Spa], sort_by: Optional[str] = None) -> List[Spa]:
    """Sort by a listing mode; unknown modes keep the incoming order."""
    mode = resolve_sort(sort_by)
    if mode is None:
        return list(spas)
    key, reverse = _SORTERS[mode]
    # reverse=True keeps ties in their original order
    return sorted(spas, key=key, reverse=reverse)
