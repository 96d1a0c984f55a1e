"""
Spa filters - predicate filtering, lenient value coercion and facet derivation
"""

import math
from typing import Any, Iterable, List, Optional, Sequence

from ..models import Facets, Spa
from ..models.spa import Number


def parse_number(value: Any) -> Optional[Number]:
    """Coerce a request/CSV value to a finite number, or None if it isn't one.

    Integral values come back as ``int`` so ``"2"`` and ``"2.0"`` both give ``2``.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        number = value
    else:
        raw = str(value).strip()
        if not raw:
            return None
        try:
            number = float(raw)
        except (ValueError, OverflowError):
            return None
    if not math.isfinite(number):
        return None
    if number.is_integer():
        return int(number)
    return number


def _is_set(value: Any) -> bool:
    if value is None:
        return False
    if isinstance(value, str):
        return value != ''
    return True


def filter_by_location(spas: Sequence[Spa], location: str) -> List[Spa]:
    """Case-insensitive exact match on location"""
    target = str(location).lower()
    return [s for s in spas if s.location.lower() == target]


def filter_by_treatment(spas: Sequence[Spa], treatment: str) -> List[Spa]:
    """Keep spas offering the treatment (any element, case-insensitive)"""
    target = str(treatment).lower()
    return [
        s for s in spas
        if any(t.lower() == target for t in s.treatments)
    ]


def filter_by_budget(spas: Sequence[Spa], budget: Any) -> List[Spa]:
    """Exact budget tier match.

    An unparseable budget leaves the list untouched; spas without a budget
    never match a parsed one.
    """
    wanted = parse_number(budget)
    if wanted is None:
        return list(spas)
    return [s for s in spas if s.budget is not None and s.budget == wanted]


def filter_by_keyword(spas: Sequence[Spa], keyword: str) -> List[Spa]:
    """Substring search over title and address"""
    keyword_lower = str(keyword).lower()
    return [
        s for s in spas
        if keyword_lower in s.title.lower()
        or keyword_lower in s.address.lower()
    ]


def filter_spas(spas: Sequence[Spa], location: Any = None, treatment: Any = None,
                budget: Any = None, search: Any = None) -> List[Spa]:
    """Apply every populated filter (AND). Order of the input is preserved."""
    results = list(spas)
    if _is_set(location):
        results = filter_by_location(results, location)
    if _is_set(treatment):
        results = filter_by_treatment(results, treatment)
    if _is_set(budget):
        results = filter_by_budget(results, budget)
    if _is_set(search):
        results = filter_by_keyword(results, search)
    return results


def derive_facets(spas: Iterable[Spa]) -> Facets:
    """Collect the distinct locations, treatments and budget tiers."""
    locations = set()
    treatments = set()
    budgets = set()

    for spa in spas:
        if spa.location:
            locations.add(spa.location)
        treatments.update(spa.treatments)
        if spa.budget is not None:
            budgets.add(spa.budget)

    return Facets(
        locations=tuple(sorted(locations)),
        treatments=tuple(sorted(treatments)),
        budgets=tuple(sorted(budgets)),
    )
