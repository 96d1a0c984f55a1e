"""
Spa service - listing queries, facets and detail lookup

The functions here are pure over a catalog snapshot:
- spa_repository: CSV loading and snapshot publishing
- spa_filters: filtering predicates and facets
- spa_sorting: sort modes

Bad query values never raise. They degrade to "no filter", the default
order or the nearest valid page, so a malformed query string still gets a
well-formed (possibly empty) listing.
"""

import math
from typing import Any, Dict, Iterable, Optional, Sequence, Union

from ..models import Facets, FilterSpec, QueryResult, Spa
from ..models.query import DEFAULT_PAGE, DEFAULT_PAGE_SIZE
from . import spa_filters as filters
from . import spa_sorting as sorting
from .spa_repository import CatalogSnapshot, SpaRepository

Catalog = Union[CatalogSnapshot, Sequence[Spa]]


def _records(catalog: Catalog) -> Sequence[Spa]:
    if isinstance(catalog, CatalogSnapshot):
        return catalog.spas
    return catalog


def _coerce_page(value: Any) -> int:
    number = filters.parse_number(value)
    if number is None:
        return DEFAULT_PAGE
    return int(number)


def _coerce_page_size(value: Any) -> int:
    number = filters.parse_number(value)
    if number is None or number < 1:
        return DEFAULT_PAGE_SIZE
    return int(number)


def paginate(results: Sequence[Spa], page: Any = DEFAULT_PAGE,
             page_size: Any = DEFAULT_PAGE_SIZE) -> QueryResult:
    """Cut one page out of an already filtered and sorted list.

    Out-of-range pages (0, negative, past the end) are clamped into
    ``[1, page_count]``.
    """
    size = _coerce_page_size(page_size)
    total = len(results)
    page_count = max(1, math.ceil(total / size))
    current = min(max(1, _coerce_page(page)), page_count)

    start = (current - 1) * size
    end = start + size
    return QueryResult(
        total=total,
        page=current,
        page_count=page_count,
        page_size=size,
        items=tuple(results[start:end]),
    )


def query_spas(catalog: Catalog, spec: Optional[FilterSpec] = None) -> QueryResult:
    """Filter, sort and paginate the catalog."""
    spec = spec or FilterSpec()
    results = filters.filter_spas(
        _records(catalog),
        location=spec.location,
        treatment=spec.treatment,
        budget=spec.budget,
        search=spec.search,
    )
    results = sorting.sort_spas(results, spec.sort)
    return paginate(results, page=spec.page, page_size=spec.page_size)


def find_spa_by_id(catalog: Catalog, spa_id: Any) -> Optional[Spa]:
    """Look up one spa; non-numeric ids simply miss."""
    nid = filters.parse_number(spa_id)
    if not isinstance(nid, int):
        return None
    if isinstance(catalog, CatalogSnapshot):
        return catalog.by_id.get(nid)
    for spa in catalog:
        if spa.id == nid:
            return spa
    return None


def derive_facets(catalog: Catalog) -> Facets:
    if isinstance(catalog, CatalogSnapshot):
        return catalog.facets
    return filters.derive_facets(catalog)


class SpaService:
    """Request-facing operations bound to one repository.

    Each call reads the repository's current snapshot once, so a reload
    running in parallel never mixes two catalogs in a single response.
    """

    def __init__(self, repository: SpaRepository):
        self.repository = repository

    @classmethod
    def from_spas(cls, spas: Iterable[Spa]) -> 'SpaService':
        return cls(SpaRepository.from_spas(spas))

    def query(self, spec: Optional[FilterSpec] = None) -> QueryResult:
        return query_spas(self.repository.snapshot(), spec)

    def facets(self) -> Facets:
        return derive_facets(self.repository.snapshot())

    def get_spa(self, spa_id: Any) -> Optional[Spa]:
        return find_spa_by_id(self.repository.snapshot(), spa_id)

    def reload(self) -> CatalogSnapshot:
        """Reload from the configured source (raises LoadError, keeps old data)."""
        return self.repository.reload()

    def stats(self) -> Dict[str, Any]:
        snapshot = self.repository.snapshot()
        return {
            'spas': len(snapshot),
            'loaded_at': snapshot.loaded_at.isoformat(timespec='seconds') if snapshot.loaded_at else None,
            'source': snapshot.source,
        }
