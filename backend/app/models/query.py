"""
Query input/output types for the spa listing endpoints.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple

from .spa import Number, Spa

DEFAULT_PAGE = 1
DEFAULT_PAGE_SIZE = 20


@dataclass(frozen=True)
class FilterSpec:
    """Raw listing parameters.

    Values are kept as they arrive from the request (strings or numbers);
    coercion happens in the query engine, which never rejects input.
    """

    location: Optional[str] = None
    treatment: Optional[str] = None
    budget: Any = None
    search: Optional[str] = None
    sort: Optional[str] = None
    page: Any = DEFAULT_PAGE
    page_size: Any = DEFAULT_PAGE_SIZE

    @classmethod
    def from_args(cls, args: Mapping[str, Any],
                  default_page_size: int = DEFAULT_PAGE_SIZE) -> 'FilterSpec':
        """Build from request query args (``pageSize`` is the wire name)."""
        return cls(
            location=args.get('location'),
            treatment=args.get('treatment'),
            budget=args.get('budget'),
            search=args.get('search'),
            sort=args.get('sort'),
            page=args.get('page', DEFAULT_PAGE),
            page_size=args.get('pageSize', default_page_size),
        )


@dataclass(frozen=True)
class QueryResult:
    total: int
    page: int
    page_count: int
    page_size: int
    items: Tuple[Spa, ...] = field(default_factory=tuple)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'total': self.total,
            'page': self.page,
            'pageCount': self.page_count,
            'pageSize': self.page_size,
            'items': [spa.to_dict() for spa in self.items],
        }


@dataclass(frozen=True)
class Facets:
    """Distinct filter values offered to listing UIs."""

    locations: Tuple[str, ...] = ()
    treatments: Tuple[str, ...] = ()
    budgets: Tuple[Number, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            'locations': list(self.locations),
            'treatments': list(self.treatments),
            'budgets': list(self.budgets),
        }
