# Services package
#
# Catalog services for the spa directory backend.
#
# Module structure:
# - spa_service.py: query engine, lookup and the request-facing SpaService
# - spa_repository.py: CSV loading, LoadError, snapshot publishing/reload
# - spa_filters.py: filter predicates, lenient number parsing, facets
# - spa_sorting.py: listing sort modes
#
#   from app.services import SpaService, SpaRepository

from .spa_service import SpaService, query_spas, find_spa_by_id, paginate
from .spa_repository import SpaRepository, CatalogSnapshot, LoadError, load_spas
from .spa_filters import derive_facets
from . import spa_filters
from . import spa_sorting

__all__ = [
    'SpaService',
    'SpaRepository',
    'CatalogSnapshot',
    'LoadError',
    'load_spas',
    'query_spas',
    'find_spa_by_id',
    'paginate',
    'derive_facets',
    'spa_filters',
    'spa_sorting',
]
