from .spa import Spa
from .query import FilterSpec, QueryResult, Facets

__all__ = ['Spa', 'FilterSpec', 'QueryResult', 'Facets']
