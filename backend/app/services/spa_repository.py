"""
Spa repository - CSV loading and ownership of the published catalog snapshot
"""

import csv
import logging
import os
import threading
from dataclasses import dataclass, field
from datetime import datetime
from types import MappingProxyType
from typing import IO, Any, Iterable, List, Mapping, Optional, Tuple, Union

from ..models import Facets, Spa
from . import spa_filters as filters

logger = logging.getLogger(__name__)

ID_COLUMN = 'nid'
TEXT_FIELDS = ('title', 'email', 'phone', 'address', 'website', 'location',
               'opening_hour', 'closing_hour')
TREATMENT_SEPARATOR = ';'

Source = Union[str, os.PathLike, IO[str]]


class LoadError(Exception):
    """The catalog source is unreadable or malformed."""


def _describe(source: Any) -> str:
    if isinstance(source, (str, os.PathLike)):
        return os.fspath(source)
    return getattr(source, 'name', None) or '<stream>'


def parse_treatments(raw: Optional[str]) -> Tuple[str, ...]:
    """Split ``"Massage; Facial;"`` into ``('Massage', 'Facial')``."""
    if not raw:
        return ()
    parts = (part.strip() for part in raw.split(TREATMENT_SEPARATOR))
    return tuple(part for part in parts if part)


def _parse_id(raw: Optional[str], line: int, label: str) -> int:
    value = filters.parse_number(raw)
    if not isinstance(value, int):
        raise LoadError(f"{label}, line {line}: invalid or missing {ID_COLUMN} {raw!r}")
    return value


def _parse_optional_number(row: Mapping[str, str], column: str, line: int, label: str):
    raw = row.get(column) or ''
    if not raw:
        return None
    value = filters.parse_number(raw)
    if value is None:
        logger.warning("%s, line %d: ignoring non-numeric %s %r", label, line, column, raw)
    return value


def parse_row(row: Mapping[str, str], line: int = 0, label: str = '<row>') -> Spa:
    """Build a Spa from one CSV row (keys and values already trimmed)."""
    rating = _parse_optional_number(row, 'rating', line, label)
    text = {name: row.get(name) or '' for name in TEXT_FIELDS}
    return Spa(
        id=_parse_id(row.get(ID_COLUMN), line, label),
        budget=_parse_optional_number(row, 'budget', line, label),
        rating=float(rating) if rating is not None else None,
        treatments=parse_treatments(row.get('treatments')),
        **text,
    )


def _read_rows(stream: IO[str], label: str) -> List[Spa]:
    reader = csv.reader(stream)
    header: Optional[List[str]] = None
    spas: List[Spa] = []
    seen_ids = set()

    try:
        for values in reader:
            if not values or (len(values) == 1 and not values[0].strip()):
                continue
            cells = [value.strip() for value in values]
            if header is None:
                header = [cell.lstrip("\ufeff") for cell in cells]
                if ID_COLUMN not in header:
                    raise LoadError(f"{label}: missing required column '{ID_COLUMN}'")
                continue

            if len(cells) != len(header):
                raise LoadError(
                    f"{label}, line {reader.line_num}: expected {len(header)} columns, got {len(cells)}"
                )
            row = dict(zip(header, cells))
            spa = parse_row(row, line=reader.line_num, label=label)
            if spa.id in seen_ids:
                raise LoadError(f"{label}, line {reader.line_num}: duplicate {ID_COLUMN} {spa.id}")
            seen_ids.add(spa.id)
            spas.append(spa)
    except csv.Error as e:
        raise LoadError(f"{label}, line {reader.line_num}: {e}") from e

    if header is None:
        raise LoadError(f"{label}: no header row")
    return spas


def load_spas(source: Source) -> List[Spa]:
    """Parse a spa CSV (path or open text stream) into records, in file order.

    Raises LoadError when the source can't be read or a row is invalid.
    """
    label = _describe(source)
    if isinstance(source, (str, os.PathLike)):
        try:
            with open(source, 'r', encoding='utf-8-sig', newline='') as f:
                return _read_rows(f, label)
        except OSError as e:
            raise LoadError(f"{label}: cannot read catalog ({e})") from e
        except UnicodeDecodeError as e:
            raise LoadError(f"{label}: not valid UTF-8 ({e})") from e
    return _read_rows(source, label)


@dataclass(frozen=True)
class CatalogSnapshot:
    """Everything one request needs, built once and never mutated."""

    spas: Tuple[Spa, ...] = ()
    by_id: Mapping[int, Spa] = field(default_factory=lambda: MappingProxyType({}))
    facets: Facets = field(default_factory=Facets)
    source: str = ''
    loaded_at: Optional[datetime] = None

    @classmethod
    def build(cls, spas: Iterable[Spa], source: str = '') -> 'CatalogSnapshot':
        ordered = tuple(spas)
        return cls(
            spas=ordered,
            by_id=MappingProxyType({spa.id: spa for spa in reversed(ordered)}),
            facets=filters.derive_facets(ordered),
            source=source,
            loaded_at=datetime.now(),
        )

    def __len__(self) -> int:
        return len(self.spas)


class SpaRepository:
    """Owns the current catalog snapshot.

    Readers take ``snapshot()`` once per request. ``reload()`` builds a new
    snapshot completely before swapping the reference, so readers see either
    the old catalog or the new one. A failed reload keeps the old one.
    """

    def __init__(self, source: Optional[Source] = None):
        self._source = source
        self._snapshot = CatalogSnapshot()
        self._reload_lock = threading.Lock()

    @classmethod
    def from_spas(cls, spas: Iterable[Spa], source: str = '<memory>') -> 'SpaRepository':
        repository = cls()
        repository._publish(CatalogSnapshot.build(spas, source=source))
        return repository

    @property
    def source(self) -> Optional[Source]:
        return self._source

    def snapshot(self) -> CatalogSnapshot:
        return self._snapshot

    def _publish(self, snapshot: CatalogSnapshot) -> None:
        self._snapshot = snapshot

    def load(self) -> CatalogSnapshot:
        """Load the configured source and publish it."""
        return self.reload()

    def reload(self, source: Optional[Source] = None) -> CatalogSnapshot:
        target = source if source is not None else self._source
        if target is None:
            raise LoadError("no catalog source configured")

        with self._reload_lock:
            label = _describe(target)
            try:
                spas = load_spas(target)
            except LoadError:
                logger.error("Catalog load failed for %s; keeping %d loaded spas",
                             label, len(self._snapshot))
                raise
            snapshot = CatalogSnapshot.build(spas, source=label)
            self._publish(snapshot)
            if source is not None:
                self._source = source

        logger.info("Loaded %d spas from %s", len(snapshot), label)
        return snapshot
