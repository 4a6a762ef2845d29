"""
Map catalog: every known map name, in every loaded language, pointing at the
map it names.

Names are indexed exactly as the game spells them. When two rows carry the
same name (the same place in several languages, or maps sharing a place name)
the first row wins and the later ones are recorded as collisions.
"""

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, NamedTuple, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)


class CatalogRow(NamedTuple):
    name: Optional[str]
    location_id: int
    region_id: Optional[int]


@dataclass(frozen=True)
class Location:
    location_id: int
    region_id: int
    names: Mapping[str, str] = field(default_factory=dict, compare=False)

    def display_name(self, language: str) -> Optional[str]:
        if language in self.names:
            return self.names[language]
        return next(iter(self.names.values()), None)


class LocationCatalog:
    def __init__(self):
        self._by_name: Dict[str, Location] = {}
        self._by_id: Dict[int, Location] = {}
        self.collisions: Sequence[Tuple[str, str]] = []
        self._frozen = False

    def insert(self, name: str, location: Location, language: str = "") -> bool:
        if self._frozen:
            raise RuntimeError("Location catalog is frozen")
        if name in self._by_name:
            logger.debug(
                "Attempted to add map with name %s for language %s but it already existed",
                name, language,
            )
            self.collisions.append((name, language))
            return False
        logger.debug("Adding map with name %s with language %s", name, language)
        self._by_name[name] = location
        self._by_id.setdefault(location.location_id, location)
        return True

    def freeze(self) -> "LocationCatalog":
        self._by_name = MappingProxyType(self._by_name)
        self._by_id = MappingProxyType(self._by_id)
        self.collisions = tuple(self.collisions)
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def lookup(self, name: str) -> Optional[Location]:
        return self._by_name.get(name)

    def location(self, location_id: int) -> Optional[Location]:
        return self._by_id.get(location_id)

    def names(self) -> List[str]:
        return list(self._by_name)

    def __len__(self) -> int:
        return len(self._by_name)


def _usable_rows(tables: Mapping[str, Iterable[CatalogRow]]) -> List[Tuple[str, CatalogRow]]:
    rows = []
    for language, table in tables.items():
        for row in table:
            if not row.name:
                logger.warning("Skipping map %s for language %s: no place name", row.location_id, language)
                continue
            if row.region_id is None:
                logger.warning("Skipping map %s (%s) for language %s: no territory", row.location_id, row.name, language)
                continue
            rows.append((language, row))
    return rows


def build_catalog(tables: Mapping[str, Iterable[CatalogRow]]) -> LocationCatalog:
    """
    Build the frozen catalog from per-language row tables.

    Languages are walked in mapping order, rows in table order. A map's
    region is taken from the first usable row that mentions it.
    """
    rows = _usable_rows(tables)

    # Gather every name a map carries first, so each Location is complete
    # before it is published under any of its names
    regions: Dict[int, int] = {}
    names: Dict[int, Dict[str, str]] = {}
    for language, row in rows:
        regions.setdefault(row.location_id, row.region_id)
        names.setdefault(row.location_id, {}).setdefault(language, row.name)

    locations = {
        location_id: Location(location_id, region_id, MappingProxyType(names[location_id]))
        for location_id, region_id in regions.items()
    }

    catalog = LocationCatalog()
    for language, row in rows:
        catalog.insert(row.name, locations[row.location_id], language)
    for language in tables:
        logger.debug("Loaded map data from language %s", language)

    logger.info(
        "Map catalog built: %d names for %d maps (%d collisions skipped)",
        len(catalog), len(locations), len(catalog.collisions),
    )
    return catalog.freeze()
