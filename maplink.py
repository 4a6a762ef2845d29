import math
from dataclasses import dataclass
from typing import Optional, Tuple

from catalog import LocationCatalog
from config import DEFAULT_MAP_LINK_URL
from sighting_parser import MAP_LINK_ARROW


def truncate_coord(value: float) -> float:
    # The game cuts flag coordinates to one decimal instead of rounding.
    # round() first so 2.3 * 10 == 22.999... still lands on 23
    return math.floor(round(value * 10, 6)) / 10


@dataclass(frozen=True)
class MapLink:
    territory_id: int
    map_id: int
    x: float
    y: float
    place_name: str

    @property
    def display_x(self) -> str:
        return f"{truncate_coord(self.x):.1f}"

    @property
    def display_y(self) -> str:
        return f"{truncate_coord(self.y):.1f}"

    @property
    def coordinate_string(self) -> str:
        # Same layout the game uses for <flag> coordinates
        return f"( {self.display_x}  , {self.display_y} )"

    def url(self, template: str = DEFAULT_MAP_LINK_URL) -> str:
        return template.format(
            territory_id=self.territory_id,
            map_id=self.map_id,
            x=self.display_x,
            y=self.display_y,
        )

    def text(self, template: str = DEFAULT_MAP_LINK_URL) -> str:
        # Masked link; the angle brackets keep Discord from embedding a preview
        return f"[{MAP_LINK_ARROW}{self.place_name}](<{self.url(template)}>)"


class MapLinkRenderer:
    """Turns (territory, map, x, y) into the link and coordinate text of an output line."""

    def __init__(self, catalog: LocationCatalog, language: str = "en",
                 url_template: str = DEFAULT_MAP_LINK_URL):
        self.catalog = catalog
        self.language = language
        self.url_template = url_template

    def place_name(self, map_id: int) -> str:
        location = self.catalog.location(map_id)
        name: Optional[str] = location.display_name(self.language) if location else None
        return name or f"Map#{map_id}"

    def link(self, territory_id: int, map_id: int, x: float, y: float) -> MapLink:
        return MapLink(territory_id, map_id, x, y, self.place_name(map_id))

    def render(self, territory_id: int, map_id: int, x: float, y: float) -> Tuple[str, str]:
        link = self.link(territory_id, map_id, x, y)
        return link.text(self.url_template), link.coordinate_string
