import logging
from typing import List, Optional

from catalog import LocationCatalog
from exceptions import GrammarDefectError
from maplink import MapLinkRenderer
from sighting_parser import ParsedSighting, classify, split_lines

logger = logging.getLogger(__name__)


def unresolved_line(sighting: ParsedSighting) -> str:
    return (
        f'Input text "{sighting.line}" invalid. '
        f"Could not find a matching map for {sighting.map_name}."
    )


def resolve(sighting: ParsedSighting, catalog: LocationCatalog, renderer: MapLinkRenderer) -> str:
    location = catalog.lookup(sighting.map_key)
    if location is None:
        logger.info("No map named %r for input %s", sighting.map_key, sighting.line)
        return unresolved_line(sighting)

    link, coords = renderer.render(location.region_id, location.location_id, sighting.x, sighting.y)
    return f"{link}{sighting.instance} {coords} ({sighting.mark_name})"


def import_line(line: str, catalog: LocationCatalog, renderer: MapLinkRenderer) -> Optional[str]:
    try:
        result = classify(line)
    except GrammarDefectError:
        logger.exception("Grammar accepted a line it cannot parse")
        return None

    if not isinstance(result, ParsedSighting):
        return None
    return resolve(result, catalog, renderer)


def import_text(text: str, catalog: LocationCatalog, renderer: Optional[MapLinkRenderer] = None) -> List[str]:
    """Turn a pasted block of sightings into output lines, in input order."""
    renderer = renderer or MapLinkRenderer(catalog)
    output = []
    for line in split_lines(text):
        rendered = import_line(line, catalog, renderer)
        if rendered is not None:
            output.append(rendered)
    return output
