import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

import aiohttp

from catalog import CatalogRow
from config import Settings
from exceptions import CatalogSourceError

logger = logging.getLogger(__name__)

TIMEOUT = aiohttp.ClientTimeout(total=30)
PAGE_SIZE = 500
MAP_FIELDS = "PlaceName.Name,TerritoryType"


async def _get(session: aiohttp.ClientSession, url: str, params: dict) -> dict:
    try:
        async with session.get(url, params=params) as resp:
            if 200 <= resp.status < 300:
                logger.debug("GET %s params=%s status=%s", url, params, resp.status)
                return await resp.json()
            text = await resp.text()
            logger.error("GET %s status=%s body=%s", url, resp.status, text)
            raise CatalogSourceError(f"GET {url} failed with status {resp.status}")
    except aiohttp.ClientError as e:
        logger.error("GET %s error=%s", url, e)
        raise CatalogSourceError(f"GET {url} failed: {e}") from e


def _reference_id(value: Any) -> Optional[int]:
    # References come back either as a bare id or as {"value": .., "row_id": ..}
    if isinstance(value, dict):
        value = value.get("row_id", value.get("value"))
    if isinstance(value, int) and value > 0:
        return value
    return None


def row_from_api(row: dict) -> CatalogRow:
    fields = row.get("fields") or {}
    place = fields.get("PlaceName") or {}
    name = (place.get("fields") or {}).get("Name") if isinstance(place, dict) else None
    return CatalogRow(
        name=name or None,
        location_id=int(row["row_id"]),
        region_id=_reference_id(fields.get("TerritoryType")),
    )


async def fetch_language_rows(
    session: aiohttp.ClientSession, base_url: str, language: str
) -> List[CatalogRow]:
    url = f"{base_url}/sheet/Map"
    rows: List[CatalogRow] = []
    after = None
    while True:
        params = {"fields": MAP_FIELDS, "language": language, "limit": PAGE_SIZE}
        if after is not None:
            params["after"] = after
        page = (await _get(session, url, params)).get("rows") or []
        # The server may cap limit below PAGE_SIZE, so only an empty page ends the sheet
        if not page:
            break
        rows.extend(row_from_api(r) for r in page)
        after = page[-1]["row_id"]
    logger.info("Fetched %d Map rows for language %s", len(rows), language)
    return rows


async def fetch_catalog_tables(base_url: str, languages: Iterable[str]) -> Dict[str, List[CatalogRow]]:
    tables: Dict[str, List[CatalogRow]] = {}
    async with aiohttp.ClientSession(timeout=TIMEOUT) as session:
        for language in languages:
            tables[language] = await fetch_language_rows(session, base_url, language)
    return tables


# -----------------------------
# JSON cache
# -----------------------------
def save_cached_tables(path: Path, tables: Dict[str, List[CatalogRow]]) -> None:
    data = {lang: [list(row) for row in rows] for lang, rows in tables.items()}
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, ensure_ascii=False, indent=1)


def load_cached_tables(path: Path) -> Dict[str, List[CatalogRow]]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise CatalogSourceError(f"Could not read catalog cache {path}: {e}") from e
    return {lang: [CatalogRow(*row) for row in rows] for lang, rows in data.items()}


async def load_catalog_tables(settings: Settings) -> Dict[str, List[CatalogRow]]:
    cache = settings.catalog_cache
    if cache is not None and cache.exists():
        logger.info("Loading map catalog from cache %s", cache)
        tables = load_cached_tables(cache)
        # Keep the configured language order, the cache may hold more or fewer
        return {lang: tables[lang] for lang in settings.catalog_languages if lang in tables}

    tables = await fetch_catalog_tables(settings.xivapi_base_url, settings.catalog_languages)
    if cache is not None:
        save_cached_tables(cache, tables)
        logger.info("Wrote map catalog cache %s", cache)
    return tables
