import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

from dotenv import load_dotenv

from exceptions import ConfigError

DEFAULT_LANGUAGES = ("en", "de", "fr", "ja")
DEFAULT_XIVAPI_URL = "https://v2.xivapi.com/api"

# Map sheet row of the linked map; the query carries the flag position
MAP_LINK_PATH = "/sheet/Map/{map_id}?territory={territory_id}&x={x}&y={y}"
DEFAULT_MAP_LINK_URL = DEFAULT_XIVAPI_URL + MAP_LINK_PATH


@dataclass(frozen=True)
class Settings:
    discord_token: str
    catalog_languages: Tuple[str, ...] = DEFAULT_LANGUAGES
    display_language: str = "en"
    xivapi_base_url: str = DEFAULT_XIVAPI_URL
    map_link_url: str = DEFAULT_MAP_LINK_URL
    catalog_cache: Optional[Path] = None
    log_level: str = "INFO"


def _languages(raw: Optional[str]) -> Tuple[str, ...]:
    if not raw:
        return DEFAULT_LANGUAGES
    langs = tuple(l.strip().lower() for l in raw.split(",") if l.strip())
    return langs or DEFAULT_LANGUAGES


def load_settings(env_file: Optional[str] = None) -> Settings:
    load_dotenv(env_file)

    token = os.getenv("DISCORD_TOKEN", "").strip()
    if not token:
        raise ConfigError("DISCORD_TOKEN is not set (environment or .env)")

    cache = os.getenv("CATALOG_CACHE", "").strip()
    base_url = os.getenv("XIVAPI_BASE_URL", DEFAULT_XIVAPI_URL).rstrip("/")

    return Settings(
        discord_token=token,
        catalog_languages=_languages(os.getenv("CATALOG_LANGUAGES")),
        display_language=os.getenv("DISPLAY_LANGUAGE", "en").strip().lower() or "en",
        xivapi_base_url=base_url,
        map_link_url=os.getenv("MAP_LINK_URL", "").strip() or base_url + MAP_LINK_PATH,
        catalog_cache=Path(cache) if cache else None,
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
    )
