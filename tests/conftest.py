"""
Pytest configuration and fixtures for coord-importer tests.
"""

import sys
from pathlib import Path

import pytest

# Modules live at the repo root
root_path = Path(__file__).parent.parent
if str(root_path) not in sys.path:
    sys.path.insert(0, str(root_path))

from catalog import CatalogRow, build_catalog  # noqa: E402
from maplink import MapLinkRenderer  # noqa: E402


@pytest.fixture
def catalog():
    return build_catalog({
        "en": [
            CatalogRow("Labyrinthos", 100, 7),
            CatalogRow("Yanxia", 42, 3),
        ],
        "de": [
            CatalogRow("Labyrinthos", 100, 7),
            CatalogRow("Yanxia", 42, 3),
        ],
    })


@pytest.fixture
def renderer(catalog):
    return MapLinkRenderer(catalog, "en")
