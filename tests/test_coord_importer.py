"""
End-to-end tests: pasted text in, echo lines out.
"""

import logging

from coord_importer import import_line, import_text, resolve
from sighting_parser import classify


def link(name, map_id, territory_id, x, y):
    url = f"https://v2.xivapi.com/api/sheet/Map/{map_id}?territory={territory_id}&x={x}&y={y}"
    return f"[\ue0bb{name}](<{url}>)"


class RecordingRenderer:
    def __init__(self):
        self.calls = []

    def render(self, territory_id, map_id, x, y):
        self.calls.append((territory_id, map_id, x, y))
        return f"<link {territory_id}/{map_id}>", f"<{x}, {y}>"


def test_siren_line_resolves(catalog):
    renderer = RecordingRenderer()

    lines = import_text("(Maybe: Storsie) \ue0bbLabyrinthos\ue0b2 ( 17 , 9.6 )", catalog, renderer)

    assert renderer.calls == [(7, 100, 17.0, 9.6)]
    assert lines == ["<link 7/100>\ue0b2 <17.0, 9.6> (Storsie)"]


def test_siren_line_links_territory_and_map(catalog, renderer):
    lines = import_text("(Maybe: Storsie) \ue0bbLabyrinthos\ue0b2 ( 17 , 9.6 )", catalog, renderer)

    assert lines == [link("Labyrinthos", 100, 7, "17.0", "9.6") + "\ue0b2 ( 17.0  , 9.6 ) (Storsie)"]
    assert "sheet/Map/100?territory=7&x=17.0&y=9.6" in lines[0]


def test_bear_line_resolves(catalog, renderer):
    lines = import_text("Labyrinthos ( 16.5 , 16.8 ) Storsie", catalog, renderer)

    assert lines == [link("Labyrinthos", 100, 7, "16.5", "16.8") + " ( 16.5  , 16.8 ) (Storsie)"]


def test_faloop_line_resolves(catalog):
    renderer = RecordingRenderer()

    lines = import_text("Raiden [S]: Gamma - Yanxia ( 23.6, 11.4 )", catalog, renderer)

    assert renderer.calls == [(3, 42, 23.6, 11.4)]
    assert lines == ["<link 3/42> <23.6, 11.4> (Gamma)"]


def test_not_available_produces_nothing(catalog, renderer, caplog):
    with caplog.at_level(logging.DEBUG):
        lines = import_text("Labyrinthos ( NOT AVAILABLE ) Storsie", catalog, renderer)

    assert lines == []
    assert not [r for r in caplog.records if r.levelno >= logging.WARNING]


def test_unknown_map_yields_diagnostic_and_continues(catalog, renderer):
    text = "Thavnair ( 1.0 , 2.0 ) Sugriva\nLabyrinthos ( 16.5 , 16.8 ) Storsie"

    lines = import_text(text, catalog, renderer)

    assert lines == [
        'Input text "Thavnair ( 1.0 , 2.0 ) Sugriva" invalid. '
        "Could not find a matching map for Thavnair.",
        link("Labyrinthos", 100, 7, "16.5", "16.8") + " ( 16.5  , 16.8 ) (Storsie)",
    ]


def test_bad_lines_do_not_stop_the_batch(catalog, renderer, caplog):
    text = "\n".join([
        "nothing to see here",
        "Labyrinthos ( 16.5 , 16.8 ) Storsie",
        "Labyrinthos ( 1.2.3 , 4 ) Storsie",
        "Labyrinthos ( NOT AVAILABLE ) Storsie",
        "Raiden [S]: Gamma - Yanxia ( 23.6, 11.4 )",
    ])

    with caplog.at_level(logging.ERROR):
        lines = import_text(text, catalog, renderer)

    assert lines == [
        link("Labyrinthos", 100, 7, "16.5", "16.8") + " ( 16.5  , 16.8 ) (Storsie)",
        link("Yanxia", 42, 3, "23.6", "11.4") + " ( 23.6  , 11.4 ) (Gamma)",
    ]
    assert "Unknown input string" in caplog.text
    assert "cannot parse" in caplog.text


def test_import_line_skips_unrecognized(catalog, renderer):
    assert import_line("hello", catalog, renderer) is None


def test_resolve_with_wide_separator(catalog, renderer):
    sighting = classify("(Maybe: Storsie ) \ue0bb Labyrinthos  ( 17 , 9.6 )")

    assert sighting.map_key == "Labyrinthos"
    assert sighting.mark_name == "Storsie"
    assert resolve(sighting, catalog, renderer) == link("Labyrinthos", 100, 7, "17.0", "9.6") + " ( 17.0  , 9.6 ) (Storsie)"


def test_import_text_defaults_renderer(catalog):
    assert import_text("Labyrinthos 1 ( 16.5 , 16.8 ) Storsie", catalog) == [
        link("Labyrinthos", 100, 7, "16.5", "16.8") + "\ue0b1 ( 16.5  , 16.8 ) (Storsie)"
    ]
