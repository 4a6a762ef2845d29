import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, Tuple, Union

from exceptions import GrammarDefectError

logger = logging.getLogger(__name__)


# Instance glyph mapping
#
INSTANCE_GLYPHS = {
    "1": "\ue0b1",
    "2": "\ue0b2",
    "3": "\ue0b3",
}

# Arrow glyph the game puts in front of a map link
MAP_LINK_ARROW = "\ue0bb"

NOT_AVAILABLE = "NOT AVAILABLE"

# No tool writes sighting lines anywhere near this long
MAX_LINE_LENGTH = 300


# -----------------------------
# Records
# -----------------------------
@dataclass(frozen=True)
class ParsedSighting:
    line: str
    grammar: str
    map_name: str
    mark_name: str
    instance: str
    x: float
    y: float

    @property
    def map_key(self) -> str:
        return self.map_name.strip()


class LineOutcome(Enum):
    SKIP = "skip"
    UNRECOGNIZED = "unrecognized"


ClassifyResult = Union[ParsedSighting, LineOutcome]


# -----------------------------
# Normalization helpers
# -----------------------------
def normalize_instance(value: Optional[str]) -> str:
    if not value:
        return ""
    return INSTANCE_GLYPHS.get(value, value)


def split_lines(text: Optional[str]) -> List[str]:
    if not text:
        return []
    lines = []
    for line in re.split(r"[\r\n]", text):
        line = line.strip()
        if not line:
            continue
        if len(line) > MAX_LINE_LENGTH:
            logger.warning("Ignoring input line of %d characters: %.40s...", len(line), line)
            continue
        lines.append(line)
    return lines


def parse_coord(line: str, value: str) -> float:
    try:
        return float(value)
    except ValueError as e:
        raise GrammarDefectError(line, value) from e


# -----------------------------
# Grammars
# -----------------------------
class Grammar:
    def __init__(self, name: str, pattern: str):
        self.name = name
        self.regex = re.compile(pattern)

    def try_match(self, line: str) -> Optional[Dict[str, str]]:
        m = self.regex.match(line)
        if not m:
            return None
        return {k: (v or "") for k, v in m.groupdict().items()}

    def __repr__(self) -> str:
        return f"Grammar({self.name!r})"


# Names are words joined by whitespace, so a run of spaces is only ever matched
# by the separator around it
_WORD = r"[\w'\-]+"
_NAME = _WORD + r"(?:\s+" + _WORD + r")*"
_LAZY_NAME = _WORD + r"(?:\s+" + _WORD + r")*?"
_COORDS = r"(?P<x_coord>[\d.]+)\s*,\s*(?P<y_coord>[\d.]+)"
_GLYPHS = "".join(INSTANCE_GLYPHS.values())

# "(Maybe: Storsie) \ue0bbLabyrinthos\ue0b2 ( 17  , 9.6 )"
SIREN = Grammar(
    "siren",
    r"^\s*\(Maybe:\s*(?P<mark_name>" + _NAME + r")\s*\)\s+" + MAP_LINK_ARROW
    + r"\s*(?P<map_name>" + _NAME + r")(?P<instance_number>[" + _GLYPHS + r"])?"
    + r"\s+\(\s*" + _COORDS + r"\s*\)",
)

# "Labyrinthos ( 16.5 , 16.8 ) Storsie" or "Labyrinthos ( NOT AVAILABLE ) Storsie"
BEAR = Grammar(
    "bear",
    r"^\s*(?P<map_name>" + _LAZY_NAME + r")\s+(?:(?P<instance_number>[123])\s*)?\(\s*"
    + r"(?P<loc>" + _COORDS + r"|NOT AVAILABLE)"
    + r"\s*\)\s*(?P<mark_name>" + _NAME + r")\s*$",
)

# "Raiden [S]: Gamma - Yanxia ( 23.6, 11.4 )", "... - Yanxia (2) ( 23.6, 11.4 )"
# The mark runs up to the last " - " so hyphenated mark names survive
FALOOP = Grammar(
    "faloop",
    r"^\s*(?P<world_name>\w+)\s+\[S\]: (?P<mark_name>" + _NAME + r")\s*-\s*"
    + r"(?P<map_name>" + _LAZY_NAME + r")\s+(?:\(?(?P<instance_number>[123])\)?\s*)?"
    + r"\(\s*" + _COORDS + r"\s*\)",
)

# Siren carries the arrow glyph and Faloop the "[S]:" tag, so both go before Bear
GRAMMARS = (SIREN, FALOOP, BEAR)


# -----------------------------
# Classifier
# -----------------------------
def match_line(line: str) -> Tuple[Optional[Grammar], Optional[Dict[str, str]]]:
    for grammar in GRAMMARS:
        groups = grammar.try_match(line)
        if groups is not None:
            return grammar, groups
    return None, None


def classify(line: str) -> ClassifyResult:
    grammar, groups = match_line(line)
    if grammar is None:
        logger.error("Unknown input string '%s'", line)
        return LineOutcome.UNRECOGNIZED

    if groups.get("loc") == NOT_AVAILABLE:
        logger.debug("Input %s does not have coordinates. Ignoring", line)
        return LineOutcome.SKIP

    logger.debug("%s grammar matched for input %s. Groups are %s", grammar.name, line, groups)

    return ParsedSighting(
        line=line,
        grammar=grammar.name,
        map_name=groups["map_name"],
        mark_name=groups["mark_name"],
        instance=normalize_instance(groups["instance_number"]),
        x=parse_coord(line, groups["x_coord"]),
        y=parse_coord(line, groups["y_coord"]),
    )
