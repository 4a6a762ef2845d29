class CoordImporterError(Exception):
    """Base class for coordinate importer errors."""


class ConfigError(CoordImporterError):
    pass


class CatalogSourceError(CoordImporterError):
    """Raised when the map catalog cannot be fetched or read."""


class GrammarDefectError(CoordImporterError):
    """A grammar matched a line but captured a coordinate that is not a number."""

    def __init__(self, line: str, value: str):
        super().__init__(f"Could not parse coordinate {value!r} from input {line!r}")
        self.line = line
        self.value = value
